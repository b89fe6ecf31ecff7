"""Content store over the views directory.

Maps content keys to template files and directories. Every lookup hits the
filesystem; nothing is cached between requests.
"""

import os
from pathlib import Path

from sohodemo.core.types import ContentKey, ContentKind

TEMPLATE_SUFFIX = ".html"


class ContentStore:
    """Filesystem-backed store of page templates.

    A document is a file ``<views_dir>/<key>.html``, a directory is a
    directory ``<views_dir>/<key>``.
    """

    def __init__(self, views_dir: Path) -> None:
        """Initialize store.

        Args:
            views_dir: Root directory containing page templates
        """
        self._views_dir = views_dir

    @property
    def views_dir(self) -> Path:
        """Root directory containing page templates."""
        return self._views_dir

    def exists(self, key: ContentKey) -> ContentKind:
        """Classify a content key.

        Documents take precedence over directories of the same name.

        Args:
            key: Normalized content key

        Returns:
            Kind of the node the key points at
        """
        if self.is_document(key):
            return ContentKind.DOCUMENT
        if self.is_directory(key):
            return ContentKind.DIRECTORY
        return ContentKind.MISSING

    def is_document(self, key: ContentKey) -> bool:
        if not key:
            return False
        return (self._views_dir / f"{key}{TEMPLATE_SUFFIX}").is_file()

    def is_directory(self, key: ContentKey) -> bool:
        return (self._views_dir / key).is_dir()

    def list_entries(self, key: ContentKey) -> list[str]:
        """List entry names of a directory in filesystem enumeration order.

        Args:
            key: Directory content key

        Returns:
            Entry names as returned by the operating system

        Raises:
            FileNotFoundError: If the directory doesn't exist
            NotADirectoryError: If the key points at a file
        """
        return os.listdir(self._views_dir / key)

    def template_name(self, key: ContentKey) -> str:
        """Return the template loader name for a document key."""
        return f"{key}{TEMPLATE_SUFFIX}"
