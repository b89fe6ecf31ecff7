"""JSON fixture provider for the mock API.

Fixtures are plain JSON files named ``<name>.json``. A configured data
directory takes precedence over the fixtures bundled with the package, so
demo data can be replaced without touching the installation.
"""

import json
import logging
from pathlib import Path
from typing import Any

from sohodemo.assets import get_bundled_data_dir

logger = logging.getLogger(__name__)


class FixtureProvider:
    """Loads JSON fixtures by name.

    Files are read on every call; edits to fixtures show up on the next
    request.
    """

    def __init__(self, data_dir: Path | None = None, *, bundled: bool = True) -> None:
        """Initialize provider.

        Args:
            data_dir: Directory searched first for fixtures (optional)
            bundled: Fall back to fixtures bundled with the package
        """
        self._data_dir = data_dir
        self._search_dirs: list[Path] = []
        if data_dir is not None:
            self._search_dirs.append(data_dir)
        if bundled:
            self._search_dirs.append(get_bundled_data_dir())

    @property
    def data_dir(self) -> Path | None:
        """Configured data directory."""
        return self._data_dir

    def load(self, name: str) -> Any:
        """Load and parse a fixture.

        Args:
            name: Fixture name without ``.json`` suffix (e.g., "states")

        Returns:
            Parsed JSON value

        Raises:
            FileNotFoundError: If no search directory holds the fixture
            ValueError: If the name escapes the data directories or the
                file is not valid JSON
        """
        if not name or ".." in Path(name).parts or Path(name).is_absolute():
            raise ValueError(f"Invalid fixture name: {name!r}")

        for directory in self._search_dirs:
            path = directory / f"{name}.json"
            if path.is_file():
                logger.debug("Loading fixture %s from %s", name, path)
                with path.open(encoding="utf-8") as f:
                    return json.load(f)

        raise FileNotFoundError(f"Fixture not found: {name}")
