"""Core type definitions."""

from enum import Enum
from typing import NewType

# Normalized content path relative to the views directory
# (e.g., "controls/dropdown", "" for the root), without ".html" suffix
ContentKey = NewType("ContentKey", str)


class ContentKind(Enum):
    """What a content key points at in the views directory."""

    DOCUMENT = "document"
    DIRECTORY = "directory"
    MISSING = "missing"
