"""Render options passed to page templates.

Options are built fresh for every request by merging a static defaults
table with query parameter overrides, then with per-route defaults.
Merging is left to right, last write wins per key.
"""

import logging
import math
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "SoHo XI"
DEFAULT_LOCALE = "en-US"
DEFAULT_LAYOUT = "layout"
DEFAULT_THEME = "light"

# Minimal layout forced by the ``nofrills`` query parameter
NOFRILLS_LAYOUT = "tests/layout-noheader"


class RenderOptions(Mapping[str, Any]):
    """Immutable mapping of template option name to value."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = MappingProxyType(dict(data or {}))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"RenderOptions({dict(self._data)!r})"

    def merge(self, *others: Mapping[str, Any]) -> "RenderOptions":
        """Return new options with each mapping applied in order.

        Args:
            others: Mappings merged left to right over these options

        Returns:
            New RenderOptions; this instance is left untouched
        """
        merged = dict(self._data)
        for other in others:
            merged.update(other)
        return RenderOptions(merged)

    def to_context(self) -> dict[str, Any]:
        """Convert to a plain dict for template rendering."""
        return dict(self._data)


def default_options(
    *,
    basepath: str = "/",
    live_reload: bool = True,
    version: str | None = None,
) -> RenderOptions:
    """Build the static defaults table.

    Args:
        basepath: URL prefix the site is mounted under
        live_reload: Whether pages should connect to the live reload socket
        version: Package version shown in page footers

    Returns:
        Default RenderOptions shared by all requests
    """
    return RenderOptions(
        {
            "enableLiveReload": live_reload,
            "layout": DEFAULT_LAYOUT,
            "locale": DEFAULT_LOCALE,
            "title": DEFAULT_TITLE,
            "basepath": basepath,
            "version": version,
            "inlineSVG": True,
            "theme": DEFAULT_THEME,
        },
    )


def query_overrides(query: Mapping[str, str]) -> dict[str, Any]:
    """Extract option overrides from request query parameters.

    Recognizes ``locale``, ``theme``, ``colors``, ``delay`` and ``nofrills``.
    Empty values are ignored, as are non-numeric or negative delays.

    Args:
        query: Request query parameters

    Returns:
        Option overrides to merge over the defaults
    """
    overrides: dict[str, Any] = {}

    locale = query.get("locale")
    if locale:
        overrides["locale"] = locale
        logger.debug('Changing route parameter "locale" to "%s"', locale)

    if query.get("nofrills"):
        overrides["nofrillslayout"] = True
        logger.debug('"No-frills" layout active')

    theme = query.get("theme")
    if theme:
        overrides["theme"] = theme
        logger.debug("Setting theme to %s", theme)

    colors = query.get("colors")
    if colors:
        overrides["colors"] = colors
        logger.debug("Setting colors to %s", colors)

    delay = parse_number(query.get("delay"))
    if delay is not None and delay >= 0:
        overrides["delay"] = delay

    return overrides


def build_request_options(
    defaults: RenderOptions,
    query: Mapping[str, str],
) -> RenderOptions:
    """Build the options for a single request."""
    return defaults.merge(query_overrides(query))


def parse_number(value: str | None) -> float | None:
    """Parse a numeric query value, returning None when malformed."""
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_int(value: str | None, default: int) -> int:
    """Parse an integer query value, falling back to default when malformed."""
    number = parse_number(value)
    if number is None:
        return default
    return int(number)
