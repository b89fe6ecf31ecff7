"""Path resolution for demo pages.

Decides, for an incoming request path, whether to render a template, list a
directory, or report the page as missing. Dispatch goes through an ordered
table of sections; the first section whose prefix matches the path wins.
"""

import logging
import posixpath
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any

from sohodemo.core.content import TEMPLATE_SUFFIX, ContentStore
from sohodemo.core.options import NOFRILLS_LAYOUT, RenderOptions
from sohodemo.core.rules import CONTROL_RULES, TEST_RULES, RouteRule, apply_rules
from sohodemo.core.types import ContentKey, ContentKind

logger = logging.getLogger(__name__)

INDEX_NAME = "index"

# Entries never shown in listings: layout templates, footers, OS metadata
DEFAULT_EXCLUDES: tuple[str, ...] = ("layout*.html", "footer.html", ".DS_Store")

# Control names whose capitalized form doesn't read well
_SUBTITLE_FIXUPS = {"Contextualactionpanel": "Contextual Action Panel"}


@dataclass(frozen=True)
class Section:
    """Entry of the dispatch table.

    Attributes:
        prefix: Leading key segment(s) handled by this section, "" for the root
        defaults: Per-route options merged over the request options
        rules: Layout override rules applied to rendered pages
        excludes: Extra listing exclusion globs
        index_subtitle: Subtitle used when rendering the section index
        subtitle_from_name: Derive the subtitle from the page name
        nofrills_layout: Layout forced by the no-frills flag, None to ignore it
    """

    prefix: str
    defaults: Mapping[str, Any] = field(default_factory=dict)
    rules: Sequence[RouteRule] = ()
    excludes: tuple[str, ...] = ()
    index_subtitle: str | None = None
    subtitle_from_name: bool = False
    nofrills_layout: str | None = NOFRILLS_LAYOUT

    def matches(self, key: ContentKey) -> bool:
        if not self.prefix:
            return not key
        return key == self.prefix or key.startswith(f"{self.prefix}/")


def _layout_section(prefix: str, subtitle: str, **kwargs: Any) -> Section:
    return Section(
        prefix=prefix,
        defaults={"layout": f"{prefix}/layout", "subtitle": subtitle},
        **kwargs,
    )


SECTIONS: Sequence[Section] = (
    Section(prefix=""),
    Section(
        prefix="partials",
        defaults={"layout": None, "enableLiveReload": False, "title": ""},
        nofrills_layout=None,
    ),
    _layout_section(
        "controls",
        "Style",
        rules=CONTROL_RULES,
        index_subtitle="Full Index",
        subtitle_from_name=True,
    ),
    _layout_section(
        "patterns",
        "Patterns",
        excludes=("step-process.html", "step-process-markup.html"),
    ),
    _layout_section("tests", "Tests", rules=TEST_RULES),
    Section(
        prefix="docs",
        defaults={"layout": "includes/docs-layout", "subtitle": "SoHo Xi Docs"},
    ),
    _layout_section("soho-site", "Soho Site"),
    _layout_section("layouts", "Layouts"),
    _layout_section("examples", "Examples"),
    Section(prefix="performance-tests", defaults={"subtitle": "Performance Tests"}),
    _layout_section("angular", "Angular"),
    _layout_section("react", "React"),
    _layout_section("knockout", "Knockout"),
)


@dataclass(frozen=True)
class ListingEntry:
    """Display record for one directory listing entry."""

    name: str
    href: str
    is_directory: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for template rendering."""
        return {"name": self.name, "href": self.href, "isDirectory": self.is_directory}


@dataclass(frozen=True)
class Render:
    """Render the template for ``key`` with ``options``."""

    key: ContentKey
    options: RenderOptions


@dataclass(frozen=True)
class Listing:
    """Render a listing of directory ``key``."""

    key: ContentKey
    entries: list[ListingEntry]
    options: RenderOptions


@dataclass(frozen=True)
class NotFound:
    """Nothing to render for ``key``.

    ``fallback`` lists the nearest existing parent directory, if any.
    """

    key: ContentKey
    fallback: Listing | None = None


Resolution = Render | Listing | NotFound


def normalize_key(path: str) -> tuple[ContentKey, bool]:
    """Normalize a raw request path into a content key.

    Strips the query string, a trailing ``.html`` suffix and surrounding
    slashes, and collapses empty segments.

    Args:
        path: Raw request path, possibly with query string

    Returns:
        Tuple of (content key, whether the path had a trailing slash)
    """
    path = path.partition("?")[0].partition("#")[0]
    has_trailing_slash = len(path) > 1 and path.endswith("/")
    segments = [segment for segment in path.split("/") if segment]
    if segments and segments[-1].endswith(TEMPLATE_SUFFIX):
        last = segments[-1][: -len(TEMPLATE_SUFFIX)]
        segments[-1:] = [last] if last else []
    return ContentKey("/".join(segments)), has_trailing_slash


def filter_entries(names: Iterable[str], excludes: Iterable[str]) -> list[str]:
    """Drop entry names matching any exclusion glob, keeping order."""
    patterns = tuple(excludes)
    return [
        name
        for name in names
        if not any(fnmatchcase(name, pattern) for pattern in patterns)
    ]


def subtitle_for(name: str) -> str:
    """Build a page subtitle from a page name (e.g., "dropdown" -> "Dropdown")."""
    if not name:
        return name
    subtitle = (name[0].upper() + name[1:]).replace("-", " ")
    for raw, fixed in _SUBTITLE_FIXUPS.items():
        subtitle = subtitle.replace(raw, fixed)
    return subtitle


class PathResolver:
    """Resolves request paths against the content store.

    Holds only read-only tables; every call classifies content afresh.
    """

    def __init__(
        self,
        store: ContentStore,
        *,
        sections: Sequence[Section] = SECTIONS,
        basepath: str = "/",
        excludes: Iterable[str] = DEFAULT_EXCLUDES,
        sort_listings: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            store: Content store to classify keys against
            sections: Ordered dispatch table, first match wins
            basepath: URL prefix used to build listing links
            excludes: Listing exclusion globs applied to every directory
            sort_listings: Sort listing entries by name instead of keeping
                filesystem enumeration order
        """
        self._store = store
        self._sections = tuple(sections)
        self._basepath = basepath
        self._excludes = tuple(excludes)
        self._sort_listings = sort_listings

    @property
    def store(self) -> ContentStore:
        return self._store

    def resolve(self, path: str, options: RenderOptions) -> Resolution:
        """Resolve a request path.

        Args:
            path: Raw request path (query string is ignored)
            options: Request options built from defaults and query parameters

        Returns:
            Render, Listing or NotFound decision
        """
        key, has_trailing_slash = normalize_key(path)
        if ".." in key.split("/"):
            return NotFound(key)

        section = self._match_section(key)
        if section is None:
            return NotFound(key)

        if has_trailing_slash and self._store.is_directory(key):
            return self._index_or_listing(key, section, options)

        kind = self._store.exists(key)
        if kind is ContentKind.DOCUMENT:
            return Render(key, self._page_options(key, section, options))
        if kind is ContentKind.DIRECTORY:
            return self._index_or_listing(key, section, options)

        logger.info('Content "%s" not found', key)
        return NotFound(key, self._parent_listing(key, section, options))

    def list_directory(
        self,
        key: ContentKey,
        options: RenderOptions,
        extra_excludes: Iterable[str] = (),
        *,
        nofrills_layout: str | None = NOFRILLS_LAYOUT,
    ) -> Listing:
        """Build a listing of a directory.

        Args:
            key: Directory content key
            options: Request options
            extra_excludes: Exclusion globs added to the resolver's set
            nofrills_layout: Layout forced by the no-frills flag, None to ignore it

        Returns:
            Listing with one entry per surviving directory entry
        """
        names = filter_entries(
            self._store.list_entries(key),
            (*self._excludes, *extra_excludes),
        )
        if self._sort_listings:
            names.sort()

        entries = [self._listing_entry(key, name) for name in names]
        listing_options = options.merge({"subtitle": f"Listing for {key}/"})
        if nofrills_layout is not None and options.get("nofrillslayout"):
            listing_options = listing_options.merge({"layout": nofrills_layout})
        return Listing(key, entries, listing_options)

    def _match_section(self, key: ContentKey) -> Section | None:
        for section in self._sections:
            if section.matches(key):
                return section
        return None

    def _index_or_listing(
        self,
        key: ContentKey,
        section: Section,
        options: RenderOptions,
    ) -> Resolution:
        index_key = ContentKey(posixpath.join(key, INDEX_NAME) if key else INDEX_NAME)
        if self._store.is_document(index_key):
            return Render(
                index_key,
                self._page_options(index_key, section, options, is_index=True),
            )
        return self._section_listing(key, section, options)

    def _page_options(
        self,
        key: ContentKey,
        section: Section,
        options: RenderOptions,
        *,
        is_index: bool = False,
    ) -> RenderOptions:
        page_options = options.merge(section.defaults)
        if is_index and section.index_subtitle:
            page_options = page_options.merge({"subtitle": section.index_subtitle})
        elif section.subtitle_from_name and not is_index:
            name = posixpath.basename(key)
            page_options = page_options.merge({"subtitle": subtitle_for(name)})
        return apply_rules(
            key,
            page_options,
            section.rules,
            nofrills_layout=section.nofrills_layout,
        )

    def _parent_listing(
        self,
        key: ContentKey,
        section: Section,
        options: RenderOptions,
    ) -> Listing | None:
        if not key:
            return None

        parent = ContentKey(posixpath.dirname(key))
        while section.matches(parent):
            if self._store.is_directory(parent):
                return self._section_listing(parent, section, options)
            next_parent = ContentKey(posixpath.dirname(parent))
            if next_parent == parent:
                break
            parent = next_parent
        return None

    def _section_listing(
        self,
        key: ContentKey,
        section: Section,
        options: RenderOptions,
    ) -> Listing:
        return self.list_directory(
            key,
            options,
            section.excludes,
            nofrills_layout=section.nofrills_layout,
        )

    def _listing_entry(self, directory: ContentKey, name: str) -> ListingEntry:
        entry_key = ContentKey(posixpath.join(directory, name) if directory else name)
        is_directory = self._store.is_directory(entry_key)
        href = posixpath.join(self._basepath, directory, name)
        if is_directory and not href.endswith("/"):
            href = f"{href}/"
        return ListingEntry(name=name, href=href, is_directory=is_directory)
