"""Layout override rules.

A rule pairs a path pattern with option overrides (usually a ``layout``).
Every matching rule is applied in table order, so a later rule overrides an
earlier one for the same request.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sohodemo.core.options import NOFRILLS_LAYOUT, RenderOptions
from sohodemo.core.types import ContentKey


@dataclass(frozen=True)
class RouteRule:
    """Path pattern mapped to option overrides."""

    pattern: str
    overrides: Mapping[str, Any] = field(default_factory=dict)
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", re.compile(self.pattern))

    @property
    def layout(self) -> str | None:
        return self.overrides.get("layout")

    def matches(self, key: ContentKey) -> bool:
        return self._regex.search(key) is not None


def layout_rule(pattern: str, layout: str | None, **extra: Any) -> RouteRule:
    """Build a rule that sets the layout (None means render without layout)."""
    return RouteRule(pattern, {"layout": layout, **extra})


def apply_rules(
    key: ContentKey,
    options: RenderOptions,
    rules: Iterable[RouteRule],
    *,
    nofrills_layout: str | None = NOFRILLS_LAYOUT,
) -> RenderOptions:
    """Apply every matching rule to options in order.

    The ``nofrillslayout`` flag wins over all rules when ``nofrills_layout``
    is set.

    Args:
        key: Normalized content key matched against rule patterns
        options: Options to start from
        rules: Ordered rule table
        nofrills_layout: Layout forced by the no-frills flag, None to ignore it

    Returns:
        New RenderOptions with overrides applied
    """
    overrides = [rule.overrides for rule in rules if rule.matches(key)]
    if nofrills_layout is not None and options.get("nofrillslayout"):
        overrides.append({"layout": nofrills_layout})
    return options.merge(*overrides)


APPLICATION_MENU_RULES: Sequence[RouteRule] = (
    layout_rule(r"tests/applicationmenu", "tests/applicationmenu/six-levels/layout"),
    layout_rule(
        r"tests/applicationmenu.*/six-levels-with-icons",
        "tests/applicationmenu/six-levels-with-icons/layout",
    ),
    layout_rule(r"tests/applicationmenu.*/lms", "tests/applicationmenu/lms/layout"),
    layout_rule(
        r"tests/applicationmenu.*/different-header-types",
        "tests/applicationmenu/different-header-types/layout",
    ),
    layout_rule(
        r"tests/applicationmenu.*/container",
        "tests/applicationmenu/container/layout",
    ),
    layout_rule(r"tests/applicationmenu.*/site", "tests/applicationmenu/site/layout"),
)

TEST_RULES: Sequence[RouteRule] = (
    *APPLICATION_MENU_RULES,
    RouteRule(r"tests/base-tag", {"usebasehref": True}),
    layout_rule(r"tests/distribution", None, amd=True, subtitle="AMD Tests"),
    layout_rule(r"tests/header", "tests/header/layout"),
    layout_rule(r"tests/datagrid-fixed-header", "tests/layout-noscroll"),
    layout_rule(r"tests/masthead", "tests/masthead/layout"),
    layout_rule(
        r"tests/place/scrolling/container-is-body",
        "tests/place/scrolling/layout-body",
    ),
    layout_rule(
        r"tests/place/scrolling/container-is-nested",
        "tests/place/scrolling/layout-nested",
    ),
    layout_rule(r"tests/signin", "tests/layout-noheader"),
    layout_rule(r"tests/tabs-module", "tests/tabs-module/layout"),
    layout_rule(r"tests/tabs-header", "tests/tabs-header/layout"),
    layout_rule(r"tests/tabs-vertical", "tests/tabs-vertical/layout"),
    layout_rule(r"tests/patterns", "tests/layout-noheader"),
)

CONTROL_RULES: Sequence[RouteRule] = (
    layout_rule(r"masthead", "controls/masthead-layout"),
)
