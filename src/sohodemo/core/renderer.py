"""Template rendering with layout wrapping.

Page templates are looked up in the views directory first, then in the
templates bundled with the package (listing and error pages, default layout).
"""

from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)
from markupsafe import Markup

from sohodemo.core.content import TEMPLATE_SUFFIX
from sohodemo.core.options import RenderOptions
from sohodemo.core.resolver import Listing
from sohodemo.core.types import ContentKey

LISTING_TEMPLATE = "listing"
ERROR_TEMPLATE = "error"


class TemplateRenderer:
    """Renders page templates, wrapping them in the selected layout.

    A page is rendered with the request options as context. When the
    ``layout`` option is set, the page HTML is passed as ``body`` to the
    layout template.
    """

    def __init__(self, views_dir: Path) -> None:
        """Initialize renderer.

        Args:
            views_dir: Root directory containing page and layout templates
        """
        self._views_dir = views_dir
        self._env = Environment(
            loader=ChoiceLoader(
                [
                    FileSystemLoader(views_dir),
                    PackageLoader("sohodemo", "templates"),
                ],
            ),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def views_dir(self) -> Path:
        """Root directory containing page templates."""
        return self._views_dir

    def render(self, key: ContentKey | str, options: RenderOptions) -> str:
        """Render a page template inside its layout.

        Args:
            key: Template key relative to the views directory, without suffix
            options: Render options used as template context

        Returns:
            Rendered HTML

        Raises:
            jinja2.TemplateNotFound: If the page or layout template is missing
        """
        return self._render_with_layout(key, options.to_context())

    def render_listing(self, listing: Listing) -> str:
        """Render a directory listing page."""
        context = listing.options.to_context()
        context["paths"] = [entry.to_dict() for entry in listing.entries]
        context["directory"] = listing.key
        return self._render_with_layout(LISTING_TEMPLATE, context)

    def render_error(self, message: str, details: str | None = None) -> str:
        """Render the bundled internal error page."""
        template = self._env.get_template(f"{ERROR_TEMPLATE}{TEMPLATE_SUFFIX}")
        return template.render(message=message, details=details)

    def _render_with_layout(self, key: str, context: dict[str, Any]) -> str:
        template = self._env.get_template(f"{key}{TEMPLATE_SUFFIX}")
        body = template.render(context)

        layout = context.get("layout")
        if not layout:
            return body

        layout_template = self._env.get_template(f"{layout}{TEMPLATE_SUFFIX}")
        return layout_template.render({**context, "body": Markup(body)})
