"""Tests for template rendering."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound
from sohodemo.core.content import ContentStore
from sohodemo.core.options import RenderOptions, default_options
from sohodemo.core.renderer import TemplateRenderer
from sohodemo.core.resolver import Listing, PathResolver
from sohodemo.core.types import ContentKey


@pytest.fixture
def renderer(views_dir: Path) -> TemplateRenderer:
    return TemplateRenderer(views_dir)


class TestRender:
    """Tests for TemplateRenderer.render()."""

    def test__with_layout__wraps_page_body(self, renderer: TemplateRenderer) -> None:
        """Page HTML is inserted unescaped into the layout."""
        options = RenderOptions({"layout": "controls/layout", "subtitle": "Dropdown", "locale": "en-US"})

        html = renderer.render(ContentKey("controls/dropdown"), options)

        assert '<div data-layout="controls/layout">' in html
        assert "<p>Dropdown in en-US</p>" in html

    def test__without_layout__returns_page_only(self, renderer: TemplateRenderer) -> None:
        """Null layout renders the bare page."""
        html = renderer.render(ContentKey("partials/snippet"), RenderOptions({"layout": None, "title": "X"}))

        assert html == "<span>X</span>"

    def test__options__are_escaped(self, renderer: TemplateRenderer) -> None:
        """Option values are HTML-escaped in templates."""
        html = renderer.render(
            ContentKey("partials/snippet"),
            RenderOptions({"layout": None, "title": "<b>"}),
        )

        assert html == "<span>&lt;b&gt;</span>"

    def test__missing_layout__raises(self, renderer: TemplateRenderer) -> None:
        with pytest.raises(TemplateNotFound):
            renderer.render(ContentKey("tests/button"), RenderOptions({"layout": "nope/layout"}))

    def test__bundled_layout__is_used_as_fallback(self, tmp_path: Path) -> None:
        """Default layout ships with the package."""
        (tmp_path / "page.html").write_text("<p>Page</p>")
        renderer = TemplateRenderer(tmp_path)

        html = renderer.render(ContentKey("page"), default_options(live_reload=False))

        assert "<title>SoHo XI</title>" in html
        assert "<p>Page</p>" in html
        assert "WebSocket" not in html


class TestRenderListing:
    """Tests for TemplateRenderer.render_listing()."""

    def test__listing__links_every_entry(self, views_dir: Path, renderer: TemplateRenderer) -> None:
        """Bundled listing template links entries."""
        resolver = PathResolver(ContentStore(views_dir))
        listing = resolver.list_directory(ContentKey("tests/datagrid"), RenderOptions({"layout": None}))

        html = renderer.render_listing(listing)

        assert '<a href="/tests/datagrid/example.html">example.html</a>' in html

    def test__empty_listing__says_so(self, renderer: TemplateRenderer) -> None:
        listing = Listing(ContentKey("empty"), [], RenderOptions({"layout": None}))

        html = renderer.render_listing(listing)

        assert "No entries in empty/" in html


class TestRenderError:
    """Tests for TemplateRenderer.render_error()."""

    def test__details__are_shown_when_given(self, renderer: TemplateRenderer) -> None:
        html = renderer.render_error("boom", "Traceback: line 1")

        assert "Internal Server Error" in html
        assert "boom" in html
        assert "<pre>Traceback: line 1</pre>" in html

    def test__no_details__omits_traceback(self, renderer: TemplateRenderer) -> None:
        html = renderer.render_error("boom")

        assert "<pre>" not in html
