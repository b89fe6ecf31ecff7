"""Shared test fixtures."""

from pathlib import Path

import pytest
from sohodemo.config import ApiConfig, Config, LiveReloadConfig, ServerConfig, ViewsConfig

# Layout templates tag their output so tests can tell which layout was used
LAYOUT_TEMPLATE = '<div data-layout="{name}">{{{{ body }}}}</div>'

VIEW_FILES: dict[str, str] = {
    "index.html": "<p>Home</p>",
    "layout.html": LAYOUT_TEMPLATE.format(name="layout"),
    "controls/index.html": "<p>Controls index: {{ subtitle }}</p>",
    "controls/layout.html": LAYOUT_TEMPLATE.format(name="controls/layout"),
    "controls/masthead-layout.html": LAYOUT_TEMPLATE.format(name="controls/masthead-layout"),
    "controls/dropdown.html": (
        "<p>{{ subtitle }} in {{ locale }}</p>"
        "<p>{{ dropdownListData|length if dropdownListData else 0 }} options</p>"
    ),
    "controls/masthead.html": "<p>Masthead</p>",
    "controls/contextualactionpanel.html": "<p>{{ subtitle }}</p>",
    "tests/layout.html": LAYOUT_TEMPLATE.format(name="tests/layout"),
    "tests/layout-noheader.html": LAYOUT_TEMPLATE.format(name="tests/layout-noheader"),
    "tests/layout-noscroll.html": LAYOUT_TEMPLATE.format(name="tests/layout-noscroll"),
    "tests/footer.html": "<footer></footer>",
    "tests/button.html": "<button>{{ subtitle }}</button>",
    "tests/datagrid/example.html": "<table></table>",
    "tests/applicationmenu/site/layout.html": LAYOUT_TEMPLATE.format(
        name="tests/applicationmenu/site/layout",
    ),
    "tests/applicationmenu/site/foo.html": "<nav>Site menu</nav>",
    "tests/applicationmenu/six-levels/layout.html": LAYOUT_TEMPLATE.format(
        name="tests/applicationmenu/six-levels/layout",
    ),
    "tests/applicationmenu/six-levels/example.html": "<nav>Six levels</nav>",
    "tests/distribution/amd.html": "<p>AMD {{ amd }}</p>",
    "tests/accordion/_ajax-results.html": '<div class="accordion-header">Ajax</div>',
    "patterns/layout.html": LAYOUT_TEMPLATE.format(name="patterns/layout"),
    "patterns/step-process.html": "<p>Step process</p>",
    "patterns/wizard.html": "<p>Wizard</p>",
    "partials/snippet.html": "<span>{{ title }}</span>",
    "examples/layout.html": LAYOUT_TEMPLATE.format(name="examples/layout"),
    "examples/forms/index.html": "<form></form>",
}


def write_views(views_dir: Path, files: dict[str, str] | None = None) -> Path:
    """Write a views tree and return its root."""
    for relative, content in (files or VIEW_FILES).items():
        path = views_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return views_dir


@pytest.fixture
def views_dir(tmp_path: Path) -> Path:
    """Create a views directory with a representative set of demo pages."""
    return write_views(tmp_path / "views")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Create an empty fixture data directory."""
    data = tmp_path / "data"
    data.mkdir()
    return data


@pytest.fixture
def test_config(tmp_path: Path, views_dir: Path, data_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Live reload is disabled so tests don't start a file watcher.
    """
    public_dir = tmp_path / "public"
    public_dir.mkdir(exist_ok=True)

    return Config(
        server=ServerConfig(),
        views=ViewsConfig(views_dir=views_dir, public_dir=public_dir),
        api=ApiConfig(data_dir=data_dir, site_search_url="http://search.test/results"),
        live_reload=LiveReloadConfig(enabled=False),
    )
