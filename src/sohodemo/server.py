"""aiohttp server for Sohodemo.

Application factory and route registration.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import httpx
from aiohttp import web

from sohodemo.api.content import create_content_routes
from sohodemo.api.datagrid import create_datagrid_routes
from sohodemo.api.fixtures import create_fixture_routes
from sohodemo.api.search import create_search_routes
from sohodemo.app_keys import (
    config_key,
    defaults_key,
    fixtures_key,
    http_client_key,
    renderer_key,
    resolver_key,
    verbose_key,
)
from sohodemo.config import Config
from sohodemo.core.content import ContentStore
from sohodemo.core.fixtures import FixtureProvider
from sohodemo.core.options import default_options
from sohodemo.core.renderer import TemplateRenderer
from sohodemo.core.resolver import DEFAULT_EXCLUDES, PathResolver
from sohodemo.live.reload import LiveReloadManager, create_live_reload_routes
from sohodemo.middleware import MIDDLEWARES
from sohodemo.pages import create_page_routes

logger = logging.getLogger(__name__)

live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)


def create_app(
    config: Config,
    *,
    verbose: bool = False,
    http_client: httpx.AsyncClient | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        verbose: Include tracebacks in error pages
        http_client: Client used by the site search proxy (created if None)

    Returns:
        Configured aiohttp application
    """
    app = web.Application(middlewares=MIDDLEWARES)

    views_dir = config.views.views_dir
    store = ContentStore(views_dir)

    app[config_key] = config
    app[verbose_key] = verbose
    app[resolver_key] = PathResolver(
        store,
        basepath=config.server.basepath,
        excludes=(*DEFAULT_EXCLUDES, *config.views.exclude),
        sort_listings=config.views.sort_listings,
    )
    app[renderer_key] = TemplateRenderer(views_dir)
    app[fixtures_key] = FixtureProvider(config.api.data_dir)
    app[defaults_key] = default_options(
        basepath=config.server.basepath,
        live_reload=config.live_reload.enabled,
        version=_package_version(),
    )
    app[http_client_key] = http_client or httpx.AsyncClient(timeout=config.api.timeout)
    app.on_cleanup.append(_close_http_client)

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_fixture_routes())
    app.router.add_routes(create_datagrid_routes())
    app.router.add_routes(create_content_routes())
    app.router.add_routes(create_search_routes())

    # Live reload WebSocket endpoint
    if config.live_reload.enabled:
        manager = LiveReloadManager(
            views_dir,
            watch_patterns=config.live_reload.watch_patterns,
        )
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    # Documentation assets live next to the docs templates
    docs_assets_dir = views_dir / "docs" / "assets"
    if docs_assets_dir.is_dir():
        app.router.add_static("/docs/assets", docs_assets_dir)

    # Page routes - must be last to catch all non-API paths
    app.router.add_routes(create_page_routes())

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_manager_key].stop()


async def _close_http_client(app: web.Application) -> None:
    await app[http_client_key].aclose()


def _package_version() -> str | None:
    try:
        return version("sohodemo")
    except PackageNotFoundError:
        return None


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Include tracebacks in error pages
    """
    app = create_app(config, verbose=verbose)
    logger.info("Serving views from %s", config.views.views_dir)
    web.run_app(app, host=config.server.host, port=config.server.port)
