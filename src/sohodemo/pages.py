"""Demo page routes.

Resolves every non-API GET path to a rendered page, a directory listing or
a file from the public directory.
"""

from pathlib import Path

from aiohttp import web

from sohodemo.app_keys import OPTIONS_KEY, config_key, renderer_key, resolver_key
from sohodemo.core.resolver import Listing, Render


def create_page_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", get_page),
    ]


async def get_page(request: web.Request) -> web.StreamResponse:
    public_file = _public_file(request.app[config_key].views.public_dir, request.path)
    if public_file is not None:
        return web.FileResponse(public_file)

    resolver = request.app[resolver_key]
    renderer = request.app[renderer_key]

    resolution = resolver.resolve(request.path, request[OPTIONS_KEY])

    if isinstance(resolution, Render):
        html = renderer.render(resolution.key, resolution.options)
        return web.Response(text=html, content_type="text/html")

    if isinstance(resolution, Listing):
        html = renderer.render_listing(resolution)
        return web.Response(text=html, content_type="text/html")

    # Missing content falls back to a listing of its parent directory
    if resolution.fallback is not None:
        html = renderer.render_listing(resolution.fallback)
        return web.Response(text=html, status=404, content_type="text/html")

    raise web.HTTPNotFound()


def _public_file(public_dir: Path, path: str) -> Path | None:
    """Return the public file a path points at, if any."""
    relative = path.lstrip("/")
    if not relative or not public_dir.is_dir():
        return None

    root = public_dir.resolve()
    candidate = (root / relative).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate
