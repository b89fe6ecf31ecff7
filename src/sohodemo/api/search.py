"""Site search proxy.

Forwards search form posts to the upstream CMS search results page so the
modal search demo can show real results. The upstream response is passed
through unmodified.
"""

import logging

import httpx
from aiohttp import web

from sohodemo.app_keys import config_key, http_client_key

logger = logging.getLogger(__name__)

# Hop-by-hop and host-specific headers that must not be forwarded
_SKIPPED_HEADERS = frozenset(
    {"host", "content-length", "connection", "transfer-encoding", "keep-alive"},
)


def create_search_routes() -> list[web.RouteDef]:
    return [web.post("/api/site-search", post_site_search)]


async def post_site_search(request: web.Request) -> web.Response:
    url = request.app[config_key].api.site_search_url
    client = request.app[http_client_key]

    body = await request.read()
    headers = {
        name: value
        for name, value in request.headers.items()
        if name.lower() not in _SKIPPED_HEADERS
    }

    logger.info("Proxying site search to %s", url)
    try:
        upstream = await client.post(url, content=body, headers=headers)
    except httpx.HTTPError as e:
        logger.error("Site search proxy failed: %s", e)
        return web.Response(status=500)

    return web.Response(
        body=upstream.content,
        status=upstream.status_code,
        content_type=_media_type(upstream.headers.get("content-type")),
    )


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return "text/html"
    return content_type.split(";", 1)[0].strip()
