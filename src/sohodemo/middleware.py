"""Request middleware.

Runs in order: error page, request log, render options, dropdown data,
response throttle. Handlers read the request's options from
``request[OPTIONS_KEY]``.
"""

import asyncio
import logging
import traceback
from collections.abc import Awaitable, Callable

from aiohttp import web

from sohodemo.app_keys import (
    OPTIONS_KEY,
    defaults_key,
    fixtures_key,
    renderer_key,
    verbose_key,
)
from sohodemo.core.options import RenderOptions, build_request_options

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

DROPDOWN_FIXTURE = "dummy-dropdown-data"


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn unexpected exceptions into a logged 500 page."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        logger.exception("Error handling %s %s", request.method, request.path)
        details = traceback.format_exc() if request.app[verbose_key] else None
        html = request.app[renderer_key].render_error(str(e), details)
        return web.Response(text=html, status=500, content_type="text/html")


@web.middleware
async def request_log_middleware(
    request: web.Request,
    handler: Handler,
) -> web.StreamResponse:
    logger.info("%s: %s", request.method, request.path_qs)
    return await handler(request)


@web.middleware
async def options_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Attach fresh RenderOptions built from defaults and query parameters."""
    request[OPTIONS_KEY] = build_request_options(
        request.app[defaults_key],
        request.query,
    )
    return await handler(request)


@web.middleware
async def dropdown_data_middleware(
    request: web.Request,
    handler: Handler,
) -> web.StreamResponse:
    """Pass dropdown demo data to pages that show dropdowns."""
    if "dropdown" in request.path and not request.path.startswith("/api/"):
        try:
            data = request.app[fixtures_key].load(DROPDOWN_FIXTURE)
        except FileNotFoundError:
            logger.warning("Fixture %s not found, dropdown data omitted", DROPDOWN_FIXTURE)
        else:
            options: RenderOptions = request[OPTIONS_KEY]
            request[OPTIONS_KEY] = options.merge({"dropdownListData": data})
    return await handler(request)


@web.middleware
async def throttle_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Delay the request by the ``delay`` option (milliseconds)."""
    delay = request[OPTIONS_KEY].get("delay")
    if delay:
        logger.info("Delaying the response time of this request by %sms", delay)
        await asyncio.sleep(delay / 1000)
        logger.info("Delayed request continuing")
    return await handler(request)


MIDDLEWARES = [
    error_middleware,
    request_log_middleware,
    options_middleware,
    dropdown_data_middleware,
    throttle_middleware,
]
