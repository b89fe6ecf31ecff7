"""Application keys for type-safe app configuration access."""

import httpx
from aiohttp import web

from sohodemo.config import Config
from sohodemo.core.fixtures import FixtureProvider
from sohodemo.core.options import RenderOptions
from sohodemo.core.renderer import TemplateRenderer
from sohodemo.core.resolver import PathResolver

config_key = web.AppKey("config", Config)
resolver_key = web.AppKey("resolver", PathResolver)
renderer_key = web.AppKey("renderer", TemplateRenderer)
fixtures_key = web.AppKey("fixtures", FixtureProvider)
defaults_key = web.AppKey("defaults", RenderOptions)
http_client_key = web.AppKey("http_client", httpx.AsyncClient)
verbose_key = web.AppKey("verbose", bool)

# Per-request storage key for the request's RenderOptions
OPTIONS_KEY = "options"
