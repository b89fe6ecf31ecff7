"""Fixture-backed API endpoints.

Each endpoint returns a JSON fixture, some with light filtering.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web

from sohodemo.app_keys import fixtures_key
from sohodemo.core.options import parse_number

# Endpoint path -> fixture name
FIXTURE_ENDPOINTS: dict[str, str] = {
    "/api/people": "people",
    "/api/supplies": "supplies",
    "/api/towns": "towns",
    "/api/tasks": "tasks",
    "/api/periods": "periods",
    "/api/tree-tasks": "tree-tasks",
    "/api/lookupInfo": "lookupInfo",
    "/api/construction-orders": "construction-orders",
    "/api/construction-cart-items": "construction-cart-items",
    "/api/orgstructure": "orgstructure",
    "/api/servicerequests": "servicerequests",
    "/api/deployments": "deployments",
    "/api/general/status-codes": "status-codes",
    "/api/my-projects": "projects",
    "/api/companies": "companies",
    "/api/accounts": "accounts",
    "/api/assets": "assets",
    "/api/accounts-sm": "accounts-sm",
    "/api/incidents": "incidents",
    "/api/fires": "fires",
    "/api/autocomplete/turkish": "autocomplete-turkish",
    "/api/dummy-dropdown-data": "dummy-dropdown-data",
}


def create_fixture_routes() -> list[web.RouteDef]:
    routes = [
        web.get("/api/states", get_states),
        web.get("/api/product", get_products),
    ]
    routes.extend(
        web.get(path, _fixture_handler(name)) for path, name in FIXTURE_ENDPOINTS.items()
    )
    return routes


def load_fixture(request: web.Request, name: str) -> Any:
    """Load a fixture, raising 404 with a JSON body when it's missing."""
    try:
        return request.app[fixtures_key].load(name)
    except FileNotFoundError:
        raise web.HTTPNotFound(
            text=json.dumps({"error": "Fixture not found", "name": name}),
            content_type="application/json",
        ) from None


def _fixture_handler(name: str) -> Callable[[web.Request], Awaitable[web.Response]]:
    async def handler(request: web.Request) -> web.Response:
        return web.json_response(load_fixture(request, name))

    return handler


async def get_states(request: web.Request) -> web.Response:
    """Return states, filtered by a case-insensitive ``term`` on the label."""
    states = load_fixture(request, "states")
    term = request.query.get("term")
    if not term:
        return web.json_response(states)

    needle = term.lower()
    matches = [state for state in states if needle in str(state.get("label", "")).lower()]
    return web.json_response(matches)


async def get_products(request: web.Request) -> web.Response:
    """Return products, truncated to ``limit`` items when given."""
    products = load_fixture(request, "products")
    limit = parse_number(request.query.get("limit"))
    if limit is not None:
        products = products[: max(int(limit), 0)]
    return web.json_response(products)
