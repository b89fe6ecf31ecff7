"""Endpoints returning HTML snippets and filler text."""

import random

from aiohttp import web

from sohodemo.api.fixtures import load_fixture
from sohodemo.app_keys import OPTIONS_KEY, renderer_key
from sohodemo.core.options import parse_int

NAV_ITEMS_TEMPLATE = "tests/accordion/_ajax-results"

FRUITS_NOT_FOUND = (
    '<div class="accordion-content" style="color: red;">'
    "<p>Error: Couldn't find any fruits...</p>"
    "</div>"
)

GARBAGE_WORDS = (
    "garbage", "junk", "nonsense", "trash", "rubbish", "debris", "detritus",
    "filth", "waste", "scrap", "sewage", "slop", "sweepings", "bits and pieces",
    "odds and ends", "rubble", "clippings", "muck", "stuff",
)
GARBAGE_TYPES = ("text", "html", "json")
GARBAGE_IMAGE = '<img src="/images/garbage.jpg" alt="Picture of Garbage" width="499.5" height="375" />'


def create_content_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/fruits", get_fruits),
        web.get("/api/garbage", get_garbage),
        web.get("/api/nav-items", get_nav_items),
    ]


async def get_fruits(request: web.Request) -> web.Response:
    """Return accordion markup for a fruit category as a JSON string."""
    fruits = load_fixture(request, "fruits")
    category = request.query.get("categoryId") or "main"
    return web.json_response(fruits.get(category) or FRUITS_NOT_FOUND)


async def get_nav_items(request: web.Request) -> web.Response:
    """Return accordion contents rendered without a layout."""
    options = request[OPTIONS_KEY].merge({"layout": None})
    html = request.app[renderer_key].render(NAV_ITEMS_TEMPLATE, options)
    return web.Response(text=html, content_type="text/html")


async def get_garbage(request: web.Request) -> web.Response:
    """Return random filler as text, HTML paragraphs or JSON list items.

    Query parameters: ``size`` (words per paragraph or JSON items),
    ``return`` (text, html or json) and ``paragraphs``.
    """
    amount = max(parse_int(request.query.get("size"), 25), 0)
    paragraphs = max(parse_int(request.query.get("paragraphs"), 1), 0)
    kind = request.query.get("return")
    if kind not in GARBAGE_TYPES:
        kind = "text"

    if kind == "json":
        return web.json_response(garbage_items(amount))

    text = garbage_text(amount, paragraphs, html=kind == "html")
    if kind == "html":
        return web.Response(text=text, content_type="text/html")
    return web.Response(text=text, content_type="text/plain")


def garbage_items(amount: int, rng: random.Random | None = None) -> list[dict[str, object]]:
    """Build ``amount`` dropdown-style items with random garbage labels."""
    rng = rng or random.Random()
    items: list[dict[str, object]] = []
    for idx in range(amount):
        word = rng.choice(GARBAGE_WORDS)
        items.append(
            {
                "id": idx,
                "label": word.capitalize(),
                "value": f"{idx}-{word.replace(' ', '-')}",
                "selected": False,
            },
        )
    return items


def garbage_text(
    amount: int,
    paragraphs: int,
    *,
    html: bool = False,
    rng: random.Random | None = None,
) -> str:
    """Build ``paragraphs`` paragraphs of ``amount`` random garbage words.

    In HTML mode, paragraphs are wrapped in ``<p>`` and roughly one in nine
    is replaced by a picture of garbage.
    """
    rng = rng or random.Random()
    chunks: list[str] = []
    for _ in range(paragraphs):
        if html and rng.uniform(1, 10) > 8:
            sentence = GARBAGE_IMAGE
        else:
            words = [rng.choice(GARBAGE_WORDS) for _ in range(amount)]
            if words:
                words[0] = words[0].capitalize()
            sentence = " ".join(words)
        sentence += "."
        chunks.append(f"<p>{sentence}</p>" if html else sentence)
    return ("" if html else " ").join(chunks)
