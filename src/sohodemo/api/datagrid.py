"""Datagrid paging endpoint.

Generates a fixed set of compressor rows and serves them with server-side
paging, filtering and sorting, as a datagrid with a remote source expects.

Example call: /api/compressors?pageNum=1&sort=productId&pageSize=100
"""

from datetime import date, timedelta
from typing import Any

from aiohttp import web

from sohodemo.core.options import parse_int

TOTAL_ROWS = 1000
DEFAULT_PAGE_SIZE = 10
FIRST_PRODUCT_ID = 214220
STATUSES = ("OK", "On Hold", "Inactive", "Active", "Late", "Complete")
FIRST_ORDER_DATE = date(2015, 1, 1)


def create_datagrid_routes() -> list[web.RouteDef]:
    return [web.get("/api/compressors", get_compressors)]


async def get_compressors(request: web.Request) -> web.Response:
    query = request.query
    page_num = max(parse_int(query.get("pageNum"), 1), 1)
    page_size = max(parse_int(query.get("pageSize"), DEFAULT_PAGE_SIZE), 0)
    start = (page_num - 1) * page_size

    rows = [
        row
        for row in generate_compressors(start)
        if _matches_filter(row, query.get("filter"))
        and _matches_row_filter(
            row,
            query.get("filterValue"),
            query.get("filterColumn"),
            query.get("filterOp"),
        )
    ]

    sort_id = query.get("sortId")
    if sort_id:
        rows.sort(
            key=lambda row: _js_str(row.get(sort_id)).upper(),
            reverse=query.get("sortAsc") != "true",
        )

    return web.json_response(
        {"total": len(rows), "data": rows[start : start + page_size]},
    )


def generate_compressors(start: int = 0) -> list[dict[str, Any]]:
    """Generate the full compressor dataset.

    The status column depends on the requested page offset.
    """
    rows: list[dict[str, Any]] = []
    for j in range(TOTAL_ROWS):
        seed = j + 1
        status_idx = len(STATUSES) // (start + seed) + 1
        rows.append(
            {
                "id": j,
                "productId": FIRST_PRODUCT_ID + j,
                "productName": f"Compressor {j}",
                "activity": "Assemble Paint",
                "quantity": 1 + j / 2,
                "price": round(210.99 - j, 2),
                "status": STATUSES[status_idx] if status_idx < len(STATUSES) else None,
                "orderDate": (FIRST_ORDER_DATE + timedelta(days=seed - 1)).isoformat(),
                "action": "Action",
            },
        )
    return rows


def _matches_filter(row: dict[str, Any], raw_term: str | None) -> bool:
    """Free-text filter over the first four columns."""
    if not raw_term:
        return True
    term = raw_term.replace("'", "")
    return (
        term in str(row["productId"])
        or term in "compressor"
        or term in "assemble paint"
        or term in _js_str(row["quantity"])
    )


def _matches_row_filter(
    row: dict[str, Any],
    raw_value: str | None,
    column: str | None,
    op: str | None,
) -> bool:
    """Filter-row simulation: ``contains``/``equals`` on a single column."""
    if not raw_value:
        return True
    value = raw_value.replace("'", "").lower()

    if column == "productId":
        cell = str(row["productId"])
    elif column == "productName":
        cell = "compressor"
    elif column == "activity":
        cell = "assemble paint"
    elif column == "quantity":
        cell = _js_str(row["quantity"])
    else:
        return False

    if op == "contains":
        return value in cell
    if op == "equals":
        return value == cell
    return False


def _js_str(value: Any) -> str:
    # Whole floats print without a fraction, as in the demo pages' JavaScript
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return ""
    return str(value)
