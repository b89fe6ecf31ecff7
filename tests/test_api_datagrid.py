"""Tests for the datagrid paging endpoint."""

from typing import Any

import pytest
from aiohttp import web
from sohodemo.api.datagrid import TOTAL_ROWS, generate_compressors
from sohodemo.config import Config
from sohodemo.server import create_app


@pytest.fixture
def app(test_config: Config) -> web.Application:
    return create_app(test_config)


class TestGenerateCompressors:
    """Tests for generate_compressors()."""

    def test__dataset__has_fixed_size(self) -> None:
        assert len(generate_compressors()) == TOTAL_ROWS

    def test__first_row__has_expected_values(self) -> None:
        """Row values are derived from the row index."""
        row = generate_compressors()[0]

        assert row["productId"] == 214220
        assert row["productName"] == "Compressor 0"
        assert row["quantity"] == 1
        assert row["price"] == 210.99
        assert row["orderDate"] == "2015-01-01"

    def test__status__depends_on_page_offset(self) -> None:
        """Status column shifts with the requested offset."""
        assert generate_compressors(0)[1]["status"] == "Late"
        assert generate_compressors(100)[1]["status"] == "On Hold"


class TestGetCompressors:
    """Tests for /api/compressors."""

    @pytest.mark.asyncio
    async def test__defaults__return_first_page(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Without parameters the first ten rows are returned."""
        client = await aiohttp_client(app)
        response = await client.get("/api/compressors")

        assert response.status == 200
        body = await response.json()
        assert body["total"] == TOTAL_ROWS
        assert [row["id"] for row in body["data"]] == list(range(10))

    @pytest.mark.asyncio
    async def test__page_params__select_page(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/compressors", params={"pageNum": "3", "pageSize": "5"})

        body = await response.json()
        assert [row["id"] for row in body["data"]] == [10, 11, 12, 13, 14]

    @pytest.mark.asyncio
    async def test__row_filter_equals__matches_single_row(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Equals filter on product id matches exactly one row."""
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/compressors",
            params={"filterColumn": "productId", "filterOp": "equals", "filterValue": "214225"},
        )

        body = await response.json()
        assert body["total"] == 1
        assert body["data"][0]["id"] == 5

    @pytest.mark.asyncio
    async def test__row_filter_contains__matches_substring(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/compressors",
            params={"filterColumn": "productId", "filterOp": "contains", "filterValue": "'21430'"},
        )

        body = await response.json()
        assert body["total"] == 10

    @pytest.mark.asyncio
    async def test__unknown_filter_column__matches_nothing(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/compressors",
            params={"filterColumn": "price", "filterOp": "equals", "filterValue": "1"},
        )

        assert (await response.json())["total"] == 0

    @pytest.mark.asyncio
    async def test__free_text_filter__matches_product_name(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/compressors", params={"filter": "compressor"})

        assert (await response.json())["total"] == TOTAL_ROWS

    @pytest.mark.asyncio
    async def test__sort_descending__is_default(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Sorting is descending unless sortAsc is "true"."""
        client = await aiohttp_client(app)
        response = await client.get("/api/compressors", params={"sortId": "productId"})

        body = await response.json()
        assert body["data"][0]["productId"] == 214220 + TOTAL_ROWS - 1

    @pytest.mark.asyncio
    async def test__sort_ascending__puts_lowest_first(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/compressors",
            params={"sortId": "productId", "sortAsc": "true"},
        )

        body = await response.json()
        assert body["data"][0]["productId"] == 214220
