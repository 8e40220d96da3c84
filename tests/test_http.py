"""Tests for the FastAPI adapter: envelope to JSONResponse and query params."""

import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api_response.dependencies import ShapingParams
from api_response.responses import to_json_response
from api_response.schemas.common import ApiResponse
from tests.models import Item, ItemResponse, add_items


def _build_app(session_factory: async_sessionmaker) -> FastAPI:
    app = FastAPI()

    async def get_db():
        async with session_factory() as session:
            yield session

    @app.get("/items")
    async def list_items(
        params: ShapingParams = Depends(),
        db: AsyncSession = Depends(get_db),
    ):
        response = await params.apply(db, select(Item), response_model=ItemResponse)
        return to_json_response(response)

    @app.get("/items/{item_id}")
    async def get_item(item_id: int, db: AsyncSession = Depends(get_db)):
        item = await db.get(Item, item_id)
        if item is None:
            return to_json_response(
                ApiResponse.not_found(
                    f"Item {item_id} not found", headers={"X-Reason": "missing"}
                )
            )
        return to_json_response(
            ApiResponse.ok(
                ItemResponse.model_validate(item), headers={"X-Item-Id": str(item_id)}
            )
        )

    return app


@pytest_asyncio.fixture
async def async_client(async_test_engine):
    session_factory = async_sessionmaker(
        async_test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        await add_items(session, "apple", "banana", "cherry", "date", "elderberry")

    transport = ASGITransport(app=_build_app(session_factory))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestListEndpoint:
    @pytest.mark.asyncio
    async def test_paginated_body(self, async_client):
        response = await async_client.get(
            "/items", params={"page": 2, "page_size": 2, "sort_order": "name desc"}
        )

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"success", "message", "data", "meta"}
        assert body["success"] is True
        assert body["message"] == "Request successfully completed."
        assert [item["name"] for item in body["data"]] == ["cherry", "banana"]
        assert body["meta"] == {
            "totalCount": 5,
            "page": 2,
            "pageSize": 2,
            "totalPages": 3,
            "sortOrder": "name desc",
            "filter": None,
        }

    @pytest.mark.asyncio
    async def test_defaults_when_no_query_string(self, async_client):
        response = await async_client.get("/items")

        body = response.json()
        assert body["meta"]["page"] == 1
        assert body["meta"]["pageSize"] == 10
        assert len(body["data"]) == 5

    @pytest.mark.asyncio
    async def test_filter_query_params(self, async_client):
        response = await async_client.get(
            "/items", params={"filter": "an", "sorting_property": "name"}
        )

        body = response.json()
        assert [item["name"] for item in body["data"]] == ["banana"]
        assert body["meta"]["totalCount"] == 1

    @pytest.mark.asyncio
    async def test_bad_sort_property_returns_400(self, async_client):
        response = await async_client.get("/items", params={"sort_order": "colour"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["meta"] is None
        assert body["message"].startswith("Argument Error:")


class TestSingleEndpoint:
    @pytest.mark.asyncio
    async def test_found_copies_headers(self, async_client):
        response = await async_client.get("/items/1")

        assert response.status_code == 200
        assert response.headers["X-Item-Id"] == "1"
        assert response.json()["data"]["name"] == "apple"
        assert response.json()["meta"] is None

    @pytest.mark.asyncio
    async def test_not_found_status_and_headers(self, async_client):
        response = await async_client.get("/items/99")

        assert response.status_code == 404
        assert response.headers["X-Reason"] == "missing"
        assert response.json() == {
            "success": False,
            "message": "Item 99 not found",
            "data": None,
            "meta": None,
        }
