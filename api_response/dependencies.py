from collections.abc import Mapping
from typing import Any

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from api_response.config import settings
from api_response.schemas.common import ApiResponse
from api_response.services.query_service import to_api_response


class ShapingParams:
    """FastAPI dependency for ``?page=2&page_size=20&sort_order=name desc&filter=abc&sorting_property=name``."""

    def __init__(
        self,
        page: int = Query(default=settings.DEFAULT_PAGE, description="Page number (1-based)"),
        page_size: int = Query(default=settings.DEFAULT_PAGE_SIZE, description="Items per page"),
        sort_order: str | None = Query(default=None, description="Property and optional direction, e.g. 'name desc'"),
        filter: str | None = Query(default=None, description="Substring matched against sorting_property"),
        sorting_property: str | None = Query(default=None, description="Property the filter applies to"),
    ):
        self.page = page
        self.page_size = page_size
        self.sort_order = sort_order
        self.filter = filter
        self.sorting_property = sorting_property

    async def apply(
        self,
        db: AsyncSession,
        query: Select,
        response_model: type[BaseModel] | None = None,
        columns: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        return await to_api_response(
            db,
            query,
            page=self.page,
            page_size=self.page_size,
            sort_order=self.sort_order,
            filter=self.filter,
            sorting_property=self.sorting_property,
            response_model=response_model,
            columns=columns,
        )
