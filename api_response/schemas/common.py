import math
from http import HTTPStatus
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

from api_response.config import settings
from api_response.exceptions import ArgumentError

T = TypeVar("T")


class MetaData(BaseModel):
    """Pagination, sorting and filtering context of a result set."""

    total_count: int = Field(..., ge=0, alias="totalCount")
    page: int
    page_size: int = Field(..., gt=0, alias="pageSize")
    total_pages: int = Field(..., alias="totalPages")
    sort_order: str | None = Field(None, alias="sortOrder")
    filter: str | None = None

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _fill_total_pages(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if values.get("total_pages", values.get("totalPages")) is not None:
            return values
        total_count = values.get("total_count", values.get("totalCount"))
        page_size = values.get("page_size", values.get("pageSize"))
        if isinstance(total_count, int) and isinstance(page_size, int) and page_size > 0:
            return {**values, "total_pages": math.ceil(total_count / page_size)}
        return values

    @classmethod
    def create(
        cls,
        total_count: int,
        page: int,
        page_size: int,
        sort_order: str | None = None,
        filter: str | None = None,
    ) -> "MetaData":
        """Build metadata, deriving total_pages as ceil(total_count / page_size)."""
        if page_size <= 0:
            raise ArgumentError(f"Page size must be greater than zero, got {page_size}.")
        return cls(
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total_count / page_size),
            sort_order=sort_order,
            filter=filter,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope.

    ``status_code`` and ``headers`` belong on the transport response and are
    left out of the serialized body.
    """

    success: bool
    message: str
    data: T | list[T] | None = None
    meta: MetaData | None = None
    status_code: HTTPStatus = Field(HTTPStatus.OK, exclude=True)
    headers: dict[str, str] = Field(default_factory=dict, exclude=True)

    @classmethod
    def ok(
        cls,
        data: T,
        meta: MetaData | None = None,
        status_code: HTTPStatus = HTTPStatus.OK,
        headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        return cls(
            success=True,
            message=settings.SUCCESS_MESSAGE,
            data=data,
            meta=meta,
            status_code=status_code,
            headers=dict(headers or {}),
        )

    @classmethod
    def ok_list(
        cls,
        data: list[T],
        meta: MetaData | None,
        status_code: HTTPStatus = HTTPStatus.OK,
        headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        """Successful list response. Lists always carry pagination metadata."""
        if meta is None:
            raise ArgumentError("MetaData must be provided when returning a list of data.")
        return cls(
            success=True,
            message=settings.SUCCESS_MESSAGE,
            data=list(data),
            meta=meta,
            status_code=status_code,
            headers=dict(headers or {}),
        )

    @classmethod
    def fail(
        cls,
        message: str,
        status_code: HTTPStatus = HTTPStatus.BAD_REQUEST,
        headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        return cls(
            success=False,
            message=message,
            status_code=status_code,
            headers=dict(headers or {}),
        )

    @classmethod
    def not_found(
        cls, message: str, headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        return cls.fail(message, HTTPStatus.NOT_FOUND, headers)

    @classmethod
    def unauthorized(
        cls, message: str, headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        return cls.fail(message, HTTPStatus.UNAUTHORIZED, headers)

    @classmethod
    def internal_error(
        cls, message: str, headers: dict[str, str] | None = None,
    ) -> "ApiResponse[T]":
        return cls.fail(message, HTTPStatus.INTERNAL_SERVER_ERROR, headers)
