import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from sqlalchemy import Select, String, asc, cast, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api_response.config import settings
from api_response.exceptions import (
    ArgumentError,
    InvalidOperationError,
    ResponseWrapperError,
)
from api_response.schemas.common import ApiResponse, MetaData
from api_response.utils.fields import resolve_column

logger = logging.getLogger(__name__)


def apply_filter(
    query: Select,
    filter: str | None,
    property_name: str | None,
    columns: Mapping[str, Any] | None = None,
) -> Select:
    """Keep rows whose ``property_name`` value, read as text, contains ``filter``."""
    if not filter or not property_name:
        return query
    try:
        column = resolve_column(query, property_name, columns)
        return query.where(cast(column, String).contains(filter, autoescape=True))
    except Exception as e:
        raise ArgumentError(f"Error applying filter: {e}") from e


def apply_sorting(
    query: Select,
    sort_order: str | None,
    columns: Mapping[str, Any] | None = None,
) -> Select:
    """Order by one property. ``sort_order`` looks like ``"name"`` or ``"name desc"``."""
    if not sort_order:
        return query
    try:
        parts = sort_order.split(" ")
        column = resolve_column(query, parts[0], columns)
        descending = len(parts) > 1 and parts[1].lower() == "desc"
        return query.order_by(desc(column) if descending else asc(column))
    except Exception as e:
        raise ArgumentError(f"Error applying sorting: {e}") from e


async def _count(db: AsyncSession, query: Select) -> int:
    """Count rows matched by ``query``, ignoring its ordering."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    try:
        result = await db.execute(count_query)
    except SQLAlchemyError as e:
        raise InvalidOperationError(str(e)) from e
    return result.scalar_one()


async def _fetch_page(
    db: AsyncSession,
    query: Select,
    page: int,
    page_size: int,
) -> list[Any]:
    """Run ``query`` for one page. Single-entity selects yield entities, others rows."""
    offset = (page - 1) * page_size
    descriptions = query.column_descriptions
    try:
        result = await db.execute(query.offset(offset).limit(page_size))
        if len(descriptions) == 1:
            # entities joined-loaded against collections repeat per child row
            if descriptions[0]["expr"] is descriptions[0]["entity"]:
                result = result.unique()
            return list(result.scalars().all())
        return list(result.all())
    except SQLAlchemyError as e:
        raise InvalidOperationError(str(e)) from e


async def to_api_response(
    db: AsyncSession,
    query: Select,
    page: int | None = None,
    page_size: int | None = None,
    sort_order: str | None = None,
    filter: str | None = None,
    sorting_property: str | None = None,
    *,
    response_model: type[BaseModel] | None = None,
    columns: Mapping[str, Any] | None = None,
) -> ApiResponse:
    """Filter, sort, count and paginate ``query`` into a list envelope.

    ``filter`` applies only together with ``sorting_property``, which names
    the property searched. ``sort_order`` names its own property. When
    ``response_model`` is given every row is validated into it (from
    attributes) and the envelope is ``ApiResponse[response_model]``.
    ``columns`` restricts the names usable for sorting and filtering.

    Never raises: failures come back as an unsuccessful envelope
    (400 for bad arguments, 500 for query execution or anything else).
    """
    if page is None:
        page = settings.DEFAULT_PAGE
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    envelope = ApiResponse[response_model] if response_model is not None else ApiResponse

    try:
        if filter and sorting_property:
            query = apply_filter(query, filter, sorting_property, columns)
        elif filter:
            logger.debug("Filter %r ignored: no sorting property given", filter)

        if sort_order:
            query = apply_sorting(query, sort_order, columns)

        total_count = await _count(db, query)
        items = await _fetch_page(db, query, page, page_size)
        if response_model is not None:
            items = [response_model.model_validate(item, from_attributes=True) for item in items]

        meta = MetaData.create(total_count, page, page_size, sort_order, filter)
        return envelope.ok_list(items, meta)
    except ResponseWrapperError as e:
        logger.warning("Query shaping failed [%s]: %s", e.code, e.message)
        return envelope.fail(f"{e.label}: {e.message}", e.status_code)
    except Exception as e:
        if settings.DEBUG:
            logger.exception("Unexpected error while shaping query")
        else:
            logger.error("Unexpected error while shaping query: %s", e)
        return envelope.internal_error(f"{ResponseWrapperError.label}: {e}")
