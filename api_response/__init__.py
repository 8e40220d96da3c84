from api_response.config import settings
from api_response.dependencies import ShapingParams
from api_response.exceptions import (
    ArgumentError,
    InvalidOperationError,
    ResponseWrapperError,
)
from api_response.responses import to_json_response
from api_response.schemas.common import ApiResponse, MetaData
from api_response.services.query_service import (
    apply_filter,
    apply_sorting,
    to_api_response,
)
from api_response.utils.fields import column_map, resolve_column

__all__ = [
    "settings",
    "ApiResponse",
    "MetaData",
    "ResponseWrapperError",
    "ArgumentError",
    "InvalidOperationError",
    "apply_filter",
    "apply_sorting",
    "to_api_response",
    "column_map",
    "resolve_column",
    "to_json_response",
    "ShapingParams",
]
