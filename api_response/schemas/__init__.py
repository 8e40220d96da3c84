from api_response.schemas.common import ApiResponse, MetaData

__all__ = [
    "ApiResponse",
    "MetaData",
]
