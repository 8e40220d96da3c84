from fastapi.responses import JSONResponse

from api_response.schemas.common import ApiResponse


def to_json_response(response: ApiResponse) -> JSONResponse:
    """Copy an envelope onto a FastAPI response.

    The status code goes to the status line and the headers to the response
    headers; ``success``, ``message``, ``data`` and ``meta`` form the JSON body.
    Row payloads must be serializable, so shape ORM queries with a
    ``response_model``.
    """
    return JSONResponse(
        content=response.model_dump(mode="json", by_alias=True),
        status_code=int(response.status_code),
        headers=response.headers,
    )
