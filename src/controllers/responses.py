from typing import Any, Callable, Optional

from pydantic import BaseModel
from starlette.responses import JSONResponse
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from src.domain.errors import GenerationFailed, InvalidCount, InvalidStartDate
from src.domain.result import Ok, Result


GENERIC_ERROR_MESSAGE = "An unexpected error occurred while processing the request"


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
    message: str
    details: Optional[Any] = None


def write_error(status_code: int, error: str, message: str, details: Any = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def write_json(data: Any, status_code: int = HTTP_200_OK) -> JSONResponse:
    """Serialize pydantic models (or lists of them) with their wire aliases."""
    if isinstance(data, BaseModel):
        content = data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, list):
        content = [item.model_dump(mode="json", by_alias=True) for item in data]
    else:
        content = data
    return JSONResponse(status_code=status_code, content=content)


def write_ok(data: Any) -> JSONResponse:
    return write_json(data, HTTP_200_OK)


def write_created(data: Any) -> JSONResponse:
    return write_json(data, HTTP_201_CREATED)


def write_validation_error(errors: Any) -> JSONResponse:
    return write_error(HTTP_422_UNPROCESSABLE_CONTENT, "ValidationError", "Validation failed", errors)


def write_internal_server_error() -> JSONResponse:
    # Never echo internal messages back to the caller
    return write_error(HTTP_500_INTERNAL_SERVER_ERROR, "InternalServerError", GENERIC_ERROR_MESSAGE)


def error_code(error: Any) -> str:
    """Machine-readable code used in the response body and metrics labels."""
    if isinstance(error, (InvalidCount, InvalidStartDate)):
        return type(error).__name__
    return "InternalServerError"


def map_error_to_http(error: Any) -> JSONResponse:
    """Translate a handler error into a status code and error body."""
    if isinstance(error, InvalidCount):
        return write_error(HTTP_400_BAD_REQUEST, "InvalidCount", error.message, {"count": error.count})
    if isinstance(error, InvalidStartDate):
        return write_error(HTTP_400_BAD_REQUEST, "InvalidStartDate", error.message)
    if isinstance(error, GenerationFailed):
        return write_internal_server_error()
    raise TypeError(f"Unknown handler error: {error!r}")


def write_result(
        result: Result,
        success_writer: Callable[[Any], JSONResponse],
        error_mapper: Callable[[Any], JSONResponse] = map_error_to_http) -> JSONResponse:
    if isinstance(result, Ok):
        return success_writer(result.value)
    return error_mapper(result.error)
