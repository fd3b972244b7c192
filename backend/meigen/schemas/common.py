"""
Meigen Backend — Response Envelope & Shared Schemas
====================================================

What:  The uniform envelope every route returns, plus the camelCase base
       model used by all request/response schemas.
Why:   Clients parse one shape for every endpoint:

           success  {"success": true,  "data": ...}
           failure  {"success": false, "error": {"code": ..., "message": ...}}

How:   Routes declare `response_model=SuccessResponse[T]` and return
       `SuccessResponse(data=...)`. Failures are rendered by the global
       exception handlers through `error_response()`.

Wire format:
    Python attributes are snake_case; JSON keys are camelCase (textJa,
    categoryId, createdAt). Requests accept either spelling.
"""

from typing import Generic, Literal, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from meigen.exceptions import status_for_code

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T


class ErrorBody(BaseModel):
    code: str = Field(description="Machine-readable error code, e.g. NOT_FOUND")
    message: str = Field(description="Human-readable description")


class ErrorResponse(BaseModel):
    """Documented in OpenAPI for every non-2xx response."""

    success: Literal[False] = False
    error: ErrorBody


def error_response(
    code: str,
    message: str,
    status: Optional[int] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build the failure envelope; `status` overrides the code's default."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(
        status_code=status_for_code(code, status),
        content=body.model_dump(),
        headers=headers,
    )


class MessageResponse(CamelModel):
    message: str


class HealthResponse(BaseModel):
    """Returned bare (no envelope) so probes can read it without unwrapping."""

    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float


ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "Admin session required", "model": ErrorResponse},
    404: {"description": "Not found or soft-deleted", "model": ErrorResponse},
    409: {"description": "Name already exists", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def responses(*codes: int) -> dict:
    """Subset of ERROR_RESPONSES for a route's OpenAPI `responses=`."""
    return {code: ERROR_RESPONSES[code] for code in codes}
