"""
Meigen Backend — Custom Exception Hierarchy
============================================

What:  Application errors, each carrying the envelope error code it renders as.
Why:   Services raise a typed error and never build HTTP responses; one set of
       global handlers (main.py) turns every error into the same envelope.
How:   Each class fixes `code`; the HTTP status comes from STATUS_BY_CODE
       unless the raise site passes an explicit `status_code`.

Exception Hierarchy:
    MeigenError (base)          INTERNAL_ERROR    → 500
    ├── ValidationError         VALIDATION_ERROR  → 400
    ├── UnauthorizedError       UNAUTHORIZED      → 401
    ├── ForbiddenError          FORBIDDEN         → 403
    ├── NotFoundError           NOT_FOUND         → 404
    ├── ConflictError           CONFLICT          → 409
    └── InternalError           INTERNAL_ERROR    → 500

Security:
    `message` is returned to the client. `context` is for server logs only.
"""

from typing import Any, Dict, Optional

STATUS_BY_CODE: Dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "INTERNAL_ERROR": 500,
}


def status_for_code(code: str, status_code: Optional[int] = None) -> int:
    """Explicit status wins; otherwise the code's default; unknown codes are 500."""
    if status_code is not None:
        return status_code
    return STATUS_BY_CODE.get(code, 500)


class MeigenError(Exception):
    """
    Base exception for all Meigen application errors.

    Attributes:
        message:      user-facing description (safe to return)
        status_code:  optional override of the code's default HTTP status
        context:      debug details, logged but never returned
    """

    code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self._status_code = status_code
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return status_for_code(self.code, self._status_code)


class ValidationError(MeigenError):
    """Malformed or missing input. Never retried."""

    code = "VALIDATION_ERROR"
    default_message = "Invalid input"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(MeigenError):
    """Missing, invalid or expired admin session, or a wrong password."""

    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ForbiddenError(MeigenError):
    code = "FORBIDDEN"
    default_message = "This action is not allowed"


class NotFoundError(MeigenError):
    """
    Entity absent or soft-deleted.

    Services return None for misses; routes convert that None into this
    error so a soft-deleted row and a missing row look identical to clients.
    """

    code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(MeigenError):
    """A uniqueness constraint (category or author name) was violated."""

    code = "CONFLICT"
    default_message = "The resource already exists"


class InternalError(MeigenError):
    """Unexpected store or configuration failure; details stay in the logs."""

    code = "INTERNAL_ERROR"
    default_message = "An internal error occurred. Please try again later."
