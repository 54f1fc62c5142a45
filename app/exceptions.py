# =============================================================================
# app/exceptions.py - Error Hierarchy and Exception Handlers
# =============================================================================
# Centralized error handling for the API.
#
# Every expected failure is a HealthTrackError carrying an ErrorKind. The
# kind decides the HTTP status, whether the error is "operational"
# (expected, recoverable) and how much the response may reveal. Handlers
# switch on the kind, never on the subclass.
#
# Error body shape (always):
#   {"success": false, "message": "..."}
# plus, depending on the case:
#   "errors":  structured validation failures
#   "details": diagnostic context (non-production only)
#   "stack":   traceback (non-production only)
# =============================================================================

from __future__ import annotations

import logging
import traceback
from collections.abc import Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.database import StoreErrorKind, classify_store_error, store_error_code

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized access"
FORBIDDEN_MESSAGE = "Access denied"
INTERNAL_MESSAGE = "Internal Server Error"
VALIDATION_MESSAGE = "Validation failed"


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(str, Enum):
    """
    Tagged error categories with their HTTP status.

    Only INTERNAL_SERVER_ERROR is non-operational: it always signals a
    defect and is logged at error level with the full trace.
    """
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EXTERNAL_SERVICE_UNAVAILABLE = "EXTERNAL_SERVICE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]

    @property
    def is_operational(self) -> bool:
        return self is not ErrorKind.INTERNAL_SERVER_ERROR


_KIND_STATUS = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.EXTERNAL_SERVICE_UNAVAILABLE: 502,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}


# =============================================================================
# Base Error
# =============================================================================

class HealthTrackError(Exception):
    """
    Base exception for the HealthTrack API.

    Subclasses only pick a default kind and message; behaviour is driven by
    `kind`.

    Example:
        raise HealthTrackError("Diary entry not found", kind=ErrorKind.NOT_FOUND)
        raise NotFoundError("Diary entry not found")   # same thing
    """

    kind: ErrorKind = ErrorKind.INTERNAL_SERVER_ERROR
    default_message: str = INTERNAL_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        *,
        kind: ErrorKind | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.kind = kind or type(self).kind
        self.message = message or self.default_message
        self.code = code or self.kind.value
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def is_operational(self) -> bool:
        return self.kind.is_operational

    def to_dict(self) -> dict[str, Any]:
        """Diagnostic representation used in logs."""
        return {
            "name": self.code,
            "message": self.message,
            "httpCode": self.status_code,
            "isOperational": self.is_operational,
            "timestamp": self.timestamp.isoformat(),
        }


class BadRequestError(HealthTrackError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(HealthTrackError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(HealthTrackError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(HealthTrackError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(HealthTrackError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource conflict"


class ValidationFailedError(HealthTrackError):
    kind = ErrorKind.VALIDATION_FAILED
    default_message = VALIDATION_MESSAGE


class ExternalServiceError(HealthTrackError):
    kind = ErrorKind.EXTERNAL_SERVICE_UNAVAILABLE

    def __init__(self, service: str, message: str = "External service unavailable", **kwargs: Any):
        super().__init__(f"{service}: {message}", **kwargs)
        self.service = service


class InternalServerError(HealthTrackError):
    kind = ErrorKind.INTERNAL_SERVER_ERROR
    default_message = INTERNAL_MESSAGE


# =============================================================================
# Token Errors
# =============================================================================

class TokenExpiredError(UnauthorizedError):
    """Raised when a session token is past its expiry."""

    def __init__(self):
        super().__init__("Token expired", code="TOKEN_EXPIRED")


class TokenInvalidError(UnauthorizedError):
    """Raised when a session token has a bad signature, format or claims."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(reason, code="TOKEN_INVALID")


# =============================================================================
# Store Error Translation
# =============================================================================

# Fixed, human-readable table; raw driver codes never reach production clients
STORE_ERROR_RESPONSES: dict[StoreErrorKind, tuple[int, str]] = {
    StoreErrorKind.UNIQUE_VIOLATION: (409, "A record with this value already exists"),
    StoreErrorKind.FOREIGN_KEY_VIOLATION: (400, "Foreign key constraint failed"),
    StoreErrorKind.NOT_NULL_VIOLATION: (400, "Required value is missing"),
    StoreErrorKind.CHECK_VIOLATION: (400, "Check constraint failed"),
    StoreErrorKind.ROW_NOT_FOUND: (404, "Record not found"),
}
STORE_ERROR_FALLBACK = (400, "Database operation failed")


def from_store_error(exc: SQLAlchemyError, label: str, action: str) -> HealthTrackError:
    """
    Convert a store failure raised inside a service into a domain error.

    Recognized conflicts, missing rows and dangling references keep their
    meaning; everything else is masked behind a generic internal error.

    Args:
        exc: The SQLAlchemy exception
        label: Human name of the resource ("Diary entry")
        action: Verb for the masked message ("creating")
    """
    kind = classify_store_error(exc)

    if kind is StoreErrorKind.UNIQUE_VIOLATION:
        return ConflictError(f"{label} already exists", details={"store_code": store_error_code(exc)})
    if kind is StoreErrorKind.ROW_NOT_FOUND:
        return NotFoundError(f"{label} not found")
    if kind is StoreErrorKind.FOREIGN_KEY_VIOLATION:
        return BadRequestError("Foreign key constraint failed")

    return InternalServerError(
        f"Error {action} {label.lower()}",
        details={"store_code": store_error_code(exc), "error": str(exc)},
    )


# =============================================================================
# Response Helpers
# =============================================================================

def _is_production(request: Request) -> bool:
    app_settings = getattr(request.app.state, "settings", None)
    if app_settings is None:
        from app.config import settings as app_settings
    return app_settings.is_production


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_body(
    request: Request,
    message: str,
    *,
    exc: BaseException | None = None,
    errors: list[dict[str, Any]] | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the uniform error envelope, adding diagnostics outside production."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    if not _is_production(request):
        if details:
            body["details"] = details
        if exc is not None:
            body["stack"] = _format_stack(exc)
    return body


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic error dicts into {field, constraint, message} entries.

    The request section ("body", "query", ...) is dropped from the field path.
    """
    formatted = []
    for error in errors:
        location = [
            str(part) for part in error.get("loc", ())
            if part not in ("body", "query", "path", "header", "cookie")
        ]
        formatted.append({
            "field": ".".join(location) or "body",
            "constraint": error.get("type", "value_error"),
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


# =============================================================================
# Exception Handlers
# =============================================================================

async def healthtrack_exception_handler(request: Request, exc: HealthTrackError) -> JSONResponse:
    """
    Convert a HealthTrackError into the error envelope.

    - UNAUTHORIZED / FORBIDDEN: fixed generic message, cause logged only
    - INTERNAL_SERVER_ERROR: error log with trace
    - other kinds: warning log, the error's own message
    """
    route = f"{request.method} {request.url.path}"
    headers = None

    if exc.kind is ErrorKind.UNAUTHORIZED:
        logger.warning(f"Unauthorized access attempt: {route} ({exc.code}: {exc.message})")
        message = UNAUTHORIZED_MESSAGE
        details = {"reason": exc.message, "code": exc.code}
        headers = {"WWW-Authenticate": "Bearer"}
    elif exc.kind is ErrorKind.FORBIDDEN:
        logger.warning(f"Access is denied for request on {route}: {exc.message}")
        message = FORBIDDEN_MESSAGE
        details = {"reason": exc.message, "method": request.method, "path": request.url.path}
    elif not exc.is_operational:
        logger.error(f"Internal Error on {route}: {exc.message}", exc_info=exc)
        message = INTERNAL_MESSAGE
        details = {"reason": exc.message, **exc.details, **exc.to_dict()}
    else:
        logger.warning(f"Operational Error: {exc.code} - {exc.message}")
        message = exc.message
        details = exc.details or None

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, message, exc=exc, details=details),
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400 with a structured list."""
    errors = format_validation_errors(exc.errors())
    logger.warning(f"Validation Error on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=error_body(request, VALIDATION_MESSAGE, errors=errors),
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Translate store errors that escaped the services through the fixed table."""
    kind = classify_store_error(exc)
    status_code, message = STORE_ERROR_RESPONSES.get(kind, STORE_ERROR_FALLBACK)
    code = store_error_code(exc)
    logger.error(f"Store Error ({kind.value}, code={code}) on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=error_body(
            request,
            message,
            exc=exc,
            details={"kind": kind.value, "code": code, "error": str(exc)},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Resource not found"
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: 500 with a generic message, detail only outside production."""
    logger.exception(f"Unhandled Error: {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body(
            request,
            INTERNAL_MESSAGE,
            exc=exc,
            details={"name": type(exc).__name__, "message": str(exc)},
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HealthTrackError, healthtrack_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
