"""
Error handling middleware.

Standardizes all API error responses to include:
- error: human-readable description
- error_code: machine-readable identifier
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from second_brain.application.dto.responses import ErrorResponse
from second_brain.config import get_logger
from second_brain.core.exceptions import (
    AmbiguousTargetError,
    BrainError,
    ConfigurationError,
    CorruptRecordError,
    DatabaseError,
    DuplicateRecordError,
    InvalidActionError,
    InvalidTypeError,
    MissingIdError,
    RecordNotFoundError,
    RemoteCallFailedError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# First match wins, so subclasses come before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    InvalidTypeError: status.HTTP_400_BAD_REQUEST,
    InvalidActionError: status.HTTP_400_BAD_REQUEST,
    MissingIdError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateRecordError: status.HTTP_409_CONFLICT,
    RecordNotFoundError: status.HTTP_404_NOT_FOUND,
    CorruptRecordError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    RemoteCallFailedError: status.HTTP_502_BAD_GATEWAY,
    AmbiguousTargetError: status.HTTP_409_CONFLICT,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

HINT_MAP: dict[str, str] = {
    "INVALID_TYPE": "Use one of: tasks, notes, documents, reminders, tags.",
    "INVALID_ACTION": "Use one of the allowed actions listed in the message.",
    "MISSING_ID": "Include the record's id in the request body.",
    "VALIDATION_ERROR": "Check the request body fields and types.",
    "DUPLICATE_RECORD": "A record with this id already exists. Use action=update instead.",
    "RECORD_NOT_FOUND": "Check the id and try GET /api/data to list records.",
    "CORRUPT_RECORD": "A stored record could not be decoded. Re-sync the collection.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "REMOTE_CALL_FAILED": "The Google API call failed. Check credentials and retry.",
    "AMBIGUOUS_TARGET": "Several backup files share the name. Remove the extras in Drive.",
    "ConfigurationError": "Set the GOOGLE_* or CALENDAR_* environment variables.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with existing data.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "An upstream service failed. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standard error body."""
    status_code = status_for(exc)
    error_code = exc.code if isinstance(exc, BrainError) else exc.__class__.__name__
    message = exc.message if isinstance(exc, BrainError) else str(exc)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    body = ErrorResponse(
        error=message,
        error_code=error_code,
        hint=_get_hint(error_code, status_code),
        detail=str(exc.details) if isinstance(exc, BrainError) and exc.details else None,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches whatever the exception handlers did not.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(BrainError)
    async def brain_exception_handler(request: Request, exc: BrainError) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Request validation failed",
                error_code="VALIDATION_ERROR",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail) if exc.detail else "An error occurred",
                error_code=error_code,
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 400:
        return "BAD_REQUEST"
    return "HTTP_ERROR"
