"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain, framework and unexpected) and return the standard response envelope
``{"success": false, "message": ...}`` with the proper HTTP status code.

Design:
- AppError subclasses → 400 / 429 / 500 (see ``status_for_error``)
- Framework HTTP errors → 404 "Endpoint not found" for unknown routes/methods
- Unexpected Exception → generic 500 (safety net, no details leaked)
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError
from app.core.logging import get_request_id
from app.core.responses import (
    NOT_FOUND_MESSAGE,
    envelope_for_error,
    failure_envelope,
    json_envelope,
    status_for_error,
)

logger = logging.getLogger(__name__)

UNHANDLED_ERROR_MESSAGE = "Internal server error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with the standard envelope.

    Client faults keep their message (and field errors for validation);
    server faults are reduced to a generic message and logged in full.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and envelope.
    """
    status_code = status_for_error(exc)

    logger.log(
        logging.ERROR if status_code >= 500 else logging.WARNING,
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_msg": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return json_envelope(status_code, envelope_for_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Map framework HTTP errors onto the envelope.

    Unknown paths and unsupported methods on known paths are both reported
    as 404 "Endpoint not found".
    """
    if exc.status_code in (404, 405):
        logger.info(
            "route_not_found",
            extra={"request_path": request.url.path, "request_method": request.method},
        )
        return json_envelope(404, failure_envelope(NOT_FOUND_MESSAGE))

    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return json_envelope(exc.status_code, failure_envelope(message), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Requests FastAPI itself rejects are reported as malformed bodies."""
    logger.warning(
        "request_validation_failed",
        extra={"request_path": request.url.path, "error_count": len(exc.errors())},
    )
    return json_envelope(400, failure_envelope("Invalid request body"))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Catches any exception not handled by specific handlers.
    Logs detailed information for debugging while returning generic message.
    Prevents information leakage (no stack traces to client).

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error (no implementation details leaked).
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return json_envelope(500, failure_envelope(UNHANDLED_ERROR_MESSAGE))


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from app.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
        >>> # Now all errors are handled consistently
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
