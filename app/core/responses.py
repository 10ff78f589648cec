"""Response envelope helpers shared by routes, the pipeline and error handlers.

Every non-health response uses the same shape:
``{"success": bool, "message": str, "errors"?: [...], "data"?: {...}}``.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from app.core.errors import AppError, PayloadTooLargeAppError, RateLimitAppError, ValidationAppError
from app.schemas.contact import ApiResponse, FieldError

INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."
NOT_FOUND_MESSAGE = "Endpoint not found"


def success_envelope(message: str, data: dict[str, Any] | None = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def failure_envelope(message: str, errors: list[FieldError] | None = None) -> ApiResponse:
    return ApiResponse(success=False, message=message, errors=errors)


def status_for_error(exc: AppError) -> int:
    """Map a domain error to its HTTP status.

    - ValidationAppError → 400 (client fault, field detail exposed)
    - PayloadTooLargeAppError → 413
    - RateLimitAppError → 429
    - anything else (storage, email, configuration) → 500
    """
    if isinstance(exc, ValidationAppError):
        return 400
    if isinstance(exc, PayloadTooLargeAppError):
        return 413
    if isinstance(exc, RateLimitAppError):
        return 429
    return 500


def envelope_for_error(exc: AppError) -> ApiResponse:
    """Build the client-facing envelope for a domain error.

    Server-side failures get a generic message; their detail stays in logs.
    """
    status_code = status_for_error(exc)
    if status_code >= 500:
        return failure_envelope(INTERNAL_ERROR_MESSAGE)

    errors = None
    if exc.details and exc.details.get("errors"):
        errors = [FieldError(**item) for item in exc.details["errors"]]
    return failure_envelope(exc.message, errors)


def json_envelope(
    status_code: int,
    envelope: ApiResponse,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope.to_content(),
        headers=headers or None,
    )
