"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class FieldErrorDetail(TypedDict):
    """A single field-level validation problem exposed to clients."""

    field: str
    message: str


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep backward compatibility while encouraging
    consistent shapes across the codebase.
    """

    code: str
    message: str
    hint: str
    http_status: int
    retry_after: float
    max_bytes: int
    provider: str
    errors: list[FieldErrorDetail]
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client input is malformed or fails validation."""


class RateLimitAppError(AppError):
    """Raised when a client exceeds its submission budget."""


class PayloadTooLargeAppError(AppError):
    """Raised when a request body exceeds the configured size limit."""


class StorageAppError(AppError):
    """Raised when the submission store fails to persist a record."""


class EmailAppError(AppError):
    """Raised when a notification email cannot be delivered."""


class ConfigurationAppError(AppError):
    """Raised when an adapter is selected without the settings it needs."""
