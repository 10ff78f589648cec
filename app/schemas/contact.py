"""Pydantic schemas for contact submissions and API envelopes."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmissionStatus(str, Enum):
    """Lifecycle of a submission once it reaches staff."""

    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str = Field(..., description="Name of the offending input field.")
    message: str = Field(..., description="Human-readable explanation.")


class SubmissionMetadata(BaseModel):
    """Server-observed facts about the request that produced a submission."""

    model_config = ConfigDict(frozen=True)

    ip_address: str = Field(..., description="Best-effort client address.")
    user_agent: str = Field(..., description="User-Agent header value.")
    source: str = Field(..., description="Ingress channel identifier.")


class ContactSubmission(BaseModel):
    """A validated contact-form entry plus server-added metadata.

    Instances are immutable: the record handed to the store is exactly the
    record that was built after validation.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    message: str
    phone: str | None = None
    company: str | None = None
    timestamp: str = Field(..., description="Creation time in ISO-8601 (UTC).")
    metadata: SubmissionMetadata
    status: SubmissionStatus = SubmissionStatus.NEW

    def to_document(self) -> dict[str, Any]:
        """Serialize to a plain JSON-compatible dict for document stores."""
        return self.model_dump(mode="json", exclude_none=True)


class ApiResponse(BaseModel):
    """Response envelope shared by every endpoint except health."""

    success: bool
    message: str
    errors: list[FieldError] | None = None
    data: dict[str, Any] | None = None

    def to_content(self) -> dict[str, Any]:
        # Optional keys are omitted rather than sent as null
        return self.model_dump(mode="json", exclude_none=True)


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field("healthy", description="Always 'healthy' when serving.")
    timestamp: str = Field(..., description="Current server time in ISO-8601.")
    version: str = Field(..., description="Deployed service version.")
