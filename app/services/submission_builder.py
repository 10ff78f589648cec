"""Builds stored submissions from validated contact data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping

from app.schemas.contact import ContactSubmission, SubmissionMetadata, SubmissionStatus

SUBMISSION_SOURCE = "api"
UNKNOWN_IP = "unknown"
UNKNOWN_USER_AGENT = "Unknown"


@dataclass(frozen=True)
class RequestContext:
    """Server-observed facts about the incoming request."""

    ip_address: str | None = None
    user_agent: str | None = None


def build_submission(
    data: Mapping[str, str],
    context: RequestContext,
    *,
    now: datetime | None = None,
) -> ContactSubmission:
    """Enrich validated contact data with request metadata.

    Args:
        data: Normalized fields returned by the validator.
        context: Client address and user agent for this request.
        now: Creation time; defaults to the current UTC time.

    Returns:
        ContactSubmission with status ``new``.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return ContactSubmission(
        **data,
        timestamp=timestamp,
        metadata=SubmissionMetadata(
            ip_address=context.ip_address or UNKNOWN_IP,
            user_agent=context.user_agent or UNKNOWN_USER_AGENT,
            source=SUBMISSION_SOURCE,
        ),
        status=SubmissionStatus.NEW,
    )
