"""Contact submission pipeline.

Runs one submission through an explicit, ordered list of named stages:

    rate_limit -> validate -> build -> persist -> notify -> respond

Each stage returns a ``StageOutcome``: either continue with the next stage or
stop with a response. Admission failures (rate limit, validation) stop before
any side effect; a storage failure stops before notification; a notification
failure is logged and never changes the response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable

from app.adapters.notifier.base import AbstractNotifier
from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.sliding_window import UNKNOWN_CLIENT
from app.adapters.storage.base import AbstractSubmissionStore
from app.core.errors import AppError, EmailAppError, RateLimitAppError, StorageAppError, ValidationAppError
from app.core.rate_limit import RATE_LIMIT_MESSAGE, hash_limiter_key, rate_limit_headers
from app.core.responses import envelope_for_error, status_for_error, success_envelope
from app.schemas.contact import ApiResponse, ContactSubmission
from app.services.contact_validation import validate_contact_form
from app.services.submission_builder import RequestContext, build_submission

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you for your message. We'll get back to you soon!"
VALIDATION_FAILED_MESSAGE = "Validation failed"


@dataclass(frozen=True)
class PipelineResponse:
    """Final HTTP outcome of a pipeline run."""

    status_code: int
    body: ApiResponse
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StageOutcome:
    """Tagged result of a stage: continue, or stop with ``response``."""

    response: PipelineResponse | None = None

    @property
    def is_terminal(self) -> bool:
        return self.response is not None

    @classmethod
    def proceed(cls) -> "StageOutcome":
        return cls()

    @classmethod
    def stop(cls, response: PipelineResponse) -> "StageOutcome":
        return cls(response=response)

    @classmethod
    def fail(cls, exc: AppError, headers: dict[str, str] | None = None) -> "StageOutcome":
        return cls.stop(
            PipelineResponse(
                status_code=status_for_error(exc),
                body=envelope_for_error(exc),
                headers=headers or {},
            )
        )


@dataclass
class SubmissionState:
    """Mutable per-request state threaded through the stages."""

    payload: Any
    context: RequestContext
    data: dict[str, str] | None = None
    submission: ContactSubmission | None = None
    document_id: str | None = None


Stage = Callable[[SubmissionState], Awaitable[StageOutcome]]


class ContactPipeline:
    """Orchestrates admission, persistence and notification for one request.

    Attributes:
        limiter: Rate limiter, or None when rate limiting is disabled.
        store: Submission store adapter.
        notifier: Email notifier adapter.
    """

    def __init__(
        self,
        *,
        store: AbstractSubmissionStore,
        notifier: AbstractNotifier,
        limiter: AbstractRateLimiter | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.limiter = limiter
        self._clock = clock

    @property
    def stages(self) -> list[tuple[str, Stage]]:
        return [
            ("rate_limit", self.check_rate_limit),
            ("validate", self.validate),
            ("build", self.build),
            ("persist", self.persist),
            ("notify", self.notify),
            ("respond", self.respond),
        ]

    async def run(self, payload: Any, context: RequestContext) -> PipelineResponse:
        """Run every stage in order until one produces a response.

        Args:
            payload: Decoded request body.
            context: Client address and user agent.

        Returns:
            PipelineResponse with status code, envelope and extra headers.

        Raises:
            Exception: Unexpected errors propagate to the global error handler.
        """
        state = SubmissionState(payload=payload, context=context)

        for name, stage in self.stages:
            outcome = await stage(state)
            if outcome.is_terminal:
                logger.debug(
                    "contact.pipeline.stopped",
                    extra={"stage": name, "status_code": outcome.response.status_code},
                )
                return outcome.response  # type: ignore[return-value]

        raise RuntimeError("contact pipeline finished without a response")

    async def check_rate_limit(self, state: SubmissionState) -> StageOutcome:
        if self.limiter is None:
            return StageOutcome.proceed()

        key = state.context.ip_address or UNKNOWN_CLIENT
        result = self.limiter.check(key)
        if result.allowed:
            logger.info(
                "rate_limit.allowed",
                extra={"key_hash": hash_limiter_key(key), "remaining": result.remaining},
            )
            return StageOutcome.proceed()

        logger.warning(
            "rate_limit.exceeded",
            extra={
                "key_hash": hash_limiter_key(key),
                "limit": result.limit,
                "retry_after_s": result.retry_after_seconds,
            },
        )
        error = RateLimitAppError(
            code="rate_limit_exceeded",
            message=RATE_LIMIT_MESSAGE,
            details={"retry_after": float(result.retry_after_seconds or 0)},
        )
        return StageOutcome.fail(error, headers=rate_limit_headers(result))

    async def validate(self, state: SubmissionState) -> StageOutcome:
        result = validate_contact_form(state.payload)
        if result.is_valid:
            state.data = result.data
            return StageOutcome.proceed()

        logger.info(
            "contact.validation_failed",
            extra={"fields": [error.field for error in result.errors]},
        )
        error = ValidationAppError(
            code="validation_failed",
            message=VALIDATION_FAILED_MESSAGE,
            details={"errors": [error.model_dump() for error in result.errors]},
        )
        return StageOutcome.fail(error)

    async def build(self, state: SubmissionState) -> StageOutcome:
        now = self._clock() if self._clock else None
        state.submission = build_submission(state.data or {}, state.context, now=now)
        return StageOutcome.proceed()

    async def persist(self, state: SubmissionState) -> StageOutcome:
        try:
            state.document_id = await self.store.save(state.submission)  # type: ignore[arg-type]
        except StorageAppError as exc:
            logger.error(
                "contact.persist_failed",
                extra={"error_code": exc.code, "error_msg": exc.message},
            )
            return StageOutcome.fail(exc)

        logger.info("contact.persisted", extra={"document_id": state.document_id})
        return StageOutcome.proceed()

    async def notify(self, state: SubmissionState) -> StageOutcome:
        # Delivery problems never change the outcome of a stored submission
        try:
            await self.notifier.send_emails(state.data or {}, state.document_id or "")
        except EmailAppError as exc:
            logger.error(
                "contact.notification_failed",
                extra={
                    "document_id": state.document_id,
                    "error_code": exc.code,
                    "error_msg": exc.message,
                },
            )
        except Exception as exc:
            logger.exception(
                "contact.notification_failed",
                extra={
                    "document_id": state.document_id,
                    "error_type": type(exc).__name__,
                },
            )
        else:
            logger.info("contact.notified", extra={"document_id": state.document_id})
        return StageOutcome.proceed()

    async def respond(self, state: SubmissionState) -> StageOutcome:
        return StageOutcome.stop(
            PipelineResponse(
                status_code=200,
                body=success_envelope(SUCCESS_MESSAGE, {"id": state.document_id}),
            )
        )
