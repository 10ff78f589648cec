"""Unit tests for the contact pipeline stages and their sequencing."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.adapters.notifier.base import AbstractNotifier
from app.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from app.adapters.storage.base import AbstractSubmissionStore
from app.adapters.storage.in_memory import InMemorySubmissionStore
from app.core.errors import EmailAppError, StorageAppError
from app.services.contact_pipeline import (
    SUCCESS_MESSAGE,
    ContactPipeline,
    StageOutcome,
)
from app.services.submission_builder import RequestContext

CONTEXT = RequestContext(ip_address="198.51.100.4", user_agent="pytest")
FIXED_NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_notifier() -> MagicMock:
    notifier = MagicMock(spec=AbstractNotifier)
    notifier.send_emails = AsyncMock(return_value=None)
    return notifier


@pytest.fixture
def memory_store() -> InMemorySubmissionStore:
    return InMemorySubmissionStore()


def _pipeline(store, notifier, limiter=None) -> ContactPipeline:
    return ContactPipeline(store=store, notifier=notifier, limiter=limiter, clock=lambda: FIXED_NOW)


def test_stages_run_in_declared_order(memory_store, mock_notifier) -> None:
    pipeline = _pipeline(memory_store, mock_notifier)

    assert [name for name, _ in pipeline.stages] == [
        "rate_limit",
        "validate",
        "build",
        "persist",
        "notify",
        "respond",
    ]


def test_stage_outcome_tags() -> None:
    assert StageOutcome.proceed().is_terminal is False


@pytest.mark.asyncio
async def test_success_persists_then_notifies(memory_store, mock_notifier) -> None:
    pipeline = _pipeline(memory_store, mock_notifier)

    result = await pipeline.run({"name": "A", "email": "a@b.com", "message": "hi"}, CONTEXT)

    assert result.status_code == 200
    assert result.body.success is True
    assert result.body.message == SUCCESS_MESSAGE
    document_id = result.body.data["id"]

    stored = memory_store.get(document_id)
    assert stored["status"] == "new"
    assert stored["timestamp"] == FIXED_NOW.isoformat()
    assert stored["metadata"] == {
        "ip_address": "198.51.100.4",
        "user_agent": "pytest",
        "source": "api",
    }
    mock_notifier.send_emails.assert_awaited_once_with(
        {"name": "A", "email": "a@b.com", "message": "hi"}, document_id
    )


@pytest.mark.asyncio
async def test_validation_failure_has_no_side_effects(memory_store, mock_notifier) -> None:
    pipeline = _pipeline(memory_store, mock_notifier)

    result = await pipeline.run({"name": "", "email": "bad", "message": ""}, CONTEXT)

    assert result.status_code == 400
    assert result.body.message == "Validation failed"
    assert [error.field for error in result.body.errors] == ["name", "email", "message"]
    assert result.body.data is None
    assert len(memory_store) == 0
    mock_notifier.send_emails.assert_not_awaited()


@pytest.mark.asyncio
async def test_rate_limited_request_stops_before_validation(memory_store, mock_notifier) -> None:
    limiter = SlidingWindowRateLimiter(limit=1, window_seconds=900, clock=lambda: 1000.0)
    pipeline = _pipeline(memory_store, mock_notifier, limiter)
    payload = {"name": "A", "email": "a@b.com", "message": "hi"}

    assert (await pipeline.run(payload, CONTEXT)).status_code == 200
    blocked = await pipeline.run(payload, CONTEXT)

    assert blocked.status_code == 429
    assert blocked.body.success is False
    assert blocked.body.message == "Too many requests. Please try again later."
    assert blocked.body.errors is None
    assert blocked.headers["Retry-After"] == "900"
    assert len(memory_store) == 1


@pytest.mark.asyncio
async def test_invalid_requests_still_count_against_rate_limit(memory_store, mock_notifier) -> None:
    limiter = SlidingWindowRateLimiter(limit=2, window_seconds=900, clock=lambda: 1000.0)
    pipeline = _pipeline(memory_store, mock_notifier, limiter)

    assert (await pipeline.run({}, CONTEXT)).status_code == 400
    assert (await pipeline.run({}, CONTEXT)).status_code == 400
    assert (await pipeline.run({}, CONTEXT)).status_code == 429


@pytest.mark.asyncio
async def test_storage_failure_skips_notification(mock_notifier) -> None:
    store = MagicMock(spec=AbstractSubmissionStore)
    store.save = AsyncMock(
        side_effect=StorageAppError(code="storage_write_failed", message="disk on fire at /var/db")
    )
    pipeline = _pipeline(store, mock_notifier)

    result = await pipeline.run({"name": "A", "email": "a@b.com", "message": "hi"}, CONTEXT)

    assert result.status_code == 500
    assert result.body.success is False
    assert result.body.message == "Internal server error. Please try again later."
    assert "disk" not in result.body.model_dump_json()
    mock_notifier.send_emails.assert_not_awaited()


@pytest.mark.asyncio
async def test_unexpected_storage_exception_propagates(mock_notifier) -> None:
    store = MagicMock(spec=AbstractSubmissionStore)
    store.save = AsyncMock(side_effect=RuntimeError("boom"))
    pipeline = _pipeline(store, mock_notifier)

    with pytest.raises(RuntimeError):
        await pipeline.run({"name": "A", "email": "a@b.com", "message": "hi"}, CONTEXT)

    mock_notifier.send_emails.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        EmailAppError(code="email_rejected", message="SendGrid rejected email with status 401"),
        RuntimeError("network unreachable"),
    ],
)
async def test_notification_failure_keeps_success(memory_store, mock_notifier, failure) -> None:
    mock_notifier.send_emails.side_effect = failure
    pipeline = _pipeline(memory_store, mock_notifier)

    result = await pipeline.run({"name": "A", "email": "a@b.com", "message": "hi"}, CONTEXT)

    assert result.status_code == 200
    assert result.body.data["id"]
    assert memory_store.get(result.body.data["id"]) is not None


@pytest.mark.asyncio
async def test_unknown_fields_never_reach_the_store(memory_store, mock_notifier) -> None:
    pipeline = _pipeline(memory_store, mock_notifier)
    payload = {
        "name": "A",
        "email": "a@b.com",
        "message": "hi",
        "status": "archived",
        "metadata": {"ip_address": "spoofed"},
    }

    result = await pipeline.run(payload, CONTEXT)

    stored = memory_store.get(result.body.data["id"])
    assert stored["status"] == "new"
    assert stored["metadata"]["ip_address"] == "198.51.100.4"


@pytest.mark.asyncio
async def test_disabled_limiter_admits_everything(memory_store, mock_notifier) -> None:
    pipeline = _pipeline(memory_store, mock_notifier, limiter=None)
    payload = {"name": "A", "email": "a@b.com", "message": "hi"}

    statuses = [(await pipeline.run(payload, CONTEXT)).status_code for _ in range(10)]

    assert statuses == [200] * 10
