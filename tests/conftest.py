"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the adapters to their in-process implementations before any app
module reads settings.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("STORAGE_PROVIDER", "memory")
os.environ.setdefault("EMAIL_PROVIDER", "log")
os.environ.setdefault("EMAIL_ADMIN_ADDRESS", "admin@example.com")
os.environ.setdefault("EMAIL_FROM_ADDRESS", "noreply@example.com")
os.environ.setdefault("EMAIL_COMPANY_NAME", "Acme")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.adapters.notifier.logging_notifier import LoggingNotifier
from app.adapters.storage.in_memory import InMemorySubmissionStore
from app.api.dependencies import get_notifier, get_submission_store
from app.core.rate_limit import clear_rate_limit
from app.main import app


@pytest.fixture(autouse=True)
def _reset_rate_limit() -> Iterator[None]:
    """Every test starts with an empty rate limit window."""
    clear_rate_limit()
    yield
    clear_rate_limit()


@pytest.fixture
def store() -> InMemorySubmissionStore:
    return InMemorySubmissionStore()


@pytest.fixture
def notifier() -> LoggingNotifier:
    return LoggingNotifier(
        admin_address="admin@example.com",
        from_address="noreply@example.com",
        company_name="Acme",
    )


@pytest.fixture
def client(store: InMemorySubmissionStore, notifier: LoggingNotifier) -> Iterator[TestClient]:
    """Test client wired to the fixture store and notifier."""
    app.dependency_overrides[get_submission_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "message": "I would like to know more about your services.",
    }
