"""FastAPI dependencies wiring adapters into the contact pipeline.

Adapters are built once per process from settings. Tests replace them with
``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from app.adapters.notifier.base import AbstractNotifier
from app.adapters.notifier.factory import create_notifier
from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.storage.base import AbstractSubmissionStore
from app.adapters.storage.factory import create_submission_store
from app.core.rate_limit import get_optional_rate_limiter
from app.services.contact_pipeline import ContactPipeline


@lru_cache(maxsize=1)
def get_submission_store() -> AbstractSubmissionStore:
    return create_submission_store()


@lru_cache(maxsize=1)
def get_notifier() -> AbstractNotifier:
    return create_notifier()


def get_contact_pipeline(
    store: AbstractSubmissionStore = Depends(get_submission_store),
    notifier: AbstractNotifier = Depends(get_notifier),
    limiter: AbstractRateLimiter | None = Depends(get_optional_rate_limiter),
) -> ContactPipeline:
    """Assemble the pipeline for one request from the shared adapters."""
    return ContactPipeline(store=store, notifier=notifier, limiter=limiter)
