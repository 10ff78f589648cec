"""Submission store adapters - abstracts over document stores."""

from app.adapters.storage.base import AbstractSubmissionStore
from app.adapters.storage.factory import create_submission_store
from app.adapters.storage.in_memory import InMemorySubmissionStore

__all__ = [
    "AbstractSubmissionStore",
    "InMemorySubmissionStore",
    "create_submission_store",
]
