"""Process-local submission store for development and tests."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any

from app.adapters.storage.base import AbstractSubmissionStore
from app.schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)


class InMemorySubmissionStore(AbstractSubmissionStore):
    """Keeps submission documents in a dict keyed by a random hex id.

    Documents are stored in their serialized form, exactly as a document
    database would receive them.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._documents: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    async def save(self, submission: ContactSubmission) -> str:
        document_id = uuid.uuid4().hex
        with self._lock:
            self._documents[document_id] = submission.to_document()

        logger.debug(
            "storage.memory.saved",
            extra={"document_id": document_id, "size": len(self._documents)},
        )
        return document_id

    def get(self, document_id: str) -> dict[str, Any] | None:
        """Return a copy of the stored document, or None if unknown."""
        with self._lock:
            document = self._documents.get(document_id)
            return dict(document) if document is not None else None

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()
