"""Firestore submission store adapter."""

from __future__ import annotations

import logging

from google.cloud import firestore

from app.adapters.storage.base import AbstractSubmissionStore
from app.core.errors import StorageAppError
from app.schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)


class FirestoreSubmissionStore(AbstractSubmissionStore):
    """Writes each submission as a new document in a Firestore collection.

    Uses the official ``google-cloud-firestore`` async client. Credentials are
    resolved by the client library (service account, metadata server, or the
    emulator when ``FIRESTORE_EMULATOR_HOST`` is set).
    """

    def __init__(
        self,
        *,
        collection: str,
        project_id: str | None = None,
        client: firestore.AsyncClient | None = None,
    ) -> None:
        """Initialize the Firestore store.

        Args:
            collection: Collection receiving submission documents.
            project_id: Google Cloud project; inferred from the environment when None.
            client: Pre-built async client (mainly for tests).
        """
        self.client = client or firestore.AsyncClient(project=project_id)
        self.collection = collection

    async def save(self, submission: ContactSubmission) -> str:
        try:
            _, document_ref = await self.client.collection(self.collection).add(
                submission.to_document()
            )
        except Exception as exc:
            raise StorageAppError(
                code="storage_write_failed",
                message=f"Firestore write failed: {exc}",
                details={"provider": "firestore"},
            ) from exc

        logger.info(
            "storage.firestore.saved",
            extra={"document_id": document_ref.id, "collection": self.collection},
        )
        return document_ref.id
