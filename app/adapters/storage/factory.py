"""Factory pattern for creating submission store instances."""

from app.adapters.storage.base import AbstractSubmissionStore
from app.adapters.storage.in_memory import InMemorySubmissionStore
from app.core.config import settings
from app.core.errors import ConfigurationAppError


def create_submission_store() -> AbstractSubmissionStore:
    """Instantiate the submission store selected by ``STORAGE_PROVIDER``.

    Returns:
        AbstractSubmissionStore: Configured store instance.

    Raises:
        ConfigurationAppError: If the provider is unknown.
    """
    provider = settings.storage.provider.lower()

    if provider == "memory":
        return InMemorySubmissionStore()

    if provider == "firestore":
        # Firestore client is only imported when selected
        from app.adapters.storage.firestore_store import FirestoreSubmissionStore

        return FirestoreSubmissionStore(
            collection=settings.storage.collection,
            project_id=settings.storage.gcp_project_id,
        )

    raise ConfigurationAppError(
        code="storage_unknown_provider",
        message=(
            f"Unknown storage provider: '{provider}'. Supported providers: memory, firestore"
        ),
    )
