from abc import ABC, abstractmethod

from app.schemas.contact import ContactSubmission


class AbstractSubmissionStore(ABC):
    """Interface for durable storage of contact submissions."""

    @abstractmethod
    async def save(self, submission: ContactSubmission) -> str:
        """Persist a submission as a new document.

        Implementations make a single attempt; retries, if any, belong to the
        backend client.

        Args:
            submission: Fully built, immutable submission.

        Returns:
            str: Unique identifier of the stored document.

        Raises:
            StorageAppError: If the backend fails to store the document.
        """
        ...
