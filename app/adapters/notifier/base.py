"""Notifier interface shared by every email provider."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from app.adapters.notifier import templates
from app.core.errors import EmailAppError


@dataclass(frozen=True)
class EmailMessage:
    """A rendered email ready for delivery."""

    to: str
    subject: str
    text: str
    html: str
    reply_to: str | None = None


class AbstractNotifier(ABC):
    """Sends the admin alert and the submitter acknowledgment.

    Subclasses implement ``deliver`` for a single message; ``send_emails``
    renders both messages and delivers them concurrently.
    """

    def __init__(self, *, admin_address: str, from_address: str, company_name: str) -> None:
        self.admin_address = admin_address
        self.from_address = from_address
        self.company_name = company_name

    @abstractmethod
    async def deliver(self, message: EmailMessage) -> None:
        """Deliver one message.

        Raises:
            EmailAppError: If the provider rejects or cannot be reached.
        """
        ...

    def build_messages(self, contact_data: dict[str, Any], document_id: str) -> list[EmailMessage]:
        admin = EmailMessage(
            to=self.admin_address,
            subject=templates.admin_subject(contact_data),
            text=templates.admin_text(contact_data, document_id),
            html=templates.admin_html(contact_data, document_id),
            reply_to=contact_data.get("email"),
        )
        acknowledgment = EmailMessage(
            to=contact_data["email"],
            subject=templates.acknowledgment_subject(self.company_name),
            text=templates.acknowledgment_text(contact_data, self.company_name),
            html=templates.acknowledgment_html(contact_data, self.company_name),
        )
        return [admin, acknowledgment]

    async def send_emails(self, contact_data: dict[str, Any], document_id: str) -> None:
        """Send both notification emails for a stored submission.

        Args:
            contact_data: Normalized contact fields (name, email, message, ...).
            document_id: Identifier returned by the submission store.

        Raises:
            EmailAppError: If delivery to either recipient fails.
        """
        messages = self.build_messages(contact_data, document_id)
        results = await asyncio.gather(
            *(self.deliver(message) for message in messages),
            return_exceptions=True,
        )

        failures = [
            (message, result)
            for message, result in zip(messages, results)
            if isinstance(result, BaseException)
        ]
        if not failures:
            return

        _, first_error = failures[0]
        if len(failures) == 1 and isinstance(first_error, EmailAppError):
            raise first_error
        raise EmailAppError(
            code="email_delivery_failed",
            message=f"{len(failures)} of {len(messages)} emails failed: {first_error}",
        ) from first_error
