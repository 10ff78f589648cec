"""SendGrid notifier adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.adapters.notifier.base import AbstractNotifier, EmailMessage
from app.core.errors import EmailAppError

logger = logging.getLogger(__name__)


class SendGridNotifier(AbstractNotifier):
    """Delivers email through the SendGrid v3 ``mail/send`` endpoint.

    Talks to the REST API directly with an async httpx client.
    """

    def __init__(
        self,
        *,
        api_key: str,
        admin_address: str,
        from_address: str,
        company_name: str,
        base_url: str = "https://api.sendgrid.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the SendGrid notifier.

        Args:
            api_key: SendGrid API key for bearer authentication.
            admin_address: Staff mailbox receiving submission alerts.
            from_address: Verified sender address.
            company_name: Display name used in email copy and the From header.
            base_url: API base URL.
            timeout_seconds: Timeout for each delivery request in seconds.
            transport: Optional httpx transport (mainly for tests).
        """
        super().__init__(
            admin_address=admin_address,
            from_address=from_address,
            company_name=company_name,
        )
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.from_address, "name": self.company_name},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
        }
        if message.reply_to:
            payload["reply_to"] = {"email": message.reply_to}
        return payload

    async def deliver(self, message: EmailMessage) -> None:
        url = f"{self._base_url}/v3/mail/send"
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=self.build_payload(message), headers=headers)
        except httpx.HTTPError as exc:
            raise EmailAppError(
                code="email_transport_error",
                message=f"SendGrid request failed: {exc}",
                details={"provider": "sendgrid"},
            ) from exc

        if response.status_code >= 400:
            raise EmailAppError(
                code="email_rejected",
                message=f"SendGrid rejected email with status {response.status_code}",
                details={"provider": "sendgrid", "http_status": response.status_code},
            )

        logger.info(
            "email.sent",
            extra={
                "provider": "sendgrid",
                "subject": message.subject,
                "status_code": response.status_code,
            },
        )
