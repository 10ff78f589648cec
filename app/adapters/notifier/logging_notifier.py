"""Notifier that only logs outgoing emails (development default)."""

import logging

from app.adapters.notifier.base import AbstractNotifier, EmailMessage

logger = logging.getLogger(__name__)


class LoggingNotifier(AbstractNotifier):
    """Records each email as a log event instead of delivering it."""

    def __init__(
        self,
        *,
        admin_address: str = "admin@localhost",
        from_address: str = "noreply@localhost",
        company_name: str = "Our Team",
    ) -> None:
        super().__init__(
            admin_address=admin_address,
            from_address=from_address,
            company_name=company_name,
        )
        self.sent: list[EmailMessage] = []

    async def deliver(self, message: EmailMessage) -> None:
        self.sent.append(message)
        logger.info(
            "email.logged",
            extra={
                "email": message.to,
                "subject": message.subject,
                "body_length": len(message.text),
            },
        )
