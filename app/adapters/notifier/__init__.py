"""Notifier adapters - abstracts over delivery providers."""

from app.adapters.notifier.base import AbstractNotifier, EmailMessage
from app.adapters.notifier.factory import create_notifier
from app.adapters.notifier.logging_notifier import LoggingNotifier
from app.adapters.notifier.sendgrid_client import SendGridNotifier

__all__ = [
    "AbstractNotifier",
    "EmailMessage",
    "LoggingNotifier",
    "SendGridNotifier",
    "create_notifier",
]
