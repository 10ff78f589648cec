"""Factory pattern for creating notifier instances."""

from app.adapters.notifier.base import AbstractNotifier
from app.adapters.notifier.logging_notifier import LoggingNotifier
from app.adapters.notifier.sendgrid_client import SendGridNotifier
from app.core.config import settings
from app.core.errors import ConfigurationAppError


def create_notifier() -> AbstractNotifier:
    """Instantiate the notifier selected by ``EMAIL_PROVIDER``.

    Validates provider-specific requirements and routes to the right client.

    Returns:
        AbstractNotifier: Configured notifier instance.

    Raises:
        ConfigurationAppError: If provider-specific requirements are not met.
    """
    cfg = settings.email
    provider = cfg.provider.lower()

    if provider == "log":
        return LoggingNotifier(
            admin_address=cfg.admin_address or "admin@localhost",
            from_address=cfg.from_address or "noreply@localhost",
            company_name=cfg.company_name,
        )

    if provider == "sendgrid":
        if not cfg.sendgrid_api_key:
            raise ConfigurationAppError(
                code="email_missing_api_key",
                message="SendGrid provider requires EMAIL_SENDGRID_API_KEY environment variable",
            )
        if not cfg.admin_address or not cfg.from_address:
            raise ConfigurationAppError(
                code="email_missing_addresses",
                message="SendGrid provider requires EMAIL_ADMIN_ADDRESS and EMAIL_FROM_ADDRESS",
            )
        return SendGridNotifier(
            api_key=cfg.sendgrid_api_key,
            admin_address=cfg.admin_address,
            from_address=cfg.from_address,
            company_name=cfg.company_name,
            base_url=cfg.sendgrid_base_url,
            timeout_seconds=cfg.timeout_seconds,
        )

    raise ConfigurationAppError(
        code="email_unknown_provider",
        message=f"Unknown email provider: '{provider}'. Supported providers: log, sendgrid",
    )
