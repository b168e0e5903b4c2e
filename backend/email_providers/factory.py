import os

from config import EMAIL_PROVIDER
from email_providers.base import EmailProvider
from email_providers.disabled_provider import DisabledEmailProvider
from email_providers.sendgrid_provider import SendGridEmailProvider
from logging_config import get_logger

logger = get_logger("icy", component="email")


def get_email_provider() -> EmailProvider:
    provider = EMAIL_PROVIDER

    if provider == "sendgrid":
        if not os.getenv("SENDGRID_API_KEY"):
            logger.warning("SENDGRID_API_KEY is not set - email sending is disabled")
            return DisabledEmailProvider("SENDGRID_API_KEY is not set")
        return SendGridEmailProvider()

    raise RuntimeError(f"Unsupported EMAIL_PROVIDER: {provider}")
