from email_providers.base import SendEmailRequest, SendEmailResult
from errors import DeliveryError


class DisabledEmailProvider:
    """Stands in when SENDGRID_API_KEY is missing: the app starts, sends fail."""

    def __init__(self, reason: str):
        self.reason = reason

    def send_email(self, req: SendEmailRequest) -> SendEmailResult:
        raise DeliveryError(f"Email sending is disabled: {self.reason}")
