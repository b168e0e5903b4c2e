import os
import uuid
from typing import Optional
from urllib.error import URLError

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To

from config import is_dry_run
from email_providers.base import SendEmailRequest, SendEmailResult
from errors import DeliveryError
from logging_config import get_logger

logger = get_logger("icy", component="sendgrid")


class SendGridEmailProvider:
    def __init__(self, api_key: Optional[str] = None, client: Optional[SendGridAPIClient] = None):
        self.api_key = api_key or os.getenv("SENDGRID_API_KEY")
        if not self.api_key:
            raise RuntimeError("SENDGRID_API_KEY is not set")

        self.client = client or SendGridAPIClient(self.api_key)

    def send_email(self, req: SendEmailRequest) -> SendEmailResult:
        dry_run = is_dry_run()
        test_email = os.getenv("OUTREACH_TEST_EMAIL")

        to_email = req.to_email
        if dry_run:
            if not test_email:
                raise DeliveryError("OUTREACH_TEST_EMAIL must be set when OUTREACH_DRY_RUN=true")
            to_email = test_email

        mail = Mail(
            from_email=Email(req.from_email, req.from_name or None),
            to_emails=To(to_email),
            subject=req.subject,
            plain_text_content=req.body_text,
            html_content=req.body_html,
        )

        try:
            response = self.client.send(mail)
        except HTTPError as e:
            # SendGrid returns useful JSON in the body for 4xx
            body = e.body.decode("utf-8") if hasattr(e.body, "decode") else e.body
            logger.error("sendgrid_rejected", extra={"status_code": e.status_code, "body": body})
            raise DeliveryError(f"SendGrid error {e.status_code}: {body}") from e
        except (URLError, OSError) as e:
            logger.error("sendgrid_unreachable", extra={"error": str(e)})
            raise DeliveryError(f"SendGrid request failed: {e}") from e

        if response.status_code >= 300:
            raise DeliveryError(f"SendGrid error {response.status_code}")

        # SendGrid doesn't always return a message id; fall back to a local one.
        msg_id = response.headers.get("X-Message-Id") or f"sg-fallback-{uuid.uuid4()}"
        return SendEmailResult(provider="sendgrid", provider_msg_id=msg_id, dry_run=dry_run)
