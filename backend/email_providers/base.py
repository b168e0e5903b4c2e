import html
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class SendEmailRequest:
    to_email: str
    subject: str
    body_text: str
    from_email: str
    body_html: Optional[str] = None
    from_name: Optional[str] = None


@dataclass
class SendEmailResult:
    provider: str
    provider_msg_id: str
    dry_run: bool


class EmailProvider(Protocol):
    def send_email(self, req: SendEmailRequest) -> SendEmailResult:
        ...


def text_to_html(text: str) -> str:
    return html.escape(text or "", quote=False).replace("\n", "<br>")
