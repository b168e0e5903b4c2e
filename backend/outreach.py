"""
Outreach message lifecycle: AI draft generation and delivery.

Drafts are created with status "draft". Sending moves a message to "sent"
exactly once; a repeated send for the same message id is a no-op that
reports the first recipient.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from config import OUTREACH_DEFAULT_USER_ID, OUTREACH_FROM_EMAIL, OUTREACH_FROM_NAME
from email_providers.base import EmailProvider, SendEmailRequest, text_to_html
from errors import NotFoundError
from llm import CompleteFn, generate_outreach_message, generate_subject_line
from logging_config import get_logger
from models import Campaign, Influencer, OutreachMessage, User
from storage import RecordStore

logger = get_logger("icy", component="outreach")


@dataclass
class GeneratedMessage:
    message_id: UUID
    subject: str
    content: str
    influencer: Influencer


@dataclass
class SendOutcome:
    sent_to: str
    already_sent: bool = False


def influencer_prompt_fields(inf: Influencer) -> Dict[str, Any]:
    return {
        "name": inf.name,
        "handle": inf.handle,
        "category": inf.category,
        "platform": inf.platform,
        "followers": inf.followers,
        "recent_content": inf.recent_content or [],
    }


class MessageGenerator:
    def __init__(
        self,
        store: RecordStore,
        complete_fn: Optional[CompleteFn] = None,
        default_user_id: Optional[str] = OUTREACH_DEFAULT_USER_ID,
    ):
        self.store = store
        self.complete_fn = complete_fn
        self.default_user_id = default_user_id

    def _resolve_user(self, user_id: Optional[UUID]) -> User:
        candidate = user_id or self.default_user_id
        if not candidate:
            raise NotFoundError("User")
        if not isinstance(candidate, UUID):
            try:
                candidate = UUID(str(candidate))
            except ValueError:
                raise NotFoundError("User", str(candidate))
        user = self.store.get(User, candidate)
        if user is None:
            raise NotFoundError("User", str(candidate))
        return user

    def generate(
        self,
        influencer_id: UUID,
        user_id: Optional[UUID] = None,
        brand_name: Optional[str] = None,
        brand_description: Optional[str] = None,
        campaign_id: Optional[UUID] = None,
    ) -> GeneratedMessage:
        influencer = self.store.get(Influencer, influencer_id)
        if influencer is None:
            raise NotFoundError("Influencer", str(influencer_id))

        # Fail before spending a provider call.
        owner = self._resolve_user(user_id)
        if campaign_id is not None and self.store.get(Campaign, campaign_id) is None:
            raise NotFoundError("Campaign", str(campaign_id))

        fields = influencer_prompt_fields(influencer)
        content = generate_outreach_message(
            influencer=fields,
            brand_name=brand_name,
            brand_description=brand_description,
            complete_fn=self.complete_fn,
        )
        subject = generate_subject_line(
            influencer_name=influencer.name,
            category=influencer.category,
            complete_fn=self.complete_fn,
        )

        msg = self.store.create(
            OutreachMessage,
            subject=subject,
            content=content,
            influencer_id=influencer.id,
            campaign_id=campaign_id,
            user_id=owner.id,
            status="draft",
            email_used=influencer.email or "",
            ai_generated=True,
        )

        logger.info(
            "Draft created",
            extra={"message_id": msg.id, "influencer_id": influencer.id, "user_id": str(owner.id)},
        )
        return GeneratedMessage(message_id=msg.id, subject=subject, content=content, influencer=influencer)


class OutreachSender:
    def __init__(
        self,
        store: RecordStore,
        provider: EmailProvider,
        default_from_email: str = OUTREACH_FROM_EMAIL,
        from_name: Optional[str] = OUTREACH_FROM_NAME,
    ):
        self.store = store
        self.provider = provider
        self.default_from_email = default_from_email
        self.from_name = from_name

    def send(
        self,
        message_id: UUID,
        to_email: str,
        from_email: Optional[str] = None,
        subject: Optional[str] = None,
        content: Optional[str] = None,
    ) -> SendOutcome:
        """
        Delivers a draft. Optional subject/content replace the stored draft
        text and are persisted together with the "sent" transition.

        Raises NotFoundError for an unknown id and DeliveryError when the
        provider rejects the send. No retries.
        """
        msg = self.store.get(OutreachMessage, message_id)
        if msg is None:
            raise NotFoundError("Message", str(message_id))

        if msg.status != "draft":
            logger.info(
                "send_skipped_already_sent",
                extra={"message_id": msg.id, "status": msg.status},
            )
            return SendOutcome(sent_to=msg.email_used or to_email, already_sent=True)

        final_subject = subject if subject is not None else msg.subject
        final_content = content if content is not None else msg.content

        result = self.provider.send_email(
            SendEmailRequest(
                to_email=to_email,
                subject=final_subject,
                body_text=final_content,
                body_html=text_to_html(final_content),
                from_email=from_email or self.default_from_email,
                from_name=self.from_name,
            )
        )

        self.store.mark_message_sent(
            msg.id,
            sent_at=datetime.utcnow(),
            email_used=to_email,
            subject=subject,
            content=content,
        )

        logger.info(
            "Message sent",
            extra={
                "message_id": msg.id,
                "influencer_id": msg.influencer_id,
                "provider": result.provider,
                "provider_msg_id": result.provider_msg_id,
                "dry_run": result.dry_run,
            },
        )
        return SendOutcome(sent_to=to_email)
