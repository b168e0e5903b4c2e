from fastapi import APIRouter, Depends, HTTPException
from uuid import UUID

from deps import get_generator, get_sender, get_store
from models import OutreachMessage
from outreach import MessageGenerator, OutreachSender
from schemas import (
    GenerateMessageRequest,
    GenerateMessageResponse,
    InfluencerSummary,
    MessageOut,
    SendMessageRequest,
    SendMessageResponse,
)
from storage import RecordStore

router = APIRouter()


@router.post("/generate-message", response_model=GenerateMessageResponse)
def generate_message(payload: GenerateMessageRequest, generator: MessageGenerator = Depends(get_generator)):
    """
    Drafts an AI outreach email for an influencer and stores it as a draft.
    The caller may edit the text before sending it through /send-message.
    """
    draft = generator.generate(
        influencer_id=payload.influencer_id,
        user_id=payload.user_id,
        brand_name=payload.brand_name,
        brand_description=payload.brand_description,
        campaign_id=payload.campaign_id,
    )
    return GenerateMessageResponse(
        message_id=draft.message_id,
        subject=draft.subject,
        content=draft.content,
        influencer=InfluencerSummary.model_validate(draft.influencer),
    )


@router.post("/send-message", response_model=SendMessageResponse)
def send_message(payload: SendMessageRequest, sender: OutreachSender = Depends(get_sender)):
    """
    Sends a draft via the configured email provider.
    Repeating the call for an already-sent message does not send it again.
    """
    outcome = sender.send(
        message_id=payload.message_id,
        to_email=payload.to_email,
        from_email=payload.from_email,
        subject=payload.subject,
        content=payload.content,
    )
    message = (
        "Outreach message was already sent"
        if outcome.already_sent else
        "Outreach message sent successfully"
    )
    return SendMessageResponse(success=True, message=message, sent_to=outcome.sent_to)


@router.get("/messages/{message_id}", response_model=MessageOut)
def get_message(message_id: UUID, store: RecordStore = Depends(get_store)):
    msg = store.get(OutreachMessage, message_id)
    if not msg:
        raise HTTPException(status_code=404, detail="Message not found")
    return msg
