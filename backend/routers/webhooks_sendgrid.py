from fastapi import APIRouter, HTTPException, Request

from logging_config import get_logger

logger = get_logger("icy", component="webhooks")

router = APIRouter(prefix="/webhooks/sendgrid", tags=["webhooks"])

@router.post("/events")
async def delivery_events(request: Request):
    """
    SendGrid Event Webhook receiver.

    Messages only ever reach "sent" today. Delivered/opened/replied need a
    way to map SendGrid events back to outreach messages (custom_args on
    send), which does not exist yet, so events are logged and refused.
    """
    try:
        events = await request.json()
    except ValueError:
        events = []

    logger.info(
        "sendgrid_events_ignored",
        extra={"count": len(events) if isinstance(events, list) else 1},
    )
    raise HTTPException(status_code=501, detail="Delivery status tracking is not wired yet")
