import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from app.dependencies import get_shiprocket
from app.schemas import WebhookPayload
from app.services.shiprocket import ShiprocketService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])


@router.post("/webhook")
def handle_webhook(payload: dict = Body(...), service: ShiprocketService = Depends(get_shiprocket)):
    try:
        event = WebhookPayload.model_validate(payload)
    except ValidationError as e:
        # Always acknowledged; unreadable events are only logged
        logger.warning("[Webhook] Unreadable payload acknowledged: %s", e)
        return {"success": True, "message": "Webhook processed successfully"}

    system_status = service.map_status_to_system(event.current_status)
    notification = service.get_notification_type(event.current_status)

    # Nothing is persisted here; the normalized event is only logged
    logger.info(
        "[Webhook] order=%s awb=%s status=%s -> %s notify=%s scans=%d",
        event.order_id,
        event.awb_code,
        event.current_status,
        system_status,
        notification,
        len(event.scans or []),
    )
    return {"success": True, "message": "Webhook processed successfully"}


@router.get("/webhook")
def verify_webhook():
    return {
        "success": True,
        "message": "Shiprocket webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
