import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_shiprocket
from app.services.shiprocket import ShiprocketService
from app.services.tracking import format_tracking

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tracking"])


@router.get("/tracking/awb/{awb}")
def track_by_awb(awb: str, service: ShiprocketService = Depends(get_shiprocket)):
    return {"success": True, "data": service.track_order_by_awb(awb)}


@router.get("/tracking/order/{order_id}")
def track_by_order_id(order_id: int, service: ShiprocketService = Depends(get_shiprocket)):
    return {"success": True, "data": service.track_order_by_id(order_id)}


def _track(tracking_id: str, tracking_type: str, send_email: bool, service: ShiprocketService):
    if tracking_type == "awb":
        response = service.track_order_by_awb(tracking_id)
    elif tracking_type == "order":
        if not tracking_id.isdigit():
            raise HTTPException(status_code=400, detail="Order ID must be numeric")
        response = service.track_order_by_id(int(tracking_id))
    else:
        raise HTTPException(status_code=400, detail="Invalid tracking type")

    tracking = format_tracking(response)
    if tracking is None:
        raise HTTPException(status_code=404, detail="No tracking data found")

    if send_email:
        # No mailer is wired in; record what would have gone out
        logger.info(
            "[Tracking] Notification for %s: %s",
            tracking["awb_code"],
            service.get_notification_type(tracking["shipping_status"]) or "none",
        )
    return {"success": True, "tracking": tracking, "emailSent": send_email}


@router.get("/track/order/{tracking_id}")
def track_order(
    tracking_id: str,
    send_email: bool = Query(False, alias="sendEmail"),
    service: ShiprocketService = Depends(get_shiprocket),
):
    return _track(tracking_id, "order", send_email, service)


@router.get("/track/{tracking_id}")
def track(
    tracking_id: str,
    tracking_type: str = Query("order", alias="type"),
    send_email: bool = Query(False, alias="sendEmail"),
    service: ShiprocketService = Depends(get_shiprocket),
):
    return _track(tracking_id, tracking_type, send_email, service)
