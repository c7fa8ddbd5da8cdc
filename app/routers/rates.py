import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from app.dependencies import get_shiprocket
from app.schemas import RateRequest
from app.services.shiprocket import ShiprocketService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rates"])


def _whole(value, default: int) -> int:
    if value is None or value == "":
        return default
    return int(float(value))


def _rate_request(payload: dict) -> RateRequest:
    try:
        return RateRequest(
            pickup_postcode=str(payload["pickup_postcode"]),
            delivery_postcode=str(payload["delivery_postcode"]),
            weight=float(payload["weight"]),
            length=_whole(payload.get("length"), 10),
            breadth=_whole(payload.get("breadth"), 10),
            height=_whole(payload.get("height"), 10),
            cod=_whole(payload.get("cod"), 0),
            declared_value=float(payload.get("declared_value") or 100),
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid rate parameters: {e}")


@router.post("/rates/calculate")
def calculate_rates(payload: dict = Body(...), service: ShiprocketService = Depends(get_shiprocket)):
    if not payload.get("pickup_postcode") or not payload.get("delivery_postcode") or not payload.get("weight"):
        raise HTTPException(
            status_code=400,
            detail="Missing required parameters: pickup_postcode, delivery_postcode, weight",
        )

    rate_request = _rate_request(payload)
    logger.info("[Rates] calculate %s", rate_request.model_dump())
    return {"success": True, "data": service.calculate_shipping_rates(rate_request)}
