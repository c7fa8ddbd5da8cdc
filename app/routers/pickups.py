import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from app.dependencies import get_shiprocket
from app.schemas import PickupLocationRequest, Vendor
from app.services.shiprocket import ShiprocketService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pickups"])

ADMIN_PICKUP_FIELDS = ["pickup_location", "name", "email", "phone", "address", "city", "state", "country", "pin_code"]


@router.get("/pickups")
def get_pickup_locations(service: ShiprocketService = Depends(get_shiprocket)):
    return {"success": True, "data": service.get_pickup_locations()}


@router.post("/pickups")
def add_pickup_location(location: PickupLocationRequest, service: ShiprocketService = Depends(get_shiprocket)):
    logger.info("[Pickups] add %s", location.pickup_location)
    return {"success": True, "data": service.add_pickup_location(location)}


@router.post("/pickups/vendor")
def create_vendor_pickup_location(payload: dict = Body(...), service: ShiprocketService = Depends(get_shiprocket)):
    vendor = Vendor.model_validate(payload)
    logger.info("[Pickups] vendor registration for %s", vendor.name or vendor.id)
    return service.create_vendor_pickup_location(vendor)


@router.post("/pickups/vendor/update")
def update_vendor_pickup_location(payload: dict = Body(...), service: ShiprocketService = Depends(get_shiprocket)):
    vendor_data = dict(payload)
    old_location_name = vendor_data.pop("oldLocationName", None)
    vendor = Vendor.model_validate(vendor_data)
    logger.info("[Pickups] vendor update for %s (was %s)", vendor.name or vendor.id, old_location_name)
    return service.update_vendor_pickup_location(vendor, old_location_name)


def _manage(action: str | None, payload: dict, service: ShiprocketService):
    if action == "list":
        return {"success": True, "data": service.get_pickup_locations()}

    if action == "create-admin":
        if any(not payload.get(f) for f in ADMIN_PICKUP_FIELDS):
            raise HTTPException(status_code=400, detail="Missing required fields for pickup location creation")
        location = PickupLocationRequest.model_validate({**payload, "address_2": payload.get("address_2") or ""})
        return {
            "success": True,
            "message": "Pickup location created successfully",
            "data": service.add_pickup_location(location),
        }

    raise HTTPException(status_code=400, detail="Invalid action")


@router.get("/pickup-locations")
def list_pickup_locations(action: str | None = Query(None), service: ShiprocketService = Depends(get_shiprocket)):
    return _manage(action, {}, service)


@router.post("/pickup-locations")
def manage_pickup_locations(
    action: str | None = Query(None),
    payload: dict | None = Body(None),
    service: ShiprocketService = Depends(get_shiprocket),
):
    payload = payload or {}
    return _manage(action or payload.get("action"), payload, service)
