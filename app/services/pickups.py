import logging

from app.config import Endpoints
from app.models import APIResult
from app.schemas import PickupLocationRequest, Vendor
from app.services.base import ShiprocketModule
from app.services.formatter import build_vendor_pickup_location, generate_location_name

logger = logging.getLogger(__name__)

# Shiprocket rejects re-registration of a disabled location with this text
INACTIVE_DUPLICATE_MARKER = "already exists and is inactive"


class ShiprocketPickups(ShiprocketModule):
    def get_all_pickup_locations(self) -> APIResult:
        return self._get(Endpoints.GET_PICKUP_LOCATIONS)

    def add_pickup_location(self, location: PickupLocationRequest) -> APIResult:
        logger.info("[Pickups] Registering pickup location %s", location.pickup_location)
        return self._post(Endpoints.ADD_PICKUP_LOCATION, location.model_dump())

    def create_vendor_pickup_location(self, vendor: Vendor) -> dict:
        location_name = generate_location_name(vendor)
        location = build_vendor_pickup_location(vendor, location_name)
        if location is None:
            return {"success": False, "error": "Vendor address not found"}

        result = self.add_pickup_location(location)
        if result.ok:
            return {"success": True, "location_name": location_name}

        details = f"{result.error.message} {result.error.raw_body or ''}"
        if INACTIVE_DUPLICATE_MARKER in details:
            logger.info("[Pickups] %s already registered (inactive), reusing it", location_name)
            return {"success": True, "location_name": location_name}

        return {"success": False, "error": result.error.message or "Failed to create pickup location"}

    def update_vendor_pickup_location(self, vendor: Vendor, old_location_name: str | None = None) -> dict:
        """
        Re-derives the vendor's location name. An unchanged name needs no
        provider call; otherwise the new location is registered.
        """
        location_name = generate_location_name(vendor)
        if old_location_name and old_location_name == location_name:
            return {"success": True, "location_name": location_name, "updated": False}

        created = self.create_vendor_pickup_location(vendor)
        if not created["success"]:
            return {**created, "updated": False}
        return {**created, "updated": True}
