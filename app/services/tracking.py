import logging
from datetime import datetime, timezone

import dateutil.parser

from app.config import Endpoints
from app.models import APIResult
from app.services.base import ShiprocketModule
from app.services.status import StatusMapper

logger = logging.getLogger(__name__)


class ShiprocketTracking(ShiprocketModule):
    def track_by_awb(self, awb_code: str) -> APIResult:
        return self._get(f"{Endpoints.TRACK_BY_AWB}/{awb_code}")

    def track_by_order_id(self, order_id: int) -> APIResult:
        return self._get(Endpoints.TRACK_BY_ORDER_ID, params={"order_id": order_id})


def parse_date(raw):
    if not raw:
        return None
    try:
        parsed = dateutil.parser.parse(str(raw))
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _tracking_data(response) -> dict:
    # order_id lookups come back as a list, some AWB lookups keyed by the AWB
    if isinstance(response, list):
        response = response[0] if response else {}
    if not isinstance(response, dict):
        return {}
    if "tracking_data" in response:
        return response.get("tracking_data") or {}
    if len(response) == 1:
        inner = next(iter(response.values()))
        if isinstance(inner, dict) and "tracking_data" in inner:
            return inner.get("tracking_data") or {}
    return {}


def sort_history(activities: list[dict]) -> list[dict]:
    """Most recent scan first; undated scans go last in reverse provider order."""
    newest_first = list(reversed(activities))
    parsed = [parse_date(a.get("date")) for a in newest_first]
    order = sorted(
        range(len(newest_first)),
        key=lambda i: (parsed[i] is None, -parsed[i].timestamp() if parsed[i] else 0),
    )
    return [newest_first[i] for i in order]


def format_tracking(response, now: datetime | None = None) -> dict | None:
    """Flattens a tracking response; None when no shipment is attached yet."""
    data = _tracking_data(response)
    shipment_tracks = data.get("shipment_track") or []
    if not shipment_tracks:
        return None

    track = shipment_tracks[0]
    history = sort_history(
        [
            {
                "status": a.get("status") or a.get("sr-status-label"),
                "activity": a.get("activity"),
                "location": a.get("location"),
                "date": a.get("date"),
                "time": a.get("time"),
            }
            for a in data.get("shipment_track_activities") or []
        ]
    )
    current_status = track.get("current_status") or data.get("shipment_status")
    return {
        "awb_code": track.get("awb_code"),
        "courier_name": track.get("courier_name") or f"Courier {track.get('courier_company_id')}",
        "shipping_status": current_status,
        "system_status": StatusMapper.map_status_to_system(current_status),
        "pickup_date": track.get("pickup_date"),
        "delivered_date": track.get("delivered_date"),
        "eta": track.get("edd"),
        "last_update": (now or datetime.now(timezone.utc)).isoformat(),
        "shipping_history": history,
        "order_id": track.get("order_id"),
        "shipment_id": track.get("shipment_id"),
        "origin": track.get("origin"),
        "destination": track.get("destination"),
        "consignee_name": track.get("consignee_name"),
    }
