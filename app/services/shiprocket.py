import logging

import requests

from app.errors import (
    ConfigurationError,
    NetworkError,
    ShiprocketError,
    TransportError,
    configuration_error,
    network_error,
)
from app.models import APIResult, ErrorInfo
from app.schemas import Customer, OrderRequest, PickupLocationRequest, RateRequest, ShippingAddress, StoreOrder, Vendor
from app.services import rates as rate_ranking
from app.services.formatter import format_order_for_shiprocket, generate_location_name
from app.services.sdk import ShiprocketSDK
from app.services.status import StatusMapper

logger = logging.getLogger(__name__)


def _unwrap(result: APIResult):
    if not result.ok:
        raise ShiprocketError.from_info(result.error)
    return result.value


class ShiprocketService:
    """
    Caller-facing facade over the SDK.

    Returns plain values and raises ShiprocketError subclasses instead of
    handing back APIResult envelopes.
    """

    def __init__(self, sdk: ShiprocketSDK, session: requests.Session | None = None):
        self.sdk = sdk
        self.settings = sdk.settings
        self.session = session or requests.Session()

    # --- Orders ---

    def create_order(self, order: OrderRequest) -> dict:
        if not order.pickup_location:
            order = order.model_copy(update={"pickup_location": self.settings.default_pickup_location})
        return _unwrap(self.sdk.orders.create_order(order))

    def create_order_with_context(
        self,
        order: OrderRequest,
        vendor: Vendor | None = None,
        custom_pickup_location: str | PickupLocationRequest | None = None,
    ) -> dict:
        """Forwards an order to the gateway backend, pinned to the right pickup location."""
        if not self.settings.backend_url:
            raise ConfigurationError(configuration_error(["SHIPROCKET_BACKEND_URL is not configured"]))

        if isinstance(custom_pickup_location, PickupLocationRequest):
            pickup_location = custom_pickup_location.pickup_location
        elif custom_pickup_location:
            pickup_location = custom_pickup_location
        elif vendor is not None:
            pickup_location = generate_location_name(vendor)
        else:
            pickup_location = order.pickup_location or self.settings.default_pickup_location
        order = order.model_copy(update={"pickup_location": pickup_location})

        url = f"{self.settings.backend_url}/shiprocket/orders"
        logger.info("[Service] Forwarding order %s to %s", order.order_id, url)
        try:
            response = self.session.post(
                url,
                json=order.to_wire(),
                headers={"Content-Type": "application/json"},
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(network_error(e))

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.ok or (isinstance(data, dict) and data.get("success") is False):
            message = (isinstance(data, dict) and (data.get("error") or data.get("message"))) or f"Request failed: {response.status_code}"
            raise TransportError(
                ErrorInfo(
                    message=message,
                    status_code=response.status_code,
                    status_text=response.reason or "",
                    raw_body=data or response.text,
                )
            )
        return data.get("data") if isinstance(data, dict) else data

    def cancel_order(self, order_ids: list[int]):
        return _unwrap(self.sdk.orders.cancel_orders(order_ids))

    def generate_pickup(self, shipment_ids: list[int]):
        return _unwrap(self.sdk.orders.generate_pickup(shipment_ids))

    def print_invoice(self, order_ids: list[str]) -> dict:
        return _unwrap(self.sdk.orders.print_invoice(order_ids))

    def format_order_for_shiprocket(
        self, order: StoreOrder, address: ShippingAddress, user: Customer, vendor: Vendor | None = None
    ) -> OrderRequest:
        return format_order_for_shiprocket(
            order, address, user, vendor, default_pickup_location=self.settings.default_pickup_location
        )

    # --- Tracking ---

    def track_order_by_awb(self, awb_code: str):
        return _unwrap(self.sdk.tracking.track_by_awb(awb_code))

    def track_order_by_id(self, order_id: int):
        return _unwrap(self.sdk.tracking.track_by_order_id(order_id))

    # --- Pickup locations ---

    def get_pickup_locations(self):
        return _unwrap(self.sdk.pickups.get_all_pickup_locations())

    def add_pickup_location(self, location: PickupLocationRequest):
        return _unwrap(self.sdk.pickups.add_pickup_location(location))

    def create_vendor_pickup_location(self, vendor: Vendor) -> dict:
        return self.sdk.pickups.create_vendor_pickup_location(vendor)

    def update_vendor_pickup_location(self, vendor: Vendor, old_location_name: str | None = None) -> dict:
        return self.sdk.pickups.update_vendor_pickup_location(vendor, old_location_name)

    # --- Rates ---

    def calculate_shipping_rates(self, rate_request: RateRequest) -> dict:
        return _unwrap(self.sdk.rates.calculate_rates(rate_request))

    def get_cheapest_rate(self, rates: list[dict]) -> dict | None:
        return rate_ranking.get_cheapest_rate(rates)

    def get_fastest_rate(self, rates: list[dict]) -> dict | None:
        return rate_ranking.get_fastest_rate(rates)

    # --- Status / auth ---

    def map_status_to_system(self, shiprocket_status: str) -> str:
        return StatusMapper.map_status_to_system(shiprocket_status)

    def should_notify_user(self, shiprocket_status: str) -> bool:
        return StatusMapper.should_notify_user(shiprocket_status)

    def get_notification_type(self, shiprocket_status: str) -> str | None:
        return StatusMapper.get_notification_type(shiprocket_status)

    def is_authenticated(self) -> bool:
        return self.sdk.is_authenticated()

    def get_token_info(self) -> dict:
        return self.sdk.get_token_info()
