import logging

from app.config import Endpoints
from app.models import APIResult
from app.schemas import OrderRequest
from app.services.base import ShiprocketModule

logger = logging.getLogger(__name__)


class ShiprocketOrders(ShiprocketModule):
    def create_order(self, order: OrderRequest) -> APIResult:
        logger.info("[Orders] Creating adhoc order %s at %s", order.order_id, order.pickup_location)
        return self._post(Endpoints.CREATE_ORDER, order.to_wire())

    def cancel_orders(self, order_ids: list[int]) -> APIResult:
        logger.info("[Orders] Cancelling %d order(s)", len(order_ids))
        return self._post(Endpoints.CANCEL_ORDER, {"ids": list(order_ids)})

    def generate_pickup(self, shipment_ids: list[int]) -> APIResult:
        """Asks the assigned courier to pick up the given shipments."""
        return self._post(Endpoints.GENERATE_PICKUP, {"shipment_id": list(shipment_ids)})

    def print_invoice(self, order_ids: list[str]) -> APIResult:
        logger.info("[Orders] Generating invoice for %s", order_ids)
        return self._post(Endpoints.PRINT_INVOICE, {"ids": [str(i) for i in order_ids]})
