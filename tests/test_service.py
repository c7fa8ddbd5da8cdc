from unittest.mock import MagicMock

import pytest
import requests

from app.config import Endpoints, ShiprocketSettings
from app.errors import ConfigurationError, NetworkError, ShiprocketError, TransportError
from app.models import APIResult, ErrorInfo
from app.schemas import OrderRequest, PickupLocationRequest, Vendor
from app.services.sdk import ShiprocketSDK
from app.services.shiprocket import ShiprocketService


def _backend_response(status_code=200, json_body=None, reason="OK"):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.text = ""
    response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def order(order_payload):
    return OrderRequest.model_validate(order_payload)


def test_create_order_posts_wire_payload(service, transport, order):
    created = {"order_id": 281248157, "shipment_id": 280640788, "status": "NEW"}
    transport.respond("POST", Endpoints.CREATE_ORDER, APIResult.success(created))

    assert service.create_order(order) == created
    [call] = transport.calls_to(Endpoints.CREATE_ORDER)
    assert call.body["order_items"][0] == {"name": "Mug", "sku": "MUG-1", "units": 2, "selling_price": 250}
    assert "billing_address_2" not in call.body


def test_create_order_defaults_empty_pickup_location(service, transport, order):
    transport.respond("POST", Endpoints.CREATE_ORDER, APIResult.success({}))

    service.create_order(order.model_copy(update={"pickup_location": ""}))

    assert transport.calls_to(Endpoints.CREATE_ORDER)[0].body["pickup_location"] == "Primary"


def test_provider_failure_is_raised_as_shiprocket_error(service, transport, order):
    error = ErrorInfo("API Error: 400 Bad Request", 400, "Bad Request", '{"message":"Invalid pincode"}')
    transport.respond("POST", Endpoints.CREATE_ORDER, APIResult.failure(error))

    with pytest.raises(ShiprocketError) as exc_info:
        service.create_order(order)

    assert exc_info.value.info == error
    assert exc_info.value.status_code == 400


def test_with_context_uses_vendor_location_and_unwraps_backend_data(settings, sdk, session, order, vendor_payload):
    session.post.return_value = _backend_response(200, {"success": True, "data": {"order_id": 77}})
    service = ShiprocketService(sdk, session=session)

    data = service.create_order_with_context(order, vendor=Vendor.model_validate(vendor_payload))

    assert data == {"order_id": 77}
    args, kwargs = session.post.call_args
    assert args == ("https://backend.example.com/shiprocket/orders",)
    assert kwargs["json"]["pickup_location"] == "The_Gujarat_Store_12ab34cd"


def test_with_context_custom_location_wins(sdk, session, order, vendor_payload):
    session.post.return_value = _backend_response(200, {"success": True, "data": {}})
    service = ShiprocketService(sdk, session=session)
    custom = PickupLocationRequest(
        pickup_location="Warehouse_2",
        name="WH",
        email="wh@example.com",
        phone="1",
        address="Plot 4",
        city="Pune",
        state="MH",
        country="India",
        pin_code="411001",
    )

    service.create_order_with_context(order, Vendor.model_validate(vendor_payload), custom)

    assert session.post.call_args.kwargs["json"]["pickup_location"] == "Warehouse_2"


def test_with_context_backend_rejection(sdk, session, order):
    session.post.return_value = _backend_response(422, {"success": False, "error": "Duplicate order"}, "Unprocessable Entity")
    service = ShiprocketService(sdk, session=session)

    with pytest.raises(TransportError) as exc_info:
        service.create_order_with_context(order)

    assert exc_info.value.info.message == "Duplicate order"
    assert exc_info.value.status_code == 422


def test_with_context_network_failure(sdk, session, order):
    session.post.side_effect = requests.ConnectionError("backend down")

    with pytest.raises(NetworkError):
        ShiprocketService(sdk, session=session).create_order_with_context(order)


def test_with_context_requires_backend_url(transport, clock, session, order):
    sdk = ShiprocketSDK(ShiprocketSettings(email="e", password="p"), transport=transport, clock=clock)

    with pytest.raises(ConfigurationError):
        ShiprocketService(sdk, session=session).create_order_with_context(order)
    session.post.assert_not_called()


def test_rate_helpers_delegate(service):
    rates = [
        {"courier_name": "A", "total_rate": 90, "estimated_delivery_date": "2026-10-25"},
        {"courier_name": "B", "total_rate": 150, "estimated_delivery_date": "2026-10-20"},
    ]
    assert service.get_cheapest_rate(rates)["courier_name"] == "A"
    assert service.get_fastest_rate(rates)["courier_name"] == "B"
