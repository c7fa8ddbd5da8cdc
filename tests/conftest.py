from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import Endpoints, ShiprocketSettings
from app.main import create_app
from app.models import APIResult, ErrorInfo
from app.services.sdk import ShiprocketSDK
from app.services.shiprocket import ShiprocketService

TOKEN = "tok-123"


@dataclass
class Call:
    method: str
    endpoint: str
    body: Any = None
    token: str | None = None
    params: dict | None = None


@dataclass
class FakeTransport:
    """Records every call; answers from per-endpoint queues (last answer repeats)."""

    calls: list[Call] = field(default_factory=list)
    responses: dict = field(default_factory=dict)

    def respond(self, method: str, endpoint: str, *results: APIResult):
        self.responses.setdefault((method, endpoint), []).extend(results)

    def request(self, endpoint, method="GET", body=None, token=None, params=None):
        self.calls.append(Call(method, endpoint, body, token, params))
        queued = self.responses.get((method, endpoint))
        if not queued:
            return APIResult.failure(ErrorInfo(f"No fake response for {method} {endpoint}", 404, "Not Found"))
        return queued.pop(0) if len(queued) > 1 else queued[0]

    def get(self, endpoint, token=None, params=None):
        return self.request(endpoint, "GET", token=token, params=params)

    def post(self, endpoint, body, token=None):
        return self.request(endpoint, "POST", body=body, token=token)

    def calls_to(self, endpoint: str) -> list[Call]:
        return [c for c in self.calls if c.endpoint == endpoint]

    @property
    def provider_calls(self) -> list[Call]:
        return [c for c in self.calls if c.endpoint != Endpoints.AUTH]


class FrozenClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings() -> ShiprocketSettings:
    return ShiprocketSettings(
        email="ops@example.com",
        password="secret",
        default_pickup_location="Primary",
        backend_url="https://backend.example.com",
    )


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def transport() -> FakeTransport:
    fake = FakeTransport()
    fake.respond("POST", Endpoints.AUTH, APIResult.success({"token": TOKEN, "email": "ops@example.com"}))
    return fake


@pytest.fixture
def sdk(settings, transport, clock) -> ShiprocketSDK:
    return ShiprocketSDK(settings, transport=transport, clock=clock)


@pytest.fixture
def service(sdk) -> ShiprocketService:
    return ShiprocketService(sdk)


@pytest.fixture
def client(settings, service) -> TestClient:
    return TestClient(create_app(settings, service))


@pytest.fixture
def order_payload() -> dict:
    return {
        "order_id": "ORD-1001",
        "order_date": "2026-10-18 10:30",
        "pickup_location": "Primary",
        "billing_customer_name": "Asha",
        "billing_last_name": "Rao",
        "billing_address": "House No. 12, MG Road",
        "billing_city": "Bengaluru",
        "billing_pincode": "560001",
        "billing_state": "Karnataka",
        "billing_country": "India",
        "billing_email": "asha@example.com",
        "billing_phone": "9876543210",
        "shipping_is_billing": True,
        "order_items": [{"name": "Mug", "sku": "MUG-1", "units": 2, "selling_price": 250}],
        "payment_method": "Prepaid",
        "sub_total": 500,
        "length": 10,
        "breadth": 10,
        "height": 10,
        "weight": 0.8,
    }


@pytest.fixture
def vendor_payload() -> dict:
    return {
        "_id": "64f1c2a9b7e3d10012ab34cd",
        "name": "Ravi Patel",
        "email": "ravi@example.com",
        "store": {
            "storeName": "The Gujarat Store",
            "contact": "9123456780",
            "address": {
                "address_line_1": "14 Ashram Rd",
                "address_line_2": "Navrangpura",
                "city": "Ahmedabad",
                "state": "Gujarat",
                "pincode": 380009,
            },
        },
    }
