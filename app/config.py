import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Project-root .env, same lookup as the carrier services
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

PRODUCTION_API_BASE_URL = "https://apiv2.shiprocket.in/v1/external"
STAGING_API_BASE_URL = "https://staging-express.shiprocket.in/v1/external"

DEFAULT_CHANNEL_ID = "custom"
TOKEN_TTL = timedelta(days=9)
PICKUP_NAME_MAX_LENGTH = 36
ADDRESS_LINE_MAX_LENGTH = 120


class Endpoints:
    AUTH = "/auth/login"
    CREATE_ORDER = "/orders/create/adhoc"
    CANCEL_ORDER = "/orders/cancel"
    PRINT_INVOICE = "/orders/print/invoice"
    TRACK_BY_AWB = "/courier/track/awb"
    TRACK_BY_ORDER_ID = "/courier/track"
    GENERATE_PICKUP = "/courier/assign/pickup"
    SERVICEABILITY = "/courier/serviceability/"
    ADD_PICKUP_LOCATION = "/settings/company/addpickup"
    GET_PICKUP_LOCATIONS = "/settings/company/pickup"


# Provider status -> order status in the calling system
STATUS_MAPPING = {
    "NEW": "ready to ship",
    "PICKUP_SCHEDULED": "ready to ship",
    "PICKUP_GENERATED": "ready to ship",
    "PICKED_UP": "shipped",
    "IN_TRANSIT": "shipped",
    "OUT_FOR_DELIVERY": "out for delivery",
    "DELIVERED": "delivered",
    "CANCELLED": "cancelled",
    "LOST": "cancelled",
    "DAMAGED": "returned",
    "RETURNED": "returned",
    "RTO_INITIATED": "returned",
    "RTO_DELIVERED": "returned",
}

# Provider status -> customer notification type
NOTIFICATION_MAPPING = {
    "PICKED_UP": "shipped",
    "IN_TRANSIT": "in_transit",
    "OUT_FOR_DELIVERY": "out_for_delivery",
    "DELIVERED": "delivered",
}

# cm / kg
DEFAULT_DIMENSIONS = {
    "length": 10.0,
    "breadth": 10.0,
    "height": 10.0,
    "weight": 0.5,
}

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ShiprocketSettings:
    api_base_url: str = PRODUCTION_API_BASE_URL
    email: str | None = None
    password: str | None = None
    use_staging: bool = False
    default_pickup_location: str = "Primary"
    backend_url: str = ""
    http_timeout: float | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    port: int = 8000

    @property
    def base_url(self) -> str:
        if self.use_staging:
            return STAGING_API_BASE_URL
        return self.api_base_url

    def is_staging(self) -> bool:
        return self.base_url == STAGING_API_BASE_URL

    def validate(self) -> list[str]:
        """Lists every credential/URL setting that blocks authentication."""
        errors = []
        if not self.email:
            errors.append("SHIPROCKET_EMAIL is required")
        if not self.password:
            errors.append("SHIPROCKET_PASSWORD is required")
        if not self.base_url:
            errors.append("SHIPROCKET_API_BASE_URL is required")
        return errors


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


def load_settings(env: dict | None = None) -> ShiprocketSettings:
    """
    Builds settings from the process environment (after loading .env once).
    Passing `env` skips the .env file and reads only that mapping.
    """
    if env is None:
        load_dotenv(dotenv_path=ENV_PATH)
        env = os.environ

    origins = env.get("CORS_ORIGINS", "http://localhost:3000")
    return ShiprocketSettings(
        api_base_url=env.get("SHIPROCKET_API_BASE_URL") or PRODUCTION_API_BASE_URL,
        email=env.get("SHIPROCKET_EMAIL"),
        password=env.get("SHIPROCKET_PASSWORD"),
        use_staging=env.get("SHIPROCKET_USE_STAGING", "").strip().lower() in _TRUTHY,
        default_pickup_location=env.get("SHIPROCKET_DEFAULT_PICKUP_LOCATION") or "Primary",
        backend_url=(env.get("SHIPROCKET_BACKEND_URL") or "").rstrip("/"),
        http_timeout=_optional_float(env.get("SHIPROCKET_HTTP_TIMEOUT")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        port=int(env.get("PORT") or 8000),
    )
