import logging
from datetime import datetime, timedelta
from typing import Callable

from pydantic import ValidationError

from app.config import Endpoints
from app.models import APIResult
from app.schemas import CourierRate, RateRequest
from app.services.auth import utc_now
from app.services.base import ShiprocketModule
from app.services.protocols import AuthSource, Transport
from app.services.tracking import parse_date

logger = logging.getLogger(__name__)

DEFAULT_ETD = timedelta(days=7)


def _amount(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _optional_number(value, cast=float):
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def _optional_text(value) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def to_courier_rate(courier: dict, now: datetime) -> CourierRate:
    base = _amount(courier.get("rate") or courier.get("freight_charge"))
    cod = _amount(courier.get("cod_charges"))
    surcharge = _amount(courier.get("other_charges"))
    return CourierRate(
        courier_name=_optional_text(courier.get("courier_name")) or "Unknown courier",
        courier_company_id=_optional_number(courier.get("courier_company_id"), int),
        rate=base,
        estimated_delivery_date=_optional_text(courier.get("etd")) or (now + DEFAULT_ETD).isoformat(),
        cod_charges=cod,
        fuel_surcharge=surcharge,
        total_rate=round(base + cod + surcharge, 2),
        description=_optional_text(courier.get("description")),
        pickup_performance=_optional_number(courier.get("pickup_performance")),
        delivery_performance=_optional_number(courier.get("delivery_performance")),
    )


class ShiprocketRates(ShiprocketModule):
    def __init__(self, transport: Transport, auth: AuthSource, clock: Callable[[], datetime] = utc_now):
        super().__init__(transport, auth)
        self.clock = clock

    def calculate_rates(self, rate_request: RateRequest) -> APIResult:
        logger.info(
            "[Rates] Calculating rates from %s to %s",
            rate_request.pickup_postcode,
            rate_request.delivery_postcode,
        )
        result = self._get(Endpoints.SERVICEABILITY, params=rate_request.model_dump())
        if not result.ok:
            return result

        body = result.value if isinstance(result.value, dict) else {}
        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        couriers = data.get("available_courier_companies") or []
        now = self.clock()
        quotes = []
        for courier in couriers:
            if not isinstance(courier, dict):
                logger.warning("[Rates] Skipping non-object courier entry: %r", courier)
                continue
            try:
                quotes.append(to_courier_rate(courier, now).model_dump())
            except ValidationError as e:
                logger.warning("[Rates] Skipping unreadable quote from %s: %s", courier.get("courier_name"), e)
        rates = sorted(quotes, key=lambda r: r["total_rate"])
        logger.info("[Rates] Successfully calculated %d rates", len(rates))
        return APIResult.success({"rates": rates, "request_data": rate_request.model_dump()})


def get_cheapest_rate(rates: list[dict]) -> dict | None:
    if not rates:
        return None
    return min(rates, key=lambda r: r["total_rate"])


def get_fastest_rate(rates: list[dict]) -> dict | None:
    """Earliest estimated delivery; the first quote wins ties."""
    if not rates:
        return None
    fastest, fastest_date = rates[0], parse_date(rates[0].get("estimated_delivery_date"))
    for rate in rates[1:]:
        current = parse_date(rate.get("estimated_delivery_date"))
        if current is not None and (fastest_date is None or current < fastest_date):
            fastest, fastest_date = rate, current
    return fastest


def filter_rates_by_courier(rates: list[dict], courier_name: str) -> list[dict]:
    needle = courier_name.lower()
    return [r for r in rates if needle in (r.get("courier_name") or "").lower()]


def is_cod_available(rates: list[dict]) -> bool:
    return any(r.get("cod_charges", -1) >= 0 for r in rates)
