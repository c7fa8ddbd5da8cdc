"""
Pure mapping from store-side records to Shiprocket request payloads.

Nothing here does I/O: pickup names, sanitized address lines and aggregated
package metrics are derived only from the records passed in.
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import dateutil.parser

from app.config import (
    ADDRESS_LINE_MAX_LENGTH,
    DEFAULT_CHANNEL_ID,
    DEFAULT_DIMENSIONS,
    PICKUP_NAME_MAX_LENGTH,
)
from app.schemas import (
    Customer,
    OrderItem,
    OrderRequest,
    PickupLocationRequest,
    ShippingAddress,
    StoreOrder,
    StoreOrderLine,
    Vendor,
)

REQUIRED_ORDER_FIELDS = [
    "order_id",
    "order_date",
    "payment_method",
    "order_items",
    "sub_total",
    "billing_customer_name",
    "billing_address",
    "billing_state",
    "billing_country",
    "billing_phone",
    "billing_pincode",
    "length",
    "breadth",
    "height",
    "weight",
]

COD_ALIASES = {"cod", "cash_on_delivery", "cash on delivery"}

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")
_ADDRESS_KEYWORD = re.compile(r"(house|flat|plot|block|road|street|no\.?)", re.IGNORECASE)
_FIRST_NUMBER = re.compile(r"\b(\d+[A-Za-z\-/]*)\b")
_WORD_CHAR = re.compile(r"\w")
_TRAILING_WORD = re.compile(r"\w+$")
_ABBREVIATIONS = [
    (re.compile(r"\bMarg\b", re.IGNORECASE), "Road"),
    (re.compile(r"\bRd\.?\b", re.IGNORECASE), "Road"),
    (re.compile(r"\bSt\.?\b", re.IGNORECASE), "Street"),
]


def find_missing_order_fields(payload: dict) -> list[str]:
    """Every required order field that is absent, null or an empty string."""
    missing = [f for f in REQUIRED_ORDER_FIELDS if payload.get(f) is None or payload.get(f) == ""]
    # shipping_is_billing may legitimately be False
    if payload.get("shipping_is_billing") is None:
        missing.append("shipping_is_billing")
    return missing


def _safe_name(raw: str) -> str:
    return _UNSAFE_NAME_CHARS.sub("_", raw)


def generate_location_name(vendor: Vendor) -> str:
    store_name = vendor.store.store_name or vendor.name or "Store"
    vendor_id = vendor.id or "unknown"

    name = _safe_name(f"{store_name}_{vendor_id}")
    if len(name) <= PICKUP_NAME_MAX_LENGTH:
        return name

    # Shorten the store part, the id suffix stays whole
    suffix = _safe_name(vendor_id[-8:])
    max_store_len = PICKUP_NAME_MAX_LENGTH - len(suffix) - 1
    return f"{_safe_name(store_name[:max_store_len])}_{suffix}"


def _truncate_line(s: str) -> str:
    if len(s) <= ADDRESS_LINE_MAX_LENGTH:
        return s.rstrip()
    cut = s[:ADDRESS_LINE_MAX_LENGTH]
    # Never end on a partial word, its prefix could read as an abbreviation
    if _WORD_CHAR.match(s[ADDRESS_LINE_MAX_LENGTH]):
        trimmed = _TRAILING_WORD.sub("", cut)
        if trimmed.strip():
            cut = trimmed
    return cut.rstrip()


def sanitize_address_line1(line1: str | None) -> str:
    s = (line1 or "").strip()
    if not s:
        return ""
    for pattern, replacement in _ABBREVIATIONS:
        s = pattern.sub(replacement, s)
    s = _truncate_line(s)

    if not _ADDRESS_KEYWORD.search(s):
        m = _FIRST_NUMBER.search(s)
        s = _truncate_line(f"House No. {m.group(1) if m else '1'}, {s}")
    return s


def build_vendor_pickup_location(vendor: Vendor, location_name: str) -> PickupLocationRequest | None:
    address = vendor.store.address
    if address is None:
        return None

    return PickupLocationRequest(
        pickup_location=location_name,
        name=vendor.name or vendor.store.store_name or "Store",
        email=vendor.email or "",
        phone=vendor.store.contact or vendor.phone or "",
        address=sanitize_address_line1(address.address_line_1),
        address_2=(address.address_line_2 or address.locality or "").strip(),
        city=(address.city or address.address_line_2 or address.locality or "").strip(),
        state=address.state.strip(),
        country="India",
        pin_code=str(address.pincode),
    )


@dataclass
class PackageMetrics:
    weight: float
    length: float
    breadth: float
    height: float


def _positive(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _line_weight(line: StoreOrderLine, defaults: dict) -> float:
    if line.product is not None:
        w = _positive(line.product.weight)
        if w is not None:
            return w
    return _positive(line.weight) or defaults["weight"]


def _line_dimension(line: StoreOrderLine, dim: str, defaults: dict) -> float:
    if line.product is not None and line.product.dimensions is not None:
        d = _positive(getattr(line.product.dimensions, dim))
        if d is not None:
            return d
    return _positive(getattr(line, dim)) or defaults[dim]


def aggregate_package(lines: list[StoreOrderLine], defaults: dict = DEFAULT_DIMENSIONS) -> PackageMetrics:
    """Sum of weight x quantity, max of each dimension, floored by `defaults`."""
    total_weight = sum(_line_weight(line, defaults) * line.quantity for line in lines)
    dims = {
        dim: max((_line_dimension(line, dim, defaults) for line in lines), default=defaults[dim])
        for dim in ("length", "breadth", "height")
    }

    weight = _positive(total_weight) or defaults["weight"]
    return PackageMetrics(
        weight=round(max(weight, defaults["weight"]), 3),
        length=_positive(dims["length"]) or defaults["length"],
        breadth=_positive(dims["breadth"]) or defaults["breadth"],
        height=_positive(dims["height"]) or defaults["height"],
    )


def _order_date(raw: str | None, now: datetime | None = None) -> str:
    if raw:
        try:
            return dateutil.parser.parse(raw).strftime("%Y-%m-%d %H:%M")
        except (ValueError, OverflowError):
            pass
    return (now or datetime.now()).strftime("%Y-%m-%d %H:%M")


def _split_name(address: ShippingAddress, user: Customer) -> tuple[str, str]:
    if address.first_name:
        return address.first_name.strip(), (address.last_name or "").strip()
    full = (address.name or user.name or "").strip()
    first, _, last = full.partition(" ")
    return first, last.strip()


def format_order_for_shiprocket(
    order: StoreOrder,
    address: ShippingAddress,
    user: Customer,
    vendor: Vendor | None = None,
    default_pickup_location: str = "Primary",
    now: datetime | None = None,
) -> OrderRequest:
    """Maps a store order, its delivery address and buyer to an adhoc-order payload."""
    package = aggregate_package(order.items)
    first_name, last_name = _split_name(address, user)

    items = [
        OrderItem(
            name=line.name,
            sku=line.sku or (line.product.sku if line.product and line.product.sku else f"{order.id}-{i + 1}"),
            units=line.quantity,
            selling_price=line.price,
            discount=line.discount,
            tax=line.tax,
            hsn=line.hsn,
        )
        for i, line in enumerate(order.items)
    ]
    sub_total = order.sub_total
    if sub_total is None:
        sub_total = round(sum(line.price * line.quantity for line in order.items), 2)

    return OrderRequest(
        order_id=order.id,
        order_date=_order_date(order.created_at, now),
        pickup_location=generate_location_name(vendor) if vendor else default_pickup_location,
        channel_id=DEFAULT_CHANNEL_ID,
        comment=order.comment,
        billing_customer_name=first_name,
        billing_last_name=last_name,
        billing_address=address.address_line_1.strip(),
        billing_address_2=(address.address_line_2 or address.locality or "").strip() or None,
        billing_city=address.city.strip(),
        billing_pincode=str(address.pincode),
        billing_state=address.state.strip(),
        billing_country=address.country or "India",
        billing_email=address.email or user.email,
        billing_phone=address.phone or user.phone,
        shipping_is_billing=True,
        order_items=items,
        payment_method="COD" if order.payment_method.strip().lower() in COD_ALIASES else "Prepaid",
        shipping_charges=order.shipping_charges,
        total_discount=order.discount or None,
        sub_total=sub_total,
        length=package.length,
        breadth=package.breadth,
        height=package.height,
        weight=package.weight,
    )
