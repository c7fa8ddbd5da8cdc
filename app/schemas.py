# schemas.py
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.config import DEFAULT_CHANNEL_ID


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


# --- Shiprocket request shapes ---

class OrderItem(WireModel):
    name: str
    sku: str
    units: int = Field(..., ge=1)
    selling_price: float
    discount: Optional[float] = None
    tax: Optional[float] = None
    hsn: Optional[int] = None


class OrderRequest(WireModel):
    order_id: str = Field(..., description="Merchant-side order reference")
    order_date: str
    pickup_location: str = ""
    channel_id: str = DEFAULT_CHANNEL_ID
    comment: Optional[str] = None
    billing_customer_name: str
    billing_last_name: str = ""
    billing_address: str
    billing_address_2: Optional[str] = None
    billing_city: str = ""
    billing_pincode: str
    billing_state: str
    billing_country: str
    billing_email: str = ""
    billing_phone: str
    shipping_is_billing: bool
    shipping_customer_name: Optional[str] = None
    shipping_last_name: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_address_2: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_pincode: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_country: Optional[str] = None
    shipping_email: Optional[str] = None
    shipping_phone: Optional[str] = None
    order_items: list[OrderItem]
    payment_method: Literal["COD", "Prepaid"]
    shipping_charges: float = 0
    giftwrap_charges: Optional[float] = None
    transaction_charges: Optional[float] = None
    total_discount: Optional[float] = None
    sub_total: float
    length: float = Field(..., gt=0)
    breadth: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)

    @field_validator("payment_method", mode="before")
    @classmethod
    def normalize_payment_method(cls, v):
        if isinstance(v, str):
            if v.strip().upper() == "COD":
                return "COD"
            if v.strip().lower() == "prepaid":
                return "Prepaid"
        return v

    def to_wire(self) -> dict:
        return self.model_dump(exclude_none=True)


class PickupLocationRequest(WireModel):
    pickup_location: str = Field(..., max_length=36)
    name: str
    email: str
    phone: str
    address: str
    address_2: str = ""
    city: str
    state: str
    country: str
    pin_code: str


class RateRequest(WireModel):
    pickup_postcode: str
    delivery_postcode: str
    weight: float = Field(..., gt=0)
    length: int = 10
    breadth: int = 10
    height: int = 10
    cod: int = 0
    declared_value: float = 100


class CourierRate(WireModel):
    courier_name: str
    courier_company_id: Optional[int] = None
    rate: float
    estimated_delivery_date: str
    cod_charges: float = 0
    fuel_surcharge: float = 0
    total_rate: float
    description: Optional[str] = None
    pickup_performance: Optional[float] = None
    delivery_performance: Optional[float] = None


# --- Caller-side records (store orders, vendors) ---

class ProductDimensions(WireModel):
    length: Optional[float] = None
    breadth: Optional[float] = Field(default=None, validation_alias=AliasChoices("breadth", "width"))
    height: Optional[float] = None


class ProductMeta(WireModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[ProductDimensions] = None


class StoreOrderLine(WireModel):
    name: str
    sku: Optional[str] = None
    quantity: int = Field(default=1, ge=1, validation_alias=AliasChoices("quantity", "qty", "units"))
    price: float = Field(..., validation_alias=AliasChoices("price", "selling_price"))
    discount: Optional[float] = None
    tax: Optional[float] = None
    hsn: Optional[int] = None
    weight: Optional[float] = None
    length: Optional[float] = None
    breadth: Optional[float] = None
    height: Optional[float] = None
    product: Optional[ProductMeta] = None


class StoreOrder(WireModel):
    id: str = Field(..., validation_alias=AliasChoices("_id", "id", "order_id"))
    created_at: Optional[str] = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt", "order_date"))
    items: list[StoreOrderLine] = Field(..., min_length=1)
    payment_method: str = "prepaid"
    shipping_charges: float = 0
    discount: float = 0
    sub_total: Optional[float] = None
    comment: Optional[str] = None


class ShippingAddress(WireModel):
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_line_1: str = ""
    address_line_2: Optional[str] = None
    locality: Optional[str] = None
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: str = "India"
    phone: Optional[str] = None
    email: Optional[str] = None


class Customer(WireModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class StoreAddress(WireModel):
    address_line_1: str = ""
    address_line_2: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    state: str = ""
    pincode: str = ""


class Store(WireModel):
    store_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("storeName", "store_name"))
    contact: Optional[str] = None
    address: Optional[StoreAddress] = Field(default=None, validation_alias=AliasChoices("address", "addresses"))


class Vendor(WireModel):
    id: str = Field(default="unknown", validation_alias=AliasChoices("_id", "id"))
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    store: Store = Field(default_factory=Store)

    @field_validator("store", mode="before")
    @classmethod
    def missing_store(cls, v):
        return {} if v is None else v


# --- Webhooks ---

class WebhookScan(WireModel):
    date: Optional[str] = None
    status: Optional[str] = None
    activity: Optional[str] = None
    location: Optional[str] = None


class WebhookPayload(WireModel):
    order_id: Optional[Any] = None
    shipment_id: Optional[Any] = None
    current_status: Optional[str] = None
    awb_code: Optional[str] = Field(default=None, validation_alias=AliasChoices("awb", "awb_code"))
    courier_name: Optional[str] = None
    delivered_date: Optional[str] = None
    pickup_date: Optional[str] = None
    scans: Optional[list[WebhookScan]] = None


# --- Inbound request bodies ---

class OrderIdsRequest(WireModel):
    ids: list[int] = Field(default_factory=list)


class InvoiceRequest(WireModel):
    ids: list[str] = Field(default_factory=list)
