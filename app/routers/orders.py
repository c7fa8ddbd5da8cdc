import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from app.dependencies import get_shiprocket
from app.errors import ValidationError
from app.schemas import InvoiceRequest, OrderIdsRequest, OrderRequest
from app.services.formatter import find_missing_order_fields
from app.services.shiprocket import ShiprocketService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.post("/orders")
def create_order(payload: dict = Body(...), service: ShiprocketService = Depends(get_shiprocket)):
    items = payload.get("order_items")
    logger.info(
        "[Orders] create payload order_id=%s pickup=%s items=%s payment=%s sub_total=%s weight=%s",
        payload.get("order_id"),
        payload.get("pickup_location"),
        len(items) if isinstance(items, list) else 0,
        payload.get("payment_method"),
        payload.get("sub_total"),
        payload.get("weight"),
    )

    # Reject before any provider call, naming every gap at once
    missing = find_missing_order_fields(payload)
    if missing:
        raise ValidationError(missing)

    order = OrderRequest.model_validate(payload)
    return {"success": True, "data": service.create_order(order)}


@router.post("/orders/cancel")
def cancel_orders(body: OrderIdsRequest, service: ShiprocketService = Depends(get_shiprocket)):
    return {"success": True, "data": service.cancel_order(body.ids)}


@router.post("/orders/pickup")
def generate_pickup(body: OrderIdsRequest, service: ShiprocketService = Depends(get_shiprocket)):
    if not body.ids:
        raise HTTPException(status_code=400, detail="Shipment IDs are required")
    return {"success": True, "data": service.generate_pickup(body.ids)}


@router.post("/invoices")
def generate_invoice(body: InvoiceRequest, service: ShiprocketService = Depends(get_shiprocket)):
    if not body.ids:
        raise HTTPException(status_code=400, detail="Order IDs are required (array of strings)")

    result = service.print_invoice(body.ids)
    if result.get("not_created"):
        logger.warning("[Orders] Some invoices not created: %s", result["not_created"])
    return {"success": True, "data": result}


@router.post("/invoices/download")
def download_invoice(body: InvoiceRequest, service: ShiprocketService = Depends(get_shiprocket)):
    if not body.ids:
        raise HTTPException(status_code=400, detail="Order IDs are required")

    result = service.print_invoice(body.ids)
    if not result.get("is_invoice_created") or not result.get("invoice_url"):
        raise HTTPException(status_code=400, detail="Invoice could not be generated")

    return {
        "success": True,
        "data": {
            "invoice_url": result["invoice_url"],
            "is_invoice_created": result["is_invoice_created"],
            "not_created": result.get("not_created", []),
            "irn_no": result.get("irn_no"),
        },
    }
