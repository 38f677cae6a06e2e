"""
main.py — FastAPI Entry Point for License Checkout

REST interface for shop frontends that need a PayPal order backed by
license backend product codes.

Responsibilities:
    • Build and validate PayPal orders from product lists
    • Prepare direct-mode orders with their licenses and finalize them after payment
    • Produce webhook-mode orders with license keys embedded in item skus
    • Provide system health information
"""

from fastapi import Depends, FastAPI, HTTPException

from . import config
from .clients import LicenseBackendClient
from .exceptions import BackendError, SchemaError
from .logging_config import get_logger, setup_logging
from .models import CheckoutRequest, CompleteCheckoutRequest
from .order_builder import build_paypal_order
from .session import LicenseSession
from .validation import validate_order
from .workflow import complete_direct_checkout, prepare_direct_checkout, prepare_webhook_checkout

setup_logging()
log = get_logger(__name__)
app = FastAPI(title="License Checkout")

_backend_client = None


def get_backend_client() -> LicenseBackendClient:
    """Returns the process-wide license backend client, creating it on first use."""
    global _backend_client
    if _backend_client is None:
        _backend_client = LicenseBackendClient()
    return _backend_client


@app.on_event("shutdown")
async def on_shutdown():
    if _backend_client is not None:
        await _backend_client.aclose()
        log.info("License backend client closed.")


@app.post("/v1/paypal-orders")
def create_paypal_order(request: CheckoutRequest):
    """
    Builds a PayPal order for the given products.

    Returns:
        dict: The order, ready for PayPal's order creation call.

    Raises:
        HTTPException(422): If the order lacks fields the license backend needs.
    """
    products = [product.model_dump() for product in request.products]
    order = build_paypal_order(request.referenceId, request.currency, products)
    try:
        validate_order(order)
    except SchemaError as e:
        raise HTTPException(status_code=422, detail={"errorCode": e.code, "message": e.message})
    return order


@app.post("/v1/paypal-orders/encoded")
async def create_encoded_paypal_order(
        request: CheckoutRequest,
        client: LicenseBackendClient = Depends(get_backend_client),
):
    """
    Builds a webhook-mode PayPal order: one item per license, key packed into the sku.

    Raises:
        HTTPException(422): If the order or the backend's answer is missing fields.
        HTTPException(502): If the license backend failed.
    """
    log.info(f"[Order: {request.referenceId}] Encoded order requested via API.")
    session = LicenseSession(client)
    products = [product.model_dump() for product in request.products]
    try:
        return await prepare_webhook_checkout(
            session, request.referenceId, request.currency, products, config.LICENSE_ENCODE_URL
        )
    except SchemaError as e:
        raise HTTPException(status_code=422, detail={"errorCode": e.code, "message": e.message})
    except BackendError as e:
        raise HTTPException(status_code=502, detail={"errorCode": e.code, "message": e.message})


@app.post("/v1/paypal-orders/direct")
async def create_direct_paypal_order(
        request: CheckoutRequest,
        client: LicenseBackendClient = Depends(get_backend_client),
):
    """
    Builds a direct-mode PayPal order and acquires its licenses.

    The caller keeps the returned licenses and sends them back to
    `/v1/paypal-orders/complete` once PayPal approved the payment.

    Returns:
        dict: {"order": PayPal order, "licenses": license bundle}.

    Raises:
        HTTPException(422): If the order lacks fields the license backend needs.
        HTTPException(502): If the license backend failed.
    """
    log.info(f"[Order: {request.referenceId}] Direct-mode order requested via API.")
    session = LicenseSession(client)
    products = [product.model_dump() for product in request.products]
    try:
        order = await prepare_direct_checkout(
            session, request.referenceId, request.currency, products, config.LICENSE_BACKEND_URL
        )
    except SchemaError as e:
        raise HTTPException(status_code=422, detail={"errorCode": e.code, "message": e.message})
    except BackendError as e:
        raise HTTPException(status_code=502, detail={"errorCode": e.code, "message": e.message})
    return {"order": order, "licenses": [entry.model_dump() for entry in session.licenses]}


@app.post("/v1/paypal-orders/complete")
async def complete_paypal_order(
        request: CompleteCheckoutRequest,
        client: LicenseBackendClient = Depends(get_backend_client),
):
    """
    Creates the order in the license backend after PayPal approved the payment.

    Returns:
        dict: {"licenses": [{"name": ..., "license": ...}]} for display.

    Raises:
        HTTPException(502): If the license backend failed.
    """
    session = LicenseSession(client)
    session.licenses = request.licenses
    try:
        rows = await complete_direct_checkout(session, request.details, config.LICENSE_ORDER_URL)
    except BackendError as e:
        raise HTTPException(status_code=502, detail={"errorCode": e.code, "message": e.message})
    return {"licenses": [{"name": name, "license": license_key} for name, license_key in rows]}


@app.get("/health")
def health_check():
    """
    Simple health check endpoint for monitoring systems and container orchestrators.
    """
    return {"status": "ok"}
