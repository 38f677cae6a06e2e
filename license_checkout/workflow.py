"""
workflow.py — Checkout Orchestration

Coordinates order building and the license backend in the correct sequence.

Direct mode (preferred):
1. Build the PayPal order from the product list
2. Acquire licenses from the license backend (validates first)
3. Hand the order to PayPal for approval (caller)
4. Finalize the order in the license backend and show the licenses

Webhook mode:
1. Build the PayPal order from the product list
2. Have the license backend issue licenses and pack them into item skus
3. Hand the repacked order to PayPal; the backend receives it via webhook
"""

import logging
from typing import Any, Iterable, List, Tuple

from .exceptions import BackendError, SchemaError
from .order_builder import build_paypal_order
from .presentation import license_rows
from .session import LicenseSession

log = logging.getLogger(__name__)


async def prepare_direct_checkout(
        session: LicenseSession,
        reference_id: str,
        currency: str,
        products: Iterable[dict],
        url: str,
) -> dict:
    """
    Builds the order and acquires its licenses into the session.

    Args:
        session (LicenseSession): Session owned by this checkout flow.
        reference_id (str): Order reference id.
        currency (str): Currency code for all amounts.
        products (Iterable[dict]): Products with 'name', 'quantity', 'price' and 'code'.
        url (str): License backend acquisition endpoint.

    Returns:
        dict: The PayPal order to create with the payment provider.

    Raises:
        SchemaError: A product lacks a required field. The backend is not contacted.
        BackendError: The license backend refused or could not be reached.
    """
    log_prefix = f"[Order: {reference_id}]"

    log.info(f"{log_prefix} Step 1: Building PayPal order...")
    order = build_paypal_order(reference_id, currency, products)

    log.info(f"{log_prefix} Step 2: Acquiring licenses...")
    try:
        await session.acquire(order, url)
    except SchemaError as e:
        log.warning(f"{log_prefix} Aborted: order rejected before submission ({e.code}).")
        raise
    except BackendError as e:
        log.error(f"{log_prefix} Aborted: license acquisition failed ({e.message}).")
        raise

    log.info(f"{log_prefix} Licenses acquired. Order ready for payment approval.")
    return order


async def prepare_webhook_checkout(
        session: LicenseSession,
        reference_id: str,
        currency: str,
        products: Iterable[dict],
        url: str,
) -> dict:
    """
    Builds the order and returns it with license keys embedded in item skus.

    Raises:
        SchemaError: A product lacks a required field, or the backend returned
            a license count that does not match an item's quantity.
        BackendError: The license backend refused or could not be reached.
    """
    log_prefix = f"[Order: {reference_id}]"

    log.info(f"{log_prefix} Step 1: Building PayPal order...")
    order = build_paypal_order(reference_id, currency, products)

    log.info(f"{log_prefix} Step 2: Encoding licenses in order data...")
    try:
        repacked = await session.encode_licenses(order, url)
    except SchemaError as e:
        log.warning(f"{log_prefix} Aborted: {e.message}")
        raise
    except BackendError as e:
        log.error(f"{log_prefix} Aborted: license encoding failed ({e.message}).")
        raise

    log.info(f"{log_prefix} Order repacked into {len(repacked['purchase_units'][0]['items'])} item(s).")
    return repacked


async def complete_direct_checkout(session: LicenseSession, details: Any, url: str) -> List[Tuple[str, str]]:
    """
    Finalizes a direct-mode checkout after the payment provider approved it.

    Returns:
        List[Tuple[str, str]]: (product name, license key) rows of the held bundle.
    """
    await session.finalize(details, url)
    return license_rows(session.licenses)
