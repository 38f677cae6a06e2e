"""
order_builder.py — PayPal Order Construction

Turns a flat product list into the minimal order structure PayPal accepts:

    {
        "purchase_units": [{
            "reference_id": "myOrderReferenceId",
            "amount": {
                "currency_code": "USD",
                "value": "1.50",
                "breakdown": {"item_total": {"currency_code": "USD", "value": "1.50"}}
            },
            "items": [
                {"name": "My product 1", "quantity": 1, "code": "prod-1",
                 "unit_amount": {"currency_code": "USD", "value": "1.00"}},
                {"name": "My product 2", "quantity": 2, "code": "prod-2",
                 "unit_amount": {"currency_code": "USD", "value": "0.25"}}
            ]
        }]
    }

Every product field (including the license backend's `code`) passes through
into its item. Nothing is rejected here; malformed prices end up as malformed
values that PayPal will refuse.
"""

import logging
from typing import Iterable, List

from .money import format_amount, sum_line_values

log = logging.getLogger(__name__)


def build_paypal_order(reference_id: str, currency: str, products: Iterable[dict]) -> dict:
    """
    Builds a single-purchase-unit PayPal order from products.

    Args:
        reference_id (str): Caller-supplied correlation id.
        currency (str): ISO 4217 currency code, used for every amount.
        products (Iterable[dict]): Products with 'name', 'quantity', 'price', 'code'
            and any extra fields to pass through.

    Returns:
        dict: The order, items in input order.
    """
    items: List[dict] = []
    for product in products:
        items.append({
            **product,
            "unit_amount": {
                "currency_code": currency,
                "value": format_amount(product.get("price")),
            },
        })

    total = sum_line_values((item["unit_amount"]["value"], item.get("quantity")) for item in items)
    log.info(f"[Order: {reference_id}] PayPal order built with {len(items)} item(s), total {total} {currency}.")

    return {
        "purchase_units": [{
            "reference_id": reference_id,
            "amount": {
                "currency_code": currency,
                "value": total,
                "breakdown": {
                    "item_total": {
                        "currency_code": currency,
                        "value": total,
                    }
                },
            },
            "items": items,
        }]
    }
