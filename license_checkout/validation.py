"""
validation.py — Structural checks before talking to the license backend

The backend needs a name, a quantity and a product code on every item to
issue licenses. Only presence of keys is checked, not types or ranges.
"""

import logging

from .exceptions import (
    EmptyPurchaseUnitsError,
    MissingItemCodeError,
    MissingItemNameError,
    MissingItemQuantityError,
    MissingItemsError,
    MissingPurchaseUnitsError,
)

log = logging.getLogger(__name__)

# Checked in this order; the first missing field wins.
REQUIRED_ITEM_FIELDS = (
    ("name", MissingItemNameError),
    ("quantity", MissingItemQuantityError),
    ("code", MissingItemCodeError),
)


def validate_order(order: dict) -> None:
    """
    Raises:
        MissingPurchaseUnitsError: 'purchase_units' is absent.
        EmptyPurchaseUnitsError: 'purchase_units' has no elements.
        MissingItemsError: the first purchase unit has no 'items'.
        MissingItemFieldError: an item lacks 'name', 'quantity' or 'code'.
    """
    if "purchase_units" not in order:
        raise MissingPurchaseUnitsError()
    if len(order["purchase_units"]) < 1:
        raise EmptyPurchaseUnitsError()

    purchase_unit = order["purchase_units"][0]
    if "items" not in purchase_unit:
        raise MissingItemsError()

    for index, item in enumerate(purchase_unit["items"]):
        for field, error in REQUIRED_ITEM_FIELDS:
            if field not in item:
                log.warning(f"[Order: {purchase_unit.get('reference_id')}] Item {index} is missing '{field}'.")
                raise error(index)
