"""
repacker.py — Embedding license keys in a PayPal order (webhook mode)

For the PayPal webhook integration the license backend returns the order with
a `licenses` array on each item. PayPal has no place for those, so each item
of quantity N becomes N items of quantity 1 whose `sku` carries
base64("<code>;<license key>"). The backend decodes the sku when PayPal
delivers the order back through its webhook.
"""

import base64
import copy
from typing import List, Tuple

from .exceptions import (
    LicenseCountMismatchError,
    MalformedItemFieldError,
    MissingItemCodeError,
    MissingItemFieldError,
)
from .validation import validate_order

SKU_SEPARATOR = ";"

# Consumed by the expansion, never copied onto the replacement items.
DROPPED_ITEM_FIELDS = frozenset({"licenses", "code"})


def encode_sku(code: str, license_key: str) -> str:
    raw = f"{code}{SKU_SEPARATOR}{license_key}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_sku(sku: str) -> Tuple[str, str]:
    """Recovers (code, license_key) from an sku; splits on the first separator."""
    code, _, license_key = base64.b64decode(sku, validate=True).decode("utf-8").partition(SKU_SEPARATOR)
    return code, license_key


def _expand_item(index: int, item: dict) -> List[dict]:
    if "code" not in item:
        raise MissingItemCodeError(index)
    if "licenses" not in item:
        raise MissingItemFieldError(index, "licenses")

    try:
        quantity = int(item["quantity"])
    except (TypeError, ValueError):
        raise MalformedItemFieldError(index, "quantity", item["quantity"])
    licenses = item["licenses"]
    if not isinstance(licenses, list):
        raise MalformedItemFieldError(index, "licenses", licenses)
    if len(licenses) != quantity:
        raise LicenseCountMismatchError(index, quantity, len(licenses))

    kept = {key: value for key, value in item.items() if key not in DROPPED_ITEM_FIELDS}
    return [
        {**kept, "quantity": 1, "sku": encode_sku(item["code"], license_key)}
        for license_key in licenses
    ]


def repack_licenses(payload: dict) -> dict:
    """
    Expands every item of the first purchase unit into one item per license.

    Pure transformation: the input is not modified, all fields other than the
    item list are carried over untouched.

    Raises:
        SchemaError: the payload is not an order, an item has a malformed
            quantity or licenses field, or its license count differs from
            its quantity.
    """
    validate_order(payload)

    repacked = copy.deepcopy(payload)
    purchase_unit = repacked["purchase_units"][0]
    new_items: List[dict] = []
    for index, item in enumerate(purchase_unit["items"]):
        new_items.extend(_expand_item(index, item))
    purchase_unit["items"] = new_items
    return repacked
