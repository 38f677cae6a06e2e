"""
license_checkout — PayPal order building and license backend integration.
"""

from .clients import LicenseBackendClient
from .exceptions import (
    AcquisitionInProgressError,
    BackendError,
    LicenseCheckoutError,
    SchemaError,
)
from .money import format_amount, sum_line_values
from .order_builder import build_paypal_order
from .repacker import decode_sku, encode_sku, repack_licenses
from .session import LicenseSession
from .validation import validate_order

__all__ = [
    "AcquisitionInProgressError",
    "BackendError",
    "LicenseBackendClient",
    "LicenseCheckoutError",
    "LicenseSession",
    "SchemaError",
    "build_paypal_order",
    "decode_sku",
    "encode_sku",
    "format_amount",
    "repack_licenses",
    "sum_line_values",
    "validate_order",
]
