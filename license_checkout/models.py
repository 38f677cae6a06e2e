"""
models.py — Data Models for the License Backend Exchange

Pydantic models for the shapes that cross a boundary:

Models:
    - BackendEnvelope: The license backend's {success, message} response wrapper.
    - LicenseBundleEntry: One product's issued license keys (direct mode).
    - ProductIn: A product as accepted by the HTTP API.
    - CheckoutRequest: The HTTP API payload for building an order.
    - CompleteCheckoutRequest: The HTTP API payload for finalizing a direct-mode order.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .config import DEFAULT_CURRENCY


class BackendEnvelope(BaseModel):
    """
    Response wrapper used by every license backend endpoint.

    Attributes:
        success (bool): Whether the backend handled the request.
        message (Any): On success, a JSON string holding the payload (the backend
            double-encodes it). On failure, the error message, used as-is.
    """
    success: bool
    message: Any = None


class LicenseBundleEntry(BaseModel):
    """
    License keys issued for one submitted product.

    Attributes:
        name (str): Product name as submitted.
        licenses (List[str]): One key per unit of the submitted quantity.
    """
    model_config = ConfigDict(extra="allow")

    name: str
    licenses: List[str]


LicenseBundle = TypeAdapter(List[LicenseBundleEntry])


class ProductIn(BaseModel):
    """
    A product to sell. Extra fields are passed through into the PayPal item.

    Attributes:
        name (str): Display name.
        quantity (int): Number of units, greater than zero.
        price (float): Unit price in major currency units.
        code (str): License backend product code.
    """
    model_config = ConfigDict(extra="allow")

    name: str
    quantity: int = Field(..., gt=0)
    price: float
    code: str


class CheckoutRequest(BaseModel):
    """
    Attributes:
        referenceId (str): Correlation id copied into the purchase unit.
        currency (str): ISO 4217 currency code, e.g. 'USD'. Defaults to DEFAULT_CURRENCY.
        products (List[ProductIn]): Products in display order.
    """
    referenceId: str
    currency: str = DEFAULT_CURRENCY
    products: List[ProductIn]


class CompleteCheckoutRequest(BaseModel):
    """
    Attributes:
        licenses (List[LicenseBundleEntry]): Bundle returned when the order was prepared.
        details (Any): Payment provider's approval details.
    """
    licenses: List[LicenseBundleEntry]
    details: Any = None
