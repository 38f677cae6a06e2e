"""
exceptions.py — Error Taxonomy for the License Checkout Flow

Two families of errors end a checkout attempt:

    • SchemaError:  a required field is missing locally. Raised before any
                     network call, never sent over the wire.
    • BackendError: the license backend answered with a failure envelope,
                     or the exchange itself failed (transport, non-JSON body).

Both are terminal for the current attempt. Nothing in this package retries.
"""


class LicenseCheckoutError(Exception):
    """Base exception for all license checkout errors."""

    def __init__(self, message: str, code: str = None):
        """
        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


# --- Schema errors (local, pre-submission) ---
class SchemaError(LicenseCheckoutError):
    """Raised when an order lacks a field the license backend requires."""

    pass


class MissingPurchaseUnitsError(SchemaError):
    def __init__(self, message: str = "Purchase_units object must be present in PayPal order data"):
        super().__init__(message, code="MISSING_PURCHASE_UNITS")


class EmptyPurchaseUnitsError(SchemaError):
    def __init__(self, message: str = "Purchase units must have one element"):
        super().__init__(message, code="EMPTY_PURCHASE_UNITS")


class MissingItemsError(SchemaError):
    def __init__(
        self,
        message: str = "Items object must be present in purchase_units object in PayPal order data",
    ):
        super().__init__(message, code="MISSING_ITEMS")


class MissingItemFieldError(SchemaError):
    """
    Raised when a line item lacks one of the fields the backend needs.

    Attributes:
        field (str): Name of the missing item field.
        index (int): Position of the offending item in the item list.
    """

    field = None

    def __init__(self, index: int, field: str = None):
        self.field = field or self.field
        self.index = index
        super().__init__(
            f"Product must have a {self.field} property (item {index})",
            code=f"MISSING_ITEM_{self.field.upper()}",
        )


class MissingItemNameError(MissingItemFieldError):
    field = "name"


class MissingItemQuantityError(MissingItemFieldError):
    field = "quantity"


class MissingItemCodeError(MissingItemFieldError):
    field = "code"


class MalformedItemFieldError(SchemaError):
    """Raised when a line item field has the wrong shape, e.g. a non-numeric quantity."""

    def __init__(self, index: int, field: str, value):
        self.index = index
        self.field = field
        self.value = value
        super().__init__(
            f"Item {index} has a malformed {field}: {value!r}",
            code=f"MALFORMED_ITEM_{field.upper()}",
        )


class LicenseCountMismatchError(SchemaError):
    """Raised when an item carries a different number of licenses than its quantity."""

    def __init__(self, index: int, quantity: int, license_count: int):
        self.index = index
        self.quantity = quantity
        self.license_count = license_count
        super().__init__(
            f"Item {index} has quantity {quantity} but {license_count} licenses",
            code="LICENSE_COUNT_MISMATCH",
        )


# --- Backend errors (remote, post-submission) ---
class BackendError(LicenseCheckoutError):
    """
    Raised when the license backend reports failure or cannot be reached.

    The backend's failure message is kept as-is in `message`.
    """

    def __init__(self, message, code: str = "BACKEND_ERROR"):
        super().__init__(message, code=code)


class AcquisitionInProgressError(LicenseCheckoutError):
    """Raised when a session is asked to acquire licenses while an acquisition is still running."""

    def __init__(self, message: str = "A license acquisition is already in progress for this session"):
        super().__init__(message, code="ACQUISITION_IN_PROGRESS")
