"""
Unit tests for order validation.
"""
import pytest

from license_checkout.exceptions import (
    EmptyPurchaseUnitsError,
    MissingItemCodeError,
    MissingItemFieldError,
    MissingItemNameError,
    MissingItemQuantityError,
    MissingItemsError,
    MissingPurchaseUnitsError,
    SchemaError,
)
from license_checkout.validation import validate_order


class TestValidateOrder:
    def test_valid_order_passes(self, order):
        assert validate_order(order) is None

    def test_missing_purchase_units(self):
        with pytest.raises(MissingPurchaseUnitsError):
            validate_order({})

    def test_empty_purchase_units(self):
        with pytest.raises(EmptyPurchaseUnitsError):
            validate_order({"purchase_units": []})

    def test_missing_items(self):
        with pytest.raises(MissingItemsError):
            validate_order({"purchase_units": [{"reference_id": "ref"}]})

    @pytest.mark.parametrize(
        "field, error",
        [
            ("name", MissingItemNameError),
            ("quantity", MissingItemQuantityError),
            ("code", MissingItemCodeError),
        ],
    )
    def test_item_missing_required_field(self, order, field, error):
        del order["purchase_units"][0]["items"][1][field]

        with pytest.raises(error) as excinfo:
            validate_order(order)

        assert isinstance(excinfo.value, MissingItemFieldError)
        assert excinfo.value.field == field
        assert excinfo.value.index == 1

    def test_presence_only_not_types(self):
        order = {"purchase_units": [{"items": [{"name": None, "quantity": "lots", "code": ""}]}]}
        validate_order(order)

    def test_all_variants_are_schema_errors(self):
        with pytest.raises(SchemaError) as excinfo:
            validate_order({"purchase_units": []})
        assert excinfo.value.code == "EMPTY_PURCHASE_UNITS"
