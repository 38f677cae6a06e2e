"""
Unit tests for monetary formatting.
"""
from decimal import Decimal

import pytest

from license_checkout.money import format_amount, sum_line_values


class TestFormatAmount:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (1, "1.00"),
            (1.5, "1.50"),
            (0, "0.00"),
            (0.005, "0.01"),
            (1.005, "1.01"),
            (2.675, "2.68"),
            (0.004, "0.00"),
            (19.999, "20.00"),
            (Decimal("3.145"), "3.15"),
        ],
    )
    def test_rounds_half_up_to_two_places(self, amount, expected):
        assert format_amount(amount) == expected

    @pytest.mark.parametrize("amount", [None, "1.5", float("nan"), float("inf"), True])
    def test_invalid_value_passes_through(self, amount):
        result = format_amount(amount)
        if isinstance(amount, float):
            assert result is amount
        else:
            assert result == amount


class TestSumLineValues:
    def test_sums_price_times_quantity(self):
        assert sum_line_values([("1.00", 1), ("0.25", 2)]) == "1.50"

    def test_empty_sum(self):
        assert sum_line_values([]) == "0.00"

    def test_no_float_drift(self):
        assert sum_line_values([("0.10", 3), ("0.20", 1)]) == "0.50"

    def test_quantity_given_as_string(self):
        assert sum_line_values([("2.50", "4")]) == "10.00"

    def test_malformed_price_yields_nan(self):
        assert sum_line_values([("1.00", 1), (None, 2)]) == "NaN"

    def test_malformed_quantity_yields_nan(self):
        assert sum_line_values([("1.00", "two")]) == "NaN"


class TestLargeAmounts:
    def test_format_keeps_every_digit(self):
        assert format_amount(1e26) == "100000000000000000000000000.00"

    def test_format_huge_decimal(self):
        assert format_amount(Decimal("123456789012345678901234567890.125")) == "123456789012345678901234567890.13"

    def test_sum_beyond_default_precision(self):
        total = sum_line_values([("1000000000000000000000000.00", 1000), ("0.01", 1)])
        assert total == "1000000000000000000000000000.01"
