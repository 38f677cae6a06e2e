"""
money.py — Monetary Formatting for PayPal Orders

PayPal expects amounts as strings with exactly two decimal places
(https://developer.paypal.com/docs/api/reference/currency-codes/).
Rounding is ROUND_HALF_UP on the decimal representation of the input,
so 0.005 becomes "0.01" and 2.675 becomes "2.68".
"""

from decimal import (
    Context,
    Decimal,
    InvalidOperation,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    localcontext,
)
from typing import Iterable, Tuple

TWO_PLACES = Decimal("0.01")

# Only addition, multiplication and quantize run in this context, all exact,
# so amounts of any magnitude keep every digit.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_UP)


def _is_finite_number(amount) -> bool:
    """True for finite int, float and Decimal values; bool is not a price."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return False
    return Decimal(str(amount)).is_finite()


def format_amount(amount):
    """
    Renders a price as a two-decimal string.

    Invalid values (None, strings, NaN, infinity) are returned unchanged.
    PayPal rejects them with a more useful message than we could produce here.

    Args:
        amount: The price in major currency units.

    Returns:
        str: e.g. "1.50", or the original value if it is not a finite number.
    """
    if not _is_finite_number(amount):
        return amount
    with localcontext(EXACT_CONTEXT):
        return str(Decimal(str(amount)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def sum_line_values(line_values: Iterable[Tuple[str, int]]) -> str:
    """
    Sums unit_price * quantity over all lines and formats the result.

    Unit prices must already be formatted by `format_amount`. A line that
    cannot be interpreted turns the whole total into "NaN".
    """
    with localcontext(EXACT_CONTEXT):
        total = Decimal("0")
        try:
            for unit_price, quantity in line_values:
                total += Decimal(unit_price) * int(quantity)
        except (InvalidOperation, TypeError, ValueError):
            return "NaN"
        if not total.is_finite():
            return "NaN"
        return str(total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
