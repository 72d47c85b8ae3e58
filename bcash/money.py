"""Money formatting shared by the API payloads."""
from decimal import Decimal

WHOLE = Decimal("1")
CENT = Decimal("0.01")


def format_money(value: Decimal) -> str:
    """
    Serialise a money amount for a response payload.

    Whole amounts are written without a fractional part whatever their
    exponent (``Decimal("60000.0")`` -> ``"60000"``); anything else is
    rounded to cents.
    """
    if value == value.to_integral_value():
        return str(value.quantize(WHOLE))
    return str(value.quantize(CENT))
