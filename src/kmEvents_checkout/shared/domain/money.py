"""Amount conversion and INR formatting.

Every amount handled inside the package is an integer number of minor units
(paise). Rupee amounts only appear at the edges: caller input and display.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_HUNDRED = Decimal(100)


def to_minor_units(amount: Any) -> int:
    """Convert a rupee amount to paise, rounding half up."""
    value = Decimal(str(amount)) * _HUNDRED
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_major_units(amount_minor_units: int) -> Decimal:
    """Convert paise back to a rupee Decimal."""
    return (Decimal(amount_minor_units) / _HUNDRED).quantize(Decimal("0.01"))


def _group_indian(digits: str) -> str:
    """Group an integer string the en-IN way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_inr(amount: Any, decimals: int | None = None) -> str:
    """
    Format a rupee amount with Indian digit grouping.

    With `decimals=None` trailing zero paise are dropped (`₹1,000`, `₹99.5`),
    otherwise the amount is rounded to exactly `decimals` places.
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = abs(value)

    if decimals is None:
        value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        whole, _, fraction = f"{value:f}".partition(".")
        fraction = fraction.rstrip("0")
    else:
        exponent = Decimal(1).scaleb(-decimals)
        value = value.quantize(exponent, rounding=ROUND_HALF_UP)
        whole, _, fraction = f"{value:f}".partition(".")

    text = _group_indian(whole)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}₹{text}"


def format_discount(amount: Any) -> str:
    """Render a discount as `-₹100.00`."""
    return f"-{format_inr(amount, decimals=2)}"
