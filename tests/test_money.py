from decimal import Decimal

import pytest

from kmEvents_checkout.shared.domain.money import (
    format_discount,
    format_inr,
    to_major_units,
    to_minor_units,
)


@pytest.mark.parametrize(
    "amount, expected",
    [(500, 50000), ("999", 99900), (Decimal("0.01"), 1), ("10.005", 1001), (0, 0)],
)
def test_to_minor_units(amount, expected):
    assert to_minor_units(amount) == expected


def test_to_major_units():
    assert to_major_units(150000) == Decimal("1500.00")
    assert to_major_units(9950) == Decimal("99.50")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (123456, "₹1,23,456"),
        (12345678, "₹1,23,45,678"),
        (Decimal("99.5"), "₹99.5"),
        (-2500, "-₹2,500"),
    ],
)
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_format_inr_fixed_decimals():
    assert format_inr(1500, decimals=2) == "₹1,500.00"


def test_format_discount():
    assert format_discount(100) == "-₹100.00"
    assert format_discount(Decimal("49.5")) == "-₹49.50"
