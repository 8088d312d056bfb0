"""Amount parsing and minor-unit conversion."""
from decimal import Decimal

import pytest

from app.services.payment_intents import (
    is_missing_amount,
    parse_amount,
    parse_expiry_seconds,
    to_minor_units,
)
from app.utils.errors import ValidationError


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        ("5.00", "500"),
        ("5", "500"),
        ("0.01", "1"),
        ("19.999", "2000"),
        ("1.005", "101"),
        ("0.004", "0"),
        ("123456.78", "12345678"),
    ],
)
def test_to_minor_units_rounds_half_up_to_integer_string(amount, expected):
    assert to_minor_units(Decimal(amount)) == expected


def test_parse_amount_accepts_numbers_and_numeric_strings():
    assert parse_amount("5.00") == Decimal("5.00")
    assert parse_amount(" 12.5 ") == Decimal("12.5")
    assert parse_amount(7) == Decimal("7")
    assert parse_amount(2.5) == Decimal("2.5")


@pytest.mark.parametrize(
    "value",
    ["0", 0, "-1", -3.5, "abc", "NaN", "Infinity", "-Infinity", "", True, "1e400", "1e5000", "1e-400"],
)
def test_parse_amount_rejects_non_positive_or_non_numeric(value):
    with pytest.raises(ValidationError, match="invalid amount"):
        parse_amount(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (600, Decimal("600")),
        ("30", Decimal("30")),
        (0, None),
        (-10, None),
        ("soon", None),
        (None, None),
        (False, None),
    ],
)
def test_parse_expiry_seconds_only_keeps_positive_numbers(value, expected):
    assert parse_expiry_seconds(value) == expected


@pytest.mark.parametrize(
    ("value", "missing"),
    [
        (None, True),
        ("", True),
        (0, True),
        (0.0, True),
        (False, True),
        ("0", False),
        ("0.00", False),
        (-1, False),
        ("5", False),
    ],
)
def test_is_missing_amount_treats_numeric_zero_as_absent(value, missing):
    assert is_missing_amount(value) is missing
