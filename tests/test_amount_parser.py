"""Tests for amount parser."""

import pytest
from decimal import Decimal
from spendtrack.utils.amount_parser import parse_amount, round_amount


def test_parse_plain_amounts():
    """Test parsing strings and numbers."""
    assert parse_amount("123.45") == Decimal("123.45")
    assert parse_amount(10) == Decimal("10")
    assert parse_amount(Decimal("7.5")) == Decimal("7.5")


def test_parse_float_keeps_short_representation():
    """Test that floats are read from their repr, not their binary value."""
    assert parse_amount(150.555) == Decimal("150.555")


def test_parse_currency_symbols_and_separators():
    """Test parsing amounts with currency symbols and thousands separators."""
    assert parse_amount("R$ 1,234.56") == Decimal("1234.56")
    assert parse_amount("$99.90") == Decimal("99.90")


@pytest.mark.parametrize("value", ["", "abc", "NaN", "Infinity", True, None, [1]])
def test_parse_invalid_amount(value):
    """Test that non-numeric input raises ValueError."""
    with pytest.raises(ValueError):
        parse_amount(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("150.555", "150.56"),
        ("150.554", "150.55"),
        ("0.005", "0.01"),
        ("0.004", "0.00"),
        ("45.5", "45.50"),
    ],
)
def test_round_amount_half_up(value, expected):
    """Test rounding to cents, half away from zero."""
    assert round_amount(Decimal(value)) == Decimal(expected)
