"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(value: Decimal | int | float | str) -> Decimal:
    """Parse an amount into a Decimal.

    Handles numbers and strings such as:
    - "123.45"
    - "R$ 123.45" / "$123.45"
    - "1,234.56"

    Floats go through their shortest repr so 150.555 stays 150.555
    instead of its binary expansion.

    Args:
        value: Amount as Decimal, int, float or string

    Returns:
        Decimal amount (not rounded)

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid amount")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount_str = value.strip()
        if not amount_str:
            raise ValueError("Empty amount string")
        # Remove currency symbols and thousands separators
        amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)
        amount_str = amount_str.replace(",", "").strip()
        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount '{value}'")
    else:
        raise ValueError(f"Could not parse amount from {type(value).__name__}")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{value}'")
    return amount


def round_amount(amount: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero (150.555 -> 150.56)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
