"""Utility functions for spendtrack."""

from spendtrack.utils.date_parser import parse_date
from spendtrack.utils.amount_parser import parse_amount, round_amount

__all__ = ["parse_date", "parse_amount", "round_amount"]
