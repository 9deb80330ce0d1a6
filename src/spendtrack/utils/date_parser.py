"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(value: date | str, today: Optional[date] = None) -> date:
    """Parse a date value into a date object.

    Supports:
    - date and datetime instances (datetimes are truncated to their date)
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        value: Date, datetime or date string
        today: Reference date for relative words (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Could not parse date from {type(value).__name__}")

    date_str = value.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")

    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def one_year_ahead(today: date) -> date:
    """Return the same calendar day one year after today (Feb 29 -> Feb 28)."""
    return today + relativedelta(years=1)
