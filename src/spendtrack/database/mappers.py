"""Mapper functions between stored rows and domain entities.

Rows come back from the gateway as plain dicts keyed by column name. The
``*_to_domain`` functions turn them into entities; the ``*_create_row`` and
``*_update_row`` functions turn validated input payloads into column
values. Update mappers are sparse: they only emit columns whose field is
present in the payload.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from spendtrack.domain import entities as domain
from spendtrack.utils.amount_parser import parse_amount, round_amount
from spendtrack.utils.date_parser import parse_date


def _amount(value: Any) -> Decimal:
    return round_amount(parse_amount(value))


def _optional_text(value: str | None) -> str | None:
    return value or None


# Category


def category_to_domain(row: Mapping[str, Any]) -> domain.Category:
    """Convert a categories row to a domain Category entity."""
    return domain.Category(
        code=row["code"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_create_row(data: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    return {
        "code": data["code"].strip(),
        "description": data["description"].strip(),
        "created_at": now,
        "updated_at": now,
    }


def category_update_row(data: Mapping[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {}
    if "description" in data:
        row["description"] = data["description"].strip()
    return row


# Establishment


def establishment_to_domain(row: Mapping[str, Any]) -> domain.Establishment:
    """Convert an establishments row to a domain Establishment entity."""
    return domain.Establishment(
        code=row["code"],
        name=row["name"],
        address=row["address"],
        phone=row["phone"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def establishment_create_row(data: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    return {
        "code": data["code"].strip(),
        "name": data["name"].strip(),
        "address": data["address"].strip(),
        "phone": data["phone"].strip(),
        "created_at": now,
        "updated_at": now,
    }


def establishment_update_row(data: Mapping[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for field in ("name", "address", "phone"):
        if field in data:
            row[field] = data[field].strip()
    return row


# Expense entry


def expense_entry_to_domain(row: Mapping[str, Any]) -> domain.ExpenseEntry:
    """Convert an expense_entries row to a domain ExpenseEntry entity."""
    return domain.ExpenseEntry(
        id=row["id"],
        entry_date=parse_date(row["entry_date"]),
        payment_date=parse_date(row["payment_date"]),
        amount=_amount(row["amount"]),
        description=row["description"],
        category_code=row["category_code"],
        establishment_code=row["establishment_code"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def expense_entry_detail_to_domain(row: Mapping[str, Any]) -> domain.ExpenseEntryDetail:
    """Convert a joined expense entry row to a domain ExpenseEntryDetail."""
    return domain.ExpenseEntryDetail(
        entry=expense_entry_to_domain(row),
        category_description=row.get("category_description"),
        establishment_name=row.get("establishment_name"),
    )


def expense_entry_create_row(
    data: Mapping[str, Any], now: datetime, today: Optional[date] = None
) -> dict[str, Any]:
    """Build the insert row. Relative date words resolve against today."""
    return {
        "entry_date": parse_date(data["entry_date"], today=today),
        "payment_date": parse_date(data["payment_date"], today=today),
        "amount": _amount(data["amount"]),
        "description": _optional_text(data.get("description")),
        "category_code": data["category_code"].strip(),
        "establishment_code": data["establishment_code"].strip(),
        "created_at": now,
        "updated_at": now,
    }


def expense_entry_update_row(data: Mapping[str, Any], today: Optional[date] = None) -> dict[str, Any]:
    row: dict[str, Any] = {}
    if "entry_date" in data:
        row["entry_date"] = parse_date(data["entry_date"], today=today)
    if "payment_date" in data:
        row["payment_date"] = parse_date(data["payment_date"], today=today)
    if "amount" in data:
        row["amount"] = _amount(data["amount"])
    if "description" in data:
        row["description"] = _optional_text(data["description"])
    if "category_code" in data:
        row["category_code"] = data["category_code"].strip()
    if "establishment_code" in data:
        row["establishment_code"] = data["establishment_code"].strip()
    return row
