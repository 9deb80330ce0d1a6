"""Cross-field business rules for expense entries.

These rules have no home in a single field: payment date ordering, the
one-year window for both dates, and the amount window after rounding.
They are pure functions over a (possibly partial) payload; the only
storage-derived input is the optional existing entry used to complete the
date pair on partial updates.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from spendtrack.domain.entities import ExpenseEntry, FieldError
from spendtrack.domain.errors import BusinessRuleError
from spendtrack.domain.validation import MAX_AMOUNT, MIN_AMOUNT
from spendtrack.utils.amount_parser import parse_amount, round_amount
from spendtrack.utils.date_parser import one_year_ahead, parse_date

logger = logging.getLogger(__name__)


def _optional_date(data: Mapping[str, Any], field: str, today: date) -> Optional[date]:
    value = data.get(field)
    if value is None or value == "":
        return None
    try:
        return parse_date(value, today=today)
    except ValueError:
        # Shape errors belong to field validation
        return None


def check_expense_rules(
    data: Mapping[str, Any],
    today: Optional[date] = None,
    existing: Optional[ExpenseEntry] = None,
) -> list[FieldError]:
    """Return every business rule the payload violates.

    Args:
        data: Create payload, or the supplied fields of an update
        today: Reference date (defaults to date.today())
        existing: Stored entry for an update. Its dates fill in whichever of
            entry_date/payment_date the payload leaves out, so the ordering
            rule compares effective values.

    Returns:
        List of violations, empty when all rules hold
    """
    if today is None:
        today = date.today()
    violations: list[FieldError] = []

    entry_date = _optional_date(data, "entry_date", today)
    payment_date = _optional_date(data, "payment_date", today)

    effective_entry = entry_date
    effective_payment = payment_date
    if existing is not None:
        if "entry_date" not in data:
            effective_entry = existing.entry_date
        if "payment_date" not in data:
            effective_payment = existing.payment_date

    if effective_entry is not None and effective_payment is not None:
        if effective_payment < effective_entry:
            violations.append(
                FieldError("payment_date", "Payment date cannot be earlier than the entry date")
            )

    limit = one_year_ahead(today)
    if entry_date is not None and entry_date > limit:
        violations.append(
            FieldError("entry_date", "Entry date cannot be more than 1 year in the future")
        )
    if payment_date is not None and payment_date > limit:
        violations.append(
            FieldError("payment_date", "Payment date cannot be more than 1 year in the future")
        )

    if data.get("amount") is not None:
        try:
            amount = round_amount(parse_amount(data["amount"]))
        except ValueError:
            amount = None
        if amount is not None:
            if amount > MAX_AMOUNT:
                violations.append(FieldError("amount", f"Amount cannot exceed {MAX_AMOUNT}"))
            if amount < MIN_AMOUNT:
                violations.append(FieldError("amount", f"Amount must be at least {MIN_AMOUNT}"))

    return violations


def enforce_expense_rules(
    data: Mapping[str, Any],
    today: Optional[date] = None,
    existing: Optional[ExpenseEntry] = None,
) -> None:
    """Raise BusinessRuleError carrying every violated rule, if any."""
    violations = check_expense_rules(data, today=today, existing=existing)
    if violations:
        logger.info(
            "Expense entry rejected by business rules: %s",
            ", ".join(v.field for v in violations),
        )
        raise BusinessRuleError("Business rules not satisfied", violations)
