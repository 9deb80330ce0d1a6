"""Field-level validation for categories, establishments and expense entries.

Every validator inspects the whole payload and returns a ValidationResult
listing all failing fields; none of them raises. Create validators treat
every required field as mandatory. Update validators only look at the keys
present in the payload, so a partial update is checked field by field.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from spendtrack.domain.entities import FieldError, ValidationResult
from spendtrack.utils.amount_parser import parse_amount
from spendtrack.utils.date_parser import parse_date

CODE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255
NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 20
ENTRY_DESCRIPTION_MAX_LENGTH = 500

# Single authoritative amount window, shared with the business rules.
MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999.99")

# Largest value a SQLite INTEGER primary key can hold.
MAX_ENTRY_ID = 2**63 - 1


def _check_text(
    errors: list[FieldError],
    data: Mapping[str, Any],
    field: str,
    label: str,
    max_length: Optional[int] = None,
) -> None:
    """Append errors for a required, non-blank string field."""
    value = data.get(field)
    if value is None:
        errors.append(FieldError(field, f"{label} is required"))
        return
    if not isinstance(value, str):
        errors.append(FieldError(field, f"{label} must be a string"))
        return
    stripped = value.strip()
    if not stripped:
        errors.append(FieldError(field, f"{label} cannot be empty"))
    elif max_length is not None and len(stripped) > max_length:
        errors.append(FieldError(field, f"{label} must be at most {max_length} characters"))


def _check_date(
    errors: list[FieldError],
    data: Mapping[str, Any],
    field: str,
    label: str,
    not_after: Optional[date] = None,
    today: Optional[date] = None,
) -> None:
    value = data.get(field)
    if value is None or value == "":
        errors.append(FieldError(field, f"{label} is required"))
        return
    try:
        parsed = parse_date(value, today=today)
    except ValueError:
        errors.append(FieldError(field, f"{label} is not a valid date"))
        return
    if not_after is not None and parsed > not_after:
        errors.append(FieldError(field, f"{label} cannot be in the future"))


def _check_amount(errors: list[FieldError], data: Mapping[str, Any]) -> None:
    value = data.get("amount")
    if value is None:
        errors.append(FieldError("amount", "Amount is required"))
        return
    try:
        amount = parse_amount(value)
    except ValueError:
        errors.append(FieldError("amount", "Amount must be a valid number"))
        return
    if amount <= 0:
        errors.append(FieldError("amount", "Amount must be greater than zero"))
    elif amount > MAX_AMOUNT:
        errors.append(FieldError("amount", f"Amount must be at most {MAX_AMOUNT}"))


def _check_optional_description(errors: list[FieldError], data: Mapping[str, Any]) -> None:
    value = data.get("description")
    if value is None:
        return
    if not isinstance(value, str):
        errors.append(FieldError("description", "Description must be a string"))
    elif len(value) > ENTRY_DESCRIPTION_MAX_LENGTH:
        errors.append(
            FieldError(
                "description",
                f"Description must be at most {ENTRY_DESCRIPTION_MAX_LENGTH} characters",
            )
        )


# Category


def validate_category_create(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[FieldError] = []
    _check_text(errors, data, "code", "Code", CODE_MAX_LENGTH)
    _check_text(errors, data, "description", "Description", DESCRIPTION_MAX_LENGTH)
    return ValidationResult.of(errors)


def validate_category_update(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[FieldError] = []
    if "description" in data:
        _check_text(errors, data, "description", "Description", DESCRIPTION_MAX_LENGTH)
    return ValidationResult.of(errors)


# Establishment


def validate_establishment_create(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[FieldError] = []
    _check_text(errors, data, "code", "Code", CODE_MAX_LENGTH)
    _check_text(errors, data, "name", "Name", NAME_MAX_LENGTH)
    _check_text(errors, data, "address", "Address")
    _check_text(errors, data, "phone", "Phone", PHONE_MAX_LENGTH)
    return ValidationResult.of(errors)


def validate_establishment_update(data: Mapping[str, Any]) -> ValidationResult:
    errors: list[FieldError] = []
    if "name" in data:
        _check_text(errors, data, "name", "Name", NAME_MAX_LENGTH)
    if "address" in data:
        _check_text(errors, data, "address", "Address")
    if "phone" in data:
        _check_text(errors, data, "phone", "Phone", PHONE_MAX_LENGTH)
    return ValidationResult.of(errors)


# Expense entry


def validate_expense_create(data: Mapping[str, Any], today: Optional[date] = None) -> ValidationResult:
    """Validate a full expense entry payload.

    Args:
        data: Payload with entry_date, payment_date, amount, category_code,
            establishment_code and an optional description
        today: Reference date for the "entry date is not in the future" check
            (defaults to date.today())
    """
    if today is None:
        today = date.today()
    errors: list[FieldError] = []
    _check_date(errors, data, "entry_date", "Entry date", not_after=today, today=today)
    _check_date(errors, data, "payment_date", "Payment date", today=today)
    _check_amount(errors, data)
    _check_optional_description(errors, data)
    _check_text(errors, data, "category_code", "Category code", CODE_MAX_LENGTH)
    _check_text(errors, data, "establishment_code", "Establishment code", CODE_MAX_LENGTH)
    return ValidationResult.of(errors)


def validate_expense_update(data: Mapping[str, Any], today: Optional[date] = None) -> ValidationResult:
    """Validate the fields present in a partial expense entry payload."""
    if today is None:
        today = date.today()
    errors: list[FieldError] = []
    if "entry_date" in data:
        _check_date(errors, data, "entry_date", "Entry date", not_after=today, today=today)
    if "payment_date" in data:
        _check_date(errors, data, "payment_date", "Payment date", today=today)
    if "amount" in data:
        _check_amount(errors, data)
    if "description" in data:
        _check_optional_description(errors, data)
    if "category_code" in data:
        _check_text(errors, data, "category_code", "Category code", CODE_MAX_LENGTH)
    if "establishment_code" in data:
        _check_text(errors, data, "establishment_code", "Establishment code", CODE_MAX_LENGTH)
    return ValidationResult.of(errors)


def validate_code(code: Any, label: str = "Code") -> ValidationResult:
    """Validate an identifying natural key passed to a lookup, update or delete."""
    errors: list[FieldError] = []
    _check_text(errors, {"code": code}, "code", label)
    return ValidationResult.of(errors)


def validate_entry_id(entry_id: Any) -> ValidationResult:
    """Validate that an expense entry id is a positive integer (or its decimal string)."""
    if coerce_entry_id(entry_id) is None:
        return ValidationResult.of([FieldError("id", "Expense entry id must be a positive integer")])
    return ValidationResult()


def coerce_entry_id(entry_id: Any) -> Optional[int]:
    """Return entry_id as a positive int, or None when it has the wrong shape."""
    if isinstance(entry_id, bool):
        return None
    if isinstance(entry_id, int):
        value = entry_id
    elif isinstance(entry_id, str) and entry_id.strip().isascii() and entry_id.strip().isdigit():
        try:
            value = int(entry_id.strip())
        except ValueError:
            # Beyond the interpreter's digit limit
            return None
    else:
        return None
    return value if 0 < value <= MAX_ENTRY_ID else None


MAX_PERIOD_YEARS = 5


def validate_period(start: Any, end: Any, today: Optional[date] = None) -> ValidationResult:
    """Validate a [start, end] date range used to filter expense entries.

    Both ends are required and must parse, end cannot precede start and the
    range cannot span more than MAX_PERIOD_YEARS years.
    """
    errors: list[FieldError] = []
    data = {"start": start, "end": end}
    _check_date(errors, data, "start", "Start date", today=today)
    _check_date(errors, data, "end", "End date", today=today)
    if errors:
        return ValidationResult.of(errors)

    start_date = parse_date(start, today=today)
    end_date = parse_date(end, today=today)
    if end_date < start_date:
        errors.append(FieldError("end", "End date must not be earlier than the start date"))
    elif end_date > start_date + relativedelta(years=MAX_PERIOD_YEARS):
        errors.append(FieldError("end", f"Period cannot be longer than {MAX_PERIOD_YEARS} years"))
    return ValidationResult.of(errors)
