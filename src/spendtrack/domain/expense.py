"""Expense entry domain service."""

import logging
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from spendtrack.database.gateway import StorageGateway
from spendtrack.domain.entities import ExpenseEntry, ExpenseEntryDetail, ExpenseStats, ValidationResult
from spendtrack.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    establishment_not_found,
    expense_entry_not_found,
)
from spendtrack.domain.rules import enforce_expense_rules
from spendtrack.domain.validation import (
    coerce_entry_id,
    validate_code,
    validate_entry_id,
    validate_expense_create,
    validate_expense_update,
    validate_period,
)
from spendtrack.repositories.base import Clock
from spendtrack.repositories.expense import ExpenseEntryRepository
from spendtrack.utils.amount_parser import round_amount
from spendtrack.utils.date_parser import parse_date

logger = logging.getLogger(__name__)


class ExpenseEntryService:
    """Service for managing expense entries.

    Writes run their checks in this order and stop at the first stage that
    fails: field validation, business rules, existence of the target entry
    (updates), existence of the referenced category and establishment.
    """

    def __init__(
        self,
        gateway: StorageGateway,
        clock: Optional[Clock] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """Initialize expense entry service.

        Args:
            gateway: Storage gateway
            clock: Optional timestamp source for created_at/updated_at
            today: Optional source of the current date used by the date rules
        """
        self.today = today or date.today
        self.repository = ExpenseEntryRepository(gateway, clock, self.today)

    @staticmethod
    def _require_valid(validation: ValidationResult, message: str) -> None:
        if not validation.valid:
            raise ValidationError(message, list(validation.errors))

    def _require_id(self, entry_id: Any) -> int:
        self._require_valid(validate_entry_id(entry_id), "Invalid expense entry id")
        return coerce_entry_id(entry_id)

    def _require_category(self, code: str) -> None:
        if not self.repository.category_exists(code):
            logger.info("Category %r referenced by expense entry not found", code)
            raise NotFoundError(category_not_found(code), field="category_code", value=code)

    def _require_establishment(self, code: str) -> None:
        if not self.repository.establishment_exists(code):
            logger.info("Establishment %r referenced by expense entry not found", code)
            raise NotFoundError(establishment_not_found(code), field="establishment_code", value=code)

    def create(self, data: Mapping[str, Any]) -> ExpenseEntry:
        """Create an expense entry.

        Args:
            data: entry_date, payment_date, amount, category_code,
                establishment_code and optionally description

        Returns:
            The stored entry, amount rounded to 2 decimal places

        Raises:
            ValidationError: If any field is invalid
            BusinessRuleError: If date ordering, date window or amount window rules fail
            NotFoundError: If the category or establishment does not exist
        """
        self._require_valid(
            validate_expense_create(data, today=self.today()),
            "Invalid data for creating expense entry",
        )
        enforce_expense_rules(data, today=self.today())

        self._require_category(data["category_code"].strip())
        self._require_establishment(data["establishment_code"].strip())

        return self.repository.create(data)

    def find_by_id(self, entry_id: Any) -> Optional[ExpenseEntry]:
        """Get an entry by id, or None if absent.

        Raises:
            ValidationError: If the id is not a positive integer
        """
        return self.repository.find_by_id(self._require_id(entry_id))

    def find_by_id_detailed(self, entry_id: Any) -> Optional[ExpenseEntryDetail]:
        return self.repository.find_by_id_detailed(self._require_id(entry_id))

    def find_all(self) -> list[ExpenseEntry]:
        """List all entries ordered by id."""
        return self.repository.find_all()

    def find_all_detailed(self) -> list[ExpenseEntryDetail]:
        """List all entries with parent details, newest entry date first."""
        return self.repository.find_all_detailed()

    def find_by_category(self, code: Any) -> list[ExpenseEntryDetail]:
        """List entries of one category.

        Raises:
            ValidationError: If code is blank
            NotFoundError: If the category does not exist
        """
        self._require_valid(validate_code(code, "Category code"), "Category code is required")
        code = code.strip()
        self._require_category(code)
        return self.repository.find_by_category(code)

    def find_by_establishment(self, code: Any) -> list[ExpenseEntryDetail]:
        """List entries of one establishment.

        Raises:
            ValidationError: If code is blank
            NotFoundError: If the establishment does not exist
        """
        self._require_valid(validate_code(code, "Establishment code"), "Establishment code is required")
        code = code.strip()
        self._require_establishment(code)
        return self.repository.find_by_establishment(code)

    def find_by_period(self, start: Any, end: Any) -> list[ExpenseEntryDetail]:
        """List entries whose entry date lies within [start, end].

        Raises:
            ValidationError: With every problem found in the range
        """
        today = self.today()
        self._require_valid(validate_period(start, end, today=today), "Invalid period")
        return self.repository.find_by_period(parse_date(start, today=today), parse_date(end, today=today))

    def update(self, entry_id: Any, data: Mapping[str, Any]) -> ExpenseEntry:
        """Apply a partial update. Absent fields are left untouched.

        Date ordering is checked against effective values: a date missing
        from the payload is taken from the stored entry.

        Raises:
            ValidationError: If the id or a supplied field is invalid
            BusinessRuleError: If the supplied fields break a business rule
            NotFoundError: If the entry, or a newly referenced category or
                establishment, does not exist
        """
        entry_id = self._require_id(entry_id)
        self._require_valid(
            validate_expense_update(data, today=self.today()),
            "Invalid data for updating expense entry",
        )

        existing = self.repository.find_by_id(entry_id)
        enforce_expense_rules(data, today=self.today(), existing=existing)

        if existing is None:
            raise NotFoundError(expense_entry_not_found(entry_id), field="id", value=entry_id)

        if "category_code" in data:
            self._require_category(data["category_code"].strip())
        if "establishment_code" in data:
            self._require_establishment(data["establishment_code"].strip())

        updated = self.repository.update(entry_id, data)
        if updated is None:
            # Removed between the existence check and the write
            raise NotFoundError(expense_entry_not_found(entry_id), field="id", value=entry_id)
        return updated

    def delete(self, entry_id: Any) -> bool:
        """Delete an entry.

        Raises:
            ValidationError: If the id is not a positive integer
            NotFoundError: If the entry does not exist
        """
        entry_id = self._require_id(entry_id)
        if not self.repository.exists(entry_id):
            raise NotFoundError(expense_entry_not_found(entry_id), field="id", value=entry_id)
        return self.repository.delete(entry_id)

    def exists(self, entry_id: Any) -> bool:
        """Check whether an entry exists. Malformed ids never exist."""
        parsed = coerce_entry_id(entry_id)
        if parsed is None:
            return False
        return self.repository.exists(parsed)

    def count(self) -> int:
        return self.repository.count()

    def total_by_category(self, code: Optional[str] = None) -> Decimal:
        """Sum of all amounts, or of one category's amounts.

        Raises:
            ValidationError: If code is given but blank
            NotFoundError: If code is given and the category does not exist
        """
        if code is not None:
            self._require_valid(validate_code(code, "Category code"), "Category code is required")
            code = code.strip()
            self._require_category(code)
            return self.repository.total_by_category(code)
        return self.repository.total_by_category()

    def total_by_establishment(self, code: Optional[str] = None) -> Decimal:
        """Sum of all amounts, or of one establishment's amounts.

        Raises:
            ValidationError: If code is given but blank
            NotFoundError: If code is given and the establishment does not exist
        """
        if code is not None:
            self._require_valid(validate_code(code, "Establishment code"), "Establishment code is required")
            code = code.strip()
            self._require_establishment(code)
            return self.repository.total_by_establishment(code)
        return self.repository.total_by_establishment()

    def get_stats(self) -> ExpenseStats:
        """Return entry count, total amount and average amount."""
        count = self.repository.count()
        total = self.repository.total_by_category()
        average = round_amount(total / count) if count > 0 else Decimal("0.00")
        return ExpenseStats(count=count, total=total, average=average)
