"""Domain model entities for spendtrack.

These are pure data classes representing business concepts, independent of
the database schema. Repositories return them, services accept and return
them, and nothing outside the database package sees a raw row.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Category:
    """Expense category, keyed by its code."""

    code: str
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Establishment:
    """Place where money was spent, keyed by its code."""

    code: str
    name: str
    address: str
    phone: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ExpenseEntry:
    """Expense entry domain entity."""

    id: int
    entry_date: date
    payment_date: date
    amount: Decimal
    description: Optional[str]
    category_code: str
    establishment_code: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ExpenseEntryDetail:
    """Expense entry joined with its category description and establishment name."""

    entry: ExpenseEntry
    category_description: Optional[str]
    establishment_name: Optional[str]


@dataclass(frozen=True)
class FieldError:
    """A single failed check, attributed to the input field it concerns."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a field validation pass."""

    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return not self.errors

    @classmethod
    def of(cls, errors: list[FieldError]) -> "ValidationResult":
        return cls(errors=tuple(errors))


@dataclass(frozen=True)
class ParentStats:
    """Usage of a category or establishment by expense entries."""

    entity: Category | Establishment
    dependent_count: int

    @property
    def can_delete(self) -> bool:
        return self.dependent_count == 0


@dataclass(frozen=True)
class ExpenseStats:
    """Aggregate figures over all expense entries."""

    count: int
    total: Decimal
    average: Decimal
