"""Shared domain error messages and error types."""

from typing import Any, Optional

from spendtrack.domain.entities import FieldError


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only care that the input was refused.
    """


class ValidationError(DomainError):
    """Field-level constraint violation. Carries every failing field."""

    def __init__(self, message: str, errors: Optional[list[FieldError]] = None):
        super().__init__(message)
        self.errors: list[FieldError] = list(errors or [])


class NotFoundError(DomainError):
    """Requested entity, or an entity referenced by a foreign key, does not exist."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class ConflictError(DomainError):
    """Natural-key uniqueness violation on create."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class ReferentialIntegrityError(DomainError):
    """Delete blocked because dependent expense entries exist."""

    def __init__(self, message: str, count: int):
        super().__init__(message)
        self.count = count


class BusinessRuleError(DomainError):
    """Cross-field rule violation on an expense entry. Carries every violated rule."""

    def __init__(self, message: str, violations: Optional[list[FieldError]] = None):
        super().__init__(message)
        self.violations: list[FieldError] = list(violations or [])


def category_not_found(code: str) -> str:
    """Return message for missing category."""
    return f"Category '{code}' not found"


def establishment_not_found(code: str) -> str:
    """Return message for missing establishment."""
    return f"Establishment '{code}' not found"


def expense_entry_not_found(entry_id: int) -> str:
    """Return message for missing expense entry."""
    return f"Expense entry {entry_id} not found"


def duplicate_code(entity: str, code: str) -> str:
    """Return message for a natural key that is already taken."""
    return f"{entity} with code '{code}' already exists"


def delete_blocked(entity: str, code: str, count: int) -> str:
    """Return message when a parent still has dependent expense entries."""
    return (
        f"Cannot delete {entity.lower()} '{code}': it has "
        f"{count} expense entr{'ies' if count != 1 else 'y'}. "
        "Please reassign or delete them first."
    )
