"""Shared service behaviour for entities referenced by expense entries."""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, Optional, TypeVar

from spendtrack.domain.entities import FieldError, ParentStats, ValidationResult
from spendtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
    delete_blocked,
    duplicate_code,
)
from spendtrack.domain.validation import validate_code
from spendtrack.repositories.category import CategoryRepository
from spendtrack.repositories.establishment import EstablishmentRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")


class ParentEntityService(Generic[E]):
    """Create/update/delete orchestration for a code-keyed parent entity.

    Checks run in a fixed order and stop at the first failing stage:
    field validation, then existence/uniqueness, then dependents.
    """

    entity_name: str = ""

    def __init__(
        self,
        repository: CategoryRepository | EstablishmentRepository,
        not_found_message: Callable[[str], str],
    ):
        self.repository = repository
        self._not_found_message = not_found_message

    def _require_valid(self, validation: ValidationResult, message: str) -> None:
        if not validation.valid:
            raise ValidationError(message, list(validation.errors))

    def _require_code(self, code: Any) -> str:
        self._require_valid(
            validate_code(code, f"{self.entity_name} code"),
            f"{self.entity_name} code is required",
        )
        return code.strip()

    def _require_existing(self, code: str) -> None:
        if not self.repository.exists(code):
            logger.info("%s %r not found", self.entity_name, code)
            raise NotFoundError(self._not_found_message(code), field="code", value=code)

    def create(self, data: Mapping[str, Any]) -> E:
        """Create an entity.

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the code is already taken
        """
        self._require_valid(
            self.repository.schema.validate_create(data),
            f"Invalid data for creating {self.entity_name.lower()}",
        )

        code = data["code"].strip()
        if self.repository.exists_by_code(code):
            logger.warning("%s %r already exists", self.entity_name, code)
            raise ConflictError(duplicate_code(self.entity_name, code), field="code", value=code)

        return self.repository.create(data)

    def find_by_code(self, code: Any) -> Optional[E]:
        """Get entity by code, or None if absent.

        Raises:
            ValidationError: If the code is blank
        """
        return self.repository.find_by_id(self._require_code(code))

    def find_all(self) -> list[E]:
        """List all entities ordered by code."""
        return self.repository.find_all()

    def update(self, code: Any, data: Mapping[str, Any]) -> E:
        """Apply a partial update. Absent fields are left untouched.

        Raises:
            ValidationError: If the code is blank or a supplied field is invalid
            NotFoundError: If no entity has this code
        """
        code = self._require_code(code)
        self._require_valid(
            self.repository.schema.validate_update(data),
            f"Invalid data for updating {self.entity_name.lower()}",
        )
        self._require_existing(code)

        updated = self.repository.update(code, data)
        if updated is None:
            # Removed between the existence check and the write
            raise NotFoundError(self._not_found_message(code), field="code", value=code)
        return updated

    def delete(self, code: Any) -> bool:
        """Delete an entity that no expense entry references.

        Raises:
            ValidationError: If the code is blank
            NotFoundError: If no entity has this code
            ReferentialIntegrityError: If expense entries reference it; carries the count
        """
        code = self._require_code(code)
        self._require_existing(code)

        count = self.repository.count_dependents(code)
        if count > 0:
            logger.warning("Refusing to delete %s %r: %d dependent entries", self.entity_name.lower(), code, count)
            raise ReferentialIntegrityError(delete_blocked(self.entity_name, code, count), count)

        return self.repository.delete(code)

    def exists(self, code: Any) -> bool:
        """Check whether an entity exists. Blank or non-string codes never exist."""
        if not isinstance(code, str) or not code.strip():
            return False
        return self.repository.exists(code.strip())

    def count(self) -> int:
        return self.repository.count()

    def get_stats(self, code: Any) -> ParentStats:
        """Return the entity with its dependent entry count.

        Raises:
            ValidationError: If the code is blank
            NotFoundError: If no entity has this code
        """
        code = self._require_code(code)
        entity = self.repository.find_by_id(code)
        if entity is None:
            raise NotFoundError(self._not_found_message(code), field="code", value=code)
        return ParentStats(entity=entity, dependent_count=self.repository.count_dependents(code))

    def _require_fragment(self, fragment: Any, label: str) -> str:
        if not isinstance(fragment, str) or not fragment.strip():
            message = f"{label} to search for is required"
            raise ValidationError(message, [FieldError("query", message)])
        return fragment.strip()
