"""Generic table-agnostic repository."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import ColumnElement, Table, delete, func, insert, literal, select, update

from spendtrack.database.gateway import StorageGateway
from spendtrack.database.models import Base
from spendtrack.domain.entities import ValidationResult
from spendtrack.domain.errors import ValidationError

logger = logging.getLogger(__name__)

E = TypeVar("E")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form the DateTime columns round-trip."""
    return datetime.now(UTC).replace(tzinfo=None)


@dataclass(frozen=True)
class EntitySchema(Generic[E]):
    """Everything the generic repository needs to know about one entity kind.

    Attributes:
        entity_name: Human-readable name used in messages and logs
        table_name: Table holding the entity
        primary_key: Primary key column name
        auto_key: True when storage generates the key on insert
        row_to_entity: Build an entity from a stored row
        create_to_row: Build the full insert row from a create payload and
            the writer's timestamp
        update_to_row: Build a sparse column->value mapping holding only the
            fields present in an update payload
        validate_create: Field validation for create payloads
        validate_update: Field validation for partial update payloads
    """

    entity_name: str
    table_name: str
    primary_key: str
    auto_key: bool
    row_to_entity: Callable[[Mapping[str, Any]], E]
    create_to_row: Callable[[Mapping[str, Any], datetime], dict[str, Any]]
    update_to_row: Callable[[Mapping[str, Any]], dict[str, Any]]
    validate_create: Callable[[Mapping[str, Any]], ValidationResult]
    validate_update: Callable[[Mapping[str, Any]], ValidationResult]


class Repository(Generic[E]):
    """CRUD over a single table, driven by an EntitySchema.

    Referential checks across tables are not enforced here; concrete
    repositories and services layer them on top.
    """

    def __init__(self, gateway: StorageGateway, schema: EntitySchema[E], clock: Optional[Clock] = None):
        """Initialize repository.

        Args:
            gateway: Storage gateway the repository issues statements through
            schema: Entity mapping and validation functions
            clock: Source of the created_at/updated_at timestamps
        """
        self.gateway = gateway
        self.schema = schema
        self.clock = clock or utcnow
        self.table: Table = Base.metadata.tables[schema.table_name]
        self.key_column = self.table.c[schema.primary_key]

    def _raise_if_invalid(self, validation: ValidationResult, action: str) -> None:
        if not validation.valid:
            raise ValidationError(
                f"Invalid data for {action} {self.schema.entity_name.lower()}",
                list(validation.errors),
            )

    def create(self, data: Mapping[str, Any]) -> E:
        """Validate, insert and return the stored entity.

        The entity is re-read after the insert so defaults and timestamps
        reflect what storage holds.

        Raises:
            ValidationError: If any field fails validation (storage untouched)
        """
        self._raise_if_invalid(self.schema.validate_create(data), "creating")

        row = self.schema.create_to_row(data, self.clock())
        result = self.gateway.execute(insert(self.table).values(**row))

        key = result.generated_key if self.schema.auto_key else row[self.schema.primary_key]
        created = self.find_by_id(key)
        if created is None:
            raise RuntimeError(f"Failed to retrieve created {self.schema.entity_name.lower()} {key!r}")
        logger.info("Created %s %r", self.schema.entity_name.lower(), key)
        return created

    def find_by_id(self, key: Any) -> Optional[E]:
        """Get entity by primary key, or None if absent."""
        row = self.gateway.query_one(select(self.table).where(self.key_column == key))
        return self.schema.row_to_entity(row) if row is not None else None

    def find_all(self) -> list[E]:
        """List all entities ordered by primary key."""
        rows = self.gateway.query_all(select(self.table).order_by(self.key_column))
        return [self.schema.row_to_entity(row) for row in rows]

    def update(self, key: Any, data: Mapping[str, Any]) -> Optional[E]:
        """Apply a partial update.

        Returns:
            The updated entity; the unchanged entity when the payload holds no
            updatable fields; None when no row has this key

        Raises:
            ValidationError: If a supplied field fails validation
        """
        self._raise_if_invalid(self.schema.validate_update(data), "updating")

        existing = self.find_by_id(key)
        if existing is None:
            return None

        row = self.schema.update_to_row(data)
        if not row:
            return existing

        row["updated_at"] = self.clock()
        self.gateway.execute(update(self.table).where(self.key_column == key).values(**row))
        logger.info("Updated %s %r (%s)", self.schema.entity_name.lower(), key, ", ".join(sorted(row)))
        return self.find_by_id(key)

    def delete(self, key: Any) -> bool:
        """Delete by primary key. Returns True if a row was removed."""
        result = self.gateway.execute(delete(self.table).where(self.key_column == key))
        removed = result.affected > 0
        if removed:
            logger.info("Deleted %s %r", self.schema.entity_name.lower(), key)
        return removed

    def exists(self, key: Any) -> bool:
        """Check whether a row with this primary key exists."""
        return self._exists_where(self.table, self.key_column == key)

    def count(self) -> int:
        """Count rows in the table."""
        return self._count_where(self.table)

    # Probes shared with concrete repositories

    def _exists_where(self, table: Table, condition: ColumnElement[bool]) -> bool:
        row = self.gateway.query_one(
            select(literal(1).label("found")).select_from(table).where(condition).limit(1)
        )
        return row is not None

    def _count_where(self, table: Table, condition: Optional[ColumnElement[bool]] = None) -> int:
        statement = select(func.count().label("total")).select_from(table)
        if condition is not None:
            statement = statement.where(condition)
        row = self.gateway.query_one(statement)
        return int(row["total"]) if row is not None else 0
