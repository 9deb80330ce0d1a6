"""Establishment repository."""

from typing import Optional

from sqlalchemy import select

from spendtrack.database import mappers
from spendtrack.database.gateway import StorageGateway
from spendtrack.database.models import Base
from spendtrack.domain.entities import Establishment
from spendtrack.domain.errors import ReferentialIntegrityError, delete_blocked
from spendtrack.domain.validation import (
    validate_establishment_create,
    validate_establishment_update,
)
from spendtrack.repositories.base import Clock, EntitySchema, Repository

ESTABLISHMENT_SCHEMA: EntitySchema[Establishment] = EntitySchema(
    entity_name="Establishment",
    table_name="establishments",
    primary_key="code",
    auto_key=False,
    row_to_entity=mappers.establishment_to_domain,
    create_to_row=mappers.establishment_create_row,
    update_to_row=mappers.establishment_update_row,
    validate_create=validate_establishment_create,
    validate_update=validate_establishment_update,
)


class EstablishmentRepository(Repository[Establishment]):
    """Establishments plus the dependent-entry probes that gate deletion."""

    def __init__(self, gateway: StorageGateway, clock: Optional[Clock] = None):
        super().__init__(gateway, ESTABLISHMENT_SCHEMA, clock)
        self.entries = Base.metadata.tables["expense_entries"]

    def exists_by_code(self, code: str) -> bool:
        return self.exists(code)

    def has_dependents(self, code: str) -> bool:
        return self._exists_where(self.entries, self.entries.c.establishment_code == code)

    def count_dependents(self, code: str) -> int:
        return self._count_where(self.entries, self.entries.c.establishment_code == code)

    def delete(self, code: str) -> bool:
        """Delete an establishment that no expense entry references.

        Raises:
            ReferentialIntegrityError: If expense entries still reference it
        """
        if self.has_dependents(code):
            count = self.count_dependents(code)
            raise ReferentialIntegrityError(delete_blocked("Establishment", code, count), count)
        return super().delete(code)

    def search_by_name(self, fragment: str) -> list[Establishment]:
        rows = self.gateway.query_all(
            select(self.table)
            .where(self.table.c.name.contains(fragment, autoescape=True))
            .order_by(self.table.c.name)
        )
        return [self.schema.row_to_entity(row) for row in rows]

    def search_by_address(self, fragment: str) -> list[Establishment]:
        rows = self.gateway.query_all(
            select(self.table)
            .where(self.table.c.address.contains(fragment, autoescape=True))
            .order_by(self.table.c.name)
        )
        return [self.schema.row_to_entity(row) for row in rows]
