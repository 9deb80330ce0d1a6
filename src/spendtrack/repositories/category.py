"""Category repository."""

from typing import Optional

from sqlalchemy import select

from spendtrack.database import mappers
from spendtrack.database.gateway import StorageGateway
from spendtrack.database.models import Base
from spendtrack.domain.entities import Category
from spendtrack.domain.errors import ReferentialIntegrityError, delete_blocked
from spendtrack.domain.validation import validate_category_create, validate_category_update
from spendtrack.repositories.base import Clock, EntitySchema, Repository

CATEGORY_SCHEMA: EntitySchema[Category] = EntitySchema(
    entity_name="Category",
    table_name="categories",
    primary_key="code",
    auto_key=False,
    row_to_entity=mappers.category_to_domain,
    create_to_row=mappers.category_create_row,
    update_to_row=mappers.category_update_row,
    validate_create=validate_category_create,
    validate_update=validate_category_update,
)


class CategoryRepository(Repository[Category]):
    """Categories plus the dependent-entry probes that gate deletion."""

    def __init__(self, gateway: StorageGateway, clock: Optional[Clock] = None):
        super().__init__(gateway, CATEGORY_SCHEMA, clock)
        self.entries = Base.metadata.tables["expense_entries"]

    def exists_by_code(self, code: str) -> bool:
        """Check whether a category with this code exists."""
        return self.exists(code)

    def has_dependents(self, code: str) -> bool:
        """Check whether any expense entry references this category."""
        return self._exists_where(self.entries, self.entries.c.category_code == code)

    def count_dependents(self, code: str) -> int:
        """Count expense entries referencing this category."""
        return self._count_where(self.entries, self.entries.c.category_code == code)

    def delete(self, code: str) -> bool:
        """Delete a category that no expense entry references.

        Raises:
            ReferentialIntegrityError: If expense entries still reference it
        """
        if self.has_dependents(code):
            count = self.count_dependents(code)
            raise ReferentialIntegrityError(delete_blocked("Category", code, count), count)
        return super().delete(code)

    def search_by_description(self, fragment: str) -> list[Category]:
        """Find categories whose description contains fragment, ordered by description."""
        rows = self.gateway.query_all(
            select(self.table)
            .where(self.table.c.description.contains(fragment, autoescape=True))
            .order_by(self.table.c.description)
        )
        return [self.schema.row_to_entity(row) for row in rows]
