"""Expense entry repository."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select

from spendtrack.database import mappers
from spendtrack.database.gateway import StorageGateway
from spendtrack.database.models import Base
from spendtrack.domain.entities import ExpenseEntry, ExpenseEntryDetail
from spendtrack.domain.validation import validate_expense_create, validate_expense_update
from spendtrack.repositories.base import Clock, EntitySchema, Repository
from spendtrack.utils.amount_parser import parse_amount, round_amount


class ExpenseEntryRepository(Repository[ExpenseEntry]):
    """Expense entries, keyed by a storage-generated integer id.

    Exposes the parent existence probes; the service layer is the single
    place that calls them before a write.
    """

    def __init__(
        self,
        gateway: StorageGateway,
        clock: Optional[Clock] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """Initialize repository.

        Args:
            gateway: Storage gateway
            clock: Source of the created_at/updated_at timestamps
            today: Source of the current date for the "entry date is not in
                the future" check (defaults to date.today)
        """
        self.today = today or date.today
        schema: EntitySchema[ExpenseEntry] = EntitySchema(
            entity_name="Expense entry",
            table_name="expense_entries",
            primary_key="id",
            auto_key=True,
            row_to_entity=mappers.expense_entry_to_domain,
            create_to_row=lambda data, now: mappers.expense_entry_create_row(data, now, today=self.today()),
            update_to_row=lambda data: mappers.expense_entry_update_row(data, today=self.today()),
            validate_create=lambda data: validate_expense_create(data, today=self.today()),
            validate_update=lambda data: validate_expense_update(data, today=self.today()),
        )
        super().__init__(gateway, schema, clock)
        self.categories = Base.metadata.tables["categories"]
        self.establishments = Base.metadata.tables["establishments"]

    def category_exists(self, code: str) -> bool:
        return self._exists_where(self.categories, self.categories.c.code == code)

    def establishment_exists(self, code: str) -> bool:
        return self._exists_where(self.establishments, self.establishments.c.code == code)

    # Joined reads

    def _detailed_select(self):
        entries = self.table
        return (
            select(
                entries,
                self.categories.c.description.label("category_description"),
                self.establishments.c.name.label("establishment_name"),
            )
            .select_from(
                entries.outerjoin(self.categories, entries.c.category_code == self.categories.c.code)
                .outerjoin(
                    self.establishments,
                    entries.c.establishment_code == self.establishments.c.code,
                )
            )
        )

    def _newest_first(self, statement):
        return statement.order_by(self.table.c.entry_date.desc(), self.table.c.id.desc())

    def find_by_id_detailed(self, entry_id: int) -> Optional[ExpenseEntryDetail]:
        """Get an entry with its category description and establishment name."""
        row = self.gateway.query_one(self._detailed_select().where(self.table.c.id == entry_id))
        return mappers.expense_entry_detail_to_domain(row) if row is not None else None

    def find_all_detailed(self) -> list[ExpenseEntryDetail]:
        """List all entries with parent details, newest entry date first."""
        rows = self.gateway.query_all(self._newest_first(self._detailed_select()))
        return [mappers.expense_entry_detail_to_domain(row) for row in rows]

    def find_by_category(self, code: str) -> list[ExpenseEntryDetail]:
        rows = self.gateway.query_all(
            self._newest_first(self._detailed_select().where(self.table.c.category_code == code))
        )
        return [mappers.expense_entry_detail_to_domain(row) for row in rows]

    def find_by_establishment(self, code: str) -> list[ExpenseEntryDetail]:
        rows = self.gateway.query_all(
            self._newest_first(
                self._detailed_select().where(self.table.c.establishment_code == code)
            )
        )
        return [mappers.expense_entry_detail_to_domain(row) for row in rows]

    def find_by_period(self, start: date, end: date) -> list[ExpenseEntryDetail]:
        """List entries whose entry date lies in [start, end]."""
        rows = self.gateway.query_all(
            self._newest_first(
                self._detailed_select().where(self.table.c.entry_date.between(start, end))
            )
        )
        return [mappers.expense_entry_detail_to_domain(row) for row in rows]

    # Totals

    def _sum_amount(self, condition=None) -> Decimal:
        statement = select(func.coalesce(func.sum(self.table.c.amount), 0).label("total"))
        if condition is not None:
            statement = statement.where(condition)
        row = self.gateway.query_one(statement)
        return round_amount(parse_amount(row["total"] if row is not None else 0))

    def total_by_category(self, code: Optional[str] = None) -> Decimal:
        """Sum of amounts, optionally restricted to one category."""
        if code is None:
            return self._sum_amount()
        return self._sum_amount(self.table.c.category_code == code)

    def total_by_establishment(self, code: Optional[str] = None) -> Decimal:
        """Sum of amounts, optionally restricted to one establishment."""
        if code is None:
            return self._sum_amount()
        return self._sum_amount(self.table.c.establishment_code == code)
