"""Repositories: table-level CRUD and referential probes."""

from spendtrack.repositories.base import EntitySchema, Repository
from spendtrack.repositories.category import CategoryRepository
from spendtrack.repositories.establishment import EstablishmentRepository
from spendtrack.repositories.expense import ExpenseEntryRepository

__all__ = [
    "EntitySchema",
    "Repository",
    "CategoryRepository",
    "EstablishmentRepository",
    "ExpenseEntryRepository",
]
