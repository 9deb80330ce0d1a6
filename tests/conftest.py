"""Shared pytest fixtures for spendtrack tests."""

import itertools
import os
import tempfile
from datetime import date, datetime, timedelta

import pytest

from spendtrack.database.factories import create_sqlite_gateway
from spendtrack.domain.category import CategoryService
from spendtrack.domain.establishment import EstablishmentService
from spendtrack.domain.expense import ExpenseEntryService

TODAY = date(2024, 6, 15)


@pytest.fixture
def temp_db():
    """Create a gateway over a temporary database file."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    gateway = create_sqlite_gateway(database_path=db_path)
    # Store the path for tests that need it
    gateway.database_path = db_path
    gateway.connect()
    gateway.initialize_schema()

    yield gateway

    # Cleanup
    gateway.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Deterministic clock that advances one second per call."""
    start = datetime(2024, 6, 15, 9, 0, 0)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def today():
    """Fixed current date for the date rules."""
    return lambda: TODAY


@pytest.fixture
def category_service(temp_db, clock):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db, clock=clock)


@pytest.fixture
def establishment_service(temp_db, clock):
    """Create an EstablishmentService with a temporary database."""
    return EstablishmentService(temp_db, clock=clock)


@pytest.fixture
def expense_service(temp_db, clock, today):
    """Create an ExpenseEntryService with a temporary database and fixed today."""
    return ExpenseEntryService(temp_db, clock=clock, today=today)


@pytest.fixture
def sample_category(category_service):
    """Create a sample category for testing."""
    return category_service.create({"code": "FOOD", "description": "Food and drinks"})


@pytest.fixture
def sample_establishment(establishment_service):
    """Create a sample establishment for testing."""
    return establishment_service.create(
        {
            "code": "REST1",
            "name": "Cantina Central",
            "address": "Rua das Flores, 100 - Sao Paulo",
            "phone": "11999990000",
        }
    )


@pytest.fixture
def entry_data(sample_category, sample_establishment):
    """Valid create payload referencing the sample parents."""
    return {
        "entry_date": "2024-01-15",
        "payment_date": "2024-01-20",
        "amount": "45.50",
        "category_code": sample_category.code,
        "establishment_code": sample_establishment.code,
        "description": "Lunch",
    }


@pytest.fixture
def sample_entry(expense_service, entry_data):
    """Create a sample expense entry for testing."""
    return expense_service.create(entry_data)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
