"""Tests for CLI commands."""

import pytest
from spendtrack.cli.main import cli
from spendtrack.cli.commands.seed import SAMPLE_CATEGORIES, SAMPLE_ESTABLISHMENTS
from spendtrack.domain.category import CategoryService
from spendtrack.domain.expense import ExpenseEntryService


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def parents(cli_runner, temp_db):
    invoke(cli_runner, temp_db, "category", "create", "FOOD", "Food and drinks")
    invoke(
        cli_runner,
        temp_db,
        "establishment",
        "create",
        "REST1",
        "--name",
        "Cantina Central",
        "--address",
        "Rua das Flores, 100",
        "--phone",
        "11999990000",
    )


def add_entry(cli_runner, temp_db, *extra):
    return invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "--date",
        "2024-01-15",
        "--amount",
        "45.50",
        "--category",
        "FOOD",
        "--establishment",
        "REST1",
        *extra,
    )


class TestCategoryCommands:
    """Tests for category commands."""

    def test_category_create(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "category", "create", "FOOD", "Food and drinks")

        assert result.exit_code == 0
        assert "Created category 'FOOD'" in result.output

    def test_category_create_duplicate(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "category", "create", "FOOD", "Again")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_category_create_blank_description(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "category", "create", "FOOD", " ")

        assert result.exit_code == 1
        assert "description: Description cannot be empty" in result.output

    def test_category_list(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "category", "list")

        assert result.exit_code == 0
        assert "FOOD" in result.output
        assert "Food and drinks" in result.output

    def test_category_list_empty(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "category", "list")

        assert result.exit_code == 0
        assert "No categories found." in result.output

    def test_category_show_and_update(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "category", "update", "FOOD", "--description", "Meals")
        assert result.exit_code == 0
        assert "Updated category 'FOOD' (Meals)" in result.output

        result = invoke(cli_runner, temp_db, "category", "show", "FOOD")
        assert result.exit_code == 0
        assert "Description: Meals" in result.output
        assert "Expense entries: 0" in result.output

    def test_category_delete_blocked(self, cli_runner, temp_db, parents):
        add_entry(cli_runner, temp_db)

        result = invoke(cli_runner, temp_db, "category", "delete", "FOOD")

        assert result.exit_code == 1
        assert "Cannot delete category 'FOOD'" in result.output
        assert "dependent entries: 1" in result.output
        assert CategoryService(temp_db).exists("FOOD")


class TestEstablishmentCommands:
    """Tests for establishment commands."""

    def test_establishment_list_and_search(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "establishment", "list")
        assert result.exit_code == 0
        assert "Cantina Central" in result.output

        result = invoke(cli_runner, temp_db, "establishment", "list", "--address", "Paulista")
        assert result.exit_code == 0
        assert "No establishments found." in result.output

    def test_establishment_delete(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "establishment", "delete", "REST1")

        assert result.exit_code == 0
        assert "Deleted establishment 'REST1'" in result.output

    def test_establishment_update_missing(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "establishment", "update", "NOPE", "--name", "X")

        assert result.exit_code == 1
        assert "Establishment 'NOPE' not found" in result.output


class TestExpenseCommands:
    """Tests for expense commands."""

    def test_expense_add(self, cli_runner, temp_db, parents):
        result = add_entry(cli_runner, temp_db, "--description", "Lunch")

        assert result.exit_code == 0
        assert "Created expense entry" in result.output
        assert "Amount: 45.50" in result.output
        assert "Description: Lunch" in result.output

    def test_expense_add_defaults_payment_to_entry_date(self, cli_runner, temp_db, parents):
        add_entry(cli_runner, temp_db)

        entries = ExpenseEntryService(temp_db).find_all()
        assert len(entries) == 1
        assert entries[0].payment_date == entries[0].entry_date

    def test_expense_add_payment_before_entry(self, cli_runner, temp_db, parents):
        result = add_entry(cli_runner, temp_db, "--paid", "2024-01-10")

        assert result.exit_code == 1
        assert "payment_date: Payment date cannot be earlier than the entry date" in result.output

    def test_expense_add_unknown_category(self, cli_runner, temp_db, parents):
        result = invoke(
            cli_runner,
            temp_db,
            "expense",
            "add",
            "--date",
            "2024-01-15",
            "--amount",
            "10",
            "--category",
            "GHOST",
            "--establishment",
            "REST1",
        )

        assert result.exit_code == 1
        assert "Category 'GHOST' not found" in result.output

    def test_expense_list(self, cli_runner, temp_db, parents):
        add_entry(cli_runner, temp_db, "--description", "Lunch")

        result = invoke(cli_runner, temp_db, "expense", "list")
        assert result.exit_code == 0
        assert "Found 1 expense entry" in result.output
        assert "Food and drinks" in result.output
        assert "Cantina Central" in result.output

        result = invoke(
            cli_runner, temp_db, "expense", "list", "--start-date", "2024-02-01", "--end-date", "2024-02-28"
        )
        assert result.exit_code == 0
        assert "No expense entries found." in result.output

    def test_expense_list_empty(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "expense", "list")

        assert result.exit_code == 0
        assert "No expense entries found." in result.output

    def test_expense_show_update_delete(self, cli_runner, temp_db, parents):
        add_entry(cli_runner, temp_db)
        entry_id = str(ExpenseEntryService(temp_db).find_all()[0].id)

        result = invoke(cli_runner, temp_db, "expense", "update", entry_id, "--amount", "150.555")
        assert result.exit_code == 0
        assert f"Updated expense entry {entry_id}" in result.output

        result = invoke(cli_runner, temp_db, "expense", "show", entry_id)
        assert result.exit_code == 0
        assert "Amount: 150.56" in result.output
        assert "Category: FOOD (Food and drinks)" in result.output

        result = invoke(cli_runner, temp_db, "expense", "delete", entry_id)
        assert result.exit_code == 0

        result = invoke(cli_runner, temp_db, "expense", "show", entry_id)
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_expense_show_invalid_id(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "expense", "show", "abc")

        assert result.exit_code == 1
        assert "id: Expense entry id must be a positive integer" in result.output

    def test_expense_show_non_ascii_digit_id(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "expense", "show", "\u00b2")

        assert result.exit_code == 1
        assert "Traceback" not in result.output
        assert "id: Expense entry id must be a positive integer" in result.output

    def test_expense_stats(self, cli_runner, temp_db, parents):
        add_entry(cli_runner, temp_db)
        add_entry(cli_runner, temp_db)

        result = invoke(cli_runner, temp_db, "expense", "stats")
        assert result.exit_code == 0
        assert "Entries: 2" in result.output
        assert "Total: 91.00" in result.output

        result = invoke(cli_runner, temp_db, "expense", "stats", "--category", "FOOD")
        assert result.exit_code == 0
        assert "Total for category FOOD: 91.00" in result.output


class TestSeedCommand:
    """Tests for the seed command."""

    def test_seed(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "seed")

        assert result.exit_code == 0
        expected = len(SAMPLE_CATEGORIES) + len(SAMPLE_ESTABLISHMENTS)
        assert f"Created {expected} records." in result.output
        assert CategoryService(temp_db).exists("ALIMENTACAO")

    def test_seed_refuses_when_data_exists(self, cli_runner, temp_db):
        invoke(cli_runner, temp_db, "seed")

        result = invoke(cli_runner, temp_db, "seed")
        assert "already exists" in result.output.lower()

    def test_seed_force_skips_existing(self, cli_runner, temp_db, parents):
        result = invoke(cli_runner, temp_db, "seed", "--force")

        assert result.exit_code == 0
        assert f"Created {len(SAMPLE_CATEGORIES) + len(SAMPLE_ESTABLISHMENTS)} records." in result.output
