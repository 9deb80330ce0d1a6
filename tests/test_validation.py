"""Tests for field-level validation."""

import pytest
from datetime import date, timedelta

from spendtrack.domain.validation import (
    coerce_entry_id,
    validate_category_create,
    validate_category_update,
    validate_code,
    validate_entry_id,
    validate_establishment_create,
    validate_establishment_update,
    validate_expense_create,
    validate_expense_update,
    validate_period,
)

TODAY = date(2024, 6, 15)


def fields(result):
    return [error.field for error in result.errors]


def valid_entry(**overrides):
    data = {
        "entry_date": "2024-01-15",
        "payment_date": "2024-01-20",
        "amount": "45.50",
        "category_code": "FOOD",
        "establishment_code": "REST1",
    }
    data.update(overrides)
    return data


class TestCategoryValidation:
    """Tests for category validators."""

    def test_valid_category(self):
        assert validate_category_create({"code": "FOOD", "description": "Food"}).valid

    def test_missing_fields_all_reported(self):
        result = validate_category_create({})
        assert fields(result) == ["code", "description"]

    def test_blank_and_non_string_fields(self):
        result = validate_category_create({"code": "   ", "description": 42})
        assert fields(result) == ["code", "description"]
        assert result.errors[0].message == "Code cannot be empty"
        assert result.errors[1].message == "Description must be a string"

    def test_code_too_long(self):
        result = validate_category_create({"code": "X" * 51, "description": "Food"})
        assert fields(result) == ["code"]

    def test_update_only_checks_present_fields(self):
        assert validate_category_update({}).valid
        assert fields(validate_category_update({"description": ""})) == ["description"]


class TestEstablishmentValidation:
    """Tests for establishment validators."""

    def test_valid_establishment(self):
        data = {"code": "REST1", "name": "Cantina", "address": "Rua A, 10", "phone": "11999990000"}
        assert validate_establishment_create(data).valid

    def test_phone_too_long(self):
        data = {"code": "REST1", "name": "Cantina", "address": "Rua A", "phone": "1" * 21}
        assert fields(validate_establishment_create(data)) == ["phone"]

    def test_missing_fields_all_reported(self):
        assert fields(validate_establishment_create({"code": "REST1"})) == ["name", "address", "phone"]

    def test_update_only_checks_present_fields(self):
        assert validate_establishment_update({"name": "New name"}).valid
        assert fields(validate_establishment_update({"address": " "})) == ["address"]


class TestExpenseValidation:
    """Tests for expense entry validators."""

    def test_valid_entry(self):
        assert validate_expense_create(valid_entry(), today=TODAY).valid

    def test_entry_date_in_future(self):
        tomorrow = TODAY + timedelta(days=1)
        result = validate_expense_create(valid_entry(entry_date=tomorrow), today=TODAY)
        assert fields(result) == ["entry_date"]
        assert result.errors[0].message == "Entry date cannot be in the future"

    def test_entry_date_today_is_allowed(self):
        assert validate_expense_create(valid_entry(entry_date=TODAY), today=TODAY).valid

    def test_payment_date_may_be_in_future(self):
        result = validate_expense_create(
            valid_entry(payment_date=TODAY + timedelta(days=30)), today=TODAY
        )
        assert result.valid

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "1000000"])
    def test_invalid_amounts(self, amount):
        result = validate_expense_create(valid_entry(amount=amount), today=TODAY)
        assert fields(result) == ["amount"]

    def test_description_optional_but_bounded(self):
        assert validate_expense_create(valid_entry(description=None), today=TODAY).valid
        result = validate_expense_create(valid_entry(description="x" * 501), today=TODAY)
        assert fields(result) == ["description"]

    def test_all_errors_accumulated(self):
        result = validate_expense_create({}, today=TODAY)
        assert fields(result) == [
            "entry_date",
            "payment_date",
            "amount",
            "category_code",
            "establishment_code",
        ]

    def test_invalid_date_shape(self):
        result = validate_expense_create(valid_entry(payment_date="someday"), today=TODAY)
        assert fields(result) == ["payment_date"]

    def test_update_checks_only_present_fields(self):
        assert validate_expense_update({}, today=TODAY).valid
        assert validate_expense_update({"amount": "10"}, today=TODAY).valid
        result = validate_expense_update({"amount": "0", "category_code": ""}, today=TODAY)
        assert fields(result) == ["amount", "category_code"]


class TestKeysAndPeriods:
    """Tests for code, id and period validation."""

    def test_validate_code(self):
        assert validate_code("FOOD").valid
        assert not validate_code("").valid
        assert not validate_code(None).valid

    @pytest.mark.parametrize("value,expected", [(1, 1), ("42", 42), (" 7 ", 7)])
    def test_coerce_valid_ids(self, value, expected):
        assert coerce_entry_id(value) == expected

    @pytest.mark.parametrize(
        "value",
        [0, -1, "abc", "", "1.5", True, None, 2.0, "\u00b2", "\u0661", 2**63, str(2**70), "9" * 5000],
    )
    def test_coerce_invalid_ids(self, value):
        assert coerce_entry_id(value) is None
        assert not validate_entry_id(value).valid

    def test_valid_period(self):
        assert validate_period("2024-01-01", "2024-12-31").valid
        assert validate_period("2024-01-01", "2024-01-01").valid

    def test_period_end_before_start(self):
        result = validate_period("2024-02-01", "2024-01-01")
        assert fields(result) == ["end"]

    def test_period_longer_than_five_years(self):
        assert validate_period("2019-01-01", "2024-01-01").valid
        assert fields(validate_period("2019-01-01", "2024-01-02")) == ["end"]

    def test_period_missing_bounds(self):
        assert fields(validate_period(None, "bad")) == ["start", "end"]


def test_largest_storable_entry_id():
    assert coerce_entry_id(2**63 - 1) == 2**63 - 1
    assert coerce_entry_id(str(2**63 - 1)) == 2**63 - 1


def test_relative_entry_date_resolves_against_given_today():
    data = valid_entry(entry_date="today", payment_date="tomorrow")
    assert validate_expense_create(data, today=TODAY).valid
    assert validate_expense_update({"entry_date": "yesterday"}, today=TODAY).valid


def test_relative_period_resolves_against_given_today():
    assert validate_period("yesterday", "today", today=TODAY).valid
    assert fields(validate_period("today", "yesterday", today=TODAY)) == ["end"]
