"""
Unit tests for debts.py module.

Tests DebtRecord construction from mappings, strategy ordering and
aggregate helpers.
"""

import pytest

from debtpath.debts import (
    DebtRecord,
    sort_debts,
    strategy_sort_key,
    total_balance,
    total_minimum_payment,
    validate_strategy,
)
from debtpath.exceptions import DebtPathError, ValidationError


class TestDebtRecord:
    """Test DebtRecord creation."""

    def test_from_mapping_card_shape(self):
        """Credit-card shaped records map apr and minimumPayment."""
        debt = DebtRecord.from_mapping(
            {"id": "1", "name": "Visa", "balance": 4500, "apr": 23.0, "minimumPayment": 135}
        )
        assert debt == DebtRecord("1", "Visa", 4500.0, 23.0, 135.0)

    def test_from_mapping_loan_shape(self):
        """Loan shaped records map currentBalance, rate and monthlyPayment."""
        debt = DebtRecord.from_mapping(
            {"id": 7, "name": "Car", "currentBalance": "9000", "rate": 6.5, "monthlyPayment": 280}
        )
        assert debt.id == "7"
        assert debt.balance == 9000.0
        assert debt.annual_rate_percent == 6.5
        assert debt.minimum_payment == 280.0

    def test_from_mapping_name_defaults_to_id(self):
        debt = DebtRecord.from_mapping(
            {"id": "loan", "balance": 100, "annual_rate_percent": 5, "minimum_payment": 10}
        )
        assert debt.name == "loan"

    def test_from_mapping_missing_id(self):
        with pytest.raises(ValidationError, match="no 'id' field"):
            DebtRecord.from_mapping({"balance": 100, "apr": 5, "minimumPayment": 10})

    def test_from_mapping_missing_rate(self):
        """Missing fields raise a DebtPathError subclass."""
        with pytest.raises(DebtPathError, match="none of the fields"):
            DebtRecord.from_mapping({"id": "x", "balance": 100, "minimumPayment": 10})

    def test_is_paid(self):
        assert DebtRecord("a", "A", 0, 10, 10).is_paid
        assert not DebtRecord("a", "A", 0.01, 10, 10).is_paid

    def test_frozen(self):
        debt = DebtRecord("a", "A", 100, 10, 10)
        with pytest.raises(AttributeError):
            debt.balance = 0


class TestStrategyOrdering:
    """Test avalanche/snowball display ordering."""

    @pytest.fixture
    def debts(self):
        return [
            DebtRecord("car", "Car", 3_000, 6.5, 100),
            DebtRecord("visa", "Visa", 4_500, 23.0, 135),
            DebtRecord("store", "Store", 800, 23.0, 35),
        ]

    def test_avalanche_highest_rate_first(self, debts):
        ordered = sort_debts(debts, "avalanche")
        # visa and store share 23%; input order keeps visa first
        assert [d.id for d in ordered] == ["visa", "store", "car"]

    def test_snowball_lowest_balance_first(self, debts):
        ordered = sort_debts(debts, "snowball")
        assert [d.id for d in ordered] == ["store", "car", "visa"]

    def test_snowball_ties_keep_input_order(self):
        debts = [
            DebtRecord("first", "First", 500, 10, 20),
            DebtRecord("second", "Second", 500, 20, 20),
        ]
        assert [d.id for d in sort_debts(debts, "snowball")] == ["first", "second"]

    def test_sort_does_not_mutate_input(self, debts):
        before = list(debts)
        result = sort_debts(debts, "snowball")
        assert debts == before
        assert result is not debts

    def test_sort_empty(self):
        assert sort_debts([], "avalanche") == []

    def test_unknown_strategy(self, debts):
        with pytest.raises(ValidationError, match="strategy must be one of"):
            sort_debts(debts, "highest-balance")

    def test_validate_strategy_returns_name(self):
        assert validate_strategy("snowball") == "snowball"

    def test_sort_key(self):
        assert strategy_sort_key("avalanche")(100, 20.0) == -20.0
        assert strategy_sort_key("snowball")(100, 20.0) == 100


class TestAggregates:

    def test_total_balance(self):
        debts = [DebtRecord("a", "A", 100.5, 5, 10), DebtRecord("b", "B", 200, 5, 10)]
        assert total_balance(debts) == pytest.approx(300.5)

    def test_total_minimum_skips_paid_debts(self):
        debts = [DebtRecord("a", "A", 0, 5, 10), DebtRecord("b", "B", 200, 5, 25)]
        assert total_minimum_payment(debts) == 25.0
