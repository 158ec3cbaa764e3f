"""
Pytest configuration and fixtures for the debtpath test suite.

Fixtures provide small, hand-checkable debt portfolios and a fixed start
date so payoff dates are deterministic.
"""

import json
from datetime import date
from typing import List

import pytest

from debtpath.config import DebtConfig, PlanConfig
from debtpath.debts import DebtRecord


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start_date() -> date:
    """Standard start date for tests."""
    return date(2025, 1, 15)


# ---------------------------------------------------------------------------
# Debt Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def single_card() -> DebtRecord:
    """
    One credit card.

    Balance: 1,000 at 24% APR, 50/month minimum (26 months to pay off)
    """
    return DebtRecord("card", "Card", 1_000, 24.0, 50)


@pytest.fixture
def two_debts() -> List[DebtRecord]:
    """
    Small high-rate card and a larger low-rate loan.

    A: 500 @ 20%, min 50
    B: 2,000 @ 10%, min 80
    """
    return [
        DebtRecord("a", "Store Card", 500, 20.0, 50),
        DebtRecord("b", "Personal Loan", 2_000, 10.0, 80),
    ]


@pytest.fixture
def mixed_debts() -> List[DebtRecord]:
    """
    Portfolio where avalanche and snowball pick different first targets.

    X: 5,000 @ 25% (highest rate)
    Y: 1,000 @ 5% (smallest balance)
    Z: 2,500 @ 12%
    """
    return [
        DebtRecord("x", "Rewards Card", 5_000, 25.0, 100),
        DebtRecord("y", "Family Loan", 1_000, 5.0, 30),
        DebtRecord("z", "Auto Loan", 2_500, 12.0, 60),
    ]


# ---------------------------------------------------------------------------
# Plan Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan(start_date) -> PlanConfig:
    """Three-debt plan with card and loan shaped inputs."""
    return PlanConfig(
        name="Test plan",
        debts=[
            DebtConfig(id="visa", name="Visa", balance=4_500, apr=23.0, minimumPayment=135),
            DebtConfig(id="store", name="Store Card", balance=800, apr=26.99, minimumPayment=35),
            DebtConfig(id="car", name="Car Loan", currentBalance=9_000, rate=6.5, monthlyPayment=280),
        ],
        extra_monthly_amount=200,
        strategy="avalanche",
        start_date=start_date,
    )


@pytest.fixture
def plan_file(tmp_path, start_date):
    """Plan file on disk, written as raw JSON."""
    data = {
        "schema_version": "0.1.0",
        "name": "File plan",
        "debts": [
            {"id": "a", "name": "Store Card", "balance": 500, "apr": 20.0, "minimumPayment": 50},
            {"id": "b", "name": "Personal Loan", "currentBalance": 2000, "rate": 10.0,
             "monthlyPayment": 80},
        ],
        "extra_monthly_amount": 100,
        "strategy": "avalanche",
        "start_date": start_date.isoformat(),
    }
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(data))
    return path
