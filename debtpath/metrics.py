"""
Portfolio health metrics for debtpath.

Purpose
-------
Small ratio and total helpers shown next to payoff plans: credit
utilization, available credit, debt-to-income, monthly bill totals and
mortgage equity figures. Like the calculators they are total: a zero
denominator yields 0 rather than an error.

Example
-------
>>> credit_utilization(4_500, 8_000)
56
>>> loan_to_value(240_000, 300_000)
80.0
"""

from __future__ import annotations

from typing import Iterable, Mapping, Union

from .constants import BILL_FREQUENCY_FACTORS
from .utils import round_half_up

__all__ = [
    "credit_utilization",
    "available_credit",
    "debt_to_income",
    "monthly_bill_amount",
    "monthly_bill_total",
    "home_equity",
    "equity_percentage",
    "loan_to_value",
    "total_housing_cost",
]


# ---------------------------------------------------------------------------
# Credit cards
# ---------------------------------------------------------------------------

def credit_utilization(balance: float, limit: float) -> int:
    """Balance as a whole percentage of the credit limit (0 when limit <= 0)."""
    if limit <= 0:
        return 0
    return int(round_half_up(balance / limit * 100, 0))


def available_credit(balance: float, limit: float) -> float:
    return max(0.0, limit - balance)


def debt_to_income(total_monthly_debt: float, monthly_income: float) -> float:
    """Monthly debt payments as a percentage of monthly income (0 without income)."""
    if monthly_income <= 0:
        return 0.0
    return total_monthly_debt / monthly_income * 100


# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------

def monthly_bill_amount(amount: float, frequency: str = "monthly") -> float:
    """
    Convert a bill amount at *frequency* to a monthly amount.

    Frequencies outside weekly, bi-weekly, monthly, quarterly and annually
    are taken as monthly: the amount is returned unchanged.
    """
    return amount * BILL_FREQUENCY_FACTORS.get(frequency, 1.0)


def monthly_bill_total(bills: Iterable[Mapping[str, Union[float, str]]]) -> float:
    """Sum of bills normalized to monthly amounts.

    Each bill is a mapping with ``amount`` and an optional ``frequency``
    (default monthly).
    """
    return float(sum(
        monthly_bill_amount(float(bill["amount"]), str(bill.get("frequency", "monthly")))
        for bill in bills
    ))


# ---------------------------------------------------------------------------
# Mortgages
# ---------------------------------------------------------------------------

def home_equity(property_value: float, loan_balance: float) -> float:
    return max(0.0, property_value - loan_balance)


def equity_percentage(property_value: float, loan_balance: float) -> float:
    if property_value <= 0:
        return 0.0
    return home_equity(property_value, loan_balance) / property_value * 100


def loan_to_value(loan_balance: float, property_value: float) -> float:
    """Loan balance as a percentage of property value (0 without a value)."""
    if property_value <= 0:
        return 0.0
    return loan_balance / property_value * 100


def total_housing_cost(
    principal_and_interest: float,
    property_tax: float = 0.0,
    insurance: float = 0.0,
    hoa: float = 0.0,
    pmi: float = 0.0,
) -> float:
    """Monthly housing cost: P&I plus tax, insurance, HOA and PMI."""
    return principal_and_interest + property_tax + insurance + hoa + pmi
