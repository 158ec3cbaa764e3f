"""
Type definitions for debtpath.

Purpose
-------
TypedDict definitions for the dictionary shapes written to and read from
JSON (see ``debtpath.serialization``). The in-memory results are frozen
dataclasses; these types document what their serialized form looks like.

Usage
-----
>>> from debtpath.types import TimelinePointDict
>>> point: TimelinePointDict = {
...     "month": 0, "total_balance": 6_375.5, "total_interest_paid": 0.0
... }

Type Definitions
----------------
DebtDict
    One debt record: {"id", "name", "balance", "annual_rate_percent", "minimum_payment"}

AmortizationRowDict
    One schedule row: {"month", "payment", "principal", "interest", "balance"}

TimelinePointDict
    One simulated month: {"month", "total_balance", "total_interest_paid"}

PaidOffDict
    Payoff event: {"id", "name", "month"}

SimulationResultDict
    Full simulation output with schema version and inputs.

StrategyComparisonDict
    Avalanche vs snowball summary.
"""

from typing import List, Optional
from typing_extensions import NotRequired, TypedDict

__all__ = [
    "DebtDict",
    "AmortizationRowDict",
    "TimelinePointDict",
    "PaidOffDict",
    "SimulationResultDict",
    "StrategyComparisonDict",
]


class DebtDict(TypedDict):
    """
    Serialized DebtRecord.

    Attributes
    ----------
    id : str
        Opaque identifier, unique within a plan.
    name : str
        Display label.
    balance : float
        Outstanding balance.
    annual_rate_percent : float
        Nominal annual rate in percent.
    minimum_payment : float
        Monthly minimum payment.
    """

    id: str
    name: str
    balance: float
    annual_rate_percent: float
    minimum_payment: float


class AmortizationRowDict(TypedDict):
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class TimelinePointDict(TypedDict):
    """
    One month of a portfolio simulation.

    Month 0 carries the starting total balance and zero interest.
    """

    month: int
    total_balance: float
    total_interest_paid: float


class PaidOffDict(TypedDict):
    id: str
    name: str
    month: int


class SimulationResultDict(TypedDict):
    """
    Serialized SimulationResult.

    Attributes
    ----------
    schema_version : str
        Version of the file layout.
    strategy : str
        "avalanche" or "snowball".
    extra_monthly_amount : float
        Extra budget applied to the priority debt each month.
    start_date : str
        ISO date the simulation was anchored to.
    payoff_date : str
        ISO date of the final simulated month.
    months : int
        Number of simulated months.
    fully_paid : bool
        False when the iteration cap was reached with balance outstanding.
    total_interest : float
        Cumulative interest across the run.
    debts_paid_order : list of PaidOffDict
        Chronological payoff events.
    timeline : list of TimelinePointDict
        Month-by-month totals starting at month 0.
    """

    schema_version: str
    strategy: str
    extra_monthly_amount: float
    start_date: str
    payoff_date: str
    months: int
    fully_paid: bool
    total_interest: float
    debts_paid_order: List[PaidOffDict]
    timeline: List[TimelinePointDict]
    plan_name: NotRequired[Optional[str]]


class StrategyComparisonDict(TypedDict):
    avalanche_months: int
    snowball_months: int
    avalanche_interest: float
    snowball_interest: float
    interest_saved: float
    months_saved: int
    recommended_strategy: str
