"""Debt portfolio payoff simulator for debtpath

Simulates a set of debts month by month under an avalanche or snowball
prioritization strategy and reports the total-balance timeline, the total
interest paid, the payoff date and the order in which debts were retired.

Monthly step
------------
1. Pick the priority target among debts with a balance: highest rate
   (avalanche) or lowest balance (snowball). Ties keep input order.
2. Every debt with a balance accrues ``balance * APR / 100 / 12``.
3. Every debt receives its minimum payment; the target also receives the
   whole extra monthly amount. Principal paid is ``max(0, payment - interest)``.
4. Freed cash: the original minimum payments of all debts now at zero are
   applied to the target as additional principal. The total monthly output
   therefore stays constant as debts are retired (the snowball rollover).
5. Record ``{month, total_balance, total_interest_paid}``.

The loop stops when every balance is zero or after ``MAX_SIMULATION_MONTHS``
months. Reaching the cap is a valid outcome (``fully_paid`` is False), not
an error.

Design goals
------------
- Pure: inputs are never mutated; identical inputs give identical results.
- Deterministic dates: the start date is injectable (defaults to today).

Typical usage
-------------
>>> from datetime import date
>>> from debtpath.debts import DebtRecord
>>> debts = [
...     DebtRecord("a", "Store Card", 500, 20.0, 50),
...     DebtRecord("b", "Personal Loan", 2_000, 10.0, 80),
... ]
>>> sim = PayoffPlanSimulator(start=date(2025, 1, 1))
>>> result = sim.simulate(debts, extra_monthly_amount=100, strategy="avalanche")
>>> [event.id for event in result.debts_paid_order]
['a', 'b']
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .constants import (
    AVALANCHE,
    DEFAULT_STRATEGY,
    MAX_SIMULATION_MONTHS,
    RECOMMEND_AVALANCHE_THRESHOLD,
    SNOWBALL,
)
from .debts import DebtRecord, strategy_sort_key, validate_strategy
from .plotting import ResultPlottingMixin
from .utils import add_months, monthly_rate

__all__ = [
    "TimelinePoint",
    "PaidOffEvent",
    "SimulationResult",
    "StrategyComparison",
    "ExtraPaymentImpact",
    "PayoffPlanSimulator",
    "simulate_payoff_plan",
    "freed_cash",
    "compare_strategies",
    "extra_payment_impact",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimelinePoint:
    month: int
    total_balance: float
    total_interest_paid: float


@dataclass(frozen=True)
class PaidOffEvent:
    """A debt's balance first reached zero in ``month``."""
    id: str
    name: str
    month: int


@dataclass(frozen=True)
class SimulationResult(ResultPlottingMixin):
    """
    Outcome of a portfolio payoff simulation.

    Attributes
    ----------
    timeline : list of TimelinePoint
        Month 0 (starting balance, zero interest) through the final month.
    payoff_date : date
        ``start_date`` advanced by ``months`` calendar months.
    total_interest : float
        Interest accrued across the whole run.
    debts_paid_order : list of PaidOffEvent
        Debts in the order their balances reached zero.
    strategy : str
        Strategy used to pick each month's target.
    extra_monthly_amount : float
        Extra budget applied to the target each month.
    start_date : date
        Date month 0 is anchored to.
    """
    timeline: List[TimelinePoint]
    payoff_date: date
    total_interest: float
    debts_paid_order: List[PaidOffEvent]
    strategy: str = DEFAULT_STRATEGY
    extra_monthly_amount: float = 0.0
    start_date: date = field(default_factory=date.today)

    @property
    def months(self) -> int:
        """Number of simulated months (0 when nothing was owed)."""
        return self.timeline[-1].month if self.timeline else 0

    @property
    def final_balance(self) -> float:
        return self.timeline[-1].total_balance if self.timeline else 0.0

    @property
    def fully_paid(self) -> bool:
        """False when the month cap was reached with balance outstanding."""
        return self.final_balance <= 0

    @property
    def balance_path(self) -> np.ndarray:
        return np.array([p.total_balance for p in self.timeline], dtype=float)

    @property
    def interest_path(self) -> np.ndarray:
        return np.array([p.total_interest_paid for p in self.timeline], dtype=float)

    def payoff_month(self, debt_id: str) -> Optional[int]:
        """Month *debt_id* was paid off, or None if it never was."""
        for event in self.debts_paid_order:
            if event.id == debt_id:
                return event.month
        return None

    def to_frame(self) -> pd.DataFrame:
        """Timeline as a DataFrame indexed by month, with a calendar ``date`` column."""
        df = pd.DataFrame(
            {
                "month": [p.month for p in self.timeline],
                "date": [add_months(self.start_date, p.month) for p in self.timeline],
                "total_balance": self.balance_path,
                "total_interest_paid": self.interest_path,
            }
        )
        return df.set_index("month")

    def to_dict(self) -> dict:
        """JSON-ready dictionary; see ``debtpath.serialization.result_to_dict``."""
        from .serialization import result_to_dict

        return result_to_dict(self)


@dataclass(frozen=True)
class StrategyComparison:
    """Avalanche and snowball runs over the same debts and budget."""
    avalanche: SimulationResult
    snowball: SimulationResult

    @property
    def interest_saved(self) -> float:
        """Interest avalanche saves over snowball (negative if it costs more)."""
        return self.snowball.total_interest - self.avalanche.total_interest

    @property
    def months_saved(self) -> int:
        return self.snowball.months - self.avalanche.months

    @property
    def recommended_strategy(self) -> str:
        if self.interest_saved > RECOMMEND_AVALANCHE_THRESHOLD:
            return AVALANCHE
        return SNOWBALL


@dataclass(frozen=True)
class ExtraPaymentImpact:
    """A plan with no extra payment against the same plan with one."""
    baseline: SimulationResult
    accelerated: SimulationResult

    @property
    def interest_saved(self) -> float:
        return self.baseline.total_interest - self.accelerated.total_interest

    @property
    def months_saved(self) -> int:
        return self.baseline.months - self.accelerated.months


# ---------------------------------------------------------------------------
# Freed cash
# ---------------------------------------------------------------------------

def freed_cash(debts: Sequence[DebtRecord], balances: Sequence[float]) -> float:
    """
    Minimum payments no longer owed.

    Sums the original ``minimum_payment`` of every debt whose current
    balance (aligned by position with *debts*) is zero or below.
    """
    return float(sum(
        debt.minimum_payment
        for debt, balance in zip(debts, balances)
        if balance <= 0
    ))


# ---------------------------------------------------------------------------
# Simulator
# ---------------------------------------------------------------------------

class PayoffPlanSimulator:
    """Month-by-month payoff simulator for a portfolio of debts.

    Parameters
    ----------
    start : date, optional
        Date month 0 is anchored to; ``payoff_date`` is computed from it.
        Defaults to today at each ``simulate`` call.
    """

    def __init__(self, start: Optional[date] = None):
        self.start = start

    def simulate(
        self,
        debts: Sequence[DebtRecord],
        extra_monthly_amount: float = 0.0,
        strategy: str = DEFAULT_STRATEGY,
    ) -> SimulationResult:
        """
        Run the payoff simulation.

        Parameters
        ----------
        debts : sequence of DebtRecord
            Debts to pay off. Not modified.
        extra_monthly_amount : float, default 0.0
            Budget on top of the minimums, given entirely to the month's
            priority target.
        strategy : {"avalanche", "snowball"}
            Target selection rule.

        Returns
        -------
        SimulationResult

        Raises
        ------
        ValidationError
            If *strategy* is not a known strategy name.
        """
        validate_strategy(strategy)
        start = self.start or date.today()
        originals = list(debts)
        key = strategy_sort_key(strategy)
        rates = [monthly_rate(d.annual_rate_percent) for d in originals]
        balances = [float(d.balance) for d in originals]

        cumulative_interest = 0.0
        timeline = [TimelinePoint(0, float(sum(balances)), 0.0)]
        paid_order: List[PaidOffEvent] = []

        def mark_paid(i: int, month: int) -> None:
            paid_order.append(PaidOffEvent(originals[i].id, originals[i].name, month))

        month = 0
        while month < MAX_SIMULATION_MONTHS and any(b > 0 for b in balances):
            month += 1
            payable = [i for i, b in enumerate(balances) if b > 0]
            # min() keeps the first of equal keys, so ties go to input order
            target = min(payable, key=lambda i: key(balances[i], originals[i].annual_rate_percent))

            for i in payable:
                interest = balances[i] * rates[i]
                cumulative_interest += interest

                payment = originals[i].minimum_payment
                if i == target:
                    payment += extra_monthly_amount

                balances[i] -= max(0.0, payment - interest)
                if balances[i] <= 0:
                    balances[i] = 0.0
                    mark_paid(i, month)

            rollover = freed_cash(originals, balances)
            if rollover > 0 and balances[target] > 0:
                balances[target] = max(0.0, balances[target] - rollover)
                if balances[target] == 0:
                    mark_paid(target, month)

            timeline.append(TimelinePoint(month, float(sum(balances)), cumulative_interest))

        if any(b > 0 for b in balances):
            logger.info(
                "Payoff plan did not finish within %d months; %.2f outstanding",
                MAX_SIMULATION_MONTHS, sum(balances),
            )
        logger.debug(
            "Simulated %d debts with %s strategy: %d months, %.2f interest",
            len(originals), strategy, month, cumulative_interest,
        )

        return SimulationResult(
            timeline=timeline,
            payoff_date=add_months(start, month),
            total_interest=cumulative_interest,
            debts_paid_order=paid_order,
            strategy=strategy,
            extra_monthly_amount=float(extra_monthly_amount),
            start_date=start,
        )


def simulate_payoff_plan(
    debts: Sequence[DebtRecord],
    extra_monthly_amount: float = 0.0,
    strategy: str = DEFAULT_STRATEGY,
    *,
    start: Optional[date] = None,
) -> SimulationResult:
    """Functional shortcut for ``PayoffPlanSimulator(start).simulate(...)``."""
    return PayoffPlanSimulator(start=start).simulate(debts, extra_monthly_amount, strategy)


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------

def compare_strategies(
    debts: Sequence[DebtRecord],
    extra_monthly_amount: float = 0.0,
    *,
    start: Optional[date] = None,
) -> StrategyComparison:
    """Run avalanche and snowball on the same debts and budget."""
    simulator = PayoffPlanSimulator(start=start or date.today())
    return StrategyComparison(
        avalanche=simulator.simulate(debts, extra_monthly_amount, AVALANCHE),
        snowball=simulator.simulate(debts, extra_monthly_amount, SNOWBALL),
    )


def extra_payment_impact(
    debts: Sequence[DebtRecord],
    extra_monthly_amount: float,
    strategy: str = DEFAULT_STRATEGY,
    *,
    start: Optional[date] = None,
) -> ExtraPaymentImpact:
    """Compare minimum-only payments against paying *extra_monthly_amount* more."""
    simulator = PayoffPlanSimulator(start=start or date.today())
    return ExtraPaymentImpact(
        baseline=simulator.simulate(debts, 0.0, strategy),
        accelerated=simulator.simulate(debts, extra_monthly_amount, strategy),
    )
