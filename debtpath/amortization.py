"""
Single-debt amortization calculator for debtpath.

Purpose
-------
Closed-form payoff arithmetic for one debt (months to payoff, total
interest, payoff-date label), the fixed-payment annuity formula, and a
month-by-month amortization schedule for a fixed-term loan, plus the
prepayment, PMI-removal and refinance scenarios built on the same loop.

Mathematical Framework
----------------------
With balance B, monthly periodic rate r = APR / 100 / 12 and payment P:

    months = ceil( -ln(1 - B·r / P) / ln(1 + r) )        (P > B·r)

The fixed payment amortizing principal L over n months:

    P = L · r(1 + r)^n / ((1 + r)^n - 1)

Total interest is estimated as P·months - B. This closed-form estimate is
deliberately independent of the iterative simulator in
``debtpath.simulation``: the two can differ by a final partial month or a
few cents, and callers cross-checking them should allow that tolerance.

Sentinels
---------
Every function here is total. ``math.inf`` means "never pays off", 0 means
"already paid / not applicable", and "N/A" is the label for both. Schedules
are bounded by ``term_months + SCHEDULE_BUFFER_MONTHS`` rows.

Example
-------
>>> from debtpath.amortization import months_to_payoff, total_interest
>>> months = months_to_payoff(1_000, 24.0, 50)
>>> months
26
>>> round(total_interest(1_000, 50, months), 2)
300.0
>>> months_to_payoff(1_000, 24.0, 15)
inf
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import List, Optional, Sequence, Union

import pandas as pd

from .constants import (
    NOT_APPLICABLE,
    PAYOFF_DATE_FORMAT,
    PMI_REMOVAL_LTV,
    PMI_SEARCH_MONTHS,
    REFINANCE_BREAK_EVEN_LIMIT,
    SCHEDULE_BUFFER_MONTHS,
)
from .metrics import loan_to_value
from .utils import add_months, is_finite_months, monthly_rate, round_half_up

__all__ = [
    "AmortizationRow",
    "PayoffComparison",
    "PrepaymentScenario",
    "RefinanceAnalysis",
    "ScheduleTotals",
    "months_to_payoff",
    "total_interest",
    "payoff_date",
    "payoff_date_label",
    "fixed_payment",
    "amortization_schedule",
    "schedule_to_frame",
    "schedule_totals",
    "payoff_comparison",
    "prepayment_scenario",
    "pmi_removal_date",
    "refinance_analysis",
]


Months = Union[int, float]
"""A whole number of months, or ``math.inf`` for never."""


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AmortizationRow:
    """One month of an amortization schedule.

    ``payment`` is the amount actually paid (principal + interest), which is
    smaller than the nominal payment on the final row.
    """
    month: int
    payment: float
    principal: float
    interest: float
    balance: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ScheduleTotals:
    months: int
    total_interest: float
    total_paid: float


@dataclass(frozen=True)
class PrepaymentScenario:
    """Regular schedule vs the same loan with an extra monthly payment."""
    regular: ScheduleTotals
    accelerated: ScheduleTotals
    extra_payment: float

    @property
    def interest_saved(self) -> float:
        return self.regular.total_interest - self.accelerated.total_interest

    @property
    def months_saved(self) -> int:
        return self.regular.months - self.accelerated.months


@dataclass(frozen=True)
class RefinanceAnalysis:
    """
    Keeping the current loan vs refinancing the remaining balance.

    ``break_even_months`` is ``math.inf`` when the new payment is not lower
    than the current one.
    """
    balance: float
    current_payment: float
    remaining_months: int
    current_interest: float
    new_payment: float
    new_term_months: int
    new_interest: float
    closing_costs: float

    @property
    def monthly_difference(self) -> float:
        return self.current_payment - self.new_payment

    @property
    def interest_saved(self) -> float:
        """Interest avoided, net of closing costs."""
        return self.current_interest - (self.new_interest + self.closing_costs)

    @property
    def break_even_months(self) -> float:
        if self.monthly_difference <= 0:
            return math.inf
        return self.closing_costs / self.monthly_difference

    @property
    def worth_it(self) -> bool:
        return (
            self.interest_saved > 0
            and self.break_even_months < REFINANCE_BREAK_EVEN_LIMIT
        )


@dataclass(frozen=True)
class PayoffComparison:
    """
    Minimum-payment-only payoff vs minimum plus an extra amount.

    Month counts may be ``math.inf``. When only the minimum-only plan never
    pays off, ``months_saved`` and ``interest_saved`` are ``math.inf``; when
    neither plan pays off both are 0.
    """
    months_minimum: Months
    interest_minimum: float
    months_with_extra: Months
    interest_with_extra: float

    @property
    def months_saved(self) -> Months:
        if math.isinf(self.months_with_extra):
            return 0
        if math.isinf(self.months_minimum):
            return math.inf
        return self.months_minimum - self.months_with_extra

    @property
    def interest_saved(self) -> float:
        if math.isinf(self.months_with_extra):
            return 0.0
        if math.isinf(self.months_minimum):
            return math.inf
        return self.interest_minimum - self.interest_with_extra


# ---------------------------------------------------------------------------
# Closed-form payoff
# ---------------------------------------------------------------------------

def months_to_payoff(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
) -> Months:
    """
    Number of monthly payments needed to clear *balance*.

    Parameters
    ----------
    balance : float
        Outstanding balance.
    annual_rate_percent : float
        Nominal annual rate in percent.
    monthly_payment : float
        Fixed monthly payment.

    Returns
    -------
    int or float
        0 if the balance is already paid, ``math.inf`` if the payment is
        non-positive or does not exceed the interest accruing on the balance
        (``payment <= balance * r``), otherwise the ceiling of the closed
        form (a fractional final month still requires a payment).
    """
    if balance <= 0:
        return 0
    if monthly_payment <= 0:
        return math.inf

    r = monthly_rate(annual_rate_percent)
    if monthly_payment <= balance * r:
        return math.inf
    if r == 0:
        return math.ceil(balance / monthly_payment)

    months = -math.log(1.0 - balance * r / monthly_payment) / math.log(1.0 + r)
    return math.ceil(months)


def total_interest(balance: float, monthly_payment: float, months: Months) -> float:
    """
    Estimate total interest as total paid minus principal.

    Returns 0 when *months* is infinite or non-positive, otherwise
    ``max(0, monthly_payment * months - balance)``.
    """
    if math.isinf(months) or months <= 0:
        return 0.0
    return max(0.0, monthly_payment * months - balance)


def payoff_date(months: Months, start: Optional[date] = None) -> Optional[date]:
    """Calendar date *months* after *start* (default today); None when not applicable."""
    if not is_finite_months(months):
        return None
    return add_months(start or date.today(), int(months))


def payoff_date_label(
    months: Months,
    start: Optional[date] = None,
    date_format: str = PAYOFF_DATE_FORMAT,
) -> str:
    """
    Human-readable payoff month, e.g. ``"Mar 2028"``.

    Returns ``"N/A"`` when *months* is non-positive or infinite.
    """
    when = payoff_date(months, start)
    if when is None:
        return NOT_APPLICABLE
    return when.strftime(date_format)


# ---------------------------------------------------------------------------
# Fixed-term loans
# ---------------------------------------------------------------------------

def fixed_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Level monthly payment that amortizes *principal* over *term_months*.

    Returns 0 for a non-positive term or principal and ``principal / term``
    at a zero rate. Otherwise applies the annuity formula and rounds half-up
    to the cent.

    Examples
    --------
    >>> fixed_payment(1_000, 12.0, 12)
    88.85
    """
    if term_months <= 0 or principal <= 0:
        return 0.0
    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return principal / term_months

    growth = (1.0 + r) ** term_months
    payment = principal * (r * growth) / (growth - 1.0)
    return round_half_up(payment, 2)


def amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    monthly_payment: Optional[float] = None,
) -> List[AmortizationRow]:
    """
    Month-by-month amortization of a fixed-term loan.

    Parameters
    ----------
    principal : float
        Starting balance.
    annual_rate_percent : float
        Nominal annual rate in percent.
    term_months : int
        Nominal term. The schedule may run up to
        ``term_months + SCHEDULE_BUFFER_MONTHS`` rows when the payment is
        too small to finish within the term.
    monthly_payment : float, optional
        Payment to apply each month. Defaults to ``fixed_payment(...)``.

    Returns
    -------
    list of AmortizationRow
        Fresh list, one row per month, stopping the month the balance
        reaches exactly 0.

    Notes
    -----
    Principal paid is clamped to ``[0, balance]``: the final row pays only
    what remains, and a payment at or below the interest leaves the balance
    unchanged (an interest-only row) rather than growing it.
    """
    payment = monthly_payment if monthly_payment else fixed_payment(
        principal, annual_rate_percent, term_months
    )
    r = monthly_rate(annual_rate_percent)
    balance = float(principal)
    rows: List[AmortizationRow] = []

    for month in range(1, term_months + SCHEDULE_BUFFER_MONTHS + 1):
        if balance <= 0:
            break
        interest = balance * r
        principal_paid = min(max(payment - interest, 0.0), balance)
        balance = max(balance - principal_paid, 0.0)
        rows.append(AmortizationRow(
            month=month,
            payment=principal_paid + interest,
            principal=principal_paid,
            interest=interest,
            balance=balance,
        ))

    return rows


def schedule_to_frame(rows: Sequence[AmortizationRow]) -> pd.DataFrame:
    """
    Tabulate a schedule as a DataFrame indexed by month.

    Adds ``cumulative_interest`` and ``cumulative_principal`` columns.
    """
    columns = ["payment", "principal", "interest", "balance"]
    if not rows:
        empty = pd.DataFrame(columns=columns + ["cumulative_interest", "cumulative_principal"])
        empty.index.name = "month"
        return empty
    df = pd.DataFrame([row.to_dict() for row in rows]).set_index("month")
    df["cumulative_interest"] = df["interest"].cumsum()
    df["cumulative_principal"] = df["principal"].cumsum()
    return df


def schedule_totals(rows: Sequence[AmortizationRow]) -> ScheduleTotals:
    """Months, total interest and total paid of a schedule."""
    return ScheduleTotals(
        months=len(rows),
        total_interest=float(sum(row.interest for row in rows)),
        total_paid=float(sum(row.payment for row in rows)),
    )


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def payoff_comparison(
    balance: float,
    annual_rate_percent: float,
    minimum_payment: float,
    extra_payment: float,
) -> PayoffComparison:
    """
    Compare paying only the minimum against minimum + *extra_payment*.

    Uses the closed-form estimates (``months_to_payoff``/``total_interest``).
    """
    months_min = months_to_payoff(balance, annual_rate_percent, minimum_payment)
    with_extra = minimum_payment + extra_payment
    months_extra = months_to_payoff(balance, annual_rate_percent, with_extra)
    return PayoffComparison(
        months_minimum=months_min,
        interest_minimum=total_interest(balance, minimum_payment, months_min),
        months_with_extra=months_extra,
        interest_with_extra=total_interest(balance, with_extra, months_extra),
    )


def prepayment_scenario(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    extra_payment: float,
) -> PrepaymentScenario:
    """
    Effect of adding *extra_payment* to a loan's fixed monthly payment.

    Both schedules are generated with ``amortization_schedule`` so the
    totals reflect the clamped final month.
    """
    base_payment = fixed_payment(principal, annual_rate_percent, term_months)
    regular = amortization_schedule(principal, annual_rate_percent, term_months, base_payment)
    accelerated = amortization_schedule(
        principal, annual_rate_percent, term_months, base_payment + extra_payment
    )
    return PrepaymentScenario(
        regular=schedule_totals(regular),
        accelerated=schedule_totals(accelerated),
        extra_payment=extra_payment,
    )


# ---------------------------------------------------------------------------
# Mortgages
# ---------------------------------------------------------------------------

def _interest_over(balance: float, r: float, payment: float, months: int) -> float:
    """Interest accrued paying *payment* for up to *months* months."""
    total = 0.0
    for _ in range(max(months, 0)):
        if balance <= 0:
            break
        interest = balance * r
        total += interest
        balance -= min(max(payment - interest, 0.0), balance)
    return total


def pmi_removal_date(
    principal: float,
    monthly_payment: float,
    annual_rate_percent: float,
    property_value: float,
    start: Optional[date] = None,
    removal_ltv: float = PMI_REMOVAL_LTV,
) -> Optional[date]:
    """
    First month the loan-to-value ratio falls to *removal_ltv* or below.

    Steps the loan month by month for at most ``PMI_SEARCH_MONTHS`` months.
    Returns *start* (default today) when the loan already qualifies, and
    None when the threshold is never reached or there is no property value.

    Examples
    --------
    >>> pmi_removal_date(200_000, 1_200, 6.0, 300_000, start=date(2025, 1, 1))
    datetime.date(2025, 1, 1)
    """
    if property_value <= 0:
        return None
    r = monthly_rate(annual_rate_percent)
    balance = float(principal)

    for month in range(PMI_SEARCH_MONTHS):
        if loan_to_value(balance, property_value) <= removal_ltv:
            return add_months(start or date.today(), month)
        interest = balance * r
        balance -= min(max(monthly_payment - interest, 0.0), balance)

    return None


def refinance_analysis(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    remaining_months: int,
    new_rate_percent: float,
    new_term_months: int,
    closing_costs: float = 0.0,
) -> RefinanceAnalysis:
    """
    Compare the remaining interest on a loan against refinancing it.

    Parameters
    ----------
    balance : float
        Current outstanding balance, refinanced in full.
    annual_rate_percent, monthly_payment, remaining_months
        Terms of the current loan.
    new_rate_percent, new_term_months
        Terms of the new loan. Its payment is ``fixed_payment(balance, ...)``.
    closing_costs : float
        Up-front cost of refinancing, charged against the interest saved.

    Returns
    -------
    RefinanceAnalysis
        Interest under both loans plus the derived monthly difference,
        net interest saved, break-even months and ``worth_it`` (saves
        interest and breaks even within ``REFINANCE_BREAK_EVEN_LIMIT``).
    """
    new_payment = fixed_payment(balance, new_rate_percent, new_term_months)
    return RefinanceAnalysis(
        balance=balance,
        current_payment=monthly_payment,
        remaining_months=remaining_months,
        current_interest=_interest_over(
            balance, monthly_rate(annual_rate_percent), monthly_payment, remaining_months
        ),
        new_payment=new_payment,
        new_term_months=new_term_months,
        new_interest=_interest_over(
            balance, monthly_rate(new_rate_percent), new_payment, new_term_months
        ),
        closing_costs=closing_costs,
    )
