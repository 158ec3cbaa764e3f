"""
debtpath - Debt payoff planning toolkit

Closed-form payoff estimates, loan amortization schedules and month-by-month
avalanche / snowball simulation of a debt portfolio.

Modules
-------
- debts         : Debt records and strategy ordering
- amortization  : Closed-form payoff, fixed payments, amortization schedules
- simulation    : Portfolio payoff simulator and strategy comparisons
- metrics       : Utilization, debt-to-income, bill and equity helpers
- config        : Pydantic models for plans, loans and settings
- serialization : JSON persistence for plans and results
- plotting      : Matplotlib charts for results and schedules
- utils         : Shared utilities (rates, dates, formatting)

"""

from .amortization import (
    AmortizationRow,
    amortization_schedule,
    fixed_payment,
    months_to_payoff,
    payoff_date_label,
    pmi_removal_date,
    refinance_analysis,
    total_interest,
)
from .debts import DebtRecord, sort_debts
from .exceptions import ConfigurationError, DebtPathError, SerializationError, ValidationError
from .simulation import (
    PaidOffEvent,
    PayoffPlanSimulator,
    SimulationResult,
    TimelinePoint,
    compare_strategies,
    freed_cash,
    simulate_payoff_plan,
)
from . import utils

__version__ = "0.1.0"
