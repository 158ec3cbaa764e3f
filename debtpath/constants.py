"""
Global constants for debtpath.

Purpose
-------
Centralizes iteration caps, sentinels and display defaults used throughout
the debtpath codebase. The iteration caps are what make every calculation
total: loops that could otherwise run forever on degenerate inputs (payment
below the interest-only threshold, zero minimum payments) stop at a named,
explicit bound.

Usage
-----
>>> from debtpath.constants import MAX_SIMULATION_MONTHS, NOT_APPLICABLE
>>> MAX_SIMULATION_MONTHS
600

Categories
----------
- Time: months per year, iteration caps
- Sentinels: labels used when a debt never pays off
- Strategy: names and recommendation threshold
- Plotting: figure sizes, line widths
"""

from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "SCHEDULE_BUFFER_MONTHS",
    "MAX_SIMULATION_MONTHS",
    # Sentinels
    "NOT_APPLICABLE",
    "NEVER_LABEL",
    "PAYOFF_DATE_FORMAT",
    # Strategy
    "AVALANCHE",
    "SNOWBALL",
    "STRATEGIES",
    "DEFAULT_STRATEGY",
    "RECOMMEND_AVALANCHE_THRESHOLD",
    # Bills
    "BILL_FREQUENCY_FACTORS",
    # Mortgages
    "PMI_REMOVAL_LTV",
    "PMI_SEARCH_MONTHS",
    "REFINANCE_BREAK_EVEN_LIMIT",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_FIGSIZE_WIDE",
    "DEFAULT_LINEWIDTH",
    "DEFAULT_LINEWIDTH_THICK",
    "DEFAULT_ALPHA_FILL",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (annual nominal rate -> monthly periodic rate)."""

SCHEDULE_BUFFER_MONTHS: int = 120
"""Extra rows allowed past the nominal term in an amortization schedule.

An under-sized payment cannot amortize within the term; the schedule stops
at ``term_months + SCHEDULE_BUFFER_MONTHS`` rows.
"""

MAX_SIMULATION_MONTHS: int = 600
"""Hard cap on the number of months simulated for a debt portfolio (50 years)."""


# =============================================================================
# Sentinels
# =============================================================================

NOT_APPLICABLE: str = "N/A"
"""Payoff-date label for debts that never pay off or need no payments."""

NEVER_LABEL: str = "Never"
"""Display label for an infinite payoff month count."""

PAYOFF_DATE_FORMAT: str = "%b %Y"
"""strftime format of payoff-date labels (e.g. 'Mar 2028')."""


# =============================================================================
# Strategy
# =============================================================================

AVALANCHE: str = "avalanche"
"""Highest interest rate first."""

SNOWBALL: str = "snowball"
"""Lowest remaining balance first."""

STRATEGIES: Tuple[str, ...] = (AVALANCHE, SNOWBALL)

DEFAULT_STRATEGY: str = AVALANCHE

RECOMMEND_AVALANCHE_THRESHOLD: float = 1000.0
"""Interest saved by avalanche over snowball above which avalanche is recommended."""


# =============================================================================
# Bills
# =============================================================================

BILL_FREQUENCY_FACTORS = {
    "weekly": 4.33,
    "bi-weekly": 2.16,
    "monthly": 1.0,
    "quarterly": 1.0 / 3.0,
    "annually": 1.0 / 12.0,
}
"""Multipliers converting a bill amount at its frequency to a monthly amount."""


# =============================================================================
# Mortgages
# =============================================================================

PMI_REMOVAL_LTV: float = 80.0
"""Loan-to-value (percent) at or below which PMI can be dropped."""

PMI_SEARCH_MONTHS: int = 360
"""Months stepped before concluding PMI is never removed."""

REFINANCE_BREAK_EVEN_LIMIT: int = 60
"""A refinance breaking even in fewer months than this is worth it."""


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 6)
"""Default figure size (width, height) in inches for standard plots."""

DEFAULT_FIGSIZE_WIDE: Tuple[int, int] = (14, 6)
"""Figure size for side-by-side comparison plots."""

DEFAULT_LINEWIDTH: float = 1.5
"""Default line width for standard plot lines."""

DEFAULT_LINEWIDTH_THICK: float = 2.5
"""Line width for emphasized lines."""

DEFAULT_ALPHA_FILL: float = 0.2
"""Default alpha for area fills under balance curves."""
