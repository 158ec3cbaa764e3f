"""General utilities for debtpath

Contents
--------
- Month-count checks
- Rate conversions (annual nominal % -> monthly periodic rate)
- Monetary rounding (half-up at the cent)
- Calendar helpers (add_months)
- Display formatters (currency, percentage, month counts)
- Matplotlib formatters (thousands_formatter)
"""

from __future__ import annotations

import calendar
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .constants import MONTHS_PER_YEAR, NEVER_LABEL

__all__ = [
    # Month counts
    "is_finite_months",
    # Rates
    "monthly_rate",
    # Rounding
    "round_half_up",
    # Calendar
    "add_months",
    # Formatters
    "format_currency",
    "format_percentage",
    "format_months",
    "thousands_formatter",
]


# ---------------------------------------------------------------------------
# Month counts
# ---------------------------------------------------------------------------

def is_finite_months(months: float) -> bool:
    """True when *months* is a usable positive month count (not inf, not <= 0)."""
    return not math.isinf(months) and months > 0


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage rate to a monthly periodic rate.

    Simple division by 12, no compounding-period conversion:
    23.0 (%) -> 0.23 / 12.
    """
    return float(annual_rate_percent) / 100.0 / MONTHS_PER_YEAR


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_half_up(value: float, places: int = 2) -> float:
    """Round *value* half-up to *places* decimals (monetary rounding).

    Python's built-in round() is half-to-even; money is rounded half-up at
    the cent, so 0.125 -> 0.13.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def add_months(start: date, months: int) -> date:
    """Advance *start* by *months* calendar months.

    The day of month is clamped to the last day of the target month
    (Jan 31 + 1 month -> Feb 28/29).
    """
    months = int(months)
    total = start.year * MONTHS_PER_YEAR + (start.month - 1) + months
    year, month_zero = divmod(total, MONTHS_PER_YEAR)
    month = month_zero + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# ---------------------------------------------------------------------------
# Display formatters
# ---------------------------------------------------------------------------

def format_currency(value: float, decimals: int = 2, symbol: str = "$") -> str:
    """
    Format a monetary amount with thousands separators.

    Examples
    --------
    >>> format_currency(1234.5)
    '$1,234.50'
    >>> format_currency(-80, decimals=0)
    '-$80'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage value (already scaled by 100): 56.25 -> '56.2%'."""
    return f"{value:.{decimals}f}%"


def format_months(months: float) -> str:
    """Format a month count for display; infinite counts read 'Never'."""
    if math.isinf(months):
        return NEVER_LABEL
    months = int(months)
    if months == 1:
        return "1 month"
    return f"{months} months"


# ---------------------------------------------------------------------------
# Matplotlib formatters
# ---------------------------------------------------------------------------

def thousands_formatter(x, pos):
    """
    Format axis values in thousands for matplotlib FuncFormatter.

    - 12_500 -> "$12.5k"
    - 3_000 -> "$3k"
    - 0 -> "$0"

    Parameters
    ----------
    x : float
        Value to format.
    pos : int
        Tick position (unused, required by FuncFormatter signature).

    Examples
    --------
    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    """
    if x == 0:
        return "$0"
    val = x / 1e3
    return f"${val:.0f}k" if val == int(val) else f"${val:.1f}k"
