"""
Unit tests for utils.py module.

Tests rate conversion, half-up rounding, calendar arithmetic and display
formatters.
"""

import math
from datetime import date

import pytest

from debtpath.utils import (
    add_months,
    format_currency,
    format_months,
    format_percentage,
    is_finite_months,
    monthly_rate,
    round_half_up,
    thousands_formatter,
)


class TestRates:

    def test_monthly_rate_is_simple_division(self):
        assert monthly_rate(24.0) == pytest.approx(0.02)
        assert monthly_rate(23.0) == pytest.approx(0.23 / 12)

    def test_zero_rate(self):
        assert monthly_rate(0) == 0.0


class TestRounding:
    """Test monetary half-up rounding."""

    def test_half_up_at_cent(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(2.675) == 2.68

    def test_differs_from_builtin_round(self):
        assert round(0.125, 2) == 0.12
        assert round_half_up(0.125, 2) == 0.13

    def test_whole_numbers(self):
        assert round_half_up(56.5, 0) == 57.0
        assert round_half_up(56.25, 0) == 56.0


class TestMonthCounts:

    def test_is_finite_months(self):
        assert is_finite_months(12)
        assert not is_finite_months(0)
        assert not is_finite_months(-1)
        assert not is_finite_months(math.inf)


class TestAddMonths:
    """Test calendar month arithmetic."""

    def test_same_day(self):
        assert add_months(date(2025, 1, 15), 26) == date(2027, 3, 15)

    def test_zero_months(self):
        assert add_months(date(2025, 6, 30), 0) == date(2025, 6, 30)

    def test_year_rollover(self):
        assert add_months(date(2025, 11, 1), 2) == date(2026, 1, 1)

    def test_clamps_to_month_end(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2025, 3, 31), 1) == date(2025, 4, 30)

    def test_long_horizon(self):
        assert add_months(date(2025, 1, 1), 600) == date(2075, 1, 1)


class TestFormatting:
    """Test display formatters."""

    def test_format_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(1_000_000, decimals=0) == "$1,000,000"
        assert format_currency(-80, decimals=0) == "-$80"

    def test_format_currency_symbol(self):
        assert format_currency(10, symbol="€") == "€10.00"

    def test_format_percentage(self):
        assert format_percentage(23.0) == "23.0%"
        assert format_percentage(6.5, decimals=2) == "6.50%"

    def test_format_months(self):
        assert format_months(1) == "1 month"
        assert format_months(26) == "26 months"
        assert format_months(math.inf) == "Never"

    def test_thousands_formatter(self):
        assert thousands_formatter(0, None) == "$0"
        assert thousands_formatter(3_000, None) == "$3k"
        assert thousands_formatter(12_500, None) == "$12.5k"
