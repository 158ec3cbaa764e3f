"""
Configuration management module for debtpath.

Purpose
-------
Centralized configuration using Pydantic models for type-safe validation of
debt plans and loans read from JSON files or forms, plus application
settings read from the environment. The calculators accept plain numbers;
these models are the validation boundary in front of them.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for plan files
- Environment-aware: Supports .env files for application settings

Example
-------
>>> from debtpath.config import DebtConfig, PlanConfig
>>> plan = PlanConfig(
...     name="Spring plan",
...     debts=[DebtConfig(id="visa", name="Visa", balance=4_500, apr=23.0, minimumPayment=135)],
...     extra_monthly_amount=200,
... )
>>> plan.strategy
'avalanche'
>>> plan.to_records()[0].annual_rate_percent
23.0
"""

from __future__ import annotations

import datetime
import warnings
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import MAX_SIMULATION_MONTHS, PAYOFF_DATE_FORMAT
from .debts import DebtRecord

__all__ = [
    "DebtConfig",
    "PlanConfig",
    "LoanConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Debt Configuration
# ---------------------------------------------------------------------------

class DebtConfig(BaseModel):
    """
    Validated input for one debt.

    Field aliases accept the shapes the dashboard stores: credit cards use
    ``apr`` / ``minimumPayment``, loans ``currentBalance`` / ``rate`` /
    ``monthlyPayment``.

    Attributes
    ----------
    id : str
        Identifier, unique within a plan.
    name : str
        Display label.
    balance : float
        Outstanding balance (>= 0).
    annual_rate_percent : float
        Nominal annual rate in percent (0-1000).
    minimum_payment : float
        Monthly minimum payment (>= 0).

    Examples
    --------
    >>> DebtConfig(id="1", name="Car", currentBalance=9_000, rate=6.5, monthlyPayment=280).balance
    9000.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(
        min_length=1,
        max_length=64,
        description="Debt identifier"
    )
    name: str = Field(
        default="",
        max_length=100,
        description="Display label"
    )
    balance: float = Field(
        ge=0,
        validation_alias=AliasChoices("balance", "current_balance", "currentBalance"),
        description="Outstanding balance"
    )
    annual_rate_percent: float = Field(
        ge=0,
        le=1000,
        validation_alias=AliasChoices("annual_rate_percent", "apr", "rate"),
        description="Nominal annual interest rate in percent"
    )
    minimum_payment: float = Field(
        ge=0,
        validation_alias=AliasChoices(
            "minimum_payment", "minimumPayment", "monthly_payment", "monthlyPayment"
        ),
        description="Monthly minimum payment"
    )

    @model_validator(mode="after")
    def warn_zero_payment(self):
        """A positive balance with no payment can only reach the month cap."""
        if self.balance > 0 and self.minimum_payment == 0:
            warnings.warn(
                f"Debt {self.id!r} has a balance of {self.balance:,.2f} but no minimum "
                f"payment; it will only be paid down by extra payments.",
                UserWarning,
            )
        return self

    def to_record(self) -> DebtRecord:
        return DebtRecord(
            id=self.id,
            name=self.name or self.id,
            balance=self.balance,
            annual_rate_percent=self.annual_rate_percent,
            minimum_payment=self.minimum_payment,
        )


# ---------------------------------------------------------------------------
# Plan Configuration
# ---------------------------------------------------------------------------

class PlanConfig(BaseModel):
    """
    A complete payoff plan: debts, extra budget and strategy.

    Attributes
    ----------
    name : str
        Human-readable plan name.
    debts : List[DebtConfig]
        Debts in the plan. Ids must be unique.
    extra_monthly_amount : float
        Monthly budget on top of the minimum payments.
    strategy : {"avalanche", "snowball"}
        Prioritization strategy.
    start_date : datetime.date, optional
        Date month 0 is anchored to. None means today.

    Examples
    --------
    >>> plan = PlanConfig(name="Empty", debts=[])
    >>> plan.extra_monthly_amount
    0.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        default="My payoff plan",
        min_length=1,
        max_length=100,
        description="Plan name"
    )
    debts: List[DebtConfig] = Field(
        default_factory=list,
        description="Debts included in the plan"
    )
    extra_monthly_amount: float = Field(
        default=0.0,
        ge=0,
        description="Extra monthly payment applied to the priority debt"
    )
    strategy: Literal["avalanche", "snowball"] = Field(
        default="avalanche",
        description="Payoff prioritization strategy"
    )
    start_date: Optional[datetime.date] = Field(
        default=None,
        description="Simulation start date (defaults to today)"
    )

    @field_validator("debts")
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure debt ids are unique within the plan."""
        seen = set()
        duplicates = sorted({d.id for d in v if d.id in seen or seen.add(d.id)})
        if duplicates:
            raise ValueError(f"Duplicate debt ids: {', '.join(duplicates)}")
        return v

    def to_records(self) -> List[DebtRecord]:
        return [debt.to_record() for debt in self.debts]


# ---------------------------------------------------------------------------
# Loan Configuration
# ---------------------------------------------------------------------------

class LoanConfig(BaseModel):
    """
    Fixed-term loan for amortization schedules.

    Attributes
    ----------
    principal : float
        Amount borrowed (> 0).
    annual_rate_percent : float
        Nominal annual rate in percent.
    term_months : int
        Nominal term (1-600 months).
    monthly_payment : float, optional
        Payment override; defaults to the annuity payment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    principal: float = Field(
        gt=0,
        description="Loan principal"
    )
    annual_rate_percent: float = Field(
        ge=0,
        le=1000,
        validation_alias=AliasChoices("annual_rate_percent", "rate"),
        description="Nominal annual interest rate in percent"
    )
    term_months: int = Field(
        ge=1,
        le=MAX_SIMULATION_MONTHS,
        description="Loan term in months"
    )
    monthly_payment: Optional[float] = Field(
        default=None,
        gt=0,
        description="Monthly payment override"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with DEBTPATH_ (e.g., DEBTPATH_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging)
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    currency_symbol : str
        Symbol prefixed to amounts in CLI output
    date_format : str
        strftime format for payoff dates in CLI output

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="DEBTPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=4,
        description="Currency symbol for display"
    )
    date_format: str = Field(
        default=PAYOFF_DATE_FORMAT,
        description="Payoff date display format"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
