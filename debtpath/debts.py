"""
Debt records and payoff-priority ordering for debtpath.

Purpose
-------
Defines the immutable DebtRecord snapshot consumed by the calculators and the
two prioritization orderings (avalanche, snowball). Records are built per
call from caller-owned data (a store, a form, a JSON plan) and are never
mutated by the library.

Key components
--------------
- DebtRecord:
    Frozen snapshot of one debt: id, name, balance, annual rate (%),
    minimum monthly payment.

- sort_debts():
    Non-mutating display ordering. Avalanche sorts by descending rate,
    snowball by ascending balance. Ties keep input order (stable sort).

Example
-------
>>> from debtpath.debts import DebtRecord, sort_debts
>>> debts = [
...     DebtRecord("car", "Car Loan", balance=3_000, annual_rate_percent=6.5, minimum_payment=280),
...     DebtRecord("visa", "Visa", balance=4_500, annual_rate_percent=23.0, minimum_payment=135),
... ]
>>> [d.id for d in sort_debts(debts, "avalanche")]
['visa', 'car']
>>> [d.id for d in sort_debts(debts, "snowball")]
['car', 'visa']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Literal, Mapping, Sequence

from .constants import AVALANCHE, STRATEGIES
from .exceptions import ValidationError

__all__ = [
    "Strategy",
    "DebtRecord",
    "sort_debts",
    "strategy_sort_key",
    "validate_strategy",
    "total_balance",
    "total_minimum_payment",
]


Strategy = Literal["avalanche", "snowball"]

# Field names accepted by DebtRecord.from_mapping, in lookup order. Credit
# cards carry balance/apr/minimumPayment, loans currentBalance/rate/monthlyPayment.
_BALANCE_KEYS = ("balance", "current_balance", "currentBalance")
_RATE_KEYS = ("annual_rate_percent", "apr", "rate", "interest_rate", "interestRate")
_PAYMENT_KEYS = ("minimum_payment", "minimumPayment", "monthly_payment", "monthlyPayment")


# ---------------------------------------------------------------------------
# Debt record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DebtRecord:
    """
    Immutable snapshot of one debt.

    Parameters
    ----------
    id : str
        Opaque identifier, unique within a simulation run.
    name : str
        Display label (not used in computation).
    balance : float
        Amount outstanding now (>= 0). A zero balance means already paid.
    annual_rate_percent : float
        Nominal annual rate as a percentage (23.0 means 23%).
    minimum_payment : float
        Monthly payment owed regardless of strategy (>= 0).

    Notes
    -----
    No validation is done here: the calculators are total over numeric
    input. Validate untrusted data with ``debtpath.config.DebtConfig``.
    """
    id: str
    name: str
    balance: float
    annual_rate_percent: float
    minimum_payment: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DebtRecord":
        """
        Build a DebtRecord from a credit-card or loan shaped mapping.

        Accepts snake_case field names as well as the camelCase shapes
        stored by the dashboard (``balance/apr/minimumPayment`` for cards,
        ``currentBalance/rate/monthlyPayment`` for loans).

        Raises
        ------
        ValidationError
            If the id, balance, rate or payment field is missing.

        Examples
        --------
        >>> DebtRecord.from_mapping({
        ...     "id": "2", "name": "Student Loan",
        ...     "currentBalance": 18_000, "rate": 5.5, "monthlyPayment": 210,
        ... }).balance
        18000.0
        """
        if "id" not in data:
            raise ValidationError("debt mapping has no 'id' field")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            balance=float(_first_present(data, _BALANCE_KEYS)),
            annual_rate_percent=float(_first_present(data, _RATE_KEYS)),
            minimum_payment=float(_first_present(data, _PAYMENT_KEYS)),
        )

    @property
    def is_paid(self) -> bool:
        return self.balance <= 0

    def __repr__(self) -> str:
        return (
            f"DebtRecord(id={self.id!r}, name={self.name!r}, "
            f"balance={self.balance:,.2f}, rate={self.annual_rate_percent}%, "
            f"min={self.minimum_payment:,.2f})"
        )


def _first_present(data: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    raise ValidationError(
        f"debt {data.get('id')!r} has none of the fields {', '.join(keys)}"
    )


# ---------------------------------------------------------------------------
# Strategy ordering
# ---------------------------------------------------------------------------

def validate_strategy(strategy: str) -> str:
    """Return *strategy* unchanged, or raise ValidationError if unknown."""
    if strategy not in STRATEGIES:
        raise ValidationError(
            f"strategy must be one of {STRATEGIES}, got {strategy!r}"
        )
    return strategy


def strategy_sort_key(strategy: str) -> Callable[[float, float], float]:
    """
    Return a key function of ``(balance, annual_rate_percent)`` for *strategy*.

    Avalanche keys on the negated rate (highest rate first), snowball on the
    balance (lowest balance first). Used with Python's stable ``sorted`` so
    ties keep their input order.
    """
    validate_strategy(strategy)
    if strategy == AVALANCHE:
        return lambda balance, rate: -rate
    return lambda balance, rate: balance


def sort_debts(debts: Iterable[DebtRecord], strategy: Strategy) -> List[DebtRecord]:
    """
    Return *debts* in payoff-priority order without modifying the input.

    Parameters
    ----------
    debts : iterable of DebtRecord
        Debts to order, using their current (unsimulated) balances and rates.
    strategy : {"avalanche", "snowball"}
        Avalanche: descending rate. Snowball: ascending balance.

    Returns
    -------
    list of DebtRecord
        New list; equal keys keep input order.
    """
    key = strategy_sort_key(strategy)
    return sorted(debts, key=lambda d: key(d.balance, d.annual_rate_percent))


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def total_balance(debts: Iterable[DebtRecord]) -> float:
    """Sum of outstanding balances."""
    return float(sum(d.balance for d in debts))


def total_minimum_payment(debts: Iterable[DebtRecord]) -> float:
    """Sum of minimum payments of debts that still carry a balance."""
    return float(sum(d.minimum_payment for d in debts if d.balance > 0))
