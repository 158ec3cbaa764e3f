"""
Serialization module for debtpath persistence.

Purpose
-------
Provides JSON serialization and deserialization for payoff plans,
simulation results and amortization schedules. The calculators never touch
the filesystem; this module is the only place that does.

Supports serialization of:
- PlanConfig (debts, extra budget, strategy, start date)
- SimulationResult (timeline, payoff events, totals)
- StrategyComparison summaries
- Amortization schedules (as row records)

Design Principles
-----------------
- Type-safe: Plans are validated through the Pydantic configs on load
- Human-readable: Indented JSON with ISO dates
- Backward compatible: Files carry a schema version, mismatches warn
- JSON-clean: Infinite month counts are written as null

Example
-------
>>> from pathlib import Path
>>> from debtpath.config import DebtConfig, PlanConfig
>>> from debtpath.serialization import save_plan, load_plan
>>>
>>> plan = PlanConfig(name="Cards", debts=[
...     DebtConfig(id="visa", name="Visa", balance=4_500, apr=23.0, minimumPayment=135),
... ])
>>> save_plan(plan, Path("plan.json"))
>>> load_plan(Path("plan.json")).debts[0].id
'visa'
"""

from __future__ import annotations

import json
import math
import warnings
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from .config import PlanConfig
from .exceptions import ConfigurationError, SerializationError
from .types import AmortizationRowDict, SimulationResultDict, StrategyComparisonDict

if TYPE_CHECKING:
    from .amortization import AmortizationRow, PayoffComparison
    from .simulation import SimulationResult, StrategyComparison

__all__ = [
    "SCHEMA_VERSION",
    "save_plan",
    "load_plan",
    "plan_to_dict",
    "result_to_dict",
    "save_simulation_result",
    "load_simulation_result",
    "comparison_to_dict",
    "payoff_comparison_to_dict",
    "schedule_to_records",
    "months_to_json",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema_version(data: Dict[str, Any], kind: str) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{kind} schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Malformed JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return data


def _write_json(data: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def months_to_json(months: Union[int, float]) -> Optional[int]:
    """Month count as JSON: infinite becomes None (null)."""
    if math.isinf(months):
        return None
    return int(months)


# ---------------------------------------------------------------------------
# Plan Serialization
# ---------------------------------------------------------------------------

def plan_to_dict(plan: PlanConfig) -> Dict[str, Any]:
    """
    Convert PlanConfig to dictionary representation.

    Parameters
    ----------
    plan : PlanConfig
        Plan to serialize

    Returns
    -------
    dict
        Dictionary with schema version and plan fields (ISO start date)
    """
    return {
        "schema_version": SCHEMA_VERSION,
        **plan.model_dump(mode="json"),
    }


def save_plan(plan: PlanConfig, path: Path) -> None:
    """
    Save a payoff plan to a JSON file.

    Parameters
    ----------
    plan : PlanConfig
        Plan to save
    path : Path
        Output file path; parent directories are created

    Examples
    --------
    >>> save_plan(plan, Path("plans/spring.json"))
    """
    _write_json(plan_to_dict(plan), Path(path))


def load_plan(path: Path) -> PlanConfig:
    """
    Load and validate a payoff plan from a JSON file.

    Parameters
    ----------
    path : Path
        Input file path

    Returns
    -------
    PlanConfig
        Validated plan

    Raises
    ------
    SerializationError
        If the file is not a JSON object.
    ConfigurationError
        If the content fails plan validation.
    """
    path = Path(path)
    data = _read_json(path)
    _check_schema_version(data, "Plan")
    data.pop("schema_version", None)

    try:
        return PlanConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid plan in {path}:\n{e}") from e


# ---------------------------------------------------------------------------
# Simulation Result Serialization
# ---------------------------------------------------------------------------

def result_to_dict(
    result: SimulationResult,
    plan_name: Optional[str] = None,
) -> SimulationResultDict:
    """
    Convert SimulationResult to a JSON-ready dictionary.

    Parameters
    ----------
    result : SimulationResult
        Simulation outcome
    plan_name : str, optional
        Name of the plan the result came from

    Returns
    -------
    SimulationResultDict
        Dictionary with ISO dates, payoff events and the full timeline
    """
    data: SimulationResultDict = {
        "schema_version": SCHEMA_VERSION,
        "strategy": result.strategy,
        "extra_monthly_amount": float(result.extra_monthly_amount),
        "start_date": result.start_date.isoformat(),
        "payoff_date": result.payoff_date.isoformat(),
        "months": result.months,
        "fully_paid": result.fully_paid,
        "total_interest": float(result.total_interest),
        "debts_paid_order": [
            {"id": e.id, "name": e.name, "month": e.month}
            for e in result.debts_paid_order
        ],
        "timeline": [
            {
                "month": p.month,
                "total_balance": float(p.total_balance),
                "total_interest_paid": float(p.total_interest_paid),
            }
            for p in result.timeline
        ],
    }
    if plan_name is not None:
        data["plan_name"] = plan_name
    return data


def save_simulation_result(
    result: SimulationResult,
    path: Path,
    plan_name: Optional[str] = None,
) -> None:
    """Save a simulation result to a JSON file."""
    _write_json(dict(result_to_dict(result, plan_name=plan_name)), Path(path))


def load_simulation_result(path: Path) -> SimulationResult:
    """
    Load a simulation result written by ``save_simulation_result``.

    Parameters
    ----------
    path : Path
        Input file path

    Returns
    -------
    SimulationResult
        Reconstructed result (plotting and ``to_frame`` work as usual)

    Raises
    ------
    SerializationError
        If the file is malformed or misses required keys.
    """
    from .simulation import PaidOffEvent, SimulationResult, TimelinePoint

    path = Path(path)
    data = _read_json(path)
    _check_schema_version(data, "Result")

    try:
        return SimulationResult(
            timeline=[
                TimelinePoint(int(p["month"]), float(p["total_balance"]), float(p["total_interest_paid"]))
                for p in data["timeline"]
            ],
            payoff_date=date.fromisoformat(data["payoff_date"]),
            total_interest=float(data["total_interest"]),
            debts_paid_order=[
                PaidOffEvent(str(e["id"]), str(e["name"]), int(e["month"]))
                for e in data["debts_paid_order"]
            ],
            strategy=data["strategy"],
            extra_monthly_amount=float(data.get("extra_monthly_amount", 0.0)),
            start_date=date.fromisoformat(data["start_date"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Malformed simulation result in {path}: {e!r}") from e


# ---------------------------------------------------------------------------
# Comparisons and Schedules
# ---------------------------------------------------------------------------

def comparison_to_dict(comparison: StrategyComparison) -> StrategyComparisonDict:
    return {
        "avalanche_months": comparison.avalanche.months,
        "snowball_months": comparison.snowball.months,
        "avalanche_interest": float(comparison.avalanche.total_interest),
        "snowball_interest": float(comparison.snowball.total_interest),
        "interest_saved": float(comparison.interest_saved),
        "months_saved": comparison.months_saved,
        "recommended_strategy": comparison.recommended_strategy,
    }


def schedule_to_records(rows: Sequence[AmortizationRow]) -> List[AmortizationRowDict]:
    """Amortization rows as a list of plain dictionaries."""
    return [row.to_dict() for row in rows]


def payoff_comparison_to_dict(comparison: PayoffComparison) -> Dict[str, Any]:
    """Single-debt payoff comparison with infinite month counts as null."""
    interest_saved = comparison.interest_saved
    return {
        "months_minimum": months_to_json(comparison.months_minimum),
        "interest_minimum": float(comparison.interest_minimum),
        "months_with_extra": months_to_json(comparison.months_with_extra),
        "interest_with_extra": float(comparison.interest_with_extra),
        "months_saved": months_to_json(comparison.months_saved),
        "interest_saved": None if math.isinf(interest_saved) else float(interest_saved),
    }
