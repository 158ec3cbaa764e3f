"""
Plotting utilities for debtpath.

Purpose
-------
This module provides the ResultPlottingMixin class which adds visualization
to SimulationResult through inheritance, plus standalone functions for
amortization schedules and strategy comparisons. Keeping matplotlib code
here keeps the calculators free of any display concern.

Design Pattern: Mixin
--------------------
ResultPlottingMixin is inherited by SimulationResult, providing:
- Unified plot() interface with mode dispatch
- Individual _plot_* methods for each visualization type

The mixin expects these attributes from the host class:
- self.timeline: list of TimelinePoint
- self.balance_path / self.interest_path: np.ndarray
- self.debts_paid_order: list of PaidOffEvent
- self.strategy: str
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from .constants import (
    DEFAULT_ALPHA_FILL,
    DEFAULT_FIGSIZE,
    DEFAULT_FIGSIZE_WIDE,
    DEFAULT_LINEWIDTH,
    DEFAULT_LINEWIDTH_THICK,
)
from .utils import thousands_formatter

if TYPE_CHECKING:
    from .amortization import AmortizationRow
    from .simulation import StrategyComparison

__all__ = [
    "ResultPlottingMixin",
    "plot_amortization_schedule",
    "plot_strategy_comparison",
]

PLOT_MODES = ("balance", "interest")


def _finish(fig, ax, save_path: Optional[str], return_fig_ax: bool):
    """Save and/or return a finished figure, showing it otherwise."""
    import matplotlib.pyplot as plt

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax:
        return fig, ax
    if not save_path:
        plt.show()
    plt.close(fig)
    return None


class ResultPlottingMixin:
    """
    Mixin providing a unified plotting interface for SimulationResult.

        result.plot("balance", title="Avalanche plan")

    Available Modes
    ---------------
    - "balance": Total remaining balance by month, with payoff markers
    - "interest": Cumulative interest paid by month

    Note
    ----
    This class should only be used as a mixin with SimulationResult.
    """

    # -----------------------------------------------------------------------
    # Unified plotting interface
    # -----------------------------------------------------------------------

    def plot(
        self,
        mode: str = "balance",
        *,
        figsize: Optional[tuple] = None,
        title: Optional[str] = None,
        save_path: Optional[str] = None,
        return_fig_ax: bool = False,
        **kwargs
    ):
        """
        Plot the simulated timeline.

        Parameters
        ----------
        mode : {"balance", "interest"}
            Visualization type.
        figsize : tuple, optional
            Figure size (width, height).
        title : str, optional
            Figure title. Auto-generated if None.
        save_path : str, optional
            Path to save the figure.
        return_fig_ax : bool, default False
            If True, returns (fig, ax) for customization.
        **kwargs
            Mode-specific options:
            - show_payoffs : bool (balance only), mark payoff months
            - color : str

        Returns
        -------
        None or (fig, ax)

        Raises
        ------
        ValueError
            If mode is not one of the available modes.
        """
        if mode not in PLOT_MODES:
            raise ValueError(f"Unknown plot mode {mode!r}. Valid: {', '.join(PLOT_MODES)}")

        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=figsize or DEFAULT_FIGSIZE)
        if mode == "balance":
            self._plot_balance(ax, **kwargs)
        else:
            self._plot_interest(ax, **kwargs)

        ax.set_title(title or self._default_title(mode), fontsize=13, fontweight="bold")
        fig.tight_layout()
        return _finish(fig, ax, save_path, return_fig_ax)

    def _default_title(self, mode: str) -> str:
        label = "Remaining Balance" if mode == "balance" else "Cumulative Interest"
        return f"{label} ({self.strategy.title()})"

    def _plot_balance(self, ax, show_payoffs: bool = True, color: str = "#EF4444"):
        from matplotlib.ticker import FuncFormatter

        months = np.array([p.month for p in self.timeline])
        balances = self.balance_path
        ax.plot(months, balances, color=color, linewidth=DEFAULT_LINEWIDTH_THICK)
        ax.fill_between(months, balances, color=color, alpha=DEFAULT_ALPHA_FILL)

        if show_payoffs:
            for event in self.debts_paid_order:
                ax.axvline(event.month, color="gray", linestyle="--", linewidth=DEFAULT_LINEWIDTH, alpha=0.6)
                ax.annotate(
                    event.name,
                    xy=(event.month, balances[event.month]),
                    xytext=(4, 8),
                    textcoords="offset points",
                    fontsize=8,
                    rotation=45,
                )

        ax.set_xlabel("Month")
        ax.set_ylabel("Total Balance")
        ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
        ax.grid(True, alpha=0.3)

    def _plot_interest(self, ax, color: str = "#F59E0B"):
        from matplotlib.ticker import FuncFormatter

        months = np.array([p.month for p in self.timeline])
        ax.plot(months, self.interest_path, color=color, linewidth=DEFAULT_LINEWIDTH_THICK)
        ax.set_xlabel("Month")
        ax.set_ylabel("Interest Paid")
        ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
        ax.grid(True, alpha=0.3)


# ---------------------------------------------------------------------------
# Standalone plots
# ---------------------------------------------------------------------------

def plot_amortization_schedule(
    rows: Sequence[AmortizationRow],
    *,
    figsize: Optional[tuple] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Two-panel view of an amortization schedule.

    - Left: principal vs interest portion of each payment (stacked bars)
    - Right: remaining balance

    Raises
    ------
    ValueError
        If the schedule is empty.
    """
    if not rows:
        raise ValueError("Cannot plot an empty amortization schedule")

    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    months = np.array([r.month for r in rows])
    principal = np.array([r.principal for r in rows])
    interest = np.array([r.interest for r in rows])
    balance = np.array([r.balance for r in rows])

    fig, axes = plt.subplots(1, 2, figsize=figsize or DEFAULT_FIGSIZE_WIDE)

    axes[0].bar(months, principal, label="Principal", color="#10B981")
    axes[0].bar(months, interest, bottom=principal, label="Interest", color="#F59E0B")
    axes[0].set_xlabel("Month")
    axes[0].set_ylabel("Payment")
    axes[0].set_title("Payment Breakdown", fontsize=12, fontweight="bold")
    axes[0].legend(loc="best")
    axes[0].grid(True, alpha=0.3, axis="y")

    axes[1].plot(months, balance, color="#3B82F6", linewidth=DEFAULT_LINEWIDTH_THICK)
    axes[1].set_xlabel("Month")
    axes[1].set_ylabel("Balance")
    axes[1].set_title("Remaining Balance", fontsize=12, fontweight="bold")
    axes[1].yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    axes[1].grid(True, alpha=0.3)

    fig.suptitle(title or "Amortization Schedule", fontsize=14, fontweight="bold")
    fig.tight_layout()
    return _finish(fig, axes, save_path, return_fig_ax)


def plot_strategy_comparison(
    comparison: StrategyComparison,
    *,
    figsize: Optional[tuple] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Compare avalanche and snowball runs side by side.

    - Left: total balance trajectories
    - Right: cumulative interest trajectories
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    runs = {"Avalanche": comparison.avalanche, "Snowball": comparison.snowball}
    fig, axes = plt.subplots(1, 2, figsize=figsize or DEFAULT_FIGSIZE_WIDE)

    for label, result in runs.items():
        months = np.array([p.month for p in result.timeline])
        axes[0].plot(months, result.balance_path, label=label, linewidth=DEFAULT_LINEWIDTH_THICK)
        axes[1].plot(months, result.interest_path, label=label, linewidth=DEFAULT_LINEWIDTH_THICK)

    for ax, ylabel, panel in (
        (axes[0], "Total Balance", "Balance Trajectories"),
        (axes[1], "Interest Paid", "Cumulative Interest"),
    ):
        ax.set_xlabel("Month")
        ax.set_ylabel(ylabel)
        ax.set_title(panel, fontsize=12, fontweight="bold")
        ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
        ax.legend(loc="best")
        ax.grid(True, alpha=0.3)

    fig.suptitle(title or "Strategy Comparison", fontsize=14, fontweight="bold")
    fig.tight_layout()
    return _finish(fig, axes, save_path, return_fig_ax)
