"""
Command-Line Interface for debtpath.

Purpose
-------
Provides a CLI for simulating payoff plans, comparing strategies, and
inspecting single debts and loan schedules without writing Python code.

Commands
--------
- simulate: Run a payoff plan from a plan file
- compare: Avalanche vs snowball on the same plan
- payoff: Closed-form payoff estimate for one debt
- schedule: Amortization schedule for a fixed-term loan
- plot: Render a plan's balance or interest chart to an image
- config: Validate, display and create plan files
- info: Version and dependency information

Example Usage
-------------
    # Create a starter plan and run it
    $ debtpath config create plan.json
    $ debtpath simulate -c plan.json --extra 200 --output results/plan.json

    # How long does a card take at $50/month?
    $ debtpath payoff --balance 1000 --rate 24 --payment 50

    # Loan schedule to CSV
    $ debtpath schedule --principal 20000 --rate 6.5 --term 60 --csv loan.csv
"""

from __future__ import annotations

import json
import logging
import math
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings
from .constants import STRATEGIES
from .exceptions import DebtPathError
from .utils import format_currency, format_percentage

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = "DEBUG" if verbose else settings.effective_log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_plan_or_exit(path: Path):
    from .serialization import load_plan

    try:
        plan = load_plan(path)
    except DebtPathError as e:
        click.echo(f"Error loading plan: {e}", err=True)
        sys.exit(1)
    logger.debug("Loaded plan %r with %d debts from %s", plan.name, len(plan.debts), path)
    return plan


def _money(ctx: click.Context, value: float) -> str:
    return format_currency(value, symbol=ctx.obj["settings"].currency_symbol)


@click.group()
@click.version_option(version=__version__, prog_name="debtpath")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    debtpath - Debt payoff planning toolkit.

    Simulates avalanche and snowball payoff plans, estimates single-debt
    payoff times and builds loan amortization schedules.

    Use 'debtpath COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    _configure_logging(settings, verbose)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.option(
    "--strategy", "-s",
    type=click.Choice(STRATEGIES),
    default=None,
    help="Override the plan's strategy"
)
@click.option(
    "--extra", "-e",
    type=click.FloatRange(min=0),
    default=None,
    help="Override the plan's extra monthly amount"
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Start date YYYY-MM-DD (default: plan start date or today)"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the result to this JSON file"
)
@click.pass_context
def simulate(
    ctx: click.Context,
    config: Path,
    strategy: Optional[str],
    extra: Optional[float],
    start,
    output: Optional[Path],
) -> None:
    """
    Simulate a payoff plan month by month.

    Example:
        debtpath simulate -c plan.json --strategy snowball --extra 150
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings = ctx.obj["settings"]

    from .serialization import save_simulation_result
    from .simulation import simulate_payoff_plan

    plan = _load_plan_or_exit(config)
    strategy = strategy or plan.strategy
    extra = plan.extra_monthly_amount if extra is None else extra
    start_date = start.date() if start else plan.start_date

    if not quiet:
        console.print(
            f"[bold blue]Simulating {len(plan.debts)} debts ({strategy}, "
            f"{_money(ctx, extra)} extra/month)...[/bold blue]"
        )

    result = simulate_payoff_plan(plan.to_records(), extra, strategy, start=start_date)

    if not quiet:
        table = Table(title=f"Payoff Plan: {plan.name}", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")
        table.add_row("Strategy", strategy)
        table.add_row("Months", str(result.months))
        table.add_row("Payoff date", result.payoff_date.strftime(settings.date_format))
        table.add_row("Total interest", _money(ctx, result.total_interest))
        table.add_row("Fully paid", "Yes" if result.fully_paid else "No")
        console.print(table)

        if result.debts_paid_order:
            order = Table(title="Payoff Order", show_header=True)
            order.add_column("#", justify="right")
            order.add_column("Debt", style="cyan")
            order.add_column("Month", justify="right")
            for n, event in enumerate(result.debts_paid_order, start=1):
                order.add_row(str(n), event.name, str(event.month))
            console.print(order)

        if not result.fully_paid:
            console.print(
                f"[yellow]Not paid off within {result.months} months; "
                f"{_money(ctx, result.final_balance)} remains.[/yellow]"
            )

    if output:
        save_simulation_result(result, output, plan_name=plan.name)
        if not quiet:
            console.print(f"[green]Result saved to {output}[/green]")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.option(
    "--extra", "-e",
    type=click.FloatRange(min=0),
    default=None,
    help="Override the plan's extra monthly amount"
)
@click.option("--json", "as_json", is_flag=True, help="Print the comparison as JSON")
@click.pass_context
def compare(ctx: click.Context, config: Path, extra: Optional[float], as_json: bool) -> None:
    """
    Compare avalanche and snowball on the same plan.

    Example:
        debtpath compare -c plan.json --extra 200
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .serialization import comparison_to_dict
    from .simulation import compare_strategies

    plan = _load_plan_or_exit(config)
    extra = plan.extra_monthly_amount if extra is None else extra
    comparison = compare_strategies(plan.to_records(), extra, start=plan.start_date)

    if as_json:
        click.echo(json.dumps(comparison_to_dict(comparison), indent=2))
        return

    table = Table(title="Strategy Comparison", show_header=True)
    table.add_column("Strategy", style="cyan")
    table.add_column("Months", justify="right")
    table.add_column("Total interest", justify="right")
    for name, result in (("Avalanche", comparison.avalanche), ("Snowball", comparison.snowball)):
        table.add_row(name, str(result.months), _money(ctx, result.total_interest))
    console.print(table)

    if not quiet:
        console.print(
            f"Avalanche saves {_money(ctx, comparison.interest_saved)} in interest "
            f"and {comparison.months_saved} months."
        )
    console.print(f"[bold]Recommended: {comparison.recommended_strategy}[/bold]")


# ---------------------------------------------------------------------------
# Single debts and loans
# ---------------------------------------------------------------------------

@main.command()
@click.option("--balance", "-b", type=click.FloatRange(min=0), required=True, help="Current balance")
@click.option("--rate", "-r", type=click.FloatRange(min=0), required=True, help="Annual rate in percent")
@click.option("--payment", "-p", type=click.FloatRange(min=0), required=True, help="Monthly payment")
@click.option("--extra", "-e", type=click.FloatRange(min=0), default=0.0, help="Extra monthly payment")
@click.option("--json", "as_json", is_flag=True, help="Print the estimate as JSON")
@click.pass_context
def payoff(
    ctx: click.Context,
    balance: float,
    rate: float,
    payment: float,
    extra: float,
    as_json: bool,
) -> None:
    """
    Estimate how long a single debt takes to pay off.

    Example:
        debtpath payoff --balance 1000 --rate 24 --payment 50 --extra 25
    """
    console = ctx.obj["console"]
    settings = ctx.obj["settings"]

    from .amortization import payoff_comparison, payoff_date_label
    from .serialization import payoff_comparison_to_dict
    from .utils import format_months, is_finite_months

    comparison = payoff_comparison(balance, rate, payment, extra)

    if as_json:
        click.echo(json.dumps(payoff_comparison_to_dict(comparison), indent=2))
        return

    table = Table(title="Payoff Estimate", show_header=True)
    table.add_column("Plan", style="cyan")
    table.add_column("Months", justify="right")
    table.add_column("Total interest", justify="right")
    table.add_column("Payoff", justify="right")

    plans = [("Minimum", comparison.months_minimum, comparison.interest_minimum)]
    if extra > 0:
        plans.append(("With extra", comparison.months_with_extra, comparison.interest_with_extra))
    for label, months, interest in plans:
        table.add_row(
            label,
            format_months(months),
            _money(ctx, interest),
            payoff_date_label(months, date_format=settings.date_format),
        )
    console.print(table)

    if math.isinf(comparison.months_minimum):
        console.print("[yellow]The payment does not cover the monthly interest.[/yellow]")
    elif extra > 0 and is_finite_months(comparison.months_with_extra):
        console.print(
            f"Paying {_money(ctx, extra)} more saves "
            f"{format_months(comparison.months_saved)} and "
            f"{_money(ctx, comparison.interest_saved)} in interest."
        )


@main.command()
@click.option("--principal", "-P", type=float, required=True, help="Loan principal")
@click.option("--rate", "-r", type=float, required=True, help="Annual rate in percent")
@click.option("--term", "-t", type=int, required=True, help="Term in months")
@click.option("--payment", "-p", type=float, default=None, help="Monthly payment override")
@click.option(
    "--csv", "csv_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the schedule to this CSV file"
)
@click.option("--rows", type=int, default=12, help="Rows to display (0 for all)")
@click.pass_context
def schedule(
    ctx: click.Context,
    principal: float,
    rate: float,
    term: int,
    payment: Optional[float],
    csv_path: Optional[Path],
    rows: int,
) -> None:
    """
    Print a loan amortization schedule.

    Example:
        debtpath schedule --principal 20000 --rate 6.5 --term 60 --csv loan.csv
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .amortization import amortization_schedule, fixed_payment, schedule_to_frame, schedule_totals
    from .config import LoanConfig

    try:
        loan = LoanConfig(
            principal=principal,
            annual_rate_percent=rate,
            term_months=term,
            monthly_payment=payment,
        )
    except PydanticValidationError as e:
        click.echo(f"Invalid loan: {e}", err=True)
        sys.exit(1)

    schedule_rows = amortization_schedule(
        loan.principal, loan.annual_rate_percent, loan.term_months, loan.monthly_payment
    )
    totals = schedule_totals(schedule_rows)
    monthly = loan.monthly_payment or fixed_payment(
        loan.principal, loan.annual_rate_percent, loan.term_months
    )

    if not quiet:
        shown = schedule_rows if rows <= 0 else schedule_rows[:rows]
        table = Table(title="Amortization Schedule", show_header=True)
        for column in ("Month", "Payment", "Principal", "Interest", "Balance"):
            table.add_column(column, justify="right")
        for row in shown:
            table.add_row(
                str(row.month),
                _money(ctx, row.payment),
                _money(ctx, row.principal),
                _money(ctx, row.interest),
                _money(ctx, row.balance),
            )
        console.print(table)
        if len(shown) < len(schedule_rows):
            console.print(f"... {len(schedule_rows) - len(shown)} more rows")

    console.print(
        f"Monthly payment {_money(ctx, monthly)}, {totals.months} payments, "
        f"total interest {_money(ctx, totals.total_interest)}"
    )

    if csv_path:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        schedule_to_frame(schedule_rows).to_csv(csv_path)
        if not quiet:
            console.print(f"[green]Schedule saved to {csv_path}[/green]")


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Image file to write (e.g. plan.png)"
)
@click.option(
    "--mode", "-m",
    type=click.Choice(["balance", "interest", "compare"]),
    default="balance",
    help="Chart type"
)
@click.pass_context
def plot(ctx: click.Context, config: Path, output: Path, mode: str) -> None:
    """
    Render a plan chart to an image file.

    Example:
        debtpath plot -c plan.json -o plan.png --mode compare
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    import matplotlib
    matplotlib.use("Agg")

    from .plotting import plot_strategy_comparison
    from .simulation import compare_strategies, simulate_payoff_plan

    plan = _load_plan_or_exit(config)
    debts = plan.to_records()
    output.parent.mkdir(parents=True, exist_ok=True)

    if mode == "compare":
        comparison = compare_strategies(debts, plan.extra_monthly_amount, start=plan.start_date)
        plot_strategy_comparison(comparison, title=plan.name, save_path=str(output))
    else:
        result = simulate_payoff_plan(
            debts, plan.extra_monthly_amount, plan.strategy, start=plan.start_date
        )
        result.plot(mode, save_path=str(output))

    if not quiet:
        console.print(f"[green]Chart saved to {output}[/green]")


# ---------------------------------------------------------------------------
# Plan files
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """
    Plan file management commands.

    Validate, display, and create payoff plan files.
    """


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a plan file.

    Example:
        debtpath config validate plan.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .serialization import load_plan

    try:
        plan = load_plan(config_file)
    except DebtPathError as e:
        click.echo(f"Plan validation failed: {e}", err=True)
        sys.exit(1)

    if quiet:
        click.echo("Plan is valid")
        return

    lines = [
        "[bold]Plan Valid[/bold]",
        "",
        f"[cyan]Name:[/cyan] {plan.name}",
        f"[cyan]Strategy:[/cyan] {plan.strategy}",
        f"[cyan]Extra monthly:[/cyan] {_money(ctx, plan.extra_monthly_amount)}",
        f"[cyan]Debts ({len(plan.debts)}):[/cyan]",
    ]
    for debt in plan.debts:
        lines.append(
            f"  - {debt.name or debt.id}: {_money(ctx, debt.balance)} at "
            f"{format_percentage(debt.annual_rate_percent, 2)}, minimum {_money(ctx, debt.minimum_payment)}"
        )
    console.print(Panel("\n".join(lines), title="Plan Summary", border_style="green"))


@config.command("show")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.option(
    "--strategy", "-s",
    type=click.Choice(STRATEGIES),
    default=None,
    help="Order debts by this strategy (default: plan's strategy)"
)
@click.pass_context
def config_show(ctx: click.Context, config_file: Path, format: str, strategy: Optional[str]) -> None:
    """
    Display a plan's debts in payoff priority order.

    Example:
        debtpath config show plan.json --format table
    """
    console = ctx.obj["console"]

    from .debts import sort_debts, total_balance, total_minimum_payment
    from .serialization import plan_to_dict

    plan = _load_plan_or_exit(config_file)

    if format == "json":
        click.echo(json.dumps(plan_to_dict(plan), indent=2))
        return

    strategy = strategy or plan.strategy
    debts = sort_debts(plan.to_records(), strategy)
    table = Table(title=f"{plan.name} ({strategy} order)", show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Debt", style="cyan")
    table.add_column("Balance", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Minimum", justify="right")
    for n, debt in enumerate(debts, start=1):
        table.add_row(
            str(n),
            debt.name,
            _money(ctx, debt.balance),
            format_percentage(debt.annual_rate_percent, 2),
            _money(ctx, debt.minimum_payment),
        )
    console.print(table)
    console.print(
        f"Total balance {_money(ctx, total_balance(debts))}, "
        f"minimum payments {_money(ctx, total_minimum_payment(debts))}/month"
    )


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option("--template", "-t", type=click.Choice(["basic", "empty"]), default="basic")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, template: str, force: bool) -> None:
    """
    Create a new plan file from a template.

    Example:
        debtpath config create my_plan.json --template basic
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .config import DebtConfig, PlanConfig
    from .serialization import save_plan

    if output_file.exists() and not force:
        click.echo(f"{output_file} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    if template == "basic":
        plan = PlanConfig(
            name="My payoff plan",
            debts=[
                DebtConfig(id="visa", name="Visa", balance=4_500, apr=23.0, minimumPayment=135),
                DebtConfig(id="store", name="Store Card", balance=800, apr=26.99, minimumPayment=35),
                DebtConfig(id="car", name="Car Loan", currentBalance=9_000, rate=6.5, monthlyPayment=280),
            ],
            extra_monthly_amount=200,
            strategy="avalanche",
        )
    else:
        plan = PlanConfig(name="My payoff plan")

    save_plan(plan, output_file)
    if not quiet:
        console.print(f"[green]Created plan file: {output_file}[/green]")


# ---------------------------------------------------------------------------
# Info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency information.
    """
    console = ctx.obj["console"]
    settings = ctx.obj["settings"]

    info_lines = [
        f"debtpath Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Log level: {settings.effective_log_level}",
    ]

    dependencies = ("numpy", "pandas", "matplotlib", "pydantic", "click", "rich")
    for name in dependencies:
        try:
            mod = __import__(name)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
