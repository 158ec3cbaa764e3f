"""
Unit tests for CLI module.

Tests command-line interface functionality using Click's testing utilities.
"""

import json

import pytest
from click.testing import CliRunner

from debtpath.cli import __version__, main


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DEBTPATH_LOG_LEVEL", "DEBTPATH_DEBUG", "DEBTPATH_CURRENCY_SYMBOL", "DEBTPATH_DATE_FORMAT"):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# GROUP
# ============================================================================

class TestMain:

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("simulate", "compare", "payoff", "schedule", "plot", "config", "info"):
            assert command in result.output

    def test_info(self, runner):
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0
        assert "debtpath Version" in result.output
        assert "pydantic" in result.output


# ============================================================================
# PLAN COMMANDS
# ============================================================================

class TestSimulate:

    def test_simulate(self, runner, plan_file):
        result = runner.invoke(main, ["simulate", "-c", str(plan_file)])

        assert result.exit_code == 0, result.output
        assert "Payoff Order" in result.output
        assert "Store Card" in result.output

    def test_simulate_writes_result(self, runner, plan_file, tmp_path):
        output = tmp_path / "out" / "result.json"
        result = runner.invoke(
            main,
            ["simulate", "-c", str(plan_file), "--strategy", "snowball",
             "--extra", "50", "--start", "2025-02-01", "--output", str(output)],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["strategy"] == "snowball"
        assert data["extra_monthly_amount"] == 50.0
        assert data["start_date"] == "2025-02-01"
        assert data["plan_name"] == "File plan"
        assert data["fully_paid"] is True

    def test_simulate_quiet(self, runner, plan_file):
        result = runner.invoke(main, ["--quiet", "simulate", "-c", str(plan_file)])
        assert result.exit_code == 0
        assert "Payoff Order" not in result.output

    def test_simulate_invalid_plan(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"schema_version": "0.1.0", "strategy": "random"}))

        result = runner.invoke(main, ["simulate", "-c", str(path)])
        assert result.exit_code == 1
        assert "Error loading plan" in result.output

    def test_simulate_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["simulate", "-c", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_simulate_rejects_unknown_strategy(self, runner, plan_file):
        result = runner.invoke(main, ["simulate", "-c", str(plan_file), "--strategy", "random"])
        assert result.exit_code == 2


class TestCompare:

    def test_compare_table(self, runner, plan_file):
        result = runner.invoke(main, ["compare", "-c", str(plan_file)])

        assert result.exit_code == 0, result.output
        assert "Avalanche" in result.output
        assert "Snowball" in result.output
        assert "Recommended" in result.output

    def test_compare_json(self, runner, plan_file):
        result = runner.invoke(main, ["compare", "-c", str(plan_file), "--extra", "0", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert set(data) == {
            "avalanche_months", "snowball_months", "avalanche_interest",
            "snowball_interest", "interest_saved", "months_saved", "recommended_strategy",
        }


# ============================================================================
# SINGLE DEBT AND LOAN COMMANDS
# ============================================================================

class TestPayoff:

    def test_payoff(self, runner):
        result = runner.invoke(main, ["payoff", "--balance", "1000", "--rate", "24", "--payment", "50"])

        assert result.exit_code == 0, result.output
        assert "26 months" in result.output

    def test_payoff_never(self, runner):
        result = runner.invoke(main, ["payoff", "-b", "1000", "-r", "24", "-p", "15"])

        assert result.exit_code == 0
        assert "Never" in result.output
        assert "does not cover" in result.output

    def test_payoff_json(self, runner):
        result = runner.invoke(
            main, ["payoff", "-b", "1000", "-r", "24", "-p", "50", "--extra", "50", "--json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["months_minimum"] == 26
        assert data["months_with_extra"] < 26


class TestSchedule:

    def test_schedule(self, runner):
        result = runner.invoke(main, ["schedule", "-P", "1000", "-r", "12", "-t", "12"])

        assert result.exit_code == 0, result.output
        assert "$88.85" in result.output
        assert "12 payments" in result.output

    def test_schedule_csv(self, runner, tmp_path):
        csv_path = tmp_path / "loan.csv"
        result = runner.invoke(
            main, ["schedule", "-P", "1000", "-r", "12", "-t", "12", "--csv", str(csv_path)]
        )

        assert result.exit_code == 0, result.output
        lines = csv_path.read_text().strip().splitlines()
        assert lines[0].startswith("month,payment,principal,interest,balance")
        assert len(lines) == 13

    def test_schedule_invalid_term(self, runner):
        result = runner.invoke(main, ["schedule", "-P", "1000", "-r", "12", "-t", "0"])
        assert result.exit_code == 1
        assert "Invalid loan" in result.output


# ============================================================================
# CONFIG COMMANDS
# ============================================================================

class TestConfigCommands:

    def test_create_and_validate(self, runner, tmp_path):
        path = tmp_path / "plan.json"

        created = runner.invoke(main, ["config", "create", str(path)])
        assert created.exit_code == 0, created.output
        assert path.exists()

        validated = runner.invoke(main, ["config", "validate", str(path)])
        assert validated.exit_code == 0, validated.output
        assert "Plan Valid" in validated.output

    def test_create_refuses_overwrite(self, runner, plan_file):
        result = runner.invoke(main, ["config", "create", str(plan_file)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_create_empty_template(self, runner, tmp_path):
        path = tmp_path / "empty.json"
        result = runner.invoke(main, ["config", "create", str(path), "--template", "empty"])

        assert result.exit_code == 0
        assert json.loads(path.read_text())["debts"] == []

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"debts": [{"id": "x", "balance": 1}]}))

        result = runner.invoke(main, ["config", "validate", str(path)])
        assert result.exit_code == 1
        assert "Plan validation failed" in result.output

    def test_validate_quiet(self, runner, plan_file):
        result = runner.invoke(main, ["-q", "config", "validate", str(plan_file)])
        assert result.exit_code == 0
        assert "Plan is valid" in result.output

    def test_show_table_in_snowball_order(self, runner, plan_file):
        result = runner.invoke(main, ["config", "show", str(plan_file), "--strategy", "snowball"])

        assert result.exit_code == 0, result.output
        assert result.output.index("Store Card") < result.output.index("Personal Loan")
        assert "20.00%" in result.output

    def test_show_json(self, runner, plan_file):
        result = runner.invoke(main, ["config", "show", str(plan_file), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "File plan"
        assert data["debts"][1]["balance"] == 2000.0
