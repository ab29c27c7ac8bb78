"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from calcapi.cli import app, format_result


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


class TestEval:
    """calcapi eval."""

    def test_integral_result(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2 + 3 * 4"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "14"

    def test_fractional_result(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "10 / 4"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2.5"

    def test_leading_minus_expression(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--", "-3 * 2"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "-6"

    def test_with_ast(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "--ast", "3 * 4"])
        assert result.exit_code == 0
        first, _, rest = result.stdout.partition("\n")
        assert first == "12"
        assert json.loads(rest)["operator"] == "*"

    def test_division_by_zero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 / 0"])
        assert result.exit_code == 1
        assert "Division by zero" in result.output

    def test_long_chain_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "+".join(["1"] * 500)])
        assert result.exit_code == 1
        assert "nesting deeper than 100" in result.output

    def test_invalid_expression_shows_caret(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "3 & 4"])
        assert result.exit_code == 1
        assert "'&'" in result.output
        assert "    ^" in result.output


class TestTokens:
    """calcapi tokens."""

    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["tokens", "3 + 4"])
        assert result.exit_code == 0
        assert "number" in result.stdout
        assert "plus" in result.stdout
        assert "eof" in result.stdout

    def test_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["tokens", "3.1.4"])
        assert result.exit_code == 1


class TestAst:
    """calcapi ast."""

    def test_render(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["ast", "1 - 2 - 3"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "((1 - 2) - 3)"

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["ast", "--json", "--", "--5"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["type"] == "unary"
        assert data["operand"]["type"] == "unary"

    def test_syntax_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["ast", "(1 + 2"])
        assert result.exit_code == 1
        assert "expected ')'" in result.output


class TestVersion:
    """calcapi --version."""

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.startswith("calcapi ")


class TestFormatResult:
    """Result formatting."""

    def test_formats(self) -> None:
        assert format_result(14.0) == "14"
        assert format_result(-0.5) == "-0.5"
        assert format_result(float("inf")) == "inf"
