"""CLI smoke tests."""

from click.testing import CliRunner
from graphql_field_timer.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "split" in result.output
    assert "run" in result.output


def test_run_help_lists_timing_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "--help"])

    assert result.exit_code == 0
    for option in ("--url", "--header", "--variables", "--timeout", "--concurrency", "--format"):
        assert option in result.output
