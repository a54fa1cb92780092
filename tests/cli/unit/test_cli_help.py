"""CLI smoke tests."""

from click.testing import CliRunner
from simple_email.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "send" in result.output


def test_send_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["send", "--help"])

    assert result.exit_code == 0
    for option in ("--config", "--to", "--body-file", "--header", "--dry-run"):
        assert option in result.output
