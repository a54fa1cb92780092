"""CLI send integration tests."""

from __future__ import annotations

from email.message import Message
from pathlib import Path

import pytest
from click.testing import CliRunner
from simple_email.cli import cli

CONFIG_TEXT = """
smtp:
  host: localhost
  port: 2525
  use_starttls: false
mail:
  from_address: sender@example.com
  charset: UTF-8
"""


class _FakeSmtpSession:
    def __init__(self, host: str, port: int, timeout: float) -> None:
        self.host = host
        self.port = port
        self.sent: list[tuple[Message, list[str] | None]] = []

    def ehlo(self) -> None:
        return None

    def send_message(
        self, message: Message, from_addr: str | None = None, to_addrs: list[str] | None = None
    ) -> None:
        self.sent.append((message, to_addrs))

    def quit(self) -> None:
        return None


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "simple-email.yaml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "generated.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_send_dry_run_prints_message(config_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "send",
            "--config",
            str(config_path),
            "--to",
            "qa@example.com",
            "--to",
            "ops@example.com",
            "--subject",
            "Dry run",
            "--body",
            "Hello world",
            "--header",
            "X-Run=dry",
            "--dry-run",
        ],
    )

    assert result.exit_code == 0
    assert "To: qa@example.com, ops@example.com" in result.output
    assert "Subject: Dry run" in result.output
    assert "X-Run: dry" in result.output
    assert "Content-Type: text/plain; charset=UTF-8" in result.output
    assert "Hello world" in result.output


def test_send_reads_body_file_and_delivers(
    config_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    sessions: list[_FakeSmtpSession] = []

    def smtp_factory(host: str, port: int, timeout: float) -> _FakeSmtpSession:
        session = _FakeSmtpSession(host, port, timeout)
        sessions.append(session)
        return session

    monkeypatch.setattr("simple_email.email_sending.email_dispatch.smtplib.SMTP", smtp_factory)
    body_path = tmp_path / "body.html"
    body_path.write_text("<p>Hello</p>", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "send",
            "--config",
            str(config_path),
            "--to",
            "qa@example.com",
            "--body-file",
            str(body_path),
            "--content-type",
            "text/html",
        ],
    )

    assert result.exit_code == 0
    assert len(sessions) == 1
    assert (sessions[0].host, sessions[0].port) == ("localhost", 2525)
    message, recipients = sessions[0].sent[0]
    assert recipients == ["qa@example.com"]
    assert message["Content-Type"] == "text/html; charset=UTF-8"
    assert message["Message-ID"] in result.output


def test_send_reports_delivery_failure(
    config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refusing_factory(host: str, port: int, timeout: float) -> _FakeSmtpSession:
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(
        "simple_email.email_sending.email_dispatch.smtplib.SMTP", refusing_factory
    )
    runner = CliRunner()

    result = runner.invoke(
        cli, ["send", "--config", str(config_path), "--to", "qa@example.com", "--body", "Hi"]
    )

    assert result.exit_code != 0
    assert isinstance(result.exception, Exception)
    assert "localhost:2525" in str(result.exception)


def test_send_rejects_body_and_body_file_together(config_path: Path, tmp_path: Path) -> None:
    body_path = tmp_path / "body.txt"
    body_path.write_text("Hello", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "send",
            "--config",
            str(config_path),
            "--to",
            "qa@example.com",
            "--body",
            "Hello",
            "--body-file",
            str(body_path),
        ],
    )

    assert result.exit_code == 2
    assert "either --body or --body-file" in result.output
