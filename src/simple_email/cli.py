"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from simple_email.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from simple_email.email_composition.constants import TEXT_PLAIN
from simple_email.email_sending.delivery_outcomes import SendStatus
from simple_email.email_sending.email_dispatch import SynchronousSMTPClient
from simple_email.run_execution import RunExecutionError, SendRequest, execute_send


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-email")
@click.option(
    "--verbose", "-v", is_flag=True, default=False, help="Log composition and delivery steps."
)
def cli(verbose: bool) -> None:
    """Compose and send email through SMTP."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML mail configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML mail configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="send")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON mail configuration file",
)
@click.option(
    "--to",
    "to_addresses",
    required=True,
    multiple=True,
    help="Recipient address; repeat for several recipients",
)
@click.option("--subject", required=False, help="Subject line")
@click.option("--body", required=False, help="Message body text")
@click.option(
    "--body-file",
    "body_file",
    required=False,
    type=click.Path(path_type=str, exists=True, dir_okay=False),
    help="Read the message body from this UTF-8 file",
)
@click.option(
    "--content-type",
    "content_type",
    required=False,
    default=TEXT_PLAIN,
    show_default=True,
    help="Content-Type of the body; the configured charset is added to text types",
)
@click.option(
    "--header",
    "header_pairs",
    multiple=True,
    help="Extra header as NAME=VALUE; repeat for several headers",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Build the message and print it without contacting the SMTP server.",
)
def send(  # pylint: disable=too-many-arguments
    config_path: str,
    to_addresses: tuple[str, ...],
    subject: str | None,
    body: str | None,
    body_file: str | None,
    content_type: str,
    header_pairs: tuple[str, ...],
    dry_run: bool,
) -> None:
    """Compose an email from the configuration and send it."""
    if body is not None and body_file is not None:
        raise click.UsageError("Use either --body or --body-file, not both.")
    if body_file is not None:
        body = Path(body_file).read_text(encoding="utf-8")
    try:
        outcome = execute_send(
            SendRequest(
                config_path=config_path,
                to_addresses=to_addresses,
                subject=subject,
                body=body,
                content_type=content_type,
                headers=_parse_header_pairs(header_pairs),
                dry_run=dry_run,
            ),
            smtp_client_factory=SynchronousSMTPClient,
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    if outcome.result.status is SendStatus.FAILED:
        raise CliError(outcome.result.error_message or "Sending failed.")
    if outcome.rendered_message is not None:
        click.echo(outcome.rendered_message)
    else:
        click.echo(str(outcome.result.message_id))


def _parse_header_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for pair in pairs:
        name, separator, value = pair.partition("=")
        if not separator or not name.strip():
            raise click.BadParameter(f"Expected NAME=VALUE, got {pair!r}", param_hint="--header")
        headers[name.strip()] = value.strip()
    return headers


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
