"""Send execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable

from simple_email.configuration import Configuration, ConfigurationError, load_configuration
from simple_email.email_composition import (
    EmailError,
    EmailTransportError,
    SimpleEmail,
)
from simple_email.email_composition.constants import TEXT_PLAIN
from simple_email.email_sending.delivery_outcomes import EmailSendResult
from simple_email.email_sending.email_dispatch import SMTPClient, SynchronousSMTPClient

from .run_contracts import SendOutcome, SendRequest

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a send use case cannot be completed."""


def execute_send(
    request: SendRequest,
    *,
    smtp_client_factory: Callable[[], SMTPClient] | None = None,
) -> SendOutcome:
    """Compose the requested email from configuration and deliver it.

    Composition problems raise :class:`RunExecutionError`; delivery failures are
    reported in the returned outcome.
    """
    resolved_smtp_client_factory = smtp_client_factory or SynchronousSMTPClient
    try:
        configuration = load_configuration(request.config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc

    try:
        email = compose_configured_email(
            configuration, request, smtp_client=resolved_smtp_client_factory()
        )
        message = email.build_message()
    except EmailError as exc:
        raise RunExecutionError(str(exc)) from exc

    message_id = str(message["Message-ID"])
    if request.dry_run:
        logger.info("Dry run: message %s built, not sent", message_id)
        return SendOutcome(
            result=EmailSendResult.skipped(message_id),
            rendered_message=message.as_string(),
            dry_run=True,
        )

    try:
        email.send_message()
    except EmailTransportError as exc:
        return SendOutcome(
            result=EmailSendResult.failed(message_id, exc),
            rendered_message=None,
            dry_run=False,
        )
    return SendOutcome(
        result=EmailSendResult.sent(message_id),
        rendered_message=None,
        dry_run=False,
    )


def compose_configured_email(
    configuration: Configuration,
    request: SendRequest,
    *,
    smtp_client: SMTPClient | None = None,
) -> SimpleEmail:
    """Build a :class:`SimpleEmail` from file configuration plus per-send request values."""
    email = SimpleEmail(smtp_client=smtp_client)

    smtp = configuration.smtp
    email.host_name = smtp.host
    if smtp.use_ssl:
        email.ssl_on_connect = True
        email.ssl_smtp_port = smtp.port
    else:
        email.smtp_port = smtp.port
    email.start_tls_enabled = smtp.use_starttls
    email.socket_timeout = smtp.timeout_seconds
    email.debug = smtp.debug
    if smtp.username:
        email.set_authentication(smtp.username, smtp.password)

    pop = configuration.pop_before_smtp
    if pop is not None:
        email.set_pop_before_smtp(True, pop.host, pop.username, pop.password)

    mail = configuration.mail
    email.charset = mail.charset
    email.set_from(mail.from_address, mail.from_name, mail.charset)
    for address in mail.reply_to:
        email.add_reply_to(address)
    for address in mail.cc:
        email.add_cc(address)
    for address in mail.bcc:
        email.add_bcc(address)
    for name, value in mail.headers.items():
        email.add_header(name, value)

    if request.to_addresses:
        email.extend_to(request.to_addresses)
    email.subject = request.subject
    for name, value in request.headers.items():
        email.add_header(name, value)
    if request.body:
        if request.content_type == TEXT_PLAIN:
            email.set_msg(request.body)
        else:
            email.set_content(request.body, request.content_type)
    return email
