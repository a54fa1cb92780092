"""SMTP transport used to deliver built messages."""

from __future__ import annotations

import contextlib
import logging
import poplib
import smtplib
from email.message import Message
from email.utils import getaddresses
from typing import Protocol

from .mail_session import Credentials, MailSession, PopBeforeSmtp

logger = logging.getLogger(__name__)

_RECIPIENT_HEADERS = ("To", "Cc", "Bcc")


class SMTPClient(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for SMTP clients used by the email sender."""

    def send_message(self, session: MailSession, message: Message) -> None: ...


class SynchronousSMTPClient:  # pylint: disable=too-few-public-methods
    """Real SMTP client implementation using smtplib."""

    def send_message(self, session: MailSession, message: Message) -> None:
        recipients = collect_recipients(message)
        if session.pop_before_smtp is not None:
            _authorize_with_pop(session.pop_before_smtp, session.timeout_seconds)

        logger.debug("Opening %s session to %s", session.protocol, session.address)
        smtp: smtplib.SMTP
        if session.uses_ssl:
            smtp = smtplib.SMTP_SSL(session.host, session.port, timeout=session.timeout_seconds)
        else:
            smtp = smtplib.SMTP(session.host, session.port, timeout=session.timeout_seconds)
        try:
            if session.debug:
                smtp.set_debuglevel(1)
            smtp.ehlo()
            if session.use_starttls and not session.uses_ssl:
                if session.starttls_required or smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if session.credentials is not None:
                _login(smtp, session.credentials)
            smtp.send_message(message, from_addr=session.bounce_address, to_addrs=recipients)
        finally:
            with contextlib.suppress(smtplib.SMTPServerDisconnected):
                smtp.quit()
        logger.debug("Delivered message to %d recipient(s)", len(recipients))


def collect_recipients(message: Message) -> list[str]:
    """Return the envelope recipients named in the To, Cc and Bcc headers."""
    values: list[str] = []
    for header in _RECIPIENT_HEADERS:
        values.extend(str(value) for value in message.get_all(header, []))
    return [address for _, address in getaddresses(values) if address]


def _login(smtp: smtplib.SMTP, credentials: Credentials) -> None:
    if not credentials.complete:
        raise smtplib.SMTPAuthenticationError(
            535, b"Authentication requires both a username and a password."
        )
    smtp.login(str(credentials.username), str(credentials.password))


def _authorize_with_pop(settings: PopBeforeSmtp, timeout: float) -> None:
    logger.debug("Authorizing through POP3 host %s before SMTP", settings.host)
    pop = poplib.POP3(settings.host, timeout=timeout)
    try:
        pop.user(settings.username or "")
        pop.pass_(settings.password or "")
    finally:
        pop.quit()
