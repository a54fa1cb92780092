"""Email sending exports."""

from .delivery_outcomes import EmailSendResult, SendStatus
from .email_dispatch import SMTPClient, SynchronousSMTPClient, collect_recipients
from .mail_session import (
    SMTP_PROTOCOL,
    SMTPS_PROTOCOL,
    Credentials,
    MailSession,
    PopBeforeSmtp,
)

__all__ = [
    "SendStatus",
    "EmailSendResult",
    "SMTPClient",
    "SynchronousSMTPClient",
    "collect_recipients",
    "SMTP_PROTOCOL",
    "SMTPS_PROTOCOL",
    "Credentials",
    "MailSession",
    "PopBeforeSmtp",
]
