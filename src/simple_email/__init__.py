"""Compose MIME email messages and deliver them through SMTP."""

import logging

from .email_composition import (
    Email,
    EmailConfigurationError,
    EmailError,
    EmailTransportError,
    EmailValidationError,
    MailAddress,
    SimpleEmail,
    UnsupportedCharsetError,
)
from .email_sending import Credentials, MailSession, SynchronousSMTPClient

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Email",
    "SimpleEmail",
    "MailAddress",
    "MailSession",
    "Credentials",
    "SynchronousSMTPClient",
    "EmailError",
    "EmailValidationError",
    "UnsupportedCharsetError",
    "EmailConfigurationError",
    "EmailTransportError",
]
