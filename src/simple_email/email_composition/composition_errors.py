"""Email composition error kinds."""

from __future__ import annotations


class EmailError(Exception):
    """Base class for every error raised while composing or sending an email."""


class EmailValidationError(EmailError, ValueError):
    """Raised when a value handed to an email is rejected."""


class UnsupportedCharsetError(EmailValidationError, LookupError):
    """Raised when a charset name is not known to the codec registry."""

    def __init__(self, charset: object) -> None:
        super().__init__(f"Unsupported charset: {charset!r}")
        self.charset = charset


class EmailConfigurationError(EmailError):
    """Raised when an email lacks host, sender or recipients at build time."""


class EmailTransportError(EmailError):
    """Raised when the mail transport fails to deliver a built message."""
