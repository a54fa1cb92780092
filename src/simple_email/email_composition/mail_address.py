"""Mail address parsing and validation."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from email.utils import formataddr, parseaddr

from email_validator import EmailNotValidError, validate_email

from .composition_errors import EmailValidationError, UnsupportedCharsetError


def ensure_supported_charset(charset: str) -> str:
    """Return ``charset`` unchanged when the codec registry knows it.

    Raises:
      UnsupportedCharsetError: If the name is blank or no codec is registered for it.
    """
    if not isinstance(charset, str) or not charset.strip():
        raise UnsupportedCharsetError(charset)
    try:
        codecs.lookup(charset)
    except (LookupError, ValueError) as exc:
        raise UnsupportedCharsetError(charset) from exc
    return charset


@dataclass(frozen=True)
class MailAddress:
    """A validated mailbox: ``local@domain`` plus an optional display name."""

    address: str
    display_name: str | None = None
    charset: str | None = None

    @staticmethod
    def parse(text: str) -> MailAddress:
        """Parse ``"Name <local@domain>"`` or a bare ``local@domain``."""
        if not isinstance(text, str) or not text.strip():
            raise EmailValidationError("Email address must not be empty.")
        display_name, addr_spec = parseaddr(text)
        if not addr_spec:
            raise EmailValidationError(f"Invalid email address: {text!r}")
        return MailAddress(
            address=_normalize_addr_spec(addr_spec, original=text),
            display_name=display_name or None,
        )

    @staticmethod
    def create(
        address: str, name: str | None = None, charset: str | None = None
    ) -> MailAddress:
        """Build an address from user input, overriding the parsed name with ``name``."""
        parsed = MailAddress.parse(address)
        if not name:
            return parsed
        if charset:
            ensure_supported_charset(charset)
        return MailAddress(address=parsed.address, display_name=name, charset=charset or None)

    def __str__(self) -> str:
        if not self.display_name:
            return self.address
        return formataddr((self.display_name, self.address), charset=self.charset or "utf-8")


def _normalize_addr_spec(addr_spec: str, *, original: str) -> str:
    try:
        result = validate_email(addr_spec, check_deliverability=False)
    except EmailNotValidError as exc:
        raise EmailValidationError(f"Invalid email address: {original!r} ({exc})") from exc
    # Headers and the SMTP envelope need the IDNA form of the domain.
    return f"{result.local_part}@{result.ascii_domain}"
