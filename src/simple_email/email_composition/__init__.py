"""Email composition exports."""

from .composed_email import Email
from .composition_errors import (
    EmailConfigurationError,
    EmailError,
    EmailTransportError,
    EmailValidationError,
    UnsupportedCharsetError,
)
from .content_negotiation import ContentType, parse_content_type, resolve_content_type
from .header_folding import fold_header_value
from .mail_address import MailAddress, ensure_supported_charset
from .plain_text_email import SimpleEmail

__all__ = [
    "Email",
    "SimpleEmail",
    "MailAddress",
    "ensure_supported_charset",
    "ContentType",
    "parse_content_type",
    "resolve_content_type",
    "fold_header_value",
    "EmailError",
    "EmailValidationError",
    "UnsupportedCharsetError",
    "EmailConfigurationError",
    "EmailTransportError",
]
