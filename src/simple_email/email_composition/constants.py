"""Email composition constants."""

from __future__ import annotations

US_ASCII = "US-ASCII"
ISO_8859_1 = "ISO-8859-1"
UTF_8 = "UTF-8"

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
APPLICATION_OCTET_STREAM = "application/octet-stream"

DEFAULT_SMTP_PORT = 25
DEFAULT_SSL_SMTP_PORT = 465

# Longest folded header line, "Name: " prefix included.
HEADER_FOLD_LINE_LENGTH = 76
