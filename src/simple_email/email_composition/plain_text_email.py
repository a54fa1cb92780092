"""Plain text email."""

from __future__ import annotations

from typing import Self

from .composed_email import Email
from .composition_errors import EmailValidationError
from .constants import TEXT_PLAIN


class SimpleEmail(Email):
    """Email whose body is a single ``text/plain`` part."""

    def set_msg(self, text: str) -> Self:
        if not text:
            raise EmailValidationError("Invalid message supplied")
        self.set_content(text, TEXT_PLAIN)
        return self
