"""Send execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from simple_email.email_composition.constants import TEXT_PLAIN
from simple_email.email_sending.delivery_outcomes import EmailSendResult


@dataclass(frozen=True)
class SendRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for composing and sending one email."""

    config_path: str
    to_addresses: tuple[str, ...]
    subject: str | None = None
    body: str | None = None
    content_type: str = TEXT_PLAIN
    headers: Mapping[str, str] = field(default_factory=dict)
    dry_run: bool = False


@dataclass(frozen=True)
class SendOutcome:
    """Output contract for one send execution."""

    result: EmailSendResult
    rendered_message: str | None
    dry_run: bool
