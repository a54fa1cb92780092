"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class SMTPSettings:  # pylint: disable=too-many-instance-attributes
    """SMTP server connectivity configuration."""

    host: str
    port: int
    username: str | None
    password: str | None
    use_starttls: bool
    use_ssl: bool
    timeout_seconds: int
    debug: bool


@dataclass(frozen=True)
class MailSettings:
    """Sender identity and defaults applied to every composed email."""

    from_address: str
    from_name: str | None
    charset: str | None
    reply_to: tuple[str, ...]
    cc: tuple[str, ...]
    bcc: tuple[str, ...]
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PopBeforeSmtpSettings:
    """POP3 mailbox used to authorize SMTP delivery."""

    host: str
    username: str | None
    password: str | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    smtp: SMTPSettings
    mail: MailSettings
    pop_before_smtp: PopBeforeSmtpSettings | None
