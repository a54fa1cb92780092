"""Mail session entities handed to the transport."""

from __future__ import annotations

from dataclasses import dataclass

SMTP_PROTOCOL = "smtp"
SMTPS_PROTOCOL = "smtps"
DEFAULT_SOCKET_TIMEOUT_SECONDS = 60


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used for SMTP or POP3 login."""

    username: str | None
    password: str | None

    @property
    def complete(self) -> bool:
        return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class PopBeforeSmtp:
    """POP3 mailbox to log into before an SMTP session is opened."""

    host: str
    username: str | None
    password: str | None


@dataclass(frozen=True)
class MailSession:  # pylint: disable=too-many-instance-attributes
    """Resolved SMTP session configuration."""

    host: str
    port: int
    protocol: str = SMTP_PROTOCOL
    debug: bool = False
    use_starttls: bool = False
    starttls_required: bool = False
    timeout_seconds: float = DEFAULT_SOCKET_TIMEOUT_SECONDS
    credentials: Credentials | None = None
    bounce_address: str | None = None
    pop_before_smtp: PopBeforeSmtp | None = None

    @property
    def uses_ssl(self) -> bool:
        return self.protocol == SMTPS_PROTOCOL

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"
