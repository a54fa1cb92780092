"""Email sending outcome entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum


class SendStatus(str, Enum):
    """Email sending outcome status."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EmailSendResult:
    """Outcome of attempting to send one built message."""

    message_id: str | None
    status: SendStatus
    sent_at: datetime | None
    error_message: str | None

    @staticmethod
    def sent(message_id: str | None) -> EmailSendResult:
        return EmailSendResult(
            message_id=message_id,
            status=SendStatus.SENT,
            sent_at=datetime.now(UTC),
            error_message=None,
        )

    @staticmethod
    def failed(message_id: str | None, error: Exception) -> EmailSendResult:
        message = str(error)
        if error.__cause__ is not None:
            message = f"{message} ({error.__cause__})"
        return EmailSendResult(
            message_id=message_id,
            status=SendStatus.FAILED,
            sent_at=None,
            error_message=message,
        )

    @staticmethod
    def skipped(message_id: str | None) -> EmailSendResult:
        return EmailSendResult(
            message_id=message_id,
            status=SendStatus.SKIPPED,
            sent_at=None,
            error_message=None,
        )
