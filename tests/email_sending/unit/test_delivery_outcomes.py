from __future__ import annotations

from simple_email.email_composition.composition_errors import EmailTransportError
from simple_email.email_sending.delivery_outcomes import EmailSendResult, SendStatus


def test_sent_result_records_timestamp() -> None:
    result = EmailSendResult.sent("<id@example.com>")

    assert result.status == SendStatus.SENT
    assert result.message_id == "<id@example.com>"
    assert result.sent_at is not None
    assert result.error_message is None


def test_failed_result_includes_cause() -> None:
    try:
        try:
            raise ConnectionRefusedError("refused")
        except ConnectionRefusedError as exc:
            raise EmailTransportError("Sending failed : host:25") from exc
    except EmailTransportError as error:
        result = EmailSendResult.failed("<id@example.com>", error)

    assert result.status == SendStatus.FAILED
    assert result.sent_at is None
    assert result.error_message == "Sending failed : host:25 (refused)"


def test_skipped_result_has_no_timestamp() -> None:
    result = EmailSendResult.skipped(None)

    assert result.status is SendStatus.SKIPPED
    assert result.status == "skipped"
    assert result.sent_at is None
