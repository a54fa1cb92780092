from __future__ import annotations

import pytest
from simple_email.email_composition.composition_errors import EmailValidationError
from simple_email.email_composition.plain_text_email import SimpleEmail


class _UnusedSMTPClient:
    def send_message(self, session, message) -> None:
        raise AssertionError("no delivery expected")


@pytest.mark.parametrize("text", ["", None])
def test_set_msg_rejects_empty_text(text: str | None) -> None:
    email = SimpleEmail(smtp_client=_UnusedSMTPClient())

    with pytest.raises(EmailValidationError):
        email.set_msg(text)  # type: ignore[arg-type]


def test_set_msg_stores_text_plain_content() -> None:
    email = SimpleEmail(smtp_client=_UnusedSMTPClient())

    returned = email.set_msg("Hello world")

    assert returned is email
    assert email.content == "Hello world"
    assert email.content_type == "text/plain"


def test_plain_text_message_uses_default_charset() -> None:
    email = SimpleEmail(smtp_client=_UnusedSMTPClient())
    email.host_name = "localhost"
    email.charset = "UTF-8"
    email.set_from("sender@example.com")
    email.add_to("receiver@example.com")
    email.set_msg("Grüße aus Köln")

    message = email.build_message()

    assert message.get_content_type() == "text/plain"
    assert message.get_content_charset() == "utf-8"
    payload = message.get_payload(decode=True)
    assert isinstance(payload, bytes)
    assert payload.decode("utf-8") == "Grüße aus Köln"
