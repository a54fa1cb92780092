"""Mail address parsing tests."""

from __future__ import annotations

import pytest
from simple_email.email_composition.composition_errors import (
    EmailValidationError,
    UnsupportedCharsetError,
)
from simple_email.email_composition.mail_address import MailAddress, ensure_supported_charset


def test_parse_bare_address() -> None:
    address = MailAddress.parse("someone_here@work-address.com.au")

    assert address == MailAddress("someone_here@work-address.com.au")
    assert str(address) == "someone_here@work-address.com.au"


def test_parse_address_with_display_name() -> None:
    address = MailAddress.parse("Name1 <me@home.com>")

    assert address.address == "me@home.com"
    assert address.display_name == "Name1"
    assert str(address) == "Name1 <me@home.com>"


def test_display_name_with_specials_is_quoted() -> None:
    address = MailAddress.parse('"joe.doe@apache.org" <joe.doe@apache.org>')

    assert address.display_name == "joe.doe@apache.org"
    assert str(address) == '"joe.doe@apache.org" <joe.doe@apache.org>'


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "no-at-sign.example.com",
        "user@",
        "@home.com",
        "me@home..com",
        "a..b@example.com",
        ".a@example.com",
        "a@-example.com",
    ],
)
def test_parse_rejects_malformed_addresses(text: str) -> None:
    with pytest.raises(EmailValidationError):
        MailAddress.parse(text)


def test_parse_converts_international_domain_to_ascii() -> None:
    address = MailAddress.parse("user@bücher.de")

    assert address.address == "user@xn--bcher-kva.de"


def test_parse_maps_international_domain_with_current_idna_rules() -> None:
    address = MailAddress.parse("user@faß.de")

    assert address.address == "user@xn--fa-hia.de"


def test_create_uses_given_name_and_charset() -> None:
    address = MailAddress.create("me@home.com", "Name1", "ISO-8859-1")

    assert address == MailAddress("me@home.com", "Name1", "ISO-8859-1")
    assert str(address) == "Name1 <me@home.com>"


@pytest.mark.parametrize("name", ["", None])
def test_create_treats_empty_name_as_absent(name: str | None) -> None:
    address = MailAddress.create("joe.doe@apache.org", name)

    assert address.display_name is None
    assert str(address) == "joe.doe@apache.org"


def test_create_keeps_parsed_name_when_no_name_given() -> None:
    address = MailAddress.create("Name1 <me@home.com>")

    assert address.display_name == "Name1"


def test_create_rejects_unknown_charset_for_display_name() -> None:
    with pytest.raises(UnsupportedCharsetError) as excinfo:
        MailAddress.create("me@home.com", "me@home.com", "bad.encoding여\n")

    assert isinstance(excinfo.value, EmailValidationError)
    assert isinstance(excinfo.value, LookupError)


def test_create_ignores_charset_without_display_name() -> None:
    address = MailAddress.create("me@home.com", None, "bad.encoding")

    assert address == MailAddress("me@home.com")


def test_non_ascii_display_name_is_encoded_with_charset() -> None:
    address = MailAddress("me@home.com", "Jörg", "ISO-8859-1")

    rendered = str(address)

    assert rendered.lower().startswith("=?iso-8859-1?")
    assert rendered.endswith("<me@home.com>")


@pytest.mark.parametrize("charset", ["US-ASCII", "UTF-8", "ISO-8859-1", "utf8"])
def test_ensure_supported_charset_returns_name_unchanged(charset: str) -> None:
    assert ensure_supported_charset(charset) == charset


@pytest.mark.parametrize("charset", ["", "  ", "bad.encoding여\n", "no-such-charset"])
def test_ensure_supported_charset_rejects_unknown_names(charset: str) -> None:
    with pytest.raises(UnsupportedCharsetError):
        ensure_supported_charset(charset)
