"""Email composition: addresses, headers, content and the send pipeline."""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from email import encoders
from email.header import Header
from email.message import Message
from email.utils import format_datetime, make_msgid
from pathlib import Path
from typing import Self

from simple_email.email_sending.email_dispatch import SMTPClient, SynchronousSMTPClient
from simple_email.email_sending.mail_session import (
    DEFAULT_SOCKET_TIMEOUT_SECONDS,
    SMTP_PROTOCOL,
    SMTPS_PROTOCOL,
    Credentials,
    MailSession,
    PopBeforeSmtp,
)

from .composition_errors import (
    EmailConfigurationError,
    EmailTransportError,
    EmailValidationError,
)
from .constants import (
    APPLICATION_OCTET_STREAM,
    DEFAULT_SMTP_PORT,
    DEFAULT_SSL_SMTP_PORT,
    TEXT_PLAIN,
    UTF_8,
)
from .content_negotiation import parse_content_type, resolve_content_type
from .header_folding import fold_header_value
from .mail_address import MailAddress, ensure_supported_charset

logger = logging.getLogger(__name__)


class Email(ABC):  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """Base class for composing and sending one email message.

    Server settings, addresses, headers and content are collected through
    properties and ``add_*``/``set_*`` methods. ``build_message`` validates the
    collected state and assembles an ``email.message.Message``; ``send_message``
    hands that message to an :class:`SMTPClient`. Subclasses decide how a plain
    message body is set through :meth:`set_msg`.
    """

    def __init__(self, smtp_client: SMTPClient | None = None) -> None:
        self._smtp_client: SMTPClient = smtp_client or SynchronousSMTPClient()
        self._mail_session: MailSession | None = None
        self._host_name: str | None = None
        self._smtp_port = DEFAULT_SMTP_PORT
        self._ssl_smtp_port = DEFAULT_SSL_SMTP_PORT
        self._ssl_on_connect = False
        self._start_tls_enabled = False
        self._start_tls_required = False
        self._socket_timeout: float = DEFAULT_SOCKET_TIMEOUT_SECONDS
        self._bounce_address: str | None = None
        self._debug = False
        self._credentials: Credentials | None = None
        self._pop_before_smtp: PopBeforeSmtp | None = None
        self._charset: str | None = None
        self._subject: str | None = None
        self._sent_date: datetime | None = None
        self._from_address: MailAddress | None = None
        self._to: list[MailAddress] = []
        self._cc: list[MailAddress] = []
        self._bcc: list[MailAddress] = []
        self._reply_to: list[MailAddress] = []
        self._headers: dict[str, str] = {}
        self._content: object | None = None
        self._content_type: str | None = None
        self._content_multipart: Message | None = None
        self._message: Message | None = None

    @abstractmethod
    def set_msg(self, text: str) -> Self:
        """Set the main body text of the message."""

    # Server settings

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, enabled: bool) -> None:
        self._debug = bool(enabled)

    @property
    def host_name(self) -> str | None:
        if self._mail_session is not None:
            return self._mail_session.host
        return self._host_name or None

    @host_name.setter
    def host_name(self, host_name: str | None) -> None:
        self._check_session_not_initialized()
        self._host_name = host_name

    @property
    def smtp_port(self) -> int:
        return self._smtp_port

    @smtp_port.setter
    def smtp_port(self, port: int) -> None:
        self._check_session_not_initialized()
        self._smtp_port = _require_port(port)

    @property
    def ssl_smtp_port(self) -> int:
        return self._ssl_smtp_port

    @ssl_smtp_port.setter
    def ssl_smtp_port(self, port: int) -> None:
        self._check_session_not_initialized()
        self._ssl_smtp_port = _require_port(port)

    @property
    def ssl_on_connect(self) -> bool:
        return self._ssl_on_connect

    @ssl_on_connect.setter
    def ssl_on_connect(self, enabled: bool) -> None:
        self._check_session_not_initialized()
        self._ssl_on_connect = bool(enabled)

    @property
    def start_tls_enabled(self) -> bool:
        return self._start_tls_enabled

    @start_tls_enabled.setter
    def start_tls_enabled(self, enabled: bool) -> None:
        self._check_session_not_initialized()
        self._start_tls_enabled = bool(enabled)

    @property
    def start_tls_required(self) -> bool:
        return self._start_tls_required

    @start_tls_required.setter
    def start_tls_required(self, required: bool) -> None:
        self._check_session_not_initialized()
        self._start_tls_required = bool(required)

    @property
    def socket_timeout(self) -> float:
        return self._socket_timeout

    @socket_timeout.setter
    def socket_timeout(self, seconds: float) -> None:
        self._check_session_not_initialized()
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)) or seconds <= 0:
            raise EmailValidationError(f"Socket timeout must be greater than zero ( {seconds} )")
        self._socket_timeout = seconds

    @property
    def bounce_address(self) -> str | None:
        return self._bounce_address

    @bounce_address.setter
    def bounce_address(self, address: str | None) -> None:
        self._check_session_not_initialized()
        self._bounce_address = MailAddress.parse(address).address if address else None

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @credentials.setter
    def credentials(self, credentials: Credentials | None) -> None:
        self._credentials = credentials

    def set_authentication(self, username: str | None, password: str | None) -> Self:
        self._credentials = Credentials(username=username, password=password)
        return self

    def set_pop_before_smtp(
        self,
        enabled: bool,
        host: str | None,
        username: str | None,
        password: str | None,
    ) -> Self:
        """Log into a POP3 mailbox before each SMTP delivery when ``enabled``."""
        if enabled and not host:
            raise EmailValidationError("A POP3 host is required for POP before SMTP.")
        self._pop_before_smtp = (
            PopBeforeSmtp(host=str(host), username=username, password=password)
            if enabled
            else None
        )
        return self

    @property
    def pop_before_smtp(self) -> bool:
        return self._pop_before_smtp is not None

    @property
    def pop_host(self) -> str | None:
        return self._pop_before_smtp.host if self._pop_before_smtp else None

    @property
    def pop_username(self) -> str | None:
        return self._pop_before_smtp.username if self._pop_before_smtp else None

    @property
    def pop_password(self) -> str | None:
        return self._pop_before_smtp.password if self._pop_before_smtp else None

    @property
    def mail_session(self) -> MailSession:
        """Session used for delivery, built from the server settings unless assigned."""
        if self._mail_session is not None:
            return self._mail_session
        if not self._host_name:
            raise EmailConfigurationError("Cannot find valid hostname for mail session")
        return MailSession(
            host=self._host_name,
            port=self._ssl_smtp_port if self._ssl_on_connect else self._smtp_port,
            protocol=SMTPS_PROTOCOL if self._ssl_on_connect else SMTP_PROTOCOL,
            debug=self._debug,
            use_starttls=self._start_tls_enabled or self._start_tls_required,
            starttls_required=self._start_tls_required,
            timeout_seconds=self._socket_timeout,
            credentials=self._credentials,
            bounce_address=self._bounce_address,
            pop_before_smtp=self._pop_before_smtp,
        )

    @mail_session.setter
    def mail_session(self, session: MailSession | None) -> None:
        self._mail_session = session

    # Message attributes

    @property
    def charset(self) -> str | None:
        return self._charset

    @charset.setter
    def charset(self, charset: str | None) -> None:
        self._charset = ensure_supported_charset(charset) if charset is not None else None

    @property
    def subject(self) -> str | None:
        return self._subject

    @subject.setter
    def subject(self, subject: str | None) -> None:
        self._subject = subject

    @property
    def sent_date(self) -> datetime:
        """Sent date of the message; the current time when none was set."""
        return self._sent_date if self._sent_date is not None else datetime.now(UTC)

    @sent_date.setter
    def sent_date(self, value: datetime | None) -> None:
        self._sent_date = value

    # Addresses

    @property
    def from_address(self) -> MailAddress | None:
        return self._from_address

    def set_from(self, address: str, name: str | None = None, charset: str | None = None) -> Self:
        self._from_address = MailAddress.create(address, name, charset)
        return self

    @property
    def to_addresses(self) -> list[MailAddress]:
        return list(self._to)

    def add_to(self, address: str, name: str | None = None, charset: str | None = None) -> Self:
        self._to.append(MailAddress.create(address, name, charset))
        return self

    def extend_to(self, addresses: Iterable[str]) -> Self:
        self._to.extend(_create_all(addresses))
        return self

    def set_to(self, addresses: Sequence[MailAddress | str] | None) -> Self:
        self._to = _require_address_list(addresses)
        return self

    @property
    def cc_addresses(self) -> list[MailAddress]:
        return list(self._cc)

    def add_cc(self, address: str, name: str | None = None, charset: str | None = None) -> Self:
        self._cc.append(MailAddress.create(address, name, charset))
        return self

    def extend_cc(self, addresses: Iterable[str]) -> Self:
        self._cc.extend(_create_all(addresses))
        return self

    def set_cc(self, addresses: Sequence[MailAddress | str] | None) -> Self:
        self._cc = _require_address_list(addresses)
        return self

    @property
    def bcc_addresses(self) -> list[MailAddress]:
        return list(self._bcc)

    def add_bcc(self, address: str, name: str | None = None, charset: str | None = None) -> Self:
        self._bcc.append(MailAddress.create(address, name, charset))
        return self

    def extend_bcc(self, addresses: Iterable[str]) -> Self:
        self._bcc.extend(_create_all(addresses))
        return self

    def set_bcc(self, addresses: Sequence[MailAddress | str] | None) -> Self:
        self._bcc = _require_address_list(addresses)
        return self

    @property
    def reply_to_addresses(self) -> list[MailAddress]:
        return list(self._reply_to)

    def add_reply_to(
        self, address: str, name: str | None = None, charset: str | None = None
    ) -> Self:
        self._reply_to.append(MailAddress.create(address, name, charset))
        return self

    def set_reply_to(self, addresses: Sequence[MailAddress | str] | None) -> Self:
        self._reply_to = _require_address_list(addresses)
        return self

    # Headers

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def add_header(self, name: str, value: str) -> Self:
        _validate_header(name, value)
        self._headers[name] = value
        return self

    def set_headers(self, headers: Mapping[str, str] | None) -> Self:
        """Replace all custom headers; nothing changes when one entry is invalid."""
        if headers is None:
            raise EmailValidationError("Headers must not be None.")
        for name, value in headers.items():
            _validate_header(name, value)
        self._headers = dict(headers)
        return self

    # Content

    @property
    def content(self) -> object | None:
        return self._content

    @property
    def content_type(self) -> str | None:
        return self._content_type

    @property
    def content_multipart(self) -> Message | None:
        return self._content_multipart

    def set_content(self, content: object | None, content_type: str | None = None) -> None:
        """Store the body and its Content-Type exactly as given.

        Default charset negotiation happens in :meth:`build_message`.
        """
        self._content = content
        self._content_type = content_type

    def set_content_multipart(self, multipart: Message | None) -> None:
        """Use a multipart message, e.g. ``MIMEMultipart``, as the body."""
        if multipart is not None and not multipart.is_multipart():
            raise EmailValidationError("Content must be a multipart message.")
        self._content_multipart = multipart

    # Build and send

    @property
    def message(self) -> Message | None:
        """The built message, or ``None`` before :meth:`build_message`."""
        return self._message

    def build_message(self) -> Message:
        """Validate the collected state and assemble the message to send.

        Raises:
          EmailConfigurationError: If the host, the sender or every recipient is
            missing, or the message was already built.
          EmailValidationError: If the content cannot be encoded.
        """
        if self._message is not None:
            raise EmailConfigurationError("The message is already built.")
        session = self.mail_session
        if self._from_address is None:
            raise EmailConfigurationError("From address required")
        if not (self._to or self._cc or self._bcc):
            raise EmailConfigurationError("At least one receiver address required")

        message = self._create_body()
        if self._subject:
            message["Subject"] = self._encode_text(self._subject)
        message["From"] = str(self._from_address)
        for header, addresses in (
            ("To", self._to),
            ("Cc", self._cc),
            ("Bcc", self._bcc),
            ("Reply-To", self._reply_to),
        ):
            if addresses:
                message[header] = ", ".join(str(address) for address in addresses)
        for name, value in self._headers.items():
            # A custom header replaces any same-named header set above.
            del message[name]
            message[name] = fold_header_value(name, value)
        if "Date" not in message:
            message["Date"] = format_datetime(_as_aware(self.sent_date))
        if "Message-ID" not in message:
            message["Message-ID"] = make_msgid(domain=self._from_address.address.partition("@")[2])

        logger.debug("Built message %s for %s", message["Message-ID"], session.address)
        self._message = message
        return message

    def send_message(self) -> str:
        """Hand the built message to the SMTP client and return its Message-ID.

        Raises:
          EmailTransportError: If the SMTP client fails, chained to the original error.
        """
        if self._message is None:
            raise EmailConfigurationError("The message has not been built yet.")
        session = self.mail_session
        try:
            self._smtp_client.send_message(session, self._message)
        except Exception as exc:
            logger.warning("Sending to %s failed: %s", session.address, exc)
            raise EmailTransportError(
                f"Sending the email to the following server failed : {session.address}"
            ) from exc
        return str(self._message["Message-ID"])

    def send(self) -> str:
        """Build the message and send it."""
        self.build_message()
        return self.send_message()

    def _create_body(self) -> Message:
        if self._content is None and self._content_multipart is not None:
            body = copy.deepcopy(self._content_multipart)
            if "MIME-Version" not in body:
                body["MIME-Version"] = "1.0"
            return body

        message = Message()
        message["MIME-Version"] = "1.0"
        content = self._content if self._content is not None else ""
        if self._content_type is not None:
            declared_type = self._content_type
        elif isinstance(content, str):
            declared_type = TEXT_PLAIN
        else:
            declared_type = APPLICATION_OCTET_STREAM
        try:
            content_type = resolve_content_type(declared_type, self._charset)
        except ValueError as exc:
            raise EmailValidationError(f"Invalid content type: {declared_type!r}") from exc
        message["Content-Type"] = content_type
        _set_payload(message, content, parse_content_type(content_type).charset)
        return message

    def _encode_text(self, text: str) -> str:
        if text.isascii():
            return text
        try:
            return Header(text, self._charset or UTF_8).encode()
        except UnicodeError as exc:
            raise EmailValidationError(
                f"Text cannot be encoded with charset {self._charset}"
            ) from exc

    def _check_session_not_initialized(self) -> None:
        if self._mail_session is not None:
            raise EmailConfigurationError("The mail session is already initialized")


def _set_payload(message: Message, content: object, charset: str | None) -> None:
    if isinstance(content, Path):
        try:
            content = content.read_bytes()
        except OSError as exc:
            raise EmailValidationError(f"Cannot read content file: {exc}") from exc
    if isinstance(content, (bytes, bytearray)):
        message.set_payload(bytes(content))
        encoders.encode_base64(message)
        return
    text = content if isinstance(content, str) else str(content)
    if text.isascii():
        message.set_payload(text)
        message["Content-Transfer-Encoding"] = "7bit"
        return
    try:
        encoded = text.encode(charset or UTF_8)
    except (LookupError, UnicodeError) as exc:
        raise EmailValidationError(f"Content cannot be encoded with charset {charset}") from exc
    message.set_payload(encoded)
    encoders.encode_base64(message)


def _require_port(port: int) -> int:
    if isinstance(port, bool) or not isinstance(port, int) or port < 1:
        raise EmailValidationError(
            f"Cannot connect to a port number that is less than 1 ( {port} )"
        )
    return port


def _require_address_list(addresses: Sequence[MailAddress | str] | None) -> list[MailAddress]:
    if not addresses:
        raise EmailValidationError("Address List provided was invalid")
    return [
        address if isinstance(address, MailAddress) else MailAddress.parse(address)
        for address in addresses
    ]


def _create_all(addresses: Iterable[str]) -> list[MailAddress]:
    created = [MailAddress.create(address) for address in addresses or ()]
    if not created:
        raise EmailValidationError("Address List provided was invalid")
    return created


def _validate_header(name: object, value: object) -> None:
    if not isinstance(name, str) or not name:
        raise EmailValidationError("name can not be null or empty")
    if not isinstance(value, str) or not value:
        raise EmailValidationError("value can not be null or empty")
    if ":" in name or any(character.isspace() for character in name):
        raise EmailValidationError(f"Invalid header name: {name!r}")
    if "\r" in value or "\n" in value:
        raise EmailValidationError(f"Header {name} must not contain line breaks")


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.astimezone()
