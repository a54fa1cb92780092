"""Content-Type parsing and default charset negotiation."""

from __future__ import annotations

from dataclasses import dataclass
from email.headerregistry import HeaderRegistry

_HEADER_REGISTRY = HeaderRegistry()


@dataclass(frozen=True)
class ContentType:
    """Parsed Content-Type header value."""

    main_type: str
    sub_type: str
    parameters: tuple[tuple[str, str], ...]

    @property
    def charset(self) -> str | None:
        for key, value in self.parameters:
            if key == "charset":
                return value or None
        return None

    @property
    def is_text(self) -> bool:
        return self.main_type == "text"


def parse_content_type(value: str) -> ContentType:
    """Parse a Content-Type value with the RFC 2045 grammar of the email package.

    Raises:
      ValueError: If the media type or one of the parameters is malformed.
    """
    header = _HEADER_REGISTRY("content-type", value)
    if header.defects:
        details = "; ".join(str(defect) for defect in header.defects)
        raise ValueError(f"Malformed content type {value!r}: {details}")
    return ContentType(
        main_type=header.maintype,
        sub_type=header.subtype,
        parameters=tuple(header.params.items()),
    )


def resolve_content_type(content_type: str, default_charset: str | None = None) -> str:
    """Return the Content-Type to send, adding ``default_charset`` to text types.

    An explicit charset parameter always wins and non-text types are never
    touched.
    """
    parsed = parse_content_type(content_type)
    if not parsed.is_text or parsed.charset is not None or not default_charset:
        return content_type.strip()
    base = content_type.strip().rstrip(";").rstrip()
    return f"{base}; charset={default_charset}"
