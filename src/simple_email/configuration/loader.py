"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from simple_email.email_composition.constants import DEFAULT_SMTP_PORT, DEFAULT_SSL_SMTP_PORT

from .runtime_settings import (
    Configuration,
    MailSettings,
    PopBeforeSmtpSettings,
    SMTPSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    smtp = _parse_smtp_section(parsed.get("smtp"))
    mail = _parse_mail_section(parsed.get("mail"))
    pop_before_smtp = _parse_pop_before_smtp_section(parsed.get("pop_before_smtp"))

    return Configuration(path=path, smtp=smtp, mail=mail, pop_before_smtp=pop_before_smtp)


def _parse_smtp_section(value: Any) -> SMTPSettings:
    section = _require_mapping(value, "smtp")
    host = _require_non_empty_string(section.get("host"), "smtp.host")
    use_ssl = bool(section.get("use_ssl", False))
    default_port = DEFAULT_SSL_SMTP_PORT if use_ssl else DEFAULT_SMTP_PORT
    port = _require_positive_int(section.get("port", default_port), "smtp.port")
    username = _optional_string(section.get("username"), "smtp.username")
    password = _optional_string(section.get("password"), "smtp.password")
    use_starttls = section.get("use_starttls")
    use_starttls_bool = not use_ssl if use_starttls is None else bool(use_starttls)
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 60), "smtp.timeout_seconds"
    )
    return SMTPSettings(
        host=host,
        port=port,
        username=username,
        password=password,
        use_starttls=use_starttls_bool,
        use_ssl=use_ssl,
        timeout_seconds=timeout_seconds,
        debug=bool(section.get("debug", False)),
    )


def _parse_mail_section(value: Any) -> MailSettings:
    section = _require_mapping(value, "mail")
    from_address = _require_non_empty_string(section.get("from_address"), "mail.from_address")
    from_name = _optional_string(section.get("from_name"), "mail.from_name")
    charset = _optional_string(section.get("charset"), "mail.charset")
    reply_to = _normalize_string_sequence(section.get("reply_to"), "mail.reply_to")
    cc = _normalize_string_sequence(section.get("cc"), "mail.cc")
    bcc = _normalize_string_sequence(section.get("bcc"), "mail.bcc")
    headers = _parse_headers(section.get("headers"))
    return MailSettings(
        from_address=from_address,
        from_name=from_name,
        charset=charset,
        reply_to=reply_to,
        cc=cc,
        bcc=bcc,
        headers=headers,
    )


def _parse_pop_before_smtp_section(value: Any) -> PopBeforeSmtpSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "pop_before_smtp")
    host = _require_non_empty_string(section.get("host"), "pop_before_smtp.host")
    username = _optional_string(section.get("username"), "pop_before_smtp.username")
    password = _optional_string(section.get("password"), "pop_before_smtp.password")
    return PopBeforeSmtpSettings(host=host, username=username, password=password)


def _parse_headers(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError("mail.headers must be a mapping.")
    headers: dict[str, str] = {}
    for name, header_value in value.items():
        header_name = _require_non_empty_string(name, "mail.headers name")
        headers[header_name] = _require_non_empty_string(
            str(header_value) if isinstance(header_value, int | float) else header_value,
            f"mail.headers.{header_name}",
        )
    return headers


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
