"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "simple-email.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Mail configuration template for simple-email.
# Replace every <REQUIRED> placeholder before running send.
# Replace <OPTIONAL> placeholders only when your setup needs them, delete them otherwise.

smtp:
  host: "<REQUIRED>"
  # Defaults to 25, or 465 when use_ssl is true.
  port: "<OPTIONAL>"
  username: "<OPTIONAL>"
  password: "<OPTIONAL>"
  # use_ssl connects with SMTPS; use_starttls upgrades a plain connection.
  use_ssl: "<OPTIONAL>"
  use_starttls: "<OPTIONAL>"
  timeout_seconds: "<OPTIONAL>"
  debug: "<OPTIONAL>"

mail:
  from_address: "<REQUIRED>"
  from_name: "<OPTIONAL>"
  # Default charset appended to text content types without one.
  charset: "<OPTIONAL>"
  reply_to:
    - "<OPTIONAL>"
  cc:
    - "<OPTIONAL>"
  bcc:
    - "<OPTIONAL>"
  headers:
    X-Mailer: "<OPTIONAL>"

# Uncomment when the SMTP server requires a POP3 login first.
# pop_before_smtp:
#   host: "<OPTIONAL>"
#   username: "<OPTIONAL>"
#   password: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML mail configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder mail configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Mail configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
