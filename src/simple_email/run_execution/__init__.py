"""Send execution exports."""

from .run_contracts import SendOutcome, SendRequest
from .send_use_case import RunExecutionError, compose_configured_email, execute_send

__all__ = [
    "SendRequest",
    "SendOutcome",
    "RunExecutionError",
    "compose_configured_email",
    "execute_send",
]
