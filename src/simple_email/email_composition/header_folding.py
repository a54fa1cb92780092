"""Header value folding applied when a message is built."""

from __future__ import annotations

import re

from .constants import HEADER_FOLD_LINE_LENGTH

_WHITESPACE_RUN = re.compile(r"[ \t]+")


def fold_header_value(
    name: str, value: str, *, line_length: int = HEADER_FOLD_LINE_LENGTH
) -> str:
    """Fold ``value`` so every ``name: value`` line fits in ``line_length`` characters.

    Lines are broken with CRLF in front of a whitespace run, which stays at the
    start of the continuation line. A word longer than the limit is left whole.
    """
    remaining = value.rstrip(" \t\r\n")
    used = len(name) + 2
    lines: list[str] = []
    while used + len(remaining) > line_length:
        break_at = _break_position(remaining, line_length - used)
        if break_at is None:
            break
        lines.append(remaining[:break_at])
        remaining = remaining[break_at:]
        used = 0
    lines.append(remaining)
    return "\r\n".join(lines)


def _break_position(text: str, budget: int) -> int | None:
    positions = [match.start() for match in _WHITESPACE_RUN.finditer(text) if match.start() > 0]
    if not positions:
        return None
    fitting = [position for position in positions if position <= budget]
    return fitting[-1] if fitting else positions[0]
