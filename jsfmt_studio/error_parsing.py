from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

UNKNOWN_ERROR = "Unknown error"

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

# Tried in order; the first that matches supplies the line number.
_LINE_PATTERNS = (
    re.compile(r"\((\d+):\d+\)"),
    re.compile(r"\bline\s+(\d+)", re.IGNORECASE),
    re.compile(r"^\s*>\s*(\d+)\s*\|", re.MULTILINE),
)


@dataclass(frozen=True)
class InterpretedError:
    short_message: str
    line: Optional[int] = None


def interpret(raw: Any) -> InterpretedError:
    """Reduce raw formatter error text to a one-line message and a source line."""
    if not isinstance(raw, str):
        raw = "" if raw is None else str(raw)
    text = _ANSI_ESCAPE.sub("", raw)

    short_message = UNKNOWN_ERROR
    for candidate in text.splitlines():
        candidate = candidate.strip()
        if candidate:
            short_message = candidate
            break

    line: Optional[int] = None
    for pattern in _LINE_PATTERNS:
        match = pattern.search(text)
        if match:
            line = int(match.group(1))
            break

    return InterpretedError(short_message=short_message, line=line)
