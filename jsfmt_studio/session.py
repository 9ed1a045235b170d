"""Per-document state shared by the scheduler and the UI handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .dialects import Dialect
from .diffing import DiffLineRecord, build_diff
from .options import FormatOptions

PLACEHOLDER_PREFIX = "// Format error"


class Status(str, Enum):
    READY = "ready"
    FORMATTING = "formatting"
    FORMATTED = "formatted"
    ERROR = "error"


class ViewMode(str, Enum):
    PLAIN = "plain"
    DIFF = "diff"


def make_placeholder(message: str) -> str:
    """Two-line comment shown in the output panel after a failed format."""
    first_line = (message or "").splitlines()[0] if message else ""
    return f"{PLACEHOLDER_PREFIX}: the source could not be formatted.\n// {first_line}"


def is_placeholder(text: Optional[str]) -> bool:
    return bool(text) and text.startswith(PLACEHOLDER_PREFIX)


@dataclass
class Session:
    input_text: str = ""
    output_text: str = ""
    selection: Dialect = Dialect.AUTO
    effective_dialect: Dialect = Dialect.JAVASCRIPT
    options: FormatOptions = field(default_factory=FormatOptions)
    view_mode: ViewMode = ViewMode.PLAIN
    status: Status = Status.READY
    error_message: str = ""
    error_line: Optional[int] = None
    # Kept apart from output_text so switching to the diff view never reformats.
    last_formatted: Optional[str] = None
    # Input that produced last_formatted; the diff compares these two.
    last_formatted_source: Optional[str] = None
    diff: Optional[List[DiffLineRecord]] = None
    notice: str = ""

    def refresh_diff(self) -> None:
        if self.view_mode is ViewMode.DIFF and self.last_formatted is not None:
            self.diff = build_diff(self.last_formatted_source or "", self.last_formatted)
        else:
            self.diff = None

    def set_view_mode(self, mode) -> None:
        self.view_mode = ViewMode(mode)
        self.refresh_diff()

    def clear(self) -> None:
        self.input_text = ""
        self.output_text = ""
        self.status = Status.READY
        self.error_message = ""
        self.error_line = None
        self.last_formatted = None
        self.last_formatted_source = None
        self.diff = None
        self.notice = ""

    @property
    def has_actionable_output(self) -> bool:
        return bool(self.output_text) and not is_placeholder(self.output_text)
