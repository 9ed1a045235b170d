from __future__ import annotations

import html
from typing import Iterable, Optional

from .diffing import DiffLineRecord, LineChange, diff_stats, split_lines
from .session import Session, Status

ERROR_MARKER = "▶"

_SIGNS = {
    LineChange.ADDED: "+",
    LineChange.REMOVED: "-",
    LineChange.UNCHANGED: " ",
}

DIFF_CSS = """
.jsfmt-diff { font-family: ui-monospace, monospace; font-size: 13px; border-collapse: collapse; width: 100%; }
.jsfmt-diff td { padding: 0 6px; white-space: pre; vertical-align: top; }
.jsfmt-diff td.num { color: #888; text-align: right; user-select: none; width: 1%; }
.jsfmt-diff td.sign { user-select: none; width: 1%; }
.jsfmt-diff tr.added { background: rgba(46, 160, 67, 0.18); }
.jsfmt-diff tr.removed { background: rgba(248, 81, 73, 0.18); }
"""


def gutter(line_count: int, error_line: Optional[int] = None) -> str:
    """Line-number gutter for the input panel, marking the error line."""
    width = len(str(max(line_count, 1)))
    rows = []
    for number in range(1, max(line_count, 1) + 1):
        marker = ERROR_MARKER if number == error_line else " "
        rows.append(f"{marker}{str(number).rjust(width)}")
    return "\n".join(rows)


def input_gutter(session: Session) -> str:
    count = len(split_lines(session.input_text))
    return gutter(count, session.error_line)


def plain_gutter(text: str) -> str:
    return gutter(len(split_lines(text)))


def diff_html(records: Optional[Iterable[DiffLineRecord]]) -> str:
    if records is None:
        return ""
    records = list(records)
    if not records:
        return '<p class="jsfmt-diff-empty">No differences to show.</p>'

    added, removed = diff_stats(records)
    rows = []
    for record in records:
        number = "" if record.line_number is None else str(record.line_number)
        rows.append(
            f'<tr class="{record.classification.value}">'
            f'<td class="num">{number}</td>'
            f'<td class="sign">{_SIGNS[record.classification]}</td>'
            f'<td class="code">{html.escape(record.display_text)}</td>'
            "</tr>"
        )
    summary = f'<p class="jsfmt-diff-summary">+{added} / -{removed} lines</p>'
    return f'{summary}<table class="jsfmt-diff">{"".join(rows)}</table>'


def status_text(session: Session) -> str:
    if session.notice:
        return session.notice
    if session.status is Status.FORMATTING:
        return "Formatting…"
    if session.status is Status.FORMATTED:
        return f"Formatted as {session.effective_dialect.value}."
    if session.status is Status.ERROR:
        if session.error_line is not None:
            return f"Error on line {session.error_line}: {session.error_message}"
        return f"Error: {session.error_message}"
    return "Ready"
