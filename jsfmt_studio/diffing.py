"""Line diff between the original input and the formatted output.

The records are laid out for a single-column view: each record is one
displayed row, and only rows that exist in the formatted output carry a
line number.
"""
from __future__ import annotations

import difflib
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class LineChange(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffLineRecord:
    classification: LineChange
    display_text: str
    line_number: Optional[int] = None


def split_lines(text: str) -> List[str]:
    """Split on newlines, dropping the empty segment left by a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def build_diff(original: str, formatted: str) -> List[DiffLineRecord]:
    before = split_lines(original or "")
    after = split_lines(formatted or "")
    matcher = difflib.SequenceMatcher(None, before, after, autojunk=False)

    records: List[DiffLineRecord] = []
    next_number = 1

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            for line in after[j1:j2]:
                records.append(DiffLineRecord(LineChange.UNCHANGED, line, next_number))
                next_number += 1
            continue

        # "replace" is a removed run followed by an added run.
        if tag in ("delete", "replace"):
            for line in before[i1:i2]:
                records.append(DiffLineRecord(LineChange.REMOVED, line, None))
        if tag in ("insert", "replace"):
            for line in after[j1:j2]:
                records.append(DiffLineRecord(LineChange.ADDED, line, next_number))
                next_number += 1

    return records


def reconstruct_formatted(records: Iterable[DiffLineRecord], final_newline: bool = False) -> str:
    """Rebuild the formatted text from its added and unchanged rows.

    `build_diff` drops a single trailing newline, so pass `final_newline=True`
    when the formatted text ended with one.
    """
    text = "\n".join(
        r.display_text for r in records if r.classification is not LineChange.REMOVED
    )
    return text + "\n" if final_newline else text


def diff_stats(records: Iterable[DiffLineRecord]) -> Tuple[int, int]:
    """Return (lines added, lines removed)."""
    added = removed = 0
    for record in records:
        if record.classification is LineChange.ADDED:
            added += 1
        elif record.classification is LineChange.REMOVED:
            removed += 1
    return added, removed
