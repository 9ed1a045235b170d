from __future__ import annotations

import pytest

from jsfmt_studio.diffing import (
    DiffLineRecord,
    LineChange,
    build_diff,
    diff_stats,
    reconstruct_formatted,
    split_lines,
)


def test_split_lines_drops_single_trailing_empty_segment() -> None:
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("") == []


def test_identical_texts_are_unchanged_and_numbered_without_gaps() -> None:
    text = "const a = 1;\nconst b = 2;\n\nexport { a, b };"
    records = build_diff(text, text)

    assert all(r.classification is LineChange.UNCHANGED for r in records)
    assert [r.line_number for r in records] == [1, 2, 3, 4]


def test_changed_line_is_removed_then_added() -> None:
    records = build_diff("const x=1", "const x = 1;")

    assert records == [
        DiffLineRecord(LineChange.REMOVED, "const x=1", None),
        DiffLineRecord(LineChange.ADDED, "const x = 1;", 1),
    ]


def test_removed_lines_carry_no_number() -> None:
    original = "a\nb\nc\nd"
    formatted = "a\nc\nd\ne"
    records = build_diff(original, formatted)

    removed = [r for r in records if r.classification is LineChange.REMOVED]
    assert [r.display_text for r in removed] == ["b"]
    assert removed[0].line_number is None
    numbered = [r.line_number for r in records if r.line_number is not None]
    assert numbered == [1, 2, 3, 4]


def test_final_newline_does_not_create_spurious_line() -> None:
    records = build_diff("a\nb\n", "a\nb")
    assert [r.classification for r in records] == [LineChange.UNCHANGED, LineChange.UNCHANGED]


def test_empty_original_is_all_added() -> None:
    records = build_diff("", "a\nb")
    assert [(r.classification, r.line_number) for r in records] == [
        (LineChange.ADDED, 1),
        (LineChange.ADDED, 2),
    ]


@pytest.mark.parametrize(
    "original, formatted",
    [
        ("const x=1", "const x = 1;"),
        ("function f(){return 1}\nf()", "function f() {\n  return 1;\n}\nf();"),
        ("a\nb\nc", "c\nb\na"),
        ("", "only"),
        ("x\n\n\ny", "x\n\ny"),
    ],
)
def test_added_and_unchanged_rows_rebuild_formatted_text(original, formatted) -> None:
    assert reconstruct_formatted(build_diff(original, formatted)) == formatted


def test_diff_stats_counts_added_and_removed() -> None:
    records = build_diff("a\nb", "a\nc\nd")
    assert diff_stats(records) == (2, 1)


def test_final_newline_is_restored_on_request() -> None:
    formatted = "function f() {\n  return 1;\n}\n"
    records = build_diff("function f(){return 1}", formatted)

    assert reconstruct_formatted(records) == formatted.rstrip("\n")
    assert reconstruct_formatted(records, final_newline=True) == formatted
