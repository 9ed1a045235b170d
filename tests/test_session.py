from __future__ import annotations

from jsfmt_studio.diffing import LineChange
from jsfmt_studio.session import (
    PLACEHOLDER_PREFIX,
    Session,
    Status,
    ViewMode,
    is_placeholder,
    make_placeholder,
)


def test_placeholder_is_two_flagged_lines() -> None:
    text = make_placeholder("Unexpected token (1:5)")
    assert text.startswith(PLACEHOLDER_PREFIX)
    assert text.splitlines()[1] == "// Unexpected token (1:5)"
    assert len(text.splitlines()) == 2
    assert is_placeholder(text)


def test_formatted_code_is_not_a_placeholder() -> None:
    assert not is_placeholder("const a = 1;")
    assert not is_placeholder("")
    assert not is_placeholder(None)


def test_diff_only_exists_in_diff_mode() -> None:
    session = Session(input_text="a=1", last_formatted="a = 1;", last_formatted_source="a=1")
    session.set_view_mode(ViewMode.DIFF)
    assert [r.classification for r in session.diff] == [LineChange.REMOVED, LineChange.ADDED]

    session.set_view_mode("plain")
    assert session.diff is None


def test_diff_mode_without_snapshot_has_no_records() -> None:
    session = Session(input_text="a=1")
    session.set_view_mode(ViewMode.DIFF)
    assert session.diff is None


def test_clear_resets_document_state() -> None:
    session = Session(
        input_text="x",
        output_text="y",
        status=Status.ERROR,
        error_message="bad",
        error_line=3,
        last_formatted="y",
        last_formatted_source="x",
        notice="n",
    )
    session.clear()
    assert session.input_text == ""
    assert session.output_text == ""
    assert session.status is Status.READY
    assert session.error_line is None
    assert session.last_formatted is None
    assert session.last_formatted_source is None
    assert not session.has_actionable_output


def test_diff_uses_formatted_source_not_current_input() -> None:
    session = Session(input_text="b=2", last_formatted="a = 1;", last_formatted_source="a=1")
    session.set_view_mode(ViewMode.DIFF)
    assert [r.display_text for r in session.diff] == ["a=1", "a = 1;"]
