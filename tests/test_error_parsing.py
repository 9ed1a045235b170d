from __future__ import annotations

import pytest

from jsfmt_studio.error_parsing import UNKNOWN_ERROR, InterpretedError, interpret


def test_row_col_in_parentheses() -> None:
    assert interpret("Unexpected token (3:10)") == InterpretedError("Unexpected token (3:10)", 3)


def test_textual_line_pattern() -> None:
    result = interpret("Parse failure on line 12, column 4")
    assert result.line == 12


def test_gutter_pattern() -> None:
    raw = "SyntaxError: Missing semicolon.\n  1 | let a = 1\n> 2 | let b = 2 let c\n    |           ^"
    result = interpret(raw)
    assert result.short_message == "SyntaxError: Missing semicolon."
    assert result.line == 2


def test_parenthesized_pattern_wins_over_later_ones() -> None:
    raw = "Unexpected token (7:1)\n> 3 | foo"
    assert interpret(raw).line == 7


def test_no_line_information() -> None:
    assert interpret("Something broke") == InterpretedError("Something broke", None)


def test_short_message_is_first_non_empty_line() -> None:
    assert interpret("\n\n  Unterminated string  \nmore").short_message == "Unterminated string"


def test_ansi_colour_codes_are_ignored() -> None:
    raw = "\x1b[31mSyntaxError\x1b[39m: Unexpected token (4:2)"
    assert interpret(raw) == InterpretedError("SyntaxError: Unexpected token (4:2)", 4)


@pytest.mark.parametrize("raw", ["", "   \n", None, 17, object()])
def test_malformed_input_falls_back(raw) -> None:
    result = interpret(raw)
    assert isinstance(result.short_message, str)
    if raw in ("", "   \n", None):
        assert result.short_message == UNKNOWN_ERROR
        assert result.line is None
