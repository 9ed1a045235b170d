from __future__ import annotations

import pytest

from jsfmt_studio.options import FormatOptions, options_from_ui


def test_defaults_render_cli_flags() -> None:
    assert FormatOptions().to_cli_args() == [
        "--tab-width", "2",
        "--print-width", "80",
        "--trailing-comma", "all",
    ]


def test_disabled_semicolons_and_single_quotes() -> None:
    args = FormatOptions(semicolons=False, single_quote=True).to_cli_args()
    assert "--no-semi" in args
    assert "--single-quote" in args


@pytest.mark.parametrize(
    "changes",
    [
        {"tab_width": 3},
        {"tab_width": True},
        {"print_width": 5},
        {"print_width": "80"},
        {"trailing_comma": "some"},
    ],
)
def test_invalid_values_are_rejected(changes) -> None:
    with pytest.raises(ValueError):
        FormatOptions(**changes)


def test_options_are_immutable_and_compare_by_value() -> None:
    options = FormatOptions()
    changed = options.with_changes(tab_width=4)
    assert options.tab_width == 2
    assert changed == FormatOptions(tab_width=4)
    with pytest.raises(AttributeError):
        options.tab_width = 8


def test_options_from_ui_coerces_component_values() -> None:
    options = options_from_ui("4", 100.0, "ES5", 1, 0)
    assert options == FormatOptions(
        tab_width=4, print_width=100, trailing_comma="es5", semicolons=True, single_quote=False
    )
