from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List

TAB_WIDTHS = (2, 4, 8)
TRAILING_COMMAS = ("none", "es5", "all")
PRINT_WIDTH_MIN = 20
PRINT_WIDTH_MAX = 200


@dataclass(frozen=True)
class FormatOptions:
    """Options for a single format invocation.

    Instances are immutable; changing any field means building a new
    instance, which the scheduler treats as a new format request.
    """

    tab_width: int = 2
    print_width: int = 80
    trailing_comma: str = "all"
    semicolons: bool = True
    single_quote: bool = False

    def __post_init__(self):
        if isinstance(self.tab_width, bool) or self.tab_width not in TAB_WIDTHS:
            raise ValueError(f"tab_width must be one of {TAB_WIDTHS}, got {self.tab_width!r}.")
        if isinstance(self.print_width, bool) or not isinstance(self.print_width, int):
            raise ValueError(f"print_width must be an int, got {self.print_width!r}.")
        if not PRINT_WIDTH_MIN <= self.print_width <= PRINT_WIDTH_MAX:
            raise ValueError(
                f"print_width must be between {PRINT_WIDTH_MIN} and {PRINT_WIDTH_MAX}, "
                f"got {self.print_width!r}."
            )
        if self.trailing_comma not in TRAILING_COMMAS:
            raise ValueError(
                f"trailing_comma must be one of {TRAILING_COMMAS}, got {self.trailing_comma!r}."
            )

    def with_changes(self, **changes: Any) -> "FormatOptions":
        return replace(self, **changes)

    def to_cli_args(self) -> List[str]:
        """Render as Prettier command-line flags."""
        args = [
            "--tab-width",
            str(self.tab_width),
            "--print-width",
            str(self.print_width),
            "--trailing-comma",
            self.trailing_comma,
        ]
        if not self.semicolons:
            args.append("--no-semi")
        if self.single_quote:
            args.append("--single-quote")
        return args


def options_from_ui(tab_width, print_width, trailing_comma, semicolons, single_quote) -> FormatOptions:
    """Build options from raw component values (radio values arrive as strings)."""
    return FormatOptions(
        tab_width=int(tab_width),
        print_width=int(print_width),
        trailing_comma=str(trailing_comma).lower(),
        semicolons=bool(semicolons),
        single_quote=bool(single_quote),
    )
