"""Guess the dialect of a pasted snippet.

This is a pattern heuristic, not a parser. A wrong guess only means a
different parser family is handed to the formatter, so false positives are
tolerated everywhere downstream.
"""
from __future__ import annotations

import re
from typing import Any

from .dialects import Dialect, coerce_dialect

_PRIMITIVES = r"(?:string|number|boolean|any|void|unknown|never|object|bigint|symbol)"

_TS_PATTERNS = (
    # let x: string / (a: number) => / ): void
    re.compile(r":\s*" + _PRIMITIVES + r"\b"),
    re.compile(r"\binterface\s+[A-Za-z_$][\w$]*"),
    re.compile(r"\btype\s+[A-Za-z_$][\w$]*\s*(?:<[^=;]*>)?\s*="),
    # Array<string>, Promise<Result>
    re.compile(r"\b[A-Z][\w$]*<[\w$][\w$\s,.\[\]|]*>"),
    # useState<User>(...)
    re.compile(r"[\w$]<[A-Z][\w$]*(?:\[\])?(?:\s*,\s*[\w$.\[\]]+)*>"),
    # : string[] / : Item[]
    re.compile(r":\s*[A-Za-z_$][\w$]*\[\]"),
    re.compile(r"\bas\s+(?:" + _PRIMITIVES + r"|const)\b"),
)

_JSX_PATTERNS = (
    # <Component ...> not glued to an identifier, so Array<Foo> does not count
    re.compile(r"(?<![\w$.])<[A-Z][\w$.]*(?=[\s/>])"),
    re.compile(r"</[A-Za-z][\w$.-]*\s*>"),
    re.compile(r"\b(?:className|onClick|on[A-Z]\w*)\s*=\s*[{\"']"),
    re.compile(r"<>[\s\S]*?</>"),
    re.compile(r"\bReact\."),
    re.compile(
        r"\buse(?:State|Effect|Ref|Memo|Callback|Context|Reducer|LayoutEffect)\s*[<(]"
    ),
)


def has_typescript_signal(source: str) -> bool:
    return any(pattern.search(source) for pattern in _TS_PATTERNS)


def has_jsx_signal(source: str) -> bool:
    return any(pattern.search(source) for pattern in _JSX_PATTERNS)


def detect(source: Any) -> Dialect:
    """Return the best-guess effective dialect; never `Dialect.AUTO`."""
    if not isinstance(source, str) or not source.strip():
        return Dialect.JAVASCRIPT

    is_ts = has_typescript_signal(source)
    is_jsx = has_jsx_signal(source)
    if is_ts and is_jsx:
        return Dialect.TSX
    if is_ts:
        return Dialect.TYPESCRIPT
    if is_jsx:
        return Dialect.JSX
    return Dialect.JAVASCRIPT


def resolve(selection, source: str) -> Dialect:
    """Turn a selector value into the dialect actually used for formatting."""
    selection = coerce_dialect(selection)
    if selection is Dialect.AUTO:
        return detect(source)
    return selection
