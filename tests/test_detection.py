from __future__ import annotations

import pytest

from jsfmt_studio.detection import detect, has_jsx_signal, has_typescript_signal, resolve
from jsfmt_studio.dialects import Dialect


@pytest.mark.parametrize(
    "source",
    [
        "let count: number = 0;",
        "interface User { id: number }",
        "type Id = string | number;",
        "const items = new Map<string, User>();",
        "const list: Item[] = [];",
        "const mode = 'dark' as const;",
        "function f(x) { return x as string; }",
    ],
)
def test_typescript_signals(source) -> None:
    assert has_typescript_signal(source)
    assert detect(source) is Dialect.TYPESCRIPT


@pytest.mark.parametrize(
    "source",
    [
        "const el = <Button label='ok' />;",
        "return <div>\n  hello\n</div>;",
        "const el = (\n  <span className=\"x\">hi</span>\n);",
        "const f = (\n  <>\n    <a />\n  </>\n);",
        "class App extends React.Component {}",
        "const [open, setOpen] = useState(false);",
    ],
)
def test_jsx_signals(source) -> None:
    assert has_jsx_signal(source)
    assert detect(source) is Dialect.JSX


def test_type_annotation_and_jsx_tag_is_tsx() -> None:
    source = "const Title = ({ text }: { text: string }) => <h1 className=\"t\">{text}</h1>;"
    assert detect(source) is Dialect.TSX


def test_plain_javascript_defaults() -> None:
    source = "function add(a, b) {\n  return a + b;\n}\nconsole.log(add(1, 2));"
    assert detect(source) is Dialect.JAVASCRIPT


def test_comparison_operators_are_not_jsx() -> None:
    assert detect("if (a < b && c > d) { run(); }") is Dialect.JAVASCRIPT


def test_generic_type_is_not_mistaken_for_jsx() -> None:
    assert detect("let names: Array<Name> = [];") is Dialect.TYPESCRIPT


@pytest.mark.parametrize("source", ["", "   \n", None, 42, "<<<::>>>", "\x00\xff"])
def test_malformed_input_never_raises(source) -> None:
    assert detect(source) in (Dialect.JAVASCRIPT, Dialect.JSX, Dialect.TYPESCRIPT, Dialect.TSX)


def test_detect_never_returns_auto() -> None:
    assert detect("") is not Dialect.AUTO


def test_resolve_only_detects_for_auto() -> None:
    source = "let n: number = 1;"
    assert resolve(Dialect.AUTO, source) is Dialect.TYPESCRIPT
    assert resolve("auto", source) is Dialect.TYPESCRIPT
    assert resolve(Dialect.JSX, source) is Dialect.JSX
