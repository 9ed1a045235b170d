from __future__ import annotations

from enum import Enum
from typing import Dict


class Dialect(str, Enum):
    JAVASCRIPT = "javascript"
    JSX = "jsx"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    AUTO = "auto"


EFFECTIVE_DIALECTS = (Dialect.JAVASCRIPT, Dialect.JSX, Dialect.TYPESCRIPT, Dialect.TSX)

# Extension (without the dot) -> dialect used for an uploaded file.
EXTENSION_DIALECTS: Dict[str, Dialect] = {
    "js": Dialect.JAVASCRIPT,
    "mjs": Dialect.JAVASCRIPT,
    "cjs": Dialect.JAVASCRIPT,
    "jsx": Dialect.JSX,
    "ts": Dialect.TYPESCRIPT,
    "tsx": Dialect.TSX,
}

_DOWNLOAD_EXTENSIONS: Dict[Dialect, str] = {
    Dialect.JAVASCRIPT: "js",
    Dialect.JSX: "jsx",
    Dialect.TYPESCRIPT: "ts",
    Dialect.TSX: "tsx",
}

SAMPLES: Dict[Dialect, str] = {
    Dialect.JAVASCRIPT: (
        "const greet=(name)=>{return 'Hello, '+name}\n"
        "function sum(a,b){return a+b}\n"
        "console.log(greet(\"world\"),sum(1,2))\n"
    ),
    Dialect.JSX: (
        "function Counter(){const [count,setCount]=useState(0)\n"
        "return <button className=\"btn\" onClick={()=>setCount(count+1)}>{count}</button>}\n"
    ),
    Dialect.TYPESCRIPT: (
        "interface User{id:number;name:string}\n"
        "function label(user:User):string{return `${user.id}: ${user.name}`}\n"
    ),
    Dialect.TSX: (
        "type Props={title:string}\n"
        "export const Header=({title}:Props)=><h1 className=\"title\">{title}</h1>\n"
    ),
}


def coerce_dialect(value) -> Dialect:
    """Accept a Dialect or its string value (as sent by a dropdown)."""
    if isinstance(value, Dialect):
        return value
    try:
        return Dialect(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown language: {value!r}") from None


def parser_for(dialect: Dialect) -> str:
    """Formatter parser family for an effective dialect."""
    dialect = coerce_dialect(dialect)
    if dialect is Dialect.AUTO:
        raise ValueError("'auto' must be resolved to a concrete dialect first.")
    if dialect in (Dialect.TYPESCRIPT, Dialect.TSX):
        return "typescript"
    return "babel"


def highlight_language(dialect: Dialect) -> str:
    """Language name understood by the code viewer."""
    if coerce_dialect(dialect) in (Dialect.TYPESCRIPT, Dialect.TSX):
        return "typescript"
    return "javascript"


def download_extension(dialect: Dialect) -> str:
    return _DOWNLOAD_EXTENSIONS.get(coerce_dialect(dialect), "js")
