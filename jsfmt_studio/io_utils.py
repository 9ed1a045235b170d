from __future__ import annotations

import os
import tempfile
from typing import Optional, Tuple

from .dialects import EXTENSION_DIALECTS, Dialect, download_extension
from .errors import (
    ClipboardError,
    ClipboardUnavailableError,
    FileTooLargeError,
    InputTooLargeError,
    NoOutputError,
    UnsupportedFileTypeError,
)
from .session import is_placeholder

DEFAULT_MAX_FILE_BYTES = 1024 * 1024
DEFAULT_MAX_INPUT_CHARS = 500_000

# Sent by the browser when navigator.clipboard.readText() rejects.
CLIPBOARD_READ_FAILED = "\x00clipboard-read-failed"


def _file_name(file_obj) -> str:
    if isinstance(file_obj, (str, os.PathLike)):
        return os.fspath(file_obj)
    return getattr(file_obj, 'orig_name', None) or getattr(file_obj, 'name', '') or ''


def dialect_for_filename(name: str) -> Dialect:
    """Map a file name to its dialect, rejecting anything unsupported."""
    ext = os.path.splitext(name or '')[1].lower().lstrip('.')
    dialect = EXTENSION_DIALECTS.get(ext)
    if dialect is None:
        supported = ", ".join(f".{e}" for e in EXTENSION_DIALECTS)
        shown = f".{ext}" if ext else "(none)"
        raise UnsupportedFileTypeError(f"Unsupported file type {shown}. Use one of: {supported}.")
    return dialect


def read_source_file(file_obj, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> Tuple[str, Dialect]:
    """Read an uploaded source file (upload object, file-like or path).

    Validation happens before anything is returned, so a rejected file
    never reaches the session.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")

    dialect = dialect_for_filename(_file_name(file_obj))

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read(max_bytes + 1)
        if isinstance(content, str):
            content = content.encode('utf-8')
    else:
        path = _file_name(file_obj)
        if os.path.getsize(path) > max_bytes:
            raise FileTooLargeError(f"File is larger than {max_bytes // 1024} KiB.")
        with open(path, 'rb') as f:
            content = f.read(max_bytes + 1)

    if len(content) > max_bytes:
        raise FileTooLargeError(f"File is larger than {max_bytes // 1024} KiB.")

    try:
        text = content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise UnsupportedFileTypeError("File is not valid UTF-8 text.") from None
    return text, dialect


def check_paste(text: Optional[str], max_chars: int = DEFAULT_MAX_INPUT_CHARS) -> str:
    if text is None:
        raise ClipboardUnavailableError("Clipboard is not available in this browser.")
    if text == CLIPBOARD_READ_FAILED:
        raise ClipboardError("Could not read from the clipboard.")
    if len(text) > max_chars:
        raise InputTooLargeError(
            f"Pasted text is too large ({len(text):,} characters; the limit is {max_chars:,})."
        )
    return text


def ensure_actionable_output(text: Optional[str]) -> str:
    if not text or not text.strip():
        raise NoOutputError("Nothing to copy or download yet.")
    if is_placeholder(text):
        raise NoOutputError("The output is an error message; fix the input first.")
    return text


def write_download(text: str, dialect: Dialect, directory: Optional[str] = None) -> str:
    """Write `formatted.<ext>` and return its path."""
    text = ensure_actionable_output(text)
    target_dir = directory or tempfile.mkdtemp(prefix='jsfmt-')
    path = os.path.join(target_dir, f"formatted.{download_extension(dialect)}")
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(text)
    return path
