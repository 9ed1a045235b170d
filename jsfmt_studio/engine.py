"""Bridge to the external formatting engine (Prettier, run as a subprocess)."""
from __future__ import annotations

import asyncio
from typing import Protocol, Sequence

import structlog

from .errors import FormatterError
from .options import FormatOptions

logger = structlog.get_logger(__name__)

# Prettier prefixes every stderr line with this when printing diagnostics.
_STDERR_PREFIX = "[error] "


class FormatEngine(Protocol):
    async def format(self, source: str, parser: str, options: FormatOptions) -> str:
        ...


def clean_stderr(stderr: str) -> str:
    """Drop Prettier's `[error] ` and `stdin: ` decorations from each line."""
    lines = []
    for line in stderr.splitlines():
        if line.startswith(_STDERR_PREFIX):
            line = line[len(_STDERR_PREFIX):]
        if line.startswith("stdin: "):
            line = line[len("stdin: "):]
        lines.append(line)
    return "\n".join(lines).strip()


class PrettierEngine:
    """Formats source by piping it through the Prettier CLI."""

    def __init__(self, command: Sequence[str] = ("prettier",), timeout_seconds: float = 20.0):
        if not command:
            raise ValueError("Prettier command must not be empty.")
        self.command = tuple(command)
        self.timeout_seconds = timeout_seconds

    def build_args(self, parser: str, options: FormatOptions) -> list:
        return [*self.command, "--parser", parser, "--no-color", *options.to_cli_args()]

    async def format(self, source: str, parser: str, options: FormatOptions) -> str:
        args = self.build_args(parser, options)
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise FormatterError(
                f"Formatter '{self.command[0]}' not found. Install Prettier to use formatting."
            ) from None
        except OSError as error:
            raise FormatterError(
                f"Could not start formatter '{self.command[0]}': {error.strerror or error}"
            ) from error

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(source.encode("utf-8")), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.warning("prettier_timeout", parser=parser, timeout=self.timeout_seconds)
            raise FormatterError(
                f"Formatter timed out after {self.timeout_seconds:g} seconds."
            ) from None

        if proc.returncode != 0:
            message = clean_stderr(stderr.decode("utf-8", errors="replace"))
            logger.debug("prettier_failed", parser=parser, returncode=proc.returncode)
            raise FormatterError(message or f"Formatter exited with status {proc.returncode}.")

        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError:
            raise FormatterError("Formatter produced output that is not valid UTF-8.") from None
