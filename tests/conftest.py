"""
Pytest configuration and shared fixtures for JS Format Studio tests.
"""

from __future__ import annotations

import asyncio
import re

import pytest

from jsfmt_studio.config import StudioSettings
from jsfmt_studio.errors import FormatterError
from jsfmt_studio.options import FormatOptions
from jsfmt_studio.scheduler import FormatScheduler
from jsfmt_studio.session import Session


def fake_prettier(source: str, options: FormatOptions) -> str:
    """Tiny stand-in for Prettier: spaces around `=` and statement semicolons."""
    out = []
    for line in source.strip().splitlines():
        line = re.sub(r"\s*=\s*", " = ", line.strip())
        line = line.rstrip(";")
        if options.semicolons and not line.endswith(("{", "}")):
            line += ";"
        out.append(line)
    return "\n".join(out) + "\n"


class FakeEngine:
    """Records calls; per-source delays, failures and crashes are configurable."""

    def __init__(self):
        self.calls = []
        self.delays = {}
        self.failures = {}
        self.crashes = {}

    async def format(self, source, parser, options):
        self.calls.append((source, parser, options))
        await asyncio.sleep(self.delays.get(source, 0))
        if source in self.failures:
            raise FormatterError(self.failures[source])
        if source in self.crashes:
            raise self.crashes[source]
        return fake_prettier(source, options)


@pytest.fixture
def fast_settings():
    return StudioSettings(debounce_ms=20, formatted_status_ms=60, error_status_ms=90)


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def scheduler(session, engine, fast_settings):
    sched = FormatScheduler(session, engine, fast_settings)
    yield sched
    sched.close()
