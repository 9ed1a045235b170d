"""Debounced format requests against a single session.

Every request takes the next value of a monotonic token counter. A
completion is applied to the session only when its token is still the most
recent one issued, so a slow engine call can never overwrite the result of
a request made after it.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional, Set

import structlog

from .config import StudioSettings
from .detection import resolve
from .dialects import coerce_dialect, parser_for
from .engine import FormatEngine
from .error_parsing import interpret
from .errors import FormatterError, InputTooLargeError
from .options import FormatOptions
from .session import Session, Status, make_placeholder
from .timers import Alarm

logger = structlog.get_logger(__name__)


class FormatScheduler:
    def __init__(self, session: Session, engine: FormatEngine, settings: Optional[StudioSettings] = None):
        self.session = session
        self.engine = engine
        self.settings = settings or StudioSettings()
        self._debounce = Alarm("debounce")
        self._status = Alarm("status")
        self._latest_token = 0
        self._burst_waiters: List[asyncio.Future] = []
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def latest_token(self) -> int:
        return self._latest_token

    @property
    def closed(self) -> bool:
        return self._closed

    # -- triggers -----------------------------------------------------------

    def on_edit(self, text: str) -> asyncio.Future:
        self.session.input_text = text or ""
        return self._schedule()

    def on_options_change(self, options: FormatOptions) -> asyncio.Future:
        self.session.options = options
        return self._schedule()

    def on_selection_change(self, selection) -> asyncio.Future:
        self.session.selection = coerce_dialect(selection)
        return self._schedule()

    async def format_now(self) -> bool:
        """Format immediately, skipping the debounce delay."""
        self._debounce.cancel()
        self._supersede_burst()
        return await self._run()

    def clear(self) -> None:
        """Empty the session and drop anything pending or in flight."""
        self._debounce.cancel()
        self._status.cancel()
        self._supersede_burst()
        self._latest_token += 1
        self.session.clear()

    def close(self) -> None:
        """Cancel all timers; completions still in flight are discarded."""
        self._closed = True
        self._debounce.cancel()
        self._status.cancel()
        self._supersede_burst()

    # -- internals ----------------------------------------------------------

    def _supersede_burst(self) -> None:
        for waiter in self._burst_waiters:
            if not waiter.done():
                waiter.set_result(False)
        self._burst_waiters = []

    def _schedule(self) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        waiter = loop.create_future()
        if self._closed:
            waiter.set_result(False)
            return waiter

        self._supersede_burst()
        self._burst_waiters = [waiter]
        self._debounce.arm(self.settings.debounce_seconds, self._fire)
        return waiter

    def _fire(self) -> None:
        waiters, self._burst_waiters = self._burst_waiters, []
        task = asyncio.get_running_loop().create_task(self._run(waiters))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, waiters: Optional[List[asyncio.Future]] = None) -> bool:
        applied = False
        try:
            applied = await self._execute()
            return applied
        finally:
            for waiter in waiters or []:
                if not waiter.done():
                    waiter.set_result(applied)

    async def _execute(self) -> bool:
        if self._closed:
            return False

        self._latest_token += 1
        token = self._latest_token
        session = self.session
        text = session.input_text
        options = session.options

        if len(text) > self.settings.max_input_chars:
            error = InputTooLargeError(
                f"Input is too large ({len(text):,} characters; "
                f"the limit is {self.settings.max_input_chars:,})."
            )
            logger.info("format_rejected", token=token, kind=error.kind, chars=len(text))
            self._apply_failure(error.user_message)
            return True

        if not text.strip():
            self._status.cancel()
            session.output_text = ""
            session.last_formatted = None
            session.last_formatted_source = None
            session.error_message = ""
            session.error_line = None
            session.status = Status.READY
            session.refresh_diff()
            return True

        dialect = resolve(session.selection, text)
        session.effective_dialect = dialect
        session.status = Status.FORMATTING
        self._status.cancel()

        loop = asyncio.get_running_loop()
        started = loop.time()
        logger.debug("format_started", token=token, dialect=dialect.value, chars=len(text))

        failure: Optional[str] = None
        result = ""
        try:
            result = await self.engine.format(text, parser_for(dialect), options)
        except FormatterError as error:
            failure = error.user_message
        except Exception as error:
            logger.exception("format_engine_crashed", token=token, dialect=dialect.value)
            failure = str(error) or type(error).__name__

        elapsed_ms = round((loop.time() - started) * 1000, 1)
        if self._closed or token != self._latest_token:
            logger.debug("format_discarded", token=token, latest=self._latest_token, elapsed_ms=elapsed_ms)
            return False

        if failure is not None:
            logger.info("format_failed", token=token, dialect=dialect.value, elapsed_ms=elapsed_ms)
            self._apply_failure(failure)
        else:
            logger.info("format_applied", token=token, dialect=dialect.value, elapsed_ms=elapsed_ms)
            self._apply_success(result, text)
        return True

    def _apply_success(self, result: str, source: str) -> None:
        session = self.session
        formatted = result.rstrip()
        session.output_text = formatted
        session.last_formatted = formatted
        session.last_formatted_source = source
        session.error_message = ""
        session.error_line = None
        session.notice = ""
        session.status = Status.FORMATTED
        session.refresh_diff()
        self._status.arm(self.settings.formatted_status_ms / 1000.0, self._revert_status)

    def _apply_failure(self, raw_error: str) -> None:
        session = self.session
        interpreted = interpret(raw_error)
        session.status = Status.ERROR
        session.error_message = interpreted.short_message
        session.error_line = interpreted.line
        session.output_text = make_placeholder(interpreted.short_message)
        # The previous good result is dropped, not kept for recovery.
        session.last_formatted = None
        session.last_formatted_source = None
        session.refresh_diff()
        self._status.arm(self.settings.error_status_ms / 1000.0, self._revert_status)

    def _revert_status(self) -> None:
        if self.session.status in (Status.FORMATTED, Status.ERROR):
            self.session.status = Status.READY
