from __future__ import annotations

import asyncio
from typing import Callable, Optional


class Alarm:
    """A named one-shot timer; arming it again cancels the previous one."""

    def __init__(self, name: str):
        self.name = name
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()

        def fire():
            self._handle = None
            callback()

        self._handle = loop.call_later(max(0.0, delay_seconds), fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
