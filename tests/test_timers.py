from __future__ import annotations

import asyncio

import pytest

from jsfmt_studio.timers import Alarm


@pytest.mark.asyncio
async def test_alarm_fires_once() -> None:
    fired = []
    alarm = Alarm("status")
    alarm.arm(0.01, lambda: fired.append(1))
    assert alarm.pending

    await asyncio.sleep(0.05)
    assert fired == [1]
    assert not alarm.pending


@pytest.mark.asyncio
async def test_rearming_cancels_predecessor() -> None:
    fired = []
    alarm = Alarm("debounce")
    alarm.arm(0.01, lambda: fired.append("first"))
    alarm.arm(0.02, lambda: fired.append("second"))

    await asyncio.sleep(0.06)
    assert fired == ["second"]


@pytest.mark.asyncio
async def test_cancel_prevents_firing() -> None:
    fired = []
    alarm = Alarm("debounce")
    alarm.arm(0.01, lambda: fired.append(1))
    alarm.cancel()

    await asyncio.sleep(0.03)
    assert fired == []
