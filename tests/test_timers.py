from __future__ import annotations

import asyncio
import logging

import pytest

from pyutopia._timers import TimerSlot, delayed, ticker


@pytest.mark.asyncio
async def test_ticker_stops_when_callback_returns_false() -> None:
    calls: list[int] = []

    async def callback() -> bool:
        calls.append(len(calls))
        return len(calls) < 3

    await asyncio.wait_for(ticker(0.001, callback, name="t"), timeout=1.0)

    assert calls == [0, 1, 2]


@pytest.mark.asyncio
async def test_ticker_logs_faults_and_keeps_running(caplog: pytest.LogCaptureFixture) -> None:
    calls = 0

    async def callback() -> bool:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("boom")
        return calls < 3

    with caplog.at_level(logging.WARNING, logger="pyutopia._timers"):
        await asyncio.wait_for(ticker(0.001, callback, name="faulty"), timeout=1.0)

    assert calls == 3
    assert "Tick faulty failed" in caplog.text


@pytest.mark.asyncio
async def test_ticker_rejects_non_positive_interval() -> None:
    async def callback() -> bool:
        return False

    with pytest.raises(ValueError):
        await ticker(0, callback)


@pytest.mark.asyncio
async def test_delayed_runs_once() -> None:
    fired = asyncio.Event()

    async def callback() -> None:
        fired.set()

    await asyncio.wait_for(delayed(0.001, callback), timeout=1.0)

    assert fired.is_set()


@pytest.mark.asyncio
async def test_arming_slot_cancels_previous_occupant() -> None:
    slot = TimerSlot("test")
    fired: list[str] = []

    async def record(tag: str) -> None:
        fired.append(tag)

    first = slot.arm(delayed(0.05, lambda: record("first")))
    second = slot.arm(delayed(0.001, lambda: record("second")))
    await asyncio.gather(first, second, return_exceptions=True)

    assert first.cancelled()
    assert fired == ["second"]


@pytest.mark.asyncio
async def test_is_current_only_inside_own_task() -> None:
    slot = TimerSlot("test")
    seen: list[bool] = []

    async def probe() -> None:
        seen.append(slot.is_current())
        slot.release()

    assert slot.is_current() is False
    task = slot.arm(probe())
    await task

    assert seen == [True]
    assert slot.task is None
    assert slot.active is False


@pytest.mark.asyncio
async def test_cancel_reports_whether_task_was_live() -> None:
    slot = TimerSlot("test")
    assert slot.cancel() is False

    task = slot.arm(asyncio.sleep(10))
    assert slot.active is True
    assert slot.cancel() is True
    with pytest.raises(asyncio.CancelledError):
        await task
    assert slot.cancel() is False
