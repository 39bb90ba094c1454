"""Cancellable background timers built on asyncio tasks.

A :class:`TimerSlot` holds at most one live task for an activity (the
kind-level tick, one room's blind transition, the vehicle's drive).
Arming a slot always cancels the previous occupant first, so two
completions can never compete for the same resource.  Callbacks check
:meth:`TimerSlot.is_current` under their kind's lock before mutating
state; a superseded or cancelled task therefore skips its side effects.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

_logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[bool | None]]


class TimerSlot:
    """Single-occupancy holder for one background task."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._task: asyncio.Task[Any] | None = None

    def __repr__(self) -> str:
        return f"TimerSlot({self.name!r}, active={self.active})"

    @property
    def task(self) -> asyncio.Task[Any] | None:
        return self._task

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Cancel any live task, then schedule *coro* as the new occupant.

        Must be called from inside a running event loop.
        """
        self.cancel()
        task = asyncio.get_running_loop().create_task(coro, name=self.name)
        self._task = task
        _logger.debug("Timer %s armed", self.name)
        return task

    def cancel(self) -> bool:
        """Cancel and discard the occupant.  Returns ``True`` if one was live."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False
        if task is asyncio.current_task():
            # A task cancelling its own slot just lets go of it.
            return True
        task.cancel()
        _logger.debug("Timer %s cancelled", self.name)
        return True

    def is_current(self) -> bool:
        """Whether the calling task is this slot's live occupant."""
        current = asyncio.current_task()
        return current is not None and current is self._task

    def release(self) -> None:
        """Vacate the slot from inside its own task (natural completion)."""
        if self.is_current():
            self._task = None


async def ticker(
    interval: float,
    callback: TickCallback,
    *,
    first_delay: float = 0.0,
    name: str = "ticker",
) -> None:
    """Invoke *callback* every *interval* seconds.

    Deadlines are computed from the loop clock, so a slow callback does
    not accumulate drift.  The ticker stops when the callback returns
    ``False`` or the task is cancelled.  Any other callback exception is
    logged and the ticker keeps running.
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max(0.0, first_delay)
    while True:
        delay = deadline - loop.time()
        if delay > 0:
            await asyncio.sleep(delay)
        try:
            keep_going = await callback()
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.warning("Tick %s failed", name, exc_info=True)
            keep_going = None
        if keep_going is False:
            return
        deadline = max(deadline + interval, loop.time())


async def delayed(delay: float, callback: Callable[[], Awaitable[Any]], *, name: str = "timer") -> None:
    """Invoke *callback* once after *delay* seconds unless cancelled first."""
    await asyncio.sleep(max(0.0, delay))
    try:
        await callback()
    except asyncio.CancelledError:
        raise
    except Exception:
        _logger.warning("Timer %s failed", name, exc_info=True)
