"""Shared scaffolding for device simulators."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import ClassVar

from pyutopia._timers import TimerSlot, ticker
from pyutopia.config import UtopiaConfig
from pyutopia.environment import RoomRegistry
from pyutopia.exceptions import UtopiaClosedError

_logger = logging.getLogger(__name__)

ROOM_NOT_FOUND = "Room not found"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive *value*; aware values pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class DeviceSimulator:
    """Base for one device kind.

    Owns the kind's single lock, its periodic tick and its lifecycle
    (``start`` → ``shutdown``).  Subclasses that evolve over time set
    ``tick_minutes`` and implement :meth:`_tick_locked`; every command
    and every timer callback of a kind does its read-modify-write while
    holding ``self._lock``.
    """

    kind: ClassVar[str] = "device"
    #: Simulated minutes between kind-level ticks; ``None`` disables the tick.
    tick_minutes: ClassVar[float | None] = None

    def __init__(
        self,
        registry: RoomRegistry,
        config: UtopiaConfig,
        *,
        clock: Clock = utcnow,
    ) -> None:
        self._registry = registry
        self._config = config
        self._clock = clock
        self._lock = asyncio.Lock()
        self._closed = False
        self._tick_slot = TimerSlot(f"{self.kind}-tick")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def is_running(self) -> bool:
        return self._tick_slot.active

    def start(self) -> None:
        """Arm the periodic tick.  No-op when already running."""
        self._ensure_open()
        if self.tick_minutes is None or self._tick_slot.active:
            return
        self._tick_slot.arm(
            ticker(self.minutes(self.tick_minutes), self._on_tick, name=self._tick_slot.name),
        )

    def shutdown(self) -> None:
        """Cancel and release every outstanding timer.  Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        for slot in self._timer_slots():
            slot.cancel()
        _logger.debug("%s simulator shut down", self.kind)

    def tasks(self) -> list[asyncio.Task[object]]:
        """Tasks currently held by this simulator's slots."""
        return [slot.task for slot in self._timer_slots() if slot.task is not None]

    def _timer_slots(self) -> Iterator[TimerSlot]:
        yield self._tick_slot

    def _ensure_open(self) -> None:
        if self._closed:
            raise UtopiaClosedError(f"{self.kind} simulator is shut down", kind=self.kind)

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    async def tick(self) -> None:
        """Run one simulation step for every room of this kind."""
        async with self._lock:
            if self._closed:
                return
            self._tick_locked(self._clock())

    async def _on_tick(self) -> bool:
        await self.tick()
        return not self._closed

    def _tick_locked(self, now: datetime) -> None:
        """One step of the simulation.  Called with the lock held."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def minutes(self, count: float) -> float:
        """Convert simulated minutes to wall-clock seconds."""
        return count * self._config.minute_seconds

    def _resolve(self, room: str) -> int | None:
        return self._registry.resolve(room)
