"""Smart blinds: quantized open percentage with gradual transitions."""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from pyutopia._constants import BLINDS_MAX, BLINDS_MIN, BLINDS_STEP
from pyutopia._timers import TimerSlot, ticker
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, as_utc, utcnow
from pyutopia.environment import RoomRegistry
from pyutopia.models.status import BlindsStatus

_logger = logging.getLogger(__name__)


def quantize_percent(percent: float) -> int:
    """Round to the nearest multiple of 10 (ties to even), then clamp to 0-100."""
    rounded = int(round(percent / BLINDS_STEP)) * BLINDS_STEP
    return max(BLINDS_MIN, min(BLINDS_MAX, rounded))


@dataclass
class _Transition:
    target: int
    direction: int
    arrive_at: datetime


@dataclass
class _RoomBlinds:
    percent: int = BLINDS_MAX
    transition: _Transition | None = None


class BlindsSimulator(DeviceSimulator):
    """Blinds per room, moved instantly or one 10% step per minute.

    A gradual transition lives in the room's own :class:`TimerSlot`; any
    new command for the room supersedes it.
    """

    kind = "blinds"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._rooms = [_RoomBlinds() for _ in self._registry.ids()]
        self._transitions = [TimerSlot(f"blinds-{self._registry.name(i)}") for i in self._registry.ids()]

    def _timer_slots(self) -> Iterator[TimerSlot]:
        yield from super()._timer_slots()
        yield from self._transitions

    def _discard_transition(self, room_id: int) -> None:
        self._transitions[room_id].cancel()
        self._rooms[room_id].transition = None

    async def get_state(self, room: str) -> str:
        """Gets the current open percentage of the blinds in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        async with self._lock:
            return f"Blinds in {self._registry.name(room_id)} are {self._rooms[room_id].percent}% open."

    async def set_state(self, room: str, percent: float) -> str:
        """Sets the blinds immediately (nearest 10%), cancelling any gradual change."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        applied = quantize_percent(percent)
        async with self._lock:
            self._discard_transition(room_id)
            self._rooms[room_id].percent = applied
            return f"Blinds in {self._registry.name(room_id)} set to {applied}% open."

    async def set_state_with_timer(self, room: str, percent: float, target_time: datetime) -> str:
        """Schedules the blinds to reach *percent* at *target_time*, one step per minute.

        The first step fires ``steps - 1`` minutes before *target_time*.
        When fewer than ``steps - 0.5`` minutes remain the change is
        applied immediately instead.  Naive datetimes are read as UTC.
        """
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        target = quantize_percent(percent)
        arrive_at = as_utc(target_time)
        async with self._lock:
            self._ensure_open()
            self._discard_transition(room_id)
            state = self._rooms[room_id]
            steps = abs(target - state.percent) // BLINDS_STEP
            if steps == 0:
                state.percent = target
                return f"Blinds in {name} already at {target}% open."

            remaining_minutes = (arrive_at - as_utc(self._clock())).total_seconds() / 60.0
            if remaining_minutes < steps - 0.5:
                state.percent = target
                return (
                    f"Not enough time to schedule gradual change. Blinds in {name} set to {target}% open immediately."
                )

            first_step_minutes = max(0.0, remaining_minutes - (steps - 1))
            direction = 1 if target > state.percent else -1
            state.transition = _Transition(target=target, direction=direction, arrive_at=arrive_at)
            self._transitions[room_id].arm(
                ticker(
                    self.minutes(1),
                    functools.partial(self._step, room_id),
                    first_delay=self.minutes(first_step_minutes),
                    name=self._transitions[room_id].name,
                )
            )
            _logger.debug(
                "Blinds %s: %d steps toward %d%%, first in %.2f min",
                name,
                steps,
                target,
                first_step_minutes,
            )
            return f"Blinds in {name} will be set to {target}% open at {arrive_at:%H:%M}, changing one step per minute."

    async def _step(self, room_id: int) -> bool:
        """Advance one increment; returns ``False`` once the target is reached."""
        async with self._lock:
            slot = self._transitions[room_id]
            if self._closed or not slot.is_current():
                return False
            state = self._rooms[room_id]
            transition = state.transition
            if transition is None:
                slot.release()
                return False
            if state.percent != transition.target:
                proposed = state.percent + BLINDS_STEP * transition.direction
                if transition.direction > 0:
                    state.percent = min(proposed, transition.target)
                else:
                    state.percent = max(proposed, transition.target)
            if state.percent == transition.target:
                state.transition = None
                slot.release()
                _logger.debug("Blinds %s reached %d%%", self._registry.name(room_id), state.percent)
                return False
            return True

    async def snapshot(self, room: str) -> BlindsStatus | None:
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            state = self._rooms[room_id]
            return BlindsStatus(
                room=self._registry.name(room_id),
                percent=state.percent,
                target_percent=state.transition.target if state.transition is not None else None,
            )
