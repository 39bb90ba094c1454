"""Robot vacuum: one bounded cleaning run at a time."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

from pyutopia._timers import TimerSlot, delayed
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry
from pyutopia.models.enums import VacuumPhase
from pyutopia.models.status import VacuumStatus

_logger = logging.getLogger(__name__)


def _fmt_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value is not None else "never"


class VacuumSimulator(DeviceSimulator):
    """Runs for ``area × vacuum_minutes_per_sqm`` minutes, then parks itself."""

    kind = "vacuum"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._phase = VacuumPhase.IDLE
        self._room: str | None = None
        self._started_at: datetime | None = None
        self._stopped_at: datetime | None = None
        self._estimated_minutes = 0
        self._run = TimerSlot("vacuum-run")

    def _timer_slots(self) -> Iterator[TimerSlot]:
        yield from super()._timer_slots()
        yield self._run

    def estimate_minutes(self, room_id: int) -> int:
        return int(round(self._registry.area(room_id) * self._config.vacuum_minutes_per_sqm))

    async def get_status(self) -> str:
        """Gets the status of the robot vacuum."""
        async with self._lock:
            lines = [f"Vacuum Status: {self._phase}"]
            if self._phase is VacuumPhase.RUNNING:
                lines.append(f"Started on: {_fmt_time(self._started_at)}")
                lines.append(f"Room: {self._room}")
                lines.append(f"Estimated running time: {self._estimated_minutes} minutes")
            else:
                lines.append(f"Stopped at: {_fmt_time(self._stopped_at)}")
            return "\n".join(lines) + "\n"

    async def start_cleaning(self, room: str) -> str:
        """Starts a cleaning run in *room*."""
        room_id = self._resolve(room)
        if room_id is None:
            return f"Room '{room}' not found."
        name = self._registry.name(room_id)
        async with self._lock:
            self._ensure_open()
            if self._phase is VacuumPhase.RUNNING:
                return f"Vacuum is already running in {self._room}."
            self._phase = VacuumPhase.RUNNING
            self._room = name
            self._started_at = self._clock()
            self._estimated_minutes = self.estimate_minutes(room_id)
            self._run.arm(delayed(self.minutes(self._estimated_minutes), self._finish, name=self._run.name))
            _logger.debug("Vacuum started in %s for %d min", name, self._estimated_minutes)
            return f"Vacuum started. Estimated running time: {self._estimated_minutes} minutes."

    async def stop(self) -> str:
        """Stops the robot vacuum."""
        async with self._lock:
            if self._phase is VacuumPhase.IDLE:
                return "Vacuum is already stopped."
            self._run.cancel()
            self._park()
            return "Vacuum stopped."

    async def _finish(self) -> None:
        async with self._lock:
            if not self._run.is_current():
                return
            self._run.release()
            if self._phase is VacuumPhase.RUNNING:
                self._park()
                _logger.debug("Vacuum finished cleaning %s", self._room)

    def _park(self) -> None:
        self._phase = VacuumPhase.IDLE
        self._stopped_at = self._clock()

    async def snapshot(self) -> VacuumStatus:
        async with self._lock:
            return VacuumStatus(
                phase=self._phase,
                room=self._room,
                started_at=self._started_at,
                stopped_at=self._stopped_at,
                estimated_minutes=self._estimated_minutes,
            )
