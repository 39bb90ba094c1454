"""Smart bed: timed sleep sessions with bed-climate control."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from datetime import datetime, timedelta

from pyutopia._constants import (
    BED_INITIAL_TEMPERATURE,
    BED_TEMPERATURE_RATE,
    DEFAULT_SLEEP_HOURS,
    SLEEP_QUALITY_MAX,
    SLEEP_QUALITY_MIN,
)
from pyutopia._convergence import step_toward
from pyutopia._timers import TimerSlot, delayed, ticker
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry
from pyutopia.models.status import BedStatus

_logger = logging.getLogger(__name__)


class BedSimulator(DeviceSimulator):
    """One bed with a climate ticker and a session timer.

    While a session is active the climate ticker moves the bed temperature
    toward the target every simulated minute.  When the session ends,
    naturally or on request, both timers are released and a sleep quality
    score is recorded.
    """

    kind = "bed"

    def __init__(
        self,
        registry: RoomRegistry,
        config: UtopiaConfig,
        *,
        clock: Clock = utcnow,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(registry, config, clock=clock)
        self._rng = rng or random.Random()
        self._temperature = BED_INITIAL_TEMPERATURE
        self._target_temperature = BED_INITIAL_TEMPERATURE
        self._active = False
        self._session_hours = DEFAULT_SLEEP_HOURS
        self._started_at: datetime | None = None
        self._last_sleep_quality: float | None = None
        self._climate = TimerSlot("bed-climate")
        self._session = TimerSlot("bed-session")

    def _timer_slots(self) -> Iterator[TimerSlot]:
        yield from super()._timer_slots()
        yield self._climate
        yield self._session

    def _hours_left(self) -> float:
        if self._started_at is None:
            return float(self._session_hours)
        ends_at = self._started_at + timedelta(hours=self._session_hours)
        return max(0.0, (ends_at - self._clock()).total_seconds() / 3600.0)

    async def get_status(self) -> str:
        """Gets the current status of the smart bed."""
        async with self._lock:
            if self._active:
                return (
                    f"Climate control ON, Target: {self._target_temperature:.1f}°C, "
                    f"Current: {self._temperature:.1f}°C, Time left: {self._hours_left():.1f}h"
                )
            return (
                f"Climate control OFF, Last setpoint: {self._target_temperature:.1f}°C, "
                f"Current: {self._temperature:.1f}°C"
            )

    async def set_for_sleep(self, temperature: float, hours: int = DEFAULT_SLEEP_HOURS) -> str:
        """Sets the bed temperature and session length, and starts climate control."""
        async with self._lock:
            self._ensure_open()
            if self._active:
                return "Bed is already set for sleep. Please wait for the current session to finish or stop it first."
            self._target_temperature = float(temperature)
            self._session_hours = hours
            self._active = True
            self._started_at = self._clock()
            self._climate.arm(ticker(self.minutes(1), self._climate_step, name=self._climate.name))
            self._session.arm(delayed(self.minutes(hours * 60), self._session_expired, name=self._session.name))
            _logger.debug("Sleep session started: %.1f°C for %d h", self._target_temperature, hours)
            return f"Bed set for sleep: Target temperature {self._target_temperature:.1f}°C for {hours} hours."

    async def end_sleep_session(self) -> str:
        """Ends the current sleep session immediately and stops climate control."""
        async with self._lock:
            if not self._active:
                return "No sleep session is currently active."
            self._finish_session()
            return "Sleep session ended. Climate control is now off. Sleep quality has been recorded."

    async def get_last_sleep_quality(self) -> str:
        async with self._lock:
            if self._last_sleep_quality is None:
                return "No sleep session recorded yet."
            return f"Last sleep quality: {self._last_sleep_quality:.1f}/100"

    async def _climate_step(self) -> bool:
        async with self._lock:
            if self._closed or not self._active or not self._climate.is_current():
                return False
            self._temperature = step_toward(self._temperature, self._target_temperature, BED_TEMPERATURE_RATE)
            return True

    async def _session_expired(self) -> None:
        async with self._lock:
            if not self._session.is_current():
                return
            self._session.release()
            if self._active:
                self._finish_session()

    def _finish_session(self) -> None:
        """Tear down both timers and record the session result.  Lock held."""
        self._active = False
        self._climate.cancel()
        self._session.cancel()
        self._last_sleep_quality = self._rng.uniform(SLEEP_QUALITY_MIN, SLEEP_QUALITY_MAX)
        _logger.debug("Sleep session finished, quality %.1f", self._last_sleep_quality)

    async def snapshot(self) -> BedStatus:
        async with self._lock:
            return BedStatus(
                active=self._active,
                temperature=self._temperature,
                target_temperature=self._target_temperature,
                started_at=self._started_at,
                session_hours=self._session_hours,
                last_sleep_quality=self._last_sleep_quality,
            )
