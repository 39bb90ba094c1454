"""Per-room air-quality unit simulation.

Air quality is staged rather than continuous.  While a unit is powered
on, every tick credits elapsed minutes (half a minute in quiet mode)
toward the next better level; the worse the level, the longer the
recovery (see ``AIR_QUALITY_RECOVERY_MINUTES``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from pyutopia._constants import AIR_QUALITY_RECOVERY_MINUTES
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry
from pyutopia.models.enums import AirQuality, OperationMode
from pyutopia.models.status import AirQualityStatus

_logger = logging.getLogger(__name__)


@dataclass
class _RoomAirQuality:
    quality: AirQuality = AirQuality.GOOD
    mode: OperationMode = OperationMode.NORMAL
    powered: bool = False
    recovery_minutes: float = 0.0


def recovery_minutes_needed(quality: AirQuality) -> float:
    """Powered minutes (normal mode) to leave *quality*; 0 for ``GOOD``."""
    return AIR_QUALITY_RECOVERY_MINUTES.get(quality.value, 0.0)


class AirQualitySimulator(DeviceSimulator):
    kind = "air_quality"
    tick_minutes = 1.0

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._rooms = [_RoomAirQuality() for _ in self._registry.ids()]

    def _tick_locked(self, now: datetime) -> None:
        for room_id, state in enumerate(self._rooms):
            if not state.powered or state.quality is AirQuality.GOOD:
                continue
            state.recovery_minutes += state.mode.rate_factor
            if state.recovery_minutes >= recovery_minutes_needed(state.quality):
                previous = state.quality
                state.quality = previous.improved
                state.recovery_minutes = 0.0
                _logger.debug(
                    "Air quality in %s improved from %s to %s",
                    self._registry.name(room_id),
                    previous,
                    state.quality,
                )

    async def get_status(self, room: str) -> str:
        """Gets the status of the air quality control in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            return (
                f"Air quality in {name} is {state.quality}. "
                f"Unit is {'On' if state.powered else 'Off'} in {state.mode} mode."
            )

    async def set_power(self, room: str, on: bool) -> str:
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        word = "on" if on else "off"
        async with self._lock:
            state = self._rooms[room_id]
            if state.powered == on:
                return f"Air quality control in {name} is already {word}."
            state.powered = on
            return f"Air quality control in {name} is now {word}."

    async def set_mode(self, room: str, mode: OperationMode | str) -> str:
        """Sets Normal or Quiet operation; quiet recovery takes twice as long."""
        parsed = OperationMode.parse(mode)
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            if state.mode is parsed:
                return f"Air quality control in {name} is already in {parsed} mode."
            state.mode = parsed
            return f"Air quality control in {name} is now in {parsed} mode."

    async def degrade(self, room: str, quality: AirQuality | str) -> str:
        """Development aid: force a room's air quality to a worse level."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        target = AirQuality.parse(quality)
        if target is AirQuality.GOOD:
            return "Cannot degrade to Good quality"
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            state.quality = target
            state.recovery_minutes = 0.0
            return f"Air quality in {name} is now {target}."

    async def snapshot(self, room: str) -> AirQualityStatus | None:
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            state = self._rooms[room_id]
            return AirQualityStatus(
                room=self._registry.name(room_id),
                powered=state.powered,
                mode=state.mode,
                quality=state.quality,
                recovery_minutes=state.recovery_minutes,
            )
