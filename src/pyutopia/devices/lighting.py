"""Per-room lights."""

from __future__ import annotations

from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry


def _on_off(value: bool) -> str:
    return "On" if value else "Off"


class LightingSimulator(DeviceSimulator):
    kind = "lighting"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._lights = [False for _ in self._registry.ids()]

    async def get_status(self, room: str) -> str:
        """Gets the status of lights in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        async with self._lock:
            return _on_off(self._lights[room_id])

    async def set_status(self, room: str, on: bool) -> str:
        """Sets the status of lights in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            if self._lights[room_id] == on:
                return f"Lights in {name} are already {_on_off(on)}."
            self._lights[room_id] = on
            return f"Lights in {name} are now {_on_off(on)}."
