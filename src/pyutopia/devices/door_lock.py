"""Front-door smart lock."""

from __future__ import annotations

from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry


class DoorLockSimulator(DeviceSimulator):
    kind = "door_lock"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._locked = True

    @property
    def locked(self) -> bool:
        return self._locked

    async def get_state(self) -> str:
        async with self._lock:
            return "Locked" if self._locked else "Unlocked"

    async def set_state(self, locked: bool) -> str:
        word = "locked" if locked else "unlocked"
        async with self._lock:
            if self._locked == locked:
                return f"Front door is already {word}."
            self._locked = locked
            return f"Front door is now {word}."
