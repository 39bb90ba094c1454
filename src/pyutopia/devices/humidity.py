"""Per-room humidity control simulation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from pyutopia._constants import (
    DEFAULT_HUMIDITY_SETPOINT,
    HUMIDITY_ACTIVE_RATE,
    HUMIDITY_DRIFT_RATE,
    SEASONAL_TOLERANCE,
)
from pyutopia._convergence import step_toward
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry, seasonal_humidity
from pyutopia.models.enums import HumidityMode
from pyutopia.models.status import HumidityStatus

_logger = logging.getLogger(__name__)


@dataclass
class _RoomHumidity:
    humidity: float
    setpoint: float | None = None
    mode: HumidityMode = HumidityMode.OFF

    @property
    def effective_setpoint(self) -> float:
        return self.setpoint if self.setpoint is not None else DEFAULT_HUMIDITY_SETPOINT


def _matches_season(setpoint: float, seasonal: float) -> bool:
    return abs(setpoint - seasonal) < SEASONAL_TOLERANCE


def _demand_mode(current: float, setpoint: float) -> HumidityMode:
    if current < setpoint:
        return HumidityMode.HUMIDIFYING
    if current > setpoint:
        return HumidityMode.DEHUMIDIFYING
    return HumidityMode.PAUSED


class HumiditySimulator(DeviceSimulator):
    """Four-mode humidity controller per room.

    ``Humidifying``/``Dehumidifying`` converge on the setpoint and then
    pause.  A paused unit whose setpoint equals the monthly average
    drifts with the season; otherwise it resumes toward its setpoint
    once the room moves away from it.  ``Off`` drifts with the season.
    """

    kind = "humidity"
    tick_minutes = 1.0

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        initial = seasonal_humidity(self._clock())
        self._rooms = [_RoomHumidity(humidity=initial) for _ in self._registry.ids()]

    def _tick_locked(self, now: datetime) -> None:
        seasonal = seasonal_humidity(now)
        for state in self._rooms:
            setpoint = state.effective_setpoint
            if state.mode is HumidityMode.HUMIDIFYING:
                if state.humidity < setpoint:
                    state.humidity = step_toward(state.humidity, setpoint, HUMIDITY_ACTIVE_RATE)
                if state.humidity >= setpoint:
                    state.mode = HumidityMode.PAUSED
            elif state.mode is HumidityMode.DEHUMIDIFYING:
                if state.humidity > setpoint:
                    state.humidity = step_toward(state.humidity, setpoint, HUMIDITY_ACTIVE_RATE)
                if state.humidity <= setpoint:
                    state.mode = HumidityMode.PAUSED
            elif state.mode is HumidityMode.PAUSED:
                if _matches_season(setpoint, seasonal):
                    state.humidity = step_toward(state.humidity, seasonal, HUMIDITY_DRIFT_RATE)
                else:
                    state.mode = _demand_mode(state.humidity, setpoint)
            else:
                state.humidity = step_toward(state.humidity, seasonal, HUMIDITY_DRIFT_RATE)

    async def get_status(self, room: str) -> str:
        """Gets the status of the humidity control in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            setpoint_text = f"{state.setpoint:.1f}%" if state.setpoint is not None else "Never set"
            return (
                f"Humidity control is {state.mode}. Current humidity in {name}: {state.humidity:.1f}%, "
                f"Setpoint: {setpoint_text}"
            )

    async def get_current_humidity(self, room: str) -> float | None:
        """Gets the current humidity in a room (raw value)."""
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            return self._rooms[room_id].humidity

    async def set_power(self, room: str, on: bool) -> str:
        """Turns the humidity control on or off in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            if not on:
                if state.mode is HumidityMode.OFF:
                    return f"Humidity control in {name} is already off."
                state.mode = HumidityMode.OFF
                return f"Humidity control in {name} is now off."

            if state.mode is not HumidityMode.OFF:
                return f"Humidity control in {name} is already on."
            if state.setpoint is None:
                state.setpoint = DEFAULT_HUMIDITY_SETPOINT
            setpoint = state.setpoint
            if _matches_season(setpoint, seasonal_humidity(self._clock())):
                state.mode = HumidityMode.PAUSED
                return (
                    f"Humidity control in {name} is paused to drift by nature (setpoint matches monthly average)."
                )
            state.mode = _demand_mode(state.humidity, setpoint)
            _logger.debug("Humidity control %s powered on in mode %s", name, state.mode)
            if state.mode is HumidityMode.HUMIDIFYING:
                return f"Humidity control in {name} is now humidifying. Setpoint is {setpoint:.1f}%."
            if state.mode is HumidityMode.DEHUMIDIFYING:
                return f"Humidity control in {name} is now dehumidifying. Setpoint is {setpoint:.1f}%."
            return f"Humidity control in {name} is paused (already at setpoint)."

    async def set_humidity(self, room: str, humidity: float) -> str:
        """Sets the humidity setpoint in a room.  Turns the control on if it is off."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            state.setpoint = float(humidity)
            if state.mode is not HumidityMode.OFF:
                return f"Setpoint for {name} set to {humidity:.1f}%."
            prefix = f"Setpoint for {name} set to {humidity:.1f}% and humidity control is"
            if _matches_season(state.setpoint, seasonal_humidity(self._clock())):
                state.mode = HumidityMode.PAUSED
                return f"{prefix} paused to drift by nature (setpoint matches monthly average)."
            state.mode = _demand_mode(state.humidity, state.setpoint)
            if state.mode is HumidityMode.PAUSED:
                return f"{prefix} paused (already at setpoint)."
            return f"{prefix} now {state.mode}."

    async def snapshot(self, room: str) -> HumidityStatus | None:
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            state = self._rooms[room_id]
            return HumidityStatus(
                room=self._registry.name(room_id),
                mode=state.mode,
                humidity=state.humidity,
                setpoint=state.setpoint,
                seasonal_humidity=seasonal_humidity(self._clock()),
            )
