"""Per-room thermostat simulation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from pyutopia._constants import (
    BASE_TEMPERATURE_RATE,
    DEFAULT_THERMOSTAT_SETPOINT,
    INITIAL_ROOM_TEMPERATURE,
    NATURAL_TEMPERATURE_RATE,
)
from pyutopia._convergence import area_rate, step_toward
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND, Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry, seasonal_temperature
from pyutopia.models.enums import OperationMode
from pyutopia.models.status import ThermostatStatus

_logger = logging.getLogger(__name__)


@dataclass
class _RoomThermostat:
    temperature: float = INITIAL_ROOM_TEMPERATURE
    setpoint: float | None = None
    powered: bool = False
    mode: OperationMode = OperationMode.NORMAL


class ThermostatSimulator(DeviceSimulator):
    """Moves each room's temperature toward its setpoint or the season.

    A powered thermostat with a setpoint drives at
    ``BASE_TEMPERATURE_RATE`` scaled by room area (halved in quiet
    mode).  Otherwise the room drifts toward the monthly seasonal
    temperature at ``NATURAL_TEMPERATURE_RATE``.
    """

    kind = "thermostat"
    tick_minutes = 1.0

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._rooms = [_RoomThermostat() for _ in self._registry.ids()]

    def _tick_locked(self, now: datetime) -> None:
        seasonal = seasonal_temperature(now)
        for room_id, state in enumerate(self._rooms):
            area = self._registry.area(room_id)
            if state.powered and state.setpoint is not None:
                rate = area_rate(BASE_TEMPERATURE_RATE, area, factor=state.mode.rate_factor)
                state.temperature = step_toward(state.temperature, state.setpoint, rate)
            else:
                rate = area_rate(NATURAL_TEMPERATURE_RATE, area)
                state.temperature = step_toward(state.temperature, seasonal, rate)

    async def get_status(self, room: str) -> str:
        """Gets the status of the thermostat in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            status = "On" if state.powered else "Off"
            setpoint_text = f"{state.setpoint:.1f}°C" if state.setpoint is not None else "Never set"
            seasonal_note = ""
            if not state.powered:
                seasonal_note = (
                    f" (Moving towards seasonal temperature: {seasonal_temperature(self._clock()):.1f}°C)"
                )
            mode_note = f" Mode: {state.mode}." if state.mode is OperationMode.QUIET else ""
            return (
                f"Thermostat is {status}. Current temperature in {name}: {state.temperature:.1f}°C, "
                f"Setpoint: {setpoint_text}{seasonal_note}{mode_note}"
            )

    async def set_temperature(self, room: str, temperature: float) -> str:
        """Sets the setpoint of a room.  Turns the thermostat on if it is off."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            state.setpoint = float(temperature)
            if not state.powered:
                state.powered = True
                _logger.debug("Thermostat %s powered on by setpoint %.1f", name, temperature)
                return f"Setpoint for {name} set to {temperature:.1f}°C and the thermostat is now On."
            return f"Setpoint for {name} set to {temperature:.1f}°C."

    async def set_power(self, room: str, on: bool) -> str:
        """Turns the thermostat on or off in a room."""
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            if state.powered == on:
                return f"Thermostat in {name} is already {'on' if on else 'off'}"
            state.powered = on
            if on:
                if state.setpoint is None:
                    state.setpoint = DEFAULT_THERMOSTAT_SETPOINT
                return (
                    f"Thermostat in {name} is now on and the thermostat setpoint is now {state.setpoint:.1f}°C."
                )
            previous = state.setpoint if state.setpoint is not None else 0.0
            return f"Thermostat in {name} is now off. Setpoint is previously set to {previous:.1f}°C"

    async def set_mode(self, room: str, mode: OperationMode | str) -> str:
        """Switches between normal and quiet (half-rate) operation."""
        parsed = OperationMode.parse(mode)
        room_id = self._resolve(room)
        if room_id is None:
            return ROOM_NOT_FOUND
        name = self._registry.name(room_id)
        async with self._lock:
            state = self._rooms[room_id]
            if state.mode is parsed:
                return f"Thermostat in {name} is already in {parsed} mode."
            state.mode = parsed
            return f"Thermostat in {name} is now in {parsed} mode."

    async def snapshot(self, room: str) -> ThermostatStatus | None:
        room_id = self._resolve(room)
        if room_id is None:
            return None
        async with self._lock:
            state = self._rooms[room_id]
            return ThermostatStatus(
                room=self._registry.name(room_id),
                powered=state.powered,
                mode=state.mode,
                temperature=state.temperature,
                setpoint=state.setpoint,
                seasonal_temperature=seasonal_temperature(self._clock()),
            )
