"""The simulated home: every device simulator behind one lifecycle."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import Any

from pyutopia.config import UtopiaConfig
from pyutopia.devices import (
    AirQualitySimulator,
    AudioSimulator,
    BedSimulator,
    BlindsSimulator,
    DeviceSimulator,
    DoorLockSimulator,
    HumiditySimulator,
    LightingSimulator,
    RefrigeratorSimulator,
    ThermostatSimulator,
    VacuumSimulator,
    VehicleSimulator,
)
from pyutopia.devices._base import Clock, utcnow
from pyutopia.environment import RoomRegistry, locations_resource, rooms_resource
from pyutopia.exceptions import UnknownOperationError

_logger = logging.getLogger(__name__)

Operation = Callable[..., Awaitable[Any]]


class UtopiaHome:
    """Owns the room registry and one simulator per device kind.

    Parameters
    ----------
    config : UtopiaConfig | None
        Simulation configuration.  Defaults to :meth:`UtopiaConfig.from_env`.
    clock : Callable[[], datetime] | None
        Wall clock shared by every simulator (UTC ``datetime.now`` by default).
    rng : random.Random | None
        Random source for sleep quality and refrigerator pictures.

    Usage::

        async with UtopiaHome() as home:
            print(await home.invoke("thermostat_set_temperature", room="Kitchen", temperature=21))
    """

    def __init__(
        self,
        config: UtopiaConfig | None = None,
        *,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or UtopiaConfig.from_env()
        self._clock = clock or utcnow
        self._rng = rng or random.Random()
        self._registry = RoomRegistry(self._config.rooms)
        self._started = False
        self._closed = False

        shared = {"clock": self._clock}
        self.thermostat = ThermostatSimulator(self._registry, self._config, **shared)
        self.humidity = HumiditySimulator(self._registry, self._config, **shared)
        self.air_quality = AirQualitySimulator(self._registry, self._config, **shared)
        self.blinds = BlindsSimulator(self._registry, self._config, **shared)
        self.lighting = LightingSimulator(self._registry, self._config, **shared)
        self.audio = AudioSimulator(self._registry, self._config, **shared)
        self.vacuum = VacuumSimulator(self._registry, self._config, **shared)
        self.bed = BedSimulator(self._registry, self._config, rng=self._rng, **shared)
        self.door_lock = DoorLockSimulator(self._registry, self._config, **shared)
        self.refrigerator = RefrigeratorSimulator(self._registry, self._config, rng=self._rng, **shared)
        self.vehicle = VehicleSimulator(self._registry, self._config, **shared)

    async def __aenter__(self) -> UtopiaHome:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        tasks = self.tasks()
        self.shutdown()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def config(self) -> UtopiaConfig:
        return self._config

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    @property
    def simulators(self) -> tuple[DeviceSimulator, ...]:
        return (
            self.thermostat,
            self.humidity,
            self.air_quality,
            self.blinds,
            self.lighting,
            self.audio,
            self.vacuum,
            self.bed,
            self.door_lock,
            self.refrigerator,
            self.vehicle,
        )

    @property
    def is_closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Arm periodic ticks and the trip poller.  Must run inside an event loop."""
        if self._started:
            return
        if self._config.autostart_ticks:
            for simulator in self.simulators:
                simulator.start()
        else:
            self.vehicle.start_trip_poller()
        self._started = True
        _logger.debug("Home started with %d rooms", len(self._registry))

    def shutdown(self) -> None:
        """Shut every simulator down.  Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        for simulator in self.simulators:
            simulator.shutdown()
        _logger.debug("Home shut down")

    def tasks(self) -> list[asyncio.Task[object]]:
        return [task for simulator in self.simulators for task in simulator.tasks()]

    # ------------------------------------------------------------------
    # Operation catalog
    # ------------------------------------------------------------------

    def operations(self) -> dict[str, Operation]:
        """Map every externally visible operation name to its coroutine function."""
        return {
            "thermostat_get_status": self.thermostat.get_status,
            "thermostat_set_temperature": self.thermostat.set_temperature,
            "thermostat_set_power": self.thermostat.set_power,
            "thermostat_set_mode": self.thermostat.set_mode,
            "humiditycontrol_get_status": self.humidity.get_status,
            "humiditycontrol_get_current_humidity": self.humidity.get_current_humidity,
            "humiditycontrol_set_humidity": self.humidity.set_humidity,
            "humiditycontrol_set_power": self.humidity.set_power,
            "airquality_get_status": self.air_quality.get_status,
            "airquality_set_power": self.air_quality.set_power,
            "airquality_set_mode": self.air_quality.set_mode,
            "airquality_degrade": self.air_quality.degrade,
            "blinds_get_state": self.blinds.get_state,
            "blinds_set_state": self.blinds.set_state,
            "blinds_set_state_with_timer": self.blinds.set_state_with_timer,
            "lights_get_status": self.lighting.get_status,
            "lights_set_status": self.lighting.set_status,
            "audio_play_song": self.audio.play_song,
            "audio_play_playlist": self.audio.play_playlist,
            "audio_stop": self.audio.stop,
            "audio_set_volume": self.audio.set_volume,
            "audio_get_status": self.audio.get_status,
            "vacuum_get_status": self.vacuum.get_status,
            "vacuum_start": self.vacuum.start_cleaning,
            "vacuum_stop": self.vacuum.stop,
            "bed_get_status": self.bed.get_status,
            "bed_set_for_sleep": self.bed.set_for_sleep,
            "bed_end_sleep_session": self.bed.end_sleep_session,
            "bed_get_last_sleep_quality": self.bed.get_last_sleep_quality,
            "lock_get_state": self.door_lock.get_state,
            "lock_set_state": self.door_lock.set_state,
            "refrigerator_get_temp": self.refrigerator.get_temperature,
            "refrigerator_get_internal_picture": self.refrigerator.get_internal_picture,
            "car_get_status": self.vehicle.get_status,
            "car_get_info": self.vehicle.get_info,
            "car_drive_to": self.vehicle.drive_to,
            "car_stop": self.vehicle.stop,
            "car_start_charging": self.vehicle.start_charging,
            "car_stop_charging": self.vehicle.stop_charging,
            "car_schedule_trip": self.vehicle.schedule_trip,
            "car_cancel_scheduled_trip": self.vehicle.cancel_scheduled_trip,
        }

    async def invoke(self, name: str, **kwargs: Any) -> Any:
        """Run the operation called *name* with keyword arguments.

        Raises
        ------
        UnknownOperationError
            If no operation is registered under *name*.
        """
        operation = self.operations().get(name)
        if operation is None:
            raise UnknownOperationError(name)
        _logger.debug("Invoking %s", name)
        return await operation(**kwargs)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def rooms_resource(self) -> str:
        """JSON list of room names."""
        return rooms_resource(self._registry)

    def locations_resource(self) -> str:
        """JSON map of known places."""
        return locations_resource(self._config.known_places)
