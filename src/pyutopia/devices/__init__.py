"""Device simulators, one class per device kind."""

from pyutopia.devices._base import ROOM_NOT_FOUND, DeviceSimulator
from pyutopia.devices.air_quality import AirQualitySimulator
from pyutopia.devices.audio import AudioSimulator
from pyutopia.devices.bed import BedSimulator
from pyutopia.devices.blinds import BlindsSimulator
from pyutopia.devices.door_lock import DoorLockSimulator
from pyutopia.devices.humidity import HumiditySimulator
from pyutopia.devices.lighting import LightingSimulator
from pyutopia.devices.refrigerator import RefrigeratorSimulator
from pyutopia.devices.thermostat import ThermostatSimulator
from pyutopia.devices.vacuum import VacuumSimulator
from pyutopia.devices.vehicle import VehicleSimulator

__all__ = [
    "ROOM_NOT_FOUND",
    "AirQualitySimulator",
    "AudioSimulator",
    "BedSimulator",
    "BlindsSimulator",
    "DeviceSimulator",
    "DoorLockSimulator",
    "HumiditySimulator",
    "LightingSimulator",
    "RefrigeratorSimulator",
    "ThermostatSimulator",
    "VacuumSimulator",
    "VehicleSimulator",
]
