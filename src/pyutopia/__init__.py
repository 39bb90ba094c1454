"""pyutopia - Async in-memory simulator for the Utopia smart home and autonomous EV."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyutopia")
except PackageNotFoundError:
    __version__ = "0+local"
from pyutopia.config import UtopiaConfig
from pyutopia.environment import KnownPlace, Room, RoomRegistry
from pyutopia.exceptions import (
    UnknownOperationError,
    UtopiaClosedError,
    UtopiaConfigError,
    UtopiaError,
)
from pyutopia.home import UtopiaHome
from pyutopia.models import (
    AirQuality,
    AirQualityStatus,
    AudioSourceType,
    AudioState,
    AudioStatus,
    BedStatus,
    BlindsStatus,
    CarPhase,
    HumidityMode,
    HumidityStatus,
    OperationMode,
    ScheduledTrip,
    ThermostatStatus,
    VacuumPhase,
    VacuumStatus,
    VehicleStatus,
)

__all__ = [
    "__version__",
    "AirQuality",
    "AirQualityStatus",
    "AudioSourceType",
    "AudioState",
    "AudioStatus",
    "BedStatus",
    "BlindsStatus",
    "CarPhase",
    "HumidityMode",
    "HumidityStatus",
    "KnownPlace",
    "OperationMode",
    "Room",
    "RoomRegistry",
    "ScheduledTrip",
    "ThermostatStatus",
    "UnknownOperationError",
    "UtopiaClosedError",
    "UtopiaConfig",
    "UtopiaConfigError",
    "UtopiaError",
    "UtopiaHome",
    "VacuumPhase",
    "VacuumStatus",
    "VehicleStatus",
]
