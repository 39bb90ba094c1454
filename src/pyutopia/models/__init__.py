"""State enums and status snapshot models."""

from pyutopia.models.enums import (
    AirQuality,
    AudioSourceType,
    AudioState,
    CarPhase,
    HumidityMode,
    OperationMode,
    VacuumPhase,
)
from pyutopia.models.status import (
    AirQualityStatus,
    AudioStatus,
    BedStatus,
    BlindsStatus,
    HumidityStatus,
    ScheduledTrip,
    StatusModel,
    ThermostatStatus,
    VacuumStatus,
    VehicleStatus,
)

__all__ = [
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
    "OperationMode",
    "ScheduledTrip",
    "StatusModel",
    "ThermostatStatus",
    "VacuumPhase",
    "VacuumStatus",
    "VehicleStatus",
]
