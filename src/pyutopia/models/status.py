"""Read-only status snapshots.

Simulators keep their live state in plain mutable records guarded by a
lock; ``snapshot()`` copies it out into these frozen models so callers
never observe a half-applied update.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pyutopia.models.enums import (
    AirQuality,
    AudioSourceType,
    AudioState,
    CarPhase,
    HumidityMode,
    OperationMode,
    VacuumPhase,
)


class StatusModel(BaseModel):
    """Base for all snapshots."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class ThermostatStatus(StatusModel):
    room: str
    powered: bool
    mode: OperationMode
    temperature: float
    setpoint: float | None = None
    seasonal_temperature: float


class HumidityStatus(StatusModel):
    room: str
    mode: HumidityMode
    humidity: float
    setpoint: float | None = None
    seasonal_humidity: float


class AirQualityStatus(StatusModel):
    room: str
    powered: bool
    mode: OperationMode
    quality: AirQuality
    recovery_minutes: float = Field(default=0.0, description="Elapsed minutes toward the next level")


class BlindsStatus(StatusModel):
    room: str
    percent: int
    target_percent: int | None = Field(default=None, description="Pending gradual-transition target")


class VacuumStatus(StatusModel):
    phase: VacuumPhase
    room: str | None = None
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    estimated_minutes: int = 0


class BedStatus(StatusModel):
    active: bool
    temperature: float
    target_temperature: float
    started_at: datetime | None = None
    session_hours: int
    last_sleep_quality: float | None = None


class ScheduledTrip(StatusModel):
    destination: str
    due_at: datetime


class VehicleStatus(StatusModel):
    phase: CarPhase
    location: str
    latitude: float
    longitude: float
    battery: float = Field(ge=0.0, le=100.0)
    destination: str | None = None
    scheduled_trip: ScheduledTrip | None = None


class AudioStatus(StatusModel):
    room: str
    state: AudioState
    source_type: AudioSourceType | None = None
    source_name: str | None = None
    volume: int = Field(ge=0, le=100)
