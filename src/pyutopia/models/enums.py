"""State enums shared by the device simulators.

Values are the display strings used in status messages, so
``f"{mode}"`` renders exactly what callers see.
"""

from __future__ import annotations

import enum


class OperationMode(enum.StrEnum):
    """Fan/compressor mode.  Quiet operation halves the effective rate."""

    NORMAL = "Normal"
    QUIET = "Quiet"

    @property
    def rate_factor(self) -> float:
        return 0.5 if self is OperationMode.QUIET else 1.0

    @classmethod
    def parse(cls, value: OperationMode | str) -> OperationMode:
        """Case-insensitive lookup by value or member name."""
        if isinstance(value, OperationMode):
            return value
        text = str(value).strip().casefold()
        for member in cls:
            if text in (member.value.casefold(), member.name.casefold()):
                return member
        raise ValueError(f"unknown operation mode: {value!r}")


class HumidityMode(enum.StrEnum):
    OFF = "Off"
    HUMIDIFYING = "Humidifying"
    DEHUMIDIFYING = "Dehumidifying"
    PAUSED = "Paused"


class AirQuality(enum.StrEnum):
    """Staged air quality, best first."""

    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY = "Unhealthy"

    @property
    def improved(self) -> AirQuality:
        """The next better level (``GOOD`` stays ``GOOD``)."""
        if self is AirQuality.UNHEALTHY:
            return AirQuality.MODERATE
        return AirQuality.GOOD

    @classmethod
    def parse(cls, value: AirQuality | str) -> AirQuality:
        if isinstance(value, AirQuality):
            return value
        text = str(value).strip().casefold().replace(" ", "")
        if text == "veryunhealthy":
            return AirQuality.UNHEALTHY
        for member in cls:
            if text in (member.value.casefold(), member.name.casefold()):
                return member
        raise ValueError(f"unknown air quality level: {value!r}")


class VacuumPhase(enum.StrEnum):
    IDLE = "Idle"
    RUNNING = "Running"


class CarPhase(enum.StrEnum):
    PARKED = "Parked"
    DRIVING = "Driving"
    CHARGING = "Charging"


class AudioState(enum.StrEnum):
    STOPPED = "Stopped"
    PLAYING = "Playing"


class AudioSourceType(enum.StrEnum):
    SONG = "Song"
    PLAYLIST = "Playlist"
