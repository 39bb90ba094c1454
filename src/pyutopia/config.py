"""Simulation configuration for pyutopia."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyutopia.environment import KnownPlace, Room, default_known_places, default_rooms
from pyutopia.exceptions import UtopiaConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class UtopiaConfig:
    """Simulation configuration.

    Parameters
    ----------
    minute_seconds : float
        Wall-clock seconds per simulated minute.  Every tick interval and
        timer duration is expressed in simulated minutes and scaled by
        this value.  Defaults to real time (60 seconds).
    autostart_ticks : bool
        Whether :meth:`UtopiaHome.start` arms the periodic simulation
        ticks.  Disable to drive ticks manually (e.g. in tests).
    trip_poll_minutes : float
        Interval of the scheduled-trip poller.
    vehicle_speed_kmh : float
        Fixed autonomous driving speed used for trip-time estimates.
    charge_rate_per_minute : float
        Battery percent added per charging tick.
    initial_battery : float
        Battery percent at startup (0-100).
    vacuum_minutes_per_sqm : float
        Cleaning time per square metre of floor area.
    rooms : tuple[Room, ...]
        Static room layout.
    known_places : tuple[KnownPlace, ...]
        Named driving destinations.  Must contain ``"Home"``.
    """

    minute_seconds: float = 60.0
    autostart_ticks: bool = True
    trip_poll_minutes: float = 1.0
    vehicle_speed_kmh: float = 50.0
    charge_rate_per_minute: float = 1.0
    initial_battery: float = 80.0
    vacuum_minutes_per_sqm: float = 1.5
    rooms: tuple[Room, ...] = dataclasses.field(default_factory=default_rooms)
    known_places: tuple[KnownPlace, ...] = dataclasses.field(default_factory=default_known_places)

    def __post_init__(self) -> None:
        for name in (
            "minute_seconds",
            "trip_poll_minutes",
            "vehicle_speed_kmh",
            "charge_rate_per_minute",
            "vacuum_minutes_per_sqm",
        ):
            if getattr(self, name) <= 0:
                raise UtopiaConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0.0 <= self.initial_battery <= 100.0:
            raise UtopiaConfigError(f"initial_battery must be between 0 and 100, got {self.initial_battery}")
        if not self.rooms:
            raise UtopiaConfigError("at least one room is required")
        if not any(place.name.casefold() == "home" for place in self.known_places):
            raise UtopiaConfigError("known_places must include 'Home'")

    @classmethod
    def from_env(cls, **overrides: Any) -> UtopiaConfig:
        """Create configuration from environment variables.

        Reads optional ``UTOPIA_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        UtopiaConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "UTOPIA_MINUTE_SECONDS": "minute_seconds",
            "UTOPIA_TRIP_POLL_MINUTES": "trip_poll_minutes",
            "UTOPIA_VEHICLE_SPEED_KMH": "vehicle_speed_kmh",
            "UTOPIA_CHARGE_RATE_PER_MINUTE": "charge_rate_per_minute",
            "UTOPIA_INITIAL_BATTERY": "initial_battery",
            "UTOPIA_VACUUM_MINUTES_PER_SQM": "vacuum_minutes_per_sqm",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise UtopiaConfigError(f"{env_key} must be numeric, got {val!r}") from exc

        if "autostart_ticks" not in overrides:
            config_kwargs["autostart_ticks"] = _env_bool(env.get("UTOPIA_AUTOSTART_TICKS"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
