"""Geodesic helpers for the vehicle simulator."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pyutopia._constants import CUSTOM_LOCATION_PREFIX, EARTH_RADIUS_KM


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


def haversine_km(origin: Coordinates, target: Coordinates) -> float:
    """Great-circle distance in kilometres on a spherical Earth."""
    d_lat = math.radians(target.latitude - origin.latitude)
    d_lon = math.radians(target.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude)) * math.cos(math.radians(target.latitude)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def planar_distance_deg(a: Coordinates, b: Coordinates) -> float:
    """Euclidean distance in degree space; only used for nearest-place snapping."""
    return math.hypot(a.latitude - b.latitude, a.longitude - b.longitude)


def parse_coordinates(text: str) -> Coordinates | None:
    """Parse ``"lat,lon"`` or ``"Custom:lat,lon"``; ``None`` when malformed."""
    value = text.strip()
    if value.startswith(CUSTOM_LOCATION_PREFIX):
        value = value[len(CUSTOM_LOCATION_PREFIX) :]
    parts = value.split(",")
    if len(parts) != 2:
        return None
    try:
        latitude = float(parts[0])
        longitude = float(parts[1])
    except ValueError:
        return None
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        return None
    return Coordinates(latitude, longitude)
