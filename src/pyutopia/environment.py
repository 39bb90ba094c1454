"""Static environment: rooms, known places, and seasonal ambient values.

Rooms are resolved once into a :class:`RoomRegistry`, a fixed arena
indexed by small integer ids with a case-insensitive name index.  Every
device kind builds its per-room state as a list over the same registry,
so all kinds share one room universe.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyutopia._constants import (
    DEFAULT_KNOWN_PLACES,
    DEFAULT_ROOMS,
    MONTHLY_HUMIDITY_PCT,
    MONTHLY_TEMPERATURES_C,
)


class Room(BaseModel):
    """A room of the home with a fixed floor area."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str
    area: float = Field(gt=0, description="Floor area in m²")

    @field_validator("name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("room name must be non-empty")
        return value


class KnownPlace(BaseModel):
    """A named driving destination with fixed coordinates."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    distance_km: float = Field(default=0.0, ge=0.0, description="Nominal distance from home")


def default_rooms() -> tuple[Room, ...]:
    return tuple(Room(name=name, area=area) for name, area in DEFAULT_ROOMS)


def default_known_places() -> tuple[KnownPlace, ...]:
    return tuple(
        KnownPlace(name=name, distance_km=distance, latitude=lat, longitude=lon)
        for name, distance, lat, lon in DEFAULT_KNOWN_PLACES
    )


class RoomRegistry:
    """Immutable room arena with case-insensitive lookup.

    Parameters
    ----------
    rooms : Iterable[Room]
        Rooms in declaration order.  Ids are positions in that order.
    """

    def __init__(self, rooms: Iterable[Room]) -> None:
        self._rooms: tuple[Room, ...] = tuple(rooms)
        self._index: dict[str, int] = {}
        for room_id, room in enumerate(self._rooms):
            key = room.name.casefold()
            if key in self._index:
                raise ValueError(f"duplicate room name: {room.name}")
            self._index[key] = room_id

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def resolve(self, name: str) -> int | None:
        """Return the room id for *name* (any casing), or ``None``."""
        if not isinstance(name, str):
            return None
        return self._index.get(name.strip().casefold())

    def room(self, room_id: int) -> Room:
        return self._rooms[room_id]

    def name(self, room_id: int) -> str:
        return self._rooms[room_id].name

    def area(self, room_id: int) -> float:
        return self._rooms[room_id].area

    def ids(self) -> range:
        return range(len(self._rooms))

    def names(self) -> list[str]:
        return [room.name for room in self._rooms]


def monthly_value(table: Sequence[float], now: datetime) -> float:
    """Look up a 12-entry monthly table by calendar month (no interpolation)."""
    if len(table) != 12:
        raise ValueError(f"monthly table must have 12 entries, got {len(table)}")
    return table[now.month - 1]


def seasonal_temperature(now: datetime) -> float:
    return monthly_value(MONTHLY_TEMPERATURES_C, now)


def seasonal_humidity(now: datetime) -> float:
    return monthly_value(MONTHLY_HUMIDITY_PCT, now)


def rooms_resource(registry: RoomRegistry) -> str:
    """JSON array of room names."""
    return json.dumps(registry.names())


def locations_resource(places: Iterable[KnownPlace]) -> str:
    """JSON object of known places keyed by name."""
    payload = {
        place.name: {
            "DistanceKm": place.distance_km,
            "Latitude": place.latitude,
            "Longitude": place.longitude,
        }
        for place in places
    }
    return json.dumps(payload)
