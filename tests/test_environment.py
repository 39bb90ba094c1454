from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pyutopia.environment import (
    Room,
    RoomRegistry,
    default_known_places,
    default_rooms,
    locations_resource,
    monthly_value,
    rooms_resource,
    seasonal_humidity,
    seasonal_temperature,
)


def test_registry_resolves_names_case_insensitively() -> None:
    registry = RoomRegistry(default_rooms())

    assert registry.resolve("living room") == registry.resolve("LIVING ROOM") == 2
    assert registry.resolve("  Kitchen ") == 0
    assert registry.resolve("Garage") is None
    assert registry.name(2) == "Living Room"
    assert registry.area(0) == 9.3
    assert list(registry.ids()) == [0, 1, 2, 3, 4]
    assert len(registry) == 5


def test_registry_rejects_duplicate_names() -> None:
    with pytest.raises(ValueError, match="duplicate"):
        RoomRegistry([Room(name="Den", area=10), Room(name="den", area=12)])


def test_room_area_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Room(name="Closet", area=0)


def test_monthly_tables_indexed_by_calendar_month() -> None:
    january = datetime(2026, 1, 31, 23, 59, tzinfo=UTC)
    july = datetime(2026, 7, 1, tzinfo=UTC)

    assert seasonal_temperature(january) == 6.0
    assert seasonal_temperature(july) == 19.4
    assert seasonal_humidity(january) == 81.0
    assert seasonal_humidity(july) == 68.0


def test_monthly_value_requires_twelve_entries() -> None:
    with pytest.raises(ValueError):
        monthly_value([1.0, 2.0], datetime(2026, 1, 1, tzinfo=UTC))


def test_rooms_resource_lists_room_names() -> None:
    payload = json.loads(rooms_resource(RoomRegistry(default_rooms())))

    assert payload == ["Kitchen", "Bedroom", "Living Room", "Bathroom", "Hallway"]


def test_locations_resource_keyed_by_place() -> None:
    payload = json.loads(locations_resource(default_known_places()))

    assert payload["Home"] == {"DistanceKm": 0.0, "Latitude": 51.5034, "Longitude": -0.1276}
    assert set(payload) == {"Home", "Office", "Mall", "Airport", "Supermarket", "Gym"}
