from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest
from _helpers import FakeClock, close, wait_for

from pyutopia._geo import Coordinates, haversine_km
from pyutopia.config import UtopiaConfig
from pyutopia.devices.vehicle import VehicleSimulator
from pyutopia.environment import RoomRegistry
from pyutopia.models.enums import CarPhase

HOME = Coordinates(51.5034, -0.1276)
OFFICE = Coordinates(51.4995, -0.1248)
AIRPORT = Coordinates(51.4700, -0.4543)


def _vehicle(registry: RoomRegistry, clock: FakeClock, **overrides: float) -> VehicleSimulator:
    return VehicleSimulator(registry, UtopiaConfig(**overrides), clock=clock)  # type: ignore[arg-type]


@pytest.fixture
def car(registry: RoomRegistry, config: UtopiaConfig, clock: FakeClock) -> VehicleSimulator:
    return VehicleSimulator(registry, config, clock=clock)


@pytest.fixture
def slow_car(registry: RoomRegistry, clock: FakeClock) -> VehicleSimulator:
    return _vehicle(registry, clock, minute_seconds=1.0)


@pytest.mark.asyncio
async def test_initial_status_and_info(car: VehicleSimulator) -> None:
    assert await car.get_status() == "Car is Parked. Location: Home. Battery: 80.0%."
    assert await car.get_info() == (
        "Brand: ACMECar, Model: Autonomous EV, State: Parked, Location: Home, Battery: 80.0%"
    )


@pytest.mark.asyncio
async def test_drive_to_current_location_is_rejected(car: VehicleSimulator) -> None:
    assert await car.drive_to(HOME.latitude, HOME.longitude) == "Car is already at Home."
    assert await car.drive_to(51.5040, -0.1280) == "Car is already at Home."
    assert car.tasks() == []


@pytest.mark.asyncio
async def test_drive_reports_snapped_destination_and_estimate(slow_car: VehicleSimulator) -> None:
    distance = haversine_km(HOME, OFFICE)
    minutes = distance / 50.0 * 60.0

    message = await slow_car.drive_to(OFFICE.latitude, OFFICE.longitude)

    assert message == f"Driving to Office (lat: 51.4995, lon: -0.1248). Estimated time: {minutes:.1f} minutes."
    assert await slow_car.get_status() == "Car is Driving. Location: Home. Battery: 80.0%. Driving to Office."
    assert await slow_car.drive_to(AIRPORT.latitude, AIRPORT.longitude) == "Car is already driving to Office."
    assert await slow_car.start_charging() == "Cannot charge while driving."
    await close(slow_car)


@pytest.mark.asyncio
async def test_drive_completes_and_deducts_battery(car: VehicleSimulator) -> None:
    distance = haversine_km(HOME, OFFICE)
    await car.drive_to(OFFICE.latitude, OFFICE.longitude)

    async def parked() -> bool:
        return (await car.snapshot()).phase is CarPhase.PARKED

    await wait_for(parked)
    snapshot = await car.snapshot()
    assert snapshot.location == "Office"
    assert snapshot.battery == pytest.approx(80.0 - distance)
    assert snapshot.destination is None
    await close(car)


@pytest.mark.asyncio
async def test_drive_to_custom_coordinates(car: VehicleSimulator) -> None:
    message = await car.drive_to(51.6, -0.2)
    assert message.startswith("Driving to (51.6, -0.2) (lat: 51.6, lon: -0.2). Estimated time: ")

    async def parked() -> bool:
        return (await car.snapshot()).phase is CarPhase.PARKED

    await wait_for(parked)
    snapshot = await car.snapshot()
    assert snapshot.location == "Custom:51.6,-0.2"
    assert (await car.get_status()).startswith("Car is Parked. Location: (51.6,-0.2). ")
    assert await car.drive_to(51.6, -0.2) == "Car is already at (51.6, -0.2)."
    await close(car)


@pytest.mark.asyncio
async def test_insufficient_battery(registry: RoomRegistry, clock: FakeClock) -> None:
    car = _vehicle(registry, clock, initial_battery=1.0)
    required = haversine_km(HOME, AIRPORT)

    message = await car.drive_to(AIRPORT.latitude, AIRPORT.longitude)

    assert message == f"Not enough battery for the trip. Required: {required:.1f}%, Available: 1.0%"
    assert (await car.snapshot()).phase is CarPhase.PARKED
    assert car.tasks() == []


@pytest.mark.asyncio
async def test_stop_aborts_trip_in_place(slow_car: VehicleSimulator) -> None:
    assert await slow_car.stop() == "Car is already stopped."
    await slow_car.drive_to(OFFICE.latitude, OFFICE.longitude)

    assert await slow_car.stop() == "Car stopped and parked."
    snapshot = await slow_car.snapshot()
    assert snapshot.phase is CarPhase.PARKED
    assert snapshot.location == "Home"
    assert snapshot.battery == 80.0
    assert slow_car.tasks() == []


@pytest.mark.asyncio
async def test_charging_fills_battery_then_parks(registry: RoomRegistry, clock: FakeClock) -> None:
    car = _vehicle(registry, clock, minute_seconds=0.001, initial_battery=95.0)

    assert await car.start_charging() == "Charging started."
    assert await car.start_charging() == "Already charging."
    assert await car.drive_to(OFFICE.latitude, OFFICE.longitude) == "Cannot drive while charging."
    assert (await car.get_status()).endswith("Charging.")

    async def full() -> bool:
        return (await car.snapshot()).phase is CarPhase.PARKED

    await wait_for(full)
    assert (await car.snapshot()).battery == 100.0
    assert await car.start_charging() == "Battery is already full."
    await close(car)


@pytest.mark.asyncio
async def test_stop_charging_reports_battery(slow_car: VehicleSimulator) -> None:
    assert await slow_car.stop_charging() == "Car is not charging."
    await slow_car.start_charging()

    assert await slow_car.stop_charging() == "Charging stopped. Battery at 80.0%."
    assert (await slow_car.snapshot()).phase is CarPhase.PARKED
    assert slow_car.tasks() == []


@pytest.mark.asyncio
async def test_schedule_and_cancel_trip(slow_car: VehicleSimulator, clock: FakeClock) -> None:
    due = clock.now + timedelta(minutes=30)

    assert await slow_car.schedule_trip("Narnia", due) == "Unknown destination: Narnia."
    assert await slow_car.schedule_trip("office", due) == "Trip scheduled to Office at 2026-01-15 10:30:00."
    assert await slow_car.schedule_trip("Gym", due) == (
        "A trip is already scheduled to Office at 2026-01-15 10:30:00."
    )
    status = await slow_car.get_status()
    assert status.endswith("Trip scheduled to Office at 2026-01-15 10:30:00.")

    assert await slow_car.cancel_scheduled_trip() == "Scheduled trip cancelled."
    assert await slow_car.cancel_scheduled_trip() == "No trip is currently scheduled."
    assert (await slow_car.snapshot()).scheduled_trip is None
    await close(slow_car)


@pytest.mark.asyncio
async def test_schedule_accepts_custom_coordinates(slow_car: VehicleSimulator, clock: FakeClock) -> None:
    message = await slow_car.schedule_trip("Custom:51.6,-0.2", (clock.now + timedelta(hours=1)).replace(tzinfo=None))

    assert message == "Trip scheduled to Custom:51.6,-0.2 at 2026-01-15 11:00:00."
    trip = (await slow_car.snapshot()).scheduled_trip
    assert trip is not None
    assert trip.due_at == clock.now + timedelta(hours=1)
    await close(slow_car)


@pytest.mark.asyncio
async def test_poller_drives_when_trip_is_due(car: VehicleSimulator, clock: FakeClock) -> None:
    car.start()
    await car.schedule_trip("Office", clock.now + timedelta(minutes=30))

    await asyncio.sleep(0.02)
    assert (await car.snapshot()).location == "Home"

    clock.advance(minutes=31)

    async def arrived() -> bool:
        return (await car.snapshot()).location == "Office"

    await wait_for(arrived)
    assert (await car.snapshot()).scheduled_trip is None
    await close(car)


@pytest.mark.asyncio
async def test_poller_drops_due_trip_when_not_parked(registry: RoomRegistry, clock: FakeClock) -> None:
    car = _vehicle(registry, clock, minute_seconds=0.001, charge_rate_per_minute=0.001)
    await car.start_charging()
    await car.schedule_trip("Office", clock.now)

    async def dropped() -> bool:
        return (await car.snapshot()).scheduled_trip is None

    await wait_for(dropped)
    snapshot = await car.snapshot()
    assert snapshot.phase is CarPhase.CHARGING
    assert snapshot.location == "Home"
    await close(car)


@pytest.mark.asyncio
async def test_status_while_driving_to_custom_coordinates(slow_car: VehicleSimulator) -> None:
    await slow_car.drive_to(51.6, -0.2)

    assert await slow_car.get_status() == "Car is Driving. Location: Home. Battery: 80.0%. Driving to Custom:51.6,-0.2."
    assert await slow_car.drive_to(OFFICE.latitude, OFFICE.longitude) == (
        "Car is already driving to Custom:51.6,-0.2."
    )
    await close(slow_car)
