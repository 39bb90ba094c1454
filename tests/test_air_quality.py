from __future__ import annotations

import pytest
from _helpers import FakeClock

from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import ROOM_NOT_FOUND
from pyutopia.devices.air_quality import AirQualitySimulator, recovery_minutes_needed
from pyutopia.environment import RoomRegistry
from pyutopia.models.enums import AirQuality


@pytest.fixture
def air(registry: RoomRegistry, config: UtopiaConfig, clock: FakeClock) -> AirQualitySimulator:
    return AirQualitySimulator(registry, config, clock=clock)


async def _quality(sim: AirQualitySimulator, room: str) -> AirQuality:
    snapshot = await sim.snapshot(room)
    assert snapshot is not None
    return snapshot.quality


def test_worse_levels_need_longer_recovery() -> None:
    assert recovery_minutes_needed(AirQuality.UNHEALTHY) > recovery_minutes_needed(AirQuality.MODERATE) > 0
    assert recovery_minutes_needed(AirQuality.GOOD) == 0


@pytest.mark.asyncio
async def test_initial_status(air: AirQualitySimulator) -> None:
    assert await air.get_status("kitchen") == "Air quality in Kitchen is Good. Unit is Off in Normal mode."


@pytest.mark.asyncio
async def test_degrade_rejects_good(air: AirQualitySimulator) -> None:
    assert await air.degrade("Kitchen", "Good") == "Cannot degrade to Good quality"
    assert await air.degrade("Kitchen", "VeryUnhealthy") == "Air quality in Kitchen is now Unhealthy."


@pytest.mark.asyncio
async def test_recovery_only_while_powered(air: AirQualitySimulator) -> None:
    await air.degrade("Kitchen", AirQuality.MODERATE)

    for _ in range(200):
        await air.tick()
    assert await _quality(air, "Kitchen") is AirQuality.MODERATE

    await air.set_power("Kitchen", True)
    for _ in range(119):
        await air.tick()
    assert await _quality(air, "Kitchen") is AirQuality.MODERATE
    await air.tick()
    assert await _quality(air, "Kitchen") is AirQuality.GOOD


@pytest.mark.asyncio
async def test_unhealthy_recovers_in_stages(air: AirQualitySimulator) -> None:
    await air.degrade("Bedroom", AirQuality.UNHEALTHY)
    await air.set_power("Bedroom", True)

    for _ in range(300):
        await air.tick()
    assert await _quality(air, "Bedroom") is AirQuality.MODERATE

    for _ in range(120):
        await air.tick()
    assert await _quality(air, "Bedroom") is AirQuality.GOOD

    await air.tick()
    snapshot = await air.snapshot("Bedroom")
    assert snapshot is not None
    assert snapshot.recovery_minutes == 0.0


@pytest.mark.asyncio
async def test_quiet_mode_takes_twice_as_long(air: AirQualitySimulator) -> None:
    await air.degrade("Hallway", AirQuality.MODERATE)
    await air.set_power("Hallway", True)
    assert await air.set_mode("Hallway", "Quiet") == "Air quality control in Hallway is now in Quiet mode."

    for _ in range(120):
        await air.tick()
    assert await _quality(air, "Hallway") is AirQuality.MODERATE

    for _ in range(120):
        await air.tick()
    assert await _quality(air, "Hallway") is AirQuality.GOOD


@pytest.mark.asyncio
async def test_toggles_are_idempotent(air: AirQualitySimulator) -> None:
    assert await air.set_power("Kitchen", False) == "Air quality control in Kitchen is already off."
    assert await air.set_power("Kitchen", True) == "Air quality control in Kitchen is now on."
    assert await air.set_mode("Kitchen", "normal") == "Air quality control in Kitchen is already in Normal mode."


@pytest.mark.asyncio
async def test_unknown_room(air: AirQualitySimulator) -> None:
    assert await air.get_status("Garage") == ROOM_NOT_FOUND
    assert await air.degrade("Garage", "Moderate") == ROOM_NOT_FOUND
