from __future__ import annotations

import random

import pytest
from _helpers import FakeClock, close, wait_for

from pyutopia.config import UtopiaConfig
from pyutopia.devices.bed import BedSimulator
from pyutopia.environment import RoomRegistry
from pyutopia.exceptions import UtopiaClosedError


@pytest.fixture
def bed(registry: RoomRegistry, config: UtopiaConfig, clock: FakeClock, rng: random.Random) -> BedSimulator:
    return BedSimulator(registry, config, clock=clock, rng=rng)


@pytest.fixture
def slow_bed(registry: RoomRegistry, clock: FakeClock, rng: random.Random) -> BedSimulator:
    return BedSimulator(registry, UtopiaConfig(minute_seconds=1.0), clock=clock, rng=rng)


@pytest.mark.asyncio
async def test_initial_state(bed: BedSimulator) -> None:
    assert await bed.get_status() == "Climate control OFF, Last setpoint: 18.0°C, Current: 18.0°C"
    assert await bed.get_last_sleep_quality() == "No sleep session recorded yet."
    assert await bed.end_sleep_session() == "No sleep session is currently active."


@pytest.mark.asyncio
async def test_second_session_rejected(slow_bed: BedSimulator, clock: FakeClock) -> None:
    assert await slow_bed.set_for_sleep(21.5) == "Bed set for sleep: Target temperature 21.5°C for 8 hours."
    assert await slow_bed.set_for_sleep(19) == (
        "Bed is already set for sleep. Please wait for the current session to finish or stop it first."
    )

    clock.advance(hours=2)
    status = await slow_bed.get_status()
    assert status.startswith("Climate control ON, Target: 21.5°C, Current: ")
    assert status.endswith("Time left: 6.0h")
    await close(slow_bed)


@pytest.mark.asyncio
async def test_end_session_records_quality_once(slow_bed: BedSimulator) -> None:
    expected = random.Random(1234).uniform(60.0, 100.0)
    await slow_bed.set_for_sleep(20, hours=6)

    assert await slow_bed.end_sleep_session() == (
        "Sleep session ended. Climate control is now off. Sleep quality has been recorded."
    )
    assert slow_bed.tasks() == []
    recorded = await slow_bed.get_last_sleep_quality()
    assert recorded == f"Last sleep quality: {expected:.1f}/100"

    assert await slow_bed.end_sleep_session() == "No sleep session is currently active."
    assert await slow_bed.get_last_sleep_quality() == recorded


@pytest.mark.asyncio
async def test_session_expires_and_climate_converges(bed: BedSimulator) -> None:
    await bed.set_for_sleep(19.0, hours=1)

    async def finished() -> bool:
        return not (await bed.snapshot()).active

    await wait_for(finished)
    snapshot = await bed.snapshot()
    assert snapshot.temperature == 19.0
    assert snapshot.last_sleep_quality is not None
    assert 60.0 <= snapshot.last_sleep_quality < 100.0
    assert bed.tasks() == []
    await close(bed)


@pytest.mark.asyncio
async def test_set_for_sleep_after_shutdown_raises(bed: BedSimulator) -> None:
    bed.shutdown()

    with pytest.raises(UtopiaClosedError):
        await bed.set_for_sleep(20)
