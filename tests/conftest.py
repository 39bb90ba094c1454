from __future__ import annotations

import random

import pytest
from _helpers import FakeClock

from pyutopia.config import UtopiaConfig
from pyutopia.environment import RoomRegistry


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> UtopiaConfig:
    # One simulated minute per wall millisecond; periodic ticks are driven by hand.
    return UtopiaConfig(minute_seconds=0.001, autostart_ticks=False)


@pytest.fixture
def registry(config: UtopiaConfig) -> RoomRegistry:
    return RoomRegistry(config.rooms)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
