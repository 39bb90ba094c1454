"""Refrigerator with a fixed temperature and an internal camera."""

from __future__ import annotations

import logging
import random
from importlib import resources

from pyutopia._constants import REFRIGERATOR_PICTURES, REFRIGERATOR_TEMPERATURE_C
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import Clock, DeviceSimulator, utcnow
from pyutopia.environment import RoomRegistry

_logger = logging.getLogger(__name__)


def load_picture(filename: str) -> bytes:
    """Read one of the bundled shelf pictures from ``pyutopia.resources``."""
    return resources.files("pyutopia.resources").joinpath(filename).read_bytes()


class RefrigeratorSimulator(DeviceSimulator):
    """The camera returns one of the bundled pictures at random."""

    kind = "refrigerator"

    def __init__(
        self,
        registry: RoomRegistry,
        config: UtopiaConfig,
        *,
        clock: Clock = utcnow,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(registry, config, clock=clock)
        self._rng = rng or random.Random()

    async def get_temperature(self) -> float:
        return REFRIGERATOR_TEMPERATURE_C

    async def get_internal_picture(self) -> bytes:
        """Gets the internal picture of the refrigerator, for analysing stock levels."""
        filename = self._rng.choice(REFRIGERATOR_PICTURES)
        _logger.debug("Refrigerator picture: %s", filename)
        return load_picture(filename)
