"""Autonomous electric vehicle: drive, charge and scheduled trips.

The car is a three-state machine (``Parked``, ``Driving``, ``Charging``).
Driving and charging each run in their own :class:`TimerSlot`; a third
slot holds the trip poller, which fires a pending scheduled trip once it
is due and the car is parked.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from pyutopia._constants import (
    CUSTOM_LOCATION_PREFIX,
    HOME_PLACE,
    MAX_BATTERY,
    PLACE_SNAP_THRESHOLD_DEG,
    VEHICLE_BRAND,
    VEHICLE_MODEL,
)
from pyutopia._geo import Coordinates, haversine_km, parse_coordinates, planar_distance_deg
from pyutopia._timers import TimerSlot, delayed, ticker
from pyutopia.config import UtopiaConfig
from pyutopia.devices._base import Clock, DeviceSimulator, as_utc, utcnow
from pyutopia.environment import KnownPlace, RoomRegistry
from pyutopia.models.enums import CarPhase
from pyutopia.models.status import ScheduledTrip, VehicleStatus

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    """Where the car is or is heading; ``place`` is set for known places."""

    coordinates: Coordinates
    place: str | None = None

    @property
    def label(self) -> str:
        if self.place is not None:
            return self.place
        return f"{CUSTOM_LOCATION_PREFIX}{self.coordinates}"

    @property
    def display(self) -> str:
        if self.place is not None:
            return self.place
        return f"({self.coordinates.latitude}, {self.coordinates.longitude})"

    @property
    def compact(self) -> str:
        if self.place is not None:
            return self.place
        return f"({self.coordinates})"


@dataclass(frozen=True)
class _PendingTrip:
    destination: Location
    due_at: datetime


def _fmt_due(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


class VehicleSimulator(DeviceSimulator):
    """The household's autonomous EV."""

    kind = "vehicle"

    def __init__(self, registry: RoomRegistry, config: UtopiaConfig, *, clock: Clock = utcnow) -> None:
        super().__init__(registry, config, clock=clock)
        self._places: dict[str, KnownPlace] = {place.name.casefold(): place for place in config.known_places}
        home = self._places[HOME_PLACE.casefold()]
        self._phase = CarPhase.PARKED
        self._location = Location(Coordinates(home.latitude, home.longitude), home.name)
        self._battery = float(config.initial_battery)
        self._destination: Location | None = None
        self._trip: _PendingTrip | None = None
        self._drive = TimerSlot("vehicle-drive")
        self._charge = TimerSlot("vehicle-charge")
        self._poller = TimerSlot("vehicle-trip-poller")

    def _timer_slots(self) -> Iterator[TimerSlot]:
        yield from super()._timer_slots()
        yield self._drive
        yield self._charge
        yield self._poller

    def start(self) -> None:
        """Arm the trip poller."""
        super().start()
        self.start_trip_poller()

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    def _known_location(self, place: KnownPlace) -> Location:
        return Location(Coordinates(place.latitude, place.longitude), place.name)

    def snap_to_place(self, target: Coordinates) -> Location:
        """Label *target* with the nearest known place within the snap threshold."""
        nearest: KnownPlace | None = None
        best = float("inf")
        for place in self._places.values():
            distance = planar_distance_deg(Coordinates(place.latitude, place.longitude), target)
            if distance < best:
                nearest, best = place, distance
        if nearest is not None and best <= PLACE_SNAP_THRESHOLD_DEG:
            return self._known_location(nearest)
        return Location(target)

    def resolve_destination(self, destination: str) -> Location | None:
        """Known place name (any case), ``"lat,lon"`` or ``"Custom:lat,lon"``."""
        place = self._places.get(destination.strip().casefold())
        if place is not None:
            return self._known_location(place)
        coordinates = parse_coordinates(destination)
        if coordinates is None:
            return None
        return Location(coordinates)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_status(self) -> str:
        """Phase, location, battery, and any trip in progress or scheduled."""
        async with self._lock:
            parts = [f"Car is {self._phase}. Location: {self._location.compact}. Battery: {self._battery:.1f}%."]
            if self._phase is CarPhase.DRIVING and self._destination is not None:
                parts.append(f"Driving to {self._destination.label}.")
            if self._phase is CarPhase.CHARGING:
                parts.append("Charging.")
            if self._trip is not None:
                parts.append(f"Trip scheduled to {self._trip.destination.label} at {_fmt_due(self._trip.due_at)}.")
            return " ".join(parts)

    async def get_info(self) -> str:
        async with self._lock:
            return (
                f"Brand: {VEHICLE_BRAND}, Model: {VEHICLE_MODEL}, State: {self._phase}, "
                f"Location: {self._location.label}, Battery: {self._battery:.1f}%"
            )

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    async def drive_to(self, latitude: float, longitude: float) -> str:
        """Start driving to the given coordinates."""
        async with self._lock:
            self._ensure_open()
            return self._drive_locked(Coordinates(float(latitude), float(longitude)))

    def _drive_locked(self, target: Coordinates) -> str:
        if self._phase is CarPhase.DRIVING:
            label = self._destination.label if self._destination is not None else "an unknown destination"
            return f"Car is already driving to {label}."
        if self._phase is CarPhase.CHARGING:
            return "Cannot drive while charging."

        destination = self.snap_to_place(target)
        if destination.label == self._location.label:
            return f"Car is already at {destination.display}."

        distance = haversine_km(self._location.coordinates, target)
        required = distance
        if self._battery < required:
            return f"Not enough battery for the trip. Required: {required:.1f}%, Available: {self._battery:.1f}%"

        trip_minutes = distance / self._config.vehicle_speed_kmh * 60.0
        self._phase = CarPhase.DRIVING
        self._destination = destination
        self._drive.arm(
            delayed(
                self.minutes(trip_minutes),
                functools.partial(self._arrive, destination, required),
                name=self._drive.name,
            )
        )
        _logger.debug("Driving to %s: %.2f km, %.1f min", destination.label, distance, trip_minutes)
        return (
            f"Driving to {destination.display} (lat: {target.latitude}, lon: {target.longitude}). "
            f"Estimated time: {trip_minutes:.1f} minutes."
        )

    async def _arrive(self, destination: Location, battery_used: float) -> None:
        async with self._lock:
            if not self._drive.is_current():
                return
            self._drive.release()
            self._battery = max(0.0, self._battery - battery_used)
            self._location = destination
            self._phase = CarPhase.PARKED
            self._destination = None
            _logger.debug("Arrived at %s, battery %.1f%%", destination.label, self._battery)

    async def stop(self) -> str:
        """Abort the current drive in place."""
        async with self._lock:
            if self._phase is not CarPhase.DRIVING:
                return "Car is already stopped."
            self._drive.cancel()
            self._phase = CarPhase.PARKED
            self._destination = None
            return "Car stopped and parked."

    # ------------------------------------------------------------------
    # Charging
    # ------------------------------------------------------------------

    async def start_charging(self) -> str:
        async with self._lock:
            self._ensure_open()
            if self._phase is CarPhase.DRIVING:
                return "Cannot charge while driving."
            if self._phase is CarPhase.CHARGING:
                return "Already charging."
            if self._battery >= MAX_BATTERY:
                return "Battery is already full."
            self._phase = CarPhase.CHARGING
            self._charge.arm(
                ticker(
                    self.minutes(1),
                    self._charge_step,
                    first_delay=self.minutes(1),
                    name=self._charge.name,
                )
            )
            return "Charging started."

    async def _charge_step(self) -> bool:
        async with self._lock:
            if self._closed or not self._charge.is_current():
                return False
            self._battery = min(MAX_BATTERY, self._battery + self._config.charge_rate_per_minute)
            if self._battery >= MAX_BATTERY:
                self._phase = CarPhase.PARKED
                self._charge.release()
                _logger.debug("Battery full")
                return False
            return True

    async def stop_charging(self) -> str:
        async with self._lock:
            if self._phase is not CarPhase.CHARGING:
                return "Car is not charging."
            self._charge.cancel()
            self._phase = CarPhase.PARKED
            return f"Charging stopped. Battery at {self._battery:.1f}%."

    # ------------------------------------------------------------------
    # Trip scheduling
    # ------------------------------------------------------------------

    async def schedule_trip(self, destination: str, when: datetime) -> str:
        """Schedule a trip; allowed in any phase.  Naive *when* is read as UTC."""
        location = self.resolve_destination(destination)
        if location is None:
            return f"Unknown destination: {destination}."
        due_at = as_utc(when)
        async with self._lock:
            self._ensure_open()
            if self._trip is not None:
                return (
                    f"A trip is already scheduled to {self._trip.destination.label} "
                    f"at {_fmt_due(self._trip.due_at)}."
                )
            self._trip = _PendingTrip(location, due_at)
            self.start_trip_poller()
            return f"Trip scheduled to {location.label} at {_fmt_due(due_at)}."

    async def cancel_scheduled_trip(self) -> str:
        async with self._lock:
            if self._trip is None:
                return "No trip is currently scheduled."
            self._trip = None
            return "Scheduled trip cancelled."

    def start_trip_poller(self) -> None:
        """(Re)arm the trip poller, superseding any previous instance."""
        self._ensure_open()
        interval = self.minutes(self._config.trip_poll_minutes)
        self._poller.arm(ticker(interval, self._poll_trip, name=self._poller.name))

    async def _poll_trip(self) -> bool:
        async with self._lock:
            if self._closed or not self._poller.is_current():
                return False
            trip = self._trip
            if trip is None or as_utc(self._clock()) < trip.due_at:
                return True
            self._trip = None
            if self._phase is CarPhase.PARKED:
                outcome = self._drive_locked(trip.destination.coordinates)
                _logger.info("Scheduled trip to %s: %s", trip.destination.label, outcome)
            else:
                _logger.info("Scheduled trip to %s dropped, car is %s", trip.destination.label, self._phase)
            return True

    async def snapshot(self) -> VehicleStatus:
        async with self._lock:
            trip = None
            if self._trip is not None:
                trip = ScheduledTrip(destination=self._trip.destination.label, due_at=self._trip.due_at)
            return VehicleStatus(
                phase=self._phase,
                location=self._location.label,
                latitude=self._location.coordinates.latitude,
                longitude=self._location.coordinates.longitude,
                battery=self._battery,
                destination=self._destination.label if self._destination is not None else None,
                scheduled_trip=trip,
            )
