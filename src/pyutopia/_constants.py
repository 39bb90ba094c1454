"""Internal constants shared across the library."""

from __future__ import annotations

# ------------------------------------------------------------------
# Static home layout (room name → floor area in m²)
# ------------------------------------------------------------------

DEFAULT_ROOMS: tuple[tuple[str, float], ...] = (
    ("Kitchen", 9.3),
    ("Bedroom", 14.2),
    ("Living Room", 18.3),
    ("Bathroom", 4.5),
    ("Hallway", 5.4),
)

# ------------------------------------------------------------------
# Known driving destinations (name, nominal distance km, lat, lon)
# ------------------------------------------------------------------

HOME_PLACE = "Home"

DEFAULT_KNOWN_PLACES: tuple[tuple[str, float, float, float], ...] = (
    (HOME_PLACE, 0.0, 51.5034, -0.1276),  # 10 Downing Street
    ("Office", 20.0, 51.4995, -0.1248),  # Parliament
    ("Mall", 10.0, 51.5079, -0.2217),  # Westfield London
    ("Airport", 50.0, 51.4700, -0.4543),  # Heathrow
    ("Supermarket", 5.0, 51.4908, -0.1426),
    ("Gym", 8.0, 51.4941, -0.1436),
)

# ------------------------------------------------------------------
# Seasonal ambient tables (London monthly averages, January first)
# ------------------------------------------------------------------

MONTHLY_TEMPERATURES_C: tuple[float, ...] = (
    6.0,
    6.1,
    8.3,
    11.0,
    14.1,
    17.4,
    19.4,
    19.1,
    16.5,
    12.8,
    9.1,
    6.7,
)

MONTHLY_HUMIDITY_PCT: tuple[float, ...] = (
    81.0,
    78.0,
    75.0,
    72.0,
    71.0,
    70.0,
    68.0,
    68.0,
    72.0,
    76.0,
    80.0,
    82.0,
)

# ------------------------------------------------------------------
# Convergence rates
# ------------------------------------------------------------------

#: °C per minute for a 10 m² room while the thermostat drives to its setpoint.
BASE_TEMPERATURE_RATE = 0.5
#: °C per minute for a 10 m² room while drifting to the seasonal temperature.
NATURAL_TEMPERATURE_RATE = 0.1
DEFAULT_THERMOSTAT_SETPOINT = 20.0
INITIAL_ROOM_TEMPERATURE = 20.0

HUMIDITY_ACTIVE_RATE = 2.0
HUMIDITY_DRIFT_RATE = 1.0
DEFAULT_HUMIDITY_SETPOINT = 50.0
SEASONAL_TOLERANCE = 0.01

#: Minutes of powered operation needed to promote one air-quality level.
AIR_QUALITY_RECOVERY_MINUTES: dict[str, float] = {
    "Unhealthy": 300.0,
    "Moderate": 120.0,
}

# ------------------------------------------------------------------
# Blinds, bed, vacuum
# ------------------------------------------------------------------

BLINDS_STEP = 10
BLINDS_MIN = 0
BLINDS_MAX = 100

BED_INITIAL_TEMPERATURE = 18.0
BED_TEMPERATURE_RATE = 0.2
DEFAULT_SLEEP_HOURS = 8
SLEEP_QUALITY_MIN = 60.0
SLEEP_QUALITY_MAX = 100.0

# ------------------------------------------------------------------
# Vehicle
# ------------------------------------------------------------------

EARTH_RADIUS_KM = 6371.0
MAX_BATTERY = 100.0
#: Planar degree distance under which a destination snaps to a known place.
PLACE_SNAP_THRESHOLD_DEG = 0.02
CUSTOM_LOCATION_PREFIX = "Custom:"
VEHICLE_BRAND = "ACMECar"
VEHICLE_MODEL = "Autonomous EV"

REFRIGERATOR_TEMPERATURE_C = 4.0
REFRIGERATOR_PICTURES: tuple[str, ...] = ("ref-empty.pgm", "ref-half.pgm", "ref-full.pgm")
DEFAULT_AUDIO_VOLUME = 50
