from .backends import BACKENDS, compare_backends, compute_prayer_times
from .calc import Location, PrayerTimeEngine, PrayerTimes
from .errors import (
    InvalidLocation,
    MiqatError,
    PrayerTimeUnavailable,
    UnknownBackend,
    UnknownCity,
    UnknownMethod,
)
from .methods import METHODS, PRAYER_ORDER, AsrMethod, CalculationMethodParams, Midnight, get_method
from .qibla import compass_point, distance_to_kaaba, qibla_bearing
from .render import next_prayer, time_until

__version__ = "0.1.0"

__all__ = [
    "BACKENDS",
    "METHODS",
    "PRAYER_ORDER",
    "AsrMethod",
    "CalculationMethodParams",
    "InvalidLocation",
    "Location",
    "Midnight",
    "MiqatError",
    "PrayerTimeEngine",
    "PrayerTimeUnavailable",
    "PrayerTimes",
    "UnknownBackend",
    "UnknownCity",
    "UnknownMethod",
    "compare_backends",
    "compass_point",
    "compute_prayer_times",
    "distance_to_kaaba",
    "get_method",
    "next_prayer",
    "qibla_bearing",
    "time_until",
]
