import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from . import astro
from .errors import InvalidLocation, PrayerTimeUnavailable
from .methods import (
    ALL_TIMES,
    DEFAULT_ASR_METHOD,
    DEFAULT_METHOD,
    AsrMethod,
    get_method,
)

logger = logging.getLogger(__name__)


def _finite(value, label):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidLocation(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(value):
        raise InvalidLocation(f"{label} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    altitude: float = 0.0
    timezone: Optional[str] = None

    def __post_init__(self):
        lat = _finite(self.latitude, "latitude")
        lng = _finite(self.longitude, "longitude")
        alt = _finite(self.altitude or 0.0, "altitude")
        if not -90.0 <= lat <= 90.0:
            raise InvalidLocation(f"latitude must be between -90 and 90, got {lat}")
        if not -180.0 <= lng <= 180.0:
            raise InvalidLocation(f"longitude must be between -180 and 180, got {lng}")
        if alt < 0:
            raise InvalidLocation(f"altitude must not be negative, got {alt}")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lng)
        object.__setattr__(self, "altitude", alt)


@dataclass(frozen=True)
class PrayerTimes:
    date: date
    fajr: Optional[datetime]
    sunrise: Optional[datetime]
    dhuhr: Optional[datetime]
    asr: Optional[datetime]
    maghrib: Optional[datetime]
    isha: Optional[datetime]
    midnight: Optional[datetime]
    qiyam: Optional[datetime]
    location: Location
    method: str = DEFAULT_METHOD
    asr_method: AsrMethod = DEFAULT_ASR_METHOD
    utc_offset: Optional[float] = None
    backend: str = "astronomical"

    @property
    def unavailable(self):
        return tuple(name for name in ALL_TIMES if getattr(self, name) is None)

    def is_available(self, name):
        return self._lookup(name) is not None

    def require(self, name):
        value = self._lookup(name)
        if value is None:
            raise PrayerTimeUnavailable(name)
        return value

    def __getitem__(self, name):
        return self.require(name)

    def as_dict(self):
        return {name: getattr(self, name) for name in ALL_TIMES}

    def _lookup(self, name):
        if name not in ALL_TIMES:
            raise KeyError(name)
        return getattr(self, name)


def to_clock(day, hours):
    """Materialize fractional hours as a wall-clock datetime.

    Minutes are truncated, never rounded. Values outside [0, 24) wrap onto
    the neighbouring date.
    """
    offset_days = math.floor(hours / 24.0)
    h = hours - 24.0 * offset_days
    if h >= 24.0:
        h -= 24.0
        offset_days += 1
    hour = int(h)
    minute = int((h - hour) * 60)
    return datetime.combine(day + timedelta(days=offset_days), time(hour, minute))


def solar_noon(day, longitude):
    """Sun declination and transit (local mean hours) at the location's noon."""
    jd = astro.julian_date(day.year, day.month, day.day) + 0.5 - longitude / 360.0
    decl, eqt = astro.sun_position(jd)
    return decl, 12.0 - eqt


class PrayerTimeEngine:
    def __init__(self, method=DEFAULT_METHOD, asr_method=DEFAULT_ASR_METHOD):
        self.method = get_method(method)
        self.asr_method = AsrMethod.parse(asr_method)

    def get_times(self, day, location, utc_offset=None, strict=False):
        lat = location.latitude
        decl, transit = solar_noon(day, location.longitude)
        rise_set = astro.rise_set_angle(location.altitude)
        params = self.method

        def solve(name, angle, direction, t=transit, dec=decl):
            try:
                return astro.solve_angle_time(angle, t, direction, lat, dec)
            except PrayerTimeUnavailable as exc:
                if strict:
                    raise exc.for_prayer(name) from exc
                logger.debug("%s unavailable on %s at lat %.4f: %s", name, day, lat, exc)
                return None

        fajr = solve("fajr", params.fajr_angle, "ccw")
        sunrise = solve("sunrise", rise_set, "ccw")
        asr = solve("asr", astro.asr_angle(self.asr_method.shadow_factor, lat, decl), "cw")
        maghrib = solve("maghrib", params.maghrib_angle if params.maghrib_angle > 0 else rise_set, "cw")
        isha = None
        if not params.fixed_isha:
            isha = solve("isha", params.isha_angle, "cw")

        # midnight is measured from Maghrib to the following morning's Fajr
        next_decl, next_transit = solar_noon(day + timedelta(days=1), location.longitude)
        fajr_next = solve("midnight", params.fajr_angle, "ccw", next_transit, next_decl)

        midnight = None
        if fajr_next is not None and maghrib is not None:
            fajr_next += 24.0
            midnight = maghrib + (fajr_next - maghrib) / 2.0

        qiyam = None
        if fajr is not None and maghrib is not None:
            night = (fajr + 24.0) - maghrib
            qiyam = fajr - night / 3.0

        raw = {
            "fajr": fajr,
            "sunrise": sunrise,
            "dhuhr": transit,
            "asr": asr,
            "maghrib": maghrib,
            "isha": isha,
            "midnight": midnight,
            "qiyam": qiyam,
        }
        shift = 0.0 if utc_offset is None else utc_offset - location.longitude / 15.0
        clock = {k: (None if v is None else to_clock(day, v + shift)) for k, v in raw.items()}

        # interval methods count from the truncated Maghrib so the gap is exact
        if params.fixed_isha and clock["maghrib"] is not None:
            clock["isha"] = clock["maghrib"] + timedelta(minutes=params.isha_interval)

        return PrayerTimes(
            date=day,
            location=location,
            method=params.key,
            asr_method=self.asr_method,
            utc_offset=utc_offset,
            backend="astronomical",
            **clock,
        )
