import math

from .astro import atan2, cos, sin

KAABA_LATITUDE = 21.4225
KAABA_LONGITUDE = 39.8262
EARTH_RADIUS_KM = 6371.0

_COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def _norm360(x):
    r = x % 360.0
    # x % 360 can round up to 360.0 for tiny negative x
    return 0.0 if r >= 360.0 else r


def qibla_bearing(location):
    """Initial great-circle bearing from ``location`` to the Kaaba, clockwise from true north."""
    lat1 = location.latitude
    lat2 = KAABA_LATITUDE
    d_lon = KAABA_LONGITUDE - location.longitude
    y = sin(d_lon) * cos(lat2)
    x = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(d_lon)
    return _norm360(atan2(y, x))


def distance_to_kaaba(location):
    """Haversine distance in kilometres."""
    d_lat = KAABA_LATITUDE - location.latitude
    d_lon = KAABA_LONGITUDE - location.longitude
    a = sin(d_lat / 2) ** 2 + cos(location.latitude) * cos(KAABA_LATITUDE) * sin(d_lon / 2) ** 2
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def compass_point(bearing):
    index = int((_norm360(bearing) + 11.25) // 22.5) % 16
    return _COMPASS_POINTS[index]
