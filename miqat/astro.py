import math
from collections import namedtuple

from .errors import PrayerTimeUnavailable

SunPosition = namedtuple("SunPosition", ["declination", "equation"])

J2000 = 2451545.0


def _dtr(d):
    return (d * math.pi) / 180.0


def _rtd(r):
    return (r * 180.0) / math.pi


def sin(d):
    return math.sin(_dtr(d))


def cos(d):
    return math.cos(_dtr(d))


def tan(d):
    return math.tan(_dtr(d))


def asin(x):
    return _rtd(math.asin(x))


def acos(x):
    return _rtd(math.acos(x))


def atan(x):
    return _rtd(math.atan(x))


def atan2(y, x):
    return _rtd(math.atan2(y, x))


def fix_angle(a):
    return a - 360.0 * math.floor(a / 360.0)


def fix_hour(h):
    return h - 24.0 * math.floor(h / 24.0)


def julian_date(y, m, d):
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


def sun_position(jd):
    """Declination (degrees) and equation of time (hours) for a Julian day."""
    d = jd - J2000
    g = fix_angle(357.529 + 0.98560028 * d)
    q = fix_angle(280.459 + 0.98564736 * d)
    L = fix_angle(q + 1.915 * sin(g) + 0.020 * sin(2 * g))
    e = 23.439 - 0.00000036 * d
    ra = atan2(cos(e) * sin(L), cos(L)) / 15.0
    decl = asin(sin(e) * sin(L))
    eqt = q / 15.0 - fix_hour(ra)
    # q and L wrap through 0 at different moments near the March equinox
    if eqt >= 12.0:
        eqt -= 24.0
    elif eqt < -12.0:
        eqt += 24.0
    return SunPosition(decl, eqt)


def solve_angle_time(angle, transit, direction, latitude, declination):
    """Clock time at which the sun sits ``angle`` degrees below the horizon.

    ``direction`` is "ccw" for the morning side of transit and "cw" for the
    afternoon side. Negative angles are altitudes above the horizon (Asr).
    Raises PrayerTimeUnavailable when the sun never gets there that day.
    """
    if direction not in ("ccw", "cw"):
        raise ValueError(f"Unknown direction: {direction}")
    numerator = -sin(angle) - sin(latitude) * sin(declination)
    denominator = cos(latitude) * cos(declination)
    if abs(denominator) < 1e-12:
        raise PrayerTimeUnavailable(angle=angle)
    x = numerator / denominator
    if x < -1.0 or x > 1.0:
        raise PrayerTimeUnavailable(cosine=x, angle=angle)
    t = acos(x) / 15.0
    return transit - t if direction == "ccw" else transit + t


def asr_angle(factor, latitude, declination):
    return -atan(1.0 / (factor + tan(abs(latitude - declination))))


def rise_set_angle(altitude=0.0):
    # refraction plus solar semi-diameter, then dip of the horizon
    return 0.833 + 0.0347 * math.sqrt(altitude)
