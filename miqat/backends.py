import logging
from datetime import date as date_cls
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

from . import astro
from .calc import PrayerTimeEngine, PrayerTimes, solar_noon, to_clock
from .errors import PrayerTimeUnavailable, UnknownBackend
from .methods import ALL_TIMES, DEFAULT_ASR_METHOD, DEFAULT_METHOD, PRAYER_ORDER, AsrMethod, get_method

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "astronomical"


def _astronomical(day, location, method, asr_method, utc_offset, strict):
    engine = PrayerTimeEngine(method, asr_method)
    return engine.get_times(day, location, utc_offset=utc_offset, strict=strict)


def _adhan_parameters(params, asr_method):
    from adhanpy.calculation.CalculationParameters import CalculationParameters
    from adhanpy.calculation.Madhab import Madhab

    parameters = CalculationParameters(fajr_angle=params.fajr_angle, isha_angle=params.isha_angle)
    if params.fixed_isha:
        parameters.isha_interval = params.isha_interval
    parameters.madhab = Madhab.HANAFI if asr_method is AsrMethod.HANAFI else Madhab.SHAFI
    return parameters


def _adhan_day(day, location, params, asr_method, parameters, offset):
    from adhanpy.PrayerTimes import PrayerTimes as AdhanPrayerTimes

    lat = location.latitude
    decl, transit = solar_noon(day, location.longitude)
    shift = offset - location.longitude / 15.0

    def solar(angle, direction):
        try:
            hours = astro.solve_angle_time(angle, transit, direction, lat, decl)
        except PrayerTimeUnavailable:
            return None
        return to_clock(day, hours + shift)

    try:
        result = AdhanPrayerTimes(
            (location.latitude, location.longitude),
            datetime(day.year, day.month, day.day),
            calculation_parameters=parameters,
            time_zone=timezone.utc,
        )
    except RuntimeError as exc:
        # adhanpy gives up on days with no sunrise or sunset
        logger.debug("adhanpy has no times for %s at lat %.4f: %s", day, lat, exc)
        times = dict.fromkeys(PRAYER_ORDER)
        times["dhuhr"] = to_clock(day, transit + shift)
        times["asr"] = solar(astro.asr_angle(asr_method.shadow_factor, lat, decl), "cw")
        return times

    clock = timezone(timedelta(hours=offset))
    times = {}
    for name in PRAYER_ORDER:
        value = getattr(result, name)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        times[name] = value.astimezone(clock).replace(tzinfo=None, second=0, microsecond=0)

    # adhanpy's high-latitude rule fills in twilight the sun never reaches
    if solar(params.fajr_angle, "ccw") is None:
        times["fajr"] = None
    if not params.fixed_isha and solar(params.isha_angle, "cw") is None:
        times["isha"] = None

    # adhanpy has no Maghrib angle, only sunset
    if params.maghrib_angle > 0:
        times["maghrib"] = solar(params.maghrib_angle, "cw")
    if params.fixed_isha:
        maghrib = times["maghrib"]
        times["isha"] = None if maghrib is None else maghrib + timedelta(minutes=params.isha_interval)
    return times


def _adhan(day, location, method, asr_method, utc_offset, strict):
    params = get_method(method)
    asr_method = AsrMethod.parse(asr_method)
    parameters = _adhan_parameters(params, asr_method)
    offset = utc_offset if utc_offset is not None else location.longitude / 15.0

    times = _adhan_day(day, location, params, asr_method, parameters, offset)
    fajr_next = _adhan_day(day + timedelta(days=1), location, params, asr_method, parameters, offset)["fajr"]

    fajr, maghrib = times["fajr"], times["maghrib"]
    midnight = qiyam = None
    if maghrib is not None and fajr_next is not None:
        midnight = _floor_minute(maghrib + (fajr_next - maghrib) / 2)
    if fajr is not None and maghrib is not None:
        night = (fajr + timedelta(days=1)) - maghrib
        qiyam = _floor_minute(fajr - night / 3)
    times.update(midnight=midnight, qiyam=qiyam)

    if strict:
        for name in ALL_TIMES:
            if times[name] is None:
                raise PrayerTimeUnavailable(name)

    return PrayerTimes(
        date=day,
        location=location,
        method=params.key,
        asr_method=asr_method,
        utc_offset=utc_offset,
        backend="adhan",
        **times,
    )


def _floor_minute(dt):
    return dt.replace(second=0, microsecond=0)


BACKENDS = MappingProxyType({
    "astronomical": _astronomical,
    "adhan": _adhan,
})


def get_backend(name):
    try:
        return BACKENDS[str(name).strip().lower()]
    except KeyError:
        raise UnknownBackend(f"Unknown backend: {name}") from None


def compute_prayer_times(day, location, method=DEFAULT_METHOD, asr_method=DEFAULT_ASR_METHOD,
                         utc_offset=None, backend=DEFAULT_BACKEND, strict=False):
    """Prayer times for ``day`` at ``location``.

    Instants the sun never reaches are ``None`` on the result (or raise
    PrayerTimeUnavailable when ``strict``). Without ``utc_offset`` the
    clock is local mean solar time at the location's meridian.
    """
    if isinstance(day, datetime):
        day = day.date()
    if not isinstance(day, date_cls):
        raise TypeError(f"day must be a date, got {type(day).__name__}")
    compute = get_backend(backend)
    return compute(day, location, method, asr_method, utc_offset, strict)


def recompute(times, day):
    """Same inputs as ``times``, different date."""
    return compute_prayer_times(
        day,
        times.location,
        method=times.method,
        asr_method=times.asr_method,
        utc_offset=times.utc_offset,
        backend=times.backend,
    )


def compare_backends(day, location, method=DEFAULT_METHOD, asr_method=DEFAULT_ASR_METHOD,
                     utc_offset=None, primary=DEFAULT_BACKEND, secondary="adhan"):
    """Signed minutes by which ``secondary`` differs from ``primary`` for each time."""
    a = compute_prayer_times(day, location, method, asr_method, utc_offset, backend=primary)
    b = compute_prayer_times(day, location, method, asr_method, utc_offset, backend=secondary)
    diffs = {}
    for name in ALL_TIMES:
        left, right = getattr(a, name), getattr(b, name)
        if left is None or right is None:
            diffs[name] = None
        else:
            diffs[name] = (right - left).total_seconds() / 60.0
    worst = max((abs(v) for v in diffs.values() if v is not None), default=0.0)
    logger.info("%s vs %s on %s: max divergence %.0f min", primary, secondary, day, worst)
    return diffs
