from datetime import date, timedelta

import pytest

from miqat.backends import BACKENDS, compare_backends, compute_prayer_times, get_backend, recompute
from miqat.calc import Location, PrayerTimeEngine
from miqat.errors import PrayerTimeUnavailable, UnknownBackend
from miqat.methods import ALL_TIMES


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        BACKENDS["other"] = BACKENDS["astronomical"]


def test_unknown_backend():
    with pytest.raises(UnknownBackend):
        get_backend("sundial")
    with pytest.raises(UnknownBackend):
        compute_prayer_times(date(2025, 3, 15), None, backend="sundial")


def test_astronomical_backend_is_the_engine(kabul, sample_day):
    direct = PrayerTimeEngine("Karachi", "Hanafi").get_times(sample_day, kabul)
    assert compute_prayer_times(sample_day, kabul, backend=" Astronomical ") == direct


def test_recompute_keeps_inputs(kabul, sample_day):
    times = compute_prayer_times(sample_day, kabul, "MWL", "Standard", utc_offset=4.5)
    later = recompute(times, sample_day + timedelta(days=1))
    assert later.date == sample_day + timedelta(days=1)
    assert (later.method, later.asr_method, later.utc_offset) == (times.method, times.asr_method, 4.5)


# ─────────────────────────── adhanpy ───────────────────────────

@pytest.fixture
def adhanpy():
    return pytest.importorskip("adhanpy")


def test_adhan_backend_orders_prayers(adhanpy, kabul, sample_day):
    t = compute_prayer_times(sample_day, kabul, "Karachi", "Hanafi", utc_offset=4.5, backend="adhan")
    assert t.backend == "adhan"
    assert t.unavailable == ()
    assert t.qiyam < t.fajr < t.sunrise < t.dhuhr < t.asr < t.maghrib < t.isha < t.midnight
    for value in t.as_dict().values():
        assert value.second == 0


@pytest.mark.parametrize("method", ["Karachi", "MWL", "ISNA", "Makkah"])
def test_backends_agree_within_a_few_minutes(adhanpy, kabul, sample_day, method):
    diffs = compare_backends(sample_day, kabul, method, "Hanafi", utc_offset=4.5)
    assert set(diffs) == set(ALL_TIMES)
    for name in ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"):
        assert abs(diffs[name]) <= 5, (name, diffs[name])


def test_adhan_fixed_interval_isha(adhanpy, kabul, sample_day):
    t = compute_prayer_times(sample_day, kabul, "Makkah", backend="adhan")
    assert t.isha - t.maghrib == timedelta(minutes=90)


def test_adhan_applies_maghrib_angle(adhanpy, sample_day):
    tehran = Location(35.6892, 51.3890)
    diffs = compare_backends(sample_day, tehran, "Tehran", "Standard", utc_offset=3.5)
    assert abs(diffs["maghrib"]) <= 1
    assert abs(diffs["midnight"]) <= 5
    sunset = compute_prayer_times(sample_day, tehran, "MWL", utc_offset=3.5, backend="adhan").maghrib
    jafari = compute_prayer_times(sample_day, tehran, "Tehran", utc_offset=3.5, backend="adhan").maghrib
    assert jafari - sunset >= timedelta(minutes=10)


def test_adhan_midnight_sun_is_unavailable_not_an_error(adhanpy, arctic):
    day = date(2024, 6, 21)
    adhan = compute_prayer_times(day, arctic, "MWL", "Standard", backend="adhan")
    engine = compute_prayer_times(day, arctic, "MWL", "Standard")
    assert adhan.unavailable == engine.unavailable
    assert adhan.dhuhr == engine.dhuhr
    assert adhan.asr is not None


def test_adhan_strict_raises_unavailable(adhanpy, arctic):
    with pytest.raises(PrayerTimeUnavailable) as info:
        compute_prayer_times(date(2024, 6, 21), arctic, "MWL", backend="adhan", strict=True)
    assert info.value.prayer == "fajr"


def test_adhan_does_not_invent_twilight_in_white_nights(adhanpy):
    oslo = Location(59.9139, 10.7522)
    t = compute_prayer_times(date(2024, 6, 21), oslo, "MWL", backend="adhan")
    assert t.fajr is None and t.isha is None
    assert t.unavailable == ("fajr", "isha", "midnight", "qiyam")
    assert t.sunrise < t.dhuhr < t.asr < t.maghrib
