from collections import namedtuple
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from .backends import recompute
from .methods import PRAYER_NAMES, PRAYER_ORDER

NextPrayer = namedtuple("NextPrayer", ["name", "time"])
TimeRemaining = namedtuple("TimeRemaining", ["hours", "minutes", "seconds", "total_seconds"])

_EASTERN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")


def get_timezone(tz_name):
    if tz_name:
        return ZoneInfo(tz_name)
    return datetime.now().astimezone().tzinfo


def tz_hours_for_day(day, tzinfo):
    dt = datetime(day.year, day.month, day.day, 12, 0, 0, tzinfo=tzinfo)
    offset = dt.utcoffset()
    return offset.total_seconds() / 3600.0 if offset else 0.0


def on_clock(times, now):
    """Express ``now`` on the wall clock the times were computed for."""
    if now.tzinfo is None:
        return now
    offset = times.utc_offset
    if offset is None:
        offset = times.location.longitude / 15.0
    return now.astimezone(timezone(timedelta(hours=offset))).replace(tzinfo=None)


def next_prayer(times, now):
    """First of fajr..isha strictly after ``now``, else the next day's Fajr."""
    now = on_clock(times, now)
    for name in PRAYER_ORDER:
        dt = getattr(times, name)
        if dt is not None and now < dt:
            return NextPrayer(name, dt)
    tomorrow = recompute(times, times.date + timedelta(days=1))
    for name in PRAYER_ORDER:
        dt = getattr(tomorrow, name)
        if dt is not None:
            return NextPrayer(name, dt)
    # dhuhr is always defined, so this is unreachable
    raise RuntimeError(f"No prayer time available on {tomorrow.date}")


def time_until(target, now):
    total = max(0, int((target - now).total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(hours, minutes, seconds, total)


def format_prayer_time(dt, use_24h):
    if use_24h:
        return dt.strftime("%H:%M")
    return dt.strftime("%I:%M %p").lstrip("0")


def format_countdown(delta):
    total_minutes = int(delta.total_seconds() // 60)
    if total_minutes < 0:
        total_minutes = 0
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}"
    return f"{minutes}m"


def to_eastern_digits(text):
    return text.translate(_EASTERN_DIGITS)


def prayer_label(name, lang="english"):
    return PRAYER_NAMES[name].get(lang, PRAYER_NAMES[name]["english"])


def apply_adjustments(times, adjustments):
    """Per-prayer minute offsets from the user's settings, e.g. {"isha": 5}."""
    adjusted = times.as_dict()
    for key, minutes in adjustments.items():
        if adjusted.get(key) is not None and minutes:
            adjusted[key] = adjusted[key] + timedelta(minutes=int(minutes))
    return adjusted


def build_table(times, method_name, location_label, format_24h, lang="english", adjustments=None):
    values = apply_adjustments(times, adjustments or {})
    lines = [f"{location_label} {times.date.isoformat()} ({method_name}, Asr: {times.asr_method.value})"]
    for key, dt in values.items():
        label = prayer_label(key, lang)
        if dt is None:
            lines.append(f"{label:<10} --:--")
            continue
        text = format_prayer_time(dt, format_24h)
        if lang in ("dari", "pashto"):
            text = to_eastern_digits(text)
        if dt.date() != times.date:
            text += f" ({dt.date().isoformat()})"
        lines.append(f"{label:<10} {text}")
    return "\n".join(lines)
