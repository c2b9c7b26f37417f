import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone

from . import config as settings
from .backends import BACKENDS, compare_backends, compute_prayer_times
from .calc import Location
from .cities import CITIES, DEFAULT_CITY, get_city
from .methods import METHODS, AsrMethod, get_method
from .qibla import compass_point, distance_to_kaaba, qibla_bearing
from .render import (
    build_table,
    format_countdown,
    format_prayer_time,
    get_timezone,
    next_prayer,
    on_clock,
    prayer_label,
    tz_hours_for_day,
)

logger = logging.getLogger(__name__)


def resolve_location(config, args):
    if args.lat is not None and args.lng is not None:
        loc = Location(float(args.lat), float(args.lng), float(args.altitude or 0), args.tz)
        return f"{loc.latitude:.4f}, {loc.longitude:.4f}", loc
    key = args.city or config.get("city") or DEFAULT_CITY
    saved = config.get("locations", {}).get(key)
    if saved:
        loc = Location(saved["lat"], saved["lng"], saved.get("altitude", 0), saved.get("tz"))
        return saved.get("label") or key, loc
    return get_city(key)


def _utc_offset(config, location, day):
    if not config.get("civil_time", True) or not location.timezone:
        return None
    return tz_hours_for_day(day, get_timezone(location.timezone))


def _parse_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value}") from None


def handle_cli(args, config_path=None):
    config_path = config_path or settings.CONFIG_PATH
    config = settings.load_config(config_path)

    if args.list_methods:
        for key, params in METHODS.items():
            isha = f"{params.isha_angle:g}" if not params.fixed_isha else f"{params.isha_interval} min"
            print(f"{key}: {params.name} (fajr {params.fajr_angle:g}, isha {isha})")
        return 0

    if args.list_cities:
        for key, (label, loc) in CITIES.items():
            print(f"{key}: {label} ({loc.latitude}, {loc.longitude}) [{loc.timezone}]")
        for key, loc in config.get("locations", {}).items():
            print(f"{key}: {loc.get('label') or key} ({loc['lat']}, {loc['lng']}) [{loc.get('tz', 'local')}]")
        return 0

    if args.set_method:
        config["method"] = get_method(args.set_method).key
        settings.save_config(config, config_path)
        return 0

    if args.set_asr:
        config["asr_method"] = AsrMethod.parse(args.set_asr).value
        settings.save_config(config, config_path)
        return 0

    if args.set_city:
        get_city(args.set_city)
        config["city"] = args.set_city
        settings.save_config(config, config_path)
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ValueError("--set-location needs --lat and --lng")
        loc = Location(float(args.lat), float(args.lng), float(args.altitude or 0), args.tz)
        config.setdefault("locations", {})[args.set_location] = {
            "lat": loc.latitude,
            "lng": loc.longitude,
            "altitude": loc.altitude,
            "tz": loc.timezone,
            "label": args.set_location
        }
        config["city"] = args.set_location
        settings.save_config(config, config_path)
        return 0

    label, location = resolve_location(config, args)

    if args.qibla:
        bearing = qibla_bearing(location)
        distance = distance_to_kaaba(location)
        if args.json:
            print(json.dumps({"bearing": round(bearing, 2), "distance_km": round(distance, 1)}))
        else:
            print(f"Qibla from {label}: {bearing:.1f}° {compass_point(bearing)}, {distance:.0f} km")
        return 0

    day = _parse_date(args.date) if args.date else date.today()
    method = args.method or config.get("method")
    asr_method = args.asr or config.get("asr_method")
    backend = args.backend or config.get("backend")
    utc_offset = _utc_offset(config, location, day)

    if args.compare:
        diffs = compare_backends(day, location, method, asr_method, utc_offset, secondary=args.compare)
        for key, minutes in diffs.items():
            shown = "n/a" if minutes is None else f"{minutes:+.0f} min"
            print(f"{prayer_label(key):<10} {shown}")
        return 0

    times = compute_prayer_times(day, location, method, asr_method, utc_offset=utc_offset, backend=backend)
    format_24h = config.get("time_format", "12h") == "24h"

    if args.next:
        now = on_clock(times, datetime.now(timezone.utc))
        upcoming = next_prayer(times, now)
        remaining = upcoming.time - now
        text = f"{prayer_label(upcoming.name)} {format_prayer_time(upcoming.time, format_24h)} - {format_countdown(remaining)}"
        if args.json:
            print(json.dumps({"name": upcoming.name, "time": upcoming.time.isoformat(), "text": text}))
        else:
            print(text)
        return 0

    if args.json:
        payload = {k: (v.isoformat() if v else None) for k, v in times.as_dict().items()}
        payload.update(date=day.isoformat(), method=times.method, asr_method=times.asr_method.value,
                       backend=times.backend, unavailable=list(times.unavailable))
        print(json.dumps(payload, ensure_ascii=False))
        return 0

    print(build_table(
        times,
        METHODS[times.method].name,
        label,
        format_24h,
        lang=config.get("language", "english"),
        adjustments=config.get("adjustments", {}),
    ))
    return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="miqat", description="Prayer times and Qibla direction")
    parser.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    parser.add_argument("--city", help="Preset or saved location key")
    parser.add_argument("--lat", type=float, help="Latitude (overrides --city)")
    parser.add_argument("--lng", type=float, help="Longitude (overrides --city)")
    parser.add_argument("--altitude", type=float, help="Altitude in metres")
    parser.add_argument("--tz", help="IANA time zone for --lat/--lng (optional)")
    parser.add_argument("--method", help="Calculation method key")
    parser.add_argument("--asr", help="Asr convention: Standard or Hanafi")
    parser.add_argument("--backend", choices=sorted(BACKENDS), help="Calculation backend")
    parser.add_argument("--next", action="store_true", help="Show the next prayer and a countdown")
    parser.add_argument("--qibla", action="store_true", help="Show Qibla bearing and distance")
    parser.add_argument("--compare", choices=sorted(BACKENDS), help="Minutes by which a backend differs from the default")
    parser.add_argument("--json", action="store_true", help="Print JSON")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--list-cities", action="store_true", help="List preset and saved locations")
    parser.add_argument("--set-method", help="Save the default calculation method")
    parser.add_argument("--set-asr", help="Save the default Asr convention")
    parser.add_argument("--set-city", help="Save the default preset city")
    parser.add_argument("--set-location", help="Save --lat/--lng under a name and make it the default")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return handle_cli(args)
    except ValueError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
