from types import MappingProxyType

from .calc import Location
from .errors import UnknownCity

DEFAULT_CITY = "kabul"

CITIES = MappingProxyType({
    "kabul": ("Kabul", Location(34.5553, 69.2075, 1791, "Asia/Kabul")),
    "herat": ("Herat", Location(34.3529, 62.2163, 920, "Asia/Kabul")),
    "mazar": ("Mazar-i-Sharif", Location(36.7069, 67.1147, 380, "Asia/Kabul")),
    "kandahar": ("Kandahar", Location(31.6257, 65.7101, 1005, "Asia/Kabul")),
    "jalalabad": ("Jalalabad", Location(34.4253, 70.4511, 575, "Asia/Kabul")),
    "kunduz": ("Kunduz", Location(36.7281, 68.8577, 395, "Asia/Kabul")),
    "ghazni": ("Ghazni", Location(33.5469, 68.4269, 2219, "Asia/Kabul")),
    "bamiyan": ("Bamiyan", Location(34.8213, 67.8213, 2550, "Asia/Kabul")),
    "farah": ("Farah", Location(32.3735, 62.1130, 660, "Asia/Kabul")),
    "badakhshan": ("Badakhshan", Location(36.7347, 70.8119, 1250, "Asia/Kabul")),
    "mecca": ("Mecca", Location(21.4225, 39.8262, 277, "Asia/Riyadh")),
    "medina": ("Medina", Location(24.4709, 39.6122, 608, "Asia/Riyadh")),
    "istanbul": ("Istanbul", Location(41.0082, 28.9784, 39, "Europe/Istanbul")),
    "cairo": ("Cairo", Location(30.0444, 31.2357, 23, "Africa/Cairo")),
    "dubai": ("Dubai", Location(25.2770, 55.2962, 5, "Asia/Dubai")),
    "karachi": ("Karachi", Location(24.8607, 67.0011, 10, "Asia/Karachi")),
    "tehran": ("Tehran", Location(35.6892, 51.3890, 1189, "Asia/Tehran")),
    "london": ("London", Location(51.5074, -0.1278, 11, "Europe/London")),
    "new_york": ("New York", Location(40.7128, -74.0060, 10, "America/New_York")),
})


def get_city(key):
    try:
        return CITIES[key.strip().lower().replace(" ", "_").replace("-", "_")]
    except KeyError:
        raise UnknownCity(f"Unknown city: {key}") from None
