import json
import os

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "miqat")
CONFIG_PATH = os.environ.get("MIQAT_CONFIG") or os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "city": "kabul",
    "locations": {},
    "method": "Karachi",
    "asr_method": "Hanafi",
    "backend": "astronomical",
    "civil_time": True,
    "adjustments": {
        "fajr": 0,
        "sunrise": 0,
        "dhuhr": 0,
        "asr": 0,
        "maghrib": 0,
        "isha": 0
    },
    "time_format": "12h",
    "language": "english"
}


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(DEFAULT_CONFIG, f, indent=2)
        return json.loads(json.dumps(DEFAULT_CONFIG))
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    merged = json.loads(json.dumps(DEFAULT_CONFIG))
    merged.update(config)
    return merged


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
