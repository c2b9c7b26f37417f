import os
from datetime import date

import pytest
from hypothesis import HealthCheck, settings

from miqat.calc import Location

settings.register_profile(
    "dev",
    settings(
        deadline=None,
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=150,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config):
    return f"Hypothesis profile: '{_profile}'"


@pytest.fixture
def kabul():
    return Location(34.5553, 69.2075)


@pytest.fixture
def kabul_with_altitude():
    return Location(34.5553, 69.2075, 1791, "Asia/Kabul")


@pytest.fixture
def arctic():
    # sun stays above the horizon all day around the June solstice
    return Location(70.0, 25.0)


@pytest.fixture
def sample_day():
    return date(2025, 3, 15)


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    from miqat import config as settings_module

    path = str(tmp_path / "miqat" / "config.json")
    monkeypatch.setattr(settings_module, "CONFIG_PATH", path)
    return path
