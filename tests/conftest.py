"""Shared fixtures for household scheduling tests."""

from zoneinfo import ZoneInfo

import pytest

from household.utils import dt_utils


@pytest.fixture(autouse=True)
def default_timezone_utc(monkeypatch: pytest.MonkeyPatch) -> ZoneInfo:
    """Pin the default timezone to UTC for every test."""
    tz = ZoneInfo("UTC")
    monkeypatch.setattr(dt_utils, "DEFAULT_TIME_ZONE", tz)
    return tz


@pytest.fixture
def new_york_tz(monkeypatch: pytest.MonkeyPatch) -> ZoneInfo:
    """Switch the default timezone to America/New_York (DST observed)."""
    tz = ZoneInfo("America/New_York")
    monkeypatch.setattr(dt_utils, "DEFAULT_TIME_ZONE", tz)
    return tz
