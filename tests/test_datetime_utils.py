"""Tests for the application timezone helpers."""

from datetime import datetime, timedelta

import pytest

from fitpulse.config import reset_settings_cache
from fitpulse.utils import datetime as datetime_utils


@pytest.fixture()
def app_timezone(monkeypatch):
    def _set(value: str):
        monkeypatch.setenv("APP_TIMEZONE", value)
        reset_settings_cache()
        datetime_utils.get_app_timezone.cache_clear()
        return datetime_utils.get_app_timezone()

    yield _set
    monkeypatch.delenv("APP_TIMEZONE", raising=False)
    reset_settings_cache()
    datetime_utils.get_app_timezone.cache_clear()


def test_fixed_offsets_are_accepted(app_timezone):
    tz = app_timezone("UTC+05:30")

    assert tz.utcoffset(None) == timedelta(hours=5, minutes=30)


def test_unknown_zone_falls_back_to_utc(app_timezone):
    tz = app_timezone("Mars/Olympus_Mons")

    assert tz.utcoffset(None) == timedelta(0)


def test_naive_values_round_trip_through_storage_form(app_timezone):
    app_timezone("UTC-03:00")
    aware = datetime_utils.ensure_app_timezone(datetime(2024, 1, 1, 12, 0))

    naive = datetime_utils.ensure_app_naive_datetime(aware)

    assert naive == datetime(2024, 1, 1, 12, 0)
    assert naive.tzinfo is None
    assert aware.utcoffset() == timedelta(hours=-3)


@pytest.mark.parametrize("value", ["", "utc", "GMT", "UTC+5h"])
def test_plain_utc_and_bad_offsets_resolve_to_utc(app_timezone, value):
    assert app_timezone(value).utcoffset(None) == timedelta(0)
