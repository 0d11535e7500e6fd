"""Timezone helpers used to stamp and store notifications."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fitpulse.config import get_settings


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Resolve ``APP_TIMEZONE``: ``UTC``, an offset like ``UTC-03:00``, or a zone name."""

    name = (get_settings().app_timezone or "").strip()
    if name.upper() in {"", "UTC", "GMT", "Z"}:
        return timezone.utc
    if name[:3].upper() in {"UTC", "GMT"}:
        try:
            return datetime.strptime(name[3:], "%z").tzinfo or timezone.utc
        except ValueError:
            return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app timezone; naive values are app local."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return the app local wall time of ``value`` as stored in the database."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None
