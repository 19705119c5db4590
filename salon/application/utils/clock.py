from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Clock = Callable[[], datetime]


def business_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def zone_clock(tz: tzinfo) -> Clock:
    return lambda: datetime.now(tz)


def local_day(value: datetime, tz: tzinfo) -> date:
    """
    Calendar day of `value` in the business timezone.

    Naive values are salon wall-clock times (booking form date + time slot)
    and are taken as already local.
    """
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()
