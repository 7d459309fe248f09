"""UTC time helpers for SRS scheduling.

Card timestamps are integer epoch milliseconds (UTC). Conversions to aware
datetimes happen only at the edges (day boundaries, logging).
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone, tzinfo

MS_PER_DAY = 24 * 60 * 60 * 1000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def utc_now_ms() -> int:
    """Return current time as epoch milliseconds."""
    return datetime_to_ms(utc_now())


def datetime_to_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def ms_to_datetime(ms: int, tz: tzinfo = timezone.utc) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    return (_EPOCH + timedelta(milliseconds=ms)).astimezone(tz)


def add_days_ms(ms: int, days: int) -> int:
    return ms + days * MS_PER_DAY


def end_of_day_ms(ms: int, tz: tzinfo = timezone.utc) -> int:
    """Return the last millisecond of the calendar day containing ``ms`` in ``tz``."""
    local = ms_to_datetime(ms, tz)
    next_midnight = datetime.combine(local.date() + timedelta(days=1), time.min, tzinfo=tz)
    return datetime_to_ms(next_midnight) - 1
