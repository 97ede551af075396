from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Tuple, Union

Instant = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def as_utc(value: Instant) -> datetime:
    """
    Coerce a date or datetime to a timezone-aware UTC datetime.

    A bare date means midnight UTC; a naive datetime is read as UTC wall clock.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

def day_bounds(day: Instant) -> Tuple[datetime, datetime]:
    """
    Midnight starting the civil (UTC) day containing ``day`` and the next
    midnight. Consecutive days share their edge instant, so a scan of every
    day leaves no gap between them.
    """
    d = as_utc(day).date()
    start = datetime.combine(d, time(0, 0, 0), tzinfo=timezone.utc)
    return start, start + ONE_DAY

def midpoint(start: datetime, end: datetime) -> datetime:
    return start + (end - start) / 2

def iter_days(start: Instant, end: Instant) -> Iterator[date]:
    """Civil dates from start's date to end's date, inclusive."""
    d = as_utc(start).date()
    last = as_utc(end).date()
    while d <= last:
        yield d
        d += ONE_DAY
