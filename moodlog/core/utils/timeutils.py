"""Timestamp helpers. Stored datetimes are naive UTC."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

END_OF_DAY = time(23, 59, 59, 999000)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting aware values to UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def start_of_day(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    return datetime.combine(value, time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Inclusive upper bound: 23:59:59.999 on the given day."""
    if isinstance(value, datetime):
        value = to_naive_utc(value).date()
    return datetime.combine(value, END_OF_DAY)
