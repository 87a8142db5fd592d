# gobarber/clock.py
"""
Time helpers for appointment scheduling.

All instants handled by the scheduling core are naive datetimes in UTC,
which is also how they are stored in the database.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SystemClock:
    """Reads the current instant from the system clock (naive UTC)."""

    def now(self) -> datetime:
        return utcnow()


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_hour(value: datetime) -> datetime:
    return to_utc_naive(value).replace(minute=0, second=0, microsecond=0)


def is_before(left: datetime, right: datetime) -> bool:
    return left < right


def sub_hours(value: datetime, hours: int) -> datetime:
    return value - timedelta(hours=hours)


def format_long_date(value: datetime) -> str:
    """Renders e.g. "23 June, at 8:00h"."""
    return f"{value.day:02d} {calendar.month_name[value.month]}, at {value.hour}:{value.minute:02d}h"
