"""
Calendar helpers shared by the engine.

Weekday numbers are Sunday-first (0 = Sunday ... 6 = Saturday).
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional


def get_today(today: Optional[date] = None) -> date:
    """Return ``today`` if given, otherwise the local calendar date."""
    return today or date.today()


def get_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` if given, otherwise the local naive datetime."""
    return now or datetime.now()


def sunday_first_weekday(day: date) -> int:
    """
    Convert a date to a Sunday-first weekday number.

    Example:
        >>> sunday_first_weekday(date(2024, 1, 7))  # Sunday
        0
    """
    return (day.weekday() + 1) % 7


def is_weekend(day: date) -> bool:
    return sunday_first_weekday(day) in (0, 6)


def is_work_day(day: date, work_days: list[int]) -> bool:
    return sunday_first_weekday(day) in work_days


def buffered_deadline(deadline: date, buffer_days: int) -> date:
    """Deadline pulled earlier by the configured buffer."""
    if buffer_days > 0:
        return deadline - timedelta(days=buffer_days)
    return deadline


def iter_days(start: date, count: int) -> Iterator[date]:
    for offset in range(max(0, count)):
        yield start + timedelta(days=offset)


def combine_clock_time(day: date, clock_time: str) -> datetime:
    """Naive datetime for ``HH:MM`` on ``day`` (24:00 rolls to next midnight)."""
    hours, _, minutes = clock_time.partition(":")
    total = int(hours) * 60 + int(minutes or 0)
    return datetime.combine(day, time.min) + timedelta(minutes=total)
