"""
Interval arithmetic over clock times.

Clock times are ``HH:MM`` strings; intervals are half-open ``[start, end)``
minute offsets from midnight. Malformed clock strings are a caller contract
violation and are not handled here.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

CLOCK_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


@dataclass
class TimeInterval:
    start_minutes: int
    end_minutes: int


def to_minutes(clock_time: str) -> int:
    hours, _, minutes = clock_time.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def to_clock_time(minutes: int) -> str:
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def hours_to_minutes(hours: float) -> int:
    """Whole minutes for a duration in hours."""
    return int(round(hours * 60))


def add_hours_to_time(clock_time: str, hours: float) -> str:
    return to_clock_time(to_minutes(clock_time) + hours_to_minutes(hours))


def is_valid_clock_time(value: str) -> bool:
    return bool(CLOCK_TIME_PATTERN.match(value))


def interval_from_times(start_time: str, end_time: str) -> TimeInterval:
    return TimeInterval(to_minutes(start_time), to_minutes(end_time))


def merge_intervals(intervals: list[TimeInterval]) -> list[TimeInterval]:
    """Sort by start and fold overlapping or touching intervals together."""
    merged: list[TimeInterval] = []
    for interval in sorted(intervals, key=lambda entry: entry.start_minutes):
        if merged and interval.start_minutes <= merged[-1].end_minutes:
            merged[-1].end_minutes = max(merged[-1].end_minutes, interval.end_minutes)
        else:
            merged.append(TimeInterval(interval.start_minutes, interval.end_minutes))
    return merged


def intervals_overlap(first: TimeInterval, second: TimeInterval) -> bool:
    return first.start_minutes < second.end_minutes and first.end_minutes > second.start_minutes


def format_hours(hours: float) -> str:
    """
    Render hours as ``"2h 30m"``.

    Example:
        >>> format_hours(1.5)
        '1h 30m'
    """
    if hours == 0:
        return "0h"
    whole = math.floor(hours)
    minutes = int(round((hours - whole) * 60))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if whole == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{whole}h"
    return f"{whole}h {minutes}m"
