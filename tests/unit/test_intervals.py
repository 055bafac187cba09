"""
Unit tests for clock-time interval helpers.
"""

from datetime import date

from studyplan.utils.datetime_utils import buffered_deadline, is_weekend, sunday_first_weekday
from studyplan.utils.intervals import (
    TimeInterval,
    add_hours_to_time,
    format_hours,
    intervals_overlap,
    is_valid_clock_time,
    merge_intervals,
    to_clock_time,
    to_minutes,
)


def test_clock_time_conversion():
    assert to_minutes("09:30") == 570
    assert to_minutes("00:00") == 0
    assert to_clock_time(570) == "09:30"
    assert to_clock_time(1260) == "21:00"


def test_add_hours_rounds_to_whole_minutes():
    assert add_hours_to_time("09:00", 1.5) == "10:30"
    assert add_hours_to_time("09:00", 0.33) == "09:20"


def test_merge_intervals_folds_overlapping_and_touching():
    merged = merge_intervals(
        [
            TimeInterval(200, 240),
            TimeInterval(60, 120),
            TimeInterval(100, 180),
            TimeInterval(240, 300),
        ]
    )

    assert merged == [TimeInterval(60, 180), TimeInterval(200, 300)]


def test_merge_intervals_does_not_mutate_input():
    first = TimeInterval(0, 60)
    merge_intervals([first, TimeInterval(30, 90)])

    assert first.end_minutes == 60


def test_intervals_overlap_is_half_open():
    assert intervals_overlap(TimeInterval(60, 120), TimeInterval(90, 150))
    assert not intervals_overlap(TimeInterval(60, 120), TimeInterval(120, 180))


def test_valid_clock_time():
    assert is_valid_clock_time("09:05")
    assert is_valid_clock_time("23:59")
    assert not is_valid_clock_time("24:00")
    assert not is_valid_clock_time("9:75")
    assert not is_valid_clock_time("noon")


def test_format_hours():
    assert format_hours(0) == "0h"
    assert format_hours(0.25) == "15m"
    assert format_hours(2) == "2h"
    assert format_hours(1.5) == "1h 30m"


def test_sunday_first_weekday():
    assert sunday_first_weekday(date(2024, 1, 7)) == 0
    assert sunday_first_weekday(date(2024, 1, 8)) == 1
    assert sunday_first_weekday(date(2024, 1, 13)) == 6
    assert is_weekend(date(2024, 1, 13))
    assert not is_weekend(date(2024, 1, 12))


def test_buffered_deadline():
    assert buffered_deadline(date(2024, 1, 12), 0) == date(2024, 1, 12)
    assert buffered_deadline(date(2024, 1, 12), 2) == date(2024, 1, 10)
