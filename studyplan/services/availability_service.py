"""
Availability engine: free time windows inside the daily study window.

A locked day has no availability. Otherwise busy time is the union of
non-skipped sessions and applicable fixed commitments.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Union

from studyplan.core.config import get_settings
from studyplan.core.logger import setup_logger
from studyplan.models.commitment import FixedCommitment
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import SlotAssignment, StudyPlan, TimeSlot
from studyplan.services.plan_workspace import PlanWorkspace
from studyplan.utils.datetime_utils import is_work_day, iter_days, sunday_first_weekday
from studyplan.utils.intervals import (
    TimeInterval,
    add_hours_to_time,
    hours_to_minutes,
    interval_from_times,
    merge_intervals,
    to_clock_time,
)

logger = setup_logger(__name__)

PlanSource = Union[PlanWorkspace, Iterable[StudyPlan]]


def _plan_lookup(plans: PlanSource) -> dict[date, StudyPlan]:
    if isinstance(plans, PlanWorkspace):
        return {plan.date: plan for plan in plans.plans()}
    return {plan.date: plan for plan in plans}


def build_busy_intervals(
    day: date,
    plan: Optional[StudyPlan],
    commitments: list[FixedCommitment],
) -> list[TimeInterval]:
    """Merged busy intervals from sessions and commitments on ``day``."""
    intervals: list[TimeInterval] = []
    if plan is not None:
        for session in plan.sessions:
            if not session.counts_toward_total:
                continue
            intervals.append(interval_from_times(session.start_time, session.end_time))

    weekday = sunday_first_weekday(day)
    for commitment in commitments:
        if not commitment.applies_on(day, weekday):
            continue
        start_time, end_time = commitment.times_on(day)
        intervals.append(interval_from_times(start_time, end_time))

    return merge_intervals([interval for interval in intervals if interval.end_minutes > interval.start_minutes])


class AvailabilityService:
    """
    Free-window queries over a plan collection.

    Provides:
    - Per-day free windows (``get_daily_available_slots``)
    - Forward search for the first window that fits (``find_next_available_time_slot``)
    """

    def __init__(self, slot_search_days: Optional[int] = None):
        self.slot_search_days = slot_search_days or get_settings().SLOT_SEARCH_DAYS

    def get_daily_available_slots(
        self,
        day: date,
        plan: Optional[StudyPlan],
        commitments: list[FixedCommitment],
        settings: UserSettings,
    ) -> list[TimeSlot]:
        """
        Free windows of at least ``min_session_length`` within the study window.

        Args:
            day: Calendar date to inspect
            plan: The day's plan, or None when the day has no plan yet
            commitments: All fixed commitments (filtered to ``day`` here)
            settings: Study window and minimum session length

        Returns:
            Ordered free windows; empty for a locked day.
        """
        if plan is not None and plan.is_locked:
            return []

        window_start = settings.study_window_start_hour * 60
        window_end = settings.study_window_end_hour * 60
        min_minutes = settings.min_session_hours * 60

        slots: list[TimeSlot] = []

        def add_gap(start: int, end: int) -> None:
            end = min(end, window_end)
            if end - start >= min_minutes and end > start:
                slots.append(
                    TimeSlot(
                        start=to_clock_time(start),
                        end=to_clock_time(end),
                        duration=(end - start) / 60,
                    )
                )

        current = window_start
        for interval in build_busy_intervals(day, plan, commitments):
            if current >= window_end:
                break
            if interval.start_minutes > current:
                add_gap(current, interval.start_minutes)
            current = max(current, interval.end_minutes)

        if current < window_end:
            add_gap(current, window_end)

        return slots

    @staticmethod
    def first_fitting_slot(slots: list[TimeSlot], hours: float) -> Optional[TimeSlot]:
        """First window long enough for ``hours``, truncated to exactly that length."""
        required = hours_to_minutes(hours)
        for slot in slots:
            if round(slot.duration * 60) >= required:
                return TimeSlot(
                    start=slot.start,
                    end=add_hours_to_time(slot.start, hours),
                    duration=required / 60,
                )
        return None

    def find_next_available_time_slot(
        self,
        hours: float,
        from_date: date,
        plans: PlanSource,
        settings: UserSettings,
        commitments: list[FixedCommitment],
        max_days_to_search: Optional[int] = None,
        exclude_dates: Optional[set[date]] = None,
    ) -> Optional[SlotAssignment]:
        """
        Scan forward day by day for the first window that fits ``hours``.

        Non-work weekdays, locked days and ``exclude_dates`` are skipped.

        Returns:
            The placement, or None once the search horizon is exhausted.
        """
        horizon = self.slot_search_days if max_days_to_search is None else max_days_to_search
        lookup = _plan_lookup(plans)
        excluded = exclude_dates or set()

        for day in iter_days(from_date, horizon):
            if day in excluded or not is_work_day(day, settings.work_days):
                continue
            plan = lookup.get(day)
            if plan is not None and plan.is_locked:
                continue
            slot = self.first_fitting_slot(
                self.get_daily_available_slots(day, plan, commitments, settings),
                hours,
            )
            if slot is not None:
                return SlotAssignment(date=day, start_time=slot.start, end_time=slot.end)

        logger.debug(f"No {hours}h slot within {horizon} days from {from_date}")
        return None
