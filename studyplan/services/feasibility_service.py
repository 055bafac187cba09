"""
Feasibility checks that guard task and commitment edits.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from studyplan.core.config import get_settings
from studyplan.models.commitment import CommitmentCandidate, FixedCommitment
from studyplan.models.enums import ConflictType, DeadlineType, TargetFrequency
from studyplan.models.feasibility import CommitmentConflict, FrequencyConflict
from studyplan.models.settings import UserSettings
from studyplan.models.task import Task
from studyplan.utils.datetime_utils import get_today
from studyplan.utils.intervals import format_hours, interval_from_times, intervals_overlap


def check_frequency_deadline_conflict(
    task: Task,
    settings: UserSettings,
    today: Optional[date] = None,
    max_session_hours: Optional[float] = None,
) -> FrequencyConflict:
    """
    Whether the task's cadence can cover its hours before the buffered deadline.

    Sessions obtainable per cadence:
    - daily: work days in the window
    - 3x-week: three per started week
    - weekly: one per started week
    - flexible: as many as the hours need
    """
    if task.deadline_type == DeadlineType.NONE:
        return FrequencyConflict(has_conflict=False)

    days_until_deadline = (task.deadline - get_today(today)).days
    effective_days = max(1, days_until_deadline - settings.buffer_days)
    work_days_in_period = math.ceil(effective_days * len(settings.work_days) / 7)
    per_session = min(
        max_session_hours or get_settings().MAX_SESSION_HOURS,
        settings.daily_available_hours,
    )

    frequency = task.target_frequency
    if frequency == TargetFrequency.THREE_TIMES_WEEK:
        sessions = math.ceil(effective_days / 7) * 3
    elif frequency == TargetFrequency.WEEKLY:
        sessions = math.ceil(effective_days / 7)
    elif frequency == TargetFrequency.FLEXIBLE:
        sessions = math.ceil(task.estimated_hours / per_session) if per_session > 0 else 0
    else:
        sessions = work_days_in_period

    max_total_hours = sessions * per_session
    if task.estimated_hours > max_total_hours:
        label = frequency.value if frequency else TargetFrequency.DAILY.value
        return FrequencyConflict(
            has_conflict=True,
            reason=(
                f"{label} frequency allows only {sessions} sessions "
                f"({format_hours(max_total_hours)}) but task needs {format_hours(task.estimated_hours)}"
            ),
            recommended_frequency=TargetFrequency.DAILY,
            sessions_available=sessions,
            max_total_hours=max_total_hours,
        )
    return FrequencyConflict(has_conflict=False, sessions_available=sessions, max_total_hours=max_total_hours)


def check_commitment_conflicts(
    candidate: CommitmentCandidate,
    existing: list[FixedCommitment],
    exclude_commitment_id: Optional[str] = None,
) -> CommitmentConflict:
    """
    First existing commitment whose time and date domain overlap the candidate.

    Recurring vs recurring compares weekdays, one-off vs one-off compares
    dates, and a mixed pair is reported as an override rather than a strict
    conflict.
    """
    new_interval = interval_from_times(candidate.start_time, candidate.end_time)
    for commitment in existing:
        if exclude_commitment_id and commitment.id == exclude_commitment_id:
            continue
        if not intervals_overlap(new_interval, interval_from_times(commitment.start_time, commitment.end_time)):
            continue

        if candidate.recurring and commitment.recurring:
            if set(candidate.days_of_week) & set(commitment.days_of_week):
                return CommitmentConflict(
                    has_conflict=True,
                    conflict_type=ConflictType.STRICT,
                    conflicting_commitment=commitment,
                )
        elif not candidate.recurring and not commitment.recurring:
            shared = sorted(set(candidate.specific_dates) & set(commitment.specific_dates))
            if shared:
                return CommitmentConflict(
                    has_conflict=True,
                    conflict_type=ConflictType.STRICT,
                    conflicting_commitment=commitment,
                    conflicting_dates=shared,
                )
        else:
            return CommitmentConflict(
                has_conflict=True,
                conflict_type=ConflictType.OVERRIDE,
                conflicting_commitment=commitment,
                conflicting_dates=list(candidate.specific_dates),
            )
    return CommitmentConflict(has_conflict=False)
