"""
Session-level edits: merging same-task sessions and manual time changes.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from studyplan.core.config import get_settings
from studyplan.core.exceptions import LockedDayError, NotFoundError, ValidationError
from studyplan.core.logger import setup_logger
from studyplan.models.enums import SessionStatus
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.services.plan_workspace import PlanWorkspace
from studyplan.utils.intervals import add_hours_to_time, format_hours, is_valid_clock_time, to_minutes

logger = setup_logger(__name__)


def _is_mergeable(session: StudySession) -> bool:
    return not session.done and session.status not in (SessionStatus.SKIPPED, SessionStatus.COMPLETED)


class SessionService:
    """Same-day merging and manual start-time edits on a copy of the plans."""

    def __init__(self, max_session_hours: Optional[float] = None):
        self.max_session_hours = max_session_hours or get_settings().MAX_SESSION_HOURS

    def combine_sessions(
        self,
        plans: Iterable[StudyPlan],
        settings: UserSettings,
        target_date: Optional[date] = None,
    ) -> list[StudyPlan]:
        """
        Merge each task's open sessions on a day into one session.

        A group is merged only when its summed hours fall within
        ``[min_session_length, min(max_session_hours, daily_available_hours)]``.
        The merged session starts at the group's earliest start and keeps the
        smallest session number. Locked days are skipped.

        Args:
            plans: Current plan collection (never mutated)
            settings: Minimum session length and daily capacity
            target_date: Restrict merging to one day (None = every unlocked day)
        """
        workspace = PlanWorkspace(plans, default_available_hours=settings.daily_available_hours)
        max_hours = min(self.max_session_hours, settings.daily_available_hours)
        min_hours = settings.min_session_hours

        for plan in workspace.plans():
            if plan.is_locked or (target_date is not None and plan.date != target_date):
                continue

            merged_any = False
            groups: dict[str, list[StudySession]] = {}
            for session in plan.sessions:
                if _is_mergeable(session):
                    groups.setdefault(session.task_id, []).append(session)

            for task_id, sessions in groups.items():
                if len(sessions) < 2:
                    continue
                sessions.sort(key=lambda entry: to_minutes(entry.start_time))
                total_hours = round(sum(entry.allocated_hours for entry in sessions), 4)
                if total_hours < min_hours or total_hours > max_hours:
                    continue

                merged = sessions[0].model_copy(
                    update={
                        "end_time": add_hours_to_time(sessions[0].start_time, total_hours),
                        "allocated_hours": total_hours,
                        "session_number": min(entry.session_number for entry in sessions),
                    }
                )
                plan.sessions = [
                    entry
                    for entry in plan.sessions
                    if entry.task_id != task_id or not _is_mergeable(entry)
                ]
                plan.sessions.append(merged)
                merged_any = True
                logger.info(
                    f"Combined {len(sessions)} sessions for {task_id} on {plan.date}: "
                    f"{format_hours(total_hours)}"
                )

            if merged_any:
                plan.recalculate_total()

        return workspace.snapshot()

    def update_session_start_time(
        self,
        plans: Iterable[StudyPlan],
        day: date,
        task_id: str,
        session_number: int,
        new_start_time: str,
    ) -> list[StudyPlan]:
        """
        Move a session's start time, keeping its end time.

        Raises:
            ValidationError: Malformed time or start not before end
            NotFoundError: No such plan or session
            LockedDayError: The day is locked
        """
        if not is_valid_clock_time(new_start_time):
            raise ValidationError("Please enter a valid time in HH:MM format", details={"start_time": new_start_time})

        workspace = PlanWorkspace(plans)
        plan = workspace.get(day)
        if plan is None:
            raise NotFoundError(f"No plan found for date: {day}")
        if plan.is_locked:
            raise LockedDayError(f"Day {day} is locked", details={"date": day.isoformat()})

        session = plan.find_session(task_id, session_number)
        if session is None:
            raise NotFoundError(f"Session {session_number} of task {task_id} not found on {day}")

        start_minutes = to_minutes(new_start_time)
        end_minutes = to_minutes(session.end_time)
        if start_minutes >= end_minutes:
            raise ValidationError("Start time must be before end time")

        session.start_time = f"{start_minutes // 60:02d}:{start_minutes % 60:02d}"
        session.allocated_hours = round((end_minutes - start_minutes) / 60, 4)
        session.is_manual_override = True
        plan.recalculate_total()
        return workspace.snapshot()
