"""
Mutable working copy of a plan collection.

Every engine entry point builds one ``PlanWorkspace`` from the caller's
snapshot, mutates only the workspace, and returns ``snapshot()``. The caller's
list and its plans are never aliased.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Iterator, Optional

from studyplan.core.logger import setup_logger
from studyplan.models.study_plan import StudyPlan, StudySession

logger = setup_logger(__name__)


class PlanWorkspace:
    """Exclusive, deep-copied plan collection keyed by date."""

    def __init__(self, plans: Iterable[StudyPlan], default_available_hours: float = 0.0):
        self.default_available_hours = default_available_hours
        self._plans: dict[date, StudyPlan] = {}
        for plan in plans:
            self._plans[plan.date] = plan.model_copy(deep=True)

    def get(self, day: date) -> Optional[StudyPlan]:
        return self._plans.get(day)

    def get_or_create(self, day: date) -> StudyPlan:
        plan = self._plans.get(day)
        if plan is None:
            plan = StudyPlan(date=day, available_hours=self.default_available_hours)
            self._plans[day] = plan
        return plan

    def is_locked(self, day: date) -> bool:
        plan = self._plans.get(day)
        return bool(plan and plan.is_locked)

    def plans(self) -> list[StudyPlan]:
        """Live plans in date order (for iteration inside a pass)."""
        return [self._plans[day] for day in sorted(self._plans)]

    def iter_sessions(self, task_id: Optional[str] = None) -> Iterator[tuple[StudyPlan, StudySession]]:
        for plan in self.plans():
            for session in plan.sessions:
                if task_id is None or session.task_id == task_id:
                    yield plan, session

    def add_session(self, session: StudySession, day: date) -> bool:
        """
        Append a session to the day's plan, creating the plan if absent.

        Returns:
            False (and leaves the workspace unchanged) when the day is locked.
        """
        existing = self._plans.get(day)
        if existing is not None and existing.is_locked:
            logger.warning(f"Rejected session for task {session.task_id}: {day} is locked")
            return False
        plan = self.get_or_create(day)
        plan.sessions.append(session)
        plan.recalculate_total()
        return True

    def remove_session(self, day: date, task_id: str, session_number: int) -> Optional[StudySession]:
        """Remove one session from an unlocked day; locked days are never touched."""
        plan = self._plans.get(day)
        if plan is None:
            return None
        if plan.is_locked:
            logger.warning(f"Rejected removal of task {task_id} session {session_number}: {day} is locked")
            return None
        for index, session in enumerate(plan.sessions):
            if session.task_id == task_id and session.session_number == session_number:
                removed = plan.sessions.pop(index)
                plan.recalculate_total()
                return removed
        return None

    def evict_session(self, day: date, task_id: str, session_number: int) -> Optional[StudySession]:
        """Remove a session from a day explicitly targeted for eviction, locked or not."""
        plan = self._plans.get(day)
        if plan is None:
            return None
        for index, session in enumerate(plan.sessions):
            if session.task_id == task_id and session.session_number == session_number:
                removed = plan.sessions.pop(index)
                plan.recalculate_total()
                return removed
        return None

    def next_session_number(self, task_id: str) -> int:
        numbers = [session.session_number for _, session in self.iter_sessions(task_id)]
        return max(numbers, default=0) + 1

    def set_locked(self, day: date, locked: bool, available_hours: Optional[float] = None) -> StudyPlan:
        plan = self._plans.get(day)
        if plan is None:
            plan = StudyPlan(date=day, available_hours=available_hours or 0.0, is_locked=locked)
            self._plans[day] = plan
            return plan
        plan.is_locked = locked
        if available_hours is not None:
            plan.available_hours = available_hours
        return plan

    def snapshot(self) -> list[StudyPlan]:
        """Independent copy of the workspace, sorted by date."""
        return [plan.model_copy(deep=True) for plan in self.plans()]


def find_plan(plans: Iterable[StudyPlan], day: date) -> Optional[StudyPlan]:
    return next((plan for plan in plans if plan.date == day), None)
