"""
Remaining-work accounting.

Hours already accounted for are those done, completed, skipped or sitting on
a locked day. Everything else still needs a placement. Results are computed
fresh on every call because lock and completion state change between calls.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.plan_workspace import PlanWorkspace


def _iter_plans(plans: Iterable[StudyPlan] | PlanWorkspace) -> Iterable[StudyPlan]:
    if isinstance(plans, PlanWorkspace):
        return plans.plans()
    return plans


def calculate_accounted_hours(task_id: str, plans: Iterable[StudyPlan] | PlanWorkspace) -> float:
    total = 0.0
    for plan in _iter_plans(plans):
        for session in plan.sessions:
            if session.task_id != task_id:
                continue
            if session.is_finished or plan.is_locked:
                total += session.allocated_hours
    return total


def calculate_remaining_hours(task: Task, plans: Iterable[StudyPlan] | PlanWorkspace) -> float:
    """Outstanding hours: ``max(0, estimated - accounted)``."""
    remaining = task.estimated_hours - calculate_accounted_hours(task.id, plans)
    return max(0.0, round(remaining, 4))


def get_unlocked_sessions(
    task_id: str,
    plans: Iterable[StudyPlan] | PlanWorkspace,
) -> list[tuple[date, StudySession]]:
    """Sessions on unlocked days that are not finished (eligible for replacement)."""
    unlocked: list[tuple[date, StudySession]] = []
    for plan in _iter_plans(plans):
        if plan.is_locked:
            continue
        for session in plan.sessions:
            if session.task_id == task_id and not session.is_finished:
                unlocked.append((plan.date, session))
    return unlocked


def remove_unlocked_sessions(task_id: str, workspace: PlanWorkspace) -> int:
    """
    Purge the task's replaceable sessions from unlocked days.

    Returns:
        Number of sessions removed. Touched plans get their totals recomputed.
    """
    removed = 0
    for plan in workspace.plans():
        if plan.is_locked:
            continue
        kept = [
            session
            for session in plan.sessions
            if session.task_id != task_id or session.is_finished
        ]
        if len(kept) != len(plan.sessions):
            removed += len(plan.sessions) - len(kept)
            plan.sessions = kept
            plan.recalculate_total()
    return removed


def get_locked_sessions_count(task_id: str, plans: Iterable[StudyPlan] | PlanWorkspace) -> int:
    return sum(
        1
        for plan in _iter_plans(plans)
        if plan.is_locked
        for session in plan.sessions
        if session.task_id == task_id
    )


def get_locked_hours_for_task(task_id: str, plans: Iterable[StudyPlan] | PlanWorkspace) -> float:
    return sum(
        session.allocated_hours
        for plan in _iter_plans(plans)
        if plan.is_locked
        for session in plan.sessions
        if session.task_id == task_id
    )
