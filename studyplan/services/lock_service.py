"""
Lock governance: deciding, toggling and auditing locked days.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from studyplan.core.config import get_settings
from studyplan.core.logger import setup_logger
from studyplan.models.commitment import FixedCommitment
from studyplan.models.enums import RedistributionPressure
from studyplan.models.lock import (
    AlternativeSlot,
    IntegrityReport,
    LockCheck,
    LockToggleResult,
    LockValidation,
    LockWithRedistributionResult,
    RedistributionCapacity,
)
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.plan_workspace import PlanWorkspace, find_plan
from studyplan.services.redistribution_service import RedistributionService
from studyplan.services.session_state import is_outstanding
from studyplan.utils.datetime_utils import get_today, is_weekend, is_work_day

logger = setup_logger(__name__)

CRITICAL_DEADLINE_DAYS = 2
HIGH_PRESSURE_RATIO = 0.8
MEDIUM_PRESSURE_RATIO = 0.5


def can_lock(day: date, plans: Iterable[StudyPlan]) -> LockCheck:
    """A day can be locked once it holds no outstanding sessions."""
    plan = find_plan(plans, day)
    if plan is None:
        return LockCheck(can_lock=True)
    pending = [session for session in plan.sessions if is_outstanding(session)]
    if pending:
        plural = "s" if len(pending) > 1 else ""
        return LockCheck(
            can_lock=False,
            reason=f"Day has {len(pending)} pending session{plural}",
            pending_sessions=len(pending),
        )
    return LockCheck(can_lock=True)


def validate_locked_days_integrity(
    before: Iterable[StudyPlan],
    after: Iterable[StudyPlan],
) -> IntegrityReport:
    """Compare every plan locked in ``before`` with its counterpart in ``after``."""
    after_by_date = {plan.date: plan for plan in after}
    violations: list[str] = []
    for original in before:
        if not original.is_locked:
            continue
        updated = after_by_date.get(original.date)
        if updated is None:
            violations.append(f"Locked day {original.date} was removed")
            continue
        if not updated.is_locked:
            violations.append(f"Day {original.date} lost its locked status")
        if len(original.sessions) != len(updated.sessions):
            violations.append(f"Locked day {original.date} had sessions added or removed")
        for index, session in enumerate(original.sessions):
            other = updated.sessions[index] if index < len(updated.sessions) else None
            if (
                other is None
                or other.start_time != session.start_time
                or other.end_time != session.end_time
                or other.allocated_hours != session.allocated_hours
            ):
                violations.append(f"Session modified on locked day {original.date}")
    return IntegrityReport(is_valid=not violations, violations=violations)


class LockService:
    """
    Service for locking and unlocking days.

    Provides:
    - Hard lock check and soft validation with capacity analysis
    - Lock/unlock toggles on a copy of the plan collection
    - Lock with prior eviction of outstanding sessions
    """

    def __init__(
        self,
        redistribution: Optional[RedistributionService] = None,
        analysis_days: Optional[int] = None,
    ):
        self.redistribution = redistribution or RedistributionService()
        self.analysis_days = analysis_days or get_settings().LOCK_ANALYSIS_DAYS

    def analyze_redistribution_capacity(
        self,
        sessions: list[StudySession],
        plans: Iterable[StudyPlan],
        settings: UserSettings,
        today: Optional[date] = None,
    ) -> RedistributionCapacity:
        """Spare capacity over the days after today, classified as low/medium/high pressure."""
        start = get_today(today)
        plans_by_date = {plan.date: plan for plan in plans}
        hours_to_move = sum(session.allocated_hours for session in sessions)

        available_days: list[date] = []
        capacity = 0.0
        for offset in range(1, self.analysis_days + 1):
            day = start + timedelta(days=offset)
            if not is_work_day(day, settings.work_days):
                continue
            plan = plans_by_date.get(day)
            if plan is not None and plan.is_locked:
                continue
            load = sum(session.allocated_hours for session in plan.sessions) if plan else 0.0
            if load >= settings.daily_available_hours:
                continue
            available_days.append(day)
            capacity += settings.daily_available_hours - load

        pressure = RedistributionPressure.LOW
        if hours_to_move > capacity * HIGH_PRESSURE_RATIO:
            pressure = RedistributionPressure.HIGH
        elif hours_to_move > capacity * MEDIUM_PRESSURE_RATIO:
            pressure = RedistributionPressure.MEDIUM

        return RedistributionCapacity(
            hours_to_redistribute=hours_to_move,
            total_available_capacity=capacity,
            available_days=available_days,
            pressure=pressure,
        )

    @staticmethod
    def _is_critical(task: Optional[Task], day: date) -> bool:
        if task is None or not task.importance:
            return False
        return (task.deadline - day).days <= CRITICAL_DEADLINE_DAYS

    def validate_lock(
        self,
        day: date,
        plans: Iterable[StudyPlan],
        tasks: list[Task],
        settings: UserSettings,
        today: Optional[date] = None,
    ) -> LockValidation:
        """
        Blockers and warnings for locking ``day``.

        Outstanding sessions within two days of an important task's deadline
        block the lock. One-time tasks, weekend locks and high redistribution
        pressure only warn.
        """
        plans = list(plans)
        plan = find_plan(plans, day)
        if plan is None:
            return LockValidation(can_lock=True)

        task_map = {task.id: task for task in tasks}
        outstanding = [session for session in plan.sessions if is_outstanding(session)]
        warnings: list[str] = []
        blockers: list[str] = []

        critical = [
            session
            for session in outstanding
            if self._is_critical(task_map.get(session.task_id), day)
        ]
        if critical:
            blockers.append(
                f"Cannot lock day with {len(critical)} critical session(s) within "
                f"{CRITICAL_DEADLINE_DAYS} days of deadline"
            )

        one_time = [
            session
            for session in plan.sessions
            if session.task_id in task_map and task_map[session.task_id].is_one_time_task
        ]
        if one_time:
            warnings.append(
                f"Day contains {len(one_time)} one-time task(s) that may be difficult to reschedule"
            )

        if outstanding:
            warnings.append(f"{len(outstanding)} pending session(s) will be redistributed before locking")

        capacity = self.analyze_redistribution_capacity(outstanding, plans, settings, today)
        if capacity.pressure == RedistributionPressure.HIGH:
            warnings.append("High redistribution pressure - limited alternative slots available")

        if is_weekend(day) and plan.sessions:
            warnings.append("Locking weekend days may reduce weekly study capacity")

        return LockValidation(
            can_lock=not blockers,
            requires_redistribution=bool(outstanding),
            pending_sessions=len(outstanding),
            warnings=warnings,
            blockers=blockers,
            affected_sessions=list(plan.sessions),
            alternative_slots=[AlternativeSlot(date=entry) for entry in capacity.available_days],
            redistribution_pressure=capacity.pressure,
        )

    def lock_day(self, day: date, plans: Iterable[StudyPlan], settings: UserSettings) -> LockToggleResult:
        """Lock ``day`` on a copy; refused (no-op) while outstanding sessions remain."""
        workspace = PlanWorkspace(plans, default_available_hours=settings.daily_available_hours)
        check = can_lock(day, workspace.plans())
        if not check.can_lock:
            logger.warning(f"Cannot lock day {day}: {check.reason}")
            return LockToggleResult(success=False, date=day, reason=check.reason, plans=workspace.snapshot())

        workspace.set_locked(day, True)
        logger.info(f"Locked day: {day}")
        return LockToggleResult(success=True, date=day, plans=workspace.snapshot())

    def unlock_day(self, day: date, plans: Iterable[StudyPlan], settings: UserSettings) -> LockToggleResult:
        """Unlock ``day`` and reset its capacity to the user default."""
        workspace = PlanWorkspace(plans, default_available_hours=settings.daily_available_hours)
        if workspace.get(day) is None:
            reason = f"No plan found for date: {day}"
            logger.warning(reason)
            return LockToggleResult(success=False, date=day, reason=reason, plans=workspace.snapshot())

        workspace.set_locked(day, False, available_hours=settings.daily_available_hours)
        logger.info(f"Unlocked day: {day}")
        return LockToggleResult(success=True, date=day, plans=workspace.snapshot())

    def lock_day_with_redistribution(
        self,
        day: date,
        plans: Iterable[StudyPlan],
        tasks: list[Task],
        settings: UserSettings,
        commitments: list[FixedCommitment],
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> LockWithRedistributionResult:
        """Evict outstanding sessions from ``day``, then lock it if nothing is left behind."""
        eviction = self.redistribution.evict_sessions_from_day(
            plans, day, tasks, settings, commitments, today=today, now=now
        )
        lock = self.lock_day(day, eviction.modified_plans, settings)
        return LockWithRedistributionResult(eviction=eviction, lock=lock)
