"""
Plan generation: allocate each pending task's outstanding hours to days.

Locked days are copied through untouched, never receive sessions, and their
hours count as already allocated.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

from studyplan.core.logger import setup_logger
from studyplan.models.commitment import FixedCommitment
from studyplan.models.enums import DistributionStrategy, EisenhowerQuadrant, SessionStatus, StudyPlanMode
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.availability_service import AvailabilityService
from studyplan.services.distribution import distribute
from studyplan.services.plan_workspace import PlanWorkspace
from studyplan.services.priority import eisenhower_quadrant
from studyplan.services.remaining_work import calculate_remaining_hours, remove_unlocked_sessions
from studyplan.utils.datetime_utils import buffered_deadline, get_today, is_work_day

logger = setup_logger(__name__)

QUADRANT_ORDER = (
    EisenhowerQuadrant.IMPORTANT_URGENT,
    EisenhowerQuadrant.IMPORTANT_NOT_URGENT,
    EisenhowerQuadrant.NOT_IMPORTANT_URGENT,
    EisenhowerQuadrant.NOT_IMPORTANT_NOT_URGENT,
)

QUADRANT_STRATEGIES: dict[EisenhowerQuadrant, DistributionStrategy] = {
    EisenhowerQuadrant.IMPORTANT_URGENT: DistributionStrategy.FRONT_LOAD,
    EisenhowerQuadrant.IMPORTANT_NOT_URGENT: DistributionStrategy.EVEN,
    EisenhowerQuadrant.NOT_IMPORTANT_URGENT: DistributionStrategy.FRONT_LOAD,
    EisenhowerQuadrant.NOT_IMPORTANT_NOT_URGENT: DistributionStrategy.BACK_LOAD,
}


class PlanGeneratorService:
    """
    Service for generating study plans around locked days.

    Provides:
    - Remaining-hour driven regeneration (idempotent for identical inputs)
    - Even, balanced and Eisenhower task-ordering policies
    """

    def __init__(self, availability: Optional[AvailabilityService] = None):
        self.availability = availability or AvailabilityService()

    def generate_plan(
        self,
        tasks: list[Task],
        settings: UserSettings,
        commitments: list[FixedCommitment],
        existing_plans: Iterable[StudyPlan] = (),
        today: Optional[date] = None,
    ) -> list[StudyPlan]:
        """
        Regenerate sessions for every pending task with outstanding hours.

        Args:
            tasks: All tasks (non-pending ones are ignored)
            settings: User scheduling preferences
            commitments: Fixed commitments that block time
            existing_plans: Current plan collection (never mutated)
            today: Reference date (defaults to the local date)

        Returns:
            New plan collection sorted by date.
        """
        current_day = get_today(today)
        workspace = PlanWorkspace(existing_plans, default_available_hours=settings.daily_available_hours)

        schedulable: list[Task] = []
        for task in tasks:
            if not task.is_pending:
                continue
            remaining = calculate_remaining_hours(task, workspace)
            if remaining <= 0:
                continue
            schedulable.append(task.model_copy(update={"remaining_hours": remaining}))

        logger.info(
            f"Generating {settings.study_plan_mode.value} plan for {len(schedulable)} task(s) "
            f"with remaining hours"
        )
        if not schedulable:
            return workspace.snapshot()

        for task in schedulable:
            remove_unlocked_sessions(task.id, workspace)

        for task, strategy in self.order_tasks(schedulable, settings.study_plan_mode, current_day):
            self.schedule_task(task, strategy, workspace, settings, commitments, current_day)

        return workspace.snapshot()

    @staticmethod
    def order_tasks(
        tasks: list[Task],
        mode: StudyPlanMode,
        today: date,
    ) -> list[tuple[Task, DistributionStrategy]]:
        """Scheduling order and per-task strategy for a task-ordering policy."""
        if mode == StudyPlanMode.EISENHOWER:
            buckets: dict[EisenhowerQuadrant, list[Task]] = {quadrant: [] for quadrant in QUADRANT_ORDER}
            for task in tasks:
                buckets[eisenhower_quadrant(task, today)].append(task)
            return [
                (task, QUADRANT_STRATEGIES[quadrant])
                for quadrant in QUADRANT_ORDER
                for task in buckets[quadrant]
            ]
        if mode == StudyPlanMode.BALANCED:
            important = [task for task in tasks if task.importance]
            regular = [task for task in tasks if not task.importance]
            return [(task, DistributionStrategy.EVEN) for task in important + regular]
        if mode == StudyPlanMode.EVEN:
            ordered = sorted(tasks, key=lambda task: (not task.importance, task.deadline))
            return [(task, DistributionStrategy.EVEN) for task in ordered]
        raise ValueError(f"Unsupported study plan mode: {mode}")

    @staticmethod
    def get_eligible_days(
        task: Task,
        workspace: PlanWorkspace,
        settings: UserSettings,
        today: date,
    ) -> list[date]:
        """Unlocked work days from today through the buffered deadline."""
        last_day = buffered_deadline(task.deadline, settings.buffer_days)
        days: list[date] = []
        cursor = today
        while cursor <= last_day:
            if is_work_day(cursor, settings.work_days) and not workspace.is_locked(cursor):
                days.append(cursor)
            cursor += timedelta(days=1)
        return days

    def schedule_task(
        self,
        task: Task,
        strategy: DistributionStrategy,
        workspace: PlanWorkspace,
        settings: UserSettings,
        commitments: list[FixedCommitment],
        today: date,
    ) -> float:
        """
        Place one task's remaining hours on its eligible days.

        Returns:
            Hours actually placed. Portions with no fitting window are not placed.
        """
        remaining = task.remaining_hours or 0.0
        if remaining <= 0:
            return 0.0

        eligible_days = self.get_eligible_days(task, workspace, settings, today)
        if not eligible_days:
            logger.warning(f"No available days for task '{task.title}' before {task.deadline}")
            return 0.0

        daily_hours = distribute(remaining, len(eligible_days), strategy)
        logger.debug(f"Distribution for '{task.title}' ({strategy.value}): {daily_hours}")

        session_number = workspace.next_session_number(task.id)
        placed = 0.0
        for day, hours in zip(eligible_days, daily_hours):
            if hours <= 0:
                continue
            slot = self.availability.find_next_available_time_slot(
                hours,
                day,
                workspace,
                settings,
                commitments,
                max_days_to_search=1,
            )
            if slot is None or slot.date != day:
                logger.warning(f"No time slot for '{task.title}' on {day} ({hours}h)")
                continue
            session = StudySession(
                task_id=task.id,
                session_number=session_number,
                start_time=slot.start_time,
                end_time=slot.end_time,
                allocated_hours=hours,
                status=SessionStatus.SCHEDULED,
            )
            if workspace.add_session(session, day):
                session_number += 1
                placed += hours

        if placed + 0.01 < remaining:
            logger.warning(
                f"Placed {placed:.2f}h of {remaining:.2f}h for '{task.title}'; "
                f"{remaining - placed:.2f}h has no feasible slot"
            )
        return placed
