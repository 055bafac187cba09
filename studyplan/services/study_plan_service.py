"""
Persistence orchestrator for the study plan engine.

Loads a user's snapshot from the repositories, runs one engine pass, checks
that no locked day was touched and saves the resulting plan collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from studyplan.core.exceptions import IntegrityViolationError
from studyplan.core.logger import setup_logger
from studyplan.interfaces.commitment_repository import ICommitmentRepository
from studyplan.interfaces.study_plan_repository import IStudyPlanRepository
from studyplan.interfaces.task_repository import ITaskRepository
from studyplan.interfaces.user_settings_repository import IUserSettingsRepository
from studyplan.models.commitment import FixedCommitment
from studyplan.models.lock import LockToggleResult, LockWithRedistributionResult
from studyplan.models.redistribution import MissedRedistributionResult
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan
from studyplan.models.task import Task
from studyplan.services.lock_service import LockService, validate_locked_days_integrity
from studyplan.services.plan_generator import PlanGeneratorService
from studyplan.services.redistribution_service import RedistributionService
from studyplan.services.session_service import SessionService

logger = setup_logger(__name__)


@dataclass
class PlanningSnapshot:
    tasks: list[Task]
    plans: list[StudyPlan]
    commitments: list[FixedCommitment]
    settings: UserSettings


class StudyPlanService:
    def __init__(
        self,
        task_repo: ITaskRepository,
        plan_repo: IStudyPlanRepository,
        commitment_repo: ICommitmentRepository,
        settings_repo: IUserSettingsRepository,
        generator: Optional[PlanGeneratorService] = None,
        redistribution: Optional[RedistributionService] = None,
        lock_service: Optional[LockService] = None,
        session_service: Optional[SessionService] = None,
    ):
        self._task_repo = task_repo
        self._plan_repo = plan_repo
        self._commitment_repo = commitment_repo
        self._settings_repo = settings_repo
        self._generator = generator or PlanGeneratorService()
        self._redistribution = redistribution or RedistributionService()
        self._lock_service = lock_service or LockService(redistribution=self._redistribution)
        self._session_service = session_service or SessionService()

    async def _load(self, user_id: str) -> PlanningSnapshot:
        tasks = await self._task_repo.list(user_id, include_completed=True)
        plans = await self._plan_repo.list(user_id)
        commitments = await self._commitment_repo.list(user_id)
        settings = await self._settings_repo.get(user_id)
        return PlanningSnapshot(
            tasks=tasks,
            plans=plans,
            commitments=commitments,
            settings=settings or UserSettings(),
        )

    async def _save(
        self,
        user_id: str,
        before: list[StudyPlan],
        after: list[StudyPlan],
    ) -> list[StudyPlan]:
        """
        Persist ``after`` once every locked day in ``before`` is intact.

        Raises:
            IntegrityViolationError: A locked day was changed by the pass
        """
        report = validate_locked_days_integrity(before, after)
        if not report.is_valid:
            logger.error(f"Locked-day integrity check failed for user {user_id}: {report.violations}")
            raise IntegrityViolationError("Locked days were modified", report.violations)
        return await self._plan_repo.save_all(user_id, after)

    async def regenerate_plan(self, user_id: str, today: Optional[date] = None) -> list[StudyPlan]:
        """Rebuild the unlocked part of the plan from current tasks and settings."""
        snapshot = await self._load(user_id)
        plans = self._generator.generate_plan(
            snapshot.tasks,
            snapshot.settings,
            snapshot.commitments,
            snapshot.plans,
            today=today,
        )
        logger.info(f"Regenerated {len(plans)} plan(s) for user {user_id}")
        return await self._save(user_id, snapshot.plans, plans)

    async def redistribute_missed(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> MissedRedistributionResult:
        snapshot = await self._load(user_id)
        result = self._redistribution.redistribute_missed_sessions(
            snapshot.plans,
            snapshot.settings,
            snapshot.commitments,
            snapshot.tasks,
            now=now,
        )
        saved = await self._save(user_id, snapshot.plans, result.updated_plans)
        return result.model_copy(update={"updated_plans": saved})

    async def combine_sessions(self, user_id: str, target_date: Optional[date] = None) -> list[StudyPlan]:
        snapshot = await self._load(user_id)
        plans = self._session_service.combine_sessions(snapshot.plans, snapshot.settings, target_date)
        return await self._save(user_id, snapshot.plans, plans)

    async def update_session_start_time(
        self,
        user_id: str,
        day: date,
        task_id: str,
        session_number: int,
        new_start_time: str,
    ) -> list[StudyPlan]:
        snapshot = await self._load(user_id)
        plans = self._session_service.update_session_start_time(
            snapshot.plans, day, task_id, session_number, new_start_time
        )
        return await self._save(user_id, snapshot.plans, plans)

    async def toggle_lock(self, user_id: str, day: date, locked: bool) -> LockToggleResult:
        """
        Lock or unlock ``day``.

        A refused lock is returned as-is without saving. Unlocking exempts the
        target day from the integrity check.
        """
        snapshot = await self._load(user_id)
        if locked:
            result = self._lock_service.lock_day(day, snapshot.plans, snapshot.settings)
            before = snapshot.plans
        else:
            result = self._lock_service.unlock_day(day, snapshot.plans, snapshot.settings)
            before = [plan for plan in snapshot.plans if plan.date != day]
        if not result.success:
            return result
        saved = await self._save(user_id, before, result.plans)
        return result.model_copy(update={"plans": saved})

    async def lock_with_redistribution(
        self,
        user_id: str,
        day: date,
        now: Optional[datetime] = None,
    ) -> LockWithRedistributionResult:
        snapshot = await self._load(user_id)
        result = self._lock_service.lock_day_with_redistribution(
            day,
            snapshot.plans,
            snapshot.tasks,
            snapshot.settings,
            snapshot.commitments,
            today=now.date() if now else None,
            now=now,
        )
        after = result.lock.plans
        saved = await self._save(user_id, snapshot.plans, after)
        lock = result.lock.model_copy(update={"plans": saved})
        return result.model_copy(update={"lock": lock})
