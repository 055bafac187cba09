"""
Redistribution engine.

Two passes move sessions without changing their task or hours:
- missed sessions on past unlocked days move forward to the next free slot
- sessions on a day being locked move to other open days

Neither pass writes to a locked plan other than the day explicitly being
evicted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from studyplan.core.config import get_settings
from studyplan.core.logger import setup_logger
from studyplan.models.commitment import FixedCommitment
from studyplan.models.enums import SessionState, SessionStatus
from studyplan.models.redistribution import (
    FailedSession,
    LockEvictionResult,
    MissedRedistributionResult,
    RedistributionDetails,
    RedistributionFeedback,
)
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import SlotAssignment, StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.availability_service import AvailabilityService
from studyplan.services.plan_workspace import PlanWorkspace
from studyplan.services.priority import eviction_priority, missed_session_priority
from studyplan.services.session_state import get_session_state
from studyplan.utils.datetime_utils import buffered_deadline, get_now, is_work_day, iter_days

logger = setup_logger(__name__)

MISSED_SLOT_NOT_FOUND = "No available slot found before the task deadline"
EVICTION_SLOT_NOT_FOUND = "No available slots found within deadline"

FAILURE_SUGGESTIONS = [
    "Consider increasing daily available hours",
    "Add more work days to your schedule",
    "Extend task deadlines if possible",
]


@dataclass
class _Candidate:
    session: StudySession
    plan_date: date
    task: Task
    priority: float


def _moved_session(session: StudySession, slot: SlotAssignment, origin: date, moved_at: datetime) -> StudySession:
    return session.model_copy(
        update={
            "start_time": slot.start_time,
            "end_time": slot.end_time,
            "status": SessionStatus.RESCHEDULED,
            "is_manual_override": False,
            "original_time": session.start_time,
            "original_date": origin,
            "rescheduled_at": moved_at,
        }
    )


class RedistributionService:
    """
    Service for moving sessions between days.

    Provides:
    - Missed-session redistribution with feedback
    - Eviction of sessions from a day that is being locked
    """

    def __init__(
        self,
        availability: Optional[AvailabilityService] = None,
        lock_search_days: Optional[int] = None,
    ):
        self.availability = availability or AvailabilityService()
        self.lock_search_days = lock_search_days or get_settings().LOCK_REDISTRIBUTION_DAYS

    def redistribute_missed_sessions(
        self,
        plans: Iterable[StudyPlan],
        settings: UserSettings,
        commitments: list[FixedCommitment],
        tasks: list[Task],
        now: Optional[datetime] = None,
    ) -> MissedRedistributionResult:
        """
        Move missed sessions from past unlocked days to the next feasible slot.

        Sessions are processed by descending priority. A session with no slot
        before its task's buffered deadline stays where it is and is reported.
        """
        current = get_now(now)
        today = current.date()
        workspace = PlanWorkspace(plans, default_available_hours=settings.daily_available_hours)
        task_map = {task.id: task for task in tasks}

        candidates: list[_Candidate] = []
        for plan in workspace.plans():
            if plan.is_locked or plan.date >= today:
                continue
            for session in plan.sessions:
                if get_session_state(session, plan.date, current) != SessionState.MISSED:
                    continue
                task = task_map.get(session.task_id)
                if task is None or not task.is_pending:
                    continue
                candidates.append(
                    _Candidate(session, plan.date, task, missed_session_priority(task, today))
                )

        logger.info(f"Found {len(candidates)} missed session(s) to redistribute")
        if not candidates:
            return MissedRedistributionResult(
                updated_plans=workspace.snapshot(),
                feedback=RedistributionFeedback(
                    success=True,
                    message="No missed sessions found to redistribute.",
                ),
            )

        candidates.sort(key=lambda candidate: -candidate.priority)

        moved: list[StudySession] = []
        failed: list[FailedSession] = []
        for candidate in candidates:
            session = candidate.session
            last_day = buffered_deadline(candidate.task.deadline, settings.buffer_days)
            search_days = (last_day - today).days + 1
            slot = None
            if search_days > 0:
                slot = self.availability.find_next_available_time_slot(
                    session.allocated_hours,
                    today,
                    workspace,
                    settings,
                    commitments,
                    max_days_to_search=search_days,
                    exclude_dates={candidate.plan_date},
                )
            if slot is None:
                logger.warning(
                    f"Could not find a slot for '{candidate.task.title}' session "
                    f"{session.session_number} from {candidate.plan_date}"
                )
                failed.append(
                    FailedSession(session=session, plan_date=candidate.plan_date, reason=MISSED_SLOT_NOT_FOUND)
                )
                continue

            new_session = _moved_session(session, slot, candidate.plan_date, current)
            if not workspace.add_session(new_session, slot.date):
                failed.append(
                    FailedSession(session=session, plan_date=candidate.plan_date, reason=MISSED_SLOT_NOT_FOUND)
                )
                continue
            workspace.remove_session(candidate.plan_date, session.task_id, session.session_number)
            moved.append(new_session)
            logger.debug(
                f"Moved '{candidate.task.title}' session {session.session_number} to "
                f"{slot.date} {slot.start_time}-{slot.end_time}"
            )

        return MissedRedistributionResult(
            updated_plans=workspace.snapshot(),
            moved_sessions=moved,
            failed_sessions=failed,
            feedback=self._build_feedback(len(candidates), moved, failed),
        )

    @staticmethod
    def _build_feedback(
        total: int,
        moved: list[StudySession],
        failed: list[FailedSession],
    ) -> RedistributionFeedback:
        if moved:
            message = f"Successfully redistributed {len(moved)} of {total} missed sessions."
        else:
            message = f"Could not redistribute any of the {total} missed sessions."
        return RedistributionFeedback(
            success=len(moved) > 0,
            message=message,
            details=RedistributionDetails(
                total_missed=total,
                successfully_moved=len(moved),
                failed_to_move=len(failed),
                conflicts_detected=len(failed) > 0,
                priority_order_used=True,
                issues=(
                    ["Some sessions could not be redistributed due to scheduling conflicts"]
                    if failed
                    else []
                ),
                suggestions=list(FAILURE_SUGGESTIONS) if failed else [],
            ),
        )

    def evict_sessions_from_day(
        self,
        plans: Iterable[StudyPlan],
        locked_date: date,
        tasks: list[Task],
        settings: UserSettings,
        commitments: list[FixedCommitment],
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> LockEvictionResult:
        """
        Move outstanding sessions off ``locked_date`` onto other open days.

        Destination days are searched over the next ``lock_search_days`` days,
        bounded by the buffered deadline, and must be unlocked work days with
        spare daily capacity.
        """
        current = get_now(now)
        current_day = today or current.date()
        workspace = PlanWorkspace(plans, default_available_hours=settings.daily_available_hours)
        task_map = {task.id: task for task in tasks}

        origin = workspace.get(locked_date)
        candidates: list[_Candidate] = []
        if origin is not None:
            for session in origin.sessions:
                if session.is_finished:
                    continue
                task = task_map.get(session.task_id)
                if task is None or not task.is_pending:
                    continue
                candidates.append(
                    _Candidate(session, locked_date, task, eviction_priority(task, current_day))
                )
        candidates.sort(key=lambda candidate: -candidate.priority)

        moved: list[StudySession] = []
        failed: list[FailedSession] = []
        for candidate in candidates:
            slot = self._find_eviction_slot(candidate, workspace, settings, commitments, current_day)
            new_session = _moved_session(candidate.session, slot, locked_date, current) if slot else None
            if new_session is None or not workspace.add_session(new_session, slot.date):
                failed.append(
                    FailedSession(
                        session=candidate.session,
                        plan_date=locked_date,
                        reason=EVICTION_SLOT_NOT_FOUND,
                    )
                )
                continue
            workspace.evict_session(locked_date, candidate.session.task_id, candidate.session.session_number)
            moved.append(new_session)

        if failed:
            logger.warning(f"{len(failed)} session(s) could not be moved off {locked_date}")
        logger.info(f"Evicted {len(moved)} session(s) from {locked_date}")

        return LockEvictionResult(
            success=not failed,
            locked_date=locked_date,
            redistributed_sessions=moved,
            failed_sessions=failed,
            modified_plans=workspace.snapshot(),
            message=(
                f"Moved {len(moved)} of {len(candidates)} session(s) off {locked_date}."
                if candidates
                else f"No sessions to move off {locked_date}."
            ),
        )

    def _find_eviction_slot(
        self,
        candidate: _Candidate,
        workspace: PlanWorkspace,
        settings: UserSettings,
        commitments: list[FixedCommitment],
        today: date,
    ) -> Optional[SlotAssignment]:
        hours = candidate.session.allocated_hours
        last_day = buffered_deadline(candidate.task.deadline, settings.buffer_days)
        for day in iter_days(today, self.lock_search_days):
            if day > last_day:
                break
            if not is_work_day(day, settings.work_days) or day == candidate.plan_date:
                continue
            plan = workspace.get(day)
            if plan is not None and plan.is_locked:
                continue
            current_load = plan.recalculate_total() if plan is not None else 0.0
            if current_load + hours > settings.daily_available_hours + 1e-9:
                continue
            slot = self.availability.first_fitting_slot(
                self.availability.get_daily_available_slots(day, plan, commitments, settings),
                hours,
            )
            if slot is not None:
                return SlotAssignment(date=day, start_time=slot.start, end_time=slot.end)
        return None
