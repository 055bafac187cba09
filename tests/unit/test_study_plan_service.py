from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from studyplan.core.exceptions import IntegrityViolationError
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.study_plan_service import StudyPlanService

USER_ID = "student-1"
MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)


def _build_session(task_id: str = "task-1", hours: float = 1.0) -> StudySession:
    return StudySession(
        task_id=task_id,
        session_number=1,
        start_time="09:00",
        end_time="10:00",
        allocated_hours=hours,
    )


def _build_task() -> Task:
    return Task(id="task-1", title="Essay", estimated_hours=3, deadline=date(2024, 1, 10))


def _build_service(plans: list[StudyPlan], **kwargs) -> tuple[StudyPlanService, AsyncMock]:
    task_repo = AsyncMock()
    task_repo.list.return_value = [_build_task()]
    plan_repo = AsyncMock()
    plan_repo.list.return_value = plans
    plan_repo.save_all.side_effect = lambda user_id, saved: saved
    commitment_repo = AsyncMock()
    commitment_repo.list.return_value = []
    settings_repo = AsyncMock()
    settings_repo.get.return_value = None
    service = StudyPlanService(
        task_repo=task_repo,
        plan_repo=plan_repo,
        commitment_repo=commitment_repo,
        settings_repo=settings_repo,
        **kwargs,
    )
    return service, plan_repo


@pytest.mark.asyncio
async def test_regenerate_plan_saves_new_collection() -> None:
    locked = StudyPlan(date=MONDAY, is_locked=True, sessions=[_build_session()], total_study_hours=1.0)
    service, plan_repo = _build_service([locked])

    saved = await service.regenerate_plan(USER_ID, today=MONDAY)

    plan_repo.save_all.assert_awaited_once()
    assert plan_repo.save_all.await_args.args[0] == USER_ID
    assert saved[0] == locked
    assert [plan.date for plan in saved] == [MONDAY, TUESDAY, date(2024, 1, 10)]
    assert sum(session.allocated_hours for plan in saved for session in plan.sessions) == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_integrity_violation_aborts_save() -> None:
    locked = StudyPlan(date=MONDAY, is_locked=True, sessions=[_build_session()])
    tampered = locked.model_copy(update={"sessions": [_build_session(hours=2.0)]})
    generator = MagicMock()
    generator.generate_plan.return_value = [tampered]
    service, plan_repo = _build_service([locked], generator=generator)

    with pytest.raises(IntegrityViolationError) as exc_info:
        await service.regenerate_plan(USER_ID, today=MONDAY)

    assert exc_info.value.violations == [f"Session modified on locked day {MONDAY}"]
    plan_repo.save_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_redistribute_missed_returns_saved_plans() -> None:
    service, plan_repo = _build_service([StudyPlan(date=MONDAY, sessions=[_build_session()])])

    result = await service.redistribute_missed(USER_ID, now=datetime(2024, 1, 9, 8, 0))

    plan_repo.save_all.assert_awaited_once()
    assert len(result.moved_sessions) == 1
    assert {plan.date: plan for plan in result.updated_plans}[TUESDAY].sessions == result.moved_sessions


@pytest.mark.asyncio
async def test_refused_lock_is_not_saved() -> None:
    service, plan_repo = _build_service([StudyPlan(date=MONDAY, sessions=[_build_session()])])

    result = await service.toggle_lock(USER_ID, MONDAY, locked=True)

    assert not result.success
    plan_repo.save_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_unlock_is_saved_despite_lock_change() -> None:
    service, plan_repo = _build_service([StudyPlan(date=MONDAY, is_locked=True, sessions=[_build_session()])])

    result = await service.toggle_lock(USER_ID, MONDAY, locked=False)

    assert result.success
    assert not result.plans[0].is_locked
    assert result.plans[0].available_hours == UserSettings().daily_available_hours
    plan_repo.save_all.assert_awaited_once()


@pytest.mark.asyncio
async def test_lock_with_redistribution_saves_locked_day() -> None:
    service, plan_repo = _build_service([StudyPlan(date=MONDAY, sessions=[_build_session()])])

    result = await service.lock_with_redistribution(USER_ID, MONDAY, now=datetime(2024, 1, 8, 7, 0))

    by_date = {plan.date: plan for plan in result.lock.plans}
    assert result.lock.success
    assert by_date[MONDAY].is_locked
    assert by_date[TUESDAY].sessions[0].original_date == MONDAY
    plan_repo.save_all.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_session_start_time_persists_edit() -> None:
    service, plan_repo = _build_service([StudyPlan(date=MONDAY, sessions=[_build_session()])])

    saved = await service.update_session_start_time(USER_ID, MONDAY, "task-1", 1, "09:30")

    assert saved[0].sessions[0].start_time == "09:30"
    plan_repo.save_all.assert_awaited_once()


@pytest.mark.asyncio
async def test_combine_sessions_persists_result() -> None:
    sessions = [
        _build_session(),
        StudySession(task_id="task-1", session_number=2, start_time="11:00", end_time="12:00", allocated_hours=1.0),
    ]
    service, _ = _build_service([StudyPlan(date=MONDAY, sessions=sessions)])

    saved = await service.combine_sessions(USER_ID, target_date=MONDAY)

    assert len(saved[0].sessions) == 1
    assert saved[0].sessions[0].allocated_hours == 2.0
