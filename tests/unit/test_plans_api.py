from datetime import date, datetime

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from main import create_app
from studyplan.api.feasibility import check_commitments, check_frequency
from studyplan.api.locks import check_lock, evict_sessions, lock_day, unlock_day, validate_lock
from studyplan.api.plans import combine_sessions, generate_plan, redistribute_missed, update_session_start_time
from studyplan.api.schemas import (
    CombineSessionsRequest,
    CommitmentCheckRequest,
    FrequencyCheckRequest,
    GeneratePlanRequest,
    LockRequest,
    RedistributeMissedRequest,
    SessionStartTimeRequest,
)
from studyplan.models.commitment import CommitmentCandidate
from studyplan.models.enums import TargetFrequency
from studyplan.models.lock import LockWithRedistributionResult
from studyplan.models.study_plan import StudyPlan, StudySession
from studyplan.models.task import Task
from studyplan.services.lock_service import LockService
from studyplan.services.plan_generator import PlanGeneratorService
from studyplan.services.redistribution_service import RedistributionService
from studyplan.services.session_service import SessionService

MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)


def _build_session(session_number: int = 1, start_time: str = "09:00", end_time: str = "10:00") -> StudySession:
    return StudySession(
        task_id="task-1",
        session_number=session_number,
        start_time=start_time,
        end_time=end_time,
        allocated_hours=1.0,
    )


def _build_task(deadline: date = date(2024, 1, 12)) -> Task:
    return Task(id="task-1", title="Essay", estimated_hours=4, deadline=deadline)


@pytest.mark.asyncio
async def test_generate_plan_handler() -> None:
    payload = GeneratePlanRequest(tasks=[_build_task()], today=MONDAY)

    plans = await generate_plan(payload, generator=PlanGeneratorService())

    assert len(plans) == 5
    assert all(plan.total_study_hours == 0.8 for plan in plans)


@pytest.mark.asyncio
async def test_redistribute_missed_handler() -> None:
    payload = RedistributeMissedRequest(
        tasks=[_build_task()],
        plans=[StudyPlan(date=MONDAY, sessions=[_build_session()])],
        now=datetime(2024, 1, 9, 8, 0),
    )

    result = await redistribute_missed(payload, redistribution=RedistributionService())

    assert result.feedback.success
    assert result.moved_sessions[0].original_date == MONDAY


@pytest.mark.asyncio
async def test_combine_handler() -> None:
    payload = CombineSessionsRequest(
        plans=[StudyPlan(date=MONDAY, sessions=[_build_session(), _build_session(2, "11:00", "12:00")])]
    )

    plans = await combine_sessions(payload, sessions=SessionService())

    assert len(plans[0].sessions) == 1


@pytest.mark.asyncio
async def test_session_start_time_errors_map_to_http_status() -> None:
    plans = [
        StudyPlan(date=MONDAY, sessions=[_build_session()]),
        StudyPlan(date=TUESDAY, is_locked=True, sessions=[_build_session(2)]),
    ]
    cases = [
        (MONDAY, 1, "25:00", 422),
        (TUESDAY, 2, "09:15", 409),
        (MONDAY, 9, "09:15", 404),
    ]

    for day, session_number, start_time, expected in cases:
        payload = SessionStartTimeRequest(
            plans=plans, date=day, task_id="task-1", session_number=session_number, start_time=start_time
        )
        with pytest.raises(HTTPException) as exc_info:
            await update_session_start_time(payload, sessions=SessionService())
        assert exc_info.value.status_code == expected


@pytest.mark.asyncio
async def test_lock_handlers() -> None:
    plans = [StudyPlan(date=MONDAY, sessions=[_build_session()])]
    locks = LockService()

    check = await check_lock(LockRequest(date=MONDAY, plans=plans))
    validation = await validate_lock(LockRequest(date=MONDAY, plans=plans, tasks=[_build_task()], today=MONDAY), locks=locks)
    refused = await lock_day(LockRequest(date=MONDAY, plans=plans), locks=locks)
    cleared = await lock_day(
        LockRequest(date=MONDAY, plans=plans, tasks=[_build_task()], today=MONDAY, redistribute=True),
        locks=locks,
    )

    assert not check.can_lock
    assert validation.can_lock
    assert validation.requires_redistribution
    assert not refused.success
    assert isinstance(cleared, LockWithRedistributionResult)
    assert cleared.lock.success


@pytest.mark.asyncio
async def test_unlock_and_evict_handlers() -> None:
    locked = [StudyPlan(date=MONDAY, is_locked=True)]
    unlocked = await unlock_day(LockRequest(date=MONDAY, plans=locked), locks=LockService())

    eviction = await evict_sessions(
        LockRequest(date=MONDAY, plans=[StudyPlan(date=MONDAY, sessions=[_build_session()])], tasks=[_build_task()], today=MONDAY),
        redistribution=RedistributionService(),
    )

    assert unlocked.success
    assert eviction.success
    assert len(eviction.redistributed_sessions) == 1


@pytest.mark.asyncio
async def test_feasibility_handlers() -> None:
    frequency = await check_frequency(
        FrequencyCheckRequest(task=_build_task().model_copy(update={"target_frequency": TargetFrequency.WEEKLY}), today=MONDAY)
    )
    commitments = await check_commitments(
        CommitmentCheckRequest(commitment=CommitmentCandidate(title="Lab", start_time="09:00", end_time="10:00"))
    )

    assert frequency.sessions_available == 1
    assert not frequency.has_conflict
    assert not commitments.has_conflict


def test_app_routes_requests() -> None:
    client = TestClient(create_app())

    health = client.get("/health")
    check = client.post(
        "/api/locks/check",
        json={
            "date": "2024-01-08",
            "plans": [
                {
                    "date": "2024-01-08",
                    "sessions": [
                        {
                            "task_id": "task-1",
                            "session_number": 1,
                            "start_time": "09:00",
                            "end_time": "10:00",
                            "allocated_hours": 1.0,
                        }
                    ],
                }
            ],
        },
    )

    assert health.json() == {"status": "healthy"}
    assert check.status_code == 200
    assert check.json()["pending_sessions"] == 1
