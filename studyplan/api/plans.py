"""
Plan API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from studyplan.api.deps import PlanGenerator, Redistribution, Sessions, to_http_exception
from studyplan.api.schemas import (
    CombineSessionsRequest,
    GeneratePlanRequest,
    RedistributeMissedRequest,
    SessionStartTimeRequest,
)
from studyplan.core.exceptions import StudyPlanError
from studyplan.models.redistribution import MissedRedistributionResult
from studyplan.models.study_plan import StudyPlan

router = APIRouter()


@router.post("/generate", response_model=list[StudyPlan], status_code=status.HTTP_200_OK)
async def generate_plan(payload: GeneratePlanRequest, generator: PlanGenerator):
    """
    Regenerate the study plan.

    Locked days and finished sessions are preserved; every other session of a
    pending task is replaced.
    """
    return generator.generate_plan(
        payload.tasks,
        payload.settings,
        payload.commitments,
        payload.plans,
        today=payload.today,
    )


@router.post("/redistribute-missed", response_model=MissedRedistributionResult)
async def redistribute_missed(payload: RedistributeMissedRequest, redistribution: Redistribution):
    return redistribution.redistribute_missed_sessions(
        payload.plans,
        payload.settings,
        payload.commitments,
        payload.tasks,
        now=payload.now,
    )


@router.post("/combine", response_model=list[StudyPlan])
async def combine_sessions(payload: CombineSessionsRequest, sessions: Sessions):
    return sessions.combine_sessions(payload.plans, payload.settings, payload.target_date)


@router.post("/session-start-time", response_model=list[StudyPlan])
async def update_session_start_time(payload: SessionStartTimeRequest, sessions: Sessions):
    try:
        return sessions.update_session_start_time(
            payload.plans,
            payload.date,
            payload.task_id,
            payload.session_number,
            payload.start_time,
        )
    except StudyPlanError as e:
        raise to_http_exception(e)
