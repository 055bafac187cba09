"""
Lock governance API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from studyplan.api.deps import Locks, Redistribution
from studyplan.api.schemas import LockRequest
from studyplan.models.lock import (
    LockCheck,
    LockToggleResult,
    LockValidation,
    LockWithRedistributionResult,
)
from studyplan.models.redistribution import LockEvictionResult
from studyplan.services.lock_service import can_lock

router = APIRouter()


@router.post("/check", response_model=LockCheck)
async def check_lock(payload: LockRequest):
    return can_lock(payload.date, payload.plans)


@router.post("/validate", response_model=LockValidation)
async def validate_lock(payload: LockRequest, locks: Locks):
    return locks.validate_lock(payload.date, payload.plans, payload.tasks, payload.settings, today=payload.today)


@router.post("/lock", response_model=LockToggleResult | LockWithRedistributionResult)
async def lock_day(payload: LockRequest, locks: Locks):
    """
    Lock a day.

    With ``redistribute`` set, outstanding sessions are evicted first and the
    response carries both the eviction and the lock outcome.
    """
    if payload.redistribute:
        return locks.lock_day_with_redistribution(
            payload.date,
            payload.plans,
            payload.tasks,
            payload.settings,
            payload.commitments,
            today=payload.today,
            now=payload.now,
        )
    return locks.lock_day(payload.date, payload.plans, payload.settings)


@router.post("/unlock", response_model=LockToggleResult)
async def unlock_day(payload: LockRequest, locks: Locks):
    return locks.unlock_day(payload.date, payload.plans, payload.settings)


@router.post("/evict", response_model=LockEvictionResult)
async def evict_sessions(payload: LockRequest, redistribution: Redistribution):
    return redistribution.evict_sessions_from_day(
        payload.plans,
        payload.date,
        payload.tasks,
        payload.settings,
        payload.commitments,
        today=payload.today,
        now=payload.now,
    )
