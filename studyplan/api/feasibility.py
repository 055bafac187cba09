"""
Feasibility check API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from studyplan.api.schemas import CommitmentCheckRequest, FrequencyCheckRequest
from studyplan.models.feasibility import CommitmentConflict, FrequencyConflict
from studyplan.services.feasibility_service import (
    check_commitment_conflicts,
    check_frequency_deadline_conflict,
)

router = APIRouter()


@router.post("/frequency", response_model=FrequencyConflict)
async def check_frequency(payload: FrequencyCheckRequest):
    return check_frequency_deadline_conflict(payload.task, payload.settings, today=payload.today)


@router.post("/commitments", response_model=CommitmentConflict)
async def check_commitments(payload: CommitmentCheckRequest):
    return check_commitment_conflicts(
        payload.commitment,
        payload.existing,
        exclude_commitment_id=payload.exclude_commitment_id,
    )
