"""
Request bodies for the HTTP adapter.

Each request carries the caller's snapshot; responses return engine results.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from studyplan.models.commitment import CommitmentCandidate, FixedCommitment
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import StudyPlan
from studyplan.models.task import Task


class PlanSnapshot(BaseModel):
    tasks: list[Task] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)
    commitments: list[FixedCommitment] = Field(default_factory=list)
    plans: list[StudyPlan] = Field(default_factory=list)


class GeneratePlanRequest(PlanSnapshot):
    today: Optional[date] = None


class RedistributeMissedRequest(PlanSnapshot):
    now: Optional[datetime] = None


class CombineSessionsRequest(PlanSnapshot):
    target_date: Optional[date] = None


class SessionStartTimeRequest(PlanSnapshot):
    date: date
    task_id: str
    session_number: int = Field(..., ge=1)
    start_time: str


class LockRequest(PlanSnapshot):
    date: date
    today: Optional[date] = None
    now: Optional[datetime] = None
    redistribute: bool = False


class FrequencyCheckRequest(BaseModel):
    task: Task
    settings: UserSettings = Field(default_factory=UserSettings)
    today: Optional[date] = None


class CommitmentCheckRequest(BaseModel):
    commitment: CommitmentCandidate
    existing: list[FixedCommitment] = Field(default_factory=list)
    exclude_commitment_id: Optional[str] = None
