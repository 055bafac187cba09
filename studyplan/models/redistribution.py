"""
Outcome models for redistribution passes.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from studyplan.models.study_plan import StudyPlan, StudySession


class FailedSession(BaseModel):
    """A session that could not be moved, left where it was."""

    session: StudySession
    plan_date: date
    reason: str


class RedistributionDetails(BaseModel):
    total_missed: int = 0
    successfully_moved: int = 0
    failed_to_move: int = 0
    conflicts_detected: bool = False
    priority_order_used: bool = False
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class RedistributionFeedback(BaseModel):
    """Human-readable summary of a redistribution pass."""

    success: bool
    message: str
    details: RedistributionDetails = Field(default_factory=RedistributionDetails)


class MissedRedistributionResult(BaseModel):
    updated_plans: list[StudyPlan]
    moved_sessions: list[StudySession] = Field(default_factory=list)
    failed_sessions: list[FailedSession] = Field(default_factory=list)
    feedback: RedistributionFeedback


class LockEvictionResult(BaseModel):
    """Outcome of moving sessions off a day that is being locked."""

    success: bool
    locked_date: date
    redistributed_sessions: list[StudySession] = Field(default_factory=list)
    failed_sessions: list[FailedSession] = Field(default_factory=list)
    modified_plans: list[StudyPlan]
    message: Optional[str] = None
