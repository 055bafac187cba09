"""
Lock governance models.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from studyplan.models.enums import RedistributionPressure
from studyplan.models.redistribution import LockEvictionResult
from studyplan.models.study_plan import StudyPlan, StudySession


class LockCheck(BaseModel):
    can_lock: bool
    reason: Optional[str] = None
    pending_sessions: int = 0


class AlternativeSlot(BaseModel):
    date: date
    reason: str = "Available for redistribution"


class RedistributionCapacity(BaseModel):
    """Spare capacity over the analysis window for a day about to be locked."""

    hours_to_redistribute: float
    total_available_capacity: float
    available_days: list[date] = Field(default_factory=list)
    pressure: RedistributionPressure = RedistributionPressure.LOW


class LockValidation(BaseModel):
    """Hard blockers plus soft warnings for a prospective lock."""

    can_lock: bool
    requires_redistribution: bool = False
    pending_sessions: int = 0
    warnings: list[str] = Field(default_factory=list)
    blockers: list[str] = Field(default_factory=list)
    affected_sessions: list[StudySession] = Field(default_factory=list)
    alternative_slots: list[AlternativeSlot] = Field(default_factory=list)
    redistribution_pressure: RedistributionPressure = RedistributionPressure.LOW


class LockToggleResult(BaseModel):
    success: bool
    date: date
    reason: Optional[str] = None
    plans: list[StudyPlan]


class LockWithRedistributionResult(BaseModel):
    eviction: LockEvictionResult
    lock: LockToggleResult


class IntegrityReport(BaseModel):
    is_valid: bool
    violations: list[str] = Field(default_factory=list)
