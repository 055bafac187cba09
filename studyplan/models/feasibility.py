"""
Feasibility check result models.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from studyplan.models.commitment import FixedCommitment
from studyplan.models.enums import ConflictType, TargetFrequency


class FrequencyConflict(BaseModel):
    has_conflict: bool
    reason: Optional[str] = None
    recommended_frequency: Optional[TargetFrequency] = None
    sessions_available: int = 0
    max_total_hours: float = 0.0


class CommitmentConflict(BaseModel):
    has_conflict: bool
    conflict_type: Optional[ConflictType] = None
    conflicting_commitment: Optional[FixedCommitment] = None
    conflicting_dates: list[date] = Field(default_factory=list)
