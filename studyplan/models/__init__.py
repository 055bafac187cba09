"""Pydantic models (schemas) for the study plan engine."""

from studyplan.models.commitment import CommitmentCandidate, CommitmentOccurrence, FixedCommitment
from studyplan.models.enums import (
    ConflictType,
    DeadlineType,
    DistributionStrategy,
    EisenhowerQuadrant,
    RedistributionPressure,
    SessionState,
    SessionStatus,
    StudyPlanMode,
    TargetFrequency,
    TaskStatus,
)
from studyplan.models.settings import UserSettings
from studyplan.models.study_plan import SlotAssignment, StudyPlan, StudySession, TimeSlot
from studyplan.models.task import Task

__all__ = [
    # Enums
    "ConflictType",
    "DeadlineType",
    "DistributionStrategy",
    "EisenhowerQuadrant",
    "RedistributionPressure",
    "SessionState",
    "SessionStatus",
    "StudyPlanMode",
    "TargetFrequency",
    "TaskStatus",
    # Records
    "CommitmentCandidate",
    "CommitmentOccurrence",
    "FixedCommitment",
    "SlotAssignment",
    "StudyPlan",
    "StudySession",
    "Task",
    "TimeSlot",
    "UserSettings",
]
