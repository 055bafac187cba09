"""
Task models.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from studyplan.models.enums import DeadlineType, TargetFrequency, TaskStatus


class Task(BaseModel):
    """A unit of work owned by the caller; the engine only reads it."""

    id: str
    title: str
    estimated_hours: float = Field(..., ge=0, description="Total work in hours")
    deadline: date
    importance: bool = False
    status: TaskStatus = TaskStatus.PENDING
    target_frequency: Optional[TargetFrequency] = None
    min_work_block: Optional[int] = Field(None, ge=0, description="Minimum block in minutes")
    deadline_type: DeadlineType = DeadlineType.HARD
    is_one_time_task: bool = False
    # Attached per invocation by plan generation; never persisted
    remaining_hours: Optional[float] = None

    @property
    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING
