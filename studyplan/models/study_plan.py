"""
Study plan and session models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from studyplan.models.enums import SessionStatus


class StudySession(BaseModel):
    """A scheduled block of work on one task within one day."""

    task_id: str
    session_number: int = Field(..., ge=1)
    start_time: str
    end_time: str
    allocated_hours: float = Field(..., ge=0)
    status: SessionStatus = SessionStatus.SCHEDULED
    done: bool = False
    is_flexible: bool = True
    is_manual_override: bool = False
    original_date: Optional[date] = None
    original_time: Optional[str] = None
    rescheduled_at: Optional[datetime] = None

    @property
    def is_finished(self) -> bool:
        """Done, completed or skipped: work that never needs a new placement."""
        return self.done or self.status in (SessionStatus.COMPLETED, SessionStatus.SKIPPED)

    @property
    def counts_toward_total(self) -> bool:
        return self.status != SessionStatus.SKIPPED


class StudyPlan(BaseModel):
    """Sessions and lock state for one calendar date."""

    id: str = ""
    date: date
    sessions: list[StudySession] = Field(default_factory=list)
    total_study_hours: float = 0.0
    available_hours: float = 0.0
    is_locked: bool = False

    @model_validator(mode="after")
    def _default_id(self) -> "StudyPlan":
        if not self.id:
            self.id = f"plan-{self.date.isoformat()}"
        return self

    def recalculate_total(self) -> float:
        """Recompute the cached total from non-skipped sessions."""
        self.total_study_hours = round(
            sum(session.allocated_hours for session in self.sessions if session.counts_toward_total),
            4,
        )
        return self.total_study_hours

    def find_session(self, task_id: str, session_number: int) -> Optional[StudySession]:
        return next(
            (
                session
                for session in self.sessions
                if session.task_id == task_id and session.session_number == session_number
            ),
            None,
        )


class TimeSlot(BaseModel):
    """A free window inside the study window."""

    start: str
    end: str
    duration: float = Field(..., description="Duration in hours")


class SlotAssignment(BaseModel):
    """A concrete placement found by forward slot search."""

    date: date
    start_time: str
    end_time: str
