"""
Per-user scheduling preferences passed with every engine call.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from studyplan.models.enums import StudyPlanMode

DEFAULT_WORK_DAYS = [1, 2, 3, 4, 5]
DEFAULT_DAILY_AVAILABLE_HOURS = 6.0
DEFAULT_STUDY_WINDOW_START_HOUR = 9
DEFAULT_STUDY_WINDOW_END_HOUR = 21
DEFAULT_MIN_SESSION_LENGTH = 15


class UserSettings(BaseModel):
    """Scheduling preferences. Weekdays are Sunday-first (0 = Sunday)."""

    work_days: list[int] = Field(default_factory=lambda: list(DEFAULT_WORK_DAYS))
    daily_available_hours: float = Field(DEFAULT_DAILY_AVAILABLE_HOURS, ge=0)
    buffer_days: int = Field(0, ge=0)
    study_window_start_hour: int = Field(DEFAULT_STUDY_WINDOW_START_HOUR, ge=0, le=24)
    study_window_end_hour: int = Field(DEFAULT_STUDY_WINDOW_END_HOUR, ge=0, le=24)
    min_session_length: int = Field(DEFAULT_MIN_SESSION_LENGTH, ge=0, description="Minutes")
    study_plan_mode: StudyPlanMode = StudyPlanMode.EVEN

    @model_validator(mode="after")
    def _check_window(self) -> "UserSettings":
        if self.study_window_end_hour <= self.study_window_start_hour:
            raise ValueError("study_window_end_hour must be after study_window_start_hour")
        if any(day < 0 or day > 6 for day in self.work_days):
            raise ValueError("work_days must contain weekday numbers 0-6")
        return self

    @property
    def min_session_hours(self) -> float:
        return (self.min_session_length or DEFAULT_MIN_SESSION_LENGTH) / 60
