"""
Fixed commitment models (non-task busy intervals).
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class CommitmentOccurrence(BaseModel):
    """Per-date override of a commitment's times."""

    start_time: Optional[str] = None
    end_time: Optional[str] = None


class FixedCommitment(BaseModel):
    """Recurring (weekday-based) or one-off (date-based) busy interval."""

    id: str
    title: str
    start_time: str
    end_time: str
    recurring: bool = False
    days_of_week: list[int] = Field(default_factory=list)
    specific_dates: list[date] = Field(default_factory=list)
    modified_occurrences: dict[date, CommitmentOccurrence] = Field(default_factory=dict)
    deleted_occurrences: list[date] = Field(default_factory=list)

    def applies_on(self, day: date, weekday: int) -> bool:
        """Whether an occurrence falls on ``day`` (``weekday`` is Sunday-first)."""
        if day in self.deleted_occurrences:
            return False
        if self.recurring:
            return weekday in self.days_of_week
        return day in self.specific_dates

    def times_on(self, day: date) -> tuple[str, str]:
        """Start/end for ``day`` after applying a modified occurrence."""
        override = self.modified_occurrences.get(day)
        start = (override.start_time if override else None) or self.start_time
        end = (override.end_time if override else None) or self.end_time
        return start, end


class CommitmentCandidate(BaseModel):
    """A commitment being created or edited, checked before saving."""

    title: str
    start_time: str
    end_time: str
    recurring: bool = False
    days_of_week: list[int] = Field(default_factory=list)
    specific_dates: list[date] = Field(default_factory=list)
