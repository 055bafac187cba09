"""
Enum definitions for the study plan engine.

These enums replace free-form status and strategy strings so every consumer
matches against a closed set of values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status."""

    PENDING = "pending"
    COMPLETED = "completed"


class SessionStatus(str, Enum):
    """Stored status of a study session."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    MISSED = "missed"
    RESCHEDULED = "rescheduled"


class SessionState(str, Enum):
    """
    Computed status of a session relative to the current time.

    OVERDUE = today's session whose end time has passed
    MISSED = past-day session that was never completed
    """

    SCHEDULED = "scheduled"
    OVERDUE = "overdue"
    MISSED = "missed"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class DistributionStrategy(str, Enum):
    """How a task's hours are spread over its eligible days."""

    EVEN = "even"
    FRONT_LOAD = "front-load"
    BACK_LOAD = "back-load"


class StudyPlanMode(str, Enum):
    """Task-ordering policy used by plan generation."""

    EVEN = "even"
    BALANCED = "balanced"
    EISENHOWER = "eisenhower"


class EisenhowerQuadrant(str, Enum):
    """Importance x urgency bucket."""

    IMPORTANT_URGENT = "important_urgent"
    IMPORTANT_NOT_URGENT = "important_not_urgent"
    NOT_IMPORTANT_URGENT = "not_important_urgent"
    NOT_IMPORTANT_NOT_URGENT = "not_important_not_urgent"


class TargetFrequency(str, Enum):
    """Requested session cadence for a task."""

    DAILY = "daily"
    THREE_TIMES_WEEK = "3x-week"
    WEEKLY = "weekly"
    FLEXIBLE = "flexible"


class DeadlineType(str, Enum):
    """How binding a task deadline is."""

    HARD = "hard"
    SOFT = "soft"
    NONE = "none"


class ConflictType(str, Enum):
    """Commitment conflict kind."""

    STRICT = "strict"  # same date domain, overlapping times
    OVERRIDE = "override"  # recurring vs one-off on overlapping times


class RedistributionPressure(str, Enum):
    """Hours to evict relative to spare capacity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
