"""
Custom exceptions for the study plan engine.

Engine passes report infeasibility and policy violations as data; these
exceptions are raised only by explicit edits and by the persistence
orchestrator.
"""

from typing import Any, Optional


class StudyPlanError(Exception):
    """Base exception for the study plan engine."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(StudyPlanError):
    """Resource not found."""

    pass


class ValidationError(StudyPlanError):
    """Validation error."""

    pass


class LockedDayError(StudyPlanError):
    """Attempted to modify a locked day."""

    pass


class IntegrityViolationError(StudyPlanError):
    """Locked-day content changed during an engine pass."""

    def __init__(self, message: str, violations: list[str]):
        super().__init__(message, details={"violations": violations})
        self.violations = violations
