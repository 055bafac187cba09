"""
Dependency injection for API endpoints.

The HTTP adapter is stateless: every request carries its own snapshot, so
only the engine services are injected.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status

from studyplan.core.exceptions import (
    IntegrityViolationError,
    LockedDayError,
    NotFoundError,
    StudyPlanError,
    ValidationError,
)
from studyplan.services.lock_service import LockService
from studyplan.services.plan_generator import PlanGeneratorService
from studyplan.services.redistribution_service import RedistributionService
from studyplan.services.session_service import SessionService


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_plan_generator() -> PlanGeneratorService:
    """Get plan generator instance."""
    return PlanGeneratorService()


@lru_cache()
def get_redistribution_service() -> RedistributionService:
    """Get redistribution service instance."""
    return RedistributionService()


@lru_cache()
def get_lock_service() -> LockService:
    """Get lock service instance."""
    return LockService(redistribution=get_redistribution_service())


@lru_cache()
def get_session_service() -> SessionService:
    """Get session service instance."""
    return SessionService()


PlanGenerator = Annotated[PlanGeneratorService, Depends(get_plan_generator)]
Redistribution = Annotated[RedistributionService, Depends(get_redistribution_service)]
Locks = Annotated[LockService, Depends(get_lock_service)]
Sessions = Annotated[SessionService, Depends(get_session_service)]


# ===========================================
# Error mapping
# ===========================================


def to_http_exception(error: StudyPlanError) -> HTTPException:
    """Map an engine exception to its HTTP status."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, (LockedDayError, IntegrityViolationError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=error.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
