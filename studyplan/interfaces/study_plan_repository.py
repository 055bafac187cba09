"""
Study plan repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from studyplan.models.study_plan import StudyPlan


class IStudyPlanRepository(ABC):
    @abstractmethod
    async def list(self, user_id: str) -> list[StudyPlan]:
        pass

    @abstractmethod
    async def save_all(self, user_id: str, plans: list[StudyPlan]) -> list[StudyPlan]:
        """Replace the user's plan collection with ``plans``."""
        pass
