"""
User settings repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from studyplan.models.settings import UserSettings


class IUserSettingsRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> Optional[UserSettings]:
        """
        Get a user's scheduling preferences.

        Returns:
            Stored settings, or None when the user never saved any
        """
        pass
