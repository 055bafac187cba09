"""
Task repository interface.

The engine only reads tasks; creation and editing belong to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from studyplan.models.task import Task


class ITaskRepository(ABC):
    """Abstract interface for task lookup."""

    @abstractmethod
    async def list(self, user_id: str, include_completed: bool = False) -> list[Task]:
        """
        List a user's tasks.

        Args:
            user_id: Owner user ID
            include_completed: Include completed tasks

        Returns:
            Tasks in storage order
        """
        pass
