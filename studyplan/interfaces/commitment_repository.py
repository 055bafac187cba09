"""
Fixed commitment repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from studyplan.models.commitment import FixedCommitment


class ICommitmentRepository(ABC):
    @abstractmethod
    async def list(self, user_id: str) -> list[FixedCommitment]:
        pass
