"""Abstract persistence collaborators."""

from studyplan.interfaces.commitment_repository import ICommitmentRepository
from studyplan.interfaces.study_plan_repository import IStudyPlanRepository
from studyplan.interfaces.task_repository import ITaskRepository
from studyplan.interfaces.user_settings_repository import IUserSettingsRepository

__all__ = [
    "ICommitmentRepository",
    "IStudyPlanRepository",
    "ITaskRepository",
    "IUserSettingsRepository",
]
