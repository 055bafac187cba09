"""
Priority scores used to order sessions during redistribution.

Higher scores are processed first.
"""

from __future__ import annotations

from datetime import date

from studyplan.core.config import get_settings
from studyplan.models.enums import EisenhowerQuadrant
from studyplan.models.task import Task

IMPORTANCE_WEIGHT = 1000

# Missed-session redistribution
OVERDUE_DEADLINE_WEIGHT = 2000
DEADLINE_PROXIMITY_CEILING = 100

# Lock eviction: (max days until deadline, bonus), checked in order
EVICTION_DEADLINE_BANDS: tuple[tuple[int, int], ...] = (
    (1, 500),
    (3, 300),
    (7, 200),
)


def missed_session_priority(task: Task, today: date) -> float:
    """Importance +1000; overdue deadline +2000, otherwise up to +100 as the deadline nears."""
    score = float(IMPORTANCE_WEIGHT if task.importance else 0)
    days_until_deadline = (task.deadline - today).days
    if days_until_deadline < 0:
        score += OVERDUE_DEADLINE_WEIGHT
    else:
        score += max(0, DEADLINE_PROXIMITY_CEILING - days_until_deadline)
    return score


def eviction_priority(task: Task, today: date) -> float:
    """Importance +1000; deadline within 1/3/7 days adds 500/300/200."""
    score = float(IMPORTANCE_WEIGHT if task.importance else 0)
    days_until_deadline = (task.deadline - today).days
    for max_days, bonus in EVICTION_DEADLINE_BANDS:
        if days_until_deadline <= max_days:
            score += bonus
            break
    return score


def is_urgent(task: Task, today: date, threshold_days: int | None = None) -> bool:
    threshold = get_settings().URGENCY_THRESHOLD_DAYS if threshold_days is None else threshold_days
    return (task.deadline - today).days <= threshold


def eisenhower_quadrant(task: Task, today: date, threshold_days: int | None = None) -> EisenhowerQuadrant:
    urgent = is_urgent(task, today, threshold_days)
    if task.importance and urgent:
        return EisenhowerQuadrant.IMPORTANT_URGENT
    if task.importance:
        return EisenhowerQuadrant.IMPORTANT_NOT_URGENT
    if urgent:
        return EisenhowerQuadrant.NOT_IMPORTANT_URGENT
    return EisenhowerQuadrant.NOT_IMPORTANT_NOT_URGENT
