"""API routers."""

from studyplan.api import feasibility, locks, plans

__all__ = [
    "feasibility",
    "locks",
    "plans",
]
