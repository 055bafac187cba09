"""
Distribution strategies: spread a task's hours over a run of days.

Every strategy returns a vector of ``day_count`` non-negative entries.
Front- and back-loading split the days into thirds and weight them 70/20/10
and 10/20/70. When a third has no days its share is dropped, so those two
strategies can under-allocate for one or two days.
"""

from __future__ import annotations

import math
from typing import Callable

from studyplan.models.enums import DistributionStrategy

REMAINDER_INCREMENT = 0.25
FRONT_LOAD_WEIGHTS = (0.7, 0.2, 0.1)
BACK_LOAD_WEIGHTS = (0.1, 0.2, 0.7)


def _round2(value: float) -> float:
    return round(value + 1e-9, 2)


def distribute_evenly(total_hours: float, day_count: int) -> list[float]:
    """Equal base per day (floored to 0.01h); remainder added in 0.25h steps to leading days."""
    if day_count <= 0:
        return []
    base = math.floor(round(total_hours * 100 / day_count, 6)) / 100
    remainder = _round2(total_hours - base * day_count)

    distribution = [base] * day_count
    index = 0
    while remainder > 0 and index < day_count:
        increment = min(REMAINDER_INCREMENT, remainder)
        distribution[index] = _round2(distribution[index] + increment)
        remainder = _round2(remainder - increment)
        index += 1
    return distribution


def split_thirds(day_count: int) -> tuple[int, int, int]:
    """Sizes of the first, second and final third of a day range."""
    first_end = math.ceil(day_count / 3)
    second_end = math.ceil(day_count * 2 / 3)
    return first_end, second_end - first_end, day_count - second_end


def _distribute_weighted(
    total_hours: float,
    day_count: int,
    weights: tuple[float, float, float],
) -> list[float]:
    distribution: list[float] = []
    for size, weight in zip(split_thirds(day_count), weights):
        if size <= 0:
            continue
        distribution.extend(distribute_evenly(total_hours * weight, size))
    return distribution


def distribute_front_load(total_hours: float, day_count: int) -> list[float]:
    if day_count <= 0:
        return []
    return _distribute_weighted(total_hours, day_count, FRONT_LOAD_WEIGHTS)


def distribute_back_load(total_hours: float, day_count: int) -> list[float]:
    if day_count <= 0:
        return []
    return _distribute_weighted(total_hours, day_count, BACK_LOAD_WEIGHTS)


_STRATEGIES: dict[DistributionStrategy, Callable[[float, int], list[float]]] = {
    DistributionStrategy.EVEN: distribute_evenly,
    DistributionStrategy.FRONT_LOAD: distribute_front_load,
    DistributionStrategy.BACK_LOAD: distribute_back_load,
}


def distribute(total_hours: float, day_count: int, strategy: DistributionStrategy) -> list[float]:
    """
    Per-day hour vector for ``strategy``.

    Args:
        total_hours: Hours to spread
        day_count: Number of eligible days (0 yields an empty vector)
        strategy: Distribution policy

    Returns:
        List of length ``day_count``.
    """
    return _STRATEGIES[DistributionStrategy(strategy)](total_hours, day_count)
