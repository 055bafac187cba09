"""
Unit tests for distribution strategies.
"""

import pytest

from studyplan.models.enums import DistributionStrategy
from studyplan.services.distribution import (
    distribute,
    distribute_back_load,
    distribute_evenly,
    distribute_front_load,
    split_thirds,
)


@pytest.mark.parametrize(
    "total_hours,day_count",
    [(10, 3), (5, 4), (1, 3), (7.5, 7), (0.5, 2), (13.37, 5)],
)
def test_even_distribution_sums_and_stays_level(total_hours, day_count):
    hours = distribute_evenly(total_hours, day_count)

    assert len(hours) == day_count
    assert sum(hours) == pytest.approx(total_hours, abs=0.01)
    assert all(entry >= 0 for entry in hours)
    assert max(hours) - min(hours) <= 0.25 + 1e-9


def test_even_distribution_gives_remainder_to_leading_days():
    assert distribute_evenly(10, 3) == [3.34, 3.33, 3.33]
    assert distribute_evenly(4, 4) == [1.0, 1.0, 1.0, 1.0]


def test_zero_days_yields_empty_vector():
    for strategy in DistributionStrategy:
        assert distribute(5, 0, strategy) == []


def test_split_thirds():
    assert split_thirds(1) == (1, 0, 0)
    assert split_thirds(2) == (1, 1, 0)
    assert split_thirds(3) == (1, 1, 1)
    assert split_thirds(7) == (3, 2, 2)


def test_front_load_weights_thirds():
    hours = distribute_front_load(12, 6)

    assert hours == pytest.approx([4.2, 4.2, 1.2, 1.2, 0.6, 0.6])
    assert sum(hours) == pytest.approx(12)


def test_back_load_weights_thirds():
    hours = distribute_back_load(10, 3)

    assert hours == pytest.approx([1.0, 2.0, 7.0])


def test_weighted_strategies_drop_hours_of_empty_thirds():
    # With fewer than three days the missing thirds' shares are not reallocated
    assert distribute(10, 1, DistributionStrategy.FRONT_LOAD) == pytest.approx([7.0])
    assert distribute(10, 1, DistributionStrategy.BACK_LOAD) == pytest.approx([1.0])
    assert distribute(10, 2, DistributionStrategy.FRONT_LOAD) == pytest.approx([7.0, 2.0])
    assert distribute(10, 2, DistributionStrategy.BACK_LOAD) == pytest.approx([1.0, 2.0])


def test_distribute_accepts_strategy_value():
    assert distribute(3, 3, "even") == [1.0, 1.0, 1.0]
