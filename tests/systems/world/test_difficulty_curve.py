"""
test_difficulty_curve.py
------------------------
Unit tests for the milestone ladder and the moving-platform gate.
"""

from unittest.mock import patch

import pytest

from skyclimb.core.runtime.sim_config import DifficultyConfig
from skyclimb.systems.world.difficulty_curve import DifficultyCurve


@pytest.fixture
def curve():
    return DifficultyCurve(DifficultyConfig())


@pytest.mark.parametrize("distance, expected", [
    (0, 1.0),
    (499, 1.0),
    (500, 1.3),
    (999, 1.3),
    (1000, 1.6),
    (1500, 2.0),
    (2000, 2.5),
    (2500, 3.0),
    (100000, 3.0),
])
def test_multiplier_ladder(curve, distance, expected):
    assert curve.multiplier_for(distance) == expected


def test_base_multiplier_at_zero(curve):
    assert curve.multiplier_for(0) == curve.base_multiplier == 1.0


def test_top_milestone_gives_top_multiplier(curve):
    assert curve.multiplier_for(curve.milestones[-1]) == curve.multipliers[-1]


def test_multiplier_is_monotonic(curve):
    values = [curve.multiplier_for(d) for d in range(0, 3000, 7)]
    assert values == sorted(values)


def test_next_milestone(curve):
    assert curve.next_milestone(0) == 500
    assert curve.next_milestone(500) == 1000
    assert curve.next_milestone(2600) is None


def test_moving_platforms_gated_by_threshold(curve):
    assert not curve.moving_allowed(1.3)
    assert curve.moving_allowed(1.6)

    with patch("random.random", return_value=0.0) as roll:
        assert not curve.roll_moving(1.3)
        roll.assert_not_called()
        assert curve.roll_moving(2.0)


def test_moving_roll_uses_chance(curve):
    with patch("random.random", return_value=0.29):
        assert curve.roll_moving(1.6)
    with patch("random.random", return_value=0.3):
        assert not curve.roll_moving(1.6)
