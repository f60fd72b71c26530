"""
test_platform_registry.py
-------------------------
Unit tests for seeding, generation, dedup and eviction of platforms.
"""

from unittest.mock import patch

import pytest

from skyclimb.core.runtime.sim_config import PlatformConfig, DifficultyConfig
from skyclimb.entities.entity_types import PlatformKind
from skyclimb.systems.entity_management.platform_registry import PlatformRegistry
from skyclimb.systems.world.difficulty_curve import DifficultyCurve

WORLD_WIDTH = 375


@pytest.fixture
def registry():
    return PlatformRegistry(PlatformConfig(), WORLD_WIDTH, DifficultyCurve(DifficultyConfig()))


def assert_no_duplicates(registry, tol=10.0):
    platforms = registry.platforms
    for i, a in enumerate(platforms):
        for b in platforms[i + 1:]:
            assert not (abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol), (a, b)


class TestSeed:
    def test_seed_places_start_platform_and_stack(self, registry):
        registry.seed()
        assert len(registry) == 16

        start = registry.platforms[0]
        assert start.x == pytest.approx(WORLD_WIDTH / 2 - 40)
        assert start.y == 600
        assert all(p.kind is PlatformKind.STATIC for p in registry)

    def test_seed_stack_climbs_within_gap_range(self, registry):
        registry.seed()
        ys = [p.y for p in registry.platforms]
        gaps = [a - b for a, b in zip(ys, ys[1:])]
        assert all(60 <= g <= 120 for g in gaps)

    def test_seed_x_inside_world(self, registry):
        registry.seed()
        assert all(0 <= p.x <= WORLD_WIDTH - p.width for p in registry)

    def test_seed_replaces_previous_platforms(self, registry):
        registry.seed()
        registry.seed()
        assert len(registry) == 16


class TestDedup:
    def test_is_duplicate_within_tolerance(self, registry):
        registry.seed()
        start = registry.platforms[0]
        assert registry.is_duplicate(start.x + 10, start.y - 10)
        assert not registry.is_duplicate(start.x + 10.5, start.y)
        assert not registry.is_duplicate(start.x, start.y - 10.5)

    def test_duplicate_proposal_rejected(self, registry, midpoint_random):
        registry.seed()
        top = registry.topmost()

        # Draw a zero gap so the proposal lands on the current top
        with patch("random.uniform", side_effect=[0.0, top.x]):
            assert registry.propose(1.0) is None

        assert len(registry) == 16
        assert registry.get_spawn_stats()["rejected_duplicates"] == 1

    def test_top_up_retries_after_rejection(self, registry):
        registry.seed()
        top = registry.topmost()
        registry.evict(lambda p: p is not top)

        # First proposal collides with the top, later ones are spaced out
        draws = [0.0, top.x] + [90.0, 150.0] * 30
        with patch("random.uniform", side_effect=draws):
            added = registry.top_up(1.0, fallback_anchor_y=600)

        assert added == 14
        assert len(registry) == 15
        assert registry.get_spawn_stats()["rejected_duplicates"] == 1
        assert_no_duplicates(registry)


class TestTopUp:
    def test_top_up_reaches_minimum(self, registry):
        registry.seed()
        registry.evict(lambda p: p.y > 0)
        registry.top_up(1.0, fallback_anchor_y=600)
        assert len(registry) >= 15

    def test_top_up_noop_when_full(self, registry):
        registry.seed()
        assert registry.top_up(1.0, fallback_anchor_y=600) == 0
        assert len(registry) == 16

    def test_new_platforms_spawn_above_top(self, registry, midpoint_random):
        registry.seed()
        old_top = registry.topmost().y
        registry.evict(lambda p: p.y > 0)
        assert len(registry) == 9

        registry.top_up(1.0, fallback_anchor_y=600)

        assert len(registry) == 15
        assert registry.topmost().y == pytest.approx(old_top - 6 * 90)

    def test_empty_registry_anchors_at_fallback(self, registry, midpoint_random):
        added = registry.top_up(1.0, fallback_anchor_y=700)

        assert added == 15
        ys = sorted((p.y for p in registry), reverse=True)
        assert ys[0] == pytest.approx(610)
        assert registry.get_spawn_stats()["empty_recoveries"] == 1

    def test_shortfall_is_bounded_and_recorded(self, registry, midpoint_random):
        registry.seed()
        with patch.object(registry, "is_duplicate", return_value=True):
            registry.evict(lambda p: p.y < 500)
            added = registry.top_up(1.0, fallback_anchor_y=600)

        assert added == 0
        assert len(registry) == 2
        assert registry.get_spawn_stats()["shortfalls"] == 1

    def test_moving_platforms_only_at_high_multiplier(self, registry):
        registry.seed()
        registry.evict(lambda p: True)
        with patch("random.random", return_value=0.0):
            registry.top_up(1.3, fallback_anchor_y=600)
        assert not any(p.is_moving for p in registry)

        registry.evict(lambda p: True)
        with patch("random.random", return_value=0.0):
            registry.top_up(1.6, fallback_anchor_y=600)
        assert all(p.is_moving for p in registry)
        assert registry.get_spawn_stats()["moving_spawned"] == 15


class TestEviction:
    def test_evict_removes_matching_platforms(self, registry, midpoint_random):
        registry.seed()
        removed = registry.evict(lambda p: p.y >= 500)
        assert removed == 2
        assert all(p.y < 500 for p in registry)
        assert registry.get_spawn_stats()["total_evicted"] == 2

    def test_evict_empty_registry(self, registry):
        assert registry.evict(lambda p: True) == 0

    def test_platforms_is_a_copy(self, registry):
        registry.seed()
        snapshot = registry.platforms
        registry.evict(lambda p: True)
        assert len(snapshot) == 16
        assert len(registry) == 0

    def test_reset_clears_stats(self, registry):
        registry.seed()
        registry.evict(lambda p: True)
        registry.reset()
        stats = registry.get_spawn_stats()
        assert stats["total_spawned"] == 0
        assert stats["total_evicted"] == 0
        assert stats["live"] == 0
