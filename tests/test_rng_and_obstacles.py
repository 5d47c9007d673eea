"""
Tests for the width RNG and the obstacle registry.
"""

import dataclasses

import pytest

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.game import CoreGame
from truckajumpa.truck_core.obstacles import Obstacle, ObstacleRegistry, ObstacleType, nearest_ahead
from truckajumpa.truck_core.rng import WidthSource


@pytest.fixture
def config():
    return GameConfig(min_obstacle_width=2, max_obstacle_width=5)


class TestWidthSource:
    """Test seeded width generation."""

    def test_deterministic_with_seed(self, config):
        """Same seed should produce same sequence."""
        a = WidthSource(config, seed=42)
        b = WidthSource(config, seed=42)

        assert [a.next_width() for _ in range(50)] == [b.next_width() for _ in range(50)]

    def test_different_seeds_differ(self, config):
        a = WidthSource(config, seed=42)
        b = WidthSource(config, seed=123)

        assert [a.next_width() for _ in range(50)] != [b.next_width() for _ in range(50)]

    def test_widths_within_bounds(self, config):
        source = WidthSource(config, seed=7)
        widths = [source.next_width() for _ in range(500)]

        assert min(widths) >= 2
        assert max(widths) <= 5
        assert set(widths) == {2, 3, 4, 5}

    def test_fixed_width(self):
        source = WidthSource(GameConfig(min_obstacle_width=1, max_obstacle_width=1), seed=3)
        assert {source.next_width() for _ in range(20)} == {1}

    def test_reset_restores_sequence(self, config):
        source = WidthSource(config, seed=42)
        initial = [source.next_width() for _ in range(10)]

        source.reset()

        assert [source.next_width() for _ in range(10)] == initial
        assert source.draws == 10

    def test_state_round_trip(self, config):
        source = WidthSource(config, seed=42)
        source.next_width()
        saved = source.get_state()
        expected = [source.next_width() for _ in range(5)]

        other = WidthSource(config, seed=999)
        other.set_state(saved)

        assert [other.next_width() for _ in range(5)] == expected


class TestObstacle:
    """Test obstacle geometry."""

    def test_covers(self):
        ob = Obstacle(position=3, width=2)

        assert not ob.covers(2)
        assert ob.covers(3)
        assert ob.covers(4)
        assert not ob.covers(5)
        assert ob.trailing_edge == 5

    def test_default_type_is_barrier(self):
        assert Obstacle(0, 1).type == ObstacleType.BARRIER


class TestObstacleRegistry:
    """Test the ordered registry."""

    def test_spawn_keeps_order(self):
        reg = ObstacleRegistry()
        reg.spawn(9, 1)
        reg.spawn(9, 3)

        assert reg.as_pairs() == [(9, 1), (9, 3)]
        assert len(reg) == 2

    def test_advance_moves_all(self):
        reg = ObstacleRegistry([Obstacle(5, 1), Obstacle(9, 2)])

        dropped = reg.advance(2, boundary=0)

        assert dropped == []
        assert reg.as_pairs() == [(3, 1), (7, 2)]

    def test_advance_drops_stale_before_moving(self):
        """Obstacles already behind the boundary are dropped, not moved."""
        reg = ObstacleRegistry([Obstacle(-3, 1), Obstacle(1, 1)])

        dropped = reg.advance(1, boundary=0)

        assert [(ob.position, ob.width) for ob in dropped] == [(-3, 1)]
        assert reg.as_pairs() == [(0, 1)]

    def test_remove_passed(self):
        reg = ObstacleRegistry([Obstacle(-2, 1), Obstacle(-1, 1), Obstacle(4, 2)])

        passed = reg.remove_passed(0)

        assert [(ob.position, ob.width) for ob in passed] == [(-2, 1)]
        assert reg.as_pairs() == [(-1, 1), (4, 2)]

    def test_any_covering(self):
        reg = ObstacleRegistry([Obstacle(-1, 2)])

        assert reg.any_covering(0)
        assert not reg.any_covering(1)

    def test_nearest_ahead(self):
        pairs = [(7, 1), (3, 2), (-5, 1)]
        assert nearest_ahead(pairs, 0) == 3
        assert nearest_ahead(pairs + [(-1, 2)], 0) == 0
        assert nearest_ahead([], 0) == -1

    def test_iterated_obstacles_are_read_only(self):
        """Obstacles handed out by iteration cannot change the registry."""
        config = GameConfig()
        game = CoreGame(config, seed=1)
        for _ in range(8):
            game.tick()
        before = game.state.obstacles.as_pairs()

        for ob in game.state.obstacles:
            with pytest.raises(dataclasses.FrozenInstanceError):
                ob.position = 0
        with pytest.raises(dataclasses.FrozenInstanceError):
            game.state.obstacles[0].width = 9

        assert game.state.obstacles.as_pairs() == before
        assert before[0][0] == config.spawn_position

    def test_advance_replaces_obstacles(self):
        held = Obstacle(5, 1)
        reg = ObstacleRegistry([held])

        reg.advance(1, boundary=0)

        assert held.position == 5
        assert reg[0] == Obstacle(4, 1)

    def test_copy_is_independent(self):
        reg = ObstacleRegistry([Obstacle(5, 1)])
        clone = reg.copy()

        reg.advance(1, boundary=0)

        assert clone.as_pairs() == [(5, 1)]
        assert reg.as_pairs() == [(4, 1)]

    def test_constructor_copies_input(self):
        source = [Obstacle(5, 1)]
        reg = ObstacleRegistry(source)
        reg.advance(1, boundary=0)

        assert source[0].position == 5

    def test_restore(self):
        reg = ObstacleRegistry([Obstacle(1, 1, ObstacleType.PIT)])
        reg.restore([(4, 2), (8, 1)])

        assert reg.as_pairs() == [(4, 2), (8, 1)]
        assert all(ob.type == ObstacleType.BARRIER for ob in reg)
