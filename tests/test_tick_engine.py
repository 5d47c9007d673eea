"""
Tests for the tick engine: ordering, collisions, clearance and spawning.
"""

import random

import pytest

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.events import EventCode
from truckajumpa.truck_core.game import CoreGame
from truckajumpa.truck_core.obstacles import ObstacleType
from truckajumpa.truck_core.state import SimulationState


@pytest.fixture
def stream_config():
    """One width-1 obstacle every tick on a 10-cell track, one life."""
    return GameConfig(
        track_length=10,
        truck_position=0,
        jump_duration_ticks=3,
        lives=1,
        obstacle_base_speed=1,
        obstacle_spawn_interval=1,
        min_obstacle_width=1,
        max_obstacle_width=1,
    )


@pytest.fixture
def single_config(stream_config):
    """Same track, but only one obstacle in the first 39 ticks."""
    return stream_config.with_overrides(obstacle_spawn_interval=20)


def run_ticks(game, count):
    for _ in range(count):
        game.tick()


class TestUnjumpedStream:
    """No jumps against a steady stream of obstacles."""

    def test_survives_nine_ticks(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 9)

        assert not game.state.game_over
        assert game.state.lives == 1
        assert game.state.obstacles[0].position == 1

    def test_game_over_after_ten_ticks(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 10)

        assert game.state.game_over
        assert game.state.lives == 0
        assert game.last_event_code == EventCode.GAME_OVER
        assert game.last_event_name == "GameOverTransition"

    def test_game_over_event_follows_crash(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 9)

        result = game.tick()

        codes = [e.code for e in result.events]
        assert codes == [EventCode.CRASH, EventCode.GAME_OVER]
        assert result.crashed
        assert result.game_over

    def test_ticks_after_game_over_are_noops(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 10)
        before = game.state.copy()

        result = game.tick()

        assert result.events == ()
        assert game.state == before
        assert game.state.tick_counter == 10


class TestJumpClearance:
    """Jumping over obstacles."""

    def test_jump_clears_single_obstacle(self, single_config):
        game = CoreGame(single_config, seed=1)
        run_ticks(game, 28)
        assert game.state.obstacles.as_pairs() == [(1, 1)]

        game.jump()
        run_ticks(game, 3)

        assert game.state.score == single_config.points_per_obstacle + 1 * 5
        assert game.state.lives == 1
        assert not game.state.game_over
        assert len(game.state.obstacles) == 0
        assert game.last_event_code == EventCode.CLEARED

    def test_jump_before_stream_reaches_truck(self, stream_config):
        """The first obstacle is cleared and scored; no life lost while airborne."""
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 9)
        game.jump()

        game.tick()
        game.tick()
        assert game.state.lives == 1
        assert game.state.score == 0

        result = game.tick()

        assert result.cleared == 1
        assert result.points == stream_config.points_per_obstacle + 5
        assert game.state.score == 85

        # Clearance is scored before the grounded collision check
        codes = [e.code for e in result.events]
        assert codes.index(EventCode.CLEARED) < codes.index(EventCode.CRASH)

    def test_airborne_truck_never_crashes(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        run_ticks(game, 9)
        game.jump()

        for _ in range(stream_config.jump_duration_ticks - 1):
            result = game.tick()
            assert game.state.obstacles.any_covering(stream_config.truck_position)
            assert not result.crashed

    def test_countdown_emits_tick_event(self, stream_config):
        game = CoreGame(stream_config, seed=1)
        game.jump()

        result = game.tick()

        assert result.events[0].code == EventCode.TICK
        assert result.events[0].jump_ticks_left == 2

    def test_multiple_clears_in_one_tick(self):
        config = GameConfig()
        game = CoreGame(config, seed=1)
        state = SimulationState.initial(config)
        state.jump_ticks_left = 2
        state.obstacles.restore([(-1, 1), (-1, 1)])
        game.load_state(state)

        result = game.tick()

        assert result.cleared == 2
        assert game.state.score == 2 * (config.points_per_obstacle + 5)
        assert [e.code for e in result.events].count(EventCode.CLEARED) == 2

    def test_stale_obstacles_dropped_unscored(self):
        config = GameConfig()
        game = CoreGame(config, seed=1)
        state = SimulationState.initial(config)
        state.obstacles.restore([(-6, 2)])
        game.load_state(state)

        result = game.tick()

        assert len(result.dropped) == 1
        assert result.cleared == 0
        assert game.state.score == 0
        assert len(game.state.obstacles) == 0


class TestCollision:
    """Grounded collision rules."""

    def test_crash_costs_one_life_per_tick(self):
        config = GameConfig(obstacle_base_speed=0)
        game = CoreGame(config, seed=1)
        state = SimulationState.initial(config)
        state.obstacles.restore([(0, 1)])
        game.load_state(state)

        result = game.tick()

        assert result.crashed
        assert game.state.lives == config.lives - 1
        assert game.last_event_code == EventCode.CRASH

    def test_collision_with_wide_obstacle_overlap(self):
        """An obstacle covers the truck anywhere in [position, position + width)."""
        config = GameConfig(obstacle_base_speed=0)
        game = CoreGame(config, seed=1)
        state = SimulationState.initial(config)
        state.obstacles.restore([(-2, 3)])
        game.load_state(state)

        assert game.tick().crashed

    def test_grounded_check_after_countdown(self):
        """A jump ending this tick leaves the truck grounded for the collision check."""
        config = GameConfig(obstacle_base_speed=0)
        game = CoreGame(config, seed=1)
        state = SimulationState.initial(config)
        state.jump_ticks_left = 1
        state.obstacles.restore([(0, 1)])
        game.load_state(state)

        assert game.tick().crashed


class TestSpawning:
    """Periodic spawning."""

    def test_spawn_on_interval(self):
        config = GameConfig(obstacle_spawn_interval=8)
        game = CoreGame(config, seed=1)

        run_ticks(game, 7)
        assert len(game.state.obstacles) == 0

        result = game.tick()
        assert result.spawned is not None
        assert result.spawned.position == config.track_length - 1
        assert result.spawned.type == ObstacleType.BARRIER

    def test_spawn_widths_within_bounds(self):
        config = GameConfig(
            obstacle_spawn_interval=1, min_obstacle_width=2, max_obstacle_width=4, lives=10
        )
        game = CoreGame(config, seed=5)
        widths = []
        for _ in range(100):
            result = game.tick()
            if result.spawned is not None:
                widths.append(result.spawned.width)

        assert widths
        assert all(2 <= w <= 4 for w in widths)

    def test_same_seed_same_obstacles(self):
        config = GameConfig(obstacle_spawn_interval=2, lives=10)
        a = CoreGame(config, seed=42)
        b = CoreGame(config, seed=42)

        for _ in range(60):
            ra, rb = a.tick(), b.tick()
            assert a.state == b.state
            assert (ra.spawned is None) == (rb.spawned is None)

    def test_seed_from_config(self):
        config = GameConfig(seed=11)
        assert CoreGame(config).seed == 11
        assert CoreGame(config, seed=3).seed == 3


class TestInvariants:
    """Properties that hold for every tick."""

    def test_monotonic_counters_and_one_way_game_over(self):
        config = GameConfig(obstacle_spawn_interval=3, lives=3)
        game = CoreGame(config, seed=9)
        driver = random.Random(1234)

        game_over_seen = False
        for _ in range(500):
            before = game.state.copy()
            if driver.random() < 0.2:
                game.jump()
            game.tick()
            after = game.state

            if before.game_over:
                assert after.tick_counter == before.tick_counter
            else:
                assert after.tick_counter == before.tick_counter + 1
            assert after.lives <= before.lives
            assert after.score >= before.score

            if after.lives <= 0:
                assert after.game_over
            if game_over_seen:
                assert after.game_over
            game_over_seen = game_over_seen or after.game_over

    def test_speed_rises_every_two_levels(self):
        config = GameConfig(track_length=10, obstacle_spawn_interval=1, lives=10)
        game = CoreGame(config, seed=1)
        game.tick()

        game.mark_level_complete()
        assert game.advance_level_if_complete()
        assert game.state.level == 2
        assert len(game.state.obstacles) == 0

        game.tick()
        game.tick()

        assert game.state.obstacles.as_pairs()[0][0] == 9 - 2


class TestClone:
    """Branching a game mid-play."""

    @pytest.fixture
    def played(self):
        game = CoreGame(GameConfig(obstacle_spawn_interval=3, lives=5), seed=17)
        for i in range(20):
            if i % 7 == 0:
                game.jump()
            game.tick()
        return game

    def test_clone_continues_identically(self, played):
        branch = played.clone()

        assert branch.state == played.state
        assert branch.last_event == played.last_event

        for i in range(40):
            if i % 5 == 0:
                played.jump()
                branch.jump()
            ra, rb = played.tick(), branch.tick()

            assert (ra.spawned is None) == (rb.spawned is None)
            if ra.spawned is not None:
                assert ra.spawned.width == rb.spawned.width
            assert branch.state == played.state

    def test_clone_is_independent(self, played):
        branch = played.clone()
        frozen = branch.state.copy()

        played.jump()
        played.state.score += 100
        for _ in range(5):
            played.tick()

        assert branch.state == frozen
        assert branch.state.tick_counter == 20

    def test_clone_shares_ledger(self, played):
        assert played.clone().high_scores is played.high_scores
