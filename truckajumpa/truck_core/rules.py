"""
Game Rules
==========

Handles obstacle speed, spawn cadence, clearance scoring and the advisory
level-complete estimate.
"""

from __future__ import annotations

from typing import Optional

from truckajumpa.truck_core.config_loader import GameConfig, get_config

# Extra points per cleared obstacle for each level
LEVEL_POINTS_STEP = 5

# Obstacles a player is expected to clear before a level counts as done
OBSTACLES_PER_LEVEL = 10


class SpawnRules:
    """
    Decides when and where obstacles appear.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._interval = config.obstacle_spawn_interval
        self._spawn_position = config.spawn_position

    def is_spawn_tick(self, tick_counter: int) -> bool:
        """True on every positive multiple of the spawn interval."""
        return tick_counter > 0 and tick_counter % self._interval == 0

    @property
    def spawn_position(self) -> int:
        return self._spawn_position


class ScoringRules:
    """
    Points for clearing obstacles and advancing levels.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._points_per_obstacle = config.points_per_obstacle
        self._level_bonus = config.points_level_bonus

    def clearance_points(self, level: int) -> int:
        """Points for one obstacle cleared at `level`."""
        return self._points_per_obstacle + level * LEVEL_POINTS_STEP

    @property
    def level_bonus(self) -> int:
        return self._level_bonus

    def level_score_target(self, level: int) -> int:
        """
        Score a player would hold after clearing OBSTACLES_PER_LEVEL obstacles
        on every level up to `level`, including earlier level bonuses.
        """
        cleared = sum(
            OBSTACLES_PER_LEVEL * self.clearance_points(lvl)
            for lvl in range(1, level + 1)
        )
        return cleared + (level - 1) * self._level_bonus

    def should_level_complete(self, score: int, level: int) -> bool:
        """Advisory estimate; the engine never acts on it by itself."""
        return score >= self.level_score_target(level)


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._base_speed = config.obstacle_base_speed
        self._max_level = config.max_level
        self.spawn = SpawnRules(config)
        self.scoring = ScoringRules(config)

    def obstacle_speed(self, level: int) -> int:
        """Cells per tick; +1 every two levels."""
        return self._base_speed + level // 2

    def next_level(self, level: int) -> int:
        return min(level + 1, self._max_level)
