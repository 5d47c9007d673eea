"""
State Snapshot
==============

Read-only view of a game for UIs and agents, the one-line track rendering,
and fixed-size numpy observations for Gymnasium.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from truckajumpa.truck_core.config_loader import GameConfig, get_config
from truckajumpa.truck_core.obstacles import nearest_ahead
from truckajumpa.truck_core.state import SimulationState

# Padded length of the obstacle arrays in observations
MAX_OBSTACLES = 64

EMPTY_CELL = "."
TRUCK_CELL = "T"
OBSTACLE_CELL = "#"


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable copy of the state a consumer is allowed to see."""
    lives: int
    score: int
    level: int
    tick_counter: int
    jump_ticks_left: int
    game_over: bool
    level_complete: bool
    obstacles: Tuple[Tuple[int, int], ...]   # (position, width)

    @classmethod
    def from_state(cls, state: SimulationState) -> "StateSnapshot":
        return cls(
            lives=state.lives,
            score=state.score,
            level=state.level,
            tick_counter=state.tick_counter,
            jump_ticks_left=state.jump_ticks_left,
            game_over=state.game_over,
            level_complete=state.level_complete,
            obstacles=tuple(state.obstacles.as_pairs()),
        )

    @property
    def is_grounded(self) -> bool:
        return self.jump_ticks_left == 0


def render_track(snapshot: StateSnapshot, config: GameConfig) -> str:
    """
    Render the lane as one character per cell.

    The truck is drawn over any obstacle sharing its cell; obstacle cells
    outside the track are not drawn.
    """
    cells = [EMPTY_CELL] * config.track_length
    for position, width in snapshot.obstacles:
        for cell in range(max(position, 0), min(position + width, config.track_length)):
            cells[cell] = OBSTACLE_CELL
    cells[config.truck_position] = TRUCK_CELL
    return "".join(cells)


class SnapshotBuilder:
    """Builds numpy observations with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None, max_obstacles: int = MAX_OBSTACLES):
        if config is None:
            config = get_config()

        self._config = config
        self._max_obstacles = max_obstacles

        # Pre-allocate arrays
        self._track = np.zeros(config.track_length, dtype=np.int8)
        self._obs_position = np.zeros(max_obstacles, dtype=np.int32)
        self._obs_width = np.zeros(max_obstacles, dtype=np.int32)
        self._obs_mask = np.zeros(max_obstacles, dtype=np.int8)

    @property
    def max_obstacles(self) -> int:
        return self._max_obstacles

    def to_obs_dict(self, snapshot: StateSnapshot) -> Dict[str, np.ndarray]:
        """Convert a snapshot to a Gymnasium observation dictionary."""
        config = self._config

        self._track.fill(0)
        self._obs_position.fill(0)
        self._obs_width.fill(0)
        self._obs_mask.fill(0)

        count = min(len(snapshot.obstacles), self._max_obstacles)

        nearest = nearest_ahead(snapshot.obstacles, config.truck_position)

        for i, (position, width) in enumerate(snapshot.obstacles):
            lo = max(position, 0)
            hi = min(position + width, config.track_length)
            if lo < hi:
                self._track[lo:hi] = 1

            if i < count:
                self._obs_position[i] = position
                self._obs_width[i] = width
                self._obs_mask[i] = 1

        return {
            "lives": np.array(snapshot.lives, dtype=np.int32),
            "score": np.array(snapshot.score, dtype=np.int64),
            "level": np.array(snapshot.level, dtype=np.int32),
            "tick_counter": np.array(snapshot.tick_counter, dtype=np.int64),
            "jump_ticks_left": np.array(snapshot.jump_ticks_left, dtype=np.int32),
            "game_over": np.array(int(snapshot.game_over), dtype=np.int8),
            "nearest_obstacle_distance": np.array(nearest, dtype=np.int32),
            "track": self._track.copy(),
            "obs_position": self._obs_position.copy(),
            "obs_width": self._obs_width.copy(),
            "obs_mask": self._obs_mask.copy(),
        }
