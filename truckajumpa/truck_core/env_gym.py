"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the truck jump game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from truckajumpa.truck_core.config_loader import GameConfig, load_config
from truckajumpa.truck_core.events import EventCode
from truckajumpa.truck_core.game import CoreGame
from truckajumpa.truck_core.metadata import DEFAULT_METADATA
from truckajumpa.truck_core.state_snapshot import MAX_OBSTACLES, SnapshotBuilder, StateSnapshot

ACTION_NONE = 0
ACTION_JUMP = 1


class TruckJumpEnv(gym.Env):
    """
    Truck jump game as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = jump. One step = one tick.

    Observation Space:
        Dict of scalar game state, track occupancy and padded obstacle arrays.

    Reward:
        Always 0.0. Compute your own from the info dict.

    Info:
        Contains score, lives, level, tick, last_event, delta_score, etc.
    """

    metadata = {
        "render_modes": ["human", "ansi"],
        "render_fps": DEFAULT_METADATA.retro_fps,
    }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        max_episode_ticks: int = 5000,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config: Game configuration. Loaded from config_path if None.
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" prints the track, "ansi" returns it.
            max_episode_ticks: Truncate episodes after this many ticks.
            debug: If True, print every step.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)
        self.render_mode = render_mode
        self._max_episode_ticks = max_episode_ticks
        self._debug = debug

        self._game = CoreGame(config=self._config)
        self._builder = SnapshotBuilder(self._config)

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        config = self._config
        track_length = config.track_length
        int32_max = np.iinfo(np.int32).max

        return spaces.Dict({
            "lives": spaces.Box(low=0, high=config.lives, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "level": spaces.Box(low=1, high=config.max_level, shape=(), dtype=np.int32),
            "tick_counter": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "jump_ticks_left": spaces.Box(
                low=0, high=config.jump_duration_ticks, shape=(), dtype=np.int32
            ),
            "game_over": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "nearest_obstacle_distance": spaces.Box(
                low=-1, high=int32_max, shape=(), dtype=np.int32
            ),
            "track": spaces.Box(low=0, high=1, shape=(track_length,), dtype=np.int8),
            "obs_position": spaces.Box(
                low=-int32_max, high=int32_max, shape=(MAX_OBSTACLES,), dtype=np.int32
            ),
            "obs_width": spaces.Box(low=0, high=int32_max, shape=(MAX_OBSTACLES,), dtype=np.int32),
            "obs_mask": spaces.Box(low=0, high=1, shape=(MAX_OBSTACLES,), dtype=np.int8),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        super().reset(seed=seed)

        # Unseeded resets draw a game seed from the env RNG
        game_seed = seed if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        snapshot = self._game.start_new_game(seed=game_seed)

        info = self._game.get_info()
        info["delta_score"] = 0
        return self._to_obs(snapshot), info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Apply the action, then advance one tick.

        Returns:
            (observation, reward, terminated, truncated, info). Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        score_before = self._game.state.score
        jumped = False
        if int(action) == ACTION_JUMP:
            jumped = self._game.jump().code == EventCode.JUMP

        result = self._game.tick()
        snapshot = self._game.snapshot()

        terminated = snapshot.game_over
        truncated = not terminated and snapshot.tick_counter >= self._max_episode_ticks

        info = self._game.get_info()
        info["delta_score"] = snapshot.score - score_before
        info["cleared"] = result.cleared
        info["crashed"] = result.crashed
        info["jumped"] = jumped

        if self._debug:
            print(f"[DEBUG] Step: action={action}, tick={snapshot.tick_counter}, "
                  f"score={snapshot.score}, lives={snapshot.lives}, event={info['last_event']}")

        if self.render_mode == "human":
            self.render()

        return self._to_obs(snapshot), 0.0, terminated, truncated, info

    def _to_obs(self, snapshot: StateSnapshot) -> Dict[str, np.ndarray]:
        return self._builder.to_obs_dict(snapshot)

    def render(self) -> Optional[str]:
        text = self._game.render()
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            snapshot = self._game.snapshot()
            print(f"{text}  score={snapshot.score} lives={snapshot.lives} level={snapshot.level}")
        return None

    def close(self) -> None:
        pass

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        return self._config
