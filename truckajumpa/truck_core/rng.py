"""
RNG - Seeded Obstacle Widths
============================

Provides deterministic obstacle widths. The width draw is the only random
quantity in the simulation, so a fixed seed reproduces a whole game.
"""

from __future__ import annotations

import random
from typing import Any, Optional

from truckajumpa.truck_core.config_loader import GameConfig, get_config


class WidthSource:
    """
    Uniform width generator over [min_obstacle_width, max_obstacle_width].

    Each game owns its own instance; nothing here touches the global
    `random` module state.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize width source.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._min_width = config.min_obstacle_width
        self._max_width = config.max_obstacle_width
        self._seed = seed
        self._rng = random.Random(seed)
        self._draws = 0

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of widths handed out since the last reset."""
        return self._draws

    def next_width(self) -> int:
        """Draw the width of the next obstacle."""
        self._draws += 1
        return self._rng.randint(self._min_width, self._max_width)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the sequence.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._draws = 0

    def get_state(self) -> Any:
        """Opaque generator state for branching a game."""
        return (self._rng.getstate(), self._draws)

    def set_state(self, state: Any) -> None:
        rng_state, draws = state
        self._rng.setstate(rng_state)
        self._draws = draws
