"""
Simulation State
================

Mutable aggregate for one game. Mutated only by CoreGame's jump, tick and
level operations; copies never share obstacles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.obstacles import ObstacleRegistry


@dataclass
class SimulationState:
    lives: int
    score: int = 0
    level: int = 1
    tick_counter: int = 0
    jump_ticks_left: int = 0
    game_over: bool = False
    level_complete: bool = False
    obstacles: ObstacleRegistry = field(default_factory=ObstacleRegistry)

    @classmethod
    def initial(cls, config: GameConfig) -> "SimulationState":
        """Fresh state at game start."""
        return cls(lives=config.lives)

    @property
    def is_grounded(self) -> bool:
        return self.jump_ticks_left == 0

    def copy(self) -> "SimulationState":
        """Deep copy (obstacles cloned)."""
        return SimulationState(
            lives=self.lives,
            score=self.score,
            level=self.level,
            tick_counter=self.tick_counter,
            jump_ticks_left=self.jump_ticks_left,
            game_over=self.game_over,
            level_complete=self.level_complete,
            obstacles=self.obstacles.copy(),
        )
