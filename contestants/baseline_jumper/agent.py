"""
Baseline Jumper Agent - Jumps when the next obstacle is one tick away.

This is a simple heuristic agent that reads `nearest_obstacle_distance`
and jumps as late as possible, which keeps the truck airborne while the
obstacle passes over its cell.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- Estimate obstacle speed from the level (base speed 1, +1 every 2 levels)
- If grounded and the nearest obstacle will reach the truck next tick, jump
"""

from typing import Any, Dict, Optional

ACTION_NONE = 0
ACTION_JUMP = 1

# Default obstacle_base_speed in game_config.yaml
BASE_SPEED = 1


class TruckAgent:
    """
    Jump-at-the-last-moment agent.
    """

    def __init__(self, base_speed: int = BASE_SPEED, debug: bool = False):
        """
        Initialize the agent.

        Args:
            base_speed: Obstacle speed at level 1 in the config being played.
            debug: If True, print decisions to stdout.
        """
        self.base_speed = base_speed
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Nothing to reset; the agent is stateless."""

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Decide whether to jump this tick.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            1 to jump, 0 otherwise.
        """
        distance = int(observation["nearest_obstacle_distance"])
        grounded = int(observation["jump_ticks_left"]) == 0
        speed = self.base_speed + int(observation["level"]) // 2

        action = ACTION_JUMP if grounded and 0 <= distance <= speed else ACTION_NONE

        if self.debug and action == ACTION_JUMP:
            print(f"[Jumper] tick={int(observation['tick_counter'])} "
                  f"distance={distance} speed={speed} -> jump")

        return action


def create_agent(**kwargs) -> TruckAgent:
    """Factory function to create an agent instance."""
    return TruckAgent(**kwargs)
