"""
Baseline Jumper Agent Package

A heuristic agent that jumps when the nearest obstacle is one tick away.
Serves as a benchmark and example.
"""

from .agent import TruckAgent, create_agent

__all__ = ["TruckAgent", "create_agent"]
