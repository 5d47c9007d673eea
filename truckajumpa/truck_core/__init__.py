"""
Truck Core - The simulation engine.

This module provides the tick engine, the session/event layer, deterministic
replay and the Gymnasium wrapper.

Main exports:
- CoreGame: Tick engine (jump, tick, level advancement, high scores)
- GameSession: Driver wrapper with event log and session statistics
- run_replay: Deterministic replay of a recorded input timeline
- TruckJumpEnv: Gymnasium environment for agent training
- GameConfig: Configuration loaded from game_config.yaml
"""

from truckajumpa.truck_core.config_loader import (
    GameConfig,
    config_errors,
    is_valid_config,
    load_config,
    load_preset,
    preset_names,
)
from truckajumpa.truck_core.events import Event, EventCode, EventLog
from truckajumpa.truck_core.obstacles import Obstacle, ObstacleRegistry, ObstacleType
from truckajumpa.truck_core.state import SimulationState
from truckajumpa.truck_core.game import CoreGame, TickResult
from truckajumpa.truck_core.scoring import HighScoreEntry, HighScoreLedger
from truckajumpa.truck_core.session import GameSession, SessionStats
from truckajumpa.truck_core.state_snapshot import StateSnapshot, render_track
from truckajumpa.truck_core.serialization import (
    decode_score,
    decode_state,
    encode_state,
    is_valid_encoding,
)
from truckajumpa.truck_core.input_map import InputAction, key_to_action
from truckajumpa.truck_core.metadata import DEFAULT_METADATA, GameMetadata
from truckajumpa.truck_core.replay_recorder import (
    LevelCommand,
    ReplayInput,
    ReplayRecorder,
    record_episode,
    run_replay,
)
from truckajumpa.truck_core.env_gym import TruckJumpEnv

__all__ = [
    "GameConfig",
    "config_errors",
    "is_valid_config",
    "load_config",
    "load_preset",
    "preset_names",
    "Event",
    "EventCode",
    "EventLog",
    "Obstacle",
    "ObstacleRegistry",
    "ObstacleType",
    "SimulationState",
    "CoreGame",
    "TickResult",
    "HighScoreEntry",
    "HighScoreLedger",
    "GameSession",
    "SessionStats",
    "StateSnapshot",
    "render_track",
    "decode_score",
    "decode_state",
    "encode_state",
    "is_valid_encoding",
    "InputAction",
    "key_to_action",
    "DEFAULT_METADATA",
    "GameMetadata",
    "LevelCommand",
    "ReplayInput",
    "ReplayRecorder",
    "record_episode",
    "run_replay",
    "TruckJumpEnv",
]
