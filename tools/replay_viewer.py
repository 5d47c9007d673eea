"""
Replay Viewer
=============

Play back a recorded replay in the terminal, one track line per tick.

Usage:
    python tools/replay_viewer.py replay.json
    python -m tools.replay_viewer replay.json --speed 4
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict

# Add project root to path for direct script execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.game import CoreGame
from truckajumpa.truck_core.metadata import DEFAULT_METADATA
from truckajumpa.truck_core.replay_recorder import (
    LevelCommand,
    compute_config_hash,
    load_replay,
    replay_ticks,
)


def rebuild_game_to_tick(data: Dict[str, Any], target_tick: int) -> CoreGame:
    """
    Rebuild the game state at a given tick by replaying inputs from the start.
    """
    game = CoreGame(GameConfig(**data["config"]), data["seed"])
    for _ in replay_ticks(game, data["inputs"], target_tick):
        pass
    return game


def view_replay(path: str, speed: float = 1.0, delay: bool = True) -> int:
    """
    Print every tick of a replay.

    Returns:
        Final score reached by the playback.
    """
    data = load_replay(path)
    config = GameConfig(**data["config"])

    if data.get("config_hash") != compute_config_hash(config):
        print("Warning: replay config hash mismatch, playback may diverge")

    print(f"Replay: {path}")
    print(f"  Agent: {data.get('agent', 'unknown')}  Seed: {data['seed']}  "
          f"Ticks: {data['ticks']}  Recorded score: {data['final_score']}")
    print()

    pause = 1.0 / (DEFAULT_METADATA.retro_fps * max(speed, 0.01))
    game = CoreGame(config, data["seed"])

    for _, applied in replay_ticks(game, data["inputs"], data["ticks"], flush_pending=True):
        state = game.state
        if any(i.level == LevelCommand.ADVANCE for i in applied):
            print(f"{'':>6}   --- level {state.level} ---")
        marker = "^" if any(i.jump for i in applied) else " "
        print(f"{state.tick_counter:>6} {marker} {game.render()}  "
              f"score={state.score:<6} lives={state.lives} {game.last_event_name}")
        if delay:
            time.sleep(pause)

    print()
    print(f"Final score: {game.state.score}  Level: {game.state.level}")
    if game.state.score != data["final_score"]:
        print(f"Warning: playback score differs from recorded score {data['final_score']}")
    return game.state.score


def main():
    parser = argparse.ArgumentParser(description="View a TruckaJumpa replay")
    parser.add_argument("replay", type=str, help="Path to replay JSON file")
    parser.add_argument("--speed", type=float, default=1.0, help="Playback speed multiplier")
    parser.add_argument("--no-delay", action="store_true", help="Print without pausing")
    parser.add_argument("--tick", type=int, default=None,
                        help="Only print the track at this tick")

    args = parser.parse_args()

    if not Path(args.replay).exists():
        print(f"Error: replay not found: {args.replay}")
        return 1

    if args.tick is not None:
        game = rebuild_game_to_tick(load_replay(args.replay), args.tick)
        print(f"{game.state.tick_counter:>6}   {game.render()}  score={game.state.score}")
        return 0

    view_replay(args.replay, speed=args.speed, delay=not args.no_delay)
    return 0


if __name__ == "__main__":
    sys.exit(main())
