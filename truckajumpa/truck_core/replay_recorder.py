"""
Replay Recorder
===============

Deterministic replay of recorded input timelines, plus a session wrapper that
records one.

An input is stamped with the tick counter at which it was issued. Besides
jumps, a timeline carries level commands so games with level advances
replay exactly.

Usage:
    from truckajumpa.truck_core import GameSession, ReplayRecorder

    recorder = ReplayRecorder(GameSession(seed=42), agent_name="me")
    while not recorder.session.is_over:
        if should_jump(recorder.session.snapshot()):
            recorder.jump()
        recorder.tick()

    recorder.save("my_replay.json")

The saved replay can be viewed with:
    python -m tools.replay_viewer my_replay.json
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union
)

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.events import Event
from truckajumpa.truck_core.game import CoreGame, TickResult
from truckajumpa.truck_core.session import GameSession
from truckajumpa.truck_core.state import SimulationState
from truckajumpa.truck_core.state_snapshot import StateSnapshot

logger = logging.getLogger(__name__)


class LevelCommand(IntEnum):
    NONE = 0
    MARK = 1        # mark_level_complete()
    ADVANCE = 2     # mark, then advance_level_if_complete()


class ReplayInput(NamedTuple):
    """A command recorded at a tick counter value."""
    tick: int
    jump: bool
    level: LevelCommand = LevelCommand.NONE


def as_replay_input(item: Sequence[Any]) -> ReplayInput:
    """Accept (tick, jump) or (tick, jump, level) from code or JSON."""
    level = LevelCommand(int(item[2])) if len(item) > 2 else LevelCommand.NONE
    return ReplayInput(int(item[0]), bool(item[1]), level)


def _apply(game: CoreGame, item: ReplayInput) -> None:
    if item.jump:
        game.jump()
    if item.level >= LevelCommand.MARK:
        game.mark_level_complete()
    if item.level == LevelCommand.ADVANCE:
        game.advance_level_if_complete()


def replay_ticks(
    game: CoreGame,
    inputs: Iterable[Sequence[Any]],
    max_ticks: int,
    flush_pending: bool = False
) -> Iterator[Tuple[TickResult, List[ReplayInput]]]:
    """
    Drive `game` through an input timeline one tick at a time.

    Before each tick, every not-yet-applied input whose tick is <= the
    current tick counter is applied, in order. Stops at `max_ticks` or game
    over.

    Args:
        game: Game to drive, normally fresh.
        inputs: (tick, jump[, level]) entries in recorded order.
        max_ticks: Tick counter value to stop at.
        flush_pending: Also apply inputs due at the final tick counter once
            the loop stops. Recordings saved between ticks need this.

    Yields:
        (tick result, inputs applied before that tick).
    """
    queue = [as_replay_input(item) for item in inputs]
    next_input = 0

    def apply_due() -> List[ReplayInput]:
        nonlocal next_input
        applied = []
        while next_input < len(queue) and queue[next_input].tick <= game.state.tick_counter:
            _apply(game, queue[next_input])
            applied.append(queue[next_input])
            next_input += 1
        return applied

    while game.state.tick_counter < max_ticks and not game.is_over:
        applied = apply_due()
        yield game.tick(), applied

    if flush_pending:
        apply_due()


def run_replay(
    config: GameConfig,
    seed: Optional[int],
    inputs: Iterable[Sequence[Any]],
    max_ticks: int,
    flush_pending: bool = False
) -> SimulationState:
    """
    Drive a fresh game through a recorded input timeline.

    Args:
        config: Game configuration.
        seed: Width RNG seed.
        inputs: (tick, jump_flag) pairs in recorded order, optionally with a
            third LevelCommand element.
        max_ticks: Tick counter value to stop at.
        flush_pending: See `replay_ticks`.

    Returns:
        Copy of the final state. Identical arguments give identical states.
    """
    game = CoreGame(config, seed)
    for _ in replay_ticks(game, inputs, max_ticks, flush_pending):
        pass
    return game.state.copy()


def generate_replay_filename(
    agent_name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {agent_name}_{YYYYMMDD_HHMMSS}_s{seed}.json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{agent_name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{agent_name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig) -> str:
    """Short hash of every gameplay parameter, for replay validation."""
    hash_data = config.to_dict()
    hash_data.pop("seed", None)
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records a session's commands for replay.

    Jumps and level commands issued through the recorder are stamped with
    the current tick counter. Level advances made by the session itself
    (`auto_level`) or directly on the session are picked up on the next
    recorder call.

    Attributes:
        session: The wrapped session.
        recording: Whether currently recording.
    """

    def __init__(
        self,
        session: GameSession,
        agent_name: str = "unknown",
        auto_save_path: Optional[str] = None
    ):
        """
        Initialize the replay recorder.

        Args:
            session: Session to wrap. Its game must have a fixed seed for the
                replay to be reproducible.
            agent_name: Name of the agent (stored in replay metadata).
            auto_save_path: If provided, automatically save replay on game over.
        """
        self.session = session
        self.agent_name = agent_name
        self.auto_save_path = auto_save_path

        self._recording = True
        self._inputs: List[ReplayInput] = []
        self._level_ups_seen = session.stats.level_ups
        self._mark_recorded = session.game.state.level_complete
        self._config_hash = compute_config_hash(session.game.config)

    @property
    def recording(self) -> bool:
        return self._recording

    @property
    def inputs(self) -> List[ReplayInput]:
        return list(self._inputs)

    def start_new_game(self, seed: Optional[int] = None) -> StateSnapshot:
        """Reset the session and start a fresh recording."""
        snapshot = self.session.start_new_game(seed)
        self._inputs = []
        self._recording = True
        self._level_ups_seen = 0
        self._mark_recorded = False
        return snapshot

    def _sync_level_commands(self) -> None:
        """Record level changes the session made since the last call."""
        if not self._recording:
            return
        state = self.session.game.state
        level_ups = self.session.stats.level_ups

        for _ in range(level_ups - self._level_ups_seen):
            self._inputs.append(ReplayInput(state.tick_counter, False, LevelCommand.ADVANCE))
        self._level_ups_seen = level_ups

        if state.level_complete and not self._mark_recorded:
            self._inputs.append(ReplayInput(state.tick_counter, False, LevelCommand.MARK))
        self._mark_recorded = state.level_complete

    def jump(self) -> Event:
        self._sync_level_commands()
        if self._recording:
            self._inputs.append(ReplayInput(self.session.game.state.tick_counter, True))
        return self.session.jump()

    def mark_level_complete(self) -> None:
        self.session.game.mark_level_complete()
        self._sync_level_commands()

    def advance_level_if_complete(self) -> bool:
        self._sync_level_commands()
        advanced = self.session.advance_level_if_complete()
        self._sync_level_commands()
        return advanced

    def tick(self) -> TickResult:
        self._sync_level_commands()
        result = self.session.tick()
        self._sync_level_commands()
        if result.game_over:
            self._recording = False
            if self.auto_save_path:
                self.save(self.auto_save_path)
        return result

    def get_replay_data(self) -> Dict[str, Any]:
        """Replay as a JSON-ready dictionary."""
        self._sync_level_commands()
        game = self.session.game
        state = game.state
        return {
            "seed": game.seed,
            "agent": self.agent_name,
            "config": game.config.to_dict(),
            "config_hash": self._config_hash,
            "inputs": [[i.tick, i.jump, int(i.level)] for i in self._inputs],
            "ticks": state.tick_counter,
            "final_score": state.score,
            "final_level": state.level,
            "game_over": state.game_over,
            "events": [e.to_dict() for e in self.session.events],
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(
                agent_name=self.agent_name,
                seed=self.session.game.seed,
                directory=directory
            )
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        logger.info(
            "Replay saved: %s (seed=%s, ticks=%d, score=%d)",
            path, replay_data["seed"], replay_data["ticks"], replay_data["final_score"]
        )
        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "r") as f:
        return json.load(f)


def replay_from_data(data: Dict[str, Any]) -> SimulationState:
    """
    Re-run a saved replay.

    Raises:
        ValueError: If the stored config hash doesn't match the stored config.
    """
    config = GameConfig(**data["config"])
    expected = data.get("config_hash")
    if expected is not None and expected != compute_config_hash(config):
        raise ValueError(
            f"Replay config hash mismatch: file has {expected}, "
            f"config hashes to {compute_config_hash(config)}"
        )
    return run_replay(
        config, data["seed"], data["inputs"], int(data["ticks"]), flush_pending=True
    )


def record_episode(
    agent_fn: Callable[[StateSnapshot], bool],
    seed: int,
    config: Optional[GameConfig] = None,
    max_ticks: int = 10_000,
    save_path: Optional[str] = None,
    agent_name: str = "unknown",
    auto_level: bool = False
) -> Dict[str, Any]:
    """
    Convenience function to record a single game.

    Args:
        agent_fn: Takes a snapshot, returns True to jump this tick.
        seed: Random seed for the game.
        config: Game configuration. Uses default if None.
        max_ticks: Stop after this many ticks if the game is still running.
        save_path: If provided, save replay to this path.
        agent_name: Name of the agent.
        auto_level: Let the session advance levels on its own.

    Returns:
        Replay data dictionary.
    """
    recorder = ReplayRecorder(
        GameSession(config, seed, auto_level=auto_level), agent_name=agent_name
    )
    session = recorder.session

    while not session.is_over and session.game.state.tick_counter < max_ticks:
        if agent_fn(session.snapshot()):
            recorder.jump()
        recorder.tick()

    if save_path:
        recorder.save(save_path)

    return recorder.get_replay_data()
