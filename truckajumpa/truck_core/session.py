"""
Game Session
============

Wraps a CoreGame for a driver loop: collects every event into an
append-only log and keeps per-game statistics.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.events import Event, EventCode, EventLog
from truckajumpa.truck_core.game import CoreGame, TickResult
from truckajumpa.truck_core.scoring import HighScoreLedger
from truckajumpa.truck_core.state_snapshot import StateSnapshot

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """Counters for the current game."""
    ticks: int = 0
    jumps: int = 0
    rejected_jumps: int = 0
    obstacles_cleared: int = 0
    crashes: int = 0
    level_ups: int = 0
    points_scored: int = 0

    def reset(self) -> None:
        for name in self.to_dict():
            setattr(self, name, 0)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class GameSession:
    """
    Driver-facing wrapper around CoreGame.

    Args:
        config: Game configuration. Uses default if None.
        seed: Random seed for obstacle widths.
        game: Existing game to wrap instead of building one.
        auto_level: If True, mark and advance levels after each tick using
            the engine's advisory estimate.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        game: Optional[CoreGame] = None,
        high_scores: Optional[HighScoreLedger] = None,
        auto_level: bool = False
    ):
        self._game = game if game is not None else CoreGame(config, seed, high_scores)
        self._auto_level = auto_level
        self._events = EventLog()
        self._stats = SessionStats()
        self._games_started = 1

    @property
    def game(self) -> CoreGame:
        return self._game

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def stats(self) -> SessionStats:
        return self._stats

    @property
    def games_started(self) -> int:
        return self._games_started

    @property
    def is_over(self) -> bool:
        return self._game.is_over

    def _record(self, event: Event) -> None:
        self._events.append(event)
        code = event.code
        if code == EventCode.JUMP:
            self._stats.jumps += 1
        elif event.is_rejection:
            self._stats.rejected_jumps += 1
        elif code == EventCode.CLEARED:
            self._stats.obstacles_cleared += 1
        elif code == EventCode.CRASH:
            self._stats.crashes += 1
        elif code == EventCode.LEVEL_UP:
            self._stats.level_ups += 1

    def jump(self) -> Event:
        event = self._game.jump()
        self._record(event)
        return event

    def tick(self) -> TickResult:
        was_over = self._game.is_over
        result = self._game.tick()
        if not was_over:
            self._stats.ticks += 1
        self._stats.points_scored += result.points
        for event in result.events:
            self._record(event)

        if self._auto_level and not self._game.is_over and self._game.should_level_complete():
            self._game.mark_level_complete()
            self.advance_level_if_complete()

        return result

    def advance_level_if_complete(self) -> bool:
        score_before = self._game.state.score
        advanced = self._game.advance_level_if_complete()
        if advanced:
            self._stats.points_scored += self._game.state.score - score_before
            self._record(self._game.last_event)
        return advanced

    def start_new_game(self, seed: Optional[int] = None) -> StateSnapshot:
        """Reset game, log and stats. The high-score ledger is kept."""
        snapshot = self._game.start_new_game(seed)
        self._events.clear()
        self._stats.reset()
        self._games_started += 1
        logger.info("Started game #%d (seed=%s)", self._games_started, self._game.seed)
        return snapshot

    def finish(self) -> bool:
        """
        Submit the score of a finished game to the high-score ledger.

        Returns:
            True if the score made the leaderboard.
        """
        admitted = self._game.submit_score_if_high()
        if admitted:
            logger.info("New high score: %d", self._game.state.score)
        return admitted

    def snapshot(self) -> StateSnapshot:
        return self._game.snapshot()
