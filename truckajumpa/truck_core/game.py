"""
Core Game
=========

Tick engine combining state, rules, the width RNG and the high-score ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from truckajumpa.truck_core.config_loader import GameConfig, get_config
from truckajumpa.truck_core.events import NO_EVENT, Event, EventCode
from truckajumpa.truck_core.obstacles import Obstacle, ObstacleType
from truckajumpa.truck_core.rng import WidthSource
from truckajumpa.truck_core.rules import GameRules
from truckajumpa.truck_core.scoring import HighScoreLedger
from truckajumpa.truck_core.state import SimulationState
from truckajumpa.truck_core.state_snapshot import StateSnapshot, render_track

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single tick."""
    tick: int
    events: Tuple[Event, ...] = ()
    cleared: int = 0
    points: int = 0
    crashed: bool = False
    spawned: Optional[Obstacle] = None
    dropped: List[Obstacle] = field(default_factory=list)

    @staticmethod
    def idle(tick: int) -> "TickResult":
        return TickResult(tick)

    @property
    def game_over(self) -> bool:
        return any(e.code == EventCode.GAME_OVER for e in self.events)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Simulation state
    - Obstacle movement, clearance and collisions
    - Width RNG
    - Level advancement
    - High-score ledger

    One tick = one discrete time step. Gameplay conditions never raise;
    every mutating call records a last event instead.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        high_scores: Optional[HighScoreLedger] = None
    ):
        """
        Initialize game.

        The config is not validated here; check `is_valid_config()` first.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for obstacle widths. Falls back to config.seed.
            high_scores: Ledger to submit finished games to. New one if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed if seed is not None else config.seed
        self._rules = GameRules(config)
        self._widths = WidthSource(config, self._seed)
        self._high_scores = high_scores if high_scores is not None else HighScoreLedger()

        self._state = SimulationState.initial(config)
        self._last_event: Event = NO_EVENT
        self._score_submitted = False

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def state(self) -> SimulationState:
        """Live state. Read it, don't mutate it."""
        return self._state

    @property
    def high_scores(self) -> HighScoreLedger:
        return self._high_scores

    @property
    def last_event(self) -> Event:
        return self._last_event

    @property
    def last_event_code(self) -> EventCode:
        return self._last_event.code

    @property
    def last_event_name(self) -> str:
        return self._last_event.name

    @property
    def is_over(self) -> bool:
        return self._state.game_over

    def start_new_game(self, seed: Optional[int] = None) -> StateSnapshot:
        """
        Reset to a fresh game. The high-score ledger is kept.

        Args:
            seed: New random seed. Uses previous if None.

        Returns:
            Initial snapshot.
        """
        if seed is not None:
            self._seed = seed
        self._widths.reset(self._seed)
        self._state = SimulationState.initial(self._config)
        self._last_event = NO_EVENT
        self._score_submitted = False
        return self.snapshot()

    def _emit(self, code: EventCode) -> Event:
        event = Event.make(code, self._state.tick_counter, self._state.jump_ticks_left)
        self._last_event = event
        return event

    def jump(self) -> Event:
        """
        Start a jump if the truck is grounded and the game is running.

        Returns:
            JUMP, or ERR_GAME_OVER / ERR_ALREADY_JUMPING with no state change.
        """
        state = self._state
        if state.game_over:
            return self._emit(EventCode.ERR_GAME_OVER)
        if state.jump_ticks_left > 0:
            return self._emit(EventCode.ERR_ALREADY_JUMPING)

        state.jump_ticks_left = self._config.jump_duration_ticks
        return self._emit(EventCode.JUMP)

    def tick(self) -> TickResult:
        """
        Advance the simulation by one tick.

        Order: counter, jump countdown, move, clearance scoring, grounded
        collision, spawn. Each step sees the previous step's effects.
        """
        state = self._state
        if state.game_over:
            return TickResult.idle(state.tick_counter)

        config = self._config
        truck = config.truck_position
        events: List[Event] = []

        state.tick_counter += 1

        if state.jump_ticks_left > 0:
            state.jump_ticks_left -= 1
            events.append(self._emit(EventCode.TICK))

        speed = self._rules.obstacle_speed(state.level)
        dropped = state.obstacles.advance(speed, truck)
        if dropped:
            logger.debug("Tick %d: dropped %d stale obstacles", state.tick_counter, len(dropped))

        cleared = state.obstacles.remove_passed(truck)
        points = 0
        for _ in cleared:
            award = self._rules.scoring.clearance_points(state.level)
            state.score += award
            points += award
            events.append(self._emit(EventCode.CLEARED))

        crashed = False
        if state.jump_ticks_left == 0 and state.obstacles.any_covering(truck):
            crashed = True
            state.lives -= 1
            events.append(self._emit(EventCode.CRASH))
            logger.debug("Tick %d: crash, %d lives left", state.tick_counter, state.lives)
            if state.lives <= 0:
                state.game_over = True
                events.append(self._emit(EventCode.GAME_OVER))
                logger.info(
                    "Game over at tick %d: score=%d level=%d",
                    state.tick_counter, state.score, state.level
                )

        spawned = None
        if self._rules.spawn.is_spawn_tick(state.tick_counter):
            spawned = state.obstacles.spawn(
                self._rules.spawn.spawn_position,
                self._widths.next_width(),
                ObstacleType.BARRIER
            )

        return TickResult(
            tick=state.tick_counter,
            events=tuple(events),
            cleared=len(cleared),
            points=points,
            crashed=crashed,
            spawned=spawned,
            dropped=dropped
        )

    def mark_level_complete(self) -> None:
        """Flag the current level as done; advance with advance_level_if_complete()."""
        if not self._state.game_over:
            self._state.level_complete = True

    def should_level_complete(self) -> bool:
        """Advisory estimate from score and level. Never applied automatically."""
        return self._rules.scoring.should_level_complete(self._state.score, self._state.level)

    def advance_level_if_complete(self) -> bool:
        """
        Move to the next level if the level-complete flag is set.

        Awards the level bonus and clears the obstacle field. The level
        stays at max_level once reached.

        Returns:
            True if the level advanced.
        """
        state = self._state
        if not state.level_complete or state.game_over:
            return False

        state.level = self._rules.next_level(state.level)
        state.level_complete = False
        state.score += self._rules.scoring.level_bonus
        state.obstacles.clear()
        self._emit(EventCode.LEVEL_UP)
        logger.debug("Level up to %d at tick %d", state.level, state.tick_counter)
        return True

    def submit_score_if_high(self) -> bool:
        """
        Offer the finished game's score to the ledger, once per game.

        Returns:
            True if the score was admitted.
        """
        if not self._state.game_over or self._score_submitted:
            return False
        self._score_submitted = True
        return self._high_scores.submit(self._state.score, self._state.level)

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot.from_state(self._state)

    def render(self) -> str:
        """One character per track cell."""
        return render_track(self.snapshot(), self._config)

    def load_state(self, state: SimulationState) -> None:
        """Replace the current state with a copy of `state`."""
        self._state = state.copy()
        self._score_submitted = False

    def clone(self) -> "CoreGame":
        """
        Independent copy sharing nothing mutable but the ledger.

        The copy continues the same width sequence.
        """
        other = CoreGame(self._config, self._seed, self._high_scores)
        other._state = self._state.copy()
        other._widths.set_state(self._widths.get_state())
        other._last_event = self._last_event
        other._score_submitted = self._score_submitted
        return other

    def get_info(self) -> Dict[str, Any]:
        """Info dict for Gymnasium and tools."""
        state = self._state
        return {
            "score": state.score,
            "lives": state.lives,
            "level": state.level,
            "tick": state.tick_counter,
            "obstacle_count": len(state.obstacles),
            "last_event": self._last_event.name,
            "game_over": state.game_over,
        }
