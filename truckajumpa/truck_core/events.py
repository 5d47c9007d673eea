"""
Events
======

Event codes, immutable event records and the append-only event log.

Events are observational only; nothing in the simulation reads them back.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional


class EventCode(IntEnum):
    NONE = 0
    ERR_GAME_OVER = -1          # jump rejected, game already over
    ERR_ALREADY_JUMPING = 1     # jump rejected, truck airborne
    JUMP = 2
    TICK = 3
    CRASH = 4
    GAME_OVER = 5               # lives ran out this tick
    CLEARED = 6
    LEVEL_UP = 7


EVENT_NAMES = {
    EventCode.NONE: "",
    EventCode.ERR_GAME_OVER: "GameOver",
    EventCode.ERR_ALREADY_JUMPING: "AlreadyJumping",
    EventCode.JUMP: "Jump",
    EventCode.TICK: "Tick",
    EventCode.CRASH: "Crash",
    EventCode.GAME_OVER: "GameOverTransition",
    EventCode.CLEARED: "Cleared",
    EventCode.LEVEL_UP: "LevelUp",
}


@dataclass(frozen=True)
class Event:
    """Record of a single engine event."""
    code: EventCode
    name: str
    tick: int
    jump_ticks_left: int

    @classmethod
    def make(cls, code: EventCode, tick: int, jump_ticks_left: int) -> "Event":
        return cls(code, EVENT_NAMES[code], tick, jump_ticks_left)

    @property
    def is_rejection(self) -> bool:
        return self.code in (EventCode.ERR_GAME_OVER, EventCode.ERR_ALREADY_JUMPING)

    def to_dict(self) -> dict:
        return {
            "code": int(self.code),
            "name": self.name,
            "tick": self.tick,
            "jump_ticks_left": self.jump_ticks_left,
        }


NO_EVENT = Event.make(EventCode.NONE, 0, 0)


class EventLog:
    """Append-only list of events."""

    def __init__(self) -> None:
        self._events: List[Event] = []

    def append(self, event: Event) -> None:
        self._events.append(event)

    def extend(self, events) -> None:
        for event in events:
            self.append(event)

    def __iter__(self) -> Iterator[Event]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    @property
    def last(self) -> Optional[Event]:
        return self._events[-1] if self._events else None

    def of_code(self, code: EventCode) -> List[Event]:
        return [e for e in self._events if e.code == code]

    def counts(self) -> Counter:
        """Number of events per code."""
        return Counter(e.code for e in self._events)

    def clear(self) -> None:
        self._events.clear()
