"""
High Scores
===========

In-memory leaderboard of finished games.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

HIGH_SCORE_CAP = 10


@dataclass(frozen=True)
class HighScoreEntry:
    """One finished game on the leaderboard."""
    score: int
    level: int
    timestamp: datetime

    def __repr__(self) -> str:
        return f"HighScoreEntry(score={self.score}, level={self.level})"


class HighScoreLedger:
    """
    Leaderboard kept sorted by score, highest first, capped at `cap` entries.

    Ties keep submission order; the lowest entries are evicted first.
    """

    def __init__(self, cap: int = HIGH_SCORE_CAP):
        """
        Initialize ledger.

        Args:
            cap: Maximum number of entries kept.
        """
        if cap < 1:
            raise ValueError(f"High score cap must be >= 1, got {cap}")
        self._cap = cap
        self._entries: List[HighScoreEntry] = []

    @property
    def cap(self) -> int:
        return self._cap

    @property
    def entries(self) -> List[HighScoreEntry]:
        """Copy of the entries, highest first."""
        return list(self._entries)

    @property
    def best(self) -> Optional[HighScoreEntry]:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def scores(self) -> List[int]:
        return [e.score for e in self._entries]

    def qualifies(self, score: int) -> bool:
        """True if `score` would be admitted right now."""
        if score <= 0:
            return False
        if len(self._entries) < self._cap:
            return True
        return score > self._entries[-1].score

    def submit(
        self,
        score: int,
        level: int,
        timestamp: Optional[datetime] = None
    ) -> bool:
        """
        Admit a finished game's score if it qualifies.

        Args:
            score: Final score.
            level: Level reached.
            timestamp: When the game finished. Defaults to now.

        Returns:
            True if the score was added.
        """
        if not self.qualifies(score):
            return False

        entry = HighScoreEntry(score, level, timestamp or datetime.now())
        self._entries.append(entry)
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self._cap:]
        return True

    def clear(self) -> None:
        self._entries.clear()
