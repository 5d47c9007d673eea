"""
Obstacles
=========

Obstacle records and the ordered registry that owns them.

Obstacles are immutable; the registry replaces them as they scroll. Only
the tick engine mutates a registry; everything else iterates it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Tuple


class ObstacleType(IntEnum):
    BARRIER = 0
    PIT = 1


@dataclass(frozen=True)
class Obstacle:
    """An obstacle on the lane. Position may go negative before removal."""
    position: int
    width: int
    type: ObstacleType = ObstacleType.BARRIER

    @property
    def trailing_edge(self) -> int:
        """First cell behind the obstacle (position + width)."""
        return self.position + self.width

    def covers(self, cell: int) -> bool:
        return self.position <= cell < self.position + self.width

    def moved(self, cells: int) -> "Obstacle":
        """Same obstacle `cells` closer to the truck."""
        return dataclasses.replace(self, position=self.position - cells)


def nearest_ahead(obstacles: Iterable[Tuple[int, int]], cell: int) -> int:
    """
    Distance from `cell` to the closest obstacle touching or ahead of it.

    Args:
        obstacles: (position, width) pairs.
        cell: Reference cell, normally the truck position.

    Returns:
        0 if an obstacle covers the cell, -1 if nothing is ahead.
    """
    best = -1
    for position, width in obstacles:
        if position + width <= cell:
            continue
        distance = max(0, position - cell)
        if best < 0 or distance < best:
            best = distance
    return best


class ObstacleRegistry:
    """
    Ordered collection of active obstacles, oldest first.

    Iteration, indexing and `as_pairs()` are the read-only surface.
    """

    def __init__(self, obstacles: Iterable[Obstacle] = ()):
        self._items: List[Obstacle] = list(obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Obstacle:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObstacleRegistry):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"ObstacleRegistry({self._items!r})"

    def as_pairs(self) -> List[Tuple[int, int]]:
        """(position, width) for every obstacle, in order."""
        return [(ob.position, ob.width) for ob in self._items]

    def spawn(
        self,
        position: int,
        width: int,
        obstacle_type: ObstacleType = ObstacleType.BARRIER
    ) -> Obstacle:
        obstacle = Obstacle(position, width, obstacle_type)
        self._items.append(obstacle)
        return obstacle

    def advance(self, speed: int, boundary: int) -> List[Obstacle]:
        """
        Scroll every obstacle `speed` cells toward the truck.

        Obstacles that were already fully behind `boundary` before the move
        are dropped first, without scoring.

        Returns:
            The dropped obstacles.
        """
        stale = [ob for ob in self._items if ob.trailing_edge < boundary]
        self._items = [ob.moved(speed) for ob in self._items if ob.trailing_edge >= boundary]
        return stale

    def remove_passed(self, boundary: int) -> List[Obstacle]:
        """Remove and return obstacles whose trailing edge is below `boundary`."""
        passed = [ob for ob in self._items if ob.trailing_edge < boundary]
        if passed:
            self._items = [ob for ob in self._items if ob.trailing_edge >= boundary]
        return passed

    def any_covering(self, cell: int) -> bool:
        return any(ob.covers(cell) for ob in self._items)

    def clear(self) -> None:
        self._items.clear()

    def restore(self, pairs: Iterable[Tuple[int, int]]) -> None:
        """Replace contents with BARRIER obstacles from (position, width) pairs."""
        self._items = [Obstacle(int(p), int(w)) for p, w in pairs]

    def copy(self) -> "ObstacleRegistry":
        return ObstacleRegistry(self._items)
