"""
Serialized State
================

Plain-text encoding of a SimulationState for persistence and debugging:

    lives,score,level,tickCounter,jumpTicksLeft,gameOver,levelComplete|pos,width;pos,width;

Obstacle types are not encoded. Decoding never raises; corrupt fields fall
back to defaults. Use `is_valid_encoding()` to detect corruption.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from truckajumpa.truck_core.config_loader import GameConfig
from truckajumpa.truck_core.state import SimulationState

SECTION_SEPARATOR = "|"
FIELD_SEPARATOR = ","
OBSTACLE_SEPARATOR = ";"
SCALAR_FIELD_COUNT = 7

SCORE_INDEX = 1


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def encode_state(state: SimulationState) -> str:
    scalars = FIELD_SEPARATOR.join([
        str(state.lives),
        str(state.score),
        str(state.level),
        str(state.tick_counter),
        str(state.jump_ticks_left),
        _bool_text(state.game_over),
        _bool_text(state.level_complete),
    ])
    obstacles = "".join(
        f"{position}{FIELD_SEPARATOR}{width}{OBSTACLE_SEPARATOR}"
        for position, width in state.obstacles.as_pairs()
    )
    return f"{scalars}{SECTION_SEPARATOR}{obstacles}"


def is_valid_encoding(text: str) -> bool:
    """True if `text` has the separator and at least 7 scalar fields."""
    if not isinstance(text, str) or SECTION_SEPARATOR not in text:
        return False
    scalars = text.split(SECTION_SEPARATOR, 1)[0]
    return len(scalars.split(FIELD_SEPARATOR)) >= SCALAR_FIELD_COUNT


def _int_or(text: str, default: int) -> int:
    try:
        return int(text.strip())
    except (ValueError, AttributeError):
        return default


def _scalar_fields(text: str) -> List[str]:
    if not isinstance(text, str):
        return []
    return text.split(SECTION_SEPARATOR, 1)[0].split(FIELD_SEPARATOR)


def decode_score(text: str) -> int:
    """Score field of an encoded state, or 0 if it can't be read."""
    fields = _scalar_fields(text)
    if len(fields) <= SCORE_INDEX:
        return 0
    return _int_or(fields[SCORE_INDEX], 0)


def _parse_obstacles(text: str) -> List[Tuple[int, int]]:
    pairs = []
    for chunk in text.split(OBSTACLE_SEPARATOR):
        parts = chunk.split(FIELD_SEPARATOR)
        if len(parts) != 2:
            continue
        try:
            pairs.append((int(parts[0]), int(parts[1])))
        except ValueError:
            continue
    return pairs


def decode_state(text: str, config: Optional[GameConfig] = None) -> SimulationState:
    """
    Rebuild a state from its encoding.

    Unreadable scalar fields fall back to a fresh game's values and unreadable
    obstacle entries are skipped.

    Args:
        text: Encoded state.
        config: Supplies fallback lives. Uses GameConfig defaults if None.
    """
    fallback = SimulationState.initial(config or GameConfig())
    fields = _scalar_fields(text)
    fields += [""] * (SCALAR_FIELD_COUNT - len(fields))

    state = SimulationState(
        lives=_int_or(fields[0], fallback.lives),
        score=_int_or(fields[1], 0),
        level=_int_or(fields[2], 1),
        tick_counter=_int_or(fields[3], 0),
        jump_ticks_left=_int_or(fields[4], 0),
        game_over=fields[5].strip() == "true",
        level_complete=fields[6].strip() == "true",
    )

    if isinstance(text, str) and SECTION_SEPARATOR in text:
        state.obstacles.restore(_parse_obstacles(text.split(SECTION_SEPARATOR, 1)[1]))
    return state
