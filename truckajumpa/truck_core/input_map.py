"""
Input Mapping
=============

Translates textual key identifiers from any front-end into game actions.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class InputAction(Enum):
    NONE = 0
    JUMP = 1


JUMP_KEYS = frozenset({
    "space",
    " ",
    "up",
    "arrowup",
    "arrow-up",
    "arrow_up",
    "uparrow",
    "w",
    "k",
})


def key_to_action(key: Optional[str]) -> InputAction:
    """Map a key name (case-insensitive) to JUMP or NONE."""
    if not key:
        return InputAction.NONE
    name = key.lower()
    if name != " ":
        name = name.strip()
    return InputAction.JUMP if name in JUMP_KEYS else InputAction.NONE
