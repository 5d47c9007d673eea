"""
Game Metadata
=============

Identity and presentation constants kept apart from the simulation. Nothing
in the engine reads these.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


def rgb(color: int) -> Tuple[int, int, int]:
    """Unpack 0xRRGGBB into an (r, g, b) tuple."""
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


@dataclass(frozen=True)
class GameMetadata:
    contract_id: str = "0xa1b2c3d4e5f6789012345678abcdef0123456789"
    version_hash: str = "0x9876543210fedcba9876543210fedcba98765432"
    domain_seed: str = "0x4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3"
    chain_id: int = 0x8B3C1E9F
    genesis_timestamp: int = 0x641A5678
    palette: Dict[str, int] = field(default_factory=lambda: {
        "truck": 0xE67E22,
        "barrier": 0xC0392B,
        "track": 0x2C3E50,
    })
    retro_fps: int = 14
    cell_width: int = 28
    cell_height: int = 28

    def color(self, name: str) -> Tuple[int, int, int]:
        """Palette entry as RGB. Raises KeyError for unknown names."""
        return rgb(self.palette[name])


DEFAULT_METADATA = GameMetadata()
