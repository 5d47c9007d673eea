"""
Tests for key mapping and presentation metadata.
"""

import pytest

from truckajumpa.truck_core.input_map import InputAction, key_to_action
from truckajumpa.truck_core.metadata import DEFAULT_METADATA, rgb


class TestKeyMapping:
    """Test key name to action mapping."""

    @pytest.mark.parametrize("key", ["space", " ", "Space", "up", "ArrowUp", "arrow-up", "W", "k", " up "])
    def test_jump_keys(self, key):
        assert key_to_action(key) == InputAction.JUMP

    @pytest.mark.parametrize("key", ["a", "enter", "down", "", None, "   "])
    def test_other_keys(self, key):
        assert key_to_action(key) == InputAction.NONE


class TestMetadata:
    """Test colors and display constants."""

    def test_rgb(self):
        assert rgb(0xE67E22) == (230, 126, 34)
        assert rgb(0x000000) == (0, 0, 0)

    def test_palette(self):
        assert DEFAULT_METADATA.color("truck") == (230, 126, 34)
        assert DEFAULT_METADATA.color("barrier") == rgb(0xC0392B)

    def test_unknown_color(self):
        with pytest.raises(KeyError):
            DEFAULT_METADATA.color("sky")

    def test_display_constants(self):
        assert DEFAULT_METADATA.retro_fps == 14
        assert DEFAULT_METADATA.cell_width == DEFAULT_METADATA.cell_height == 28
