"""
Tests for configuration loading, validation and presets.
"""

import pytest

from truckajumpa.truck_core.config_loader import (
    GameConfig,
    config_errors,
    is_valid_config,
    load_config,
    load_preset,
    preset_names,
)


@pytest.fixture
def config():
    return load_config()


class TestValidation:
    """Test the validation predicate."""

    def test_defaults_are_valid(self):
        assert is_valid_config(GameConfig())
        assert GameConfig().is_valid()
        assert config_errors(GameConfig()) == []

    def test_construction_does_not_enforce_bounds(self):
        """Out-of-range values are accepted by the constructor."""
        config = GameConfig(track_length=1, lives=0)
        assert config.track_length == 1
        assert not is_valid_config(config)

    @pytest.mark.parametrize("overrides", [
        {"track_length": 4},
        {"track_length": 51},
        {"truck_position": -1},
        {"truck_position": 24},
        {"jump_duration_ticks": 0},
        {"jump_duration_ticks": 21},
        {"lives": 0},
        {"lives": 11},
        {"obstacle_base_speed": -1},
        {"obstacle_spawn_interval": 0},
        {"min_obstacle_width": 0},
        {"min_obstacle_width": 3, "max_obstacle_width": 2},
        {"max_level": 0},
    ])
    def test_out_of_bounds_rejected(self, overrides):
        config = GameConfig().with_overrides(**overrides)
        assert not is_valid_config(config)
        assert len(config_errors(config)) >= 1

    @pytest.mark.parametrize("overrides", [
        {"track_length": 5},
        {"track_length": 50},
        {"truck_position": 23},
        {"jump_duration_ticks": 1},
        {"jump_duration_ticks": 20},
        {"lives": 1},
        {"lives": 10},
        {"obstacle_base_speed": 0},
        {"min_obstacle_width": 2, "max_obstacle_width": 2},
    ])
    def test_bounds_are_inclusive(self, overrides):
        assert is_valid_config(GameConfig().with_overrides(**overrides))

    def test_every_problem_reported(self):
        config = GameConfig(track_length=2, lives=0, obstacle_spawn_interval=0)
        assert len(config_errors(config)) == 3


class TestLoader:
    """Test YAML loading."""

    def test_default_file_matches_defaults(self, config):
        assert config == GameConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("track:\n  length: 12\nlives: 5\nrng:\n  seed: 9\n")

        config = load_config(str(path))

        assert config.track_length == 12
        assert config.lives == 5
        assert config.seed == 9
        assert config.jump_duration_ticks == GameConfig().jump_duration_ticks

    def test_invalid_file_raises_when_validating(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("lives: 0\n")

        with pytest.raises(ValueError, match="lives"):
            load_config(str(path))

    def test_invalid_file_loads_without_validation(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("lives: 0\n")

        config = load_config(str(path), validate=False)
        assert config.lives == 0

    def test_spawn_position(self, config):
        assert config.spawn_position == config.track_length - 1


class TestPresets:
    """Test named presets."""

    def test_all_presets_listed(self):
        names = preset_names()
        for name in ("easy", "normal", "hard", "long_track", "short_jump"):
            assert name in names

    @pytest.mark.parametrize("name", ["easy", "normal", "hard", "long_track", "short_jump"])
    def test_presets_are_valid(self, name):
        assert is_valid_config(load_preset(name))

    def test_normal_is_default(self):
        assert load_preset("normal") == GameConfig()

    def test_name_normalization(self):
        assert load_preset("Long-Track").track_length == 40
        assert load_preset("SHORT_JUMP").jump_duration_ticks == 3

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            load_preset("nightmare")

    def test_unknown_field_in_preset(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("presets:\n  odd:\n    warp_speed: 9\n")

        with pytest.raises(ValueError, match="warp_speed"):
            load_preset("odd", str(path))
