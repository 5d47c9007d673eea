"""
Configuration Loader
====================

Loads game_config.yaml into an immutable GameConfig, validates bounds and
resolves named presets.

Construction of a GameConfig never checks bounds. Callers that build a
config by hand must check `is_valid_config()` before starting a game.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Structural bounds
MIN_TRACK_LENGTH = 5
MAX_TRACK_LENGTH = 50
MIN_JUMP_TICKS = 1
MAX_JUMP_TICKS = 20
MIN_LIVES = 1
MAX_LIVES = 10


@dataclass(frozen=True)
class GameConfig:
    """
    Structural parameters of one game.

    All values are immutable; use `with_overrides()` to derive a variant.
    Defaults reproduce the classic arcade tuning.
    """
    track_length: int = 24
    truck_position: int = 0
    jump_duration_ticks: int = 6
    lives: int = 3
    obstacle_base_speed: int = 1
    max_level: int = 99
    points_per_obstacle: int = 80
    points_level_bonus: int = 60
    obstacle_spawn_interval: int = 8
    min_obstacle_width: int = 1
    max_obstacle_width: int = 3
    seed: Optional[int] = None

    @property
    def spawn_position(self) -> int:
        """Cell where new obstacles appear."""
        return self.track_length - 1

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **overrides)

    def is_valid(self) -> bool:
        return is_valid_config(self)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


CONFIG_FIELDS = tuple(f.name for f in dataclasses.fields(GameConfig))


def config_errors(config: GameConfig) -> List[str]:
    """
    List every bound the config violates.

    Args:
        config: Config to check.

    Returns:
        Human-readable problems; empty when the config is valid.
    """
    errors: List[str] = []

    if not MIN_TRACK_LENGTH <= config.track_length <= MAX_TRACK_LENGTH:
        errors.append(
            f"track_length must be in [{MIN_TRACK_LENGTH}, {MAX_TRACK_LENGTH}], "
            f"got {config.track_length}"
        )
    if not 0 <= config.truck_position < config.track_length:
        errors.append(
            f"truck_position must be in [0, track_length), got {config.truck_position}"
        )
    if not MIN_JUMP_TICKS <= config.jump_duration_ticks <= MAX_JUMP_TICKS:
        errors.append(
            f"jump_duration_ticks must be in [{MIN_JUMP_TICKS}, {MAX_JUMP_TICKS}], "
            f"got {config.jump_duration_ticks}"
        )
    if not MIN_LIVES <= config.lives <= MAX_LIVES:
        errors.append(f"lives must be in [{MIN_LIVES}, {MAX_LIVES}], got {config.lives}")
    if config.obstacle_base_speed < 0:
        errors.append(f"obstacle_base_speed must be >= 0, got {config.obstacle_base_speed}")
    if config.max_level < 1:
        errors.append(f"max_level must be >= 1, got {config.max_level}")
    if config.points_per_obstacle < 0:
        errors.append(f"points_per_obstacle must be >= 0, got {config.points_per_obstacle}")
    if config.points_level_bonus < 0:
        errors.append(f"points_level_bonus must be >= 0, got {config.points_level_bonus}")
    if config.obstacle_spawn_interval <= 0:
        errors.append(
            f"obstacle_spawn_interval must be > 0, got {config.obstacle_spawn_interval}"
        )
    if config.min_obstacle_width < 1:
        errors.append(f"min_obstacle_width must be >= 1, got {config.min_obstacle_width}")
    if config.max_obstacle_width < config.min_obstacle_width:
        errors.append(
            f"max_obstacle_width ({config.max_obstacle_width}) must be >= "
            f"min_obstacle_width ({config.min_obstacle_width})"
        )

    return errors


def is_valid_config(config: GameConfig) -> bool:
    """True if the config satisfies every structural bound."""
    return not config_errors(config)


def _default_config_path() -> Path:
    return Path(os.path.dirname(os.path.dirname(__file__))) / "game_config.yaml"


def _read_yaml(config_path: Optional[str]) -> Dict[str, Any]:
    path = Path(config_path) if config_path is not None else _default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    logger.debug("Loaded game config from %s", path)
    return raw


def _parse_config(raw: Dict[str, Any]) -> GameConfig:
    """Map YAML sections onto GameConfig fields, falling back to defaults."""
    defaults = GameConfig()

    track = raw.get("track", {}) or {}
    jump = raw.get("jump", {}) or {}
    obstacles = raw.get("obstacles", {}) or {}
    levels = raw.get("levels", {}) or {}
    scoring = raw.get("scoring", {}) or {}
    rng = raw.get("rng", {}) or {}

    seed = rng.get("seed", defaults.seed)

    return GameConfig(
        track_length=int(track.get("length", defaults.track_length)),
        truck_position=int(track.get("truck_position", defaults.truck_position)),
        jump_duration_ticks=int(jump.get("duration_ticks", defaults.jump_duration_ticks)),
        lives=int(raw.get("lives", defaults.lives)),
        obstacle_base_speed=int(obstacles.get("base_speed", defaults.obstacle_base_speed)),
        max_level=int(levels.get("max_level", defaults.max_level)),
        points_per_obstacle=int(scoring.get("points_per_obstacle", defaults.points_per_obstacle)),
        points_level_bonus=int(scoring.get("level_bonus", defaults.points_level_bonus)),
        obstacle_spawn_interval=int(
            obstacles.get("spawn_interval", defaults.obstacle_spawn_interval)
        ),
        min_obstacle_width=int(obstacles.get("min_width", defaults.min_obstacle_width)),
        max_obstacle_width=int(obstacles.get("max_width", defaults.max_obstacle_width)),
        seed=None if seed is None else int(seed),
    )


def _check(config: GameConfig, source: str) -> None:
    errors = config_errors(config)
    if errors:
        raise ValueError(f"Invalid config ({source}): " + "; ".join(errors))


def load_config(config_path: Optional[str] = None, validate: bool = True) -> GameConfig:
    """
    Load game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.
        validate: If True, reject configs that violate structural bounds.

    Returns:
        GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If validate is True and the config is out of bounds.
    """
    config = _parse_config(_read_yaml(config_path))
    if validate:
        _check(config, str(config_path or "default"))
    return config


def _normalize_preset_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def preset_names(config_path: Optional[str] = None) -> List[str]:
    """Names of all presets defined in the config file."""
    raw = _read_yaml(config_path)
    return list((raw.get("presets") or {}).keys())


def load_preset(
    name: str,
    config_path: Optional[str] = None,
    validate: bool = True
) -> GameConfig:
    """
    Load the base config with a named preset applied on top.

    Args:
        name: Preset name, e.g. "hard" or "long-track" (case-insensitive).
        config_path: Path to game_config.yaml. If None, uses default location.
        validate: If True, reject presets that produce an invalid config.

    Raises:
        KeyError: If the preset is not defined.
        ValueError: If a preset names an unknown field or is out of bounds.
    """
    raw = _read_yaml(config_path)
    presets = raw.get("presets") or {}
    key = _normalize_preset_name(name)
    if key not in presets:
        raise KeyError(f"Unknown preset '{name}'. Available: {sorted(presets)}")

    overrides = dict(presets[key] or {})
    unknown = set(overrides) - set(CONFIG_FIELDS)
    if unknown:
        raise ValueError(f"Preset '{key}' sets unknown fields: {sorted(unknown)}")

    config = _parse_config(raw).with_overrides(**overrides)
    if validate:
        _check(config, f"preset {key}")
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
