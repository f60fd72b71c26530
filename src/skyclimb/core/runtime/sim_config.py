"""
sim_config.py
-------------
Immutable simulation configuration built from game_settings defaults.

A SimulationConfig is handed to every simulation component at construction;
nothing in the simulation reads the settings classes directly, so tests and
custom runs can swap any constant without patching globals.
"""

from dataclasses import dataclass, field, asdict, fields
from typing import Optional, Tuple

from skyclimb.core.errors import ConfigError
from skyclimb.core.runtime.game_settings import (
    Display, PlayerSettings, PlatformSettings, DifficultySettings, Bounds,
)
from skyclimb.core.services.config_manager import load_config, merge_dicts


# ===========================================================
# Sections
# ===========================================================

@dataclass(frozen=True)
class CanvasConfig:
    width: float = Display.WIDTH
    height: float = Display.HEIGHT

    @property
    def midpoint_y(self) -> float:
        return self.height / 2


@dataclass(frozen=True)
class PlayerConfig:
    width: float = PlayerSettings.WIDTH
    height: float = PlayerSettings.HEIGHT
    jump_force: float = PlayerSettings.JUMP_FORCE
    move_speed: float = PlayerSettings.MOVE_SPEED
    gravity: float = PlayerSettings.GRAVITY
    max_fall_speed: float = PlayerSettings.MAX_FALL_SPEED
    spawn_offset_y: float = PlayerSettings.SPAWN_OFFSET_Y


@dataclass(frozen=True)
class PlatformConfig:
    width: float = PlatformSettings.WIDTH
    height: float = PlatformSettings.HEIGHT
    min_gap: float = PlatformSettings.MIN_GAP
    max_gap: float = PlatformSettings.MAX_GAP
    initial_y: float = PlatformSettings.INITIAL_Y
    initial_count: int = PlatformSettings.INITIAL_COUNT
    min_live: int = PlatformSettings.MIN_LIVE
    dedup_tolerance: float = PlatformSettings.DEDUP_TOLERANCE
    max_spawn_attempts: int = PlatformSettings.MAX_SPAWN_ATTEMPTS
    moving_speed: float = PlatformSettings.MOVING_SPEED
    moving_range: float = PlatformSettings.MOVING_RANGE
    cleanup_margin: float = Bounds.PLATFORM_CLEANUP_MARGIN


@dataclass(frozen=True)
class DifficultyConfig:
    milestones: Tuple[float, ...] = DifficultySettings.MILESTONES
    speed_multipliers: Tuple[float, ...] = DifficultySettings.SPEED_MULTIPLIERS
    moving_threshold: float = DifficultySettings.MOVING_THRESHOLD
    moving_chance: float = DifficultySettings.MOVING_CHANCE


@dataclass(frozen=True)
class WorldConfig:
    distance_scale: float = Bounds.DISTANCE_SCALE
    fall_limit: Optional[float] = None   # None -> one canvas height


# ===========================================================
# Root Config
# ===========================================================

_SECTIONS = {
    "canvas": CanvasConfig,
    "player": PlayerConfig,
    "platform": PlatformConfig,
    "difficulty": DifficultyConfig,
    "world": WorldConfig,
}


@dataclass(frozen=True)
class SimulationConfig:
    """Every constant a simulation run needs, grouped by subsystem."""

    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    platform: PlatformConfig = field(default_factory=PlatformConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    world: WorldConfig = field(default_factory=WorldConfig)

    def __post_init__(self):
        try:
            self.validate()
        except TypeError as e:
            raise ConfigError(f"Config value has the wrong type: {e}") from e

    @property
    def fall_limit(self) -> float:
        """Fall distance below the best point that ends the run."""
        if self.world.fall_limit is None:
            return self.canvas.height
        return self.world.fall_limit

    # -----------------------------------------------------------
    # Construction
    # -----------------------------------------------------------
    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """
        Build a config from a (possibly partial) nested dict.

        Unknown sections or keys raise ConfigError so typos in override
        files do not silently fall back to defaults.
        """
        merged = merge_dicts(cls().to_dict(), data or {})

        sections = {}
        for name, section_cls in _SECTIONS.items():
            values = merged.pop(name)
            if not isinstance(values, dict):
                raise ConfigError(f"Section '{name}' must be an object")
            known = {f.name for f in fields(section_cls)}
            unknown = set(values) - known
            if unknown:
                raise ConfigError(f"Unknown keys in '{name}': {sorted(unknown)}")
            try:
                if section_cls is DifficultyConfig:
                    values = dict(values)
                    values["milestones"] = tuple(values["milestones"])
                    values["speed_multipliers"] = tuple(values["speed_multipliers"])
                sections[name] = section_cls(**values)
            except TypeError as e:
                raise ConfigError(f"Section '{name}' has a value of the wrong type: {e}") from e

        if merged:
            raise ConfigError(f"Unknown config sections: {sorted(merged)}")

        return cls(**sections)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["difficulty"]["milestones"] = list(self.difficulty.milestones)
        data["difficulty"]["speed_multipliers"] = list(self.difficulty.speed_multipliers)
        return data

    # -----------------------------------------------------------
    # Validation
    # -----------------------------------------------------------
    def validate(self):
        """Raise ConfigError if the configuration cannot drive a run."""
        if self.canvas.width <= 0 or self.canvas.height <= 0:
            raise ConfigError("Canvas dimensions must be positive")
        if self.player.width <= 0 or self.player.height <= 0:
            raise ConfigError("Player dimensions must be positive")
        if self.player.max_fall_speed <= 0:
            raise ConfigError("max_fall_speed must be positive")
        if self.platform.width <= 0 or self.platform.height <= 0:
            raise ConfigError("Platform dimensions must be positive")
        if self.platform.width > self.canvas.width:
            raise ConfigError("Platform is wider than the canvas")
        if self.platform.min_gap <= 0 or self.platform.min_gap > self.platform.max_gap:
            raise ConfigError("Platform gaps must satisfy 0 < min_gap <= max_gap")
        if self.platform.min_gap <= self.platform.dedup_tolerance:
            raise ConfigError("min_gap must exceed dedup_tolerance")
        if self.platform.min_live < 1:
            raise ConfigError("min_live must be at least 1")
        if self.platform.initial_count < 0:
            raise ConfigError("initial_count cannot be negative")
        if self.platform.dedup_tolerance < 0:
            raise ConfigError("dedup_tolerance cannot be negative")
        if self.platform.max_spawn_attempts < 1:
            raise ConfigError("max_spawn_attempts must be at least 1")

        milestones = self.difficulty.milestones
        multipliers = self.difficulty.speed_multipliers
        if len(multipliers) != len(milestones) + 1:
            raise ConfigError(
                f"Expected {len(milestones) + 1} speed multipliers for "
                f"{len(milestones)} milestones, got {len(multipliers)}"
            )
        if any(b <= a for a, b in zip(milestones, milestones[1:])):
            raise ConfigError("Milestones must be strictly ascending")
        if any(b < a for a, b in zip(multipliers, multipliers[1:])):
            raise ConfigError("Speed multipliers must be non-decreasing")
        if multipliers[0] < 1.0:
            raise ConfigError("Base speed multiplier must be at least 1.0")
        if not 0.0 <= self.difficulty.moving_chance <= 1.0:
            raise ConfigError("moving_chance must be within [0, 1]")

        if self.world.distance_scale <= 0:
            raise ConfigError("distance_scale must be positive")
        if self.world.fall_limit is not None and self.world.fall_limit <= 0:
            raise ConfigError("fall_limit must be positive")


# ===========================================================
# Loading
# ===========================================================

def load_simulation_config(path: Optional[str] = None, strict: bool = False) -> SimulationConfig:
    """
    Load JSON overrides on top of the defaults.

    Args:
        path: Override file (None -> pure defaults)
        strict: Raise instead of falling back when the file is unreadable
    """
    if path is None:
        return SimulationConfig()
    overrides = load_config(path, default_dict={}, strict=strict)
    return SimulationConfig.from_dict(overrides)
