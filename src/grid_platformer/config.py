"""Configuration for the tile platformer.

PhysicsConfig holds the simulation constants (all in grid units and seconds).
GameConfig adds the level-sequence and display settings around it.

The defaults reproduce the classic feel: walk at 7 cells/s, fall at
35 cells/s², jump off the ground at 17 cells/s.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, ClassVar, Optional
import random


@dataclass
class PhysicsConfig:
    """Constants that drive actor updates and the level clock."""

    # Player movement
    move_speed: float = 7.0  # Horizontal speed while left/right is held (cells/s)
    gravity: float = 35.0  # Downward acceleration (cells/s²), no terminal velocity
    jump_speed: float = 17.0  # Upward speed set when landing with up held (cells/s)

    # Level clock
    max_step: float = 0.01  # Longest physics sub-step (s)
    finish_delay: float = 1.0  # Countdown between won/lost and level end (s)

    # Coin wobble (cosmetic)
    wobble_speed: float = 8.0  # rad/s
    wobble_dist: float = 0.15  # cells

    # === DERIVED VALUES ===

    @property
    def jump_height(self) -> float:
        """Apex height of a standing jump in cells. h = v²/2g."""
        return self.jump_speed ** 2 / (2 * self.gravity)

    @property
    def jump_duration(self) -> float:
        """Seconds from take-off to apex. t = v/g."""
        return self.jump_speed / self.gravity

    # === SAMPLING RANGES ===

    MOVE_SPEED_RANGE: ClassVar[Tuple[float, float]] = (4.0, 10.0)
    GRAVITY_RANGE: ClassVar[Tuple[float, float]] = (20.0, 50.0)
    JUMP_SPEED_RANGE: ClassVar[Tuple[float, float]] = (12.0, 22.0)

    @classmethod
    def sample_full(cls, rng: Optional[random.Random] = None) -> "PhysicsConfig":
        """Sample player physics. Clock and wobble constants keep their defaults."""
        rng = rng or random
        return cls(
            move_speed=rng.uniform(*cls.MOVE_SPEED_RANGE),
            gravity=rng.uniform(*cls.GRAVITY_RANGE),
            jump_speed=rng.uniform(*cls.JUMP_SPEED_RANGE),
        )

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary (configured values only)."""
        return {
            "move_speed": self.move_speed,
            "gravity": self.gravity,
            "jump_speed": self.jump_speed,
            "max_step": self.max_step,
            "finish_delay": self.finish_delay,
            "wobble_speed": self.wobble_speed,
            "wobble_dist": self.wobble_dist,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PhysicsConfig":
        """Create from dictionary (ignores derived values)."""
        return cls(
            move_speed=d.get("move_speed", 7.0),
            gravity=d.get("gravity", 35.0),
            jump_speed=d.get("jump_speed", 17.0),
            max_step=d.get("max_step", 0.01),
            finish_delay=d.get("finish_delay", 1.0),
            wobble_speed=d.get("wobble_speed", 8.0),
            wobble_dist=d.get("wobble_dist", 0.15),
        )


@dataclass
class GameConfig:
    """Complete game configuration."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)

    # Level sequence
    lives: int = 3

    # Display settings
    scale: int = 30  # Pixels per grid cell
    screen_width: int = 800
    screen_height: int = 450
    fps: int = 60
    max_frame_time: float = 0.1  # Frame deltas are clamped to this (s)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "lives": self.lives,
            "scale": self.scale,
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
            "max_frame_time": self.max_frame_time,
        }


CONFIGS = {
    # Classic feel
    "default": GameConfig(),

    # Low gravity, long hang time
    "floaty": GameConfig(physics=PhysicsConfig(gravity=20.0, jump_speed=13.0)),

    # Short hops, fast falls
    "heavy": GameConfig(physics=PhysicsConfig(gravity=50.0, jump_speed=19.0)),

    # Quick on the ground, a single life
    "nimble": GameConfig(physics=PhysicsConfig(move_speed=10.0), lives=1),
}


def get_config(name: str) -> GameConfig:
    """Look up a preset by name. Returns a fresh copy."""
    if name not in CONFIGS:
        raise ValueError(f"Unknown config preset: {name}")
    preset = CONFIGS[name]
    return GameConfig(
        physics=PhysicsConfig.from_dict(preset.physics.to_dict()),
        lives=preset.lives,
        scale=preset.scale,
        screen_width=preset.screen_width,
        screen_height=preset.screen_height,
        fps=preset.fps,
        max_frame_time=preset.max_frame_time,
    )
