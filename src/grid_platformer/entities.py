"""Game entities: Player, Lava, Coin.

Every actor exposes ``pos``, ``size`` and ``kind`` and advances itself in
``act(step, level, keys)``. Actors never keep a reference to their level;
it is handed in on every call.
"""

import math
import random
from typing import Optional, TYPE_CHECKING

from .config import PhysicsConfig
from .vector import Vector

if TYPE_CHECKING:
    from .game import InputState
    from .level import Level


class Actor:
    """Common base for everything that moves or can be touched."""

    kind: str = "actor"

    def __init__(self, pos: Vector, size: Vector):
        self.pos = pos
        self.size = size
        self.actor_id: Optional[int] = None  # Assigned by the spawning level

    def act(self, step: float, level: "Level", keys: "InputState") -> None:
        """Advance by ``step`` seconds."""
        raise NotImplementedError

    @property
    def bounds(self):
        """Get (left, top, right, bottom) bounds in cells."""
        return (
            self.pos.x,
            self.pos.y,
            self.pos.x + self.size.x,
            self.pos.y + self.size.y,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pos=({self.pos.x:.2f}, {self.pos.y:.2f}))"


class Player(Actor):
    """Player with left/right walking, gravity and landing-triggered jumps.

    Spawns half a cell above its plan cell, since it is 1.5 cells tall.
    """

    kind = "player"

    def __init__(
        self,
        pos: Vector,
        ch: str = "@",
        config: Optional[PhysicsConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Create player at a plan cell.

        Args:
            pos: Spawn cell (top-left corner)
            ch: Plan character (unused, registry signature)
            config: Physics constants. Uses defaults if None.
            rng: Random source (unused, registry signature)
        """
        super().__init__(pos.plus(Vector(0, -0.5)), Vector(0.8, 1.5))
        self.config = config or PhysicsConfig()
        self.speed = Vector(0, 0)

    def move_x(self, step: float, level: "Level", keys: "InputState") -> None:
        """Horizontal movement. Left wins when both directions are held."""
        speed_x = 0.0
        if keys.left:
            speed_x -= self.config.move_speed
        elif keys.right:
            speed_x += self.config.move_speed
        self.speed = Vector(speed_x, self.speed.y)

        new_pos = self.pos.plus(Vector(speed_x * step, 0))
        obstacle = level.obstacle_at(new_pos, self.size)
        if obstacle:
            level.player_touched(obstacle)
        else:
            self.pos = new_pos

    def move_y(self, step: float, level: "Level", keys: "InputState") -> None:
        """Vertical movement: gravity, landing, jumping."""
        speed_y = self.speed.y + step * self.config.gravity

        new_pos = self.pos.plus(Vector(0, speed_y * step))
        obstacle = level.obstacle_at(new_pos, self.size)
        if obstacle:
            level.player_touched(obstacle)
            # Jumps only start from a blocked fall, never mid-air
            if keys.up and speed_y > 0:
                speed_y = -self.config.jump_speed
            else:
                speed_y = 0.0
        else:
            self.pos = new_pos
        self.speed = Vector(self.speed.x, speed_y)

    def act(self, step: float, level: "Level", keys: "InputState") -> None:
        self.move_x(step, level, keys)
        self.move_y(step, level, keys)

        other = level.actor_at(self)
        if other is not None:
            level.player_touched(other.kind, other)

        # Sink and shrink after losing
        if level.status == "lost":
            self.pos = Vector(self.pos.x, self.pos.y + step)
            self.size = Vector(self.size.x, max(0.0, self.size.y - step))


# Plan character -> (speed, drips back to spawn)
LAVA_VARIANTS = {
    "=": (Vector(2, 0), False),
    "|": (Vector(0, 2), False),
    "v": (Vector(0, 3), True),
}


class Lava(Actor):
    """Moving lava block.

    ``=`` shuttles horizontally and ``|`` vertically, reversing on impact.
    ``v`` drips downward and restarts from its spawn cell on impact.
    """

    kind = "lava"

    def __init__(
        self,
        pos: Vector,
        ch: str = "=",
        config: Optional[PhysicsConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(pos, Vector(1, 1))
        speed, drips = LAVA_VARIANTS[ch]
        self.speed = speed
        self.repeat_pos: Optional[Vector] = pos if drips else None

    def act(self, step: float, level: "Level", keys: "InputState") -> None:
        new_pos = self.pos.plus(self.speed.times(step))
        if not level.obstacle_at(new_pos, self.size):
            self.pos = new_pos
        elif self.repeat_pos is not None:
            self.pos = self.repeat_pos
        else:
            self.speed = self.speed.times(-1)


class Coin(Actor):
    """Collectible coin bobbing around a fixed base position."""

    kind = "coin"

    def __init__(
        self,
        pos: Vector,
        ch: str = "o",
        config: Optional[PhysicsConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        base_pos = pos.plus(Vector(0.2, 0.1))
        super().__init__(base_pos, Vector(0.6, 0.6))
        self.config = config or PhysicsConfig()
        self.base_pos = base_pos
        self.wobble = (rng or random).random() * math.pi * 2

    def act(self, step: float, level: "Level", keys: "InputState") -> None:
        self.wobble += step * self.config.wobble_speed
        wobble_pos = math.sin(self.wobble) * self.config.wobble_dist
        self.pos = self.base_pos.plus(Vector(0, wobble_pos))


# Plan characters that spawn actors
ACTOR_CHARS = {
    "@": Player,
    "o": Coin,
    "=": Lava,
    "|": Lava,
    "v": Lava,
}
