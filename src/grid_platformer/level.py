"""Level simulation: static grid, actor list, collision queries, won/lost clock.

Coordinates are in grid cells with the origin at the top-left of the plan.
The level is built once per attempt and thrown away on restart.
"""

import logging
import math
import random
from typing import List, Optional, Sequence

from .config import PhysicsConfig
from .entities import ACTOR_CHARS, Actor
from .vector import Vector

logger = logging.getLogger(__name__)

# Cell types (empty cells are None)
WALL = "wall"
LAVA = "lava"

# Level status
STATUS_WON = "won"
STATUS_LOST = "lost"


class Level:
    """A single playable level built from an ASCII plan.

    Plan characters:
        ``x`` wall, ``!`` static lava, ``@`` player, ``o`` coin,
        ``=`` / ``|`` / ``v`` moving lava. Anything else is empty.
    """

    def __init__(
        self,
        plan: Sequence[str],
        config: Optional[PhysicsConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Parse the plan into a grid and actors.

        Args:
            plan: Rows of equal length. Exactly one ``@`` is expected.
            config: Physics constants. Uses defaults if None.
            rng: Random source for coin wobble phases. Uses the module RNG if None.
        """
        self.config = config or PhysicsConfig()
        self.width = len(plan[0])
        self.height = len(plan)
        self.grid: List[List[Optional[str]]] = []
        self.actors: List[Actor] = []

        for y, line in enumerate(plan):
            grid_line: List[Optional[str]] = []
            for x in range(self.width):
                # Short rows read as empty past their end
                ch = line[x] if x < len(line) else " "
                field_type = None
                actor_cls = ACTOR_CHARS.get(ch)
                if actor_cls is not None:
                    actor = actor_cls(Vector(x, y), ch, config=self.config, rng=rng)
                    actor.actor_id = len(self.actors)
                    self.actors.append(actor)
                elif ch == "x":
                    field_type = WALL
                elif ch == "!":
                    field_type = LAVA
                grid_line.append(field_type)
            self.grid.append(grid_line)

        self._player_id: Optional[int] = next(
            (a.actor_id for a in self.actors if a.kind == "player"), None
        )
        self.coins_total = sum(1 for a in self.actors if a.kind == "coin")

        self.status: Optional[str] = None
        self.finish_delay: Optional[float] = None
        self.elapsed = 0.0

        logger.debug(
            "Loaded %dx%d level: %d actors, %d coins",
            self.width, self.height, len(self.actors), self.coins_total,
        )

    @property
    def player(self) -> Optional[Actor]:
        """The player actor, looked up by key in the actor list."""
        if self._player_id is None:
            return None
        for actor in self.actors:
            if actor.actor_id == self._player_id:
                return actor
        return None

    def is_finished(self) -> bool:
        """True once won/lost and the finish delay has run out."""
        return self.status is not None and self.finish_delay < 0

    def coins_remaining(self) -> int:
        return sum(1 for a in self.actors if a.kind == "coin")

    def obstacle_at(self, pos: Vector, size: Vector) -> Optional[str]:
        """Terrain type touched by the box at ``pos`` with ``size``, or None.

        Leaving through the left, right or top is a wall. Leaving through
        the bottom is lava. Otherwise cells are scanned row by row from the
        top and the first non-empty one wins.
        """
        x_start = math.floor(pos.x)
        x_end = math.ceil(pos.x + size.x)
        y_start = math.floor(pos.y)
        y_end = math.ceil(pos.y + size.y)

        if x_start < 0 or x_end > self.width or y_start < 0:
            return WALL
        if y_end > self.height:
            return LAVA
        for y in range(y_start, y_end):
            for x in range(x_start, x_end):
                field_type = self.grid[y][x]
                if field_type:
                    return field_type
        return None

    def actor_at(self, actor: Actor) -> Optional[Actor]:
        """First other actor whose box overlaps ``actor``, in list order."""
        for other in self.actors:
            if (other is not actor
                    and actor.pos.x + actor.size.x > other.pos.x
                    and actor.pos.x < other.pos.x + other.size.x
                    and actor.pos.y + actor.size.y > other.pos.y
                    and actor.pos.y < other.pos.y + other.size.y):
                return other
        return None

    def animate(self, step: float, keys) -> None:
        """Advance the level by ``step`` seconds in sub-steps of at most ``max_step``.

        Args:
            step: Frame time in seconds.
            keys: InputState (anything with left/right/up flags).
        """
        if self.status is not None:
            self.finish_delay -= step

        while step > 0:
            this_step = min(step, self.config.max_step)
            # Snapshot: a coin removed mid-pass still gets its turn
            for actor in list(self.actors):
                actor.act(this_step, self, keys)
            step -= this_step
            self.elapsed += this_step

    def player_touched(self, kind: Optional[str], actor: Optional[Actor] = None) -> None:
        """Handle the player touching terrain or another actor.

        Args:
            kind: Cell type or actor kind that was touched.
            actor: The touched actor, for actor touches.
        """
        if kind == LAVA and self.status is None:
            self.status = STATUS_LOST
            self.finish_delay = self.config.finish_delay
            logger.debug("Player touched lava at t=%.2f", self.elapsed)
        elif kind == "coin":
            self.actors = [other for other in self.actors if other is not actor]
            if not any(other.kind == "coin" for other in self.actors):
                self.status = STATUS_WON
                self.finish_delay = self.config.finish_delay
                logger.debug("Last coin collected at t=%.2f", self.elapsed)
