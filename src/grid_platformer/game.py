"""Level sequencing: lives, restarts and advancing through a list of plans.

The sequence is a small explicit state machine::

    PLAYING(n) --lost, lives left--> PLAYING(n)
    PLAYING(n) --lost, no lives----> PLAYING(0), lives reset
    PLAYING(n) --won, more levels--> PLAYING(n + 1)
    PLAYING(n) --won, last level---> COMPLETE
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping, Optional, Sequence

from .config import GameConfig
from .level import Level, STATUS_LOST, STATUS_WON

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputState:
    """Snapshot of the held direction keys for one frame."""
    left: bool = False
    right: bool = False
    up: bool = False

    @classmethod
    def from_mapping(cls, pressed: Mapping[str, bool]) -> "InputState":
        """Build from a ``{"left": True, ...}`` style mapping. Missing names are released."""
        return cls(
            left=bool(pressed.get("left", False)),
            right=bool(pressed.get("right", False)),
            up=bool(pressed.get("up", False)),
        )


class SequenceState(Enum):
    """Sequence states. LOST and WON only hold inside finish_level()."""
    PLAYING = auto()
    LOST = auto()
    WON = auto()
    COMPLETE = auto()


class Transition(Enum):
    """What happened when a finished level was handed back to the sequence."""
    RESTART = auto()     # Lost, lives left: same level again
    GAME_OVER = auto()   # Lost the last life: back to level 0 with full lives
    NEXT_LEVEL = auto()  # Won, more levels to go
    COMPLETE = auto()    # Won the last level


class GameSequence:
    """Runs a list of level plans with a lives counter."""

    def __init__(
        self,
        plans: Sequence[Sequence[str]],
        config: Optional[GameConfig] = None,
        start_level: int = 0,
        rng: Optional[random.Random] = None,
    ):
        """Create sequence and load the starting level.

        Args:
            plans: Level plans in play order.
            config: Game configuration. Uses defaults if None.
            start_level: Index of the first level to play.
            rng: Random source handed to every level built.
        """
        if not plans:
            raise ValueError("Level sequence needs at least one plan")
        if not 0 <= start_level < len(plans):
            raise ValueError(f"Start level {start_level} out of range (0-{len(plans) - 1})")

        self.plans = list(plans)
        self.config = config or GameConfig()
        self.rng = rng
        self.lives = self.config.lives
        self.level_index = start_level
        self.state = SequenceState.PLAYING
        self.level = self._build_level(start_level)

    def _build_level(self, n: int) -> Level:
        logger.info("Starting level %d/%d (lives: %d)", n + 1, len(self.plans), self.lives)
        return Level(self.plans[n], config=self.config.physics, rng=self.rng)

    @property
    def complete(self) -> bool:
        """Whether the whole sequence has been won."""
        return self.state == SequenceState.COMPLETE

    def finish_level(self) -> Transition:
        """Hand the finished level back and move to the next state.

        Call once the current level reports ``is_finished()``.

        Returns:
            The transition taken.
        """
        if self.state != SequenceState.PLAYING:
            raise RuntimeError(f"Cannot finish a level in state {self.state.name}")

        if self.level.status == STATUS_LOST:
            self.state = SequenceState.LOST
            return self._on_lost()
        if self.level.status == STATUS_WON:
            self.state = SequenceState.WON
            return self._on_won()
        raise RuntimeError("Current level has not been won or lost")

    def _on_lost(self) -> Transition:
        self.lives -= 1
        if self.lives > 0:
            logger.info("Level %d lost, %d lives left", self.level_index + 1, self.lives)
            transition = Transition.RESTART
        else:
            logger.info("Out of lives, restarting from the first level")
            self.lives = self.config.lives
            self.level_index = 0
            transition = Transition.GAME_OVER
        self.state = SequenceState.PLAYING
        self.level = self._build_level(self.level_index)
        return transition

    def _on_won(self) -> Transition:
        if self.level_index < len(self.plans) - 1:
            logger.info("Level %d won", self.level_index + 1)
            self.level_index += 1
            self.state = SequenceState.PLAYING
            self.level = self._build_level(self.level_index)
            return Transition.NEXT_LEVEL
        logger.info("All %d levels won", len(self.plans))
        self.state = SequenceState.COMPLETE
        return Transition.COMPLETE

    def step(self, dt: float, keys: InputState) -> Optional[Transition]:
        """Animate the current level and handle its end.

        Args:
            dt: Frame time in seconds (already clamped by the caller).
            keys: Held keys for this frame.

        Returns:
            The transition taken this frame, or None.
        """
        if self.complete:
            return None
        self.level.animate(dt, keys)
        if self.level.is_finished():
            return self.finish_level()
        return None
