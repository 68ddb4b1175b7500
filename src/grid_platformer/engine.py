"""Pygame front end: window, keyboard tracking and the frame loop.

Drives a GameSequence and draws its current level every frame.
"""

import logging
from typing import Optional, Sequence, Dict, Any

import pygame

from .config import GameConfig
from .game import GameSequence, InputState, Transition
from .level import Level
from .levels import GAME_LEVELS
from .rendering import (
    COLOR_TEXT,
    Viewport,
    draw_background,
    draw_frame,
    draw_win_message,
)

logger = logging.getLogger(__name__)


# Key bindings: logical direction -> pygame keys
KEY_BINDINGS = {
    "left": (pygame.K_LEFT, pygame.K_a),
    "right": (pygame.K_RIGHT, pygame.K_d),
    "up": (pygame.K_UP, pygame.K_w),
}


class PlatformerEngine:
    """Main game engine coordinating the level sequence and the display.

    Handles:
    - Game loop with clamped frame times
    - Pygame rendering with a scrolling viewport
    - Keyboard input
    - Level teardown on restart/advance
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        plans: Optional[Sequence[Sequence[str]]] = None,
        start_level: int = 0,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            plans: Level plans. Uses the built-in levels if None.
            start_level: Index of the first level to play.
        """
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Grid Platformer")
        self.clock = pygame.time.Clock()

        self.sequence = GameSequence(
            plans if plans is not None else GAME_LEVELS,
            config=self.config,
            start_level=start_level,
        )

        self.running = False
        self.viewport = Viewport(self.config.screen_width, self.config.screen_height)

        # Static grid surface for the level currently on screen
        self._background: Optional[pygame.Surface] = None
        self._drawn_level: Optional[Level] = None

        # Input state
        self._keys_pressed: Dict[int, bool] = {}

    @property
    def level(self) -> Level:
        return self.sequence.level

    def input_state(self) -> InputState:
        """Current held keys as an InputState."""
        return InputState(**{
            name: any(self._keys_pressed.get(key) for key in keys)
            for name, keys in KEY_BINDINGS.items()
        })

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._keys_pressed[event.key] = True
                if event.key == pygame.K_ESCAPE:
                    self.running = False
            elif event.type == pygame.KEYUP:
                self._keys_pressed[event.key] = False

    def update(self, dt: float) -> Optional[Transition]:
        """Update game state.

        Args:
            dt: Time since the last frame in seconds. Clamped to max_frame_time.

        Returns:
            The sequence transition taken this frame, or None.
        """
        if self.sequence.complete:
            return None

        dt = min(dt, self.config.max_frame_time)
        transition = self.sequence.step(dt, self.input_state())
        if transition is not None:
            self._clear_level()
        return transition

    def _clear_level(self) -> None:
        """Drop the finished level's display state."""
        self._background = None
        self._drawn_level = None
        self.viewport.left = 0.0
        self.viewport.top = 0.0

    def render(self) -> None:
        """Render current game state."""
        if self.sequence.complete:
            draw_win_message(self.screen)
            pygame.display.flip()
            return

        level = self.level
        scale = self.config.scale
        if self._background is None or self._drawn_level is not level:
            self._background = draw_background(level, scale)
            self._drawn_level = level

        self.viewport.scroll_player_into_view(level, scale)
        draw_frame(self.screen, self._background, level, self.viewport, scale)
        self._draw_hud()

        pygame.display.flip()

    def _draw_hud(self) -> None:
        """Lives, level number and coins in the top-left corner."""
        font = pygame.font.Font(None, 28)
        level = self.level
        collected = level.coins_total - level.coins_remaining()
        hud_text = (
            f"Level {self.sequence.level_index + 1}/{len(self.sequence.plans)}  |  "
            f"Lives: {self.sequence.lives}  |  Coins: {collected}/{level.coins_total}"
        )
        text_surface = font.render(hud_text, True, COLOR_TEXT)
        self.screen.blit(text_surface, (10, 10))

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        logger.info("Engine running at %d fps", self.config.fps)

        # First tick only starts the clock
        self.clock.tick(self.config.fps)

        while self.running:
            self.handle_events()
            dt = self.clock.tick(self.config.fps) / 1000.0
            self.update(dt)
            self.render()

        pygame.quit()

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for observation/logging.

        Returns:
            Dictionary with sequence progress, level status and player position.
        """
        level = self.level
        state = {
            "level_index": self.sequence.level_index,
            "lives": self.sequence.lives,
            "sequence_complete": self.sequence.complete,
            "status": level.status,
            "coins_remaining": level.coins_remaining(),
        }
        player = level.player
        if player is not None:
            state["player_position"] = (player.pos.x, player.pos.y)
            state["player_speed"] = (player.speed.x, player.speed.y)
        return state
