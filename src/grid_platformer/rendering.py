"""Pygame drawing for levels, shared by the engine and the gym environment.

Only reads level state: grid, actors (pos/size/kind) and status.
"""

from dataclasses import dataclass
from typing import Tuple

import pygame

from .level import Level, LAVA, WALL, STATUS_LOST, STATUS_WON


# Colors (RGB)
COLOR_BG = (52, 166, 251)
COLOR_WALL = (255, 255, 255)
COLOR_LAVA = (255, 100, 100)
COLOR_COIN = (241, 229, 89)
COLOR_PLAYER = (64, 64, 64)
COLOR_PLAYER_LOST = (160, 64, 64)
COLOR_TEXT = (255, 255, 255)

CELL_COLORS = {
    WALL: COLOR_WALL,
    LAVA: COLOR_LAVA,
}

ACTOR_COLORS = {
    "player": COLOR_PLAYER,
    "lava": COLOR_LAVA,
    "coin": COLOR_COIN,
}

# Whole-view tint once a level is decided (RGBA)
STATUS_TINTS = {
    STATUS_WON: (255, 255, 255, 40),
    STATUS_LOST: (120, 0, 0, 60),
}


@dataclass
class Viewport:
    """Visible window onto the level, in pixels."""
    width: int
    height: int
    left: float = 0.0
    top: float = 0.0

    def scroll_player_into_view(self, level: Level, scale: int) -> None:
        """Scroll so the player's centre stays within the middle third of the view."""
        player = level.player
        if player is None:
            return

        margin_x = self.width / 3
        margin_y = self.height / 3
        center = player.pos.plus(player.size.times(0.5)).times(scale)

        if center.x < self.left + margin_x:
            self.left = center.x - margin_x
        elif center.x > self.left + self.width - margin_x:
            self.left = center.x + margin_x - self.width

        if center.y < self.top + margin_y:
            self.top = center.y - margin_y
        elif center.y > self.top + self.height - margin_y:
            self.top = center.y + margin_y - self.height

        # Never scroll past the level edges
        max_left = max(0, level.width * scale - self.width)
        max_top = max(0, level.height * scale - self.height)
        self.left = min(max(self.left, 0), max_left)
        self.top = min(max(self.top, 0), max_top)

    @property
    def offset(self) -> Tuple[int, int]:
        return int(self.left), int(self.top)


def draw_background(level: Level, scale: int) -> pygame.Surface:
    """Render the static grid once. Reused every frame until the level ends."""
    surface = pygame.Surface((level.width * scale, level.height * scale))
    surface.fill(COLOR_BG)
    for y, row in enumerate(level.grid):
        for x, field_type in enumerate(row):
            if field_type:
                pygame.draw.rect(
                    surface, CELL_COLORS[field_type],
                    (x * scale, y * scale, scale, scale)
                )
    return surface


def draw_actors(surface: pygame.Surface, level: Level, scale: int, offset: Tuple[int, int]) -> None:
    """Draw every actor at its current position."""
    off_x, off_y = offset
    for actor in level.actors:
        color = ACTOR_COLORS.get(actor.kind, COLOR_TEXT)
        if actor.kind == "player" and level.status == STATUS_LOST:
            color = COLOR_PLAYER_LOST
        rect = (
            int(actor.pos.x * scale) - off_x,
            int(actor.pos.y * scale) - off_y,
            max(0, int(actor.size.x * scale)),
            max(0, int(actor.size.y * scale)),
        )
        pygame.draw.rect(surface, color, rect)


def draw_frame(
    surface: pygame.Surface,
    background: pygame.Surface,
    level: Level,
    viewport: Viewport,
    scale: int,
) -> None:
    """Draw one frame: grid, actors and the status tint."""
    surface.fill(COLOR_BG)
    off_x, off_y = viewport.offset
    surface.blit(background, (-off_x, -off_y))
    draw_actors(surface, level, scale, viewport.offset)

    tint = STATUS_TINTS.get(level.status)
    if tint is not None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill(tint)
        surface.blit(overlay, (0, 0))


def draw_win_message(surface: pygame.Surface, text: str = "You won!") -> None:
    """Centered banner shown when the whole sequence is won."""
    surface.fill(COLOR_BG)
    font = pygame.font.Font(None, 64)
    text_surface = font.render(text, True, COLOR_TEXT)
    text_rect = text_surface.get_rect(center=(surface.get_width() // 2, surface.get_height() // 2))
    surface.blit(text_surface, text_rect)
