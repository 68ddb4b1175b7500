"""grid-platformer: a small tile-based platformer built around a grid simulation.

Levels are ASCII plans: walls, static lava, moving lava, coins and a player.
The Level class runs the simulation in fixed sub-steps; a GameSequence adds
lives and level progression. A pygame engine and a Gymnasium environment sit
on top and only read level state.
"""

from .vector import Vector
from .config import PhysicsConfig, GameConfig, CONFIGS, get_config
from .entities import Actor, Player, Lava, Coin, ACTOR_CHARS
from .level import Level, WALL, LAVA, STATUS_WON, STATUS_LOST
from .levels import GAME_LEVELS, PlanFileError, load_plans, save_plans
from .game import GameSequence, InputState, SequenceState, Transition

__all__ = [
    "Vector",
    "PhysicsConfig",
    "GameConfig",
    "CONFIGS",
    "get_config",
    "Actor",
    "Player",
    "Lava",
    "Coin",
    "ACTOR_CHARS",
    "Level",
    "WALL",
    "LAVA",
    "STATUS_WON",
    "STATUS_LOST",
    "GAME_LEVELS",
    "PlanFileError",
    "load_plans",
    "save_plans",
    "GameSequence",
    "InputState",
    "SequenceState",
    "Transition",
]
