"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import random

import pytest

from grid_platformer.config import GameConfig, PhysicsConfig
from grid_platformer.game import InputState


@pytest.fixture
def coin_plan():
    """Player on a floor with a single coin to the right."""
    return [
        "      ",
        "@   o ",
        "xxxxxx",
    ]


@pytest.fixture
def lava_plan():
    """Player on a floor walking toward static lava."""
    return [
        "      ",
        "@  !  ",
        "xxxxxx",
    ]


@pytest.fixture
def open_plan():
    """Wide floor with nothing but the player."""
    return [
        "          ",
        "          ",
        "    @     ",
        "xxxxxxxxxx",
    ]


@pytest.fixture
def physics_config():
    """Default physics constants."""
    return PhysicsConfig()


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def rng():
    """Seeded random source so coin phases are reproducible."""
    return random.Random(1234)


@pytest.fixture
def no_keys():
    return InputState()


@pytest.fixture
def right():
    return InputState(right=True)
