"""Tests for game engine."""

import pygame
import pytest

from grid_platformer.config import GameConfig
from grid_platformer.engine import PlatformerEngine
from grid_platformer.game import InputState, Transition
from grid_platformer.level import LAVA


@pytest.fixture
def engine(open_plan):
    engine = PlatformerEngine(plans=[open_plan])
    yield engine
    pygame.quit()


class TestPlatformerEngine:
    def test_initialization(self, engine):
        assert engine.level is engine.sequence.level
        assert engine.sequence.lives == 3
        assert not engine.running

    def test_default_plans(self):
        engine = PlatformerEngine()
        assert len(engine.sequence.plans) == 3
        pygame.quit()

    def test_start_level(self, coin_plan, lava_plan):
        engine = PlatformerEngine(plans=[coin_plan, lava_plan], start_level=1)
        assert engine.sequence.level_index == 1
        pygame.quit()

    def test_input_state(self, engine):
        assert engine.input_state() == InputState()
        engine._keys_pressed[pygame.K_d] = True
        engine._keys_pressed[pygame.K_UP] = True
        assert engine.input_state() == InputState(right=True, up=True)

    def test_released_key(self, engine):
        engine._keys_pressed[pygame.K_LEFT] = True
        engine._keys_pressed[pygame.K_LEFT] = False
        assert engine.input_state() == InputState()

    def test_handle_key_events(self, engine):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT))
        engine.handle_events()
        assert engine.input_state().right

        pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_RIGHT))
        engine.handle_events()
        assert not engine.input_state().right

    def test_escape_stops(self, engine):
        engine.running = True
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        engine.handle_events()
        assert not engine.running

    def test_held_key_moves_player(self, engine):
        start_x = engine.level.player.pos.x
        engine._keys_pressed[pygame.K_RIGHT] = True
        for _ in range(10):
            engine.update(1 / 60)
        assert engine.level.player.pos.x > start_x

    def test_frame_time_clamped(self, engine):
        engine.update(5.0)
        assert engine.level.elapsed == pytest.approx(0.1)

    def test_max_frame_time_from_config(self, open_plan):
        engine = PlatformerEngine(GameConfig(max_frame_time=0.05), plans=[open_plan])
        engine.update(1.0)
        assert engine.level.elapsed == pytest.approx(0.05)
        pygame.quit()

    def test_render(self, engine):
        engine.render()
        assert engine._background is not None
        assert engine._drawn_level is engine.level

    def test_restart_clears_display_state(self, lava_plan):
        engine = PlatformerEngine(plans=[lava_plan])
        engine.render()
        old_level = engine.level
        old_level.player_touched(LAVA)
        old_level.finish_delay = 0.0

        assert engine.update(0.05) == Transition.RESTART
        assert engine.level is not old_level
        assert engine._background is None
        assert engine.viewport.left == 0
        assert engine.viewport.top == 0

        engine.render()
        assert engine._drawn_level is engine.level
        pygame.quit()

    def test_complete_sequence(self, coin_plan):
        engine = PlatformerEngine(plans=[coin_plan])
        level = engine.level
        coin = next(a for a in level.actors if a.kind == "coin")
        level.player_touched("coin", coin)
        level.finish_delay = 0.0

        assert engine.update(0.05) == Transition.COMPLETE
        assert engine.sequence.complete
        assert engine.update(0.05) is None
        engine.render()
        pygame.quit()

    def test_get_state(self, engine):
        state = engine.get_state()
        assert state["level_index"] == 0
        assert state["lives"] == 3
        assert state["sequence_complete"] is False
        assert state["status"] is None
        assert state["coins_remaining"] == 0
        assert state["player_position"] == (4, 1.5)
        assert state["player_speed"] == (0, 0)
