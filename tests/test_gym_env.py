"""Tests for Gymnasium environment wrapper."""

import numpy as np
import pytest

from grid_platformer.config import GameConfig, PhysicsConfig
from grid_platformer.gym_env import PlatformerEnv
from grid_platformer.level import STATUS_LOST, STATUS_WON

NOOP = np.array([0, 0, 0], dtype=np.int8)
RIGHT = np.array([0, 1, 0], dtype=np.int8)


def run_until_done(env, action, limit=600):
    for _ in range(limit):
        obs, reward, terminated, truncated, info = env.step(action)
        if terminated or truncated:
            return obs, reward, terminated, truncated, info
    raise AssertionError("episode did not end")


class TestPlatformerEnvCreation:
    def test_create_default(self):
        env = PlatformerEnv()
        assert env.action_space.n == 3
        assert env.observation_space["state"].shape == (8,)
        assert len(env.plans) == 3
        env.close()

    def test_create_with_config(self):
        config = GameConfig(physics=PhysicsConfig(gravity=20.0))
        env = PlatformerEnv(config=config)
        _, info = env.reset(seed=0)
        assert info["physics"]["gravity"] == 20.0
        env.close()

    def test_invalid_level_index(self, coin_plan):
        with pytest.raises(ValueError, match="out of range"):
            PlatformerEnv(plans=[coin_plan], level_index=1)

    def test_custom_max_steps(self):
        env = PlatformerEnv(max_episode_steps=500)
        assert env.max_episode_steps == 500
        env.close()


class TestPlatformerEnvReset:
    def test_reset_returns_obs_and_info(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        obs, info = env.reset(seed=42)
        assert env.observation_space.contains(obs)
        assert info["level_index"] == 0
        assert info["episode_steps"] == 0
        assert info["status"] is None
        assert info["coins_remaining"] == 1
        env.close()

    def test_initial_state_vector(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        obs, _ = env.reset(seed=42)
        state = obs["state"]
        assert state.dtype == np.float32
        np.testing.assert_allclose(state, [0, 0.5, 0, 0, 1, 1, 0, 0])
        env.close()

    def test_level_index_option(self, coin_plan, lava_plan):
        env = PlatformerEnv(plans=[coin_plan, lava_plan])
        _, info = env.reset(seed=0, options={"level_index": 1})
        assert info["level_index"] == 1
        assert info["coins_remaining"] == 0
        with pytest.raises(ValueError):
            env.reset(options={"level_index": 5})
        env.close()

    def test_reset_rebuilds_level(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        env.reset(seed=0)
        run_until_done(env, RIGHT)
        _, info = env.reset()
        assert info["status"] is None
        assert info["coins_remaining"] == 1
        env.close()


class TestPlatformerEnvStep:
    def test_step_returns_five_values(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        env.reset(seed=0)
        result = env.step(NOOP)
        assert len(result) == 5
        obs, reward, terminated, truncated, info = result
        assert isinstance(reward, float)
        assert not terminated
        assert not truncated
        assert info["episode_steps"] == 1
        env.close()

    def test_reward_signals(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        env.reset(seed=0)
        _, reward, _, _, info = env.step(NOOP)
        assert set(info["reward_signals"]) == {"coin", "won", "lost", "step"}
        assert info["reward_signals"]["step"] == 1.0
        assert reward == pytest.approx(-0.01)
        env.close()

    def test_collecting_last_coin_terminates_with_win(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = run_until_done(env, RIGHT)
        assert terminated
        assert info["status"] == STATUS_WON
        assert info["reward_signals"]["coin"] == 1.0
        assert info["reward_signals"]["won"] == 1.0
        assert reward == pytest.approx(10.0 + 100.0 - 0.01)
        assert obs["state"][7] == 1.0
        env.close()

    def test_lava_terminates_with_loss(self, lava_plan):
        env = PlatformerEnv(plans=[lava_plan])
        env.reset(seed=0)
        obs, reward, terminated, _, info = run_until_done(env, RIGHT)
        assert terminated
        assert info["status"] == STATUS_LOST
        assert reward == pytest.approx(-50.0 - 0.01)
        assert obs["state"][6] == 1.0
        env.close()

    def test_custom_reward_weights(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan], reward_weights={"step": 1.0})
        env.reset(seed=0)
        _, reward, _, _, _ = run_until_done(env, RIGHT)
        assert reward == pytest.approx(1.0)
        env.close()

    def test_truncation(self, open_plan):
        env = PlatformerEnv(plans=[open_plan], max_episode_steps=5)
        env.reset(seed=0)
        for _ in range(4):
            _, _, terminated, truncated, _ = env.step(NOOP)
            assert not truncated
        _, _, terminated, truncated, _ = env.step(NOOP)
        assert truncated
        assert not terminated
        env.close()

    def test_action_moves_player(self, open_plan):
        env = PlatformerEnv(plans=[open_plan])
        obs, _ = env.reset(seed=0)
        start_x = obs["state"][0]
        for _ in range(10):
            obs, _, _, _, _ = env.step(RIGHT)
        assert obs["state"][0] > start_x
        assert obs["state"][2] == pytest.approx(7.0)
        env.close()


class TestPlatformerEnvRendering:
    def test_rgb_zeros_without_render_mode(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        obs, _ = env.reset(seed=0)
        assert not obs["rgb"].any()
        env.close()

    def test_rgb_array_observation(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan], render_mode="rgb_array", obs_resolution=(64, 96))
        obs, _ = env.reset(seed=0)
        assert obs["rgb"].shape == (64, 96, 3)
        assert obs["rgb"].dtype == np.uint8
        assert obs["rgb"].any()
        env.close()

    def test_render_returns_frame(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan], render_mode="rgb_array", obs_resolution=(64, 64))
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (64, 64, 3)
        env.close()


class TestPhysicsRandomization:
    def test_sampled_within_ranges(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan], randomize_physics=True)
        for seed in range(5):
            _, info = env.reset(seed=seed)
            physics = info["physics"]
            low, high = PhysicsConfig.GRAVITY_RANGE
            assert low <= physics["gravity"] <= high
            low, high = PhysicsConfig.JUMP_SPEED_RANGE
            assert low <= physics["jump_speed"] <= high
        env.close()

    def test_fixed_physics_by_default(self, coin_plan):
        env = PlatformerEnv(plans=[coin_plan])
        _, info = env.reset(seed=3)
        assert info["physics"] == PhysicsConfig().to_dict()
        env.close()

    def test_seed_reproducible(self, coin_plan):
        first = PlatformerEnv(plans=[coin_plan], randomize_physics=True)
        second = PlatformerEnv(plans=[coin_plan], randomize_physics=True)
        _, info_a = first.reset(seed=11)
        _, info_b = second.reset(seed=11)
        assert info_a["physics"] == info_b["physics"]
        for _ in range(20):
            obs_a, _, _, _, _ = first.step(RIGHT)
            obs_b, _, _, _, _ = second.step(RIGHT)
        np.testing.assert_array_equal(obs_a["state"], obs_b["state"])
        first.close()
        second.close()
