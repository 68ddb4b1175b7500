"""Gymnasium environment wrapper for a single level.

Provides the standard Gym API for scripted play, RL training and data
collection. Observations include an RGB frame and a structured state vector.
"""

import random
from typing import Optional, Dict, Any, Sequence, Tuple

import numpy as np
import gymnasium
from gymnasium import spaces

import pygame

from .config import GameConfig, PhysicsConfig
from .game import InputState
from .level import Level, STATUS_LOST, STATUS_WON
from .levels import GAME_LEVELS
from .rendering import Viewport, draw_background, draw_frame


class PlatformerEnv(gymnasium.Env):
    """Gymnasium wrapper around one Level.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame
        'state': float32 array of shape (8,) - state vector containing:
            [0-1] player position (x, y) in cells
            [2-3] player speed (x, y) in cells/s
            [4]   coins remaining
            [5]   coins at level start
            [6]   lost (0/1)
            [7]   won (0/1)

    Action space:
        MultiBinary(3) - held keys [left, right, up]

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        coin: coins collected this step
        won:  1.0 on the step the last coin is collected
        lost: 1.0 on the step the player touches lava
        step: 1.0 every step
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        plans: Optional[Sequence[Sequence[str]]] = None,
        level_index: int = 0,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (128, 128),
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
        randomize_physics: bool = False,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.plans = list(plans) if plans is not None else list(GAME_LEVELS)
        if not 0 <= level_index < len(self.plans):
            raise ValueError(f"Level index {level_index} out of range (0-{len(self.plans) - 1})")
        self.level_index = level_index
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps
        self.randomize_physics = randomize_physics

        self.reward_weights = reward_weights or {
            "coin": 10.0,
            "won": 100.0,
            "lost": -50.0,
            "step": -0.01,
        }

        self.action_space = spaces.MultiBinary(3)

        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(8,),
                dtype=np.float32,
            ),
        })

        # Initialize pygame (caller sets SDL_VIDEODRIVER for headless)
        if not pygame.get_init():
            pygame.init()

        # Offscreen render surface (native resolution)
        self._surface = pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )

        # Display for human render mode
        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("PlatformerEnv")

        # Game state (populated on reset)
        self._level: Optional[Level] = None
        self._background: Optional[pygame.Surface] = None
        self._viewport = Viewport(self.config.screen_width, self.config.screen_height)
        self._physics: PhysicsConfig = self.config.physics
        self._episode_steps = 0
        self._prev_coins = 0
        self._prev_status: Optional[str] = None

        self._dt = 1.0 / self.config.fps

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        if options and "level_index" in options:
            index = options["level_index"]
            if not 0 <= index < len(self.plans):
                raise ValueError(f"Level index {index} out of range (0-{len(self.plans) - 1})")
            self.level_index = index

        # Coin phases and sampled physics both follow the env seed
        rng = random.Random(int(self.np_random.integers(0, 2**31)))
        if self.randomize_physics:
            self._physics = PhysicsConfig.sample_full(rng)
        else:
            self._physics = self.config.physics

        self._level = Level(self.plans[self.level_index], config=self._physics, rng=rng)
        self._background = None
        self._viewport = Viewport(self.config.screen_width, self.config.screen_height)

        self._episode_steps = 0
        self._prev_coins = self._level.coins_remaining()
        self._prev_status = None

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        assert self._level is not None, "Must call reset() before step()"

        self._level.animate(self._dt, self._action_to_keys(action))
        self._episode_steps += 1

        reward_signals = self._compute_rewards()
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = self._level.status is not None
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Action handling
    # ------------------------------------------------------------------

    @staticmethod
    def _action_to_keys(action) -> InputState:
        left, right, up = (bool(v) for v in np.asarray(action).reshape(3))
        return InputState(left=left, right=right, up=up)

    # ------------------------------------------------------------------
    # Reward computation
    # ------------------------------------------------------------------

    def _compute_rewards(self):
        coins = self._level.coins_remaining()
        status = self._level.status

        signals = {
            "coin": float(self._prev_coins - coins),
            "won": 1.0 if status == STATUS_WON and self._prev_status != STATUS_WON else 0.0,
            "lost": 1.0 if status == STATUS_LOST and self._prev_status != STATUS_LOST else 0.0,
            "step": 1.0,
        }

        self._prev_coins = coins
        self._prev_status = status
        return signals

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self):
        # Only render RGB when someone will actually use it
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros(
                (self.obs_height, self.obs_width, 3), dtype=np.uint8
            )
        state = self._get_state_vector()
        return {"rgb": rgb, "state": state}

    def _get_state_vector(self):
        state = np.zeros(8, dtype=np.float32)

        player = self._level.player
        if player is not None:
            state[0] = player.pos.x
            state[1] = player.pos.y
            state[2] = player.speed.x
            state[3] = player.speed.y

        state[4] = float(self._level.coins_remaining())
        state[5] = float(self._level.coins_total)
        state[6] = float(self._level.status == STATUS_LOST)
        state[7] = float(self._level.status == STATUS_WON)
        return state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_native(self):
        """Draw the current frame onto the native-resolution surface."""
        scale = self.config.scale
        if self._background is None:
            self._background = draw_background(self._level, scale)
        self._viewport.scroll_player_into_view(self._level, scale)
        draw_frame(self._surface, self._background, self._level, self._viewport, scale)

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        self._render_native()

        # Scale to observation resolution
        scaled = pygame.transform.scale(
            self._surface, (self.obs_width, self.obs_height)
        )
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            self._render_native()
            self._display.blit(self._surface, (0, 0))
            pygame.display.flip()

    def _get_info(self):
        info = {
            "level_index": self.level_index,
            "episode_steps": self._episode_steps,
            "status": self._level.status,
            "coins_remaining": self._level.coins_remaining(),
            "physics": self._physics.to_dict(),
        }
        player = self._level.player
        if player is not None:
            info["player_position"] = (player.pos.x, player.pos.y)
        return info

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
