from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, BlockfallGame, GameConfig
from blockfall.visualization.palette import color_for_value


class BlockfallEnv(gym.Env):
    """Agent-facing wrapper: one command followed by one gravity tick per step.

    Observation is the board with the falling piece overlaid as negative kind
    values. Reward is the score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = BlockfallGame(self.config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action):
        score_before = self.game.score
        self.game.step(Action(int(action)))
        self.game.tick()
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = self.game.game_over
        truncated = self._steps >= self.max_episode_steps
        return self.game.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
