from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from bricks.game import Action, GameConfig, GameSession, TetrominoType
from bricks.game.events import GameOver, LinesCleared


class BricksEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_time: float = 1.0 / 30.0,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.frame_time = float(frame_time)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        height = self.session.grid.height
        width = self.session.grid.width
        n_kinds = len(TetrominoType)

        # Board holds kind values; the falling piece is negative
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(height, width), dtype=np.int8),
                "next": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_kind = self.session.next_kind
        return {
            "board": self.session.get_state().astype(np.int8),
            "next": int(next_kind) if next_kind is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "lines": self.session.lines,
            "level": self.session.level,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session.new_game(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.session.score
        events = self.session.apply(Action(int(action)))
        events += self.session.tick(self.frame_time)
        self._steps += 1

        terminated = self.session.is_game_over
        truncated = self._steps >= self.max_episode_steps and not terminated
        reward = float(self.session.score - score_before)
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["lines_cleared"] = sum(e.count for e in events if isinstance(e, LinesCleared))
        info["game_over"] = any(isinstance(e, GameOver) for e in events)
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from bricks.visualization.renderer import color_for_value

            board = self.session.get_state()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
