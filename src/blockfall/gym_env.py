"""Gymnasium environment over the game engine.

Each step is one input cycle followed by a full gravity tick, so the piece
always falls one row (or lands) per step.

Actions (``Discrete(6)``):
  0 noop, 1 rotate, 2 rotate counter-clockwise, 3 left, 4 right, 5 drop

Observation is the composed frame values, an ``(height, width)`` ``uint8``
grid with settled blocks and the falling piece as color indices.  Reward is
the number of rows cleared by the step.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import STANDARD, GameConfig
from .game_state import Action, Game
from .render import ascii_grid, compose_frame

ACTIONS = (
    (),
    (Action.ROTATE,),
    (Action.ROTATE_CCW,),
    (Action.LEFT,),
    (Action.RIGHT,),
    (Action.DROP,),
)


class BlockfallEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        config: GameConfig = STANDARD,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        self.config = config
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = spaces.Box(
            low=0, high=config.colors, shape=(config.height, config.width), dtype=np.uint8
        )
        self._game = Game(config)
        self._steps = 0
        self._max_steps = max_steps

    @property
    def game(self) -> Game:
        return self._game

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(2**31))
        self._game.reset(seed=seed)
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")
        result = self._game.step(ACTIONS[int(action)], elapsed_ms=self._game.tick_ms)
        self._steps += 1
        terminated = result.game_over
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return (
            self._observation(),
            float(result.lines_cleared),
            terminated,
            truncated,
            self._info(),
        )

    def render(self):
        if self.render_mode == "ansi":
            return ascii_grid(compose_frame(self._game))
        return None

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _observation(self) -> np.ndarray:
        return compose_frame(self._game).values.copy()

    def _info(self) -> Dict:
        return {
            "score": self._game.score,
            "lines": self._game.lines_cleared,
            "pieces": self._game.pieces_locked,
            "tick_ms": self._game.tick_ms,
        }


__all__ = ["BlockfallEnv", "ACTIONS"]
