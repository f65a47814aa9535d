from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import PIECE_COLORS, Action, GameConfig, ScoringRules, TetrisGame, TetrominoType


# Discrete env action index -> engine action. START is issued by reset().
ENV_ACTIONS: Tuple[Action, ...] = (
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.ROTATE,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.TICK,
)

_EMPTY_COLOR = (30, 30, 36)


def _compute_action_mask(game: TetrisGame) -> np.ndarray:
    state = game.state
    mask = np.zeros((len(ENV_ACTIONS),), dtype=np.bool_)
    if not state.running:
        return mask
    for i, action in enumerate(ENV_ACTIONS):
        if action in (Action.MOVE_LEFT, Action.MOVE_RIGHT, Action.ROTATE):
            piece = state.piece.rotated(1) if action == Action.ROTATE else state.piece
            dx = {Action.MOVE_LEFT: -1, Action.MOVE_RIGHT: 1}.get(action, 0)
            mask[i] = not state.grid.collides(piece.cells_at(state.x + dx, state.y))
        else:
            # Drops either descend or lock; both are accepted while running.
            mask[i] = True
    return mask


class TetrisEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 max_episode_steps: int = 10000,
                 rejected_action_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.rejected_action_penalty = float(rejected_action_penalty)

        height, width = self.game.config.height, self.game.config.width
        n_kinds = len(TetrominoType) + 1  # 0 means "no piece"

        # Board holds kind values, the falling piece overlaid as negatives
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(height, width), dtype=np.int8),
                "piece": spaces.Discrete(n_kinds),
                "rotation": spaces.Discrete(4),
                "next_piece": spaces.Discrete(n_kinds),
            }
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.state
        return {
            "board": state.board_with_piece().astype(np.int8),
            "piece": int(state.piece.kind) if state.piece is not None else 0,
            "rotation": state.piece.rotation if state.piece is not None else 0,
            "next_piece": int(state.next_kind) if state.next_kind is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        state = self.game.state
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": state.score,
            "rows": state.rows,
            "level": state.level,
            "drop_interval": state.drop_interval,
            "events": [event.kind.value for event in self.game.last_events],
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.state.score
        _, events = self.game.step(ENV_ACTIONS[int(action)])
        self._steps += 1

        reward = float(self.game.state.score - score_before)
        if not events[0].accepted:
            reward += self.rejected_action_penalty

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = abs(int(board[y, x]))
                color = PIECE_COLORS[TetrominoType(v)] if v else _EMPTY_COLOR
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
