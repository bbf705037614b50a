from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from unblocked.game import Action, BlockKind, GameState, Level, UnblockedGame, can_throw, load_levels


def _compute_action_mask(game: UnblockedGame) -> np.ndarray:
    mask = np.zeros((len(Action),), dtype=np.bool_)
    if not game.is_interactive:
        return mask
    board = game.board
    mask[Action.MOVE_UP] = board.player_row > 0
    mask[Action.MOVE_DOWN] = board.player_row < board.rows - 1
    mask[Action.THROW] = can_throw(board, board.player_row)
    return mask


class UnblockedEnv(gym.Env):
    """A single fixed level as a gymnasium environment.

    Actions are `Action` values. Rejected moves and throws leave the board
    unchanged and cost `invalid_action_penalty`.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        level: Optional[Level] = None,
        render_mode: Optional[str] = None,
        block_reward: float = 1.0,
        win_reward: float = 10.0,
        invalid_action_penalty: float = -0.1,
        step_penalty: float = 0.0,
        terminal_penalty: float = -5.0,
        max_episode_steps: int = 500,
    ) -> None:
        super().__init__()
        self.level = level or load_levels()[0]
        self.game = UnblockedGame(self.level)
        self.render_mode = render_mode

        self.block_reward = float(block_reward)
        self.win_reward = float(win_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.level.rows, self.level.cols
        n_kinds = max(BlockKind) + 1
        # player_block 0 means empty-handed
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=n_kinds - 1, shape=(rows, cols), dtype=np.int8),
                "player_block": spaces.Discrete(n_kinds),
                "player_row": spaces.Discrete(rows),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        board = self.game.board
        block = board.player_block
        return {
            "grid": board.snapshot(),
            "player_block": int(block) if block is not None else 0,
            "player_row": board.player_row,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "throws": self.game.throws,
            "blocks_left": self.game.board.block_count(),
            "state": self.game.state.value,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        step = self.game.step(Action(int(action)))

        reward_components: Dict[str, float] = {"step": self.step_penalty}
        if not step.accepted:
            reward_components["invalid"] = self.invalid_action_penalty
        elif step.outcome is not None:
            reward_components["blocks"] = self.block_reward * float(len(step.outcome.removed))

        terminated = self.game.state != GameState.PLAYING
        if self.game.state == GameState.WON:
            reward_components["win"] = self.win_reward
        elif self.game.state == GameState.FAILED:
            reward_components["terminal"] = self.terminal_penalty

        self._steps += 1
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), float(sum(reward_components.values())), terminated, truncated, info

    def render(self):
        if self.render_mode == "ansi":
            return self.game.board.to_text()
        if self.render_mode == "rgb_array":
            from unblocked.visualization.renderer import color_for_value

            grid = self.game.board.grid
            cell = 12
            h, w = grid.shape
            # one extra column on the left for the player's block
            img = np.zeros((h * cell, (w + 1) * cell, 3), dtype=np.uint8)
            block = self.game.board.player_block
            if block is not None:
                y = self.game.board.player_row
                img[y * cell : (y + 1) * cell, 0:cell, :] = color_for_value(int(block))
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, (x + 1) * cell : (x + 2) * cell, :] = color_for_value(int(grid[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
