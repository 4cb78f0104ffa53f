"""
env.py - Gymnasium environment for Connect Four

Lets reinforcement learning agents play against the GameEngine. Both players
act through ``step``; rewards are given from Player ONE's point of view.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect_four.debug import debug
from connect_four.errors import MoveError
from connect_four.game.engine import GameEngine
from connect_four.utils import ROWS, COLS, GameResult


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Observations are (ROWS, COLS) int8 arrays with row 0 at the bottom and
    cell values 0 (empty), 1 (Player ONE) and 2 (Player TWO).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, engine: Optional[GameEngine] = None):
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing ConnectFourEnv", "env")
        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.engine = engine or GameEngine()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.engine.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop a piece for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        try:
            self.engine.place_piece(action)
        except MoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        result = self.engine.result
        terminated = result.is_game_over()
        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if terminated:
            debug.info(f"Episode finished: {result.name}", "env")
        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def action_masks(self) -> np.ndarray:
        """Boolean mask of the columns that accept a piece."""
        mask = np.zeros(COLS, dtype=bool)
        mask[self.engine.valid_columns()] = True
        return mask

    def _get_observation(self) -> np.ndarray:
        return self.engine.grid.astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.engine.valid_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.engine.current_player.value,
            'current_turn': self.engine.current_turn,
            'game_result': self.engine.result.name,
            'winning_line': self.engine.winning_line,
            'last_move': self.engine.last_move,
        }
