"""
connect_four.game - Core game mechanics for Connect Four

The GameEngine holds the board and rules; ConnectFourEnv exposes it to
reinforcement learning code.
"""

from connect_four.game.engine import GameEngine, MoveOutcome
from connect_four.game.env import ConnectFourEnv

__all__ = ['GameEngine', 'MoveOutcome', 'ConnectFourEnv']
