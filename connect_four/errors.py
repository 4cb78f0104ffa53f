"""
errors.py - Exceptions raised for rejected moves and bad configuration
"""

from typing import Any

from connect_four.utils import COLS, GameResult


class MoveError(ValueError):
    """A placement was rejected; the engine state is unchanged."""

    def __init__(self, message: str, column: Any = None):
        super().__init__(message)
        self.column = column


class GameOverError(MoveError):
    def __init__(self, column: Any, result: GameResult):
        super().__init__(f"Game is over ({result.name}); reset to play again", column)
        self.result = result


class ColumnFullError(MoveError):
    def __init__(self, column: int):
        super().__init__(f"Column {column} is full", column)


class InvalidColumnError(MoveError):
    def __init__(self, column: Any):
        super().__init__(f"Column must be an integer between 0 and {COLS - 1}, got {column!r}",
                         column)


class ConfigError(ValueError):
    """Invalid display or session configuration."""
