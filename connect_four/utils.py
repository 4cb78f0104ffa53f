"""
utils.py - Constants, enumerations and board helpers for Connect Four

The board is stored flat: 42 cells in row-major order with row 0 at the
bottom, so ``index = row * COLS + column``.
"""

from enum import Enum, auto
from typing import Iterator, List, Sequence, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4
CELL_COUNT = ROWS * COLS


class Player(Enum):
    """Cell contents; the non-empty values double as the two players."""
    EMPTY = 0
    ONE = 1
    TWO = 2

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @classmethod
    def for_turn(cls, turn: int) -> 'Player':
        """The player who places piece number ``turn`` (0-indexed)."""
        return cls.ONE if turn % 2 == 0 else cls.TWO

    def __str__(self):
        """Symbol used when rendering the board."""
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Player:
        """The winning player, or Player.EMPTY for draws and open games."""
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return Player.EMPTY

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        """The winning result for ``player``."""
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        elif player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No win result for {player!r}")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# (row, col) steps; rows grow upward
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def cell_index(row: int, col: int) -> int:
    """Flat index of the cell at ``(row, col)``."""
    return row * COLS + col


def cell_position(index: int) -> Tuple[int, int]:
    """``(row, col)`` of flat index ``index``."""
    return divmod(index, COLS)


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index (0 = bottom)
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def iter_windows() -> Iterator[Tuple[Direction, List[Tuple[int, int]]]]:
    """
    Yield every run of CONNECT_N positions that fits on the board.

    Windows are produced start cell by start cell (bottom row first), and for
    each start cell in DIRECTION_VECTORS order.
    """
    for row in range(ROWS):
        for col in range(COLS):
            for direction, (dr, dc) in DIRECTION_VECTORS.items():
                end_row = row + dr * (CONNECT_N - 1)
                end_col = col + dc * (CONNECT_N - 1)
                if not is_valid_position(end_row, end_col):
                    continue
                yield direction, [(row + dr * i, col + dc * i) for i in range(CONNECT_N)]


# Winning windows never change, so compute them once
WINDOWS = list(iter_windows())


def to_grid(board: Sequence[int]) -> np.ndarray:
    """Reshape a flat board into a (ROWS, COLS) array, row 0 at the bottom."""
    return np.asarray(board).reshape(ROWS, COLS).copy()


def render_board_ascii(board: Sequence[int]) -> str:
    """
    Render a flat board as ASCII art, top row first.

    Args:
        board: 42 cell values

    Returns:
        Multi-line string with column numbers underneath
    """
    grid = to_grid(board)
    symbols = {player.value: str(player) for player in Player}
    border = "|" + "-" * (COLS * 2 - 1) + "|"

    lines = [border]
    for row in range(ROWS - 1, -1, -1):
        lines.append("|" + " ".join(symbols[int(cell)] for cell in grid[row]) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col) for col in range(COLS)) + "|")

    return "\n".join(lines)
