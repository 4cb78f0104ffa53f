"""
engine.py - Game state and rules for Connect Four

The GameEngine owns a flat 42-cell board, counts the pieces placed, and
evaluates wins and draws after every placement.
"""

import numbers
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.errors import ColumnFullError, GameOverError, InvalidColumnError, MoveError
from connect_four.utils import (ROWS, COLS, CELL_COUNT, WINDOWS, Player, GameResult,
                                cell_index, is_valid_position, render_board_ascii, to_grid)


@dataclass(frozen=True)
class MoveOutcome:
    """Result of ``GameEngine.try_place_piece``: either a landing row or an error."""
    column: object
    player: Player
    row: Optional[int] = None
    error: Optional[MoveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GameEngine:
    """
    Connect Four board, turn counter and result.

    Player ONE places the pieces with an even turn number and Player TWO the
    odd ones. Failed placements raise a MoveError and change nothing.
    """

    def __init__(self):
        debug.debug("Initializing new GameEngine", "engine")
        self.reset()

    def reset(self) -> None:
        """Empty the board and start a new game."""
        debug.debug("Resetting engine", "engine")
        self._cells = np.zeros(CELL_COUNT, dtype=np.int8)
        self._current_turn = 0
        self._result = GameResult.IN_PROGRESS
        self._moves: List[int] = []
        self._last_move: Optional[Tuple[int, int]] = None
        self._winning_line: List[Tuple[int, int]] = []

    # Read accessors. Arrays are copies so callers cannot bypass place_piece.

    @property
    def board(self) -> np.ndarray:
        """Copy of the 42 cells in row-major order, row 0 first."""
        return self._cells.copy()

    @property
    def grid(self) -> np.ndarray:
        """The board as a (ROWS, COLS) array with row 0 at the bottom."""
        return to_grid(self._cells)

    @property
    def current_turn(self) -> int:
        """Number of pieces placed so far."""
        return self._current_turn

    @property
    def result(self) -> GameResult:
        """Current game result."""
        return self._result

    @property
    def current_player(self) -> Player:
        """The player whose piece goes in next."""
        return Player.for_turn(self._current_turn)

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        """(row, col) of the most recent piece, or None on an empty board."""
        return self._last_move

    @property
    def winning_line(self) -> List[Tuple[int, int]]:
        """Positions of the winning four, or an empty list if nobody has won."""
        return list(self._winning_line)

    @property
    def moves(self) -> List[int]:
        """Columns played so far, in order."""
        return list(self._moves)

    def is_game_over(self) -> bool:
        """Check if the game has a result."""
        return self._result.is_game_over()

    def cell(self, row: int, col: int) -> Player:
        """
        Get the contents of one cell.

        Args:
            row: Row index (0 = bottom)
            col: Column index

        Returns:
            The Player occupying the cell, or Player.EMPTY

        Raises:
            InvalidColumnError: ``col`` is not a column index
            ValueError: ``row`` is outside the board
        """
        self._check_column(col)
        if isinstance(row, bool) or not isinstance(row, numbers.Integral) \
                or not is_valid_position(row, col):
            raise ValueError(f"Row must be an integer between 0 and {ROWS - 1}, got {row!r}")
        return Player(int(self._cells[cell_index(row, col)]))

    def column_height(self, col: int) -> int:
        """Number of pieces in column ``col``."""
        self._check_column(col)
        for row in range(ROWS):
            if self._cells[cell_index(row, col)] == Player.EMPTY.value:
                return row
        return ROWS

    def valid_columns(self) -> List[int]:
        """
        Get the columns that can take another piece.

        Returns:
            List of column indices, empty once the game is over
        """
        if self.is_game_over():
            return []
        return [col for col in range(COLS)
                if self._cells[cell_index(ROWS - 1, col)] == Player.EMPTY.value]

    def is_valid_move(self, column) -> bool:
        """Check if ``column`` would accept a piece right now."""
        return self.validate_move(column) is None

    def validate_move(self, column) -> Optional[MoveError]:
        """Return the error a placement in ``column`` would raise, or None."""
        if self._result.is_game_over():
            return GameOverError(column, self._result)
        if not self._is_column_index(column):
            return InvalidColumnError(column)
        if self._cells[cell_index(ROWS - 1, column)] != Player.EMPTY.value:
            return ColumnFullError(column)
        return None

    def place_piece(self, column: int) -> int:
        """
        Drop a piece for the current player into ``column``.

        Args:
            column: Column index, 0 to 6

        Returns:
            Row (0 = bottom) where the piece landed

        Raises:
            GameOverError: The game already has a result
            InvalidColumnError: ``column`` is not a column index
            ColumnFullError: The column has no empty cell
        """
        error = self.validate_move(column)
        if error is not None:
            debug.debug(f"Rejected move in column {column!r}: {error}", "engine")
            raise error

        column = int(column)
        player = self.current_player
        row = self.column_height(column)

        debug.trace(f"Placing {player.name} at ({row}, {column})", "engine")
        self._cells[cell_index(row, column)] = player.value
        self._current_turn += 1
        self._moves.append(column)
        self._last_move = (row, column)

        self.evaluate_result()
        return row

    def try_place_piece(self, column: int) -> MoveOutcome:
        """Like ``place_piece`` but returns move errors instead of raising them."""
        player = self.current_player
        try:
            row = self.place_piece(column)
        except MoveError as e:
            return MoveOutcome(column=column, player=player, error=e)
        return MoveOutcome(column=column, player=player, row=row)

    def play_moves(self, columns: Iterable[int]) -> List[int]:
        """Place a sequence of pieces, returning the landing rows."""
        return [self.place_piece(column) for column in columns]

    def evaluate_result(self) -> GameResult:
        """
        Check every window of four cells for a line and record the result.

        When lines exist for both players, the player who moved last wins.
        A draw needs a full board with no line at all.
        """
        debug.start_timer("win_check")
        winners = {}
        for _, window in WINDOWS:
            values = {int(self._cells[cell_index(r, c)]) for r, c in window}
            if len(values) != 1:
                continue
            value = values.pop()
            if value != Player.EMPTY.value and value not in winners:
                winners[value] = window
        debug.end_timer("win_check", "engine")

        if winners:
            mover = self._last_mover()
            value = mover.value if mover.value in winners else next(iter(winners))
            self._winning_line = list(winners[value])
            self._result = GameResult.win_for(Player(value))
            debug.info(f"{Player(value).name} wins after {self._current_turn} moves", "engine")
        elif not (self._cells == Player.EMPTY.value).any():
            self._winning_line = []
            self._result = GameResult.DRAW
            debug.info("Game ends in a draw", "engine")
        else:
            self._winning_line = []
            self._result = GameResult.IN_PROGRESS

        return self._result

    def _last_mover(self) -> Player:
        """The player who placed the most recent piece."""
        if self._current_turn == 0:
            return Player.EMPTY
        return Player.for_turn(self._current_turn - 1)

    def _check_column(self, col) -> None:
        if not self._is_column_index(col):
            raise InvalidColumnError(col)

    @staticmethod
    def _is_column_index(column) -> bool:
        if isinstance(column, bool) or not isinstance(column, numbers.Integral):
            return False
        return 0 <= column < COLS

    def render(self) -> str:
        """Render the board as ASCII art."""
        return render_board_ascii(self._cells)

    def __str__(self) -> str:
        return self.render()
