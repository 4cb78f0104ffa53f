"""Tests for the GameEngine board, turns and result evaluation."""

import random

import numpy as np
import pytest

from connect_four.errors import ColumnFullError, GameOverError, InvalidColumnError, MoveError
from connect_four.game.engine import GameEngine
from connect_four.utils import ROWS, COLS, CELL_COUNT, GameResult, Player, cell_index


def snapshot(engine):
    return engine.board, engine.current_turn, engine.result, engine.moves


def assert_unchanged(engine, before):
    board, turn, result, moves = before
    assert np.array_equal(engine.board, board)
    assert engine.current_turn == turn
    assert engine.result == result
    assert engine.moves == moves


def assert_gravity(engine):
    for col in range(COLS):
        column = [engine.cell(row, col) for row in range(ROWS)]
        height = engine.column_height(col)
        assert all(cell != Player.EMPTY for cell in column[:height])
        assert all(cell == Player.EMPTY for cell in column[height:])


def test_new_engine_is_empty(engine):
    assert engine.board.shape == (CELL_COUNT,)
    assert not engine.board.any()
    assert engine.current_turn == 0
    assert engine.result == GameResult.IN_PROGRESS
    assert engine.current_player == Player.ONE
    assert engine.valid_columns() == list(range(COLS))


def test_piece_falls_to_bottom_row(engine):
    assert engine.place_piece(3) == 0
    assert engine.cell(0, 3) == Player.ONE
    assert engine.board[cell_index(0, 3)] == Player.ONE.value
    assert engine.board[3] == Player.ONE.value
    assert engine.last_move == (0, 3)


def test_pieces_stack_and_alternate(engine):
    rows = engine.play_moves([2, 2, 2])
    assert rows == [0, 1, 2]
    assert engine.cell(0, 2) == Player.ONE
    assert engine.cell(1, 2) == Player.TWO
    assert engine.cell(2, 2) == Player.ONE
    assert engine.current_player == Player.TWO
    assert engine.column_height(2) == 3


def test_grid_has_bottom_row_first(engine):
    engine.place_piece(6)
    grid = engine.grid
    assert grid.shape == (ROWS, COLS)
    assert grid[0, 6] == Player.ONE.value
    assert grid[ROWS - 1, 6] == Player.EMPTY.value


def test_accessors_return_copies(engine):
    engine.place_piece(0)
    board = engine.board
    board[:] = Player.TWO.value
    grid = engine.grid
    grid[:] = Player.TWO.value
    assert engine.cell(0, 1) == Player.EMPTY
    assert engine.current_turn == 1


def test_turn_count_matches_pieces_on_random_games():
    rng = random.Random(1234)
    for _ in range(25):
        engine = GameEngine()
        while not engine.is_game_over():
            player = engine.current_player
            assert player == Player.for_turn(engine.current_turn)
            row = engine.place_piece(rng.choice(engine.valid_columns()))
            row_col = engine.last_move
            assert row_col[0] == row
            assert engine.cell(*row_col) == player
            assert engine.current_turn == np.count_nonzero(engine.board)
            assert_gravity(engine)


def test_horizontal_win(engine, horizontal_win):
    engine.play_moves(horizontal_win[:-1])
    assert engine.result == GameResult.IN_PROGRESS
    engine.place_piece(horizontal_win[-1])
    assert engine.result == GameResult.PLAYER_ONE_WIN
    assert engine.winning_line == [(0, 0), (0, 1), (0, 2), (0, 3)]
    assert engine.valid_columns() == []


def test_vertical_win(engine):
    engine.play_moves([0, 1, 0, 1, 0, 1, 0])
    assert engine.result == GameResult.PLAYER_ONE_WIN
    assert engine.winning_line == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_diagonal_up_win(engine):
    engine.play_moves([0, 1, 1, 2, 2, 3, 2, 3, 3, 6])
    assert engine.result == GameResult.IN_PROGRESS
    engine.place_piece(3)
    assert engine.result == GameResult.PLAYER_ONE_WIN
    assert engine.winning_line == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_diagonal_down_win(engine):
    engine.play_moves([6, 5, 5, 4, 4, 3, 4, 3, 3, 0, 3])
    assert engine.result == GameResult.PLAYER_ONE_WIN
    assert sorted(engine.winning_line) == [(0, 6), (1, 5), (2, 4), (3, 3)]


def test_player_two_can_win(engine):
    engine.play_moves([0, 1, 0, 2, 6, 3, 6, 4])
    assert engine.result == GameResult.PLAYER_TWO_WIN
    assert engine.winning_line == [(0, 1), (0, 2), (0, 3), (0, 4)]


def test_three_in_a_row_is_not_a_win(engine):
    engine.play_moves([0, 0, 1, 1, 2, 2])
    assert engine.result == GameResult.IN_PROGRESS
    assert engine.winning_line == []
    assert engine.evaluate_result() == GameResult.IN_PROGRESS


def test_full_board_without_line_is_draw(engine, draw_sequence):
    engine.play_moves(draw_sequence[:-1])
    assert engine.result == GameResult.IN_PROGRESS
    engine.place_piece(draw_sequence[-1])
    assert engine.result == GameResult.DRAW
    assert engine.current_turn == CELL_COUNT
    assert engine.winning_line == []
    assert engine.valid_columns() == []


def test_win_takes_priority_over_full_board(engine):
    block = [0, 0, 1, 1, 0, 0, 1]
    cells = np.array([(row + block[col]) % 2 + 1 for row in range(ROWS) for col in range(COLS)],
                     dtype=np.int8)
    for col in range(4):
        cells[cell_index(0, col)] = Player.TWO.value
    engine._cells = cells
    engine._current_turn = CELL_COUNT
    assert engine.evaluate_result() == GameResult.PLAYER_TWO_WIN


def test_last_mover_wins_when_both_players_have_lines(engine):
    cells = np.zeros(CELL_COUNT, dtype=np.int8)
    for col in range(4):
        cells[cell_index(0, col)] = Player.ONE.value
        cells[cell_index(1, col)] = Player.TWO.value
    engine._cells = cells
    engine._current_turn = 8
    assert engine.evaluate_result() == GameResult.PLAYER_TWO_WIN
    assert engine.winning_line == [(1, 0), (1, 1), (1, 2), (1, 3)]


@pytest.mark.parametrize("column", [-1, 7, 100, "3", 3.0, None, True])
def test_invalid_column_rejected(engine, column):
    engine.place_piece(3)
    before = snapshot(engine)
    with pytest.raises(InvalidColumnError) as exc_info:
        engine.place_piece(column)
    assert exc_info.value.column == column
    assert_unchanged(engine, before)


def test_numpy_integer_column_accepted(engine):
    assert engine.place_piece(np.int64(4)) == 0
    assert engine.moves == [4]


def test_full_column_rejected(engine):
    engine.play_moves([5] * ROWS)
    before = snapshot(engine)
    with pytest.raises(ColumnFullError):
        engine.place_piece(5)
    assert_unchanged(engine, before)
    assert 5 not in engine.valid_columns()


def test_move_after_game_over_rejected(engine, horizontal_win):
    engine.play_moves(horizontal_win)
    before = snapshot(engine)
    with pytest.raises(GameOverError) as exc_info:
        engine.place_piece(6)
    assert exc_info.value.result == GameResult.PLAYER_ONE_WIN
    # Game over is reported even for a bad column
    with pytest.raises(GameOverError):
        engine.place_piece(42)
    assert_unchanged(engine, before)


def test_move_errors_are_value_errors():
    assert issubclass(MoveError, ValueError)
    for error in (GameOverError, ColumnFullError, InvalidColumnError):
        assert issubclass(error, MoveError)


def test_try_place_piece_returns_outcome(engine):
    outcome = engine.try_place_piece(1)
    assert outcome.ok
    assert outcome.row == 0
    assert outcome.player == Player.ONE

    engine.play_moves([1] * 5)
    outcome = engine.try_place_piece(1)
    assert not outcome.ok
    assert outcome.row is None
    assert isinstance(outcome.error, ColumnFullError)
    assert outcome.player == Player.ONE
    assert engine.current_turn == ROWS


def test_validate_move_does_not_mutate(engine):
    assert engine.validate_move(0) is None
    assert isinstance(engine.validate_move(9), InvalidColumnError)
    assert engine.is_valid_move(0)
    assert not engine.is_valid_move(-3)
    assert engine.current_turn == 0


def test_reset_from_any_state(engine, horizontal_win):
    engine.play_moves(horizontal_win)
    for _ in range(2):
        engine.reset()
        assert not engine.board.any()
        assert engine.current_turn == 0
        assert engine.result == GameResult.IN_PROGRESS
        assert engine.last_move is None
        assert engine.winning_line == []
        assert engine.moves == []
    assert engine.place_piece(0) == 0


def test_column_height_rejects_bad_column(engine):
    with pytest.raises(InvalidColumnError):
        engine.column_height(COLS)


def test_render_shows_top_row_first(engine):
    engine.play_moves([0, 0])
    lines = engine.render().splitlines()
    assert lines[-3] == "|X" + " " * 12 + "|"
    assert lines[-4].startswith("|O")
    assert lines[-1] == "|0 1 2 3 4 5 6|"
    assert str(engine) == engine.render()


def test_cell_rejects_positions_off_the_board(engine):
    engine.play_moves([0, 0])
    with pytest.raises(InvalidColumnError):
        engine.cell(0, 7)
    for row in (-1, ROWS):
        with pytest.raises(ValueError) as exc_info:
            engine.cell(row, 0)
        assert not isinstance(exc_info.value, InvalidColumnError)
    assert engine.cell(1, 0) == Player.TWO
