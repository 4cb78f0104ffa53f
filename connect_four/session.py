"""
session.py - One player's session: an engine, its statistics and display settings
"""

from dataclasses import dataclass
from typing import Optional

from connect_four.config import DisplayConfig
from connect_four.debug import debug
from connect_four.errors import MoveError
from connect_four.game.engine import GameEngine
from connect_four.stats import SessionStats
from connect_four.utils import ROWS, COLS, GameResult, Player


@dataclass(frozen=True)
class MoveReport:
    """What the presentation layer needs to show a move."""
    column: object
    player: Player
    result: GameResult
    row: Optional[int] = None
    color: Optional[str] = None
    drop_delay: float = 0.0
    error: Optional[MoveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GameSession:
    """
    Owns a GameEngine for the lifetime of a session.

    Every successful move is counted in ``stats``, and a finished game is
    recorded once, when the move that ends it is played.
    """

    def __init__(self, config: Optional[DisplayConfig] = None,
                 engine: Optional[GameEngine] = None,
                 stats: Optional[SessionStats] = None):
        self.config = config or DisplayConfig()
        self.engine = engine or GameEngine()
        self.stats = stats or SessionStats()

    def play(self, column) -> MoveReport:
        outcome = self.engine.try_place_piece(column)
        result = self.engine.result

        if not outcome.ok:
            debug.debug(f"Move rejected: {outcome.error}", "session")
            return MoveReport(column=column, player=outcome.player, result=result,
                              error=outcome.error)

        self.stats.record_move(outcome.player)
        if result.is_game_over():
            self.stats.record_result(result, self.engine.current_turn)

        return MoveReport(
            column=column,
            player=outcome.player,
            result=result,
            row=outcome.row,
            color=self.config.color_of(outcome.player),
            drop_delay=self.config.drop_delay(outcome.row),
        )

    def new_game(self) -> None:
        if self.engine.current_turn and not self.engine.is_game_over():
            debug.info(f"Abandoning unfinished game after {self.engine.current_turn} moves",
                       "session")
        self.engine.reset()

    def status_message(self) -> str:
        result = self.engine.result
        if result == GameResult.DRAW:
            return "It's a draw!"
        if result.is_game_over():
            return f"{self.config.name_of(result.winner)} wins!"
        player = self.engine.current_player
        return f"{self.config.name_of(player)} ({self.config.color_of(player)}) to move"

    def render(self) -> str:
        """The board as text, using the configured symbols."""
        symbols = self.config.symbols()
        lines = []
        for row in range(ROWS - 1, -1, -1):
            lines.append(" ".join(symbols[self.engine.cell(row, col)] for col in range(COLS)))
        lines.append(" ".join(str(col) for col in range(COLS)))
        return "\n".join(lines)
