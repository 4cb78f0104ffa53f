"""
stats.py - In-memory statistics for one playing session

Counts moves, wins, draws and streaks. Nothing is written to disk; the
numbers live as long as the SessionStats object.
"""

from typing import Any, Dict, Optional

from connect_four.debug import debug
from connect_four.utils import GameResult, Player

PLAYERS = (Player.ONE, Player.TWO)


class SessionStats:
    """Running totals for the games finished in a session."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.games_played = 0
        self.draws = 0
        self.total_moves = 0
        self.wins = {player: 0 for player in PLAYERS}
        self.moves = {player: 0 for player in PLAYERS}
        self.current_streak = {player: 0 for player in PLAYERS}
        self.best_streak = {player: 0 for player in PLAYERS}
        self.longest_game = 0
        self.shortest_win: Optional[int] = None

    def record_move(self, player: Player) -> None:
        if player not in PLAYERS:
            raise ValueError(f"Cannot record a move for {player!r}")
        self.moves[player] += 1
        self.total_moves += 1

    def record_result(self, result: GameResult, moves: int) -> None:
        """
        Count a finished game.

        Args:
            result: Final result of the game
            moves: Number of pieces placed in the game

        Raises:
            ValueError: If the game has not finished
        """
        if not result.is_game_over():
            raise ValueError("Only finished games can be recorded")

        self.games_played += 1
        self.longest_game = max(self.longest_game, moves)

        winner = result.winner
        if winner == Player.EMPTY:
            self.draws += 1
            for player in PLAYERS:
                self.current_streak[player] = 0
        else:
            self.wins[winner] += 1
            self.current_streak[winner] += 1
            self.current_streak[winner.other()] = 0
            self.best_streak[winner] = max(self.best_streak[winner], self.current_streak[winner])
            if self.shortest_win is None or moves < self.shortest_win:
                self.shortest_win = moves

        debug.info(f"Game {self.games_played} recorded: {result.name} in {moves} moves", "stats")

    def win_rate(self, player: Player) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins[player] / self.games_played

    def summary(self) -> Dict[str, Any]:
        return {
            'games_played': self.games_played,
            'draws': self.draws,
            'total_moves': self.total_moves,
            'longest_game': self.longest_game,
            'shortest_win': self.shortest_win,
            'players': {
                player.name: {
                    'wins': self.wins[player],
                    'moves': self.moves[player],
                    'win_rate': self.win_rate(player),
                    'current_streak': self.current_streak[player],
                    'best_streak': self.best_streak[player],
                }
                for player in PLAYERS
            },
        }
