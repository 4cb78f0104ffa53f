"""
cli.py - Command-line interface for Connect Four

Play interactively, replay a sequence of moves, or simulate random games
to exercise the session statistics.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional, Union

from connect_four.config import DisplayConfig
from connect_four.debug import debug
from connect_four.errors import ConfigError
from connect_four.session import GameSession
from connect_four.utils import COLS, Player

QUIT = 'quit'
RESTART = 'restart'
SHOW_STATS = 'stats'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='connect-four', description='Connect Four CLI')
    parser.add_argument('--debug-level', dest='debug_level', default='warning',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        help='Logging verbosity')
    parser.add_argument('--no-color', dest='use_color', action='store_false', default=None,
                        help='Disable coloured pieces')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--debug', action='store_true', help='Shortcut for --debug-level debug')
    play_parser.add_argument('--ai', choices=['random', 'none'], default='random',
                             help="Opponent for Player 2 ('none' for two humans)")
    play_parser.add_argument('--seed', type=int, default=None, help='Seed for the random opponent')
    play_parser.add_argument('--player-one-color', dest='player_one_color', default=None)
    play_parser.add_argument('--player-two-color', dest='player_two_color', default=None)

    test_parser = subparsers.add_parser('test', help='Replay a sequence of moves')
    test_parser.add_argument('--moves', type=str, required=True,
                             help='Comma-separated columns, e.g. 3,3,4,4')

    stats_parser = subparsers.add_parser('stats', help='Simulate random games and show statistics')
    stats_parser.add_argument('--games', type=int, default=100, help='Number of games to play')
    stats_parser.add_argument('--seed', type=int, default=None, help='Random seed')

    return parser


def parse_moves(text: str) -> List[int]:
    """Parse "3,3,4" into [3, 3, 4]; raises ValueError on bad input."""
    return [int(part) for part in text.split(',') if part.strip()]


class SimpleCLI:
    """Command-line front end around a GameSession."""

    def __init__(self, input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.input = input_func
        self.output = output
        self.args = None
        self.session: Optional[GameSession] = None
        self.rng = random.Random()

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = build_parser().parse_args(argv)

        level = 'debug' if getattr(self.args, 'debug', False) else self.args.debug_level
        debug.set_from_string(level)
        self.args.debug_level = level

        self.session = GameSession(DisplayConfig.from_args(self.args))
        self.rng = random.Random(getattr(self.args, 'seed', None))

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the selected command and return a process exit code."""
        if self.args is None:
            try:
                self.parse_args(argv)
            except ConfigError as e:
                self.output(f"Configuration error: {e}")
                return 2

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            return self.replay_moves()
        elif self.args.command == 'stats':
            self.simulate_games()
        else:
            self.output("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play games until the user quits."""
        session = self.session
        self.output("Starting a new Connect Four game!")
        self.output(f"Enter column number (0-{COLS - 1}) to make a move.")
        self.output("Other commands: 'q' to quit, 'r' to restart, 's' for statistics.")
        self.output(session.render())

        while True:
            if session.engine.is_game_over():
                self.output(session.status_message())
                self.show_stats()
                try:
                    answer = self.input("Play again? (y/n): ").strip().lower()
                except EOFError:
                    answer = 'n'
                if answer != 'y':
                    return
                session.new_game()
                self.output(session.render())
                continue

            player = session.engine.current_player
            if player == Player.TWO and self.args.ai == 'random':
                move = self.rng.choice(session.engine.valid_columns())
                self.output(f"AI plays column {move}")
            else:
                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    self.output("Quitting game.")
                    self.show_stats()
                    return
                if move == RESTART:
                    session.new_game()
                    self.output("Game restarted.")
                    self.output(session.render())
                    continue
                if move == SHOW_STATS:
                    self.show_stats()
                    continue

            report = session.play(move)
            if report.ok:
                self.output(session.render())
            else:
                self.output(f"Invalid move: {report.error}")

    def get_human_move(self) -> Optional[Union[int, str]]:
        """
        Read one move from the user.

        Returns:
            Column index, a command code, or None if the input was not understood
        """
        prompt = f"{self.session.status_message()} (0-{COLS - 1}, q/r/s): "
        try:
            user_input = self.input(prompt).strip().lower()
        except EOFError:
            return QUIT

        commands = {'q': QUIT, 'r': RESTART, 's': SHOW_STATS}
        if user_input in commands:
            return commands[user_input]

        try:
            return int(user_input)
        except ValueError:
            self.output("Invalid input. Please enter a column number or command.")
            return None

    def replay_moves(self) -> int:
        try:
            moves = parse_moves(self.args.moves)
        except ValueError as e:
            self.output(f"Error parsing moves: {e}")
            return 1

        session = self.session
        for index, column in enumerate(moves):
            report = session.play(column)
            if not report.ok:
                self.output(f"Move {index + 1} (column {column}) rejected: {report.error}")
                self.output(session.render())
                return 1

        self.output(session.render())
        self.output(f"Moves played: {session.engine.current_turn}")
        self.output(f"Result: {session.engine.result.name}")
        if session.engine.winning_line:
            self.output(f"Winning line: {session.engine.winning_line}")
        return 0

    def simulate_games(self) -> None:
        session = self.session
        for _ in range(self.args.games):
            session.new_game()
            while not session.engine.is_game_over():
                session.play(self.rng.choice(session.engine.valid_columns()))
        self.show_stats()

    def show_stats(self) -> None:
        summary = self.session.stats.summary()
        self.output(f"Games played: {summary['games_played']}  Draws: {summary['draws']}  "
                    f"Moves: {summary['total_moves']}")
        for player in (Player.ONE, Player.TWO):
            counts = summary['players'][player.name]
            self.output(f"  {self.session.config.name_of(player)}: {counts['wins']} wins "
                        f"({counts['win_rate']:.0%}), best streak {counts['best_streak']}")


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
