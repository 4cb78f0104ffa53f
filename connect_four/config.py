"""
config.py - Display settings for the presentation layer

The engine never reads these; the session and CLI use them to name and
colour the players and to time piece drops.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from connect_four.debug import DebugLevel
from connect_four.errors import ConfigError
from connect_four.utils import ROWS, Player

# ANSI foreground codes for terminal output
ANSI_COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
}
ANSI_RESET = "\033[0m"


@dataclass
class DisplayConfig:
    player_one_name: str = "Player 1"
    player_two_name: str = "Player 2"
    player_one_color: str = "red"
    player_two_color: str = "yellow"
    empty_symbol: str = "."
    use_color: bool = True
    drop_delay_per_row: float = 0.05  # seconds a piece takes to fall one row
    debug_level: str = "warning"

    @classmethod
    def from_args(cls, args) -> 'DisplayConfig':
        """Build a config from an argparse namespace, ignoring absent options."""
        values = {}
        for name in cls.__dataclass_fields__:
            value = getattr(args, name, None)
            if value is not None:
                values[name] = value
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        for color in (self.player_one_color, self.player_two_color):
            if color not in ANSI_COLORS:
                raise ConfigError(f"Unknown color '{color}', choose from {sorted(ANSI_COLORS)}")
        if self.player_one_color == self.player_two_color:
            raise ConfigError("Players must have different colors")
        if self.drop_delay_per_row < 0:
            raise ConfigError("drop_delay_per_row cannot be negative")
        if len(self.empty_symbol) != 1:
            raise ConfigError("empty_symbol must be a single character")
        if self.debug_level.upper() not in DebugLevel.__members__:
            raise ConfigError(f"Unknown debug level '{self.debug_level}'")

    def name_of(self, player: Player) -> str:
        return {Player.ONE: self.player_one_name, Player.TWO: self.player_two_name}[player]

    def color_of(self, player: Player) -> Optional[str]:
        return {Player.ONE: self.player_one_color,
                Player.TWO: self.player_two_color}.get(player)

    def drop_delay(self, row: int) -> float:
        """Time for a piece to fall from above the board to ``row``."""
        return (ROWS - row) * self.drop_delay_per_row

    def symbols(self) -> Dict[Player, str]:
        """Cell symbols for rendering, coloured when enabled."""
        symbols = {Player.EMPTY: self.empty_symbol}
        for player in (Player.ONE, Player.TWO):
            if self.use_color:
                symbols[player] = f"{ANSI_COLORS[self.color_of(player)]}{player}{ANSI_RESET}"
            else:
                symbols[player] = str(player)
        return symbols
