"""Shared fixtures for the Connect Four tests."""

import pytest

from connect_four.debug import debug, DebugLevel
from connect_four.game.engine import GameEngine
from connect_four.session import GameSession
from connect_four.config import DisplayConfig


@pytest.fixture(autouse=True)
def reset_debug():
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture
def session():
    return GameSession(DisplayConfig(use_color=False))


@pytest.fixture
def horizontal_win():
    """Player ONE completes the bottom row at columns 0-3 on the 7th move."""
    return [0, 0, 1, 1, 2, 2, 3]


@pytest.fixture
def draw_sequence():
    """Fills all 42 cells without four in a row anywhere."""
    return [0] * 6 + [1] * 6 + [4] * 5 + [2] * 6 + [3] * 6 + [6] * 6 + [4] + [5] * 6
