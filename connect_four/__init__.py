"""
connect_four - Connect Four game engine with session statistics

This package provides the game-state core (board, turns, win and draw
detection), an in-memory statistics add-on, a command-line interface and a
Gymnasium environment built on the same engine.
"""

__version__ = '0.1.0'
