"""
Domain entities for the Snake game engine.

This module contains the core game entities that are independent of
rendering, input and scheduling concerns.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    NOT_STARTED, RUNNING, PAUSED, OVER,
)
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES',
    'NOT_STARTED', 'RUNNING', 'PAUSED', 'OVER',
    'Snake',
    'GameState',
]
