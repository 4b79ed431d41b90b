"""
Player implementations for Snake.

This module contains the input sources that decide where the snake
turns. Headless runs use the random autopilot; the pygame window forwards key
presses to the controller directly.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
