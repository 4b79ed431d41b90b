"""
Single-player Snake: a grid game engine with a pygame window and a headless
autopilot.

Run with ``python -m snake_game.main`` or the installed ``snake`` script.
"""

__version__ = "0.1.0"
