"""
Base player interface for the game engine.
"""

from typing import Optional

from snake_game.domain.game_state import GameState


class Player:
    """
    Base class/interface for input sources.

    A player looks at the current game state and says which way the snake
    should turn next, or None to keep going.
    """

    def get_move(self, game_state: GameState) -> Optional[str]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "up", "down", "left", "right", or None for no change
        """
        raise NotImplementedError
