"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from snake_game.domain.constants import DELTAS, OPPOSITES, VALID_MOVES
from snake_game.domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    An autopilot that picks a valid direction that avoids walls and self-collisions.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def safe_moves(self, game_state: GameState) -> List[str]:
        snake_positions = game_state.snake_positions
        head_x, head_y = snake_positions[0]

        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            # Reversals are ignored by the game, so never pick one
            if move == OPPOSITES[game_state.direction]:
                continue

            dx, dy = DELTAS[move]
            new_x, new_y = head_x + dx, head_y + dy

            # Check wall collisions
            if (new_x < 0 or new_x >= game_state.width or
                new_y < 0 or new_y >= game_state.height):
                continue

            # The tail only moves out of the way when no food is eaten
            if (new_x, new_y) == game_state.food:
                blocked = snake_positions
            else:
                blocked = snake_positions[:-1]
            if (new_x, new_y) in blocked:
                continue

            valid_moves.append(move)
        return valid_moves

    def get_move(self, game_state: GameState) -> str:
        valid_moves = self.safe_moves(game_state)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
