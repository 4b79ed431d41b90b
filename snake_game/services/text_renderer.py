"""
Terminal renderer: prints the ASCII board for every state it is given.
"""

import sys
from typing import List, Optional, TextIO

from snake_game.domain.constants import OVER
from snake_game.domain.game_state import GameState


class TextRenderer:
    """
    Prints GameState.print_board() to a stream.

    With ``keep_history`` the rendered boards are also kept in memory.
    """

    def __init__(self, stream: Optional[TextIO] = None, quiet: bool = False, keep_history: bool = False):
        self.stream = stream or sys.stdout
        self.quiet = quiet
        self.keep_history = keep_history
        self.history: List[str] = []

    def __call__(self, state: GameState):
        board = state.print_board()
        if state.phase == OVER:
            board += f"\nGame Over! ({state.death_reason}) Score: {state.score}"
        if self.keep_history:
            self.history.append(board)
        if not self.quiet:
            print("\n" + board + "\n", file=self.stream)
