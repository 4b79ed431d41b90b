"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Tuple, Dict, Any, Optional


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Renderers and players receive one of these; they never touch the
    live SnakeGame.

    Attributes:
        tick_number: how many ticks have been applied this round (0-based)
        snake_positions: list of (x, y), head first
        food: (x, y) of the food, or None if the board is full
        score: current score
        direction: committed direction
        phase: one of not_started / running / paused / over
        interval_ms: current tick interval
        width, height: board dimensions in cells
        death_reason: 'wall' or 'self' once the round is over
    """

    def __init__(
        self,
        tick_number: int,
        snake_positions: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        score: int,
        direction: str,
        phase: str,
        interval_ms: int,
        width: int,
        height: int,
        death_reason: Optional[str] = None
    ):
        self.tick_number = tick_number
        self.snake_positions = snake_positions
        self.food = food
        self.score = score
        self.direction = direction
        self.phase = phase
        self.interval_ms = interval_ms
        self.width = width
        self.height = height
        self.death_reason = death_reason

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        * = food
        o = snake body
        @ = snake head
        (0,0) is the top-left cell, matching screen coordinates.
        """
        # Create empty board
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = '*'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            board[y][x] = '@' if pos_idx == 0 else 'o'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]

        # Column labels use the last digit so wide boards stay aligned
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))
        result.append(f"Score: {self.score}  Phase: {self.phase}")

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (tuples become lists when dumped)."""
        return {
            "tick_number": self.tick_number,
            "snake_positions": self.snake_positions,
            "food": self.food,
            "score": self.score,
            "direction": self.direction,
            "phase": self.phase,
            "interval_ms": self.interval_ms,
            "width": self.width,
            "height": self.height,
            "death_reason": self.death_reason,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, food={self.food}, "
            f"length={len(self.snake_positions)}, score={self.score}, phase={self.phase}>"
        )
