"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether the snake is still alive
        death_reason: 'wall' or 'self'
        death_tick: the tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("Snake needs at least one segment.")
        self.positions = deque(positions)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell: Tuple[int, int]) -> bool:
        return cell in self.positions

    def body_without_tail(self) -> List[Tuple[int, int]]:
        """Cells that stay occupied when the snake moves without growing."""
        return list(self.positions)[:-1]

    def advance(self, new_head: Tuple[int, int], grow: bool = False) -> Optional[Tuple[int, int]]:
        """
        Push a new head. The tail is dropped unless ``grow`` is set.

        Returns the removed tail cell, or None when the snake grew.
        """
        self.positions.appendleft(new_head)
        if grow:
            return None
        return self.positions.pop()

    def kill(self, reason: str, tick_number: int):
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick_number

    def __repr__(self):
        return f"<Snake len={len(self.positions)} head={self.head} alive={self.alive}>"
