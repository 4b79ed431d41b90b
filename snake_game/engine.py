"""
Snake game engine.

SnakeGame owns every piece of round state (snake, food, score, directions,
tick interval and phase). It never schedules itself: a driver calls tick()
at ``interval_ms`` and reschedules whenever a TickResult reports
``interval_changed``.
"""

import random
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from snake_game.config import GameConfig
from snake_game.domain import constants
from snake_game.domain.constants import (
    DELTAS, OPPOSITES, VALID_MOVES,
    NOT_STARTED, OVER, PHASES,
    DEATH_WALL, DEATH_SELF,
)
from snake_game.domain.game_state import GameState
from snake_game.domain.snake import Snake

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
RenderCallback = Callable[[GameState], None]


@dataclass
class TickResult:
    """What a single tick() did, so the driver can react."""
    moved: bool = False
    ate_food: bool = False
    game_over: bool = False
    interval_changed: bool = False
    interval_ms: int = 0
    death_reason: Optional[str] = None


def normalize_direction(direction: str) -> str:
    """Lower-case a direction name and reject anything that isn't one."""
    if not isinstance(direction, str) or direction.lower() not in VALID_MOVES:
        raise ValueError(f"Unknown direction {direction!r}; expected one of {sorted(VALID_MOVES)}")
    return direction.lower()


def starting_positions(head: Cell = constants.START_HEAD,
                       length: int = constants.START_LENGTH) -> List[Cell]:
    """Head first, body extending towards -x."""
    hx, hy = head
    return [(hx - i, hy) for i in range(length)]


class SnakeGame:
    """
    Manages:
      - Board (width, height)
      - The snake and its committed / pending direction
      - Food
      - Score
      - Tick interval (speed)
      - Phase (not_started, running, paused, over)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        renderer: Optional[RenderCallback] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None
    ):
        self.config = config or GameConfig()
        self.width = self.config.grid_width
        self.height = self.config.grid_height
        self.renderer = renderer
        self.rng = rng if rng is not None else random.Random(seed)

        self.snake = Snake(starting_positions())
        self.food: Optional[Cell] = None
        self.direction = constants.START_DIRECTION
        self.pending_direction = constants.START_DIRECTION
        self.score = 0
        self.interval_ms = self.config.base_interval_ms
        self.phase = NOT_STARTED
        self.tick_number = 0

    # -- Lifecycle --

    def initialize(self) -> GameState:
        """
        Start a fresh round: reset snake, directions, score, speed and phase,
        place food and render the new state.

        The tick interval goes back to ``base_interval_ms`` here, so a new
        round never inherits the previous round's speed.
        """
        self.snake = Snake(starting_positions())
        self.direction = constants.START_DIRECTION
        self.pending_direction = constants.START_DIRECTION
        self.score = 0
        self.interval_ms = self.config.base_interval_ms
        self.phase = NOT_STARTED
        self.tick_number = 0
        self.food = self._random_free_cell()

        logger.info(
            f"New round on {self.width}x{self.height} grid. "
            f"Snake at {list(self.snake.positions)}, food at {self.food}"
        )
        state = self.get_current_state()
        self._render(state)
        return state

    def set_phase(self, phase: str):
        if phase not in PHASES:
            raise ValueError(f"Unknown phase {phase!r}")
        if phase != self.phase:
            logger.debug(f"Phase {self.phase} -> {phase}")
        self.phase = phase

    @property
    def is_over(self) -> bool:
        return self.phase == OVER

    # -- Input --

    def request_direction(self, direction: str) -> bool:
        """
        Record the player's intent for the next tick.

        Reversing into the committed direction is ignored. Returns True when
        the request became the pending direction.
        """
        direction = normalize_direction(direction)
        if direction == OPPOSITES[self.direction]:
            logger.debug(f"Ignoring reversal {direction} while moving {self.direction}")
            return False
        self.pending_direction = direction
        return True

    # -- Simulation --

    def next_head(self, direction: Optional[str] = None) -> Cell:
        hx, hy = self.snake.head
        dx, dy = DELTAS[direction or self.direction]
        return (hx + dx, hy + dy)

    def check_collision(self, head: Cell, eating: bool) -> Optional[str]:
        """
        Return the death reason for moving the head to ``head``, or None.

        The tail cell is free to enter because it moves away this tick,
        except when the snake is eating and therefore keeps its tail.
        """
        x, y = head
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return DEATH_WALL

        body = list(self.snake.positions) if eating else self.snake.body_without_tail()
        if head in body:
            return DEATH_SELF
        return None

    def tick(self) -> TickResult:
        """
        Execute one step:
          1) If the round is over, do nothing
          2) Commit the pending direction
          3) Compute the new head and check for collisions
          4) Move, eating and growing if the head lands on food
          5) Render the new state
        """
        if self.is_over:
            return TickResult(interval_ms=self.interval_ms, death_reason=self.snake.death_reason)

        self.direction = self.pending_direction
        head = self.next_head()
        eating = head == self.food

        death_reason = self.check_collision(head, eating)
        if death_reason:
            self.snake.kill(death_reason, self.tick_number)
            self.set_phase(OVER)
            logger.info(
                f"Game over ({death_reason}) at tick {self.tick_number} moving {self.direction} "
                f"into {head}. Final score: {self.score}"
            )
            self._render(self.get_current_state())
            return TickResult(
                game_over=True,
                interval_ms=self.interval_ms,
                death_reason=death_reason
            )

        self.snake.advance(head, grow=eating)
        self.tick_number += 1

        result = TickResult(moved=True, interval_ms=self.interval_ms)
        if eating:
            self.score += self.config.score_per_food
            result.ate_food = True
            result.interval_changed = self._speed_up()
            result.interval_ms = self.interval_ms
            self.food = self._random_free_cell()
            logger.debug(f"Ate food at {head}; score {self.score}, next food at {self.food}")

        self._render(self.get_current_state())
        return result

    def _speed_up(self) -> bool:
        """Shorten the tick interval by one step while it is above the floor."""
        if self.interval_ms <= self.config.min_interval_ms:
            return False
        previous = self.interval_ms
        self.interval_ms = max(
            self.config.min_interval_ms,
            self.interval_ms - self.config.interval_step_ms
        )
        if self.interval_ms == previous:
            return False
        logger.info(f"Speed up: tick interval now {self.interval_ms}ms")
        return True

    def _random_free_cell(self) -> Optional[Cell]:
        """
        Return a random cell (x, y) not occupied by the snake.
        Returns None when the snake covers the whole board.
        """
        if len(self.snake) >= self.width * self.height:
            logger.warning("Snake fills the board; no free cell for food")
            return None
        while True:
            x = self.rng.randint(0, self.width - 1)
            y = self.rng.randint(0, self.height - 1)
            if (x, y) not in self.snake:
                return (x, y)

    def place_food(self, cell: Cell):
        """Put the food on a specific free cell."""
        x, y = cell
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Food out of bounds at {cell}.")
        if cell in self.snake:
            raise ValueError(f"Food cannot overlap the snake at {cell}.")
        self.food = (x, y)

    # -- Snapshots --

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick_number=self.tick_number,
            snake_positions=list(self.snake.positions),
            food=self.food,
            score=self.score,
            direction=self.direction,
            phase=self.phase,
            interval_ms=self.interval_ms,
            width=self.width,
            height=self.height,
            death_reason=self.snake.death_reason
        )

    def render(self):
        """Hand the current state to the renderer, if there is one."""
        self._render(self.get_current_state())

    def _render(self, state: GameState):
        if self.renderer is not None:
            self.renderer(state)
