"""
Game controller - wires a SnakeGame to a tick scheduler and an input source.

The controller is the only thing that changes the phase between
not_started, running and paused, and the only thing that talks to the
scheduler. SnakeGame itself never schedules anything.
"""

import logging
from typing import Optional

from snake_game.domain.constants import NOT_STARTED, RUNNING, PAUSED, OVER
from snake_game.engine import SnakeGame, TickResult
from snake_game.players.base import Player
from snake_game.services.scheduler import Scheduler

logger = logging.getLogger(__name__)

CONTROL_LABELS = {
    NOT_STARTED: "Start Game",
    RUNNING: "Pause",
    PAUSED: "Resume",
    OVER: "Start Game",
}


class GameController:
    """
    Start / pause / reset controls around one SnakeGame.

    Attributes:
        game: the game being driven
        scheduler: the periodic tick driver
        player: optional input source asked for a move before every tick
    """

    def __init__(self, game: SnakeGame, scheduler: Scheduler, player: Optional[Player] = None):
        self.game = game
        self.scheduler = scheduler
        self.player = player

    @property
    def phase(self) -> str:
        return self.game.phase

    @property
    def control_label(self) -> str:
        """Text for the start/pause button in the current phase."""
        return CONTROL_LABELS[self.game.phase]

    def initialize(self):
        """Stop the driver and set up a fresh round (phase not_started)."""
        self.scheduler.cancel()
        return self.game.initialize()

    def toggle(self) -> str:
        """
        The start/pause button:
          - running -> paused (driver stopped)
          - not_started / paused -> running (driver started at current speed)
          - over -> fresh round, running
        Returns the new phase.
        """
        if self.game.phase == RUNNING:
            self.scheduler.cancel()
            self.game.set_phase(PAUSED)
            logger.info(f"Paused at tick {self.game.tick_number}")
        else:
            if self.game.phase == OVER:
                self.game.initialize()
            self.game.set_phase(RUNNING)
            self.scheduler.configure(self.game.interval_ms, self.on_tick)
            logger.info(f"Running at {self.game.interval_ms}ms per tick")
        self.game.render()
        return self.game.phase

    def reset(self):
        """Hard reset: stop the driver and reinitialize."""
        logger.info("Reset")
        return self.initialize()

    def request_direction(self, direction: str) -> bool:
        return self.game.request_direction(direction)

    def on_tick(self) -> Optional[TickResult]:
        """
        Scheduler callback. Applies the player's move (if any), advances the
        game one step and keeps the scheduler in line with the game's speed.
        """
        if self.game.phase != RUNNING:
            # Stale callback from a driver that was just stopped
            return None

        if self.player is not None:
            move = self.player.get_move(self.game.get_current_state())
            if move:
                self.game.request_direction(move)

        result = self.game.tick()

        if result.game_over:
            self.scheduler.cancel()
        elif result.interval_changed:
            self.scheduler.configure(result.interval_ms, self.on_tick)
        return result
