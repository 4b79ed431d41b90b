"""
Pygame window for interactive play.

Handles the window, the event loop and the tick timer. The game itself is
driven through a GameController; this module only translates between
pygame and the controller.

Controls:
    Arrow keys / WASD   steer
    Space / Enter       start, pause, resume (restarts after game over)
    R                   reset
    Esc / window close  quit
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from snake_game.config import GameConfig
from snake_game.controller import GameController
from snake_game.domain.constants import OVER, PAUSED, UP, DOWN, LEFT, RIGHT
from snake_game.domain.game_state import GameState
from snake_game.engine import SnakeGame
from snake_game.services.frame_renderer import ColorScheme, hex_to_rgb
from snake_game.services.scheduler import Scheduler

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1
HUD_HEIGHT = 32
FPS = 60

KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}


def direction_for_event(event: pygame.event.Event) -> Optional[str]:
    """Direction a KEYDOWN event steers towards, or None for any other event."""
    if event.type != pygame.KEYDOWN:
        return None
    return KEY_DIRECTIONS.get(event.key)


class PygameTimerScheduler(Scheduler):
    """
    Posts TICK_EVENT through ``pygame.time.set_timer``. The window's event
    loop turns each TICK_EVENT into a call to dispatch().
    """

    def __init__(self, event_type: int = TICK_EVENT):
        super().__init__()
        self.event_type = event_type

    def _start(self, interval_ms: int, callback):
        pygame.time.set_timer(self.event_type, interval_ms)

    def _stop(self):
        pygame.time.set_timer(self.event_type, 0)

    def dispatch(self, event: pygame.event.Event):
        """Run the callback for a timer event. Returns the callback's result."""
        if event.type != self.event_type or self.callback is None:
            return None
        return self.callback()


class PygameRenderer:
    """Keeps the latest GameState and draws it onto a surface."""

    def __init__(self, cell_size: int, font: Optional[pygame.font.Font] = None,
                 font_small: Optional[pygame.font.Font] = None):
        self.cell_size = cell_size
        self.state: Optional[GameState] = None
        self.font = font
        self.font_small = font_small

    def __call__(self, state: GameState):
        self.state = state

    def _cell_rect(self, cell) -> pygame.Rect:
        x, y = cell
        return pygame.Rect(x * self.cell_size, y * self.cell_size,
                           self.cell_size - 1, self.cell_size - 1)

    def draw(self, surface: pygame.Surface):
        surface.fill(hex_to_rgb(ColorScheme.BACKGROUND))
        state = self.state
        if state is None:
            return

        for index, cell in enumerate(state.snake_positions):
            color = ColorScheme.SNAKE_HEAD if index == 0 else ColorScheme.SNAKE_BODY
            pygame.draw.rect(surface, hex_to_rgb(color), self._cell_rect(cell))

        if state.food is not None:
            pygame.draw.rect(surface, hex_to_rgb(ColorScheme.FOOD), self._cell_rect(state.food))

        if state.phase == OVER:
            self._draw_overlay(surface, [
                ("Game Over!", self.font, 0),
                (f"Score: {state.score}", self.font_small, 40),
                ("Press Start to play again", self.font_small, 80),
            ])
        elif state.phase == PAUSED:
            self._draw_overlay(surface, [("Paused", self.font, 0)])

    def _draw_overlay(self, surface: pygame.Surface, lines):
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill(ColorScheme.OVERLAY)
        surface.blit(overlay, (0, 0))
        if self.font is None:
            return
        cx = surface.get_width() // 2
        cy = surface.get_height() // 2
        for text, font, offset in lines:
            img = (font or self.font).render(text, True, hex_to_rgb(ColorScheme.TEXT))
            surface.blit(img, img.get_rect(center=(cx, cy + offset)))


class GameWindow:
    """Window + event loop around one GameController."""

    def __init__(self, config: GameConfig, seed: Optional[int] = None, title: str = "Snake"):
        pygame.init()
        self.config = config
        self.board_size = (config.grid_width * config.cell_size,
                           config.grid_height * config.cell_size)
        self.screen = pygame.display.set_mode((self.board_size[0], self.board_size[1] + HUD_HEIGHT))
        pygame.display.set_caption(title)
        self.board = pygame.Surface(self.board_size)
        self.clock = pygame.time.Clock()
        self.running = True

        self.font = pygame.font.SysFont("arial", 30)
        self.font_small = pygame.font.SysFont("arial", 20)

        self.renderer = PygameRenderer(config.cell_size, self.font, self.font_small)
        self.scheduler = PygameTimerScheduler()
        self.controller = GameController(
            SnakeGame(config, renderer=self.renderer, seed=seed),
            self.scheduler
        )

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == TICK_EVENT:
            self.scheduler.dispatch(event)
        elif event.type == pygame.KEYDOWN:
            direction = direction_for_event(event)
            if direction is not None:
                self.controller.request_direction(direction)
            elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self.controller.toggle()
            elif event.key == pygame.K_r:
                self.controller.reset()
            elif event.key == pygame.K_ESCAPE:
                self.running = False

    def draw(self):
        self.renderer.draw(self.board)
        self.screen.fill((0, 0, 0))
        self.screen.blit(self.board, (0, 0))
        game = self.controller.game
        hud = f"Score: {game.score}    [Space] {self.controller.control_label}    [R] Reset"
        img = self.font_small.render(hud, True, hex_to_rgb(ColorScheme.TEXT))
        self.screen.blit(img, (8, self.board_size[1] + (HUD_HEIGHT - img.get_height()) // 2))
        pygame.display.flip()

    def run(self) -> int:
        """Play until the window closes. Returns the last score."""
        self.controller.initialize()
        while self.running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.draw()

        self.scheduler.cancel()
        score = self.controller.game.score
        pygame.quit()
        return score


def run_window(config: GameConfig, seed: Optional[int] = None) -> int:
    logger.info(f"Opening {config.canvas_width}x{config.canvas_height} window")
    return GameWindow(config, seed=seed).run()
