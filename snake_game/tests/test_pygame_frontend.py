"""
Tests for the pygame window, renderer and timer scheduler.

Runs against SDL's dummy video/audio drivers, so no display is needed.
"""

import os
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

# Add repository root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from snake_game.config import GameConfig
from snake_game.domain import GameState, UP, DOWN, LEFT, RIGHT, NOT_STARTED, RUNNING, PAUSED, OVER
from snake_game.services.frame_renderer import ColorScheme, hex_to_rgb
from snake_game.services.pygame_frontend import (
    KEY_DIRECTIONS,
    GameWindow,
    PygameRenderer,
    PygameTimerScheduler,
    TICK_EVENT,
    direction_for_event,
)


def make_state(**overrides) -> GameState:
    params = dict(
        tick_number=0,
        snake_positions=[(5, 10), (4, 10), (3, 10)],
        food=(12, 4),
        score=0,
        direction=RIGHT,
        phase=RUNNING,
        interval_ms=150,
        width=20,
        height=20,
    )
    params.update(overrides)
    return GameState(**params)


@pytest.fixture
def window():
    win = GameWindow(GameConfig(), seed=3)
    win.controller.initialize()
    yield win
    win.scheduler.cancel()
    pygame.quit()


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


class TestKeyBindings:

    @pytest.mark.parametrize("k,direction", [
        (pygame.K_UP, UP),
        (pygame.K_w, UP),
        (pygame.K_DOWN, DOWN),
        (pygame.K_s, DOWN),
        (pygame.K_LEFT, LEFT),
        (pygame.K_a, LEFT),
        (pygame.K_RIGHT, RIGHT),
        (pygame.K_d, RIGHT),
    ])
    def test_direction_keys(self, k, direction):
        assert direction_for_event(key(k)) == direction

    def test_only_arrows_and_wasd_are_bound(self):
        assert len(KEY_DIRECTIONS) == 8

    def test_other_keys_are_ignored(self):
        assert direction_for_event(key(pygame.K_SPACE)) is None

    def test_key_up_is_ignored(self):
        assert direction_for_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_UP)) is None


class TestPygameRenderer:

    def test_draws_snake_and_food(self):
        surface = pygame.Surface((400, 400))
        renderer = PygameRenderer(cell_size=20)
        renderer(make_state())
        renderer.draw(surface)
        assert surface.get_at((110, 210))[:3] == hex_to_rgb(ColorScheme.SNAKE_HEAD)
        assert surface.get_at((90, 210))[:3] == hex_to_rgb(ColorScheme.SNAKE_BODY)
        assert surface.get_at((250, 90))[:3] == hex_to_rgb(ColorScheme.FOOD)
        assert surface.get_at((1, 1))[:3] == hex_to_rgb(ColorScheme.BACKGROUND)

    def test_game_over_overlay_dims(self):
        surface = pygame.Surface((400, 400))
        renderer = PygameRenderer(cell_size=20)
        renderer(make_state(phase=OVER))
        renderer.draw(surface)
        assert sum(surface.get_at((1, 1))[:3]) < sum(hex_to_rgb(ColorScheme.BACKGROUND))

    def test_nothing_to_draw_yet(self):
        surface = pygame.Surface((40, 40))
        PygameRenderer(cell_size=20).draw(surface)
        assert surface.get_at((1, 1))[:3] == hex_to_rgb(ColorScheme.BACKGROUND)


class TestPygameTimerScheduler:

    def test_dispatch_runs_callback(self):
        pygame.init()
        try:
            calls = []
            scheduler = PygameTimerScheduler()
            scheduler.configure(150, lambda: calls.append(1) or "ok")
            assert scheduler.dispatch(pygame.event.Event(TICK_EVENT)) == "ok"
            assert calls == [1]
            scheduler.cancel()
            assert scheduler.dispatch(pygame.event.Event(TICK_EVENT)) is None
            assert calls == [1]
        finally:
            pygame.quit()

    def test_dispatch_ignores_other_events(self):
        scheduler = PygameTimerScheduler()
        scheduler.callback = lambda: "ran"
        assert scheduler.dispatch(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP)) is None


class TestGameWindow:

    def test_starts_not_started(self, window):
        assert window.controller.phase == NOT_STARTED
        assert window.renderer.state is not None

    def test_arrow_key_requests_direction(self, window):
        window.handle_event(key(pygame.K_UP))
        assert window.controller.game.pending_direction == UP

    def test_wasd_key_requests_direction(self, window):
        window.handle_event(key(pygame.K_s))
        assert window.controller.game.pending_direction == DOWN

    def test_reverse_key_is_ignored(self, window):
        """Moving right, a left key press leaves the pending direction alone."""
        window.handle_event(key(pygame.K_a))
        assert window.controller.game.pending_direction == RIGHT

    def test_keys_are_not_polled_by_the_controller(self, window):
        assert window.controller.player is None

    def test_space_toggles(self, window):
        window.handle_event(key(pygame.K_SPACE))
        assert window.controller.phase == RUNNING
        assert window.scheduler.active is True
        window.handle_event(key(pygame.K_RETURN))
        assert window.controller.phase == PAUSED

    def test_tick_event_advances_game(self, window):
        window.controller.game.place_food((15, 15))
        window.handle_event(key(pygame.K_SPACE))
        window.handle_event(pygame.event.Event(TICK_EVENT))
        assert window.controller.game.snake.head == (6, 10)
        assert window.renderer.state.snake_positions[0] == (6, 10)

    def test_r_resets(self, window):
        window.handle_event(key(pygame.K_SPACE))
        window.handle_event(key(pygame.K_r))
        assert window.controller.phase == NOT_STARTED
        assert window.scheduler.active is False

    def test_escape_and_quit_stop_the_loop(self, window):
        window.handle_event(key(pygame.K_ESCAPE))
        assert window.running is False
        window.running = True
        window.handle_event(pygame.event.Event(pygame.QUIT))
        assert window.running is False

    def test_draw_does_not_fail(self, window):
        window.draw()
        assert window.screen.get_size() == (400, 400 + 32)
