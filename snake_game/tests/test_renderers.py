"""
Tests for the text and image renderers.
"""

import io
import os
import sys

import pytest
from PIL import Image

# Add repository root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from snake_game.domain import GameState, RIGHT, RUNNING, PAUSED, OVER
from snake_game.services.frame_renderer import FrameRenderer, ColorScheme, hex_to_rgb
from snake_game.services.text_renderer import TextRenderer


def make_state(**overrides) -> GameState:
    params = dict(
        tick_number=0,
        snake_positions=[(5, 10), (4, 10), (3, 10)],
        food=(12, 4),
        score=30,
        direction=RIGHT,
        phase=RUNNING,
        interval_ms=144,
        width=20,
        height=20,
    )
    params.update(overrides)
    return GameState(**params)


def cell_center(cell, cell_size=20):
    x, y = cell
    return (x * cell_size + cell_size // 2, y * cell_size + cell_size // 2)


class TestHelpers:

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#4CAF50") == (76, 175, 80)
        assert hex_to_rgb("222222") == (34, 34, 34)


class TestFrameRenderer:

    def test_frame_size_follows_grid(self):
        img = FrameRenderer(cell_size=20).render_frame(make_state())
        assert img.size == (400, 400)
        assert img.mode == "RGB"

    def test_head_body_food_and_background_colours(self):
        img = FrameRenderer().render_frame(make_state())
        assert img.getpixel(cell_center((5, 10))) == hex_to_rgb(ColorScheme.SNAKE_HEAD)
        assert img.getpixel(cell_center((4, 10))) == hex_to_rgb(ColorScheme.SNAKE_BODY)
        assert img.getpixel(cell_center((3, 10))) == hex_to_rgb(ColorScheme.SNAKE_BODY)
        assert img.getpixel(cell_center((12, 4))) == hex_to_rgb(ColorScheme.FOOD)
        assert img.getpixel(cell_center((0, 0))) == hex_to_rgb(ColorScheme.BACKGROUND)

    def test_cells_leave_a_gap(self):
        """The last pixel row and column of every cell stay background."""
        img = FrameRenderer().render_frame(make_state())
        assert img.getpixel((5 * 20 + 18, 10 * 20 + 18)) == hex_to_rgb(ColorScheme.SNAKE_HEAD)
        assert img.getpixel((5 * 20 + 19, 10 * 20 + 10)) == hex_to_rgb(ColorScheme.BACKGROUND)

    def test_game_over_dims_the_board(self):
        img = FrameRenderer().render_frame(make_state(phase=OVER, death_reason="wall"))
        corner = img.getpixel((1, 1))
        assert sum(corner) < sum(hex_to_rgb(ColorScheme.BACKGROUND))
        head = img.getpixel(cell_center((5, 10)))
        assert head != hex_to_rgb(ColorScheme.SNAKE_HEAD)

    def test_game_over_draws_text(self):
        """Some pixels near the centre are the bright text colour."""
        img = FrameRenderer().render_frame(make_state(phase=OVER, snake_positions=[(0, 0)]))
        middle = img.crop((0, 150, 400, 300))
        assert (255, 255, 255) in [colour for _, colour in middle.getcolors(maxcolors=400 * 150)]

    def test_paused_is_dimmed(self):
        img = FrameRenderer().render_frame(make_state(phase=PAUSED))
        assert sum(img.getpixel((1, 1))) < sum(hex_to_rgb(ColorScheme.BACKGROUND))

    def test_call_keeps_last_frame(self):
        renderer = FrameRenderer()
        renderer(make_state())
        renderer(make_state(score=40))
        assert renderer.frames_rendered == 2
        assert isinstance(renderer.last_frame, Image.Image)

    def test_save_writes_png(self, tmp_path):
        renderer = FrameRenderer()
        renderer(make_state())
        out = renderer.save(tmp_path / "frames" / "final.png")
        assert out.exists()
        with Image.open(out) as saved:
            assert saved.size == (400, 400)

    def test_save_before_render_fails(self, tmp_path):
        with pytest.raises(RuntimeError):
            FrameRenderer().save(tmp_path / "nothing.png")


class TestTextRenderer:

    def test_prints_board(self):
        stream = io.StringIO()
        TextRenderer(stream=stream)(make_state())
        output = stream.getvalue()
        assert "@" in output
        assert "Score: 30" in output

    def test_game_over_line(self):
        stream = io.StringIO()
        TextRenderer(stream=stream)(make_state(phase=OVER, death_reason="self"))
        assert "Game Over! (self) Score: 30" in stream.getvalue()

    def test_quiet_keeps_history_only(self):
        stream = io.StringIO()
        renderer = TextRenderer(stream=stream, quiet=True, keep_history=True)
        renderer(make_state())
        renderer(make_state(score=40))
        assert stream.getvalue() == ""
        assert len(renderer.history) == 2
        assert "Score: 40" in renderer.history[1]
