"""
Frame Rendering Service for Snake

Renders GameState snapshots to images with Pillow:
1. Dark board with one square per snake segment (head in a darker green)
2. Food square
3. Translucent game-over overlay with the final score

The renderer is callable, so it can be handed to SnakeGame as its render
callback; it keeps the last frame so the CLI can save a snapshot.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from snake_game.domain.constants import OVER, PAUSED
from snake_game.domain.game_state import GameState

logger = logging.getLogger(__name__)

CELL_SIZE = 20  # Size of each grid cell in pixels


class ColorScheme:
    """Board colours"""

    BACKGROUND = "#222222"
    SNAKE_HEAD = "#4CAF50"  # Green head
    SNAKE_BODY = "#8BC34A"  # Lighter green body
    FOOD = "#FF5722"        # Orange food
    OVERLAY = (0, 0, 0, 191)  # rgba(0, 0, 0, 0.75)
    TEXT = "#FFFFFF"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _load_font(size: int):
    # Try a common TrueType font, fallback to default if not available
    for name in ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf"):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


class FrameRenderer:
    """Render Snake game states to PIL images"""

    def __init__(self, cell_size: int = CELL_SIZE):
        self.cell_size = cell_size
        self.last_frame: Optional[Image.Image] = None
        self.frames_rendered = 0

        self.font_large = _load_font(30)
        self.font_small = _load_font(20)

    def __call__(self, state: GameState):
        self.last_frame = self.render_frame(state)
        self.frames_rendered += 1

    def cell_rect(self, cell: Tuple[int, int]) -> Tuple[int, int, int, int]:
        """Pixel box for a cell, leaving a one-pixel gap to the next cell."""
        x, y = cell
        left = x * self.cell_size
        top = y * self.cell_size
        # PIL rectangles include both corners
        return (left, top, left + self.cell_size - 2, top + self.cell_size - 2)

    def render_frame(self, state: GameState) -> Image.Image:
        """Render a single frame of the game"""
        size = (state.width * self.cell_size, state.height * self.cell_size)
        img = Image.new('RGBA', size, hex_to_rgb(ColorScheme.BACKGROUND) + (255,))
        draw = ImageDraw.Draw(img)

        for index, cell in enumerate(state.snake_positions):
            color = ColorScheme.SNAKE_HEAD if index == 0 else ColorScheme.SNAKE_BODY
            draw.rectangle(self.cell_rect(cell), fill=hex_to_rgb(color))

        if state.food is not None:
            draw.rectangle(self.cell_rect(state.food), fill=hex_to_rgb(ColorScheme.FOOD))

        if state.phase == OVER:
            img = self._draw_overlay(img, [
                ("Game Over!", self.font_large, 0),
                (f"Score: {state.score}", self.font_small, 40),
                ("Press Start to play again", self.font_small, 80),
            ])
        elif state.phase == PAUSED:
            img = self._draw_overlay(img, [("Paused", self.font_large, 0)])

        return img.convert('RGB')

    def _draw_overlay(self, img: Image.Image, lines) -> Image.Image:
        """Dim the board and centre each (text, font, y_offset) line."""
        overlay = Image.new('RGBA', img.size, ColorScheme.OVERLAY)
        img = Image.alpha_composite(img, overlay)
        draw = ImageDraw.Draw(img)

        center_x = img.width / 2
        center_y = img.height / 2
        for text, font, offset in lines:
            left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
            text_x = center_x - (right - left) / 2
            text_y = center_y + offset - (bottom - top)
            draw.text((text_x, text_y), text, fill=hex_to_rgb(ColorScheme.TEXT), font=font)
        return img

    def save(self, path: Union[str, Path]) -> Path:
        """Write the most recent frame to ``path`` (format from the extension)."""
        if self.last_frame is None:
            raise RuntimeError("Nothing has been rendered yet")
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.last_frame.save(path)
        logger.info(f"Saved frame to {path}")
        return path
