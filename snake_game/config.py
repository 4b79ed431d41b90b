"""
Game configuration.

Values come from the environment (a local .env file is honoured) and fall
back to the defaults in domain.constants. CLI flags can override any field.

Environment variables:
    SNAKE_CANVAS_WIDTH, SNAKE_CANVAS_HEIGHT   play surface size in pixels
    SNAKE_CELL_SIZE                           pixels per grid cell
    SNAKE_BASE_INTERVAL_MS                    starting tick interval
    SNAKE_MIN_INTERVAL_MS                     fastest allowed tick interval
    SNAKE_INTERVAL_STEP_MS                    speed-up per food eaten
    SNAKE_SCORE_PER_FOOD                      points per food eaten
    SNAKE_LOG_LEVEL                           logging level name
"""

import os
import logging
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from snake_game.domain import constants

load_dotenv()
logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class GameConfig:
    canvas_width: int = constants.CANVAS_WIDTH
    canvas_height: int = constants.CANVAS_HEIGHT
    cell_size: int = constants.CELL_SIZE
    base_interval_ms: int = constants.BASE_INTERVAL_MS
    min_interval_ms: int = constants.MIN_INTERVAL_MS
    interval_step_ms: int = constants.INTERVAL_STEP_MS
    score_per_food: int = constants.SCORE_PER_FOOD
    log_level: str = "INFO"

    @property
    def grid_width(self) -> int:
        return self.canvas_width // self.cell_size

    @property
    def grid_height(self) -> int:
        return self.canvas_height // self.cell_size

    def validate(self) -> "GameConfig":
        """Raise ValueError for settings that cannot produce a playable board."""
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas size must be positive")
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError(
                f"canvas {self.canvas_width}x{self.canvas_height} is smaller than one "
                f"{self.cell_size}px cell"
            )
        head_x, head_y = constants.START_HEAD
        if head_x >= self.grid_width or head_y >= self.grid_height:
            raise ValueError(
                f"a {self.grid_width}x{self.grid_height} grid cannot hold the starting "
                f"snake at {constants.START_HEAD}"
            )
        if self.min_interval_ms <= 0:
            raise ValueError("min_interval_ms must be positive")
        if self.base_interval_ms < self.min_interval_ms:
            raise ValueError("base_interval_ms must not be below min_interval_ms")
        if self.interval_step_ms < 0:
            raise ValueError("interval_step_ms must not be negative")
        if self.score_per_food <= 0:
            raise ValueError("score_per_food must be positive")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")
        return self

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        if not applied:
            return self
        return replace(self, **applied).validate()


def load_config(env_file: Optional[str] = None) -> GameConfig:
    """Build a validated GameConfig from the environment."""
    if env_file:
        load_dotenv(env_file, override=True)

    config = GameConfig(
        canvas_width=_int_env("SNAKE_CANVAS_WIDTH", constants.CANVAS_WIDTH),
        canvas_height=_int_env("SNAKE_CANVAS_HEIGHT", constants.CANVAS_HEIGHT),
        cell_size=_int_env("SNAKE_CELL_SIZE", constants.CELL_SIZE),
        base_interval_ms=_int_env("SNAKE_BASE_INTERVAL_MS", constants.BASE_INTERVAL_MS),
        min_interval_ms=_int_env("SNAKE_MIN_INTERVAL_MS", constants.MIN_INTERVAL_MS),
        interval_step_ms=_int_env("SNAKE_INTERVAL_STEP_MS", constants.INTERVAL_STEP_MS),
        score_per_food=_int_env("SNAKE_SCORE_PER_FOOD", constants.SCORE_PER_FOOD),
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
    ).validate()

    logger.debug(f"Loaded config: {config}")
    return config
