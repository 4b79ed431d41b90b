"""
Game constants for Snake.
"""

# Movement directions
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (0, 0) is the top-left cell, y grows downwards
DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game phases
NOT_STARTED = "not_started"
RUNNING = "running"
PAUSED = "paused"
OVER = "over"
PHASES = {NOT_STARTED, RUNNING, PAUSED, OVER}

# Death reasons
DEATH_WALL = "wall"
DEATH_SELF = "self"

# Game settings
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 400
CELL_SIZE = 20
START_HEAD = (5, 10)
START_LENGTH = 3
START_DIRECTION = RIGHT
SCORE_PER_FOOD = 10
BASE_INTERVAL_MS = 150
INTERVAL_STEP_MS = 2
MIN_INTERVAL_MS = 50
