import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from snake_game.config import GameConfig, load_config
from snake_game.controller import GameController
from snake_game.domain.constants import RUNNING
from snake_game.domain.game_state import GameState
from snake_game.engine import SnakeGame
from snake_game.players import RandomPlayer
from snake_game.services.frame_renderer import FrameRenderer
from snake_game.services.scheduler import ManualScheduler, ScheduleLibScheduler
from snake_game.services.text_renderer import TextRenderer

logger = logging.getLogger(__name__)


class RenderFanout:
    """Hands each state to several renderers in order."""

    def __init__(self, renderers: List):
        self.renderers = [r for r in renderers if r is not None]

    def __call__(self, state: GameState):
        for renderer in self.renderers:
            renderer(state)


# -------------------------------
# Headless Run
# -------------------------------

def run_headless(
    config: GameConfig,
    seed: Optional[int] = None,
    max_ticks: Optional[int] = None,
    realtime: bool = True,
    quiet: bool = False,
    snapshot: Optional[str] = None
) -> Dict[str, Any]:
    """
    Plays one round with the RandomPlayer autopilot and no window.

    Args:
        config: game settings
        seed: seeds both food placement and the autopilot
        max_ticks: stop early after this many ticks
        realtime: tick on the wall clock (``schedule``) instead of a virtual one
        quiet: don't print the board every tick
        snapshot: write the final frame to this image path

    Returns:
        A dictionary summarizing the round (score, ticks, length, death reason).
    """
    frame_renderer = FrameRenderer(cell_size=config.cell_size) if snapshot else None
    renderer = RenderFanout([TextRenderer(quiet=quiet), frame_renderer])

    game = SnakeGame(config, renderer=renderer, seed=seed)
    scheduler = ScheduleLibScheduler() if realtime else ManualScheduler()
    player_seed = None if seed is None else seed + 1
    controller = GameController(game, scheduler, player=RandomPlayer(seed=player_seed))

    controller.initialize()
    controller.toggle()

    def reached_limit() -> bool:
        return max_ticks is not None and game.tick_number >= max_ticks

    if realtime:
        scheduler.run_forever(should_stop=reached_limit)
    else:
        while scheduler.active and not reached_limit():
            scheduler.fire()

    stopped_early = game.phase == RUNNING
    if stopped_early:
        controller.toggle()
        logger.info(f"Stopped after {game.tick_number} ticks")

    if snapshot:
        frame_renderer.save(snapshot)

    return {
        "score": game.score,
        "ticks": game.tick_number,
        "length": len(game.snake),
        "phase": game.phase,
        "death_reason": game.snake.death_reason,
        "interval_ms": game.interval_ms,
        "seed": seed,
    }


# -------------------------------
# Main Entry Point
# -------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Snake in a pygame window, or let the autopilot play in the terminal."
    )
    parser.add_argument("--headless", action="store_true",
                        help="No window: the random autopilot plays and the board is printed")
    parser.add_argument("--fast", action="store_true",
                        help="With --headless, tick as fast as possible instead of in real time")
    parser.add_argument("--quiet", action="store_true",
                        help="With --headless, don't print the board every tick")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for food placement and the autopilot")
    parser.add_argument("--max-ticks", type=int, required=False, default=None,
                        help="Stop a headless round after this many ticks")
    parser.add_argument("--snapshot", type=str, required=False, default=None,
                        help="Save the final frame of a headless round as an image (e.g. final.png)")
    parser.add_argument("--canvas-width", type=int, required=False, default=None,
                        help="Play surface width in pixels")
    parser.add_argument("--canvas-height", type=int, required=False, default=None,
                        help="Play surface height in pixels")
    parser.add_argument("--cell-size", type=int, required=False, default=None,
                        help="Pixels per grid cell")
    parser.add_argument("--log-level", type=str, required=False, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config().with_overrides(
            canvas_width=args.canvas_width,
            canvas_height=args.canvas_height,
            cell_size=args.cell_size,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.max_ticks is not None and args.max_ticks < 0:
        parser.error("--max-ticks must not be negative")

    if not args.headless:
        if args.snapshot or args.max_ticks is not None:
            parser.error("--snapshot and --max-ticks only apply with --headless")
        # Imported here so headless runs never need a display
        from snake_game.services.pygame_frontend import run_window
        score = run_window(config, seed=args.seed)
        print(f"Final score: {score}")
        return 0

    result = run_headless(
        config,
        seed=args.seed,
        max_ticks=args.max_ticks,
        realtime=not args.fast,
        quiet=args.quiet,
        snapshot=args.snapshot,
    )

    print("\nRound Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
