"""Command-line entry point: ``python -m grid_platformer``."""

import argparse
import logging
import sys

from .config import CONFIGS, get_config
from .engine import PlatformerEngine
from .levels import GAME_LEVELS, PlanFileError, load_plans

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure root logging for the game."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grid_platformer", description="Play the tile platformer.")
    parser.add_argument("--preset", default="default", choices=sorted(CONFIGS),
                        help="Physics/config preset")
    parser.add_argument("--levels", default=None,
                        help="JSON plan file (defaults to the built-in levels)")
    parser.add_argument("--start-level", type=int, default=0,
                        help="Index of the first level to play")
    parser.add_argument("--log-level", default="info",
                        choices=["debug", "info", "warning", "error"])
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        plans = load_plans(args.levels) if args.levels else GAME_LEVELS
    except (OSError, PlanFileError) as e:
        logger.error("Could not load levels: %s", e)
        return 1

    if not 0 <= args.start_level < len(plans):
        logger.error("Start level %d out of range (0-%d)", args.start_level, len(plans) - 1)
        return 1

    engine = PlatformerEngine(get_config(args.preset), plans=plans, start_level=args.start_level)
    try:
        engine.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
