#!/usr/bin/env python3
"""
Play the crawl in the terminal.

Usage:
    uv run play.py                         # Random floor sizes
    uv run play.py --seed 42               # Reproducible floors
    uv run play.py --width 40 --height 15  # Every floor 40x15

Keys: arrows or h/j/k/l to move, r to reset, q to quit.
"""

import argparse
import curses

from crawl.event_system import EventBus
from crawl.options import add_floor_options, apply_seed, bounds_or_exit, log
from crawl.terminal import run
from crawl.world import create_random_world


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terminal dungeon crawl",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_floor_options(parser)
    return parser


def main() -> None:
    args = build_parser().parse_args()

    bounds = bounds_or_exit(args)

    apply_seed(args.seed)

    world = create_random_world(bounds=bounds, event_bus=EventBus())
    curses.wrapper(run, world, bounds)

    log(f"Left the dungeon at floor {world.depth} (deepest: {world.deepest_depth}).")


if __name__ == "__main__":
    main()
