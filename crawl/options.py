"""
Command line options shared by play.py and the tools.
"""

import argparse
import random
import sys
from typing import Optional

import numpy as np

from .floor_gen import DEFAULT_BOUNDS, FloorBounds


def log(message: str) -> None:
    """Log to stderr to keep stdout free for output."""
    print(message, file=sys.stderr)


def add_floor_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducible floors",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Generate every floor with exactly this width (needs --height)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Generate every floor with exactly this height (needs --width)",
    )
    parser.add_argument("--min-width", type=int, default=DEFAULT_BOUNDS.min_width)
    parser.add_argument("--max-width", type=int, default=DEFAULT_BOUNDS.max_width)
    parser.add_argument("--min-height", type=int, default=DEFAULT_BOUNDS.min_height)
    parser.add_argument("--max-height", type=int, default=DEFAULT_BOUNDS.max_height)


def bounds_from_args(args: argparse.Namespace) -> FloorBounds:
    """
    Floor bounds from parsed options.

    Raises:
        ValueError: If only one of --width/--height is given, or the
            bounds are invalid.
    """
    if (args.width is None) != (args.height is None):
        raise ValueError("--width and --height must be given together")
    if args.width is not None:
        return FloorBounds.fixed(args.width, args.height)
    return FloorBounds(
        min_width=args.min_width,
        max_width=args.max_width,
        min_height=args.min_height,
        max_height=args.max_height,
    )


def apply_seed(seed: Optional[int]) -> None:
    """Seed both random sources so runs can be reproduced."""
    if seed is None:
        return
    random.seed(seed)
    np.random.seed(seed)
    log(f"Using random seed: {seed}")


def bounds_or_exit(args: argparse.Namespace) -> FloorBounds:
    """bounds_from_args for entry scripts: a bad flag prints an error and exits with status 1."""
    try:
        return bounds_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
