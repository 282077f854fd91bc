#!/usr/bin/env python3
"""
Render generated floors as ASCII art for debugging.

Usage:
    uv run tools/render_floor_ascii.py [--floors N] [--seed S] [--width W --height H]
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import crawl
sys.path.insert(0, str(Path(__file__).parent.parent))

from crawl.floor_gen import generate_floor
from crawl.options import add_floor_options, apply_seed, bounds_or_exit
from crawl.tiles import TILE_TO_GLYPH


def main():
    parser = argparse.ArgumentParser(description="Render floors as ASCII art")
    parser.add_argument("--floors", "-n", type=int, default=1, help="Number of floors to generate")
    add_floor_options(parser)
    args = parser.parse_args()

    bounds = bounds_or_exit(args)
    apply_seed(args.seed)

    for depth in range(args.floors):
        floor = generate_floor(depth, bounds=bounds)
        print(f"--- Floor {depth} ---")
        print("\n".join(floor.grid.to_ascii(floor.width, floor.height, TILE_TO_GLYPH)))

        # Print some debug info
        print(f"Size: {floor.width}x{floor.height} tiles")
        print(f"Ladder down: {floor.ladder_down()}")
        if depth > 0:
            print(f"Ladder up: {floor.ladder_up()}")
        print()


if __name__ == "__main__":
    main()
