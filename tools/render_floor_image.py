#!/usr/bin/env python3
"""
Render a generated floor to an image file for visual inspection.

Useful for:
- Checking floor sizes and ladder placement
- Debugging the camera against a full view of the floor

Usage:
    uv run tools/render_floor_image.py                    # Floor 0, random seed
    uv run tools/render_floor_image.py --depth 3          # A floor with both ladders
    uv run tools/render_floor_image.py --seed 42          # Reproducible floor
    uv run tools/render_floor_image.py --output my.png    # Custom output path
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from crawl.floor_gen import default_random_int, generate_floor, random_free_position
from crawl.imaging import render_floor_image, save_image
from crawl.options import add_floor_options, apply_seed, bounds_or_exit, log


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a floor to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--depth", "-d",
        type=int,
        default=0,
        help="Depth of the floor to generate (default: 0)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="floor_render.png",
        help="Output image path (default: floor_render.png)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=16,
        help="Size of a tile in pixels (default: 16)",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Overlay a tile grid on the image",
    )
    parser.add_argument(
        "--with-player",
        action="store_true",
        help="Draw the character on a random free cell",
    )
    add_floor_options(parser)

    args = parser.parse_args()

    apply_seed(args.seed)
    bounds = bounds_or_exit(args)

    log(f"Generating floor {args.depth}...")
    floor = generate_floor(args.depth, bounds=bounds)
    log(f"Floor size: {floor.width}x{floor.height} tiles")
    log(f"Ladder down: {floor.ladder_down()}")
    if args.depth > 0:
        log(f"Ladder up: {floor.ladder_up()}")

    player = None
    if args.with_player:
        player = random_free_position(floor, default_random_int)
        log(f"Player: {player}")

    image = render_floor_image(floor, player=player, cell_size=args.cell_size, show_grid=args.show_grid)

    output_path = Path(args.output)
    save_image(image, str(output_path))
    log(f"Saved to: {output_path.absolute()}")


if __name__ == "__main__":
    main()
