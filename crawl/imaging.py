"""
Render floors to images for visual inspection.

Images are numpy arrays in OpenCV's BGR channel order so they can be
written straight out with cv2.
"""

from typing import Dict, Optional, Tuple

import cv2
import numpy as np
from PIL import Image as PILImage, ImageDraw, ImageFont

from .floor_gen import Floor
from .grid import Position
from .tiles import CHARACTER_GLYPH, TILE_TO_ASCII, Tile

# Type Definition
Image = np.ndarray

Color = Tuple[int, int, int]

# BGR
TILE_COLORS: Dict[Tile, Color] = {
    Tile.WALL: (96, 96, 96),
    Tile.GROUND: (40, 40, 40),
    Tile.LADDER_UP: (0, 160, 0),
    Tile.LADDER_DOWN: (0, 0, 200),
}
EMPTY_COLOR: Color = (0, 0, 0)
CHARACTER_COLOR: Color = (0, 200, 255)
GLYPH_COLOR: Color = (255, 255, 255)
GRID_COLOR: Color = (64, 64, 64)


def _palette() -> np.ndarray:
    """Colors indexed by tile value, index 0 being an empty cell."""
    palette = np.zeros((max(Tile) + 1, 3), np.uint8)
    palette[0] = EMPTY_COLOR
    for tile, color in TILE_COLORS.items():
        palette[tile] = color
    return palette


def _draw_glyph(image: Image, glyph: str, cell: Position, cell_size: int, font) -> None:
    """Draws a glyph centered in a cell, using Pillow for the text."""
    y0, x0 = cell.y * cell_size, cell.x * cell_size
    # cv2 images are BGR, Pillow's are RGB
    cell_pixels = image[y0 : y0 + cell_size, x0 : x0 + cell_size, ::-1]
    tile_image = PILImage.fromarray(np.ascontiguousarray(cell_pixels))

    draw = ImageDraw.Draw(tile_image)
    left, top, right, bottom = draw.textbbox((0, 0), glyph, font=font)
    text_x = (cell_size - (right - left)) // 2 - left
    text_y = (cell_size - (bottom - top)) // 2 - top
    draw.text((text_x, text_y), glyph, fill=tuple(reversed(GLYPH_COLOR)), font=font)

    rgb = np.array(tile_image, dtype=np.uint8)
    image[y0 : y0 + cell_size, x0 : x0 + cell_size] = rgb[:, :, ::-1]


def render_floor_image(
    floor: Floor,
    player: Optional[Position] = None,
    cell_size: int = 16,
    show_grid: bool = False,
    draw_glyphs: bool = True,
) -> Image:
    """
    Creates an image of the whole floor, one cell_size square per tile.

    Args:
        floor: The floor to draw
        player: If given, the character is drawn over this cell
        cell_size: Size of a tile in pixels
        show_grid: Overlay tile grid lines
        draw_glyphs: Write each tile's ASCII character on top of its color

    Returns:
        A (height * cell_size, width * cell_size, 3) uint8 BGR image
    """
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    height = floor.height * cell_size
    width = floor.width * cell_size

    # One pixel per tile, then scale each pixel up to a cell
    tiles = floor.grid.to_array(floor.width, floor.height)
    cells = _palette()[tiles]
    image: Image = np.repeat(np.repeat(cells, cell_size, axis=0), cell_size, axis=1)

    if player is not None:
        y0, x0 = player.y * cell_size, player.x * cell_size
        image[y0 : y0 + cell_size, x0 : x0 + cell_size] = CHARACTER_COLOR

    if draw_glyphs:
        font = ImageFont.load_default()
        for position, tile in floor.grid.items():
            if tile == Tile.GROUND or position == player:
                continue
            if 0 <= position.x < floor.width and 0 <= position.y < floor.height:
                _draw_glyph(image, TILE_TO_ASCII[tile], position, cell_size, font)
        if player is not None:
            _draw_glyph(image, CHARACTER_GLYPH, player, cell_size, font)

    if show_grid:
        for col in range(floor.width + 1):
            x = col * cell_size
            cv2.line(image, (x, 0), (x, height), GRID_COLOR, 1)
        for row in range(floor.height + 1):
            y = row * cell_size
            cv2.line(image, (0, y), (width, y), GRID_COLOR, 1)

    return image


def save_image(image: Image, path: str) -> None:
    """
    Writes an image to disk, format chosen from the file extension.

    Raises:
        RuntimeError: If OpenCV could not write the file
    """
    if not cv2.imwrite(path, image):
        raise RuntimeError(f"Failed to write image: {path}")
