from enum import IntEnum
from typing import Dict, Optional


class Tile(IntEnum):
    """
    Tile kinds stored in a floor's tile grid.

    The character is not a tile: it is drawn over the grid at the
    player's position. A cell with no stored tile is empty, which is
    distinct from GROUND but just as walkable.
    """

    # Values start at 1 so that 0 can mean "no tile" in array exports
    WALL = 1
    GROUND = 2
    LADDER_UP = 3
    LADDER_DOWN = 4


WALKABLE_TILES = {
    Tile.GROUND,
    Tile.LADDER_UP,
    Tile.LADDER_DOWN,
}

LADDER_TILES = {Tile.LADDER_UP, Tile.LADDER_DOWN}

CHARACTER_GLYPH = "@"
EMPTY_GLYPH = " "

TILE_TO_GLYPH: Dict[Tile, str] = {
    Tile.WALL: "#",
    Tile.GROUND: ".",
    Tile.LADDER_UP: "↑",
    Tile.LADDER_DOWN: "↓",
}

# ASCII dialect for hand-authored floors
# ======================================
#
#   # = wall
#   . = ground
#   < = ladder up
#   > = ladder down
#   (space) = no tile
#
# The display arrows are accepted too so rendered floors can be read back.
ASCII_TO_TILE: Dict[str, Optional[Tile]] = {
    "#": Tile.WALL,
    ".": Tile.GROUND,
    "<": Tile.LADDER_UP,
    ">": Tile.LADDER_DOWN,
    "↑": Tile.LADDER_UP,
    "↓": Tile.LADDER_DOWN,
    " ": None,
}

TILE_TO_ASCII: Dict[Tile, str] = {
    Tile.WALL: "#",
    Tile.GROUND: ".",
    Tile.LADDER_UP: "<",
    Tile.LADDER_DOWN: ">",
}


def is_walkable(tile: Optional[Tile]) -> bool:
    """Empty cells and every non-wall tile can be walked on."""
    return tile is None or tile in WALKABLE_TILES


def glyph_for(tile: Optional[Tile]) -> str:
    if tile is None:
        return EMPTY_GLYPH
    return TILE_TO_GLYPH[tile]
