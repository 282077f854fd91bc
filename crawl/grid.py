"""
Sparse tile storage for a single floor.

Tiles are kept in a dict keyed by Position rather than in a dense array:
rooms are mostly open ground, and a missing key already means "walkable,
nothing here".
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .tiles import Tile, ASCII_TO_TILE, TILE_TO_ASCII


@dataclass(frozen=True)
class Position:
    """A cell on a floor, measured in tiles. y grows downwards."""

    x: int
    y: int

    def shifted(self, direction: "Direction") -> Optional["Position"]:
        """
        Returns the neighbouring position in the given direction, or None
        if that would take either coordinate below zero.
        """
        dx, dy = direction.step()
        x = self.x + dx
        y = self.y + dy
        if x < 0 or y < 0:
            return None
        return Position(x=x, y=y)


class Direction(Enum):
    """The four directions the player can move in."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    def step(self) -> Tuple[int, int]:
        """Returns the (dx, dy) offset for moving one cell in this direction."""
        steps = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
        }
        return steps[self]


class TileGrid:
    """Mapping from Position to Tile with at most one tile per position."""

    def __init__(self) -> None:
        self._tiles: Dict[Position, Tile] = {}

    def tile_at(self, position: Position) -> Optional[Tile]:
        """Returns the tile stored at position, or None if the cell is empty."""
        return self._tiles.get(position)

    def insert(self, position: Position, tile: Tile) -> None:
        """Stores tile at position, replacing whatever was there."""
        self._tiles[position] = tile

    def find_first(self, tile: Tile) -> Optional[Position]:
        """
        Returns a position holding the given tile, or None if there is none.

        Which position is returned when the tile occurs several times is
        unspecified. Ladders are unique per floor, so for them the answer
        is always the same.
        """
        for position, current in self._tiles.items():
            if current == tile:
                return position
        return None

    def items(self) -> Iterator[Tuple[Position, Tile]]:
        return iter(self._tiles.items())

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, position: object) -> bool:
        return position in self._tiles

    @classmethod
    def from_ascii(cls, lines: Sequence[str]) -> "TileGrid":
        """
        Build a grid from rows of ASCII art (see tiles.ASCII_TO_TILE).

        Spaces leave the cell empty.

        Raises:
            ValueError: If the rows have different lengths or contain an
                unknown character.
        """
        grid = cls()
        if not lines:
            return grid

        width = len(lines[0])
        for y, line in enumerate(lines):
            if len(line) != width:
                raise ValueError(
                    f"All rows must have equal width; row 0 has {width}, row {y} has {len(line)}"
                )
            for x, char in enumerate(line):
                if char not in ASCII_TO_TILE:
                    raise ValueError(f"Unknown tile character {char!r} at ({x}, {y})")
                tile = ASCII_TO_TILE[char]
                if tile is not None:
                    grid.insert(Position(x=x, y=y), tile)
        return grid

    def to_ascii(
        self,
        width: int,
        height: int,
        characters: Mapping[Tile, str] = TILE_TO_ASCII,
        empty: str = " ",
    ) -> List[str]:
        """
        One string per row. With the default characters this is the
        inverse of from_ascii; pass TILE_TO_GLYPH for the display glyphs.
        """
        rows: List[str] = []
        for y in range(height):
            row = ""
            for x in range(width):
                tile = self._tiles.get(Position(x=x, y=y))
                row += characters[tile] if tile is not None else empty
            rows.append(row)
        return rows

    def to_array(self, width: int, height: int) -> np.ndarray:
        """
        Dense (height, width) array of tile values, 0 where a cell is empty.

        Tiles outside the given size are ignored.
        """
        array = np.zeros((height, width), dtype=int)
        for position, tile in self._tiles.items():
            if 0 <= position.x < width and 0 <= position.y < height:
                array[position.y, position.x] = int(tile)
        return array

    def __repr__(self) -> str:
        return f"TileGrid({len(self._tiles)} tiles)"
