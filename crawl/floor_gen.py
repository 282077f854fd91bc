"""
Floor Generation Algorithm
==========================

Every floor is a single rectangular room covering the whole map.

1. Pick a width and height uniformly within the configured bounds
2. Put walls along the four borders, fill the interior with ground
3. Place the ladder down on a random free cell
4. On every floor but the first, place the ladder up on another random free cell

A free cell is one that is empty or plain ground: walls and ladders
already placed are skipped by retrying, so the two ladders never collide.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np

from .grid import Position, TileGrid
from .tiles import Tile

# A uniform integer generator, inclusive on both ends: random_int(low, high)
RandomInt = Callable[[int, int], int]

# The smallest room with at least two free interior cells (2x2 interior)
MIN_ROOM_SIZE = 4


def default_random_int(low: int, high: int) -> int:
    """Uniform integer in [low, high] drawn from numpy's global generator."""
    return int(np.random.randint(low, high + 1))


@dataclass(frozen=True)
class FloorBounds:
    """Size limits for generated floors, walls included."""

    min_width: int
    max_width: int
    min_height: int
    max_height: int

    def __post_init__(self) -> None:
        if self.min_width < MIN_ROOM_SIZE or self.min_height < MIN_ROOM_SIZE:
            raise ValueError(
                f"Floors must be at least {MIN_ROOM_SIZE}x{MIN_ROOM_SIZE}, "
                f"got minimum {self.min_width}x{self.min_height}"
            )
        if self.min_width > self.max_width:
            raise ValueError(f"min_width {self.min_width} exceeds max_width {self.max_width}")
        if self.min_height > self.max_height:
            raise ValueError(f"min_height {self.min_height} exceeds max_height {self.max_height}")

    @classmethod
    def fixed(cls, width: int, height: int) -> "FloorBounds":
        """Bounds that always produce floors of exactly this size."""
        return cls(min_width=width, max_width=width, min_height=height, max_height=height)


DEFAULT_BOUNDS = FloorBounds(min_width=20, max_width=100, min_height=10, max_height=50)


@dataclass
class Floor:
    depth: int
    width: int
    height: int
    grid: TileGrid = field(default_factory=TileGrid)

    def tile_at(self, position: Position) -> Optional[Tile]:
        return self.grid.tile_at(position)

    def ladder_up(self) -> Optional[Position]:
        return self.grid.find_first(Tile.LADDER_UP)

    def ladder_down(self) -> Optional[Position]:
        return self.grid.find_first(Tile.LADDER_DOWN)

    def is_border(self, position: Position) -> bool:
        return (
            position.x == 0
            or position.y == 0
            or position.x == self.width - 1
            or position.y == self.height - 1
        )

    @classmethod
    def from_ascii(cls, lines: Sequence[str], depth: int = 0) -> "Floor":
        """
        Build a hand-authored floor from ASCII art.

        The floor is not checked against the invariants of generated floors,
        which lets tests set up unusual layouts.
        """
        grid = TileGrid.from_ascii(lines)
        width = len(lines[0]) if lines else 0
        return cls(depth=depth, width=width, height=len(lines), grid=grid)

    def to_ascii(self) -> List[str]:
        return self.grid.to_ascii(self.width, self.height)


def random_free_position(floor: Floor, random_int: RandomInt) -> Position:
    """
    Return a random position on the floor that is empty or plain ground.

    Keeps drawing until one is found; the floor bounds guarantee there is
    always room for it.
    """
    while True:
        position = Position(
            x=random_int(0, floor.width - 1),
            y=random_int(0, floor.height - 1),
        )
        tile = floor.tile_at(position)
        if tile is None or tile == Tile.GROUND:
            return position


def generate_floor(
    depth: int,
    bounds: FloorBounds = DEFAULT_BOUNDS,
    random_int: Optional[RandomInt] = None,
) -> Floor:
    """
    Generates the floor at the given depth.

    Parameters:
        depth: Zero-based floor index; floor 0 gets no ladder up
        bounds: Size limits for the room
        random_int: Uniform integer source, for deterministic tests

    Returns:
        A Floor satisfying the border and ladder invariants
    """
    if depth < 0:
        raise ValueError(f"Floor depth must be non-negative, got {depth}")

    random_int = random_int or default_random_int

    width = random_int(bounds.min_width, bounds.max_width)
    height = random_int(bounds.min_height, bounds.max_height)
    floor = Floor(depth=depth, width=width, height=height)

    for x in range(width):
        for y in range(height):
            position = Position(x=x, y=y)
            tile = Tile.WALL if floor.is_border(position) else Tile.GROUND
            floor.grid.insert(position, tile)

    floor.grid.insert(random_free_position(floor, random_int), Tile.LADDER_DOWN)
    if depth > 0:
        floor.grid.insert(random_free_position(floor, random_int), Tile.LADDER_UP)

    return floor
