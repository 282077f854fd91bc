"""Floor generation, camera and navigation for a ladder dungeon crawl."""

from crawl.tiles import (
    Tile,
    WALKABLE_TILES,
    CHARACTER_GLYPH,
    TILE_TO_GLYPH,
    ASCII_TO_TILE,
    is_walkable,
)
from crawl.grid import Position, Direction, TileGrid
from crawl.floor_gen import (
    Floor,
    FloorBounds,
    DEFAULT_BOUNDS,
    RandomInt,
    generate_floor,
    random_free_position,
)
from crawl.camera import Viewport, to_world_coord, view_to_world
from crawl.world import World, FloorConsistencyError, create_random_world
from crawl.event_system import EventBus, Event, EventData
