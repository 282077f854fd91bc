from typing import Any, Callable, List, Optional

from .event_system import EventBus, Event
from .floor_gen import (
    DEFAULT_BOUNDS,
    Floor,
    FloorBounds,
    RandomInt,
    default_random_int,
    generate_floor,
    random_free_position,
)
from .grid import Direction, Position
from .tiles import Tile, is_walkable

# Creates the floor for a given depth the first time the player gets there
FloorFactory = Callable[[int], Floor]


class FloorConsistencyError(RuntimeError):
    """A floor is missing the ladder a transition needs. Generation bug."""


class World:
    """
    The stack of floors and where the player is in it.

    Floors are only ever appended: the floor at depth d is created the
    first time the player climbs down to it and kept from then on, so
    going back to a floor finds it exactly as it was left.
    """

    def __init__(
        self,
        floors: List[Floor],
        position: Position,
        depth: int = 0,
        floor_factory: Optional[FloorFactory] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        if not floors:
            raise ValueError("A world needs at least one floor")
        if not 0 <= depth < len(floors):
            raise ValueError(f"Depth {depth} is outside the {len(floors)} known floors")

        self.floors: List[Floor] = floors
        self.depth: int = depth
        self.position: Position = position
        self.floor_factory: FloorFactory = floor_factory or generate_floor
        self.event_bus: Optional[EventBus] = event_bus

        self._emit(Event.WORLD_START, depth=self.depth, x=position.x, y=position.y)

    def set_event_bus(self, bus: EventBus) -> None:
        """Set the event bus for this world."""
        self.event_bus = bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        """Emit an event if an event bus is configured."""
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    @property
    def current_floor(self) -> Floor:
        return self.floors[self.depth]

    @property
    def width(self) -> int:
        return self.current_floor.width

    @property
    def height(self) -> int:
        return self.current_floor.height

    @property
    def deepest_depth(self) -> int:
        """Deepest floor visited so far."""
        return len(self.floors) - 1

    def tile_at(self, position: Position) -> Optional[Tile]:
        """Tile at position on the current floor (None if empty)."""
        return self.current_floor.tile_at(position)

    def move_up(self) -> bool:
        return self.move(Direction.UP)

    def move_down(self) -> bool:
        return self.move(Direction.DOWN)

    def move_left(self) -> bool:
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        return self.move(Direction.RIGHT)

    def move(self, direction: Direction) -> bool:
        """
        Move the player one cell in the given direction.

        Walking into a wall or off the top/left edge of the map does nothing.
        Stepping onto a ladder takes the player to the matching ladder of
        the floor above or below within the same move.

        Returns:
            True if the player's position or floor changed.
        """
        dest = self.position.shifted(direction)
        if dest is None:
            self._emit(Event.MOVE_BLOCKED, x=self.position.x, y=self.position.y, reason="edge")
            return False

        tile = self.tile_at(dest)
        if not is_walkable(tile):
            self._emit(Event.MOVE_BLOCKED, x=dest.x, y=dest.y, reason="wall")
            return False
        if tile == Tile.LADDER_DOWN:
            self._descend()
            return True
        if tile == Tile.LADDER_UP:
            self._ascend()
            return True

        self.position = dest
        self._emit(Event.PLAYER_MOVED, x=dest.x, y=dest.y)
        return True

    def _descend(self) -> None:
        depth = self.depth + 1
        if depth == len(self.floors):
            # haven't been to this floor before, need to create a new one
            floor = self.floor_factory(depth)
            self.floors.append(floor)
            self._emit(Event.FLOOR_CREATED, depth=depth, width=floor.width, height=floor.height)

        landing = self.floors[depth].ladder_up()
        if landing is None:
            raise FloorConsistencyError(f"Floor {depth} has no ladder up")

        self.depth = depth
        self.position = landing
        self._emit(Event.FLOOR_DESCENDED, depth=depth, x=landing.x, y=landing.y)

    def _ascend(self) -> None:
        if self.depth == 0:
            raise FloorConsistencyError("Floor 0 has a ladder up")

        depth = self.depth - 1
        landing = self.floors[depth].ladder_down()
        if landing is None:
            raise FloorConsistencyError(f"Floor {depth} has no ladder down")

        self.depth = depth
        self.position = landing
        self._emit(Event.FLOOR_ASCENDED, depth=depth, x=landing.x, y=landing.y)

    def reset(
        self,
        bounds: FloorBounds = DEFAULT_BOUNDS,
        random_int: Optional[RandomInt] = None,
    ) -> None:
        """Throw away every floor and start over on a fresh first floor."""
        random_int = random_int or default_random_int
        first_floor = generate_floor(0, bounds=bounds, random_int=random_int)
        self.floors = [first_floor]
        self.depth = 0
        self.position = random_free_position(first_floor, random_int)
        self.floor_factory = _floor_factory(bounds, random_int)

        self._emit(Event.WORLD_RESET)
        self._emit(Event.WORLD_START, depth=0, x=self.position.x, y=self.position.y)


def _floor_factory(bounds: FloorBounds, random_int: RandomInt) -> FloorFactory:
    def create(depth: int) -> Floor:
        return generate_floor(depth, bounds=bounds, random_int=random_int)

    return create


def create_random_world(
    bounds: FloorBounds = DEFAULT_BOUNDS,
    random_int: Optional[RandomInt] = None,
    event_bus: Optional[EventBus] = None,
) -> World:
    """
    Factory function to create a world with a randomly generated first floor.

    The player starts on a random free cell of floor 0 (never on a wall or
    the ladder).

    Parameters:
        bounds: Size limits for every generated floor
        random_int: Uniform integer source shared by all floor generation
        event_bus: Optional bus to report world events on

    Returns:
        A World at depth 0
    """
    random_int = random_int or default_random_int
    first_floor = generate_floor(0, bounds=bounds, random_int=random_int)
    position = random_free_position(first_floor, random_int)
    return World(
        [first_floor],
        position,
        floor_factory=_floor_factory(bounds, random_int),
        event_bus=event_bus,
    )
