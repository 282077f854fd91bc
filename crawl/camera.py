"""
Mapping between viewport cells and floor cells.

When a dimension (horizontal or vertical) of the floor fits in the view, the
floor is drawn centered and fixed: the character moves, the map doesn't.
When it doesn't fit, the camera follows the character, keeping it in the
middle of the view, and stops scrolling once an edge of the floor reaches
the matching edge of the view.
"""

from dataclasses import dataclass
from typing import List, Optional

from .floor_gen import Floor
from .grid import Position
from .tiles import CHARACTER_GLYPH, EMPTY_GLYPH, glyph_for


def to_world_coord(
    view_coordinate: int,
    player_coordinate: int,
    view_length: int,
    map_length: int,
) -> Optional[int]:
    """
    Convert a coordinate along one axis of the view to the same axis of the map.

    Args:
        view_coordinate: Cell index along the axis, 0 at the view's start edge
        player_coordinate: The character's map coordinate along the axis
        view_length: Number of cells of the view along the axis
        map_length: Number of cells of the map along the axis

    Returns:
        The map coordinate, or None when the view cell lies in the padding
        before the start of a centered map.
    """
    half_view = view_length // 2

    if map_length <= view_length:
        # The whole map fits: center it
        world = view_coordinate + map_length // 2 - half_view
        if world < 0:
            return None
        return world

    if player_coordinate <= half_view:
        # Near the start edge: pin the map's origin to the view's origin
        return view_coordinate

    if player_coordinate >= map_length - half_view:
        # Near the far edge: pin the map's far edge to the view's far edge
        return view_coordinate + map_length - view_length

    # Scrollable middle: keep the character centered
    return view_coordinate + player_coordinate - half_view


def view_to_world(
    view_x: int,
    view_y: int,
    player: Position,
    view_width: int,
    view_height: int,
    map_width: int,
    map_height: int,
) -> Optional[Position]:
    """Apply to_world_coord on both axes. None if either axis is off-map."""
    x = to_world_coord(view_x, player.x, view_width, map_width)
    y = to_world_coord(view_y, player.y, view_height, map_height)
    if x is None or y is None:
        return None
    return Position(x=x, y=y)


@dataclass
class Viewport:
    """A rectangle of terminal cells that shows part of the current floor."""

    width: int
    height: int

    def to_world(self, view_x: int, view_y: int, player: Position, floor: Floor) -> Optional[Position]:
        return view_to_world(
            view_x, view_y, player, self.width, self.height, floor.width, floor.height
        )

    def glyph_at(self, view_x: int, view_y: int, player: Position, floor: Floor) -> str:
        """
        The character to draw at a view cell.

        The character overlay wins over whatever tile is stored under it.
        """
        position = self.to_world(view_x, view_y, player, floor)
        if position is None:
            return EMPTY_GLYPH
        if position == player:
            return CHARACTER_GLYPH
        return glyph_for(floor.tile_at(position))

    def rows(self, player: Position, floor: Floor) -> List[str]:
        """Render the visible part of the floor as one string per view row."""
        rows: List[str] = []
        for view_y in range(self.height):
            row = ""
            for view_x in range(self.width):
                row += self.glyph_at(view_x, view_y, player, floor)
            rows.append(row)
        return rows
