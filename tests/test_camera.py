"""Unit tests for the viewport to world coordinate mapping."""

import pytest

from crawl.camera import Viewport, to_world_coord, view_to_world
from crawl.floor_gen import Floor
from crawl.grid import Position


class TestMapFitsView:
    """The whole map fits: it is centered and doesn't scroll."""

    @pytest.mark.parametrize("player", [1, 5, 8])
    def test_every_view_cell_uses_centering(self, player: int):
        """With a 10 cell map in a 20 cell view, the map starts at view cell 5."""
        for view in range(20):
            expected = view + 10 // 2 - 20 // 2
            result = to_world_coord(view, player, view_length=20, map_length=10)
            if expected < 0:
                assert result is None
            else:
                assert result == expected

    def test_padding_before_map_is_off_map(self):
        assert to_world_coord(0, 3, view_length=20, map_length=10) is None
        assert to_world_coord(4, 3, view_length=20, map_length=10) is None
        assert to_world_coord(5, 3, view_length=20, map_length=10) == 0

    def test_same_size_map_is_identity(self):
        for view in range(12):
            assert to_world_coord(view, 6, view_length=12, map_length=12) == view

    def test_odd_sizes_round_down(self):
        # 7 // 2 - 11 // 2 = 3 - 5 = -2
        assert to_world_coord(1, 0, view_length=11, map_length=7) is None
        assert to_world_coord(2, 0, view_length=11, map_length=7) == 0
        assert to_world_coord(8, 0, view_length=11, map_length=7) == 6

    def test_player_position_is_ignored(self):
        results = {to_world_coord(9, player, 20, 10) for player in range(10)}
        assert results == {4}


class TestMapLargerThanView:
    """The map is larger than the view: the camera follows the player."""

    def test_near_start_edge_pins_origin(self):
        assert to_world_coord(0, 5, view_length=20, map_length=100) == 0
        assert to_world_coord(19, 5, view_length=20, map_length=100) == 19

    def test_start_edge_boundary(self):
        """The player exactly half a view from the start still pins the origin."""
        assert to_world_coord(0, 10, view_length=20, map_length=100) == 0
        assert to_world_coord(0, 11, view_length=20, map_length=100) == 1

    def test_near_far_edge_pins_far_edge(self):
        assert to_world_coord(19, 95, view_length=20, map_length=100) == 99
        assert to_world_coord(0, 95, view_length=20, map_length=100) == 80

    def test_far_edge_boundary(self):
        assert to_world_coord(19, 90, view_length=20, map_length=100) == 99
        assert to_world_coord(19, 89, view_length=20, map_length=100) == 98

    def test_middle_centers_player(self):
        assert to_world_coord(10, 50, view_length=20, map_length=100) == 50
        assert to_world_coord(0, 50, view_length=20, map_length=100) == 40

    @pytest.mark.parametrize("player", range(100))
    def test_player_always_visible(self, player: int):
        """Whatever rule applies, some view cell shows the player."""
        shown = [to_world_coord(view, player, 20, 100) for view in range(20)]
        assert player in shown

    @pytest.mark.parametrize("player", range(100))
    def test_never_off_map(self, player: int):
        """A scrolling map always fills the view."""
        for view in range(20):
            world = to_world_coord(view, player, 20, 100)
            assert world is not None
            assert 0 <= world < 100


class TestViewToWorld:
    """Tests for the two axis helper."""

    def test_axes_are_independent(self):
        # x fits and is centered, y scrolls around the player
        position = view_to_world(
            5, 10, Position(3, 50),
            view_width=20, view_height=20, map_width=10, map_height=100,
        )
        assert position == Position(0, 50)

    def test_off_map_on_either_axis(self):
        assert view_to_world(0, 10, Position(3, 50), 20, 20, 10, 100) is None
        assert view_to_world(5, 0, Position(3, 3), 20, 20, 10, 10) is None


class TestViewportRows:
    """Tests for rendering the visible map as text."""

    FLOOR = Floor.from_ascii([
        "#####",
        "#..>#",
        "#...#",
        "#####",
    ])

    def test_small_floor_is_centered(self):
        viewport = Viewport(width=7, height=6)
        rows = viewport.rows(Position(1, 1), self.FLOOR)

        assert rows == [
            "       ",
            " ##### ",
            " #@.↓# ",
            " #...# ",
            " ##### ",
            "       ",
        ]

    def test_character_drawn_over_ladder(self):
        viewport = Viewport(width=5, height=4)
        rows = viewport.rows(Position(3, 1), self.FLOOR)

        assert rows[1] == "#..@#"

    def test_large_floor_scrolls(self):
        floor = Floor.from_ascii(["." * 30])
        viewport = Viewport(width=10, height=1)

        assert viewport.rows(Position(2, 0), floor) == ["..@......."]
        assert viewport.rows(Position(15, 0), floor) == [".....@...."]
        assert viewport.rows(Position(28, 0), floor) == ["........@."]

    def test_to_world(self):
        viewport = Viewport(width=7, height=6)
        assert viewport.to_world(0, 0, Position(1, 1), self.FLOOR) is None
        assert viewport.to_world(1, 1, Position(1, 1), self.FLOOR) == Position(0, 0)
