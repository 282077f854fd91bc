"""Tests for the curses frontend, driven through a fake screen."""

import curses
from typing import Dict, List, Tuple

import pytest

from crawl.event_system import Event, EventBus, EventData, report_to_stderr
from crawl.floor_gen import Floor, FloorBounds
from crawl.grid import Position
from crawl.terminal import (
    HELP_LINES,
    MENU_TEXT,
    TOO_SMALL_MESSAGE,
    Action,
    Layout,
    MessageLog,
    Rect,
    compute_layout,
    describe_event,
    dispatch,
    draw,
    key_to_action,
    map_title,
    run,
)
from crawl.world import World

from tests.test_floor_generation import SequenceRandom
from tests.test_world_navigation import FIRST_FLOOR


class FakeScreen:
    """Just enough of a curses window to draw on and read keys from."""

    def __init__(self, rows: int, cols: int, keys: List[int] = ()) -> None:
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.writes: Dict[Tuple[int, int], str] = {}
        self.refreshes = 0

    def getmaxyx(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def erase(self) -> None:
        self.writes = {}

    def refresh(self) -> None:
        self.refreshes += 1

    def keypad(self, flag: bool) -> None:
        pass

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        if y >= self.rows or x >= self.cols:
            raise curses.error("addstr() returned ERR")
        self.writes[(y, x)] = text

    def getch(self) -> int:
        return self.keys.pop(0)

    def text(self) -> str:
        return "\n".join(self.writes.values())


def small_world(position: Position = Position(1, 1)) -> World:
    return World([Floor.from_ascii(FIRST_FLOOR)], position, event_bus=EventBus())


class TestLayout:
    """Tests for compute_layout."""

    def test_standard_terminal(self):
        layout = compute_layout(24, 80)

        assert layout == Layout(
            panel=Rect(0, 0, 30, 22),
            menu=Rect(0, 22, 30, 2),
            map=Rect(30, 0, 50, 24),
        )

    @pytest.mark.parametrize("rows,cols", [(4, 80), (24, 32), (2, 10)])
    def test_too_small(self, rows: int, cols: int):
        assert compute_layout(rows, cols) is None

    def test_smallest_fitting_terminal(self):
        layout = compute_layout(5, 33)
        assert layout is not None
        assert layout.map.inner() == Rect(31, 1, 1, 3)

    def test_rect_inner(self):
        assert Rect(2, 3, 10, 5).inner() == Rect(3, 4, 8, 3)


class TestKeys:
    """Tests for key bindings."""

    @pytest.mark.parametrize("key,action", [
        (curses.KEY_UP, Action.MOVE_UP),
        (curses.KEY_DOWN, Action.MOVE_DOWN),
        (curses.KEY_LEFT, Action.MOVE_LEFT),
        (curses.KEY_RIGHT, Action.MOVE_RIGHT),
        (ord("k"), Action.MOVE_UP),
        (ord("j"), Action.MOVE_DOWN),
        (ord("h"), Action.MOVE_LEFT),
        (ord("l"), Action.MOVE_RIGHT),
        (ord("q"), Action.QUIT),
        (ord("r"), Action.RESET),
    ])
    def test_bound_keys(self, key: int, action: Action):
        assert key_to_action(key) == action

    def test_unbound_key(self):
        assert key_to_action(ord("x")) is None


class TestMessages:
    """Tests for the map title and the message log."""

    def test_map_title(self):
        world = small_world(Position(2, 1))
        assert map_title(world) == " warrior@0.2.1 "

    def test_describe_events(self):
        assert describe_event(EventData(Event.FLOOR_DESCENDED, {"depth": 3})) == "You climb down to floor 3."
        assert describe_event(EventData(Event.FLOOR_ASCENDED, {"depth": 2})) == "You climb up to floor 2."
        assert describe_event(EventData(Event.MOVE_BLOCKED, {"reason": "wall"})) == "A wall blocks the way."

    def test_quiet_events(self):
        assert describe_event(EventData(Event.PLAYER_MOVED, {"x": 1, "y": 1})) is None
        assert describe_event(EventData(Event.MOVE_BLOCKED, {"reason": "edge"})) is None

    def test_log_keeps_latest(self):
        log = MessageLog(max_length=3)
        for index in range(5):
            log.add(f"message {index}")

        assert log.latest(2) == ["message 3", "message 4"]
        assert log.latest(10) == ["message 2", "message 3", "message 4"]
        assert log.latest(0) == []

    def test_log_handles_world_events(self):
        world = small_world()
        log = MessageLog()
        world.event_bus.subscribe_all(log.handle)

        world.move_left()
        assert log.latest(1) == ["A wall blocks the way."]


class TestDispatch:
    """Tests for applying actions to the world."""

    def test_quit_stops(self):
        assert dispatch(small_world(), Action.QUIT) is False

    def test_move(self):
        world = small_world()
        assert dispatch(world, Action.MOVE_DOWN) is True
        assert world.position == Position(1, 2)

    def test_reset(self):
        world = small_world()
        random_int = SequenceRandom([6, 6, 3, 3, 1, 2])

        assert dispatch(world, Action.RESET, bounds=FloorBounds.fixed(6, 6), random_int=random_int)
        assert world.width == 6
        assert world.position == Position(1, 2)


class TestDraw:
    """Tests for drawing a frame."""

    def test_too_small_message(self):
        screen = FakeScreen(4, 80)
        draw(screen, small_world(), MessageLog())

        assert list(screen.writes.values()) == [TOO_SMALL_MESSAGE]
        assert screen.refreshes == 1

    def test_frame_shows_character_and_panel(self):
        screen = FakeScreen(24, 80)
        log = MessageLog()
        log.add("hello there")
        draw(screen, small_world(), log)

        text = screen.text()
        assert "@" in text
        assert "warrior@0.1.1" in text
        assert MENU_TEXT in text
        assert "hello there" in text
        for line in HELP_LINES:
            assert line in text

    def test_map_rows_are_drawn_inside_the_box(self):
        screen = FakeScreen(24, 80)
        draw(screen, small_world(), MessageLog())

        map_rows = [text for (y, x), text in screen.writes.items() if x == 31 and len(text) == 48]
        assert len(map_rows) == 22
        assert any("#@.↓#" in row for row in map_rows)


class TestRun:
    """Tests for the main loop."""

    def test_keys_move_until_quit(self, monkeypatch):
        monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
        world = small_world()
        screen = FakeScreen(24, 80, keys=[ord("l"), ord("x"), curses.KEY_DOWN, ord("q")])

        run(screen, world)

        assert world.position == Position(2, 2)
        assert screen.refreshes == 4
        assert screen.keys == []

    def test_handler_errors_go_to_the_log_panel(self, monkeypatch, capsys):
        """While curses owns the screen, nothing may be printed to stderr."""
        monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
        world = small_world()
        world.event_bus.subscribe(Event.PLAYER_MOVED, lambda data: data.kwargs["missing"])
        screen = FakeScreen(24, 80, keys=[ord("l"), ord("q")])

        run(screen, world)

        assert world.position == Position(2, 1)
        assert "Error handling PLAYER_MOVED" in screen.text()
        assert capsys.readouterr().err == ""
        assert world.event_bus.error_reporter is report_to_stderr
