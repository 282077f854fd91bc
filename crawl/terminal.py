"""
Curses frontend: lays out the screen, draws the world and turns key
presses into moves.

Screen layout:

    +- log | help -------------+ +- warrior@depth.x.y ----------------+
    |                          | |                                    |
    | (latest messages)        | |            (the map)               |
    |                          | |                                    |
    +--------------------------+ |                                    |
          quit  reset            +------------------------------------+
"""

import curses
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Dict, List, Optional

from .camera import Viewport
from .event_system import EventBus, EventData, Event
from .floor_gen import DEFAULT_BOUNDS, FloorBounds, RandomInt
from .grid import Direction
from .world import World

PANEL_WIDTH = 30
MENU_HEIGHT = 2
# A box needs its two border cells plus at least one cell of content
MIN_BOX_SIZE = 3
LOG_LENGTH = 100

TOO_SMALL_MESSAGE = "Terminal is too small, resize or press q to quit."
PANEL_TITLE = " log | help "
MENU_TEXT = "quit  reset"


class Action(Enum):
    """Things a key press can ask for."""

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    QUIT = auto()
    RESET = auto()


# Arrows and vi keys both move
KEY_ACTIONS: Dict[int, Action] = {
    curses.KEY_UP: Action.MOVE_UP,
    curses.KEY_DOWN: Action.MOVE_DOWN,
    curses.KEY_LEFT: Action.MOVE_LEFT,
    curses.KEY_RIGHT: Action.MOVE_RIGHT,
    ord("k"): Action.MOVE_UP,
    ord("j"): Action.MOVE_DOWN,
    ord("h"): Action.MOVE_LEFT,
    ord("l"): Action.MOVE_RIGHT,
    ord("q"): Action.QUIT,
    ord("Q"): Action.QUIT,
    ord("r"): Action.RESET,
    ord("R"): Action.RESET,
}

ACTION_DIRECTIONS: Dict[Action, Direction] = {
    Action.MOVE_UP: Direction.UP,
    Action.MOVE_DOWN: Direction.DOWN,
    Action.MOVE_LEFT: Direction.LEFT,
    Action.MOVE_RIGHT: Direction.RIGHT,
}

HELP_LINES = [
    "arrows/hjkl  move",
    "↓ ladder down, ↑ ladder up",
    "q  quit   r  reset",
]


def key_to_action(key: int) -> Optional[Action]:
    return KEY_ACTIONS.get(key)


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells; x is the column, y the row."""

    x: int
    y: int
    width: int
    height: int

    def inner(self) -> "Rect":
        """The area inside a one cell border."""
        return Rect(self.x + 1, self.y + 1, self.width - 2, self.height - 2)


@dataclass(frozen=True)
class Layout:
    panel: Rect
    menu: Rect
    map: Rect


def compute_layout(rows: int, cols: int) -> Optional[Layout]:
    """
    Split the terminal into the log panel, the menu line and the map box.

    Returns None when the terminal is too small to fit all three.
    """
    map_width = cols - PANEL_WIDTH
    panel_height = rows - MENU_HEIGHT
    if map_width < MIN_BOX_SIZE or panel_height < MIN_BOX_SIZE:
        return None

    return Layout(
        panel=Rect(0, 0, PANEL_WIDTH, panel_height),
        menu=Rect(0, panel_height, PANEL_WIDTH, MENU_HEIGHT),
        map=Rect(PANEL_WIDTH, 0, map_width, rows),
    )


def map_title(world: World) -> str:
    return f" warrior@{world.depth}.{world.position.x}.{world.position.y} "


def describe_event(event_data: EventData) -> Optional[str]:
    """Turn a world event into a line for the log panel, or None to skip it."""
    kwargs = event_data.kwargs
    event = event_data.event
    if event == Event.WORLD_START:
        return f"You enter floor {kwargs['depth']}."
    if event == Event.WORLD_RESET:
        return "The dungeon shifts around you."
    if event == Event.FLOOR_CREATED:
        return f"Floor {kwargs['depth']} is {kwargs['width']}x{kwargs['height']}."
    if event == Event.FLOOR_DESCENDED:
        return f"You climb down to floor {kwargs['depth']}."
    if event == Event.FLOOR_ASCENDED:
        return f"You climb up to floor {kwargs['depth']}."
    if event == Event.MOVE_BLOCKED and kwargs.get("reason") == "wall":
        return "A wall blocks the way."
    return None


class MessageLog:
    """The latest messages, newest last."""

    def __init__(self, max_length: int = LOG_LENGTH) -> None:
        self.messages: Deque[str] = deque(maxlen=max_length)

    def add(self, message: str) -> None:
        self.messages.append(message)

    def handle(self, event_data: EventData) -> None:
        """Event bus handler."""
        message = describe_event(event_data)
        if message is not None:
            self.add(message)

    def report_error(self, event_data: EventData, error: Exception) -> None:
        """Error reporter for the bus while curses owns the screen."""
        self.add(f"Error handling {event_data.event.name}: {error}")

    def latest(self, count: int) -> List[str]:
        if count <= 0:
            return []
        return list(self.messages)[-count:]


def dispatch(world: World, action: Action, bounds: FloorBounds = DEFAULT_BOUNDS,
             random_int: Optional[RandomInt] = None) -> bool:
    """
    Apply an action to the world.

    Returns False when the game should stop.
    """
    if action == Action.QUIT:
        return False
    if action == Action.RESET:
        world.reset(bounds=bounds, random_int=random_int)
        return True
    world.move(ACTION_DIRECTIONS[action])
    return True


def _addstr(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        # curses raises after writing to the bottom-right cell
        pass


def draw_box(stdscr, rect: Rect, title: str = "") -> None:
    right = rect.x + rect.width - 1
    bottom = rect.y + rect.height - 1
    horizontal = "─" * (rect.width - 2)

    _addstr(stdscr, rect.y, rect.x, "┌" + horizontal + "┐")
    for y in range(rect.y + 1, bottom):
        _addstr(stdscr, y, rect.x, "│")
        _addstr(stdscr, y, right, "│")
    _addstr(stdscr, bottom, rect.x, "└" + horizontal + "┘")

    if title:
        _addstr(stdscr, rect.y, rect.x + 2, title[: rect.width - 4], curses.A_BOLD)


def draw(stdscr, world: World, log: MessageLog) -> None:
    stdscr.erase()
    rows, cols = stdscr.getmaxyx()
    layout = compute_layout(rows, cols)

    if layout is None:
        _addstr(stdscr, 0, 0, TOO_SMALL_MESSAGE[: max(cols - 1, 0)])
        stdscr.refresh()
        return

    # Log panel: help on top, latest messages below
    draw_box(stdscr, layout.panel, PANEL_TITLE)
    panel = layout.panel.inner()
    lines = HELP_LINES + [""] + log.latest(panel.height - len(HELP_LINES) - 1)
    for offset, line in enumerate(lines[: panel.height]):
        _addstr(stdscr, panel.y + offset, panel.x, line[: panel.width])

    menu = layout.menu
    _addstr(stdscr, menu.y, menu.x + max((menu.width - len(MENU_TEXT)) // 2, 0),
            MENU_TEXT, curses.A_UNDERLINE)

    # Map box
    draw_box(stdscr, layout.map, map_title(world))
    area = layout.map.inner()
    viewport = Viewport(area.width, area.height)
    for offset, row in enumerate(viewport.rows(world.position, world.current_floor)):
        _addstr(stdscr, area.y + offset, area.x, row)

    stdscr.refresh()


def run(
    stdscr,
    world: World,
    bounds: FloorBounds = DEFAULT_BOUNDS,
    random_int: Optional[RandomInt] = None,
) -> None:
    """
    Main loop: draw, wait for a key, apply it. One key, one move.

    Returns when the player quits.
    """
    curses.curs_set(0)
    stdscr.keypad(True)

    log = MessageLog()
    bus = world.event_bus or EventBus()
    world.set_event_bus(bus)
    bus.subscribe_all(log.handle)
    previous_reporter = bus.set_error_reporter(log.report_error)
    log.add(f"You enter floor {world.depth}.")

    try:
        while True:
            draw(stdscr, world, log)
            action = key_to_action(stdscr.getch())
            if action is None:
                continue
            if not dispatch(world, action, bounds=bounds, random_int=random_int):
                break
    finally:
        bus.set_error_reporter(previous_reporter)
