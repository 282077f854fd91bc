"""
Event system for the crawl.

The world reports everything that happens to the player on an event bus.
Frontends subscribe to it to show messages.
"""

import sys
from collections import defaultdict
from enum import Enum, auto
from typing import Callable, Any, Dict, List, Optional
from dataclasses import dataclass, field


class Event(Enum):
    """Event types that can occur while crawling."""

    # World lifecycle
    WORLD_START = auto()  # kwargs: depth, x, y
    WORLD_RESET = auto()

    # Player movement events
    PLAYER_MOVED = auto()  # kwargs: x, y
    MOVE_BLOCKED = auto()  # kwargs: x, y, reason ("wall" or "edge")

    # Floor events
    FLOOR_CREATED = auto()  # kwargs: depth, width, height
    FLOOR_DESCENDED = auto()  # kwargs: depth, x, y
    FLOOR_ASCENDED = auto()  # kwargs: depth, x, y


@dataclass
class EventData:
    """What happened, and the details the emitter attached to it."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.kwargs:
            kwargs_str = ", ".join(f"{k}={v}" for k, v in self.kwargs.items())
            return f"EventData({self.event.name}, {kwargs_str})"
        return f"EventData({self.event.name})"


EventHandler = Callable[[EventData], None]

# Called with the event being delivered and the exception its handler raised
ErrorReporter = Callable[[EventData, Exception], None]


def report_to_stderr(event_data: EventData, error: Exception) -> None:
    print(f"[EventBus] Handler error for {event_data.event.name}: {error}", file=sys.stderr)


class EventBus:
    """
    Delivers world events to subscribed handlers, in subscription order.

    A handler that raises doesn't stop delivery to the handlers after it:
    the error goes to the bus's error reporter instead, stderr unless a
    frontend that owns the screen installs its own. In debug mode every
    event is echoed to stderr and handler errors propagate.
    """

    def __init__(self, error_reporter: Optional[ErrorReporter] = None) -> None:
        self._handlers: Dict[Event, List[EventHandler]] = defaultdict(list)
        self._debug: bool = False
        self.error_reporter: ErrorReporter = error_reporter or report_to_stderr

    def set_debug(self, debug: bool) -> None:
        self._debug = debug

    def set_error_reporter(self, reporter: ErrorReporter) -> ErrorReporter:
        """Install a new error reporter, returning the one it replaces."""
        previous = self.error_reporter
        self.error_reporter = reporter
        return previous

    def subscribe(self, event: Event, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe a handler to every event type."""
        for event in Event:
            self.subscribe(event, handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        """
        Emit an event to its handlers.

        Args:
            event: The event type to emit
            **kwargs: Event-specific data, see the comments on Event
        """
        event_data = EventData(event=event, kwargs=kwargs)

        if self._debug:
            print(f"[EventBus] {event_data}", file=sys.stderr)

        # Handlers may subscribe more handlers while being called
        for handler in list(self._handlers[event]):
            try:
                handler(event_data)
            except Exception as e:
                if self._debug:
                    raise
                self.error_reporter(event_data, e)
