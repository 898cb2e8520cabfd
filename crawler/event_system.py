"""
Event system for dungeon gameplay.

The core never prints. Player actions, enemy turns and level transitions emit
events on an EventBus, and whatever drives the game (the terminal script, a
test) subscribes to turn them into messages or assertions.
"""

from enum import Enum, auto
from typing import Callable, Any, Dict, List, Optional
from dataclasses import dataclass, field


class Event(Enum):
    """Event types that can occur during dungeon gameplay."""

    # Level lifecycle
    LEVEL_START = auto()  # kwargs: level
    LEVEL_DESCENDED = auto()  # kwargs: level
    NO_STAIRS = auto()
    GAME_RESTARTED = auto()

    # Player movement events
    PLAYER_MOVED = auto()  # kwargs: row, col
    MOVE_BLOCKED = auto()  # kwargs: row, col
    DOOR_OPENED = auto()  # kwargs: row, col
    STAIRS_FOUND = auto()  # kwargs: row, col
    TREASURE_FOUND = auto()  # kwargs: amount, gold
    TRAP_TRIGGERED = auto()  # kwargs: damage

    # Combat events
    PLAYER_ATTACKED = auto()  # kwargs: enemy_id, name, damage
    ENEMY_DEFEATED = auto()  # kwargs: enemy_id, name, experience
    ENEMY_COUNTERATTACK = auto()  # kwargs: enemy_id, name, damage
    GOLD_DROPPED = auto()  # kwargs: amount
    LEVEL_UP = auto()  # kwargs: level, max_health, attack
    PLAYER_DEFEATED = auto()  # kwargs: cause

    # Item events
    GOLD_COLLECTED = auto()  # kwargs: amount, gold
    ITEM_COLLECTED = auto()  # kwargs: name
    POTION_USED = auto()  # kwargs: name, amount
    WEAPON_EQUIPPED = auto()  # kwargs: name, attack
    ARMOR_EQUIPPED = auto()  # kwargs: name, defense
    INVALID_ITEM = auto()
    ITEM_UNUSABLE = auto()  # kwargs: name

    # Rest events
    RESTED = auto()  # kwargs: amount
    REST_INTERRUPTED = auto()

    # Dungeon state events
    ENEMY_ADDED = auto()  # kwargs: enemy_id, name
    ENEMY_REMOVED = auto()  # kwargs: enemy_id
    TILE_CHANGED = auto()  # kwargs: row, col, tile

    # Driver events
    INVALID_COMMAND = auto()  # kwargs: command
    HELP_REQUESTED = auto()


@dataclass
class EventData:
    """One emitted event and its keyword payload."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.kwargs:
            kwargs_str = ", ".join(f"{k}={v}" for k, v in self.kwargs.items())
            return f"EventData({self.event.name}, {kwargs_str})"
        return f"EventData({self.event.name})"


# Handlers receive the EventData and return nothing
EventHandler = Callable[[EventData], None]


class EventBus:
    """
    Routes game events to whoever is listening.

    The dungeon, player and game hold an optional bus and emit into it; the
    terminal front end and the tests subscribe. Handlers for one event run in
    subscription order.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[EventHandler]] = {}
        self._debug: bool = False

    def set_debug(self, debug: bool) -> None:
        """When on, every emitted event is printed and handler errors propagate."""
        self._debug = debug

    def subscribe(self, event: Event, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe a handler to every event type."""
        for event in Event:
            self.subscribe(event, handler)

    def unsubscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Remove one subscription of a handler.

        Raises:
            ValueError: If the handler isn't subscribed to this event
        """
        handlers = self._handlers.get(event)
        if not handlers:
            raise ValueError(f"No handlers registered for event {event}")
        if handler not in handlers:
            raise ValueError(f"Handler not subscribed to event {event}")
        handlers.remove(handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        """
        Build an EventData from the keyword arguments and hand it to every
        handler subscribed to this event.
        """
        event_data = EventData(event=event, kwargs=kwargs)
        if self._debug:
            print(f"[EventBus] Emitting: {event_data}")

        # Copy, so a handler may unsubscribe itself mid-dispatch
        for handler in list(self._handlers.get(event, [])):
            self._dispatch(handler, event_data)

    def _dispatch(self, handler: EventHandler, event_data: EventData) -> None:
        try:
            handler(event_data)
        except Exception as e:
            # Report and carry on with the remaining handlers
            print(f"[EventBus] Handler error for {event_data.event.name}: {e}")
            if self._debug:
                raise

    def clear(self) -> None:
        self._handlers.clear()

    def handler_count(self, event: Optional[Event] = None) -> int:
        """Handlers for one event, or across all events when none is given."""
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(handlers) for handlers in self._handlers.values())
