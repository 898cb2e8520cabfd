"""Shared test helpers."""

from typing import Iterable, List

import pytest

from crawler.dungeon_gen import Room, parse_ascii_map
from crawler.event_system import EventBus, EventData
from crawler.world import Dungeon


class ScriptedRandom:
    """
    Stand-in for random.Random that hands out a fixed list of draws.

    Each draw is checked against the range the caller asked for, and running
    out of draws fails loudly, so a test can pin down exactly which random
    choices an action makes.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)

    @property
    def remaining(self) -> int:
        return len(self._values)

    def _next(self, low: int, high: int) -> int:
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self._values.pop(0)
        if not low <= value <= high:
            raise AssertionError(f"scripted value {value} outside [{low}, {high}]")
        return value

    def randrange(self, start: int, stop=None, step: int = 1) -> int:
        if stop is None:
            start, stop = 0, start
        return self._next(start, stop - 1)

    def randint(self, a: int, b: int) -> int:
        return self._next(a, b)


@pytest.fixture
def scripted():
    """Factory fixture: scripted([1, 0, 3]) builds a ScriptedRandom."""
    return ScriptedRandom


def make_dungeon(lines: List[str], rooms: List[Room] = None) -> Dungeon:
    """Build a Dungeon from ASCII rows. Defaults to one room covering the interior."""
    dungeon_map = parse_ascii_map(lines)
    if rooms is None:
        rows, cols = dungeon_map.shape
        rooms = [Room(x=1, y=1, width=cols - 2, height=rows - 2)]
    return Dungeon(dungeon_map, rooms)


@pytest.fixture
def dungeon_from_ascii():
    return make_dungeon


@pytest.fixture
def recorded_events():
    """An EventBus that records everything emitted on it."""
    bus = EventBus()
    received: List[EventData] = []
    bus.subscribe_all(received.append)
    bus.received = received
    return bus
