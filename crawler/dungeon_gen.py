"""
Dungeon Generation Algorithm
============================

We scatter rectangular rooms over a solid block of rock and join them up.

1. Fill the grid with walls
2. Pick a number of rooms. For each one, choose a random size and position and
   keep it only if it (plus a one tile margin) doesn't touch a room we already
   kept. Carve the rooms we keep. If none survive, carve one big room in the
   middle of the map.
3. Join each room to the next one in placement order with an L-shaped corridor
   between their centers
4. Decorate:
   a. Floor tiles pinched between two walls sometimes become doors
   b. Some rooms get a pile of treasure
   c. A handful of traps are hidden on plain floor
   d. The stairs down go in the middle of the last room
"""

import random
import numpy as np
from dataclasses import dataclass
from typing import Tuple, List

from .items import Item, new_gold
from .tiles import (
    Tile,
    Position,
    TILE_TO_ASCII,
    ASCII_TO_TILE,
)

# Room size constraints, inclusive
ROOM_MIN_SIZE: int = 4
ROOM_MAX_SIZE: int = 10

# Number of rooms attempted per level, inclusive
MIN_ROOMS: int = 4
MAX_ROOMS: int = 8

DOOR_CHANCE_PERCENT: int = 10
TREASURE_CHANCE_PERCENT: int = 40
MIN_TREASURE_GOLD: int = 10
MAX_TREASURE_GOLD: int = 99
MIN_TRAPS: int = 2
MAX_TRAPS: int = 5
TRAP_PLACEMENT_ATTEMPTS: int = 50


@dataclass(frozen=True)
class Room:
    """A rectangular room, anchored at its top-left tile."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Position:
        return Position(row=self.y + self.height // 2, column=self.x + self.width // 2)

    def contains(self, position: Position) -> bool:
        """Check if a tile lies inside this room."""
        return (
            self.x <= position.column < self.x + self.width
            and self.y <= position.row < self.y + self.height
        )

    def overlaps(self, other: "Room") -> bool:
        """
        Check if two rooms overlap, counting a one tile buffer around this room.

        The comparison is inclusive, so rooms separated by a single wall also
        count as overlapping.
        """
        return (
            self.x - 1 <= other.x + other.width
            and self.x + self.width + 1 >= other.x
            and self.y - 1 <= other.y + other.height
            and self.y + self.height + 1 >= other.y
        )

    def random_position(self, rng: random.Random) -> Position:
        """Pick a uniformly random tile inside the room."""
        column = self.x + rng.randrange(self.width)
        row = self.y + rng.randrange(self.height)
        return Position(row=row, column=column)


# Type Definition
DungeonMap = np.ndarray


def create_empty_map(width: int, height: int) -> DungeonMap:
    """Returns a height x width map of solid wall."""
    return np.full((height, width), Tile.WALL, dtype=int)


def parse_ascii_map(lines: List[str]) -> DungeonMap:
    """
    Build a map from rows of tile characters ('#', '.', '+', '$', '^', '>').

    All rows must have the same length.
    """
    if not lines:
        raise ValueError("cannot parse an empty map")
    width = len(lines[0])
    dungeon_map = create_empty_map(width, len(lines))
    for row, line in enumerate(lines):
        if len(line) != width:
            raise ValueError(f"row {row} has length {len(line)}, expected {width}")
        for col, char in enumerate(line):
            dungeon_map[row, col] = ASCII_TO_TILE[char]
    return dungeon_map


def _carve_room(dungeon_map: DungeonMap, room: Room) -> None:
    """Set every tile of the room to floor."""
    dungeon_map[room.y : room.y + room.height, room.x : room.x + room.width] = Tile.FLOOR


def _would_overlap(room: Room, rooms: List[Room]) -> bool:
    """Check if a candidate room overlaps any room already placed."""
    return any(room.overlaps(existing) for existing in rooms)


def generate_rooms(
    dungeon_map: DungeonMap,
    rng: random.Random,
    min_rooms: int = MIN_ROOMS,
    max_rooms: int = MAX_ROOMS,
) -> List[Room]:
    """
    Place non-overlapping rooms and carve them into the map.

    Each attempt is made once; overlapping candidates are simply dropped, so
    fewer rooms than requested may come back. Always returns at least one room.

    The map must be wider and taller than ROOM_MAX_SIZE + 2.
    """
    rows, cols = dungeon_map.shape
    num_rooms = rng.randint(min_rooms, max_rooms)

    rooms: List[Room] = []
    for _ in range(num_rooms):
        width = rng.randint(ROOM_MIN_SIZE, ROOM_MAX_SIZE)
        height = rng.randint(ROOM_MIN_SIZE, ROOM_MAX_SIZE)

        # Leave a border of rock around the room
        x = 1 + rng.randrange(cols - width - 2)
        y = 1 + rng.randrange(rows - height - 2)

        room = Room(x=x, y=y, width=width, height=height)
        if _would_overlap(room, rooms):
            continue

        _carve_room(dungeon_map, room)
        rooms.append(room)

    if not rooms:
        room = Room(x=cols // 4, y=rows // 4, width=cols // 2, height=rows // 2)
        _carve_room(dungeon_map, room)
        rooms.append(room)

    return rooms


def _carve_horizontal_corridor(dungeon_map: DungeonMap, x1: int, x2: int, y: int) -> None:
    rows, cols = dungeon_map.shape
    if not 0 <= y < rows:
        return
    start, end = sorted((x1, x2))
    start = max(start, 0)
    end = min(end, cols - 1)
    if start <= end:
        dungeon_map[y, start : end + 1] = Tile.FLOOR


def _carve_vertical_corridor(dungeon_map: DungeonMap, y1: int, y2: int, x: int) -> None:
    rows, cols = dungeon_map.shape
    if not 0 <= x < cols:
        return
    start, end = sorted((y1, y2))
    start = max(start, 0)
    end = min(end, rows - 1)
    if start <= end:
        dungeon_map[start : end + 1, x] = Tile.FLOOR


def connect_rooms(dungeon_map: DungeonMap, rooms: List[Room], rng: random.Random) -> None:
    """
    Join each room to the next one with an L-shaped corridor between centers.

    Corridors may cut through other rooms and corridors.
    """
    for room, next_room in zip(rooms, rooms[1:]):
        start = room.center
        end = next_room.center

        if rng.randrange(2) == 0:
            # Horizontal then vertical
            _carve_horizontal_corridor(dungeon_map, start.x, end.x, start.y)
            _carve_vertical_corridor(dungeon_map, start.y, end.y, end.x)
        else:
            # Vertical then horizontal
            _carve_vertical_corridor(dungeon_map, start.y, end.y, start.x)
            _carve_horizontal_corridor(dungeon_map, start.x, end.x, end.y)


def find_door_candidates(dungeon_map: DungeonMap) -> List[Position]:
    """
    Find interior floor tiles pinched between two walls.

    A tile qualifies if it has walls both above and below, or both left and
    right. Returned in row-major order.
    """
    interior = dungeon_map[1:-1, 1:-1]
    is_wall = dungeon_map == Tile.WALL
    pinched_vertically = is_wall[:-2, 1:-1] & is_wall[2:, 1:-1]
    pinched_horizontally = is_wall[1:-1, :-2] & is_wall[1:-1, 2:]
    mask = (interior == Tile.FLOOR) & (pinched_vertically | pinched_horizontally)
    return [Position(row=int(r) + 1, column=int(c) + 1) for r, c in np.argwhere(mask)]


def add_doors(dungeon_map: DungeonMap, rng: random.Random) -> None:
    for position in find_door_candidates(dungeon_map):
        if rng.randrange(100) < DOOR_CHANCE_PERCENT:
            dungeon_map[position.row, position.column] = Tile.DOOR


def add_treasures(dungeon_map: DungeonMap, rooms: List[Room], rng: random.Random) -> List[Item]:
    """Drop treasure into some rooms; returns the gold items that go with them."""
    items: List[Item] = []
    for room in rooms:
        if rng.randrange(100) >= TREASURE_CHANCE_PERCENT:
            continue
        position = room.random_position(rng)
        dungeon_map[position.row, position.column] = Tile.TREASURE
        amount = rng.randint(MIN_TREASURE_GOLD, MAX_TREASURE_GOLD)
        items.append(new_gold(position, amount))
    return items


def add_traps(dungeon_map: DungeonMap, rng: random.Random) -> int:
    """
    Hide traps on plain floor tiles.

    A trap that can't find floor within TRAP_PLACEMENT_ATTEMPTS tries is
    skipped. Returns the number of traps placed.
    """
    rows, cols = dungeon_map.shape
    num_traps = rng.randint(MIN_TRAPS, MAX_TRAPS)

    placed = 0
    for _ in range(num_traps):
        for _attempt in range(TRAP_PLACEMENT_ATTEMPTS):
            col = 1 + rng.randrange(cols - 2)
            row = 1 + rng.randrange(rows - 2)
            if dungeon_map[row, col] == Tile.FLOOR:
                dungeon_map[row, col] = Tile.TRAP
                placed += 1
                break
    return placed


def add_stairs(dungeon_map: DungeonMap, rooms: List[Room]) -> None:
    """Put the stairs down in the center of the last room."""
    if not rooms:
        return
    center = rooms[-1].center
    dungeon_map[center.row, center.column] = Tile.STAIRS_DOWN


def add_features(dungeon_map: DungeonMap, rooms: List[Room], rng: random.Random) -> List[Item]:
    """
    Decorate a connected map. Order matters: doors need the bare corridors,
    and stairs go last so nothing can cover them.
    """
    add_doors(dungeon_map, rng)
    items = add_treasures(dungeon_map, rooms, rng)
    add_traps(dungeon_map, rng)
    add_stairs(dungeon_map, rooms)
    return items


def generate_dungeon(
    width: int,
    height: int,
    rng: random.Random,
    min_rooms: int = MIN_ROOMS,
    max_rooms: int = MAX_ROOMS,
) -> Tuple[DungeonMap, List[Room], List[Item]]:
    """
    Generates a dungeon level using the algorithm documented at the top of this file.

    Parameters:
        width: Map width in tiles
        height: Map height in tiles
        rng: Random source for every choice made during generation
        min_rooms, max_rooms: Range for the number of room placement attempts

    Returns:
        dungeon_map: The tile map, indexed [row, column]
        rooms: Rooms in placement order; the first is the start room and the
               last holds the stairs
        items: World items placed during generation
    """
    dungeon_map = create_empty_map(width, height)
    rooms = generate_rooms(dungeon_map, rng, min_rooms, max_rooms)
    connect_rooms(dungeon_map, rooms, rng)
    items = add_features(dungeon_map, rooms, rng)
    return dungeon_map, rooms, items


def render_map_ascii(dungeon_map: DungeonMap) -> str:
    """Convert a bare tile map to text, one line per row."""
    return "\n".join(
        "".join(TILE_TO_ASCII[Tile(tile)] for tile in row) for row in dungeon_map
    )
