from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Dict


class Tile(IntEnum):
    """
    Tile kinds stored in the dungeon grid.

    The grid is a numpy integer array, so tiles are IntEnums and compare equal
    to the raw values read back out of it.
    """

    FLOOR = 1
    WALL = 2
    DOOR = 3  # opens (becomes FLOOR) when walked onto
    TREASURE = 4  # collected (becomes FLOOR) when walked onto
    TRAP = 5  # disarmed (becomes FLOOR) once triggered
    STAIRS_DOWN = 6


TILE_TO_ASCII: Dict[Tile, str] = {
    Tile.FLOOR: ".",
    Tile.WALL: "#",
    Tile.DOOR: "+",
    Tile.TREASURE: "$",
    Tile.TRAP: "^",
    Tile.STAIRS_DOWN: ">",
}

ASCII_TO_TILE: Dict[str, Tile] = {char: tile for tile, char in TILE_TO_ASCII.items()}

# Everything but walls can be stood on
WALKABLE_TILES = {
    Tile.FLOOR,
    Tile.DOOR,
    Tile.TREASURE,
    Tile.TRAP,
    Tile.STAIRS_DOWN,
}


@dataclass(frozen=True)
class Position:
    """A position in the dungeon grid, measured in tiles."""

    row: int
    column: int

    @property
    def x(self) -> int:
        return self.column

    @property
    def y(self) -> int:
        return self.row

    def offset(self, dx: int, dy: int) -> "Position":
        """Returns the position dx columns and dy rows away."""
        return Position(row=self.row + dy, column=self.column + dx)

    def manhattan_distance(self, other: "Position") -> int:
        return abs(self.row - other.row) + abs(self.column - other.column)


class Direction(Enum):
    """Cardinal directions for movement."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()

    def step(self) -> Position:
        """Returns the Position offset for moving one step in this direction."""
        steps = {
            Direction.NORTH: Position(row=-1, column=0),
            Direction.SOUTH: Position(row=1, column=0),
            Direction.EAST: Position(row=0, column=1),
            Direction.WEST: Position(row=0, column=-1),
        }
        return steps[self]


# Wandering enemies pick from these in this order: up, right, down, left
WANDER_DIRECTIONS = [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]
