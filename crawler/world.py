import random
from typing import Any, Dict, Iterable, List, Optional

from .dungeon_gen import DungeonMap, Room
from .enemy import Enemy
from .event_system import EventBus, Event
from .items import Item
from .strategy import Strategy, PursueOrWanderStrategy
from .tiles import Tile, Position, WALKABLE_TILES

DEFAULT_WIDTH: int = 80
DEFAULT_HEIGHT: int = 24


class Dungeon:
    """
    One level of the dungeon: the tile grid plus everything standing on it.

    Tiles and items are kept in separate layers. The grid says what the floor
    is; items are looked up by position, so consuming a tile never loses the
    item lying on it (and vice versa).
    """

    def __init__(
        self,
        dungeon_map: DungeonMap,
        rooms: List[Room],
        items: Optional[Iterable[Item]] = None,
        level: int = 1,
        strategy: Optional[Strategy] = None,
    ) -> None:
        self.map: DungeonMap = dungeon_map
        self.rooms: List[Room] = list(rooms)
        self.level: int = level

        self.rows: int
        self.cols: int
        self.rows, self.cols = self.map.shape

        # Enemy registry, keyed by enemy_id
        self.enemies: Dict[int, Enemy] = {}
        self._next_enemy_id: int = 1

        # Item layer, keyed by tile position
        self.items: Dict[Position, Item] = {}
        for item in items or []:
            self.add_item(item)

        self.strategy: Strategy = strategy or PursueOrWanderStrategy()

        # Event system (optional)
        self.event_bus: Optional[EventBus] = None

    WALKABLE_TILES = WALKABLE_TILES

    @property
    def width(self) -> int:
        return self.cols

    @property
    def height(self) -> int:
        return self.rows

    @property
    def start_position(self) -> Position:
        """Center of the first room, where the player arrives."""
        if not self.rooms:
            return Position(row=1, column=1)
        return self.rooms[0].center

    def set_event_bus(self, bus: Optional[EventBus]) -> None:
        """Set the event bus for this dungeon."""
        self.event_bus = bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        """Emit an event if an event bus is configured."""
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.column < self.cols

    def get_tile(self, position: Position) -> Tile:
        """Return the tile at a position. Out of bounds reads as wall."""
        if not self.in_bounds(position):
            return Tile.WALL
        return Tile(self.map[position.row, position.column])

    def set_tile(self, position: Position, tile: Tile) -> None:
        if not self.in_bounds(position):
            raise ValueError(f"{position} is outside the {self.cols}x{self.rows} dungeon")
        self.map[position.row, position.column] = tile
        self._emit(Event.TILE_CHANGED, row=position.row, col=position.column, tile=tile)

    def is_tile_walkable(self, row: int, col: int) -> bool:
        """Check if the terrain at (row, col) can be stood on. Ignores enemies."""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.map[row, col] in self.WALKABLE_TILES
        return False

    def is_walkable(self, position: Position) -> bool:
        return self.is_tile_walkable(position.row, position.column)

    def get_room_index(self, position: Position) -> Optional[int]:
        """Index of the room containing a position, or None in corridors and rock."""
        for index, room in enumerate(self.rooms):
            if room.contains(position):
                return index
        return None

    # Enemies

    def add_enemy(self, enemy: Enemy) -> int:
        """Add an enemy to the dungeon and return its new id."""
        if not self.in_bounds(enemy.position):
            raise ValueError(f"Enemy position {enemy.position} is out of bounds")
        enemy.enemy_id = self._next_enemy_id
        self._next_enemy_id += 1
        self.enemies[enemy.enemy_id] = enemy
        self._emit(Event.ENEMY_ADDED, enemy_id=enemy.enemy_id, name=enemy.name)
        return enemy.enemy_id

    def remove_enemy(self, enemy_id: int) -> bool:
        """
        Remove an enemy by id.

        Returns True if an enemy was removed, False if no enemy had that id.
        """
        if self.enemies.pop(enemy_id, None) is None:
            return False
        self._emit(Event.ENEMY_REMOVED, enemy_id=enemy_id)
        return True

    def get_enemy(self, enemy_id: int) -> Optional[Enemy]:
        return self.enemies.get(enemy_id)

    def get_enemy_at(self, position: Position) -> Optional[Enemy]:
        """Find the living enemy standing on a tile."""
        for enemy in self.enemies.values():
            if enemy.is_alive and enemy.occupies_tile(position.row, position.column):
                return enemy
        return None

    def living_enemies(self) -> List[Enemy]:
        return [enemy for enemy in self.enemies.values() if enemy.is_alive]

    def move_enemies(self, player_position: Position, rng: random.Random) -> None:
        """
        Run the enemy phase of a turn: every living enemy gets one step.

        A step is dropped, not retried, if it would land on the player, on
        terrain that can't be walked on, or on another living enemy.
        """
        for enemy in list(self.enemies.values()):
            if not enemy.is_alive:
                continue

            command = self.strategy.decide_next_move(enemy, player_position, rng)
            if command is None:
                continue

            target = command.target
            if target == player_position:
                continue
            if self.is_walkable(target) and self.get_enemy_at(target) is None:
                enemy.position = target

    # Items

    def add_item(self, item: Item) -> None:
        """Put an item on the floor. Only one uncollected item fits on a tile."""
        if not self.in_bounds(item.position):
            raise ValueError(f"Item position {item.position} is out of bounds")
        existing = self.items.get(item.position)
        if existing is not None and not existing.collected:
            raise ValueError(f"{item.position} already holds {existing.name}")
        self.items[item.position] = item

    def get_item_at(self, position: Position) -> Optional[Item]:
        """Return the uncollected item on a tile, if any."""
        item = self.items.get(position)
        if item is None or item.collected:
            return None
        return item
