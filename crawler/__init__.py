"""Procedural dungeon generation and turn resolution for a text dungeon crawler."""

from crawler.tiles import (
    Tile,
    Position,
    Direction,
    TILE_TO_ASCII,
    WALKABLE_TILES,
)
from crawler.dungeon_gen import (
    Room,
    DungeonMap,
    generate_dungeon,
    parse_ascii_map,
)
from crawler.enemy import Enemy, EnemyKind, ENEMY_KINDS
from crawler.items import Item, ItemType
from crawler.world import Dungeon
from crawler.player import Player, MoveOutcome
from crawler.setup import create_random_dungeon, spawn_enemies, spawn_enemy_near
from crawler.event_system import EventBus, Event, EventData
from crawler.game import Game, GamePhase
