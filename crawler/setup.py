"""
Dungeon setup utilities: building fully populated levels and spawning enemies.
"""

import random
from typing import Optional

from .dungeon_gen import generate_dungeon
from .enemy import Enemy, ENEMY_KINDS, WANDERING_KINDS
from .event_system import EventBus
from .tiles import Position
from .world import Dungeon, DEFAULT_WIDTH, DEFAULT_HEIGHT

# Number of enemies placed on a new level, inclusive
MIN_ENEMIES: int = 3
MAX_ENEMIES: int = 6

# Neighbours checked, in order, when a wandering monster turns up, as (dx, dy)
ADJACENT_OFFSETS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


def spawn_enemies(
    dungeon: Dungeon,
    rng: random.Random,
    min_count: int = MIN_ENEMIES,
    max_count: int = MAX_ENEMIES,
) -> int:
    """
    Scatter enemies through every room except the first, which is where the
    player starts. Nothing is spawned unless there are at least two rooms.

    Returns the number of enemies added.
    """
    num_enemies = rng.randint(min_count, max_count)

    spawned = 0
    for _ in range(num_enemies):
        if len(dungeon.rooms) <= 1:
            break

        room_index = 1 + rng.randrange(len(dungeon.rooms) - 1)
        position = dungeon.rooms[room_index].random_position(rng)
        kind = ENEMY_KINDS[rng.randrange(len(ENEMY_KINDS))]

        dungeon.add_enemy(Enemy.from_kind(kind, position))
        spawned += 1

    return spawned


def spawn_enemy_near(
    dungeon: Dungeon,
    position: Position,
    rng: random.Random,
) -> Optional[Enemy]:
    """
    Put a wandering monster on the first free tile around a position.

    Returns the new enemy, or None if every neighbouring tile is blocked.
    """
    for dx, dy in ADJACENT_OFFSETS:
        candidate = position.offset(dx, dy)
        if not dungeon.is_walkable(candidate):
            continue
        if dungeon.get_enemy_at(candidate) is not None:
            continue

        kind = WANDERING_KINDS[rng.randrange(len(WANDERING_KINDS))]
        enemy = Enemy.from_kind(kind, candidate)
        dungeon.add_enemy(enemy)
        return enemy

    return None


def create_random_dungeon(
    rng: random.Random,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    level: int = 1,
    event_bus: Optional[EventBus] = None,
) -> Dungeon:
    """
    Factory function to create a randomly generated, populated dungeon level.

    Parameters:
        rng: Random source shared by generation and enemy placement
        width, height: Map size in tiles
        level: Depth of this level, starting at 1
        event_bus: Attached to the finished dungeon, so level setup emits nothing

    Returns:
        A Dungeon instance with rooms, features, items and enemies
    """
    dungeon_map, rooms, items = generate_dungeon(width, height, rng)
    dungeon = Dungeon(dungeon_map, rooms, items, level=level)
    spawn_enemies(dungeon, rng)
    dungeon.set_event_bus(event_bus)
    return dungeon
