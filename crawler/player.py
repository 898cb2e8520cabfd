"""
The player character and everything the player can do on their turn.

Gameplay failures (walking into a wall, picking a bad inventory slot) are
reported through return values and events rather than exceptions. Running out
of health is not an error either: `is_defeated` turns True and the game moves
to its game-over phase.
"""

import random
from enum import Enum, auto
from typing import Any, List, Optional, TYPE_CHECKING

from .enemy import Enemy
from .event_system import EventBus, Event
from .items import Item, ItemType, INVENTORY_TYPES
from .tiles import Tile, Position

if TYPE_CHECKING:
    from .world import Dungeon

STARTING_HEALTH: int = 20
STARTING_ATTACK: int = 3
STARTING_DEFENSE: int = 1

EXPERIENCE_PER_LEVEL: int = 100
BASE_KILL_EXPERIENCE: int = 5
LEVEL_UP_HEALTH_BONUS: int = 5


class MoveOutcome(Enum):
    """What happened when the player tried to step somewhere."""

    MOVED = auto()
    ATTACKED = auto()  # an enemy stood there, so the player fought instead
    BLOCKED = auto()  # wall or edge of the map; nothing changed


class Player:
    """
    The player's stats, position and inventory.

    A Player survives trips down the stairs (only its position changes) and
    is replaced wholesale when a new game starts.
    """

    def __init__(
        self,
        position: Position,
        health: int = STARTING_HEALTH,
        max_health: int = STARTING_HEALTH,
        attack: int = STARTING_ATTACK,
        defense: int = STARTING_DEFENSE,
        gold: int = 0,
        level: int = 1,
        experience: int = 0,
        inventory: Optional[List[Item]] = None,
    ) -> None:
        self.position: Position = position
        self.health: int = health
        self.max_health: int = max_health
        self.attack: int = attack
        self.defense: int = defense
        self.gold: int = gold
        self.level: int = level
        self.experience: int = experience
        self.inventory: List[Item] = inventory if inventory is not None else []

        # Event system (optional)
        self.event_bus: Optional[EventBus] = None

    def set_event_bus(self, bus: Optional[EventBus]) -> None:
        self.event_bus = bus

    def _emit(self, event: Event, **kwargs: Any) -> None:
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    @property
    def experience_to_next_level(self) -> int:
        return EXPERIENCE_PER_LEVEL * self.level

    def heal(self, amount: int) -> int:
        """Restore health up to max_health. Returns the health actually gained."""
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - before

    def take_damage(self, amount: int, cause: str) -> None:
        self.health -= amount
        if self.is_defeated:
            self._emit(Event.PLAYER_DEFEATED, cause=cause)

    def move(self, dx: int, dy: int, dungeon: "Dungeon", rng: random.Random) -> MoveOutcome:
        """
        Try to step dx columns and dy rows.

        Stepping into a living enemy attacks it instead; the player stays put
        even if the enemy dies.
        """
        target = self.position.offset(dx, dy)

        enemy = dungeon.get_enemy_at(target)
        if enemy is not None:
            self.attack_enemy(enemy, dungeon, rng)
            return MoveOutcome.ATTACKED

        if not dungeon.is_walkable(target):
            self._emit(Event.MOVE_BLOCKED, row=target.row, col=target.column)
            return MoveOutcome.BLOCKED

        self.position = target
        self._emit(Event.PLAYER_MOVED, row=target.row, col=target.column)
        self.check_position(dungeon, rng)
        return MoveOutcome.MOVED

    def attack_enemy(self, enemy: Enemy, dungeon: "Dungeon", rng: random.Random) -> bool:
        """
        Hit an enemy for our full attack. Survivors strike back.

        Returns True if the enemy was killed.
        """
        damage = self.attack
        enemy.take_damage(damage)
        self._emit(Event.PLAYER_ATTACKED, enemy_id=enemy.enemy_id, name=enemy.name, damage=damage)

        if not enemy.is_alive:
            experience = BASE_KILL_EXPERIENCE + enemy.damage * 2
            self.experience += experience
            self._emit(
                Event.ENEMY_DEFEATED,
                enemy_id=enemy.enemy_id,
                name=enemy.name,
                experience=experience,
            )
            self.check_level_up()

            if enemy.enemy_id is not None:
                dungeon.remove_enemy(enemy.enemy_id)

            if rng.randrange(2) == 0:
                amount = 1 + rng.randrange(10)
                self.gold += amount
                self._emit(Event.GOLD_DROPPED, amount=amount)
            return True

        # Armour soaks damage, but every hit lands for at least one point
        counter_damage = max(1, enemy.damage - self.defense)
        self._emit(
            Event.ENEMY_COUNTERATTACK,
            enemy_id=enemy.enemy_id,
            name=enemy.name,
            damage=counter_damage,
        )
        self.take_damage(counter_damage, cause=enemy.name)
        return False

    def check_position(self, dungeon: "Dungeon", rng: random.Random) -> None:
        """Apply the effect of the tile we just arrived on, then pick up any item."""
        here = self.position
        tile = dungeon.get_tile(here)

        if tile == Tile.TREASURE:
            amount = 10 + rng.randrange(20)
            self.gold += amount
            dungeon.set_tile(here, Tile.FLOOR)
            self._emit(Event.TREASURE_FOUND, amount=amount, gold=self.gold)

        elif tile == Tile.TRAP:
            damage = 2 + rng.randrange(3)
            # Disarmed once sprung
            dungeon.set_tile(here, Tile.FLOOR)
            self._emit(Event.TRAP_TRIGGERED, damage=damage)
            self.take_damage(damage, cause="trap")

        elif tile == Tile.DOOR:
            dungeon.set_tile(here, Tile.FLOOR)
            self._emit(Event.DOOR_OPENED, row=here.row, col=here.column)

        elif tile == Tile.STAIRS_DOWN:
            self._emit(Event.STAIRS_FOUND, row=here.row, col=here.column)

        item = dungeon.get_item_at(here)
        if item is not None:
            self.collect_item(item)

    def collect_item(self, item: Item) -> None:
        """
        Pick an item up off the floor.

        Gold goes straight into the purse. Potions, weapons and armor are
        copied into the inventory. Anything else is just marked collected.
        """
        item.collected = True

        if item.item_type == ItemType.GOLD:
            self.gold += item.value
            self._emit(Event.GOLD_COLLECTED, amount=item.value, gold=self.gold)
        elif item.item_type in INVENTORY_TYPES:
            self.inventory.append(item.copy())
            self._emit(Event.ITEM_COLLECTED, name=item.name)

    def use_item(self, index: int) -> bool:
        """
        Use the inventory item at a 0-based index.

        Potions are drunk and disappear. Weapons and armor are equipped,
        replacing the current attack or defense, and stay in the inventory.

        Returns False, changing nothing, if the index is out of range or the
        item can't be used.
        """
        if index < 0 or index >= len(self.inventory):
            self._emit(Event.INVALID_ITEM)
            return False

        item = self.inventory[index]

        if item.item_type == ItemType.POTION:
            self.heal(item.value)
            del self.inventory[index]
            self._emit(Event.POTION_USED, name=item.name, amount=item.value)
        elif item.item_type == ItemType.WEAPON:
            self.attack = item.value
            self._emit(Event.WEAPON_EQUIPPED, name=item.name, attack=self.attack)
        elif item.item_type == ItemType.ARMOR:
            self.defense = item.value
            self._emit(Event.ARMOR_EQUIPPED, name=item.name, defense=self.defense)
        else:
            self._emit(Event.ITEM_UNUSABLE, name=item.name)
            return False

        return True

    def check_level_up(self) -> int:
        """
        Spend experience on levels, as many as it covers.

        Each level costs 100 x the level being left. Returns the number of
        levels gained.
        """
        gained = 0
        while self.experience >= self.experience_to_next_level:
            self.experience -= self.experience_to_next_level
            self.level += 1
            self.max_health += LEVEL_UP_HEALTH_BONUS
            self.health = self.max_health
            self.attack += 1
            gained += 1
            self._emit(
                Event.LEVEL_UP,
                level=self.level,
                max_health=self.max_health,
                attack=self.attack,
            )
        return gained
