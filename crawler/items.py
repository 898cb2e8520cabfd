"""
Items that lie in the dungeon or travel in the player's inventory.

The meaning of an item's value depends on its type: heal amount for potions,
attack for weapons, defense for armor, and an amount of gold for gold piles.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto

from .tiles import Position


class ItemType(Enum):
    """Kinds of items."""

    GOLD = auto()
    POTION = auto()
    WEAPON = auto()
    ARMOR = auto()
    TREASURE = auto()
    KEY = auto()


# Item types that go into the inventory when collected
INVENTORY_TYPES = {ItemType.POTION, ItemType.WEAPON, ItemType.ARMOR}

HEALTH_POTION_VALUE: int = 10


@dataclass
class Item:
    """An item in the game."""

    position: Position
    item_type: ItemType
    name: str
    description: str = ""
    value: int = 0
    symbol: str = "?"
    collected: bool = False

    def copy(self) -> "Item":
        """Return an independent copy, used when an item enters the inventory."""
        return replace(self)


def new_health_potion(position: Position) -> Item:
    return Item(
        position=position,
        item_type=ItemType.POTION,
        name="Health Potion",
        description=f"Restores {HEALTH_POTION_VALUE} health points",
        value=HEALTH_POTION_VALUE,
        symbol="!",
    )


def new_weapon(position: Position, name: str, damage: int) -> Item:
    return Item(
        position=position,
        item_type=ItemType.WEAPON,
        name=name,
        description=f"Sets attack to {damage}",
        value=damage,
        symbol="/",
    )


def new_armor(position: Position, name: str, defense: int) -> Item:
    return Item(
        position=position,
        item_type=ItemType.ARMOR,
        name=name,
        description=f"Sets defense to {defense}",
        value=defense,
        symbol="[",
    )


def new_gold(position: Position, amount: int) -> Item:
    return Item(
        position=position,
        item_type=ItemType.GOLD,
        name="Gold",
        description=f"Worth {amount} gold",
        value=amount,
        symbol="$",
    )


def new_key(position: Position) -> Item:
    return Item(
        position=position,
        item_type=ItemType.KEY,
        name="Key",
        description="Can unlock doors",
        value=1,
        symbol="k",
    )
