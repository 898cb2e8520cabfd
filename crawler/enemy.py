"""
Enemy entities that roam the dungeon.

Enemies are created from a fixed table of kinds. Each one carries a stable
integer id, assigned by the Dungeon, so it can be looked up and removed
without relying on object identity.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .tiles import Position


@dataclass(frozen=True)
class EnemyKind:
    """A row in the enemy table."""

    name: str
    symbol: str
    health: int
    damage: int


GOBLIN = EnemyKind(name="Goblin", symbol="g", health=3, damage=1)
ORC = EnemyKind(name="Orc", symbol="o", health=5, damage=2)
TROLL = EnemyKind(name="Troll", symbol="T", health=8, damage=3)
RAT = EnemyKind(name="Rat", symbol="r", health=1, damage=1)
SKELETON = EnemyKind(name="Skeleton", symbol="s", health=4, damage=2)

# Kinds that populate a freshly generated level
ENEMY_KINDS: List[EnemyKind] = [GOBLIN, ORC, TROLL, RAT, SKELETON]

# Kinds that wander up while the player rests
WANDERING_KINDS: List[EnemyKind] = [GOBLIN, RAT]

ENEMY_KINDS_BY_NAME: Dict[str, EnemyKind] = {kind.name: kind for kind in ENEMY_KINDS}


@dataclass
class Enemy:
    """
    A monster in the dungeon.

    Health stays above zero while the enemy is alive; the Dungeon drops it as
    soon as combat takes it to zero or below.
    """

    position: Position
    health: int
    symbol: str
    name: str
    damage: int
    hostile: bool = True

    # Set by Dungeon when added
    enemy_id: Optional[int] = None

    @classmethod
    def from_kind(cls, kind: EnemyKind, position: Position) -> "Enemy":
        return cls(
            position=position,
            health=kind.health,
            symbol=kind.symbol,
            name=kind.name,
            damage=kind.damage,
        )

    @classmethod
    def named(cls, name: str, position: Position) -> "Enemy":
        """Create an enemy from the table by name (e.g. 'Goblin')."""
        if name not in ENEMY_KINDS_BY_NAME:
            raise ValueError(f"Unknown enemy kind: {name}")
        return cls.from_kind(ENEMY_KINDS_BY_NAME[name], position)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def occupies_tile(self, row: int, col: int) -> bool:
        return self.position.row == row and self.position.column == col

    def take_damage(self, amount: int) -> None:
        self.health -= amount
