"""
Movement strategies for dungeon enemies.

A strategy only decides where an enemy would like to step next. Whether the
step is allowed (walls, the player, other enemies) is up to the Dungeon.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import Optional, TYPE_CHECKING

from .tiles import Direction, Position, WANDER_DIRECTIONS

if TYPE_CHECKING:
    from .enemy import Enemy

# Hostile enemies closer than this (Manhattan distance) chase the player
PURSUIT_RANGE: int = 5


@dataclass
class MoveCommand:
    """A command from a strategy telling an enemy where to step next."""

    target: Position
    direction: Direction


# None means stay put this turn
StrategyCommand = Optional[MoveCommand]


class Strategy(ABC):
    """
    Abstract base class for enemy movement strategies.

    Strategies draw any randomness they need from the rng they are handed so
    that a seeded game plays out the same way every time.
    """

    @abstractmethod
    def decide_next_move(
        self,
        enemy: "Enemy",
        player_position: Position,
        rng: random.Random,
    ) -> StrategyCommand:
        """
        Decide the next step for an enemy.

        Returns:
            A MoveCommand with the tile the enemy wants to step onto,
            or None if the enemy should stay where it is.
        """


def _move(position: Position, direction: Direction) -> MoveCommand:
    step = direction.step()
    return MoveCommand(target=position.offset(step.column, step.row), direction=direction)


class PursueOrWanderStrategy(Strategy):
    """
    Chase the player when close, otherwise drift around.

    - A hostile enemy within PURSUIT_RANGE steps toward the player along the
      axis with the larger offset. Vertical wins ties.
    - Anything else moves in a random direction two turns out of three and
      stands still on the third.
    """

    def __init__(self, pursuit_range: int = PURSUIT_RANGE) -> None:
        self.pursuit_range = pursuit_range

    def decide_next_move(
        self,
        enemy: "Enemy",
        player_position: Position,
        rng: random.Random,
    ) -> StrategyCommand:
        distance = enemy.position.manhattan_distance(player_position)

        if distance < self.pursuit_range and enemy.hostile:
            return _move(enemy.position, self._direction_toward(enemy.position, player_position))

        if rng.randrange(3) > 0:
            direction = WANDER_DIRECTIONS[rng.randrange(len(WANDER_DIRECTIONS))]
            return _move(enemy.position, direction)

        return None

    @staticmethod
    def _direction_toward(start: Position, target: Position) -> Direction:
        dx = target.column - start.column
        dy = target.row - start.row
        if abs(dx) > abs(dy):
            return Direction.EAST if dx > 0 else Direction.WEST
        return Direction.SOUTH if dy > 0 else Direction.NORTH
