"""
The turn driver: maps text commands onto player actions and enemy turns.

A turn has two phases. The player phase resolves one action completely, and
then, if the action used up the turn, the enemy phase gives every living
enemy one step. Commands that don't use a turn (help, inventory, a move into a
wall, unknown input) skip the enemy phase.
"""

import random
from enum import Enum, auto
from typing import Dict, Optional

from .event_system import EventBus, Event
from .player import Player, MoveOutcome
from .render import render_screen, render_inventory, render_game_over
from .setup import create_random_dungeon, spawn_enemy_near
from .tiles import Tile, Direction
from .world import Dungeon, DEFAULT_WIDTH, DEFAULT_HEIGHT


class GamePhase(Enum):
    PLAYING = auto()
    INVENTORY = auto()
    GAME_OVER = auto()
    QUIT = auto()


MOVE_COMMANDS: Dict[str, Direction] = {
    "w": Direction.NORTH,
    "up": Direction.NORTH,
    "s": Direction.SOUTH,
    "down": Direction.SOUTH,
    "a": Direction.WEST,
    "left": Direction.WEST,
    "d": Direction.EAST,
    "right": Direction.EAST,
}

QUIT_COMMANDS = {"q", "quit"}
INVENTORY_COMMANDS = {"i", "inventory"}
HELP_COMMANDS = {"h", "help"}
REST_COMMANDS = {"r", "rest"}
BACK_COMMANDS = {"b", "back"}
RESTART_COMMANDS = {"r", "restart"}
DESCEND_COMMAND = ">"

MIN_REST_HEAL: int = 2
MAX_REST_HEAL: int = 4


class Game:
    """
    A whole game session: one dungeon level and one player at a time.

    All randomness comes from a single random.Random, seeded once, so a game
    started with the same seed and fed the same commands plays out the same.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.rng: random.Random = rng if rng is not None else random.Random(seed)
        self.width: int = width
        self.height: int = height
        self.event_bus: EventBus = event_bus if event_bus is not None else EventBus()

        self.phase: GamePhase = GamePhase.PLAYING
        self.dungeon: Dungeon
        self.player: Player
        self._start_new_game()

    @property
    def is_running(self) -> bool:
        return self.phase != GamePhase.QUIT

    def _start_new_game(self) -> None:
        self.dungeon = create_random_dungeon(
            self.rng, self.width, self.height, level=1, event_bus=self.event_bus
        )
        self.player = Player(self.dungeon.start_position)
        self.player.set_event_bus(self.event_bus)
        self.phase = GamePhase.PLAYING
        self.event_bus.emit(Event.LEVEL_START, level=self.dungeon.level)

    def restart(self) -> None:
        """Throw away the dungeon and the player and start over on level 1."""
        self._start_new_game()
        self.event_bus.emit(Event.GAME_RESTARTED)

    def handle_command(self, command: str) -> bool:
        """
        Apply one line of input in the current phase.

        Returns False if the command was not understood or could not be
        carried out; the reason has already been emitted as an event.
        """
        command = command.strip()

        if self.phase == GamePhase.PLAYING:
            accepted = self._handle_playing(command)
        elif self.phase == GamePhase.INVENTORY:
            accepted = self._handle_inventory(command)
        elif self.phase == GamePhase.GAME_OVER:
            accepted = self._handle_game_over(command)
        else:
            return False

        if self.phase in (GamePhase.PLAYING, GamePhase.INVENTORY) and self.player.is_defeated:
            self.phase = GamePhase.GAME_OVER
        return accepted

    def _handle_playing(self, command: str) -> bool:
        if command in QUIT_COMMANDS:
            self.phase = GamePhase.QUIT
            return True

        if command in MOVE_COMMANDS:
            step = MOVE_COMMANDS[command].step()
            outcome = self.player.move(step.column, step.row, self.dungeon, self.rng)
            if outcome == MoveOutcome.BLOCKED:
                return False
            self.enemy_phase()
            return True

        if command in INVENTORY_COMMANDS:
            self.phase = GamePhase.INVENTORY
            return True

        if command == DESCEND_COMMAND:
            return self.descend()

        if command in HELP_COMMANDS:
            self.event_bus.emit(Event.HELP_REQUESTED)
            return True

        if command in REST_COMMANDS:
            self.rest()
            return True

        self.event_bus.emit(Event.INVALID_COMMAND, command=command)
        return False

    def _handle_inventory(self, command: str) -> bool:
        if command in BACK_COMMANDS:
            self.phase = GamePhase.PLAYING
            return True

        # "²" and "①" pass isdigit() but int() rejects them
        if command.isdecimal():
            number = int(command)
            if 1 <= number <= len(self.player.inventory):
                return self.player.use_item(number - 1)

        self.event_bus.emit(Event.INVALID_ITEM)
        return False

    def _handle_game_over(self, command: str) -> bool:
        if command in RESTART_COMMANDS:
            self.restart()
            return True
        if command in QUIT_COMMANDS:
            self.phase = GamePhase.QUIT
            return True
        self.event_bus.emit(Event.INVALID_COMMAND, command=command)
        return False

    def enemy_phase(self) -> None:
        """Give every living enemy its step for this turn."""
        self.dungeon.move_enemies(self.player.position, self.rng)

    def descend(self) -> bool:
        """
        Take the stairs down to a freshly generated level.

        The player keeps stats, gold and inventory and arrives in the middle
        of the new level's first room. Returns False if not on the stairs.
        """
        if self.dungeon.get_tile(self.player.position) != Tile.STAIRS_DOWN:
            self.event_bus.emit(Event.NO_STAIRS)
            return False

        self.dungeon = create_random_dungeon(
            self.rng,
            self.width,
            self.height,
            level=self.dungeon.level + 1,
            event_bus=self.event_bus,
        )
        self.player.position = self.dungeon.start_position
        self.event_bus.emit(Event.LEVEL_DESCENDED, level=self.dungeon.level)
        return True

    def rest(self) -> None:
        """
        Rest for a turn.

        One time in three a wandering monster turns up next to the player
        instead, and the enemies don't otherwise move. Otherwise the player
        recovers a little health and the enemies take their turn.
        """
        if self.rng.randrange(3) == 0:
            self.event_bus.emit(Event.REST_INTERRUPTED)
            spawn_enemy_near(self.dungeon, self.player.position, self.rng)
            return

        amount = self.rng.randint(MIN_REST_HEAL, MAX_REST_HEAL)
        self.player.heal(amount)
        self.event_bus.emit(Event.RESTED, amount=amount)
        self.enemy_phase()

    def render(self) -> str:
        """Text for the current phase."""
        if self.phase == GamePhase.INVENTORY:
            return "\n".join(
                [
                    "=== Inventory ===",
                    render_inventory(self.player.inventory),
                    "",
                    "Enter item number to use it, or 'b' to go back:",
                ]
            )
        if self.phase == GamePhase.GAME_OVER:
            return "\n".join(
                [
                    render_game_over(self.dungeon, self.player),
                    "",
                    "Press 'r' to restart or 'q' to quit:",
                ]
            )
        return render_screen(self.dungeon, self.player)
