"""
Text rendering of the game state, and human-readable messages for events.
"""

from typing import Callable, Dict, List, Optional

from .event_system import Event, EventData
from .items import Item
from .player import Player
from .tiles import Tile, Position, TILE_TO_ASCII
from .world import Dungeon

PLAYER_SYMBOL = "@"

HELP_TEXT = """
=== Instructions ===
Movement: w/up, a/left, s/down, d/right
Actions:
  i - Open inventory
  > - Descend stairs (when standing on them)
  r - Rest to recover health
  h - Show this help
  q - Quit game

Symbols:
  @ - Player
  . - Floor
  # - Wall
  + - Door
  $ - Treasure
  ^ - Trap
  > - Stairs down
  g/o/T/r/s - Enemies (goblin, orc, troll, rat, skeleton)

Combat: Move into enemies to attack them
"""


def cell_char(dungeon: Dungeon, player_position: Position, row: int, col: int) -> str:
    """Character for one cell: a living enemy beats the player, who beats the terrain."""
    position = Position(row=row, column=col)
    enemy = dungeon.get_enemy_at(position)
    if enemy is not None:
        return enemy.symbol
    if position == player_position:
        return PLAYER_SYMBOL
    return TILE_TO_ASCII[Tile(dungeon.map[row, col])]


def render_dungeon_ascii(dungeon: Dungeon, player_position: Position) -> str:
    """Convert the dungeon, its enemies and the player to text, one line per row."""
    lines = []
    for row in range(dungeon.rows):
        lines.append(
            "".join(cell_char(dungeon, player_position, row, col) for col in range(dungeon.cols))
        )
    return "\n".join(lines)


def status_line(player: Player) -> str:
    return (
        f"Health: {player.health}/{player.max_health} | Attack: {player.attack} | "
        f"Defense: {player.defense} | Gold: {player.gold} | Level: {player.level} | "
        f"Exp: {player.experience}/{player.experience_to_next_level}"
    )


def render_screen(dungeon: Dungeon, player: Player) -> str:
    """Everything shown while playing: level header, map and status line."""
    return "\n".join(
        [
            f"Dungeon Level: {dungeon.level}",
            render_dungeon_ascii(dungeon, player.position),
            status_line(player),
        ]
    )


def render_inventory(inventory: List[Item]) -> str:
    if not inventory:
        return "Your inventory is empty."
    lines = ["Inventory:"]
    for number, item in enumerate(inventory, start=1):
        lines.append(f"{number}. {item.name} ({item.description})")
    return "\n".join(lines)


def render_game_over(dungeon: Dungeon, player: Player) -> str:
    return "\n".join(
        [
            "=== GAME OVER ===",
            f"You died on dungeon level {dungeon.level}.",
            f"Final score: {player.gold} gold collected.",
        ]
    )


_MESSAGES: Dict[Event, Callable[[Dict], str]] = {
    Event.LEVEL_DESCENDED: lambda kw: f"You descend to dungeon level {kw['level']}...",
    Event.NO_STAIRS: lambda kw: "There are no stairs here.",
    Event.GAME_RESTARTED: lambda kw: "A new adventure begins.",
    Event.MOVE_BLOCKED: lambda kw: "You can't move there!",
    Event.DOOR_OPENED: lambda kw: "You open the door.",
    Event.STAIRS_FOUND: lambda kw: (
        "You found stairs leading down! Press '>' to descend to the next level."
    ),
    Event.TREASURE_FOUND: lambda kw: f"You found some gold! You now have {kw['gold']} gold.",
    Event.TRAP_TRIGGERED: lambda kw: f"You triggered a trap! You take {kw['damage']} damage.",
    Event.PLAYER_ATTACKED: lambda kw: f"You attack the {kw['name']} for {kw['damage']} damage!",
    Event.ENEMY_DEFEATED: lambda kw: (
        f"You defeated the {kw['name']}! You gained {kw['experience']} experience points."
    ),
    Event.ENEMY_COUNTERATTACK: lambda kw: f"The {kw['name']} attacks you for {kw['damage']} damage!",
    Event.GOLD_DROPPED: lambda kw: f"You found {kw['amount']} gold!",
    Event.LEVEL_UP: lambda kw: (
        f"Level up! You are now level {kw['level']}. Your health increased to "
        f"{kw['max_health']} and your attack increased to {kw['attack']}."
    ),
    Event.PLAYER_DEFEATED: lambda kw: (
        "You died from a trap! Game over."
        if kw.get("cause") == "trap"
        else "You have been defeated! Game over."
    ),
    Event.GOLD_COLLECTED: lambda kw: (
        f"You collected {kw['amount']} gold! You now have {kw['gold']} gold."
    ),
    Event.ITEM_COLLECTED: lambda kw: f"You picked up a {kw['name']}.",
    Event.POTION_USED: lambda kw: (
        f"You drink the {kw['name']} and heal for {kw['amount']} health points."
    ),
    Event.WEAPON_EQUIPPED: lambda kw: (
        f"You equip the {kw['name']}. Your attack is now {kw['attack']}."
    ),
    Event.ARMOR_EQUIPPED: lambda kw: (
        f"You equip the {kw['name']}. Your defense is now {kw['defense']}."
    ),
    Event.INVALID_ITEM: lambda kw: "Invalid item selection.",
    Event.ITEM_UNUSABLE: lambda kw: f"You can't use the {kw['name']}.",
    Event.RESTED: lambda kw: f"You rest and recover {kw['amount']} health points.",
    Event.REST_INTERRUPTED: lambda kw: "Your rest is interrupted by a wandering monster!",
    Event.ENEMY_ADDED: lambda kw: f"A {kw['name']} appears!",
    Event.INVALID_COMMAND: lambda kw: "Unknown command. Type 'h' or 'help' for instructions.",
    Event.HELP_REQUESTED: lambda kw: HELP_TEXT,
}


def describe_event(event_data: EventData) -> Optional[str]:
    """Message for an event, or None for events the player doesn't need to see."""
    formatter = _MESSAGES.get(event_data.event)
    if formatter is None:
        return None
    return formatter(event_data.kwargs)
