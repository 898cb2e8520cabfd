"""Tests for player movement, tile effects, combat, items and levelling."""

import pytest

from crawler.enemy import Enemy
from crawler.event_system import Event
from crawler.items import new_gold, new_health_potion, new_weapon, new_armor, new_key
from crawler.player import Player, MoveOutcome
from crawler.tiles import Tile, Position


MAP = [
    "#######",
    "#.^$+>#",
    "#.....#",
    "#######",
]


@pytest.fixture
def dungeon(dungeon_from_ascii, recorded_events):
    dungeon = dungeon_from_ascii(MAP)
    dungeon.set_event_bus(recorded_events)
    return dungeon


def make_player(position, bus, **stats):
    player = Player(position, **stats)
    player.set_event_bus(bus)
    return player


def events_of(bus):
    return [event_data.event for event_data in bus.received]


class TestMovement:
    def test_move_onto_floor(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)

        assert player.move(1, 0, dungeon, scripted([])) == MoveOutcome.MOVED
        assert player.position == Position(2, 2)
        assert events_of(recorded_events) == [Event.PLAYER_MOVED]

    def test_wall_blocks(self, dungeon, recorded_events, scripted):
        player = make_player(Position(1, 1), recorded_events)

        assert player.move(-1, 0, dungeon, scripted([])) == MoveOutcome.BLOCKED
        assert player.position == Position(1, 1)
        assert events_of(recorded_events) == [Event.MOVE_BLOCKED]

    def test_trap_springs_once(self, dungeon, recorded_events, scripted):
        player = make_player(Position(1, 1), recorded_events)
        rng = scripted([1])

        player.move(1, 0, dungeon, rng)

        assert player.health == 17
        assert dungeon.get_tile(Position(1, 2)) == Tile.FLOOR
        assert Event.TRAP_TRIGGERED in events_of(recorded_events)

        # Step off and back on; a disarmed trap draws nothing
        player.move(-1, 0, dungeon, rng)
        player.move(1, 0, dungeon, rng)
        assert player.health == 17

    def test_treasure_tile_and_gold_pile(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 3), recorded_events)
        dungeon.add_item(new_gold(Position(1, 3), 40))

        player.move(0, -1, dungeon, scripted([5]))

        assert player.gold == 15 + 40
        assert dungeon.get_tile(Position(1, 3)) == Tile.FLOOR
        assert dungeon.get_item_at(Position(1, 3)) is None
        treasure, collected = [
            e for e in recorded_events.received
            if e.event in (Event.TREASURE_FOUND, Event.GOLD_COLLECTED)
        ]
        assert treasure.kwargs == {"amount": 15, "gold": 15}
        assert collected.kwargs == {"amount": 40, "gold": 55}

    def test_door_opens(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 4), recorded_events)

        player.move(0, -1, dungeon, scripted([]))

        assert player.position == Position(1, 4)
        assert dungeon.get_tile(Position(1, 4)) == Tile.FLOOR
        assert Event.DOOR_OPENED in events_of(recorded_events)

    def test_stairs_announced_not_consumed(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 5), recorded_events)

        player.move(0, -1, dungeon, scripted([]))

        assert dungeon.get_tile(Position(1, 5)) == Tile.STAIRS_DOWN
        assert Event.STAIRS_FOUND in events_of(recorded_events)

    def test_deadly_trap(self, dungeon, recorded_events, scripted):
        player = make_player(Position(1, 1), recorded_events, health=2)

        player.move(1, 0, dungeon, scripted([0]))

        assert player.is_defeated
        defeated = recorded_events.received[-1]
        assert defeated.event == Event.PLAYER_DEFEATED
        assert defeated.kwargs == {"cause": "trap"}


class TestCombat:
    def test_kill_goblin(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)
        enemy_id = dungeon.add_enemy(Enemy.named("Goblin", Position(2, 2)))

        # Gold drop roll, then amount (1 + draw)
        outcome = player.move(1, 0, dungeon, scripted([0, 4]))

        assert outcome == MoveOutcome.ATTACKED
        assert player.position == Position(2, 1)
        assert player.experience == 7
        assert player.gold == 5
        assert dungeon.get_enemy(enemy_id) is None
        assert events_of(recorded_events)[-4:] == [
            Event.PLAYER_ATTACKED,
            Event.ENEMY_DEFEATED,
            Event.ENEMY_REMOVED,
            Event.GOLD_DROPPED,
        ]

    def test_kill_without_gold(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)
        dungeon.add_enemy(Enemy.named("Rat", Position(2, 2)))

        player.move(1, 0, dungeon, scripted([1]))

        assert player.gold == 0
        assert player.experience == 7
        assert Event.GOLD_DROPPED not in events_of(recorded_events)

    def test_survivor_strikes_back(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)
        troll = Enemy.named("Troll", Position(2, 2))
        dungeon.add_enemy(troll)

        assert not player.attack_enemy(troll, dungeon, scripted([]))

        assert troll.health == 5
        assert player.health == 18
        counter = recorded_events.received[-1]
        assert counter.event == Event.ENEMY_COUNTERATTACK
        assert counter.kwargs["damage"] == 2

    def test_counterattack_always_hurts(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events, defense=5)
        orc = Enemy.named("Orc", Position(2, 2))
        dungeon.add_enemy(orc)

        player.attack_enemy(orc, dungeon, scripted([]))

        assert player.health == 19

    def test_defeated_in_combat(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events, health=2)
        dungeon.add_enemy(Enemy.named("Troll", Position(2, 2)))

        player.move(1, 0, dungeon, scripted([]))

        assert player.health == 0
        assert player.is_defeated
        assert recorded_events.received[-1].kwargs == {"cause": "Troll"}

    def test_kill_can_level_up(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events, experience=95)
        dungeon.add_enemy(Enemy.named("Goblin", Position(2, 2)))

        player.move(1, 0, dungeon, scripted([1]))

        assert player.level == 2
        assert player.experience == 2
        assert Event.LEVEL_UP in events_of(recorded_events)


class TestLevelUp:
    def test_single_level(self):
        player = Player(Position(1, 1), experience=250)

        assert player.check_level_up() == 1

        assert player.level == 2
        assert player.experience == 150
        assert player.max_health == 25
        assert player.health == 25
        assert player.attack == 4
        assert player.experience_to_next_level == 200

    def test_cascade(self):
        player = Player(Position(1, 1), experience=350, health=3)

        assert player.check_level_up() == 2

        assert player.level == 3
        assert player.experience == 50
        assert player.max_health == 30
        assert player.health == 30
        assert player.attack == 5

    def test_not_enough_experience(self):
        player = Player(Position(1, 1), experience=99)
        assert player.check_level_up() == 0
        assert player.level == 1


class TestItems:
    def test_pick_up_potion(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)
        potion = new_health_potion(Position(2, 2))
        dungeon.add_item(potion)

        player.move(1, 0, dungeon, scripted([]))

        assert potion.collected
        assert len(player.inventory) == 1
        assert player.inventory[0] is not potion
        assert player.inventory[0].name == "Health Potion"
        assert dungeon.get_item_at(Position(2, 2)) is None

    def test_key_is_not_kept(self, dungeon, recorded_events, scripted):
        player = make_player(Position(2, 1), recorded_events)
        key = new_key(Position(2, 2))
        dungeon.add_item(key)

        player.move(1, 0, dungeon, scripted([]))

        assert key.collected
        assert player.inventory == []

    def test_drink_potion(self, recorded_events):
        player = make_player(Position(1, 1), recorded_events, health=5)
        player.inventory.append(new_health_potion(Position(1, 1)))

        assert player.use_item(0)

        assert player.health == 15
        assert player.inventory == []
        assert recorded_events.received[-1].event == Event.POTION_USED

    def test_potion_caps_at_max_health(self):
        player = Player(Position(1, 1), health=15)
        player.inventory.append(new_health_potion(Position(1, 1)))

        player.use_item(0)

        assert player.health == 20

    def test_equip_weapon_and_armor(self):
        player = Player(Position(1, 1))
        player.inventory.append(new_weapon(Position(1, 1), "Sword", 7))
        player.inventory.append(new_armor(Position(1, 1), "Chain Mail", 4))

        assert player.use_item(0)
        assert player.use_item(1)

        assert player.attack == 7
        assert player.defense == 4
        assert len(player.inventory) == 2

    @pytest.mark.parametrize("index", [-1, 0, 3])
    def test_bad_index(self, recorded_events, index):
        player = make_player(Position(1, 1), recorded_events)

        assert not player.use_item(index)
        assert events_of(recorded_events) == [Event.INVALID_ITEM]

    def test_unusable_item(self, recorded_events):
        player = make_player(Position(1, 1), recorded_events)
        player.inventory.append(new_key(Position(1, 1)))

        assert not player.use_item(0)
        assert len(player.inventory) == 1
        assert events_of(recorded_events) == [Event.ITEM_UNUSABLE]
        assert recorded_events.received[0].kwargs == {"name": "Key"}
