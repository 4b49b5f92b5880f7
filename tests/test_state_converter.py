"""
Tests for converting game service JSON to RunState.
"""

import logging

import pytest

from gigaverse.engine import InvalidRunStateError, LootKind, MissingRunDataError, build_run_state
from gigaverse.engine.state_converter import (
    enemy_entity_to_fighter,
    loot_option_from_json,
    player_to_fighter,
)


def _service_fighter(rock=(15, 2, 3), paper=(1, 8, 3), scissor=(3, 2, 3), hp=(18, 18), shield=(8, 8)):
    def move(values):
        return {"currentATK": values[0], "currentDEF": values[1], "currentCharges": values[2]}

    return {
        "rock": move(rock),
        "paper": move(paper),
        "scissor": move(scissor),
        "health": {"current": hp[0], "currentMax": hp[1]},
        "shield": {"current": shield[0], "currentMax": shield[1]},
    }


@pytest.fixture
def enemy_templates():
    return [
        {"ID_CID": "1", "MOVE_STATS_CID_array": [4, 0, 0, 4, 2, 2, 4, 2]},
        {"ID_CID": "2", "MOVE_STATS_CID_array": [4, 2, 2, 4, 2, 3, 2, 5]},
        {"ID_CID": "3", "MOVE_STATS_CID_array": [4, 2, 2, 4, 5, 2, 6, 4]},
    ]


@pytest.fixture
def dungeon_data():
    """Player in room 2, fighting a wounded second enemy."""
    return {
        "run": {
            "players": [
                _service_fighter(paper=(1, 8, -1), hp=(12, 18)),
                _service_fighter(rock=(4, 2, 1), paper=(2, 4, 3), scissor=(2, 3, 2), hp=(1, 2), shield=(0, 5)),
            ],
            "lootPhase": False,
            "lootOptions": [
                {"boonTypeString": "Heal", "selectedVal1": 6, "selectedVal2": 0},
            ],
        },
        "entity": {"ROOM_NUM_CID": 2},
    }


class TestFighterConversion:

    def test_player_to_fighter(self):
        f = player_to_fighter(_service_fighter(paper=(1, 8, -1), hp=(12, 18)))
        assert (f.rock.attack, f.rock.defense, f.rock.charges) == (15, 2, 3)
        assert f.paper.charges == -1
        assert (f.health.current, f.health.max) == (12, 18)
        assert (f.armor.current, f.armor.max) == (8, 8)

    def test_enemy_entity_to_fighter(self, enemy_templates):
        f = enemy_entity_to_fighter(enemy_templates[2])
        assert (f.scissor.attack, f.scissor.defense) == (5, 2)
        assert f.health.current == f.health.max == 6
        assert f.armor.current == f.armor.max == 4

    def test_enemy_without_stats(self):
        with pytest.raises(MissingRunDataError):
            enemy_entity_to_fighter({"ID_CID": "9"})


class TestLootConversion:

    def test_known_kind(self):
        loot = loot_option_from_json(
            {"boonTypeString": "UpgradePaper", "selectedVal1": 0, "selectedVal2": 3}
        )
        assert loot.kind is LootKind.UPGRADE_PAPER
        assert (loot.value1, loot.value2) == (0, 3)

    def test_unknown_kind_kept_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            loot = loot_option_from_json({"boonTypeString": "Teleport", "selectedVal1": 1})
        assert loot.kind == "Teleport"
        assert loot.value2 == 0
        assert "Teleport" in caplog.text


class TestBuildRunState:

    def test_combat_state(self, dungeon_data, enemy_templates):
        state = build_run_state(dungeon_data, enemy_templates)
        assert state.current_enemy_index == 1
        assert state.player.health.current == 12
        # live enemy comes from the run, the others from templates
        assert state.enemies[1].health.current == 1
        assert state.enemies[1].rock.charges == 1
        assert state.enemies[0].health.current == 4
        assert state.enemies[2].health.current == 6
        # loot ignored outside a loot phase
        assert not state.loot_phase
        assert state.loot_options == []

    def test_loot_phase(self, dungeon_data, enemy_templates):
        dungeon_data["run"]["lootPhase"] = True
        state = build_run_state(dungeon_data, enemy_templates)
        assert state.loot_phase
        assert state.loot_options[0].kind is LootKind.HEAL

    @pytest.mark.parametrize("missing", ["run", "entity"])
    def test_missing_data(self, dungeon_data, enemy_templates, missing):
        dungeon_data[missing] = None
        with pytest.raises(MissingRunDataError):
            build_run_state(dungeon_data, enemy_templates)

    def test_invalid_state_rejected(self, dungeon_data, enemy_templates):
        dungeon_data["run"]["players"][0]["health"]["current"] = 40
        with pytest.raises(InvalidRunStateError):
            build_run_state(dungeon_data, enemy_templates)

    @pytest.mark.parametrize("room", [0, 4, 5])
    def test_live_enemy_room_out_of_range(self, dungeon_data, enemy_templates, room):
        dungeon_data["entity"]["ROOM_NUM_CID"] = room
        with pytest.raises(MissingRunDataError, match="enemy templates"):
            build_run_state(dungeon_data, enemy_templates)

    def test_room_past_roster_without_live_enemy(self, dungeon_data, enemy_templates):
        dungeon_data["run"]["players"] = dungeon_data["run"]["players"][:1]
        dungeon_data["entity"]["ROOM_NUM_CID"] = 5
        with pytest.raises(InvalidRunStateError):
            build_run_state(dungeon_data, enemy_templates)

    def test_missing_data_is_value_error(self):
        assert issubclass(MissingRunDataError, ValueError)
