"""
Tests for random loot generation.
"""

import pytest

from gigaverse.engine import LootGenerator, LootKind
from gigaverse.engine.generation import (
    HEAL_VALUES,
    MAX_ARMOR_VALUES,
    MAX_HEALTH_VALUES,
    UPGRADE_VALUES,
)
from gigaverse.engine.state import UPGRADE_KINDS


@pytest.fixture
def many_options():
    return LootGenerator(seed=1234).generate_options(2000)


class TestLootGenerator:

    def test_count(self):
        assert len(LootGenerator(seed=1).generate_options(4)) == 4
        assert LootGenerator(seed=1)(0) == []

    def test_same_seed_same_options(self):
        assert LootGenerator(seed=9).generate_options(20) == LootGenerator(seed=9).generate_options(20)

    def test_all_kinds_appear(self, many_options):
        assert {o.kind for o in many_options} == set(LootKind)

    def test_values_match_tables(self, many_options):
        for o in many_options:
            if o.kind is LootKind.HEAL:
                assert o.value1 in HEAL_VALUES and o.value2 == 0
            elif o.kind is LootKind.ADD_MAX_HEALTH:
                assert o.value1 in MAX_HEALTH_VALUES and o.value2 == 0
            elif o.kind is LootKind.ADD_MAX_ARMOR:
                assert o.value1 in MAX_ARMOR_VALUES and o.value2 == 0
            else:
                assert o.kind in UPGRADE_KINDS
                assert (o.value1 == 0) != (o.value2 == 0)
                assert max(o.value1, o.value2) in UPGRADE_VALUES

    def test_common_tier_most_frequent(self, many_options):
        heals = [o.value1 for o in many_options if o.kind is LootKind.HEAL]
        assert heals.count(HEAL_VALUES[0]) > heals.count(HEAL_VALUES[-1])

    def test_first_choice_is_common_heal(self, first_choice_rng):
        option = LootGenerator(rng=first_choice_rng).generate_option()
        assert option.kind is LootKind.HEAL
        assert option.value1 == 6
