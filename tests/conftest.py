"""
Shared pytest fixtures for the Gigaverse test suite.

This module provides reusable fixtures for:
- Random sources with known seeds (and a deterministic first-choice stub)
- The reference player and enemy
- Runs in combat and in a loot phase
"""

import os
import sys

import numpy as np
import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from gigaverse.engine import (
    CombatEngine,
    LootKind,
    LootOption,
    create_fighter,
    create_run,
    fighter_from_stats,
)


# =============================================================================
# Random Sources
# =============================================================================


class FirstChoiceRng:
    """
    Stand-in for numpy's Generator that always takes the first option.

    integers() -> 0, random() -> ``value``, choice() -> first index.
    """

    def __init__(self, value: float = 0.0):
        self.value = value

    def integers(self, *args, **kwargs):
        return 0

    def random(self, *args, **kwargs):
        return self.value

    def choice(self, a, *args, **kwargs):
        return 0


@pytest.fixture
def rng_seed_42():
    """numpy Generator seeded with 42."""
    return np.random.default_rng(42)


@pytest.fixture
def first_choice_rng():
    return FirstChoiceRng()


@pytest.fixture
def engine():
    """Engine with a fixed seed."""
    return CombatEngine(seed=42)


@pytest.fixture
def deterministic_engine():
    """Engine whose enemy always plays its first charged move."""
    return CombatEngine(rng=FirstChoiceRng())


# =============================================================================
# Fighter Fixtures
# =============================================================================


@pytest.fixture
def reference_player():
    """rock 15/2, paper 1/8, scissor 3/2, hp 18/18, armor 8/8."""
    return create_fighter(rock=(15, 2), paper=(1, 8), scissor=(3, 2), hp=18, armor=8)


@pytest.fixture
def reference_enemy():
    """rock 4/0, paper 0/4, scissor 2/2, hp 4/4, armor 2/2."""
    return fighter_from_stats([4, 0, 0, 4, 2, 2, 4, 2])


@pytest.fixture
def tank_enemy():
    """An enemy that takes many rounds to kill."""
    return fighter_from_stats([3, 3, 3, 3, 3, 3, 60, 10])


# =============================================================================
# Run Fixtures
# =============================================================================


@pytest.fixture
def reference_run(reference_player, reference_enemy):
    """Reference player against the single reference enemy."""
    return create_run(reference_player, [reference_enemy])


@pytest.fixture
def long_run(reference_player, tank_enemy, reference_enemy):
    return create_run(reference_player, [tank_enemy, reference_enemy])


@pytest.fixture
def loot_options():
    """Heal at full health, max armor, and two rock upgrades."""
    return [
        LootOption(LootKind.HEAL, 6, 0),
        LootOption(LootKind.ADD_MAX_ARMOR, 1, 0),
        LootOption(LootKind.UPGRADE_ROCK, 2, 0),
        LootOption(LootKind.UPGRADE_ROCK, 0, 2),
    ]


@pytest.fixture
def loot_run(reference_player, reference_enemy, loot_options):
    """Full-health reference player in a loot phase."""
    return create_run(reference_player, [reference_enemy], loot_options=loot_options)
