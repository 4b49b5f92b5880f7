"""
Generation module - random content for offline simulation.
"""

from .loot import (
    BOON_WEIGHTS,
    HEAL_VALUES,
    LootGenerator,
    MAX_ARMOR_VALUES,
    MAX_HEALTH_VALUES,
    RARITY_WEIGHTS,
    UPGRADE_VALUES,
)

__all__ = [
    "BOON_WEIGHTS",
    "HEAL_VALUES",
    "LootGenerator",
    "MAX_ARMOR_VALUES",
    "MAX_HEALTH_VALUES",
    "RARITY_WEIGHTS",
    "UPGRADE_VALUES",
]
