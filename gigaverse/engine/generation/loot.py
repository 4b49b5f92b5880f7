"""
Gigaverse - Loot Generation

Random boon generation for offline simulations:
- Boon type drawn uniformly from the six kinds
- Rarity drawn from weighted tiers (common .. legendary)
- Values looked up per kind and rarity

Upgrade boons raise either attack or defense, never both.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..state.run import LootKind, LootOption

__all__ = [
    "BOON_WEIGHTS",
    "RARITY_WEIGHTS",
    "HEAL_VALUES",
    "MAX_HEALTH_VALUES",
    "MAX_ARMOR_VALUES",
    "UPGRADE_VALUES",
    "LootGenerator",
]


# =============================================================================
# Weighted distributions & stat tables
# =============================================================================

BOON_WEIGHTS = {
    LootKind.HEAL: 1.0,
    LootKind.ADD_MAX_HEALTH: 1.0,
    LootKind.ADD_MAX_ARMOR: 1.0,
    LootKind.UPGRADE_ROCK: 1.0,
    LootKind.UPGRADE_PAPER: 1.0,
    LootKind.UPGRADE_SCISSOR: 1.0,
}

# 40% common, 30% uncommon, 15% rare, 10% epic, 5% legendary
RARITY_WEIGHTS = [0.4, 0.3, 0.15, 0.1, 0.05]

HEAL_VALUES = [6, 8, 12, 25, 36]
MAX_HEALTH_VALUES = [2, 4, 6, 8, 12]
# No common tier: indexed by rarity - 1
MAX_ARMOR_VALUES = [1, 2, 4, 5]
UPGRADE_VALUES = [1, 2, 3, 4, 5]


class LootGenerator:
    """Weighted random loot for offline runs and scenario files."""

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._kinds = list(BOON_WEIGHTS)
        weights = np.array([BOON_WEIGHTS[k] for k in self._kinds], dtype=float)
        self._kind_probs = weights / weights.sum()
        self._rarity_probs = np.array(RARITY_WEIGHTS, dtype=float)
        self._rarity_probs /= self._rarity_probs.sum()

    def pick_kind(self) -> LootKind:
        return self._kinds[int(self.rng.choice(len(self._kinds), p=self._kind_probs))]

    def pick_rarity(self) -> int:
        """Rarity tier 0..4."""
        return int(self.rng.choice(len(self._rarity_probs), p=self._rarity_probs))

    def generate_option(self) -> LootOption:
        kind = self.pick_kind()
        rarity = self.pick_rarity()

        # Max armor has no common tier: re-roll the whole boon.
        while kind is LootKind.ADD_MAX_ARMOR and rarity == 0:
            kind = self.pick_kind()
            rarity = self.pick_rarity()

        if kind is LootKind.HEAL:
            return LootOption(kind, HEAL_VALUES[rarity], 0)
        if kind is LootKind.ADD_MAX_HEALTH:
            return LootOption(kind, MAX_HEALTH_VALUES[rarity], 0)
        if kind is LootKind.ADD_MAX_ARMOR:
            return LootOption(kind, MAX_ARMOR_VALUES[rarity - 1], 0)

        value = UPGRADE_VALUES[rarity]
        if self.rng.random() < 0.5:
            return LootOption(kind, value, 0)
        return LootOption(kind, 0, value)

    def generate_options(self, count: int) -> List[LootOption]:
        return [self.generate_option() for _ in range(count)]

    __call__ = generate_options
