"""
Position evaluation for Gigaverse runs.

Scores a RunState so that higher is always better:
- Progress: one point per enemy defeated
- Survival: health ratio (weighted 2x) and armor ratio
- Build quality: attack+defense of the two strongest moves
- Tempo: a penalty for every spam-locked move

A dead player scores 0 regardless of progress.
"""

from __future__ import annotations

from typing import Callable

from ..engine.state.run import Fighter, RunState

EvaluateFn = Callable[[RunState], float]

HP_WEIGHT = 2.0
ARMOR_WEIGHT = 1.0
SYNERGY_WEIGHT = 0.01
SPAM_LOCK_PENALTY = 0.3


def top_two_synergy(fighter: Fighter) -> int:
    """Sum of attack+defense over the two strongest moves."""
    totals = sorted((s.attack + s.defense for s in fighter.move_stats()), reverse=True)
    return sum(totals[:2])


def spam_locked_count(fighter: Fighter) -> int:
    return sum(1 for s in fighter.move_stats() if s.charges < 0)


def default_evaluate(state: RunState) -> float:
    """Heuristic value of ``state``; 0.0 when the player is dead."""
    p = state.player
    if p.is_dead:
        return 0.0

    return (
        state.current_enemy_index
        + HP_WEIGHT * p.health.ratio
        + ARMOR_WEIGHT * p.armor.ratio
        + SYNERGY_WEIGHT * top_two_synergy(p)
        - SPAM_LOCK_PENALTY * spam_locked_count(p)
    )
