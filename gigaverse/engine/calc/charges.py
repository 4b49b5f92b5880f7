"""
Charge bookkeeping for moves.

Rules, applied once per fighter per round:
- The used move spends one charge; spending the last one locks it at -1.
- An unused move at -1 unlocks to 0.
- Any other unused move regains one charge, up to MAX_CHARGES.
"""

from __future__ import annotations

from typing import Optional

from ..state.run import ALL_MOVES, MAX_CHARGES, SPAM_LOCKED, Fighter, Move

__all__ = ["next_charges", "update_charges"]


def next_charges(charges: int, used: bool) -> int:
    """Charge count after one round for a single move."""
    if used:
        if charges > 1:
            return charges - 1
        if charges == 1:
            return SPAM_LOCKED
        return charges
    if charges == SPAM_LOCKED:
        return 0
    if 0 <= charges < MAX_CHARGES:
        return charges + 1
    return charges


def update_charges(fighter: Fighter, used_move: Move) -> Optional[Move]:
    """
    Update all three moves of ``fighter`` after it played ``used_move``.

    Returns:
        The used move if this round spam-locked it, else None.
    """
    locked = None
    for move in ALL_MOVES:
        stat = fighter.move_stat(move)
        used = move is used_move
        if used and stat.charges == 1:
            locked = move
        stat.charges = next_charges(stat.charges, used)
    return locked
