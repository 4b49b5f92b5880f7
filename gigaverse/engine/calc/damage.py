"""
Round Calculator - Single source of truth for round outcome and damage.

Design principles:
1. Pure functions for outcome resolution - no side effects, no state
2. Clear calculation order matching the server exactly
3. Optimized for millions of calls in simulations

Resolution order for one round:
1. RPS result (tie, player wins, enemy wins)
2. Winner(s) deal their move's attack and gain its defense as armor
3. Attacker armor increases first (capped at max)
4. Damage drains defender armor, then health (floored at 0)
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state.run import Fighter, Move

__all__ = [
    "BEATS",
    "RoundOutcome",
    "beats",
    "resolve_round",
    "apply_damage_and_armor",
]


# =============================================================================
# CONSTANTS
# =============================================================================

# winner -> loser
BEATS = {
    Move.ROCK: Move.SCISSOR,
    Move.PAPER: Move.ROCK,
    Move.SCISSOR: Move.PAPER,
}


@dataclass(frozen=True)
class RoundOutcome:
    """Damage dealt and armor gained by each side in one round."""

    damage_to_enemy: int = 0
    damage_to_player: int = 0
    armor_gain_player: int = 0
    armor_gain_enemy: int = 0


def beats(move: Move, other: Move) -> bool:
    """True if ``move`` wins against ``other``."""
    return BEATS[move] is other


# =============================================================================
# OUTCOME RESOLUTION
# =============================================================================

def resolve_round(
    player_move: Move,
    enemy_move: Move,
    player: Fighter,
    enemy: Fighter,
) -> RoundOutcome:
    """
    Figure out how much damage each side deals, plus how much armor they gain.

    A tie counts as both sides winning. Otherwise only the winner deals its
    attack and gains its defense; the loser deals and gains nothing.
    """
    p_stats = player.move_stat(player_move)
    e_stats = enemy.move_stat(enemy_move)

    if player_move is enemy_move:
        return RoundOutcome(
            damage_to_enemy=p_stats.attack,
            damage_to_player=e_stats.attack,
            armor_gain_player=p_stats.defense,
            armor_gain_enemy=e_stats.defense,
        )
    if beats(player_move, enemy_move):
        return RoundOutcome(
            damage_to_enemy=p_stats.attack,
            armor_gain_player=p_stats.defense,
        )
    return RoundOutcome(
        damage_to_player=e_stats.attack,
        armor_gain_enemy=e_stats.defense,
    )


# =============================================================================
# DAMAGE APPLICATION
# =============================================================================

def apply_damage_and_armor(
    incoming_damage: int,
    armor_gain: int,
    attacker: Fighter,
    defender: Fighter,
) -> int:
    """
    Apply one side's hit. Mutates both fighters.

    The attacker gains armor first, then the defender soaks the damage with
    armor before health takes the rest.

    Returns:
        HP actually lost by the defender.
    """
    attacker.armor.current = min(attacker.armor.current + armor_gain, attacker.armor.max)

    remaining = max(0, incoming_damage)
    absorbed = min(defender.armor.current, remaining)
    defender.armor.current -= absorbed
    remaining -= absorbed

    if remaining <= 0:
        return 0
    old_hp = defender.health.current
    defender.health.current = max(0, old_hp - remaining)
    return old_hp - defender.health.current
