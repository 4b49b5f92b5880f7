"""
State converter: JSON from the Gigaverse game service -> RunState.

Handles the conversion of the service's dungeon payload (run, players,
loot options, enemy templates) to RunState objects for use in the
simulation engine and search algorithms.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from .state.run import (
    ArmorPool,
    Fighter,
    HealthPool,
    LootKind,
    LootOption,
    MAX_CHARGES,
    MoveStat,
    RunState,
    fighter_from_stats,
)

logger = logging.getLogger(__name__)


class MissingRunDataError(ValueError):
    """The service payload lacks the data needed to build a RunState."""


def build_run_state(
    dungeon_data: Dict[str, Any],
    all_enemies: Sequence[Dict[str, Any]],
) -> RunState:
    """
    Convert a dungeon payload plus the enemy roster to a RunState.

    Args:
        dungeon_data: Dict with ``run`` (players, lootPhase, lootOptions)
                      and ``entity`` (ROOM_NUM_CID, 1-based room number)
        all_enemies: Enemy templates in room order, each carrying
                     ``MOVE_STATS_CID_array``

    Returns:
        Validated RunState ready for simulation

    Raises:
        MissingRunDataError: if ``run`` or ``entity`` is missing, or the
                             live enemy's room has no template
        InvalidRunStateError: if the converted state breaks an invariant
    """
    run = dungeon_data.get("run")
    if not run:
        raise MissingRunDataError("Missing dungeon run data (run is null)")
    entity = dungeon_data.get("entity")
    if not entity:
        raise MissingRunDataError("Missing dungeon entity data (entity is null)")

    players = run.get("players") or []
    if not players:
        raise MissingRunDataError("Dungeon run has no players")

    player = player_to_fighter(players[0])
    current_enemy_index = int(entity.get("ROOM_NUM_CID", 1)) - 1
    if len(players) > 1 and not 0 <= current_enemy_index < len(all_enemies):
        raise MissingRunDataError(
            f"Room {current_enemy_index + 1} has a live enemy but only "
            f"{len(all_enemies)} enemy templates"
        )

    # The live enemy comes from the run; the rest from templates
    enemies: List[Fighter] = []
    for i, template in enumerate(all_enemies):
        if i == current_enemy_index and len(players) > 1:
            enemies.append(player_to_fighter(players[1]))
        else:
            enemies.append(enemy_entity_to_fighter(template))

    loot_phase = bool(run.get("lootPhase", False))
    loot_options: List[LootOption] = []
    if loot_phase and run.get("lootOptions"):
        loot_options = [loot_option_from_json(l) for l in run["lootOptions"]]

    state = RunState(
        player=player,
        enemies=enemies,
        current_enemy_index=current_enemy_index,
        loot_phase=loot_phase and bool(loot_options),
        loot_options=loot_options,
    )
    state.validate()
    return state


def player_to_fighter(data: Dict[str, Any]) -> Fighter:
    """Build a Fighter from a service-side player (or live enemy) object."""
    return Fighter(
        rock=_build_move_stat(data.get("rock", {})),
        paper=_build_move_stat(data.get("paper", {})),
        scissor=_build_move_stat(data.get("scissor", {})),
        health=HealthPool(*_pool_values(data.get("health", {}))),
        armor=ArmorPool(*_pool_values(data.get("shield", {}))),
    )


def enemy_entity_to_fighter(entity: Dict[str, Any]) -> Fighter:
    """Build a fresh enemy from its template's stat array."""
    stats = entity.get("MOVE_STATS_CID_array")
    if stats is None:
        raise MissingRunDataError(
            f"Enemy {entity.get('ID_CID', '?')} has no MOVE_STATS_CID_array"
        )
    return fighter_from_stats([int(v) for v in stats])


def loot_option_from_json(data: Dict[str, Any]) -> LootOption:
    """Convert a service loot option; unknown boon types are kept verbatim."""
    raw_kind = data.get("boonTypeString", "")
    kind = LootKind.parse(raw_kind)
    if kind is None:
        logger.warning("Unrecognised boon type %r; keeping it as-is", raw_kind)
    return LootOption(
        kind=kind or raw_kind,
        value1=int(data.get("selectedVal1", 0)),
        value2=int(data.get("selectedVal2", 0)),
    )


def _build_move_stat(data: Dict[str, Any]) -> MoveStat:
    return MoveStat(
        attack=int(data.get("currentATK", 0)),
        defense=int(data.get("currentDEF", 0)),
        charges=int(data.get("currentCharges", MAX_CHARGES)),
    )


def _pool_values(data: Dict[str, Any]):
    """(current, max) from a {current, currentMax} pair."""
    current = int(data.get("current", 0))
    return current, int(data.get("currentMax", current))
