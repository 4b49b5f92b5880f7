"""
Gigaverse Engine

A Python model of the Gigaverse dungeon: rock-paper-scissors duels against
a sequence of enemies, with loot picks between fights.

Core subsystems:
- state: fighters, loot options, run state, action types
- calc: round resolution, damage/armor and charge formulas
- combat_engine: the transition engine (rounds, loot, action dispatch)
- generation: random loot for offline runs
- state_converter: service JSON -> RunState

Usage:
    from gigaverse.engine import CombatEngine, create_fighter, create_run

    engine = CombatEngine(seed=7)
    state = create_run(player, enemies)
    for action in state.get_legal_actions():
        next_state = engine.step(state.copy(), action)
"""

from .state.run import (
    Action,
    ActionType,
    ALL_MOVES,
    ArmorPool,
    Fighter,
    HealthPool,
    InvalidRunStateError,
    LootKind,
    LootOption,
    MAX_CHARGES,
    Move,
    MOVE_PAPER,
    MOVE_ROCK,
    MOVE_SCISSOR,
    MoveStat,
    RunState,
    SPAM_LOCKED,
    create_fighter,
    create_run,
    fighter_from_stats,
    get_legal_actions,
)
from .calc.damage import RoundOutcome, apply_damage_and_armor, beats, resolve_round
from .calc.charges import next_charges, update_charges
from .combat_engine import CombatEngine, RunResult
from .generation.loot import LootGenerator
from .state_converter import MissingRunDataError, build_run_state

__all__ = [
    # State
    "Action",
    "ActionType",
    "ALL_MOVES",
    "ArmorPool",
    "Fighter",
    "HealthPool",
    "InvalidRunStateError",
    "LootKind",
    "LootOption",
    "MAX_CHARGES",
    "Move",
    "MOVE_PAPER",
    "MOVE_ROCK",
    "MOVE_SCISSOR",
    "MoveStat",
    "RunState",
    "SPAM_LOCKED",
    "create_fighter",
    "create_run",
    "fighter_from_stats",
    "get_legal_actions",
    # Calc
    "RoundOutcome",
    "apply_damage_and_armor",
    "beats",
    "next_charges",
    "resolve_round",
    "update_charges",
    # Engine
    "CombatEngine",
    "RunResult",
    "LootGenerator",
    # Service boundary
    "MissingRunDataError",
    "build_run_state",
]
