"""
State module - run state and action types.

Contains:
- Fighter records (moves, health, armor)
- Loot options
- Run state tracking for tree search
"""

from .run import (
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
    MAX_LOOT_OPTIONS,
    Move,
    MOVE_PAPER,
    MOVE_ROCK,
    MOVE_SCISSOR,
    MoveStat,
    RunState,
    SPAM_LOCKED,
    UPGRADE_KINDS,
    create_fighter,
    create_run,
    fighter_from_stats,
    get_legal_actions,
)

__all__ = [
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
    "MAX_LOOT_OPTIONS",
    "Move",
    "MOVE_PAPER",
    "MOVE_ROCK",
    "MOVE_SCISSOR",
    "MoveStat",
    "RunState",
    "SPAM_LOCKED",
    "UPGRADE_KINDS",
    "create_fighter",
    "create_run",
    "fighter_from_stats",
    "get_legal_actions",
]
