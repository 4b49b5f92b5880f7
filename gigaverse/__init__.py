"""
Gigaverse run engine and search algorithms.

Subpackages:
- engine: run state, round rules, loot, service JSON conversion
- search: evaluation function and the five action pickers
- simulation: run driver, scenario files, algorithm comparison
"""

import logging

from .engine import CombatEngine, RunState, build_run_state, create_fighter, create_run
from .search import ALGORITHM_NAMES, create_algorithm, default_evaluate

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ALGORITHM_NAMES",
    "CombatEngine",
    "RunState",
    "build_run_state",
    "create_algorithm",
    "create_fighter",
    "create_run",
    "default_evaluate",
]
