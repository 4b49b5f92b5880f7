"""
Simulation module - offline runs and algorithm comparison.
"""

from .runner import (
    ComparisonResult,
    DEFAULT_ENEMY_STATS,
    DEFAULT_PLAYER,
    Scenario,
    SimulationConfig,
    compare_algorithms,
    default_run,
    generate_scenarios,
    load_scenarios,
    play_run,
    save_scenarios,
)

__all__ = [
    "ComparisonResult",
    "DEFAULT_ENEMY_STATS",
    "DEFAULT_PLAYER",
    "Scenario",
    "SimulationConfig",
    "compare_algorithms",
    "default_run",
    "generate_scenarios",
    "load_scenarios",
    "play_run",
    "save_scenarios",
]
