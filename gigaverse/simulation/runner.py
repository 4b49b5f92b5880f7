"""
Run driver and algorithm comparison.

Provides:
1. play_run - drive one run with a search algorithm on an authoritative state
2. Scenario files - seeded, pre-rolled loot per enemy (JSON)
3. compare_algorithms - average progress and survival rate per algorithm

Every scenario carries a seed, so a comparison replays identical enemy
moves and rollouts for every algorithm.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from ..engine.combat_engine import DEFAULT_MAX_ROUNDS_PER_ENEMY, CombatEngine, RunResult
from ..engine.generation.loot import LootGenerator
from ..engine.state.run import (
    Fighter,
    LootOption,
    RunState,
    create_fighter,
    create_run,
    fighter_from_stats,
)
from ..search.base import SearchAlgorithm
from ..search.registry import create_algorithm

logger = logging.getLogger(__name__)

LootSchedule = Union[Sequence[Sequence[LootOption]], Callable[[int], List[LootOption]]]
AlgorithmFactory = Callable[[CombatEngine], SearchAlgorithm]


# =============================================================================
# Reference roster
# =============================================================================

DEFAULT_PLAYER = create_fighter(
    rock=(15, 2),
    paper=(1, 8),
    scissor=(3, 2),
    hp=18,
    armor=8,
)

# [rockAtk, rockDef, paperAtk, paperDef, scissorAtk, scissorDef, maxHp, maxArmor]
DEFAULT_ENEMY_STATS: List[List[int]] = [
    [4, 0, 0, 4, 2, 2, 4, 2],
    [4, 2, 2, 4, 2, 3, 2, 5],
    [4, 2, 2, 4, 5, 2, 6, 4],
    [4, 2, 7, 2, 2, 4, 9, 6],
    [2, 3, 7, 5, 3, 4, 12, 8],
    [7, 6, 5, 6, 5, 6, 14, 5],
    [5, 4, 4, 5, 10, 5, 15, 5],
    [7, 4, 11, 7, 5, 6, 10, 15],
    [9, 6, 7, 7, 11, 4, 17, 10],
    [15, 3, 13, 12, 12, 6, 18, 14],
    [12, 5, 6, 12, 18, 8, 22, 15],
    [14, 10, 19, 4, 8, 12, 26, 18],
    [21, 0, 10, 5, 7, 5, 30, 20],
    [10, 5, 21, 0, 8, 12, 30, 20],
    [10, 10, 12, 4, 21, 0, 30, 20],
]


def default_run(enemy_count: Optional[int] = None, player: Optional[Fighter] = None) -> RunState:
    """Fresh run against the first ``enemy_count`` reference enemies."""
    stats = DEFAULT_ENEMY_STATS if enemy_count is None else DEFAULT_ENEMY_STATS[:enemy_count]
    return create_run(
        (player or DEFAULT_PLAYER).copy(),
        [fighter_from_stats(s) for s in stats],
    )


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class SimulationConfig:
    """Knobs for offline runs."""

    max_rounds_per_enemy: int = DEFAULT_MAX_ROUNDS_PER_ENEMY
    loot_options_count: int = 3
    seed: Optional[int] = None

    def __post_init__(self):
        if self.max_rounds_per_enemy <= 0:
            raise ValueError(
                f"max_rounds_per_enemy must be > 0, got {self.max_rounds_per_enemy}"
            )
        if self.loot_options_count < 0:
            raise ValueError(f"loot_options_count must be >= 0, got {self.loot_options_count}")


# =============================================================================
# Run driver
# =============================================================================

def _scheduled_loot(schedule: Optional[LootSchedule], enemy_index: int) -> List[LootOption]:
    if schedule is None:
        return []
    if callable(schedule):
        return list(schedule(enemy_index))
    if enemy_index < len(schedule):
        return list(schedule[enemy_index])
    return []


def play_run(
    state: RunState,
    algorithm: SearchAlgorithm,
    engine: CombatEngine,
    loot_schedule: Optional[LootSchedule] = None,
    max_rounds_per_enemy: int = DEFAULT_MAX_ROUNDS_PER_ENEMY,
) -> RunResult:
    """
    Play ``state`` to the end with ``algorithm``. Mutates ``state``.

    Each duel asks the algorithm for an action and applies it until one
    side dies. After a victory the enemy's scheduled loot (a list per
    enemy index, or a callable taking the index) opens a loot phase for
    the algorithm to pick from. A duel hitting ``max_rounds_per_enemy``
    ends the run as a stalemate, which counts as not survived. A loot
    phase already open on ``state`` is picked from first; when it follows
    the current enemy's defeat, that enemy's scheduled loot is skipped.
    """
    enemies_defeated = 0
    rounds = 0
    stalled = False

    while not state.is_terminal():
        enemy = state.current_enemy()
        # Loot already open on the state belongs to the last victory
        resumed_loot = state.in_loot_phase()
        if resumed_loot:
            engine.apply_action(state, algorithm.pick_action(state))
        won_before_duel = enemy.is_dead
        duel_rounds = 0
        while not enemy.is_dead and not state.player.is_dead:
            if duel_rounds >= max_rounds_per_enemy:
                stalled = True
                break
            engine.apply_action(state, algorithm.pick_action(state))
            duel_rounds += 1
        rounds += duel_rounds

        if stalled or state.player.is_dead:
            break

        enemies_defeated += 1
        options = []
        if not (resumed_loot and won_before_duel):
            options = _scheduled_loot(loot_schedule, state.current_enemy_index)
        if options:
            state.loot_options = options
            state.loot_phase = True
            engine.apply_action(state, algorithm.pick_action(state))
        state.current_enemy_index += 1

    if stalled:
        logger.warning(
            "Stalemate vs enemy %d after %d rounds",
            state.current_enemy_index,
            max_rounds_per_enemy,
        )

    return RunResult(
        final_state=state,
        enemies_defeated=enemies_defeated,
        survived=not state.player.is_dead and not stalled,
        rounds=rounds,
    )


# =============================================================================
# Scenarios
# =============================================================================

@dataclass
class Scenario:
    """A reproducible run: engine seed plus the loot offered after each enemy."""

    seed: int
    loot_options: List[List[LootOption]] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "seed": self.seed,
            "loot_options": [[l.to_dict() for l in opts] for opts in self.loot_options],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> Scenario:
        return cls(
            seed=int(data["seed"]),
            loot_options=[
                [LootOption.from_dict(l) for l in opts] for opts in data.get("loot_options", [])
            ],
        )


def generate_scenarios(
    count: int,
    enemy_count: int,
    seed: Optional[int] = None,
    options_per_enemy: int = 4,
) -> List[Scenario]:
    """Roll ``count`` scenarios with ``options_per_enemy`` loot options per enemy."""
    rng = np.random.default_rng(seed)
    loot = LootGenerator(rng=rng)
    scenarios = []
    for _ in range(count):
        scenario_seed = int(rng.integers(2**31 - 1))
        scenarios.append(
            Scenario(
                seed=scenario_seed,
                loot_options=[loot.generate_options(options_per_enemy) for _ in range(enemy_count)],
            )
        )
    return scenarios


def save_scenarios(path: Union[str, Path], scenarios: Sequence[Scenario]) -> None:
    path = Path(path)
    path.write_text(json.dumps([s.to_dict() for s in scenarios], indent=2))
    logger.info("Wrote %d scenarios to %s", len(scenarios), path)


def load_scenarios(path: Union[str, Path]) -> List[Scenario]:
    """
    Read scenarios written by save_scenarios.

    Raises:
        ValueError: the file is not a valid scenario list
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
        return [Scenario.from_dict(item) for item in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid scenario file {path}: {e}") from e


# =============================================================================
# Comparison
# =============================================================================

@dataclass
class ComparisonResult:
    """Aggregate outcome of one algorithm over a scenario set."""

    name: str
    runs: int
    average_enemies_defeated: float
    survival_rate: float
    results: List[RunResult] = field(default_factory=list, repr=False)

    def summary(self) -> str:
        return (
            f"Algorithm: {self.name}\n"
            f"Average Enemies defeated: {self.average_enemies_defeated:.2f}\n"
            f"Survival Rate: {self.survival_rate * 100:.2f}%"
        )


def compare_algorithms(
    initial_state: RunState,
    scenarios: Sequence[Scenario],
    algorithms: Union[Sequence[str], Mapping[str, AlgorithmFactory]],
    max_rounds_per_enemy: int = DEFAULT_MAX_ROUNDS_PER_ENEMY,
) -> List[ComparisonResult]:
    """
    Run every algorithm over every scenario.

    ``algorithms`` is either a list of registry names or a mapping from a
    display name to a factory taking the scenario's engine. Each run gets
    a fresh engine seeded from its scenario and a copy of ``initial_state``.
    """
    if isinstance(algorithms, Mapping):
        factories = dict(algorithms)
    else:
        factories = {
            name: (lambda engine, name=name: create_algorithm(name, engine=engine))
            for name in algorithms
        }

    comparison = []
    for name, factory in factories.items():
        results = []
        for scenario in scenarios:
            engine = CombatEngine(seed=scenario.seed)
            results.append(
                play_run(
                    initial_state.copy(),
                    factory(engine),
                    engine,
                    loot_schedule=scenario.loot_options,
                    max_rounds_per_enemy=max_rounds_per_enemy,
                )
            )

        runs = len(results)
        comparison.append(
            ComparisonResult(
                name=name,
                runs=runs,
                average_enemies_defeated=(
                    sum(r.enemies_defeated for r in results) / runs if runs else 0.0
                ),
                survival_rate=sum(1 for r in results if r.survived) / runs if runs else 0.0,
                results=results,
            )
        )
        logger.info(
            "%s: avg defeated %.2f, survival %.1f%% over %d runs",
            name,
            comparison[-1].average_enemies_defeated,
            comparison[-1].survival_rate * 100,
            runs,
        )
    return comparison
