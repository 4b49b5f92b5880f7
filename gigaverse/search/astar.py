"""
Short-horizon A* over run states.

Score is a reward, so cost = -score. For every legal first action a small
best-first search is run from the resulting state; the action whose search
saw the highest score wins. Each sub-search:

- orders the open list by f = g + h (g accumulates -score along the path,
  h = -heuristic, 0 by default which degrades to uniform-cost search)
- scores terminal states when popped but never expands them
- closes a state key on expansion and skips generated neighbours already
  closed
- stops after ``max_iterations`` pops

The returned value is the best score among the start state and every
state generated, whether or not a terminal state was reached.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Set, Tuple

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import Action, LootKind, RunState
from .base import SearchAlgorithm
from .evaluation import EvaluateFn

HeuristicFn = Callable[[RunState], float]


@dataclass
class AStarConfig:
    max_iterations: int = 50
    heuristic_fn: Optional[HeuristicFn] = None
    evaluate_fn: Optional[EvaluateFn] = None

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")


def search_key(state: RunState) -> Tuple:
    """Compact dedup key: progress, player pools and charges, loot kinds."""
    p = state.player
    return (
        state.current_enemy_index,
        p.health.current,
        p.armor.current,
        p.rock.charges,
        p.paper.charges,
        p.scissor.charges,
        state.loot_phase,
        tuple(l.kind.value if isinstance(l.kind, LootKind) else l.kind for l in state.loot_options),
    )


class AStarAlgorithm(SearchAlgorithm):
    name = "astar"

    def __init__(
        self,
        config: Optional[AStarConfig] = None,
        engine: Optional[CombatEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or AStarConfig()
        super().__init__(engine=engine, evaluate_fn=self.config.evaluate_fn, logger=logger)
        self.logger.info("[astar] initialised (max_iterations=%d)", self.config.max_iterations)

    def heuristic(self, state: RunState) -> float:
        if self.config.heuristic_fn is not None:
            return self.config.heuristic_fn(state)
        return 0.0

    def pick_action(self, state: RunState) -> Action:
        actions = state.get_legal_actions()
        if not actions:
            return self._fallback(state, "no legal actions")
        if len(actions) == 1:
            self.logger.debug("[astar] only one legal action => %r", actions[0])
            return actions[0]

        best_action = actions[0]
        best_score = float("-inf")
        for action in actions:
            score = self.a_star_search(self._child(state, action))
            if score > best_score:
                best_score = score
                best_action = action

        self.logger.debug("[astar] picked %r (score=%.2f)", best_action, best_score)
        return best_action

    def a_star_search(self, start: RunState) -> float:
        """Best score seen within the iteration budget, starting at ``start``."""
        start_score = self.evaluate(start)
        best = start_score

        counter = itertools.count()
        g0 = -start_score
        h0 = -self.heuristic(start)
        open_list: List[Tuple[float, int, float, RunState]] = [(g0 + h0, next(counter), g0, start)]
        closed: Set[Tuple] = set()

        iterations = 0
        while open_list and iterations < self.config.max_iterations:
            iterations += 1
            _, _, g, current = heapq.heappop(open_list)

            if current.is_terminal():
                best = max(best, self.evaluate(current))
                continue

            closed.add(search_key(current))
            for action in current.get_legal_actions():
                neighbour = self._child(current, action)
                score = self.evaluate(neighbour)
                if search_key(neighbour) in closed:
                    continue
                g_next = g - score
                f_next = g_next - self.heuristic(neighbour)
                heapq.heappush(open_list, (f_next, next(counter), g_next, neighbour))
                best = max(best, score)

        return best
