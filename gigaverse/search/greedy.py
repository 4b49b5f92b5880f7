"""
Greedy one-ply policy.

- Loot phase: apply each option to a copy and keep the best evaluation.
- Combat: score each available move by its current stats
  (attack * atk_weight + defense * def_weight), no simulation.

Ties keep the first-seen action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import Action, RunState
from .base import SearchAlgorithm
from .evaluation import EvaluateFn


@dataclass
class GreedyConfig:
    atk_weight: float = 2.0
    def_weight: float = 1.0
    evaluate_fn: Optional[EvaluateFn] = None


class GreedyAlgorithm(SearchAlgorithm):
    name = "greedy"

    def __init__(
        self,
        config: Optional[GreedyConfig] = None,
        engine: Optional[CombatEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or GreedyConfig()
        super().__init__(engine=engine, evaluate_fn=self.config.evaluate_fn, logger=logger)
        self.logger.info(
            "[greedy] initialised (atk_weight=%.2f, def_weight=%.2f)",
            self.config.atk_weight,
            self.config.def_weight,
        )

    def pick_action(self, state: RunState) -> Action:
        actions = state.get_legal_actions()
        if not actions:
            return self._fallback(state, "no legal actions")

        if state.in_loot_phase():
            best = self._best_loot(state, actions)
        else:
            best = self._best_move(state, actions)

        self.logger.debug("[greedy] picked %r", best)
        return best

    def _best_loot(self, state: RunState, actions) -> Action:
        best_action = actions[0]
        best_score = float("-inf")
        for action in actions:
            score = self.evaluate(self._child(state, action))
            if score > best_score:
                best_score = score
                best_action = action
        return best_action

    def _best_move(self, state: RunState, actions) -> Action:
        best_action = actions[0]
        best_score = float("-inf")
        for action in actions:
            stat = state.player.move_stat(action.as_move)
            score = stat.attack * self.config.atk_weight + stat.defense * self.config.def_weight
            if score > best_score:
                best_score = score
                best_action = action
        return best_action
