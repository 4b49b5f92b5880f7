"""
Common base for the search algorithms.

Every algorithm owns (or shares) a CombatEngine, an evaluation function and
a logger, and answers one question: which action to take from a RunState.
Search never touches the caller's state; children are built with
``state.copy()`` and advanced through ``CombatEngine.step``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import MOVE_ROCK, Action, RunState
from .evaluation import EvaluateFn, default_evaluate

FALLBACK_ACTION = MOVE_ROCK


class SearchAlgorithm(ABC):
    """Interface shared by greedy, minimax, dp, astar and mcts."""

    name = "base"

    def __init__(
        self,
        engine: Optional[CombatEngine] = None,
        evaluate_fn: Optional[EvaluateFn] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine if engine is not None else CombatEngine(logger=logger)
        self.evaluate_fn = evaluate_fn or default_evaluate
        self.logger = logger if logger is not None else logging.getLogger(type(self).__module__)

    @abstractmethod
    def pick_action(self, state: RunState) -> Action:
        """Choose an action for ``state``. Always returns a legal action."""

    def evaluate(self, state: RunState) -> float:
        return self.evaluate_fn(state)

    def _child(self, state: RunState, action: Action) -> RunState:
        """Copy of ``state`` with ``action`` applied."""
        return self.engine.step(state.copy(), action)

    def _fallback(self, state: RunState, reason: str) -> Action:
        self.logger.warning(
            "[%s] %s at enemy %d => falling back to %r",
            self.name,
            reason,
            state.current_enemy_index,
            FALLBACK_ACTION,
        )
        return FALLBACK_ACTION

    def __call__(self, state: RunState) -> Action:
        return self.pick_action(state)
