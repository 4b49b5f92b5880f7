"""
Minimax with alpha-beta pruning.

The run is modelled as an alternating two-ply game: the maximizing layer is
our choice of action, the minimizing layer is the environment's reply,
drawn from the same legal action set. The real enemy picks uniformly at
random, so pure minimax is a worst-case approximation. ``expectation_weight``
blends the minimizing layer with the mean over replies:

    value = (1 - w) * min(replies) + w * mean(replies)

w = 0 keeps the worst-case behaviour. Pruning is only sound when w = 0, so
any positive weight searches the full tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import Action, RunState
from .base import SearchAlgorithm
from .evaluation import EvaluateFn

INF = float("inf")


@dataclass
class MinimaxConfig:
    max_depth: int = 3
    evaluate_fn: Optional[EvaluateFn] = None
    expectation_weight: float = 0.0

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if not 0.0 <= self.expectation_weight <= 1.0:
            raise ValueError(
                f"expectation_weight must be in [0, 1], got {self.expectation_weight}"
            )


class MinimaxAlgorithm(SearchAlgorithm):
    name = "minimax"

    def __init__(
        self,
        config: Optional[MinimaxConfig] = None,
        engine: Optional[CombatEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or MinimaxConfig()
        super().__init__(engine=engine, evaluate_fn=self.config.evaluate_fn, logger=logger)
        self.logger.info(
            "[minimax] initialised (max_depth=%d, expectation_weight=%.2f)",
            self.config.max_depth,
            self.config.expectation_weight,
        )

    def pick_action(self, state: RunState) -> Action:
        best_action, best_value = self.alpha_beta_root(state, self.config.max_depth)
        if best_action is None:
            return self._fallback(state, "no best action")
        self.logger.debug("[minimax] picked %r (value=%.2f)", best_action, best_value)
        return best_action

    def alpha_beta_root(self, state: RunState, depth: int) -> Tuple[Optional[Action], float]:
        """Best first action and its value. Ties keep the first action."""
        best_value = -INF
        best_action = None
        for action in state.get_legal_actions():
            value = self.alpha_beta(self._child(state, action), depth - 1, -INF, INF, False)
            if value > best_value:
                best_value = value
                best_action = action
        return best_action, best_value

    def alpha_beta(
        self,
        state: RunState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        if depth <= 0 or state.is_terminal():
            return self.evaluate(state)

        actions = state.get_legal_actions()
        w = self.config.expectation_weight

        if maximizing:
            value = -INF
            for action in actions:
                value = max(value, self.alpha_beta(self._child(state, action), depth - 1, alpha, beta, False))
                alpha = max(alpha, value)
                if w == 0.0 and alpha >= beta:
                    break
            return value

        # Minimizing => environment
        if w > 0.0:
            replies = [
                self.alpha_beta(self._child(state, action), depth - 1, -INF, INF, True)
                for action in actions
            ]
            return (1.0 - w) * min(replies) + w * sum(replies) / len(replies)

        value = INF
        for action in actions:
            value = min(value, self.alpha_beta(self._child(state, action), depth - 1, alpha, beta, True))
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value
