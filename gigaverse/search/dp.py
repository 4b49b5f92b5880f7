"""
Bounded-horizon dynamic programming.

Explores every action sequence up to ``max_horizon`` steps and keeps the
first action of the best sequence. Results are memoized on
(depth, state key); the memo lives for one ``pick_action`` call since
enemy replies are random and old entries would go stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import Action, Fighter, LootKind, RunState
from .base import SearchAlgorithm
from .evaluation import EvaluateFn


@dataclass
class DPConfig:
    max_horizon: int = 3
    evaluate_fn: Optional[EvaluateFn] = None
    use_memo: bool = True

    def __post_init__(self):
        if self.max_horizon < 0:
            raise ValueError(f"max_horizon must be >= 0, got {self.max_horizon}")


class DPResult(NamedTuple):
    best_value: float
    best_action: Optional[Action]


def _fighter_key(f: Fighter) -> Tuple[int, ...]:
    return (
        f.health.current,
        f.health.max,
        f.armor.current,
        f.armor.max,
        f.rock.attack,
        f.rock.defense,
        f.rock.charges,
        f.paper.attack,
        f.paper.defense,
        f.paper.charges,
        f.scissor.attack,
        f.scissor.defense,
        f.scissor.charges,
    )


def state_key(state: RunState) -> Tuple:
    """Hashable encoding of every field that affects future value."""
    enemy = state.current_enemy()
    return (
        state.current_enemy_index,
        _fighter_key(state.player),
        _fighter_key(enemy) if enemy is not None else None,
        state.loot_phase,
        tuple(
            (l.kind.value if isinstance(l.kind, LootKind) else l.kind, l.value1, l.value2)
            for l in state.loot_options
        ),
    )


class DPAlgorithm(SearchAlgorithm):
    name = "dp"

    def __init__(
        self,
        config: Optional[DPConfig] = None,
        engine: Optional[CombatEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or DPConfig()
        super().__init__(engine=engine, evaluate_fn=self.config.evaluate_fn, logger=logger)
        self.memo: Dict[Tuple, DPResult] = {}
        self.logger.info(
            "[dp] initialised (max_horizon=%d, use_memo=%s)",
            self.config.max_horizon,
            self.config.use_memo,
        )

    def pick_action(self, state: RunState) -> Action:
        self.memo.clear()
        result = self.dp_search(state, self.config.max_horizon)
        if result.best_action is None:
            return self._fallback(state, "no best action")
        self.logger.debug("[dp] picked %r (value=%.2f)", result.best_action, result.best_value)
        return result.best_action

    def dp_search(self, state: RunState, depth: int) -> DPResult:
        """Best value reachable within ``depth`` steps and the action leading there."""
        if depth <= 0 or state.is_terminal():
            return DPResult(self.evaluate(state), None)

        key = (depth, state_key(state))
        if self.config.use_memo and key in self.memo:
            return self.memo[key]

        best_value = float("-inf")
        best_action = None
        for action in state.get_legal_actions():
            sub = self.dp_search(self._child(state, action), depth - 1)
            if sub.best_value > best_value:
                best_value = sub.best_value
                best_action = action

        result = DPResult(best_value, best_action)
        if self.config.use_memo:
            self.memo[key] = result
        return result
