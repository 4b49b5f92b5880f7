"""
Monte Carlo Tree Search for Gigaverse runs.

Plain UCB1 (no policy prior):

    UCB = Q(s,a) + C * sqrt(ln N(s) / N(s,a))

with unvisited children treated as +inf. Each simulation selects a leaf,
expands one child per legal action, rolls out from a random new child
with uniformly random actions for up to ``max_depth`` steps, and backs the
evaluation up the ancestor chain.

Nodes live in an arena (parallel lists indexed by node id), so the tree
holds no reference cycles and backpropagation is a walk over parent ids.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..engine.combat_engine import CombatEngine
from ..engine.state.run import Action, RunState
from .base import SearchAlgorithm
from .evaluation import EvaluateFn

ROOT = 0
NO_PARENT = -1


@dataclass
class MctsConfig:
    simulations_count: int = 200
    max_depth: int = 2
    exploration_constant: float = 1.414
    evaluate_fn: Optional[EvaluateFn] = None

    def __post_init__(self):
        if self.simulations_count < 0:
            raise ValueError(f"simulations_count must be >= 0, got {self.simulations_count}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.exploration_constant < 0:
            raise ValueError(
                f"exploration_constant must be >= 0, got {self.exploration_constant}"
            )


@dataclass
class MctsTree:
    """Arena of search nodes; node i is described by entry i of every list."""
    parent: List[int] = field(default_factory=list)
    children: List[List[int]] = field(default_factory=list)
    action: List[Optional[Action]] = field(default_factory=list)
    state: List[RunState] = field(default_factory=list)
    visits: List[int] = field(default_factory=list)
    total_value: List[float] = field(default_factory=list)

    def add(self, state: RunState, parent: int = NO_PARENT, action: Optional[Action] = None) -> int:
        node = len(self.state)
        self.parent.append(parent)
        self.children.append([])
        self.action.append(action)
        self.state.append(state)
        self.visits.append(0)
        self.total_value.append(0.0)
        if parent != NO_PARENT:
            self.children[parent].append(node)
        return node

    def average(self, node: int) -> float:
        return self.total_value[node] / self.visits[node]

    def __len__(self) -> int:
        return len(self.state)


class MctsAlgorithm(SearchAlgorithm):
    name = "mcts"

    def __init__(
        self,
        config: Optional[MctsConfig] = None,
        engine: Optional[CombatEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or MctsConfig()
        super().__init__(engine=engine, evaluate_fn=self.config.evaluate_fn, logger=logger)
        self.logger.info(
            "[mcts] initialised (sims=%d, max_depth=%d, C=%.3f)",
            self.config.simulations_count,
            self.config.max_depth,
            self.config.exploration_constant,
        )

    def pick_action(self, state: RunState) -> Action:
        tree = self.search(state)

        best_child = None
        best_avg = float("-inf")
        for child in tree.children[ROOT]:
            if tree.visits[child] > 0:
                avg = tree.average(child)
                if avg > best_avg:
                    best_avg = avg
                    best_child = child

        if best_child is None:
            return self._fallback(state, "no visited child")

        action = tree.action[best_child]
        self.logger.debug(
            "[mcts] picked %r (avg=%.2f, visits=%d)", action, best_avg, tree.visits[best_child]
        )
        return action

    def search(self, state: RunState) -> MctsTree:
        """Run ``simulations_count`` iterations from a copy of ``state``."""
        tree = MctsTree()
        tree.add(state.copy())

        for _ in range(self.config.simulations_count):
            leaf = self._select(tree)
            self._expand(tree, leaf)

            node = leaf
            if tree.children[leaf]:
                kids = tree.children[leaf]
                node = kids[int(self.engine.rng.integers(len(kids)))]

            value = self._rollout(tree.state[node])
            self._backpropagate(tree, node, value)

        return tree

    # -------------------------------------------------------------------------
    # MCTS steps
    # -------------------------------------------------------------------------

    def _select(self, tree: MctsTree) -> int:
        node = ROOT
        while tree.children[node]:
            node = self._best_ucb_child(tree, node)
        return node

    def _best_ucb_child(self, tree: MctsTree, node: int) -> int:
        kids = tree.children[node]
        visits = np.array([tree.visits[k] for k in kids], dtype=float)
        totals = np.array([tree.total_value[k] for k in kids], dtype=float)

        ucb = np.full(len(kids), np.inf)
        seen = visits > 0
        if seen.any():
            log_n = np.log(max(tree.visits[node], 1))
            ucb[seen] = totals[seen] / visits[seen] + self.config.exploration_constant * np.sqrt(
                log_n / visits[seen]
            )
        return kids[int(np.argmax(ucb))]

    def _expand(self, tree: MctsTree, node: int) -> None:
        if tree.children[node]:
            return
        state = tree.state[node]
        if state.is_terminal():
            return
        for action in state.get_legal_actions():
            tree.add(self._child(state, action), parent=node, action=action)

    def _rollout(self, state: RunState) -> float:
        sim = state.copy()
        depth = 0
        while depth < self.config.max_depth and not sim.is_terminal():
            self.engine.step(sim, self.engine.random_legal_action(sim))
            depth += 1
        return self.evaluate(sim)

    def _backpropagate(self, tree: MctsTree, node: int, value: float) -> None:
        while node != NO_PARENT:
            tree.visits[node] += 1
            tree.total_value[node] += value
            node = tree.parent[node]
