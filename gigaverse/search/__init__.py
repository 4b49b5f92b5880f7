"""
Search algorithms for picking Gigaverse actions.

Every algorithm implements ``pick_action(state) -> Action`` and never
mutates the state it is given.

- greedy: one-ply move scoring and loot evaluation
- minimax: alpha-beta over our actions vs environment replies
- dp: bounded-horizon exhaustive search with memoization
- astar: per-action best-first search on negated scores
- mcts: UCB1 tree search with random rollouts
"""

from .astar import AStarAlgorithm, AStarConfig
from .base import FALLBACK_ACTION, SearchAlgorithm
from .dp import DPAlgorithm, DPConfig, DPResult
from .evaluation import EvaluateFn, default_evaluate
from .greedy import GreedyAlgorithm, GreedyConfig
from .mcts import MctsAlgorithm, MctsConfig
from .minimax import MinimaxAlgorithm, MinimaxConfig
from .registry import ALGORITHM_NAMES, create_algorithm

__all__ = [
    "ALGORITHM_NAMES",
    "AStarAlgorithm",
    "AStarConfig",
    "DPAlgorithm",
    "DPConfig",
    "DPResult",
    "EvaluateFn",
    "FALLBACK_ACTION",
    "GreedyAlgorithm",
    "GreedyConfig",
    "MctsAlgorithm",
    "MctsConfig",
    "MinimaxAlgorithm",
    "MinimaxConfig",
    "SearchAlgorithm",
    "create_algorithm",
    "default_evaluate",
]
