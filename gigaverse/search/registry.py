"""
Algorithm registry: build any search algorithm by name.

Usage:
    algo = create_algorithm("mcts", engine=engine, simulations_count=100)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Type

from ..engine.combat_engine import CombatEngine
from .astar import AStarAlgorithm, AStarConfig
from .base import SearchAlgorithm
from .dp import DPAlgorithm, DPConfig
from .greedy import GreedyAlgorithm, GreedyConfig
from .mcts import MctsAlgorithm, MctsConfig
from .minimax import MinimaxAlgorithm, MinimaxConfig

ALGORITHMS: Dict[str, Tuple[Type[SearchAlgorithm], type]] = {
    "greedy": (GreedyAlgorithm, GreedyConfig),
    "minimax": (MinimaxAlgorithm, MinimaxConfig),
    "dp": (DPAlgorithm, DPConfig),
    "astar": (AStarAlgorithm, AStarConfig),
    "mcts": (MctsAlgorithm, MctsConfig),
}

ALGORITHM_NAMES = tuple(ALGORITHMS)


def create_algorithm(
    name: str,
    engine: Optional[CombatEngine] = None,
    logger: Optional[logging.Logger] = None,
    **config: Any,
) -> SearchAlgorithm:
    """
    Build the algorithm registered as ``name``.

    Keyword arguments are passed to the algorithm's config dataclass.

    Raises:
        ValueError: unknown algorithm name
        TypeError: config field the algorithm does not have
    """
    try:
        algorithm_cls, config_cls = ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {name!r}; expected one of {', '.join(ALGORITHM_NAMES)}"
        ) from None
    return algorithm_cls(config=config_cls(**config), engine=engine, logger=logger)
