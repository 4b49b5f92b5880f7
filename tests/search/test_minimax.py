"""
Tests for minimax with alpha-beta pruning.
"""

import pytest

from gigaverse.engine import Action, CombatEngine
from gigaverse.search import MinimaxAlgorithm, MinimaxConfig, default_evaluate


def _plain_minimax(engine, state, depth, maximizing):
    """Unpruned reference minimax."""
    if depth <= 0 or state.is_terminal():
        return default_evaluate(state)
    values = [
        _plain_minimax(engine, engine.step(state.copy(), a), depth - 1, not maximizing)
        for a in state.get_legal_actions()
    ]
    return max(values) if maximizing else min(values)


class TestMinimaxConfig:

    def test_defaults(self):
        config = MinimaxConfig()
        assert config.max_depth == 3
        assert config.expectation_weight == 0.0

    @pytest.mark.parametrize("kwargs", [{"max_depth": -1}, {"expectation_weight": 1.5}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            MinimaxConfig(**kwargs)


class TestMinimax:

    def test_pruning_matches_plain_minimax(self, long_run, first_choice_rng):
        engine = CombatEngine(rng=first_choice_rng)
        algo = MinimaxAlgorithm(MinimaxConfig(max_depth=3), engine=engine)
        _, pruned = algo.alpha_beta_root(long_run, 3)

        expected = max(
            _plain_minimax(engine, engine.step(long_run.copy(), a), 2, False)
            for a in long_run.get_legal_actions()
        )
        assert pruned == pytest.approx(expected)

    def test_depth_zero_is_evaluation(self, long_run, engine):
        algo = MinimaxAlgorithm(engine=engine)
        assert algo.alpha_beta(long_run, 0, float("-inf"), float("inf"), True) == default_evaluate(long_run)

    def test_terminal_is_evaluation(self, reference_run, engine):
        reference_run.current_enemy_index = 1
        algo = MinimaxAlgorithm(engine=engine)
        assert algo.alpha_beta(reference_run, 3, float("-inf"), float("inf"), False) == default_evaluate(reference_run)

    def test_loot_pick(self, loot_run, engine):
        algo = MinimaxAlgorithm(MinimaxConfig(max_depth=1), engine=engine)
        assert algo.pick_action(loot_run) == Action.pick_loot(2)

    @pytest.mark.parametrize("weight", [0.0, 0.5, 1.0])
    def test_returns_legal_action(self, long_run, engine, weight):
        algo = MinimaxAlgorithm(MinimaxConfig(max_depth=2, expectation_weight=weight), engine=engine)
        assert algo.pick_action(long_run) in long_run.get_legal_actions()

    def test_expectation_never_below_worst_case(self, long_run, first_choice_rng):
        worst = MinimaxAlgorithm(MinimaxConfig(max_depth=2), engine=CombatEngine(rng=first_choice_rng))
        blended = MinimaxAlgorithm(
            MinimaxConfig(max_depth=2, expectation_weight=0.5), engine=CombatEngine(rng=first_choice_rng)
        )
        _, worst_value = worst.alpha_beta_root(long_run, 2)
        _, blended_value = blended.alpha_beta_root(long_run, 2)
        assert blended_value >= worst_value - 1e-9

    def test_does_not_mutate(self, long_run, engine):
        before = long_run.copy()
        MinimaxAlgorithm(MinimaxConfig(max_depth=2), engine=engine).pick_action(long_run)
        assert long_run == before
