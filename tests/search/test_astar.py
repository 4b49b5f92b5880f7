"""
Tests for the short-horizon A* search.
"""

import pytest

from gigaverse.engine import Action, LootKind, LootOption, create_run
from gigaverse.search import AStarAlgorithm, AStarConfig, default_evaluate
from gigaverse.search.astar import search_key


class TestAStarSearch:

    def test_zero_iterations_scores_start(self, long_run, engine):
        algo = AStarAlgorithm(AStarConfig(max_iterations=0), engine=engine)
        assert algo.a_star_search(long_run) == default_evaluate(long_run)

    def test_never_below_start(self, long_run, engine):
        algo = AStarAlgorithm(AStarConfig(max_iterations=20), engine=engine)
        assert algo.a_star_search(long_run) >= default_evaluate(long_run)

    def test_terminal_start(self, reference_run, engine):
        reference_run.current_enemy_index = 1
        algo = AStarAlgorithm(AStarConfig(max_iterations=10), engine=engine)
        assert algo.a_star_search(reference_run) == default_evaluate(reference_run)

    def test_heuristic_is_consulted(self, long_run, engine):
        calls = []

        def heuristic(state):
            calls.append(state.current_enemy_index)
            return 0.0

        algo = AStarAlgorithm(AStarConfig(max_iterations=5, heuristic_fn=heuristic), engine=engine)
        algo.a_star_search(long_run)
        assert calls

    def test_finds_kill_within_budget(self, reference_run, deterministic_engine):
        # the enemy always plays rock, so rock ties and kills in one round
        algo = AStarAlgorithm(AStarConfig(max_iterations=5), engine=deterministic_engine)
        assert algo.a_star_search(reference_run) > default_evaluate(reference_run) + 0.4


class TestAStarPickAction:

    def test_zero_iterations_returns_legal_action(self, long_run, engine):
        algo = AStarAlgorithm(AStarConfig(max_iterations=0), engine=engine)
        assert algo.pick_action(long_run) in long_run.get_legal_actions()

    def test_zero_iterations_loot(self, loot_run, engine):
        algo = AStarAlgorithm(AStarConfig(max_iterations=0), engine=engine)
        assert algo.pick_action(loot_run) == Action.pick_loot(2)

    def test_single_action_short_circuit(self, reference_player, reference_enemy, engine):
        state = create_run(reference_player, [reference_enemy], [LootOption(LootKind.HEAL, 6)])
        algo = AStarAlgorithm(engine=engine)
        assert algo.pick_action(state) == Action.pick_loot(0)

    def test_does_not_mutate(self, long_run, engine):
        before = long_run.copy()
        AStarAlgorithm(AStarConfig(max_iterations=10), engine=engine).pick_action(long_run)
        assert long_run == before

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            AStarConfig(max_iterations=-1)


class TestSearchKey:

    def test_ignores_stats_outside_key(self, long_run):
        other = long_run.copy()
        other.player.rock.attack += 5
        assert search_key(long_run) == search_key(other)

    def test_tracks_charges(self, long_run):
        other = long_run.copy()
        other.player.paper.charges = 1
        assert search_key(long_run) != search_key(other)
