"""
Tests for the greedy one-ply policy.
"""

import logging

from gigaverse.engine import Action, MOVE_PAPER, MOVE_ROCK, create_fighter, create_run
from gigaverse.search import GreedyAlgorithm, GreedyConfig


class TestGreedyMoves:

    def test_prefers_strongest_attack(self, reference_run, engine):
        assert GreedyAlgorithm(engine=engine).pick_action(reference_run) == MOVE_ROCK

    def test_skips_locked_move(self, reference_run, engine):
        reference_run.player.rock.charges = -1
        # paper 1*2 + 8 = 10 beats scissor 3*2 + 2 = 8
        assert GreedyAlgorithm(engine=engine).pick_action(reference_run) == MOVE_PAPER

    def test_custom_weights(self, reference_run, engine):
        algo = GreedyAlgorithm(GreedyConfig(atk_weight=0.0, def_weight=1.0), engine=engine)
        assert algo.pick_action(reference_run) == MOVE_PAPER

    def test_tie_keeps_first(self, reference_enemy, engine):
        player = create_fighter((2, 2), (2, 2), (2, 2), hp=10, armor=0)
        state = create_run(player, [reference_enemy])
        assert GreedyAlgorithm(engine=engine).pick_action(state) == MOVE_ROCK

    def test_does_not_mutate(self, reference_run, engine):
        before = reference_run.copy()
        GreedyAlgorithm(engine=engine).pick_action(reference_run)
        assert reference_run == before


class TestGreedyLoot:

    def test_prefers_upgrade_over_heal(self, loot_run, engine):
        assert GreedyAlgorithm(engine=engine).pick_action(loot_run) == Action.pick_loot(2)

    def test_custom_evaluation(self, loot_run, engine):
        # prefer whatever maximises max armor
        algo = GreedyAlgorithm(GreedyConfig(evaluate_fn=lambda s: s.player.armor.max), engine=engine)
        assert algo.pick_action(loot_run) == Action.pick_loot(1)

    def test_loot_state_untouched(self, loot_run, engine):
        before = loot_run.copy()
        GreedyAlgorithm(engine=engine).pick_action(loot_run)
        assert loot_run == before


class TestGreedyLogging:

    def test_injected_logger(self, reference_run, engine, caplog):
        log = logging.getLogger("test.greedy")
        with caplog.at_level(logging.DEBUG, logger="test.greedy"):
            GreedyAlgorithm(engine=engine, logger=log).pick_action(reference_run)
        names = {r.name for r in caplog.records}
        assert "test.greedy" in names
        assert "initialised" in caplog.text
        assert "picked" in caplog.text
