"""
Combat Engine - Round resolution and loot application for Gigaverse runs.

This module is the only place game rules are applied to a RunState:
1. One round of rock-paper-scissors (enemy move, outcome, damage, charges)
2. Loot application to the player
3. Generic action dispatch (moves and loot picks)
4. Full-run and partial-run simulation for offline play

Design principles:
- State is mutable for performance (use copy() for tree search)
- The enemy is not an adversary: it picks uniformly among charged moves
- Bad inputs (no enemy, unknown loot, bad loot index) are warnings, not errors

Usage:
    from gigaverse.engine import CombatEngine, MOVE_ROCK

    engine = CombatEngine(seed=42)
    while not state.is_terminal():
        action = algorithm.pick_action(state)
        engine.step(state, action)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .calc.charges import update_charges
from .calc.damage import apply_damage_and_armor, resolve_round
from .state.run import (
    UPGRADE_KINDS,
    Action,
    ActionType,
    Fighter,
    LootKind,
    LootOption,
    Move,
    RunState,
)


DEFAULT_LOOT_OPTIONS_COUNT = 3
DEFAULT_MAX_ROUNDS_PER_ENEMY = 100

PickMoveFn = Callable[[RunState], Move]
PickLootFn = Callable[[List[LootOption], RunState], LootOption]
GenerateLootFn = Callable[[int], List[LootOption]]


# =============================================================================
# RUN RESULT
# =============================================================================

@dataclass
class RunResult:
    """Result of a completed (or abandoned) run."""
    final_state: RunState
    enemies_defeated: int
    survived: bool
    rounds: int = 0


# =============================================================================
# COMBAT ENGINE
# =============================================================================

class CombatEngine:
    """
    Applies game rules to run states.

    Every stochastic choice (enemy moves, random player moves) is drawn from
    one numpy Generator, so two engines built with the same seed replay the
    same run.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            rng: Random source; takes precedence over ``seed``
            seed: Seed for a fresh Generator when ``rng`` is not given
            logger: Logger for round details and warnings
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    # -------------------------------------------------------------------------
    # Random choices
    # -------------------------------------------------------------------------

    def _choose(self, items: list):
        return items[int(self.rng.integers(len(items)))]

    def pick_random_enemy_move(self, enemy: Fighter) -> Move:
        """Uniform among moves with charges > 0; rock when all are drained or locked."""
        candidates = enemy.charged_moves()
        if not candidates:
            return Move.ROCK
        return self._choose(candidates)

    def pick_random_player_move(self, player: Fighter) -> Move:
        candidates = player.charged_moves()
        if not candidates:
            return Move.ROCK
        return self._choose(candidates)

    def random_legal_action(self, state: RunState) -> Action:
        return self._choose(state.get_legal_actions())

    # -------------------------------------------------------------------------
    # One round
    # -------------------------------------------------------------------------

    def simulate_one_round(self, state: RunState, player_move: Move) -> RunState:
        """
        Simulate exactly one round against the current enemy. Mutates ``state``.

        With no current enemy (run already over) the state is returned as-is.
        """
        enemy = state.current_enemy()
        if enemy is None:
            self.logger.warning(
                "[simulate_one_round] No current enemy at index %d => run already over",
                state.current_enemy_index,
            )
            return state

        enemy_move = self.pick_random_enemy_move(enemy)
        outcome = resolve_round(player_move, enemy_move, state.player, enemy)

        hp_lost_enemy = apply_damage_and_armor(
            outcome.damage_to_enemy, outcome.armor_gain_player, state.player, enemy
        )
        hp_lost_player = apply_damage_and_armor(
            outcome.damage_to_player, outcome.armor_gain_enemy, enemy, state.player
        )

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "[simulate_one_round] player=%s enemy=%s => enemy hp -%d (%d), player hp -%d (%d)",
                player_move.value,
                enemy_move.value,
                hp_lost_enemy,
                enemy.health.current,
                hp_lost_player,
                state.player.health.current,
            )

        for fighter, move, side in (
            (state.player, player_move, "player"),
            (enemy, enemy_move, "enemy"),
        ):
            locked = update_charges(fighter, move)
            if locked is not None:
                self.logger.debug("[update_charges] %s move=%s => -1 (spam penalty)", side, locked.value)

        return state

    # -------------------------------------------------------------------------
    # Loot
    # -------------------------------------------------------------------------

    def apply_loot_option(self, state: RunState, loot: LootOption) -> None:
        """Apply a boon to the player. Unknown kinds leave the state unchanged."""
        p = state.player
        kind = LootKind.parse(loot.kind)

        if kind in UPGRADE_KINDS:
            stat = p.move_stat(UPGRADE_KINDS[kind])
            stat.attack += loot.value1
            stat.defense += loot.value2
        elif kind is LootKind.ADD_MAX_HEALTH:
            p.health.max += loot.value1
            p.health.current = min(p.health.current + loot.value1, p.health.max)
        elif kind is LootKind.ADD_MAX_ARMOR:
            # current armor is left as-is
            p.armor.max += loot.value1
        elif kind is LootKind.HEAL:
            p.health.current = min(p.health.max, p.health.current + loot.value1)
        else:
            self.logger.warning("[apply_loot_option] Unknown loot kind=%r", loot.kind)
            return

        self.logger.debug(
            "[apply_loot_option] Applied %s +%d/+%d", kind.value, loot.value1, loot.value2
        )

    # -------------------------------------------------------------------------
    # Action dispatch
    # -------------------------------------------------------------------------

    def apply_action(self, state: RunState, action: Action) -> RunState:
        """
        Apply a move or loot pick to ``state`` in place and return it.

        Any loot pick ends the loot phase, even when the pick itself was
        invalid.
        """
        move = action.as_move
        if move is not None:
            return self.simulate_one_round(state, move)

        if action.action_type is ActionType.PICK_LOOT:
            if 0 <= action.loot_index < len(state.loot_options):
                self.apply_loot_option(state, state.loot_options[action.loot_index])
            else:
                self.logger.warning(
                    "[apply_action] Loot index %d out of range (%d options)",
                    action.loot_index,
                    len(state.loot_options),
                )
            state.loot_options = []
            state.loot_phase = False
            return state

        self.logger.warning("[apply_action] Unknown action type: %r", action.action_type)
        return state

    def advance_if_enemy_defeated(self, state: RunState) -> bool:
        """Move on to the next enemy when the current one has no health left."""
        enemy = state.current_enemy()
        if enemy is not None and enemy.is_dead:
            state.current_enemy_index += 1
            return True
        return False

    def step(self, state: RunState, action: Action) -> RunState:
        """apply_action, then advance past a defeated enemy. Used by search."""
        self.apply_action(state, action)
        self.advance_if_enemy_defeated(state)
        return state

    # -------------------------------------------------------------------------
    # Multi-round simulation
    # -------------------------------------------------------------------------

    def simulate_partial_run(self, state: RunState, max_rounds: int) -> RunState:
        """
        Play random player moves on a copy for up to ``max_rounds`` rounds.

        Returns the copy; ``state`` is untouched.
        """
        sim = state.copy()
        for _ in range(max_rounds):
            if sim.is_terminal():
                break
            self.simulate_one_round(sim, self.pick_random_player_move(sim.player))
            self.advance_if_enemy_defeated(sim)
        return sim

    def simulate_full_run(
        self,
        initial_state: RunState,
        pick_move: PickMoveFn,
        pick_loot: Optional[PickLootFn] = None,
        generate_loot_options: Optional[GenerateLootFn] = None,
        max_rounds_per_enemy: int = DEFAULT_MAX_ROUNDS_PER_ENEMY,
    ) -> RunResult:
        """
        Fight each enemy in order on a copy of ``initial_state``.

        After every victory, loot is generated (if a generator is given) and
        one option is applied (if ``pick_loot`` is given). A duel that lasts
        ``max_rounds_per_enemy`` rounds ends the run as a stalemate.
        """
        state = initial_state.copy()
        enemies_defeated = 0
        rounds = 0
        stalled = False

        while not state.is_terminal():
            enemy = state.current_enemy()
            duel_rounds = 0
            while not enemy.is_dead and not state.player.is_dead:
                if duel_rounds >= max_rounds_per_enemy:
                    stalled = True
                    break
                self.simulate_one_round(state, pick_move(state))
                duel_rounds += 1
            rounds += duel_rounds

            if stalled or not enemy.is_dead:
                break

            enemies_defeated += 1
            if generate_loot_options is not None:
                state.loot_options = generate_loot_options(DEFAULT_LOOT_OPTIONS_COUNT)
                state.loot_phase = bool(state.loot_options)
            if state.in_loot_phase() and pick_loot is not None:
                self.apply_loot_option(state, pick_loot(state.loot_options, state))
            state.loot_options = []
            state.loot_phase = False
            state.current_enemy_index += 1

        if stalled:
            self.logger.warning(
                "[simulate_full_run] Stalemate vs enemy %d after %d rounds",
                state.current_enemy_index,
                max_rounds_per_enemy,
            )
        return RunResult(
            final_state=state,
            enemies_defeated=enemies_defeated,
            survived=not state.player.is_dead and not stalled,
            rounds=rounds,
        )
