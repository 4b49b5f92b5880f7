"""
Tests for the per-move charge law.
"""

import pytest

from gigaverse.engine import MAX_CHARGES, Move, SPAM_LOCKED, create_fighter, next_charges, update_charges


class TestNextCharges:

    @pytest.mark.parametrize(
        "charges,expected",
        [(3, 2), (2, 1), (1, SPAM_LOCKED), (0, 0), (SPAM_LOCKED, SPAM_LOCKED)],
    )
    def test_used(self, charges, expected):
        assert next_charges(charges, used=True) == expected

    @pytest.mark.parametrize(
        "charges,expected",
        [(SPAM_LOCKED, 0), (0, 1), (1, 2), (2, 3), (3, MAX_CHARGES)],
    )
    def test_unused(self, charges, expected):
        assert next_charges(charges, used=False) == expected


class TestUpdateCharges:

    def test_updates_all_three_moves(self):
        f = create_fighter((1, 1, 3), (1, 1, 1), (1, 1, -1), hp=5, armor=0)
        update_charges(f, Move.ROCK)
        assert (f.rock.charges, f.paper.charges, f.scissor.charges) == (2, 2, 0)

    def test_reports_spam_lock(self):
        f = create_fighter((1, 1, 1), (1, 1), (1, 1), hp=5, armor=0)
        assert update_charges(f, Move.ROCK) is Move.ROCK
        assert f.rock.charges == SPAM_LOCKED

    def test_no_report_without_lock(self):
        f = create_fighter((1, 1, 2), (1, 1), (1, 1), hp=5, armor=0)
        assert update_charges(f, Move.ROCK) is None

    def test_no_report_when_already_locked(self):
        f = create_fighter((1, 1, -1), (1, 1), (1, 1), hp=5, armor=0)
        assert update_charges(f, Move.ROCK) is None
        assert f.rock.charges == SPAM_LOCKED

    def test_three_uses_in_a_row_lock_the_move(self):
        f = create_fighter((1, 1), (1, 1), (1, 1), hp=5, armor=0)
        for _ in range(3):
            update_charges(f, Move.PAPER)
        assert f.paper.charges == SPAM_LOCKED
        assert Move.PAPER not in f.charged_moves()
        update_charges(f, Move.ROCK)
        assert f.paper.charges == 0
