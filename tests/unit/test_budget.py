"""
Unit tests for the search budget controller.
"""

import numpy as np
import pytest

from othello_ai.engine.budget import SearchBudget, budget_for_phase, budget_for_state
from othello_ai.game.othello import Othello, Move, BLACK, WHITE


class TestBudgetForPhase:
    """Test the phase thresholds."""

    def test_late_game(self):
        assert budget_for_phase(50, 10) == SearchBudget(max_depth=11, time_limit_ms=8000)

    def test_late_game_wins_over_opening_signal(self):
        assert budget_for_phase(5, 16) == SearchBudget(11, 8000)

    def test_opening_by_move_count(self):
        assert budget_for_phase(5, 50) == SearchBudget(max_depth=9, time_limit_ms=7000)
        assert budget_for_phase(11, 30) == SearchBudget(9, 7000)

    def test_opening_by_empties(self):
        assert budget_for_phase(20, 45) == SearchBudget(9, 7000)

    def test_midgame(self):
        assert budget_for_phase(20, 30) == SearchBudget(max_depth=10, time_limit_ms=9000)
        assert budget_for_phase(12, 44) == SearchBudget(10, 9000)
        assert budget_for_phase(30, 17) == SearchBudget(10, 9000)

    def test_custom_config(self):
        config = {
            'late_game_empties': 5,
            'opening_moves': 2,
            'opening_empties': 60,
            'late_game': {'max_depth': 20, 'time_limit_ms': 100},
            'opening': {'max_depth': 1, 'time_limit_ms': 10},
            'midgame': {'max_depth': 3, 'time_limit_ms': 50},
        }
        assert budget_for_phase(40, 10, config) == SearchBudget(3, 50)

    def test_budget_is_immutable(self):
        budget = budget_for_phase(20, 30)
        with pytest.raises(AttributeError):
            budget.max_depth = 99


class TestBudgetForState:
    """Test deriving phase signals from a board."""

    def test_start_position_is_opening(self):
        state = Othello().get_initial_state()
        assert budget_for_state(state) == SearchBudget(9, 7000)

    def test_move_history_overrides_disc_count(self):
        state = np.zeros((8, 8), dtype=np.int8)
        state.flat[:34] = BLACK  # 30 empties, 30 moves by disc count

        assert budget_for_state(state) == SearchBudget(10, 9000)
        assert budget_for_state(state, move_history=[Move(0, 0)] * 5) == SearchBudget(9, 7000)

    def test_midgame_board(self):
        game = Othello()
        rng = np.random.RandomState(1)
        state = game.get_initial_state()
        player = BLACK
        for _ in range(30):
            moves = game.get_legal_moves(state, player)
            if moves:
                state = game.get_next_state(state, moves[rng.randint(len(moves))], player)
            player = -player

        empties = game.count_empty(state)
        assert budget_for_state(state) == budget_for_phase(60 - empties, empties)
