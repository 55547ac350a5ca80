"""
Unit tests for static evaluation.

Tests verify:
1. Zero-sum symmetry: evaluate(p, 1) == -evaluate(p, -1)
2. Terminal positions score exactly and outrank every heuristic score
3. Individual features point the right way
"""

import numpy as np
import pytest

from othello_ai.engine.evaluation import (
    HeuristicEvaluator,
    evaluate,
    terminal_score,
    count_stable_discs,
    count_frontier_discs,
    static_move_score,
    SCORE_WIN,
    HEURISTIC_LIMIT,
)
from othello_ai.game.othello import Othello, Move, BLACK, WHITE, EMPTY, board_from_string


def random_positions(count, seed=0):
    game = Othello()
    rng = np.random.RandomState(seed)
    for _ in range(count):
        state = game.get_initial_state()
        player = BLACK
        for _ in range(rng.randint(0, 60)):
            moves = game.get_legal_moves(state, player)
            if moves:
                state = game.get_next_state(state, moves[rng.randint(len(moves))], player)
            elif not game.has_legal_move(state, -player):
                break
            player = -player
        yield state


class TestSymmetry:
    """Test zero-sum property."""

    def test_start_position(self):
        state = Othello().get_initial_state()
        assert evaluate(state, BLACK) == -evaluate(state, WHITE)

    def test_random_positions(self):
        for state in random_positions(100):
            assert evaluate(state, BLACK) == -evaluate(state, WHITE)

    def test_color_swap_negates(self):
        """Swapping every disc's color mirrors the score."""
        for state in random_positions(30, seed=1):
            assert evaluate(state, BLACK) == evaluate(-state, WHITE)

    def test_heuristic_stays_below_win(self):
        for state in random_positions(100, seed=2):
            score = evaluate(state, BLACK)
            if not Othello().is_terminal(state):
                assert abs(score) <= HEURISTIC_LIMIT


class TestTerminalScores:
    """Test exact scores of finished games."""

    def test_win_and_loss(self):
        assert terminal_score(40, 24, BLACK) == SCORE_WIN + 1600
        assert terminal_score(40, 24, WHITE) == -(SCORE_WIN + 1600)

    def test_draw(self):
        assert terminal_score(32, 32, BLACK) == 0
        assert terminal_score(32, 32, WHITE) == 0

    def test_bigger_margin_scores_higher(self):
        assert terminal_score(64, 0, BLACK) > terminal_score(33, 31, BLACK) > 0
        assert terminal_score(31, 33, BLACK) > terminal_score(0, 64, BLACK)

    def test_evaluate_detects_game_over(self):
        state = board_from_string("""
            X X X . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """)
        assert evaluate(state, BLACK) == SCORE_WIN + 300
        assert evaluate(state, WHITE) == -(SCORE_WIN + 300)

    def test_custom_disc_weight(self):
        evaluator = HeuristicEvaluator(config={
            **HeuristicEvaluator().config,
            'terminal_disc_weight': 1,
        })
        state = np.full((8, 8), BLACK, dtype=np.int8)

        assert evaluator(state, BLACK) == SCORE_WIN + 64


class TestFeatures:
    """Test individual evaluation features."""

    def test_corner_beats_x_square(self):
        game = Othello()
        base = game.get_initial_state()

        corner = base.copy()
        corner[0, 0] = BLACK
        x_square = base.copy()
        x_square[1, 1] = BLACK

        assert evaluate(corner, BLACK) > evaluate(x_square, BLACK)

    def test_stable_discs_from_corner(self):
        state = board_from_string("""
            X X X O . . . X
            X . . . . . . .
            O . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . O
        """)

        assert count_stable_discs(state, BLACK) == 5
        assert count_stable_discs(state, WHITE) == 1

    def test_frontier_discs(self):
        state = Othello().get_initial_state()

        assert count_frontier_discs(state, BLACK) == 2
        assert count_frontier_discs(state, WHITE) == 2

        full = np.full((8, 8), WHITE, dtype=np.int8)
        full[0, 0] = EMPTY
        assert count_frontier_discs(full, WHITE) == 3

    def test_phase_weights(self):
        evaluator = HeuristicEvaluator()
        weights = evaluator.config['weights']

        assert evaluator.phase_weights(60) is weights['opening']
        assert evaluator.phase_weights(30) is weights['midgame']
        assert evaluator.phase_weights(5) is weights['endgame']

    @pytest.mark.parametrize("move,expected", [
        (Move(0, 0), 120),
        (Move(1, 1), -40),
        (Move(2, 2), 15),
        ((7, 6), -20),
    ])
    def test_static_move_score(self, move, expected):
        assert static_move_score(move) == expected
