"""
Unit tests for score presentation helpers.
"""

import math

import pytest

from othello_ai.engine import score_utils
from othello_ai.engine.score_utils import (
    score_to_probability,
    map_evaluation_to_stone_scale,
    get_stone_difference,
    summarize_evaluation,
)
from othello_ai.exceptions import InvalidEvaluationError
from othello_ai.game.othello import Othello, BLACK, WHITE, board_from_string


class TestProbability:

    def test_even_score(self):
        assert score_to_probability(0) == 0.5

    def test_direction(self):
        assert score_to_probability(120) > 0.5
        assert score_to_probability(-120) < 0.5
        assert score_to_probability(120) + score_to_probability(-120) == pytest.approx(1.0)

    def test_clamped(self):
        assert score_to_probability(100000) == score_to_probability(1000)
        assert 0.0 < score_to_probability(-100000) < 0.001

    @pytest.mark.parametrize("score", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, score):
        with pytest.raises(InvalidEvaluationError):
            score_to_probability(score)


class TestStoneScale:

    def test_zero_and_missing(self):
        assert map_evaluation_to_stone_scale(0) == 0
        assert map_evaluation_to_stone_scale(None) == 0
        assert map_evaluation_to_stone_scale(math.nan) == 0

    def test_saturates(self):
        assert map_evaluation_to_stone_scale(100300) == 64
        assert map_evaluation_to_stone_scale(-100300) == -64

    def test_scale(self):
        assert map_evaluation_to_stone_scale(120) == 49
        assert map_evaluation_to_stone_scale(-120) == -49

    def test_halves_round_up(self, monkeypatch):
        monkeypatch.setattr(score_utils.math, "tanh", lambda x: 2.5 / 64 if x > 0 else -2.5 / 64)

        assert map_evaluation_to_stone_scale(1) == 3
        assert map_evaluation_to_stone_scale(-1) == -2


class TestSummary:

    def test_stone_difference(self):
        state = board_from_string("""
            X X X . . . . .
            O . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """)
        assert get_stone_difference(state) == 2
        assert get_stone_difference(state, WHITE) == -2

    def test_summary_from_white(self):
        state = Othello().get_initial_state()

        summary = summarize_evaluation(state, 120, WHITE)

        assert summary.perspective == WHITE
        assert summary.stone_diff == 0
        assert summary.normalized_eval == -49

    def test_summary_without_evaluation(self):
        summary = summarize_evaluation(Othello().get_initial_state(), None, BLACK)
        assert summary.normalized_eval == 0
