"""
Unit tests for engine tiers.

Every tier must honor the same analyze contract: a legal move (or None when
the side to move must pass) wrapped in a SearchResult.
"""

import numpy as np
import pytest

from othello_ai.engine.alphabeta import AlphaBetaEngine
from othello_ai.engine.base import Engine, SearchResult
from othello_ai.engine.budget import SearchBudget
from othello_ai.engine.registry import available_tiers, create_engine, get_engine, analyze
from othello_ai.engine.simple import RandomEngine, GreedyEngine
from othello_ai.exceptions import UnknownTierError
from othello_ai.game.othello import Othello, Move, BLACK, WHITE, board_from_string


SMALL_BUDGET = SearchBudget(max_depth=2, time_limit_ms=1000)

PASS_POSITION = """
    X O . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
    . . . . . . . .
"""


class TestRegistry:

    def test_available_tiers(self):
        assert available_tiers() == ['A', 'B', 'C', 'D']

    def test_tier_classes(self):
        assert isinstance(create_engine('A'), RandomEngine)
        assert isinstance(create_engine('B'), GreedyEngine)
        assert isinstance(create_engine('c'), AlphaBetaEngine)
        assert isinstance(create_engine('D'), AlphaBetaEngine)

    def test_tier_names(self):
        assert create_engine('C').name == 'shallow'
        assert create_engine('D').name == 'full'

    def test_shallow_tier_has_fixed_budget(self):
        engine = create_engine('C', tt_size_mb=1)
        assert engine.default_budget == SearchBudget(max_depth=4, time_limit_ms=1000)

    def test_unknown_tier(self):
        with pytest.raises(UnknownTierError):
            create_engine('Z')

    def test_unknown_tier_is_key_error(self):
        with pytest.raises(KeyError):
            create_engine('E')

    def test_shared_instance(self):
        assert get_engine('b') is get_engine('B')

    def test_module_analyze(self):
        result = analyze(Othello().get_initial_state(), BLACK, tier='B')
        assert result.best_move in Othello().get_legal_moves(Othello().get_initial_state(), BLACK)


class TestContract:
    """All tiers answer analyze the same way."""

    @pytest.mark.parametrize("tier", ['A', 'B', 'C', 'D'])
    def test_legal_move_from_start(self, tier):
        game = Othello()
        engine = create_engine(tier)
        state = game.get_initial_state()

        result = engine.analyze(state, BLACK, budget=SMALL_BUDGET)

        assert isinstance(engine, Engine)
        assert isinstance(result, SearchResult)
        assert result.best_move in game.get_legal_moves(state, BLACK)

    @pytest.mark.parametrize("tier", ['A', 'B', 'C', 'D'])
    def test_pass_returns_none(self, tier):
        engine = create_engine(tier)

        result = engine.analyze(board_from_string(PASS_POSITION), WHITE, budget=SMALL_BUDGET)

        assert result.best_move is None

    @pytest.mark.parametrize("tier", ['B', 'C', 'D'])
    def test_takes_the_win(self, tier):
        engine = create_engine(tier)

        result = engine.analyze(board_from_string(PASS_POSITION), BLACK, budget=SMALL_BUDGET)

        assert result.best_move == Move(0, 2)
        assert result.evaluation > 0

    def test_random_tier_is_seeded(self):
        game = Othello()
        state = game.get_initial_state()

        first_engine = create_engine('A', seed=5)
        second_engine = create_engine('A', seed=5)

        first = [first_engine.analyze(state, BLACK).best_move for _ in range(8)]
        second = [second_engine.analyze(state, BLACK).best_move for _ in range(8)]

        assert first == second

    def test_greedy_picks_best_static_reply(self):
        game = Othello()
        rng = np.random.RandomState(3)
        state = game.get_initial_state()
        player = BLACK
        for _ in range(12):
            moves = game.get_legal_moves(state, player)
            if moves:
                state = game.get_next_state(state, moves[rng.randint(len(moves))], player)
            player = -player

        engine = create_engine('B')
        result = engine.analyze(state, player)
        best_scores = [
            -engine.evaluator(game.get_next_state(state, m, player), -player)
            for m in game.get_legal_moves(state, player)
        ]

        assert result.score == max(best_scores)
