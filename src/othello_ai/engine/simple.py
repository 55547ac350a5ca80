"""
Lightweight engine tiers that do not search: random and greedy.
"""

import time
from typing import Optional, Sequence

import numpy as np

from othello_ai.engine.base import Engine, SearchResult
from othello_ai.engine.budget import SearchBudget
from othello_ai.engine.evaluation import HeuristicEvaluator
from othello_ai.game.othello import Othello


class RandomEngine(Engine):
    """Plays a uniformly random legal move."""

    name = 'random'

    def __init__(self, game: Optional[Othello] = None, seed: Optional[int] = None):
        super().__init__(game)
        self.rng = np.random.RandomState(seed)

    def analyze(
        self,
        state: np.ndarray,
        player: int,
        budget: Optional[SearchBudget] = None,
        move_history: Optional[Sequence] = None
    ) -> SearchResult:
        start = time.perf_counter()
        board = self.game.validate_state(state, player)
        moves = self.game.get_legal_moves(board, player)

        best_move = moves[self.rng.randint(len(moves))] if moves else None

        return SearchResult(
            best_move=best_move,
            score=0.0,
            evaluation=0.0,
            depth_reached=0,
            nodes_searched=len(moves),
            time_ms=int((time.perf_counter() - start) * 1000),
            principal_variation=[best_move] if best_move else [],
        )


class GreedyEngine(Engine):
    """
    One-ply engine: plays the move whose resulting position evaluates best.

    Ties go to the first move in row-major order.
    """

    name = 'greedy'

    def __init__(self, game: Optional[Othello] = None, evaluator=None):
        super().__init__(game)
        self.evaluator = evaluator or HeuristicEvaluator(self.game)

    def analyze(
        self,
        state: np.ndarray,
        player: int,
        budget: Optional[SearchBudget] = None,
        move_history: Optional[Sequence] = None
    ) -> SearchResult:
        start = time.perf_counter()
        board = self.game.validate_state(state, player)
        moves = self.game.get_legal_moves(board, player)

        if not moves:
            score = float(self.evaluator(board, player))
            return SearchResult(
                best_move=None,
                score=score,
                evaluation=score * player,
                depth_reached=0,
                nodes_searched=0,
                time_ms=int((time.perf_counter() - start) * 1000),
            )

        scores = [
            -float(self.evaluator(self.game.get_next_state(board, move, player), -player))
            for move in moves
        ]
        best_index = int(np.argmax(scores))
        best_move = moves[best_index]
        best_score = scores[best_index]

        return SearchResult(
            best_move=best_move,
            score=best_score,
            evaluation=best_score * player,
            depth_reached=1,
            nodes_searched=len(moves),
            time_ms=int((time.perf_counter() - start) * 1000),
            principal_variation=[best_move],
        )
