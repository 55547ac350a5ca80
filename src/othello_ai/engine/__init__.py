"""
Alpha-beta search engine for Othello.

This module contains the engine components:
- Zobrist hashing for fast position lookup
- Transposition table for caching search results
- Static evaluation
- Move ordering heuristics (TT move, killers, history)
- Alpha-beta negamax search with iterative deepening
- Budget controller and engine tiers
"""

from othello_ai.engine.zobrist import ZobristHasher, get_zobrist_hasher
from othello_ai.engine.transposition_table import TranspositionTable, BoundType, TTEntry
from othello_ai.engine.evaluation import HeuristicEvaluator, evaluate, static_move_score
from othello_ai.engine.move_ordering import MoveOrdering, KillerMoves, HistoryTable, order_moves
from othello_ai.engine.budget import SearchBudget, budget_for_phase, budget_for_state
from othello_ai.engine.base import Engine, SearchResult, IterationInfo
from othello_ai.engine.alphabeta import AlphaBetaEngine, SearchContext
from othello_ai.engine.simple import RandomEngine, GreedyEngine
from othello_ai.engine.registry import create_engine, get_engine, available_tiers, analyze
from othello_ai.engine.score_utils import (
    EvaluationSummary,
    score_to_probability,
    map_evaluation_to_stone_scale,
    get_stone_difference,
    summarize_evaluation,
)

__all__ = [
    'ZobristHasher',
    'get_zobrist_hasher',
    'TranspositionTable',
    'BoundType',
    'TTEntry',
    'HeuristicEvaluator',
    'evaluate',
    'static_move_score',
    'MoveOrdering',
    'KillerMoves',
    'HistoryTable',
    'order_moves',
    'SearchBudget',
    'budget_for_phase',
    'budget_for_state',
    'Engine',
    'SearchResult',
    'IterationInfo',
    'AlphaBetaEngine',
    'SearchContext',
    'RandomEngine',
    'GreedyEngine',
    'create_engine',
    'get_engine',
    'available_tiers',
    'analyze',
    'EvaluationSummary',
    'score_to_probability',
    'map_evaluation_to_stone_scale',
    'get_stone_difference',
    'summarize_evaluation',
]
