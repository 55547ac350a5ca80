"""
Othello search engine: board model, alpha-beta search and engine tiers.
"""

from othello_ai.game.othello import Othello, Move, PASS_MOVE, BLACK, WHITE, EMPTY
from othello_ai.engine.registry import analyze, create_engine, available_tiers

__all__ = [
    'Othello',
    'Move',
    'PASS_MOVE',
    'BLACK',
    'WHITE',
    'EMPTY',
    'analyze',
    'create_engine',
    'available_tiers',
]
