"""
Game definitions searched by the engines.
"""

from othello_ai.game.game import Game
from othello_ai.game.othello import (
    Othello,
    Move,
    PASS_MOVE,
    BLACK,
    WHITE,
    EMPTY,
    board_from_string,
    board_to_string,
)

__all__ = [
    'Game',
    'Othello',
    'Move',
    'PASS_MOVE',
    'BLACK',
    'WHITE',
    'EMPTY',
    'board_from_string',
    'board_to_string',
]
