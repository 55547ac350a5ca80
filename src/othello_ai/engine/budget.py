"""
Search budget controller.

Maps the game phase to a maximum depth and a wall-clock limit:
- late game (few empties): deepest search, the tree is small enough to solve
- opening: cheaper search, positions are volatile
- midgame: the largest time budget, where the heuristic matters most
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from othello_ai.config import BUDGET_CONFIG
from othello_ai.game.othello import EMPTY


@dataclass(frozen=True)
class SearchBudget:
    """Depth and time allowance for one analyze call."""
    max_depth: int
    time_limit_ms: Optional[int]  # None for no deadline


def budget_for_phase(move_count: int, empty_squares: int, config: Optional[dict] = None) -> SearchBudget:
    """
    Choose (max_depth, time_limit_ms) from game-phase signals.

    Args:
        move_count: Moves played so far
        empty_squares: Empty cells left on the board
        config: Thresholds and budgets (defaults to BUDGET_CONFIG)
    """
    config = config or BUDGET_CONFIG

    if empty_squares <= config['late_game_empties']:
        phase = config['late_game']
    elif move_count < config['opening_moves'] or empty_squares > config['opening_empties']:
        phase = config['opening']
    else:
        phase = config['midgame']

    return SearchBudget(max_depth=phase['max_depth'], time_limit_ms=phase['time_limit_ms'])


def budget_for_state(
    state: np.ndarray,
    move_history: Optional[Sequence] = None,
    config: Optional[dict] = None
) -> SearchBudget:
    """
    Derive the budget from a board.

    The move count comes from ``move_history`` when given, otherwise from the
    number of discs placed beyond the four starting ones.
    """
    empty_squares = int(np.count_nonzero(state == EMPTY))
    if move_history is not None:
        move_count = len(move_history)
    else:
        move_count = max(0, state.size - empty_squares - 4)

    return budget_for_phase(move_count, empty_squares, config)
