"""
Static evaluation for Othello positions.

Scores are zero-sum: every feature is measured as Black minus White and then
multiplied by the perspective player, so evaluate(p, 1) == -evaluate(p, -1).

Finished games get an exact score (SCORE_WIN plus the final disc margin)
that no heuristic value can reach, so a solved line always dominates a
guessed one.
"""

import numpy as np
from typing import Optional

from othello_ai.config import EVAL_CONFIG
from othello_ai.game.othello import (
    Othello, BLACK, WHITE, EMPTY, DIRECTIONS, BOARD_SIZE, shift_mask,
)


# Sentinel values for win/draw
SCORE_WIN = 100000
SCORE_DRAW = 0
SCORE_INF = 1000000

# Heuristic scores never reach terminal territory
HEURISTIC_LIMIT = SCORE_WIN // 2

POSITIONAL_WEIGHTS = np.array([
    [120, -20, 20, 5, 5, 20, -20, 120],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [120, -20, 20, 5, 5, 20, -20, 120],
], dtype=np.int32)

CORNERS = ((0, 0), (0, 7), (7, 0), (7, 7))
X_SQUARES = ((1, 1), (1, 6), (6, 1), (6, 6))
C_SQUARES = ((0, 1), (1, 0), (0, 6), (1, 7), (7, 1), (6, 0), (7, 6), (6, 7))

# Edge directions walked from each corner when counting anchored discs
_CORNER_EDGES = {
    (0, 0): ((0, 1), (1, 0)),
    (0, 7): ((0, -1), (1, 0)),
    (7, 0): ((-1, 0), (0, 1)),
    (7, 7): ((-1, 0), (0, -1)),
}


def static_move_score(move) -> int:
    """Positional square weight of a move (cheap ordering tie-break)."""
    row, col = move
    return int(POSITIONAL_WEIGHTS[row, col])


def terminal_score(black: int, white: int, player: int, disc_weight: Optional[int] = None) -> float:
    """
    Exact score of a finished game from ``player``'s perspective.

    Wins and losses are offset by SCORE_WIN and then scaled by the final disc
    margin, so a bigger win always scores higher.
    """
    if disc_weight is None:
        disc_weight = EVAL_CONFIG['terminal_disc_weight']
    diff = (black - white) * player
    if diff == 0:
        return float(SCORE_DRAW)
    return float(np.sign(diff) * SCORE_WIN + diff * disc_weight)


def count_stable_discs(state: np.ndarray, color: int) -> int:
    """
    Count discs anchored to an owned corner along the edges.

    A corner of ``color`` and the unbroken run of ``color`` discs running
    from it along each edge can never be flipped.
    """
    stable = set()
    for (r, c), edges in _CORNER_EDGES.items():
        if state[r, c] != color:
            continue
        stable.add((r, c))
        for dr, dc in edges:
            nr, nc = r + dr, c + dc
            while 0 <= nr < BOARD_SIZE and 0 <= nc < BOARD_SIZE and state[nr, nc] == color:
                stable.add((nr, nc))
                nr += dr
                nc += dc
    return len(stable)


def count_frontier_discs(state: np.ndarray, color: int) -> int:
    """Count discs of ``color`` adjacent to at least one empty square."""
    empty = state == EMPTY
    near_empty = np.zeros_like(empty)
    for dr, dc in DIRECTIONS:
        near_empty |= shift_mask(empty, dr, dc)
    return int(np.count_nonzero(near_empty & (state == color)))


def _count_cells(state: np.ndarray, cells, color: int) -> int:
    return sum(1 for r, c in cells if state[r, c] == color)


class HeuristicEvaluator:
    """
    Phase-aware heuristic evaluator.

    Features (each Black minus White):
    - positional square table
    - mobility (legal move count)
    - corner occupancy, X-square and C-square penalties
    - corner-anchored stable discs
    - frontier discs (penalized)
    - raw disc difference
    """

    def __init__(self, game: Optional[Othello] = None, config: Optional[dict] = None):
        """
        Args:
            game: Othello instance used for move generation
            config: Evaluation config (defaults to EVAL_CONFIG)
        """
        self.game = game or Othello()
        self.config = config or EVAL_CONFIG

    def __call__(self, state: np.ndarray, player: int) -> float:
        return self.evaluate(state, player)

    def phase_weights(self, empties: int) -> dict:
        if empties >= self.config['opening_empties']:
            return self.config['weights']['opening']
        if empties >= self.config['midgame_empties']:
            return self.config['weights']['midgame']
        return self.config['weights']['endgame']

    def evaluate(self, state: np.ndarray, player: int) -> float:
        """
        Evaluate ``state`` from ``player``'s perspective.

        Returns:
            Exact terminal score if neither side can move, otherwise the
            heuristic score clamped to +/- HEURISTIC_LIMIT
        """
        black_moves = int(np.count_nonzero(self.game.get_valid_moves(state, BLACK)))
        white_moves = int(np.count_nonzero(self.game.get_valid_moves(state, WHITE)))

        black, white = self.game.count_discs(state)
        if black_moves == 0 and white_moves == 0:
            return terminal_score(black, white, player, self.config['terminal_disc_weight'])

        weights = self.phase_weights(BOARD_SIZE * BOARD_SIZE - black - white)

        positional = int(np.sum(POSITIONAL_WEIGHTS * state))
        score = (
            weights['positional'] * positional
            + weights['mobility'] * (black_moves - white_moves)
            + weights['corner'] * (_count_cells(state, CORNERS, BLACK) - _count_cells(state, CORNERS, WHITE))
            - weights['x_square'] * (_count_cells(state, X_SQUARES, BLACK) - _count_cells(state, X_SQUARES, WHITE))
            - weights['c_square'] * (_count_cells(state, C_SQUARES, BLACK) - _count_cells(state, C_SQUARES, WHITE))
            + weights['stability'] * (count_stable_discs(state, BLACK) - count_stable_discs(state, WHITE))
            - weights['frontier'] * (count_frontier_discs(state, BLACK) - count_frontier_discs(state, WHITE))
            + weights['discs'] * (black - white)
        )

        score = max(-HEURISTIC_LIMIT, min(HEURISTIC_LIMIT, score))
        return float(score * player)


_default_evaluator = HeuristicEvaluator()


def evaluate(state: np.ndarray, player: int) -> float:
    """Evaluate with the default heuristic; positive favors ``player``."""
    return _default_evaluator.evaluate(state, player)
