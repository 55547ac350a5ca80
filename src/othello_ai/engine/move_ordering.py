"""
Move ordering heuristics for alpha-beta search.

Good move ordering is critical for alpha-beta pruning efficiency. The goal is to
search the best moves first to maximize beta cutoffs. Ordering never changes
the minimax value, only how many nodes are needed to prove it.

Ordering priority (high to low):
1. TT move. Before ply ``tt_gate_ply`` it yields to any move with a strictly
   higher square weight; the whole list then falls back to the keys below,
   with the TT move only breaking full ties.
2. Killer moves (moves that caused cutoffs at the same ply)
3. History heuristic (moves that historically caused cutoffs for this side)
4. Positional square weight (corners high, X-squares low)
5. Input order (the sort is stable)
"""

import numpy as np
from typing import Optional, Sequence

from othello_ai.config import ORDERING_CONFIG
from othello_ai.engine.evaluation import static_move_score
from othello_ai.game.othello import Move, BOARD_SIZE


class KillerMoves:
    """
    Two killer slots per ply.

    Valid for one root search (shared by its iterative-deepening iterations).
    """

    def __init__(self, max_ply: int = 128):
        self.max_ply = max_ply
        self.moves: list[list[Optional[Move]]] = [[None, None] for _ in range(max_ply)]

    def update(self, move: Move, ply: int):
        """
        Record a move that caused a beta cutoff at ``ply``.

        A new killer is shifted into the first slot; the old first becomes second.
        """
        if ply >= self.max_ply:
            return

        slots = self.moves[ply]
        if slots[0] != move:
            slots[1] = slots[0]
            slots[0] = move

    def priority(self, move: Move, ply: int) -> int:
        """2 for the first killer, 1 for the second, 0 otherwise."""
        if ply >= self.max_ply:
            return 0
        slots = self.moves[ply]
        if slots[0] == move:
            return 2
        if slots[1] == move:
            return 1
        return 0

    def clear(self):
        self.moves = [[None, None] for _ in range(self.max_ply)]


class HistoryTable:
    """
    History heuristic: [side, row, col] -> accumulated cutoff score.

    Incremented by depth^2 on every cutoff, so cutoffs far from the leaves
    count more. Can outlive a single search and decay between searches.
    """

    def __init__(self):
        self.table = np.zeros((2, BOARD_SIZE, BOARD_SIZE), dtype=np.int64)

    @staticmethod
    def _side(player: int) -> int:
        return 0 if player == -1 else 1

    def update(self, move: Move, player: int, depth: int):
        row, col = move
        self.table[self._side(player), row, col] += depth * depth

    def score(self, move: Move, player: int) -> int:
        row, col = move
        return int(self.table[self._side(player), row, col])

    def age(self, factor: float = 0.9):
        """Scale all scores down so recent cutoffs dominate."""
        self.table = np.floor(self.table * factor).astype(np.int64)

    def clear(self):
        self.table.fill(0)


def order_moves(
    moves: Sequence[Move],
    ply: int,
    player: int,
    killers: KillerMoves,
    history: HistoryTable,
    tt_move: Optional[Move] = None,
    tt_gate_ply: int = 6,
) -> list[Move]:
    """
    Order moves for alpha-beta search (best first).

    Args:
        moves: Legal moves of the node
        ply: Distance from the search root
        player: Side to move
        killers: Killer moves of the current search
        history: History table
        tt_move: Best move stored in the TT for this node, if any
        tt_gate_ply: First ply at which the TT move is forced to the front

    Returns:
        New list with the same moves, sorted by priority
    """
    tt_dominant = False
    if tt_move is not None and tt_move in moves:
        tt_static = static_move_score(tt_move)
        tt_dominant = ply >= tt_gate_ply or all(static_move_score(m) <= tt_static for m in moves)

    def sort_key(move):
        is_tt = tt_move is not None and move == tt_move
        base = (
            killers.priority(move, ply),
            history.score(move, player),
            static_move_score(move),
        )
        if tt_dominant:
            return (is_tt,) + base
        return base + (is_tt,)

    return sorted(moves, key=sort_key, reverse=True)


class MoveOrdering:
    """
    Move ordering state for one search: killer moves plus a history table.

    The history table may be handed in so it can persist across searches.
    """

    def __init__(
        self,
        max_ply: int = ORDERING_CONFIG['max_ply'],
        tt_gate_ply: int = ORDERING_CONFIG['tt_gate_ply'],
        history: Optional[HistoryTable] = None
    ):
        """
        Args:
            max_ply: Maximum ply depth to track killers for
            tt_gate_ply: Ply from which the TT move is searched first
            history: Existing history table to reuse
        """
        self.max_ply = max_ply
        self.tt_gate_ply = tt_gate_ply
        self.killers = KillerMoves(max_ply)
        self.history = history if history is not None else HistoryTable()

    def update_killers(self, move: Move, ply: int):
        self.killers.update(move, ply)

    def update_history(self, move: Move, player: int, depth: int):
        self.history.update(move, player, depth)

    def order_moves(
        self,
        moves: Sequence[Move],
        ply: int,
        player: int,
        tt_move: Optional[Move] = None
    ) -> list[Move]:
        return order_moves(
            moves, ply, player, self.killers, self.history,
            tt_move=tt_move, tt_gate_ply=self.tt_gate_ply
        )
