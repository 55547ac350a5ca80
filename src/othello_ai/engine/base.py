"""
Common engine interface.

Every engine tier answers ``analyze(state, player, budget, move_history)``
with a SearchResult, so callers can swap engines without changing code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from othello_ai.engine.budget import SearchBudget
from othello_ai.game.othello import Othello, Move


@dataclass
class IterationInfo:
    """One completed iterative-deepening iteration."""
    depth: int
    score: float
    best_move: Move
    nodes_searched: int  # cumulative over the search
    time_ms: int


@dataclass
class SearchResult:
    """Result of an analyze call."""
    best_move: Optional[Move]
    score: float        # from the side to move
    evaluation: float   # positive favors Black
    depth_reached: int
    nodes_searched: int
    time_ms: int
    principal_variation: list[Move] = field(default_factory=list)
    iterations: list[IterationInfo] = field(default_factory=list)
    tt_stats: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Plain dict in the shape consumed by outer layers."""
        def encode(move):
            return None if move is None else {'row': move.row, 'col': move.col}

        return {
            'bestMove': encode(self.best_move),
            'evaluation': self.evaluation,
            'nodesSearched': self.nodes_searched,
            'depthReached': self.depth_reached,
            'timeUsedMs': self.time_ms,
            'principalVariation': [encode(m) for m in self.principal_variation],
        }


class Engine(ABC):
    """
    Abstract engine. Subclasses implement ``analyze``.
    """

    name = 'engine'

    def __init__(self, game: Optional[Othello] = None):
        self.game = game or Othello()

    @abstractmethod
    def analyze(
        self,
        state: np.ndarray,
        player: int,
        budget: Optional[SearchBudget] = None,
        move_history: Optional[Sequence] = None
    ) -> SearchResult:
        """
        Pick a move for ``player``.

        Args:
            state: 8x8 board (1 black, -1 white, 0 empty)
            player: Side to move
            budget: Explicit depth/time budget; engines choose one if None
            move_history: Moves played so far (only its length is used)

        Returns:
            SearchResult; best_move is None only when ``player`` has no legal move
        """
        pass

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r})"
