"""
Transposition table for caching alpha-beta search results.

The transposition table stores previously computed positions to avoid redundant
work during alpha-beta search. This provides large speedups in iterative
deepening, as positions from depth D-1 are reused when searching depth D, and
in Othello where many move orders reach the same disc pattern.

Key concepts:
- Bound types: EXACT (PV node), LOWER (fail-high/beta cutoff), UPPER (fail-low)
- Replacement policy: depth-preferred, stale entries from older searches yield
- Age tracking: entries too many search generations old are ignored
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import numpy as np

from othello_ai.game.othello import Move


class BoundType(Enum):
    """Type of bound stored in transposition table entry."""
    EXACT = 0   # Exact value (searched with the window fully open around it)
    LOWER = 1   # Lower bound (beta cutoff, actual value >= stored value)
    UPPER = 2   # Upper bound (all moves failed low, actual value <= stored value)


@dataclass
class TTEntry:
    """
    Transposition table entry storing cached search results.

    Attributes:
        zobrist_hash: Full 64-bit hash for collision detection
        depth: Remaining search depth when this entry was stored
        score: Evaluation score (or bound) from the side to move
        bound: Type of bound (EXACT/LOWER/UPPER)
        best_move: Best move found at this position
        age: Search generation (for aging out old entries)
    """
    zobrist_hash: int
    depth: int
    score: float
    bound: BoundType
    best_move: Optional[Move]
    age: int = 0

    def is_valid(self, query_hash: int, current_age: int, max_age_diff: int = 10) -> bool:
        """True if hash matches and the entry is not too old."""
        return (
            self.zobrist_hash == query_hash and
            (current_age - self.age) <= max_age_diff
        )


class TranspositionTable:
    """
    Fixed-size transposition table with depth-preferred replacement.

    Implementation:
    - Power-of-2 sized table for fast modulo via bit masking
    - One entry per slot; a full table silently overwrites (lost cache hits only)
    - Age tracking to prefer entries from the current search
    """

    def __init__(self, size_mb: int = 16, max_age_diff: int = 10):
        """
        Initialize transposition table.

        Args:
            size_mb: Table size in megabytes (rounded down to a power of 2 entries)
            max_age_diff: Search generations after which an entry is ignored
        """
        bytes_per_entry = 64  # Conservative estimate with Python overhead
        num_entries = max(1, (size_mb * 1024 * 1024) // bytes_per_entry)

        self.num_entries = 2 ** int(np.log2(num_entries))
        self.index_mask = self.num_entries - 1
        self.max_age_diff = max_age_diff

        self.table: list[Optional[TTEntry]] = [None] * self.num_entries

        self.current_age = 0

        self.hits = 0
        self.misses = 0
        self.collisions = 0
        self.stores = 0

    def _get_index(self, zobrist_hash: int) -> int:
        return zobrist_hash & self.index_mask

    def probe(self, zobrist_hash: int) -> Optional[TTEntry]:
        """
        Look up a position.

        The caller decides how to use the entry: an EXACT score at sufficient
        depth is returned directly, LOWER may only raise alpha and UPPER may
        only lower beta.

        Returns:
            The matching entry, or None on a miss or collision
        """
        entry = self.table[self._get_index(zobrist_hash)]

        if entry is None:
            self.misses += 1
            return None

        if not entry.is_valid(zobrist_hash, self.current_age, self.max_age_diff):
            if entry.zobrist_hash != zobrist_hash:
                self.collisions += 1
            self.misses += 1
            return None

        self.hits += 1
        return entry

    def store(
        self,
        zobrist_hash: int,
        depth: int,
        score: float,
        bound: BoundType,
        best_move: Optional[Move]
    ):
        """
        Store search result in transposition table.

        Replacement policy (depth-preferred): an entry written during the
        current search is only overwritten by a result of equal or greater
        depth, whether for the same position or a colliding one. Entries
        from older searches count as evicted and are always replaced.

        Args:
            zobrist_hash: Position hash
            depth: Remaining depth searched
            score: Evaluation or bound
            bound: Type of bound
            best_move: Best move found (None at terminal nodes)
        """
        index = self._get_index(zobrist_hash)
        existing = self.table[index]

        if existing is not None and existing.age == self.current_age and depth < existing.depth:
            return

        self.table[index] = TTEntry(
            zobrist_hash=zobrist_hash,
            depth=depth,
            score=score,
            bound=bound,
            best_move=best_move,
            age=self.current_age
        )
        self.stores += 1

    def get_best_move(self, zobrist_hash: int) -> Optional[Move]:
        """
        Retrieve best move without depth or bound checks (move ordering hint).
        """
        entry = self.table[self._get_index(zobrist_hash)]

        if entry is not None and entry.is_valid(zobrist_hash, self.current_age, self.max_age_diff):
            return entry.best_move

        return None

    def clear(self):
        """Clear all entries (use between games)."""
        self.table = [None] * self.num_entries
        self.current_age = 0
        self._reset_stats()

    def new_search(self):
        """Increment age counter for a new root search."""
        self.current_age += 1

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.collisions = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, collisions
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'collisions': self.collisions,
            'stores': self.stores,
            'size_entries': self.num_entries,
        }

    def get_fill_rate(self) -> float:
        """Percentage of table slots occupied (0-100)."""
        occupied = sum(1 for entry in self.table if entry is not None)
        return (occupied / self.num_entries) * 100.0
