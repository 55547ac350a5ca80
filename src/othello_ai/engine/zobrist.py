"""
Zobrist hashing for Othello positions.

Zobrist hashing provides O(1) position lookup in transposition tables by
computing a hash for each board state. The hash is updated incrementally
after each move, which matters in Othello because a single move may flip
many discs.

Implementation:
- Pre-generate random 64-bit keys for each (row, col, color) combination
- Hash = XOR of all keys corresponding to occupied squares
- Side to move folded in with one extra key (XORed when White is to move)
- Incremental update: XOR in the placed disc, XOR each flipped disc out of
  the opponent's color and into the mover's, toggle the side key
"""

import numpy as np
from typing import Iterable, Optional


class ZobristHasher:
    """
    Zobrist hashing for Othello board positions.

    8 rows x 8 columns x 2 colors = 128 zobrist keys, plus one side key.

    Features:
    - Deterministic hash generation (seeded RNG for reproducibility)
    - Incremental updates for placements, flips and passes
    - Collision detection is left to the TT, which stores the full hash
    """

    def __init__(self, row_count: int = 8, column_count: int = 8, seed: int = 42):
        """
        Initialize Zobrist hash table with random 64-bit keys.

        Args:
            row_count: Number of board rows
            column_count: Number of board columns
            seed: Random seed for reproducibility
        """
        self.row_count = row_count
        self.column_count = column_count

        rng = np.random.RandomState(seed)

        # Keys: [row, col, color_idx], color_idx 0 for white (-1), 1 for black (1)
        self.zobrist_table = rng.randint(
            0, 2**63 - 1,
            size=(row_count, column_count, 2),
            dtype=np.uint64
        )
        self.side_to_move_hash = int(rng.randint(0, 2**63 - 1, dtype=np.uint64))

        # Python ints for the per-node incremental path
        self._keys = self.zobrist_table.tolist()

    @staticmethod
    def _color_idx(color: int) -> int:
        return 0 if color == -1 else 1

    def hash_position(self, state: np.ndarray, player: int = 1) -> int:
        """
        Compute Zobrist hash for a board state from scratch.

        Args:
            state: Board (row_count, column_count) with values in {-1, 0, 1}
            player: Side to move (1 or -1)

        Returns:
            64-bit hash value (int)
        """
        black_keys = self.zobrist_table[:, :, 1][state == 1]
        white_keys = self.zobrist_table[:, :, 0][state == -1]
        hash_value = (
            int(np.bitwise_xor.reduce(black_keys, initial=np.uint64(0)))
            ^ int(np.bitwise_xor.reduce(white_keys, initial=np.uint64(0)))
        )

        if player == -1:
            hash_value ^= self.side_to_move_hash

        return hash_value

    def toggle_side(self, current_hash: int) -> int:
        """Hash after a pass: same discs, other side to move."""
        return current_hash ^ self.side_to_move_hash

    def hash_after_move(
        self,
        current_hash: int,
        move: tuple[int, int],
        flips: Iterable[tuple[int, int]],
        player: int
    ) -> int:
        """
        Incrementally update a hash for a placement and its flips.

        Args:
            current_hash: Hash of the position before the move
            move: (row, col) of the placed disc
            flips: Cells flipped from the opponent's color to ``player``'s
            player: Player making the move

        Returns:
            Hash of the resulting position (opponent to move)
        """
        own = self._color_idx(player)
        opp = 1 - own
        row, col = move

        new_hash = current_hash ^ self._keys[row][col][own]
        for r, c in flips:
            cell = self._keys[r][c]
            new_hash ^= cell[opp] ^ cell[own]

        return new_hash ^ self.side_to_move_hash

    def verify_hash(self, state: np.ndarray, player: int, claimed_hash: int) -> bool:
        """
        Verify that a claimed hash matches the actual board state.

        Useful for debugging incremental updates.
        """
        return self.hash_position(state, player) == claimed_hash


# Key tables are immutable once generated, so hashers are shared per shape/seed
_hashers: dict[tuple[int, int, int], ZobristHasher] = {}


def get_zobrist_hasher(
    row_count: int = 8,
    column_count: int = 8,
    seed: int = 42
) -> ZobristHasher:
    """
    Get or create the shared Zobrist hasher for a board shape and seed.

    All components hashing the same board must use the same key table.
    """
    key = (row_count, column_count, seed)
    hasher: Optional[ZobristHasher] = _hashers.get(key)

    if hasher is None:
        hasher = ZobristHasher(row_count, column_count, seed)
        _hashers[key] = hasher

    return hasher
