"""
Othello rules on a numpy board.

Boards are (8, 8) int8 arrays holding BLACK (1), WHITE (-1) or EMPTY (0).
Moves are Move(row, col); PASS_MOVE is only legal when the mover has no
placement.
"""

import numpy as np
from typing import NamedTuple, Optional

from othello_ai.exceptions import IllegalMoveError, InvalidPositionError
from othello_ai.game.game import Game


EMPTY = 0
BLACK = 1
WHITE = -1

BOARD_SIZE = 8

DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

_SYMBOLS = {BLACK: 'X', WHITE: 'O', EMPTY: '.'}


class Move(NamedTuple):
    """Board coordinate of a placement. ``PASS_MOVE`` stands for a pass."""
    row: int
    col: int

    @property
    def is_pass(self) -> bool:
        return self.row < 0

    def to_notation(self) -> str:
        if self.is_pass:
            return 'pass'
        return 'abcdefgh'[self.col] + str(self.row + 1)


PASS_MOVE = Move(-1, -1)


def shift_mask(mask: np.ndarray, dr: int, dc: int) -> np.ndarray:
    """Shift a boolean board by (dr, dc); cells pushed off the edge are dropped."""
    n = mask.shape[0]
    out = np.zeros_like(mask)
    out[max(0, dr):n - max(0, -dr), max(0, dc):n - max(0, -dc)] = \
        mask[max(0, -dr):n - max(0, dr), max(0, -dc):n - max(0, dc)]
    return out


class Othello(Game):
    """
    Othello (Reversi) on an 8x8 board.

    Board: int8 array, 1 = Black, -1 = White, 0 = empty.
    Actions: Move(row, col), or PASS_MOVE when the mover has no placement.
    Black moves first.
    """

    def __init__(self):
        self.row_count = BOARD_SIZE
        self.column_count = BOARD_SIZE

    def __repr__(self):
        return f"Othello({self.row_count}x{self.column_count})"

    def get_initial_state(self):
        state = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        state[3, 3] = WHITE
        state[4, 4] = WHITE
        state[3, 4] = BLACK
        state[4, 3] = BLACK
        return state

    def get_valid_moves(self, state, player):
        """
        Returns an (8, 8) boolean mask of legal placements.

        From every disc of the mover, walk each direction across runs of
        opponent discs; an empty cell reached right after such a run is legal.
        """
        own = state == player
        opp = state == -player
        empty = state == EMPTY

        legal = np.zeros_like(own)
        for dr, dc in DIRECTIONS:
            run = shift_mask(own, dr, dc) & opp
            # An opponent run between two cells is at most 6 long
            for _ in range(BOARD_SIZE - 3):
                run |= shift_mask(run, dr, dc) & opp
            legal |= shift_mask(run, dr, dc) & empty
        return legal

    def get_legal_moves(self, state, player) -> list[Move]:
        """Legal placements in row-major order (empty list means pass)."""
        return [Move(int(r), int(c)) for r, c in np.argwhere(self.get_valid_moves(state, player))]

    def has_legal_move(self, state, player) -> bool:
        return bool(self.get_valid_moves(state, player).any())

    def get_flips(self, state, move, player) -> list[tuple[int, int]]:
        """
        Cells captured by placing at ``move``.

        Returns an empty list when the cell is occupied, off the board, or
        brackets nothing.
        """
        row, col = move
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            return []
        if state[row, col] != EMPTY:
            return []

        flips = []
        for dr, dc in DIRECTIONS:
            r, c = row + dr, col + dc
            run = []
            while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and state[r, c] == -player:
                run.append((r, c))
                r += dr
                c += dc
            if run and 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and state[r, c] == player:
                flips.extend(run)
        return flips

    def make_move(self, state, action, player) -> tuple[np.ndarray, list[tuple[int, int]]]:
        """
        Apply a move and also return the flipped cells.

        Args:
            state: Current board state
            action: Move (or (row, col) tuple) or PASS_MOVE
            player: 1 or -1

        Returns:
            (new_state, flips)

        Raises:
            IllegalMoveError: if the move is not legal for ``player``
        """
        move = Move(*action)
        if move.is_pass:
            if self.has_legal_move(state, player):
                raise IllegalMoveError(move, player)
            return state.copy(), []

        flips = self.get_flips(state, move, player)
        if not flips:
            raise IllegalMoveError(move, player)

        state = state.copy()
        state[move.row, move.col] = player
        rows, cols = zip(*flips)
        state[list(rows), list(cols)] = player
        return state, flips

    def get_next_state(self, state, action, player):
        """
        Place a disc and flip every bracketed run.

        The input state is never modified.
        """
        next_state, _ = self.make_move(state, action, player)
        return next_state

    def is_terminal(self, state) -> bool:
        return not self.has_legal_move(state, BLACK) and not self.has_legal_move(state, WHITE)

    def count_discs(self, state) -> tuple[int, int]:
        """Returns (black, white) disc counts."""
        return int(np.count_nonzero(state == BLACK)), int(np.count_nonzero(state == WHITE))

    def count_empty(self, state) -> int:
        return int(np.count_nonzero(state == EMPTY))

    def get_value_and_terminated(self, state, player):
        """
        Returns game outcome from ``player``'s perspective.

        Returns:
            (value, terminated) where value is 1 for a win, -1 for a loss and
            0 for a draw or an unfinished game
        """
        if not self.is_terminal(state):
            return 0, False

        black, white = self.count_discs(state)
        diff = (black - white) * player
        return int(np.sign(diff)), True

    def get_opponent(self, player):
        return -player

    def validate_state(self, state, player) -> np.ndarray:
        """
        Check a position coming from outside the engine.

        Returns:
            The board as an int8 array

        Raises:
            InvalidPositionError: wrong shape, unknown cell values or player
        """
        is_int = isinstance(player, (int, np.integer)) and not isinstance(player, bool)
        if not is_int or player not in (BLACK, WHITE):
            raise InvalidPositionError(f"Player must be 1 (black) or -1 (white), got {player!r}")

        try:
            board = np.asarray(state)
        except (TypeError, ValueError) as e:
            raise InvalidPositionError(f"Board is not array-like: {e}") from e

        if board.shape != (BOARD_SIZE, BOARD_SIZE):
            raise InvalidPositionError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}, got shape {board.shape}")
        if not np.isin(board, (EMPTY, BLACK, WHITE)).all():
            raise InvalidPositionError("Board cells must be 0, 1 or -1")

        return board.astype(np.int8)


def board_from_string(text: str) -> np.ndarray:
    """
    Parse a board drawn with 'X' (black), 'O' (white) and '.' (empty).

    Whitespace inside rows is ignored; there must be exactly 8 rows of 8.
    """
    lookup = {v: k for k, v in _SYMBOLS.items()}
    rows = [line.replace(' ', '') for line in text.strip().splitlines() if line.strip()]
    if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
        raise InvalidPositionError("Board text must have 8 rows of 8 cells")
    try:
        return np.array([[lookup[ch] for ch in row] for row in rows], dtype=np.int8)
    except KeyError as e:
        raise InvalidPositionError(f"Unknown board symbol {e.args[0]!r}") from e


def board_to_string(state, move: Optional[Move] = None) -> str:
    """Render a board with column letters and row numbers; ``move`` is marked with '*'."""
    lines = ["  a b c d e f g h"]
    for r in range(BOARD_SIZE):
        cells = []
        for c in range(BOARD_SIZE):
            if move is not None and (r, c) == tuple(move):
                cells.append('*')
            else:
                cells.append(_SYMBOLS[int(state[r, c])])
        lines.append(f"{r + 1} " + " ".join(cells))
    return "\n".join(lines)
