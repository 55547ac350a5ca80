"""Exceptions raised by the Othello engine."""


class OthelloError(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(OthelloError, ValueError):
    """A move was applied that is not legal in the given position."""

    def __init__(self, move, player):
        self.move = move
        self.player = player
        super().__init__(f"Illegal move {tuple(move)} for player {player}")


class InvalidPositionError(OthelloError, ValueError):
    """A board or side-to-move failed validation."""


class InvalidEvaluationError(OthelloError, ValueError):
    """An evaluation score is NaN or infinite."""


class UnknownTierError(OthelloError, KeyError):
    """No engine is registered for the requested tier."""
