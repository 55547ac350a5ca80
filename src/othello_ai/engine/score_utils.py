"""
Score conversions for display.

Engine evaluations are unbounded and Black-positive. These helpers turn them
into a win probability and a -64..+64 "stones ahead" figure.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from othello_ai.config import SCORE_SCALE, MAX_STONES, PROBABILITY_CLAMP
from othello_ai.exceptions import InvalidEvaluationError
from othello_ai.game.othello import BLACK, WHITE


@dataclass(frozen=True)
class EvaluationSummary:
    perspective: int
    stone_diff: int
    normalized_eval: int


def score_to_probability(score: float) -> float:
    """
    Logistic win probability for the side the score favors.

    Raises:
        InvalidEvaluationError: if the score is NaN or infinite
    """
    if not math.isfinite(score):
        raise InvalidEvaluationError(f"Cannot convert non-finite score {score} to a probability")
    clamped = max(-PROBABILITY_CLAMP, min(PROBABILITY_CLAMP, score))
    return 1.0 / (1.0 + math.exp(-clamped / SCORE_SCALE))


def map_evaluation_to_stone_scale(evaluation: Optional[float]) -> int:
    """
    Compress an evaluation into [-64, 64] with tanh.

    The result is not an exact disc margin, just an intuitive scale.
    Missing or NaN evaluations map to 0.
    """
    if evaluation is None or math.isnan(evaluation):
        return 0
    compressed = math.tanh(evaluation / SCORE_SCALE)
    # Halves round up
    scaled = math.floor(compressed * MAX_STONES + 0.5)
    return max(-MAX_STONES, min(MAX_STONES, scaled))


def get_stone_difference(state: np.ndarray, perspective: int = BLACK) -> int:
    """Disc count difference, positive when ``perspective`` is ahead."""
    black = int(np.count_nonzero(state == BLACK))
    white = int(np.count_nonzero(state == WHITE))
    return (black - white) * perspective


def summarize_evaluation(
    state: np.ndarray,
    evaluation: Optional[float],
    perspective: int = BLACK
) -> EvaluationSummary:
    """
    Actual stone difference plus the normalized evaluation.

    ``evaluation`` is Black-positive; both figures in the summary are
    reported from ``perspective``'s side.
    """
    if evaluation is not None:
        evaluation = evaluation * perspective
    return EvaluationSummary(
        perspective=perspective,
        stone_diff=get_stone_difference(state, perspective),
        normalized_eval=map_evaluation_to_stone_scale(evaluation),
    )
