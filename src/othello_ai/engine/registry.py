"""
Engine tiers.

Maps a difficulty tier to an engine implementation. All tiers share the
``Engine.analyze`` contract, so callers switch difficulty by switching the
tier identifier only:

    A - random legal move
    B - greedy one-ply evaluation
    C - alpha-beta with a fixed shallow budget
    D - alpha-beta with the game-phase budget controller
"""

from typing import Callable, Optional, Sequence

import numpy as np

from othello_ai.config import TIER_CONFIG
from othello_ai.engine.alphabeta import AlphaBetaEngine
from othello_ai.engine.base import Engine, SearchResult
from othello_ai.engine.budget import SearchBudget
from othello_ai.engine.simple import RandomEngine, GreedyEngine
from othello_ai.exceptions import UnknownTierError


def _shallow_engine(**kwargs) -> AlphaBetaEngine:
    tier = TIER_CONFIG['C']
    kwargs.setdefault(
        'default_budget',
        SearchBudget(max_depth=tier['max_depth'], time_limit_ms=tier['time_limit_ms'])
    )
    engine = AlphaBetaEngine(**kwargs)
    engine.name = tier['name']
    return engine


def _full_engine(**kwargs) -> AlphaBetaEngine:
    engine = AlphaBetaEngine(**kwargs)
    engine.name = TIER_CONFIG['D']['name']
    return engine


ENGINE_TIERS: dict[str, Callable[..., Engine]] = {
    'A': RandomEngine,
    'B': GreedyEngine,
    'C': _shallow_engine,
    'D': _full_engine,
}

# One shared instance per tier for the module-level analyze()
_instances: dict[str, Engine] = {}


def available_tiers() -> list[str]:
    return sorted(ENGINE_TIERS)


def create_engine(tier: str, **kwargs) -> Engine:
    """
    Build a new engine for ``tier``.

    Keyword arguments go to the engine constructor (e.g. ``seed`` for tier A,
    ``tt_size_mb`` for tiers C and D).

    Raises:
        UnknownTierError: if the tier is not registered
    """
    key = str(tier).upper()
    if key not in ENGINE_TIERS:
        raise UnknownTierError(f"Unknown engine tier {tier!r}; available: {available_tiers()}")
    return ENGINE_TIERS[key](**kwargs)


def get_engine(tier: str) -> Engine:
    """Shared engine instance for ``tier``, created on first use."""
    key = str(tier).upper()
    if key not in _instances:
        _instances[key] = create_engine(key)
    return _instances[key]


def analyze(
    state: np.ndarray,
    player: int,
    tier: str = 'D',
    budget: Optional[SearchBudget] = None,
    move_history: Optional[Sequence] = None
) -> SearchResult:
    """Analyze a position with the shared engine of ``tier``."""
    return get_engine(tier).analyze(state, player, budget=budget, move_history=move_history)
