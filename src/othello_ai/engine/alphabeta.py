"""
Alpha-beta negamax search engine for Othello.

Key features:
- Negamax framework (simplified minimax using negation)
- Alpha-beta pruning (cut branches that can't affect final result)
- Iterative deepening (search depth 1, then 2, then 3... until time expires)
- Transposition table integration with bound-aware window tightening
- Move ordering (TT move, killer moves, history heuristic)
- Pass handling: a side without moves passes and the search continues
- Time management (stop cleanly when budget exhausted)
- Principal variation extraction from the TT


Algorithm overview:

    def negamax(state, depth, alpha, beta):
        if depth == 0:
            return evaluate(state)

        # Transposition table lookup
        if entry := tt.probe(state) and entry.depth >= depth:
            EXACT -> return entry.score
            LOWER -> alpha = max(alpha, entry.score)
            UPPER -> beta = min(beta, entry.score)
            if alpha >= beta: return entry.score

        if no moves:
            if opponent has no moves: return evaluate(state)   # game over
            return -negamax(pass(state), depth - 1, -beta, -alpha)

        best_score = -infinity
        for move in ordered_moves:
            score = -negamax(make_move(state, move), depth-1, -beta, -alpha)
            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break  # Beta cutoff

        tt.store(state, depth, best_score, bound_type, best_move)
        return best_score
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from othello_ai.config import ENGINE_CONFIG, ORDERING_CONFIG
from othello_ai.engine.base import Engine, IterationInfo, SearchResult
from othello_ai.engine.budget import SearchBudget, budget_for_state
from othello_ai.engine.evaluation import (
    HeuristicEvaluator, SCORE_WIN, SCORE_INF,
)
from othello_ai.engine.move_ordering import MoveOrdering, HistoryTable
from othello_ai.engine.transposition_table import TranspositionTable, BoundType
from othello_ai.engine.zobrist import get_zobrist_hasher
from othello_ai.exceptions import InvalidEvaluationError
from othello_ai.game.othello import Othello, Move, PASS_MOVE


logger = logging.getLogger(__name__)

__all__ = [
    'AlphaBetaEngine',
    'SearchContext',
    'SearchResult',
    'SCORE_WIN',
    'SCORE_INF',
]

HISTORY_POLICIES = ('reset', 'persist')


@dataclass
class SearchContext:
    """
    Mutable state of one root search.

    Created per analyze call and passed down the recursion; nothing here
    outlives the call except a history table the engine chose to share.
    """
    ordering: MoveOrdering
    start_time: float
    time_limit_ms: Optional[int]
    node_check_interval: int
    nodes_searched: int = 0

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def time_up(self) -> bool:
        """Check if time limit exceeded (None means unlimited, <= 0 is already expired)."""
        if self.time_limit_ms is None:
            return False
        return self.elapsed_ms() >= self.time_limit_ms


class AlphaBetaEngine(Engine):
    """
    Alpha-beta negamax search engine with iterative deepening.

    One instance owns its transposition table and history table; concurrent
    callers are serialized by an instance lock. Run separate instances for
    parallel analysis.
    """

    name = 'alphabeta'

    def __init__(
        self,
        game: Optional[Othello] = None,
        evaluator: Optional[Callable[[np.ndarray, int], float]] = None,
        tt_size_mb: int = ENGINE_CONFIG['tt_size_mb'],
        use_killer_moves: bool = ENGINE_CONFIG['use_killer_moves'],
        use_history_heuristic: bool = ENGINE_CONFIG['use_history_heuristic'],
        max_depth: int = ENGINE_CONFIG['max_depth'],
        history_policy: str = ENGINE_CONFIG['history_policy'],
        history_age_factor: float = ENGINE_CONFIG['history_age_factor'],
        node_check_interval: int = ENGINE_CONFIG['node_check_interval'],
        tt_gate_ply: int = ORDERING_CONFIG['tt_gate_ply'],
        default_budget: Optional[SearchBudget] = None
    ):
        """
        Initialize alpha-beta engine.

        Args:
            game: Othello instance
            evaluator: Evaluation function (state, player) -> float, positive
                favors ``player``; defaults to HeuristicEvaluator
            tt_size_mb: Transposition table size in MB
            use_killer_moves: Enable killer move heuristic
            use_history_heuristic: Enable history heuristic
            max_depth: Maximum search depth limit
            history_policy: 'reset' clears history every search, 'persist'
                keeps it across searches and ages it between them
            history_age_factor: Decay applied per search under 'persist'
            node_check_interval: Poll the clock every this many nodes
            tt_gate_ply: Ply from which the TT move is always tried first
            default_budget: Fixed budget for analyze; None uses the game-phase
                budget controller
        """
        super().__init__(game)
        if history_policy not in HISTORY_POLICIES:
            raise ValueError(f"history_policy must be one of {HISTORY_POLICIES}, got {history_policy!r}")

        self.evaluator = evaluator or HeuristicEvaluator(self.game)
        self.max_depth = max_depth
        self.default_budget = default_budget

        self.zobrist = get_zobrist_hasher(self.game.row_count, self.game.column_count)
        self.tt = TranspositionTable(size_mb=tt_size_mb, max_age_diff=ENGINE_CONFIG['tt_max_age'])
        self.history = HistoryTable()

        self.use_killer_moves = use_killer_moves
        self.use_history_heuristic = use_history_heuristic
        self.history_policy = history_policy
        self.history_age_factor = history_age_factor
        self.node_check_interval = max(1, node_check_interval)
        self.tt_gate_ply = tt_gate_ply

        self._lock = threading.Lock()
        self.last_context: Optional[SearchContext] = None
        self.pv: list[Move] = []

    def analyze(
        self,
        state: np.ndarray,
        player: int,
        budget: Optional[SearchBudget] = None,
        move_history: Optional[Sequence] = None
    ) -> SearchResult:
        """
        Validate the position, pick a budget and run the search.

        Budget precedence: explicit ``budget``, then the engine's
        ``default_budget``, then the game-phase budget controller.
        """
        board = self.game.validate_state(state, player)

        if budget is None:
            budget = self.default_budget or budget_for_state(board, move_history)

        result = self.search(
            board, player,
            time_limit_ms=budget.time_limit_ms,
            max_depth=budget.max_depth
        )

        logger.info(
            "%s: move=%s eval=%.1f depth=%d/%d nodes=%d time=%dms",
            self.name,
            result.best_move.to_notation() if result.best_move else None,
            result.evaluation, result.depth_reached, budget.max_depth,
            result.nodes_searched, result.time_ms,
        )
        return result

    def search(
        self,
        state: np.ndarray,
        player: int,
        time_limit_ms: Optional[int] = 1000,
        max_depth: Optional[int] = None
    ) -> SearchResult:
        """
        Main search entry point with iterative deepening.

        Strategy:
        - Search depth 1, then 2, then 3... until time expires
        - Always keep best move from last completed depth
        - Return gracefully when time runs out
        - Stop early once the game-theoretic result is proven

        Args:
            state: Current board state
            player: Current player to move (1 or -1)
            time_limit_ms: Time budget in milliseconds (None for unlimited)
            max_depth: Override maximum depth

        Returns:
            SearchResult with best move, score, statistics
        """
        with self._lock:
            ctx = self._new_context(time_limit_ms)
            self.tt.new_search()

            effective_max_depth = max_depth if max_depth is not None else self.max_depth
            root_hash = self.zobrist.hash_position(state, player)
            legal_moves = self.game.get_legal_moves(state, player)

            if not legal_moves:
                # Pass or game over: the caller decides which
                score = self._evaluate(state, player)
                self.pv = []
                return SearchResult(
                    best_move=None,
                    score=score,
                    evaluation=score * player,
                    depth_reached=0,
                    nodes_searched=0,
                    time_ms=int(ctx.elapsed_ms()),
                    principal_variation=[],
                    tt_stats=self.tt.get_stats()
                )

            # Fallback if not even depth 1 completes
            best_move = ctx.ordering.order_moves(
                legal_moves, 0, player, tt_move=self.tt.get_best_move(root_hash)
            )[0]
            best_score = -self._evaluate(self.game.get_next_state(state, best_move, player), -player)
            depth_reached = 0
            self.pv = [best_move]
            iterations = []

            for depth in range(1, effective_max_depth + 1):
                if ctx.time_up():
                    break

                try:
                    score, move = self._search_root(state, player, legal_moves, depth, root_hash, ctx)
                except TimeoutError:
                    logger.debug("depth %d aborted after %d nodes", depth, ctx.nodes_searched)
                    break

                best_move = move
                best_score = score
                depth_reached = depth
                self.pv = self._extract_pv(state, player, move, root_hash, depth)
                iterations.append(IterationInfo(
                    depth=depth,
                    score=score,
                    best_move=move,
                    nodes_searched=ctx.nodes_searched,
                    time_ms=int(ctx.elapsed_ms())
                ))
                logger.debug(
                    "depth %d: best=%s score=%.1f nodes=%d",
                    depth, move.to_notation(), score, ctx.nodes_searched
                )

                # Proven win or loss: deeper search cannot change the result
                if abs(score) >= SCORE_WIN:
                    break

            return SearchResult(
                best_move=best_move,
                score=best_score,
                evaluation=best_score * player,
                depth_reached=depth_reached,
                nodes_searched=ctx.nodes_searched,
                time_ms=int(ctx.elapsed_ms()),
                principal_variation=list(self.pv),
                iterations=iterations,
                tt_stats=self.tt.get_stats()
            )

    def search_depth(self, state: np.ndarray, player: int, depth: int) -> float:
        """
        Single full-window search at a fixed depth, without a time limit.

        Returns:
            Negamax score from ``player``'s perspective
        """
        with self._lock:
            ctx = self._new_context(time_limit_ms=None)
            self.tt.new_search()
            root_hash = self.zobrist.hash_position(state, player)
            return self._negamax(state, player, depth, -SCORE_INF, SCORE_INF, 0, root_hash, ctx)

    def _new_context(self, time_limit_ms: Optional[int]) -> SearchContext:
        if self.history_policy == 'persist':
            self.history.age(self.history_age_factor)
            history = self.history
        else:
            history = HistoryTable()

        ctx = SearchContext(
            ordering=MoveOrdering(
                max_ply=ORDERING_CONFIG['max_ply'],
                tt_gate_ply=self.tt_gate_ply,
                history=history
            ),
            start_time=time.perf_counter(),
            time_limit_ms=time_limit_ms,
            node_check_interval=self.node_check_interval
        )
        self.last_context = ctx
        return ctx

    def _search_root(
        self,
        state: np.ndarray,
        player: int,
        legal_moves: list[Move],
        depth: int,
        root_hash: int,
        ctx: SearchContext
    ) -> tuple[float, Move]:
        """
        Root node search (full window, every child searched).

        Returns:
            (score, best_move)
        """
        ctx.nodes_searched += 1
        tt_move = self.tt.get_best_move(root_hash)
        ordered_moves = ctx.ordering.order_moves(legal_moves, 0, player, tt_move=tt_move)

        best_score = -SCORE_INF
        best_move = ordered_moves[0]
        alpha = -SCORE_INF
        beta = SCORE_INF

        for move in ordered_moves:
            if ctx.time_up():
                raise TimeoutError("Time limit exceeded")

            next_state, flips = self.game.make_move(state, move, player)
            child_hash = self.zobrist.hash_after_move(root_hash, move, flips, player)
            score = -self._negamax(next_state, -player, depth - 1, -beta, -alpha, 1, child_hash, ctx)

            if score > best_score:
                best_score = score
                best_move = move
                alpha = max(alpha, score)

        self.tt.store(root_hash, depth, best_score, BoundType.EXACT, best_move)

        return best_score, best_move

    def _negamax(
        self,
        state: np.ndarray,
        player: int,
        depth: int,
        alpha: float,
        beta: float,
        ply: int,
        hash_val: int,
        ctx: SearchContext
    ) -> float:
        """
        Negamax alpha-beta search (fail-soft).

        Args:
            state: Board state
            player: Side to move
            depth: Remaining depth
            alpha: Alpha bound
            beta: Beta bound
            ply: Ply from root (for killer moves and TT gating)
            hash_val: Zobrist hash of (state, player)
            ctx: Search context

        Returns:
            Score from ``player``'s perspective
        """
        ctx.nodes_searched += 1

        if ctx.nodes_searched % ctx.node_check_interval == 0 and ctx.time_up():
            raise TimeoutError("Time limit exceeded")

        if depth <= 0:
            return self._evaluate(state, player)

        original_alpha = alpha
        tt_move = None

        entry = self.tt.probe(hash_val)
        if entry is not None:
            tt_move = entry.best_move
            if entry.depth >= depth:
                if entry.bound == BoundType.EXACT:
                    return entry.score
                if entry.bound == BoundType.LOWER:
                    alpha = max(alpha, entry.score)
                elif entry.bound == BoundType.UPPER:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        moves = self.game.get_legal_moves(state, player)

        if not moves:
            if not self.game.has_legal_move(state, -player):
                # Game over: exact score
                return self._evaluate(state, player)

            # Pass: same discs, opponent to move, one ply consumed
            score = -self._negamax(
                state, -player, depth - 1, -beta, -alpha, ply + 1,
                self.zobrist.toggle_side(hash_val), ctx
            )
            self._store(hash_val, depth, score, original_alpha, beta, PASS_MOVE)
            return score

        ordered_moves = ctx.ordering.order_moves(moves, ply, player, tt_move=tt_move)

        best_score = -SCORE_INF
        best_move = None

        for move in ordered_moves:
            next_state, flips = self.game.make_move(state, move, player)
            child_hash = self.zobrist.hash_after_move(hash_val, move, flips, player)
            score = -self._negamax(next_state, -player, depth - 1, -beta, -alpha, ply + 1, child_hash, ctx)

            if score > best_score:
                best_score = score
                best_move = move

            alpha = max(alpha, score)

            # Beta cutoff
            if alpha >= beta:
                if self.use_killer_moves:
                    ctx.ordering.update_killers(move, ply)
                if self.use_history_heuristic:
                    ctx.ordering.update_history(move, player, depth)
                break

        self._store(hash_val, depth, best_score, original_alpha, beta, best_move)

        return best_score

    def _store(
        self,
        hash_val: int,
        depth: int,
        score: float,
        original_alpha: float,
        beta: float,
        best_move: Optional[Move]
    ):
        """Store a node result with the bound implied by the search window."""
        if score <= original_alpha:
            bound = BoundType.UPPER  # All moves failed low
        elif score >= beta:
            bound = BoundType.LOWER  # We failed high
        else:
            bound = BoundType.EXACT  # PV node

        self.tt.store(hash_val, depth, score, bound, best_move)

    def _evaluate(self, state: np.ndarray, player: int) -> float:
        """
        Evaluate a leaf with the configured evaluator.

        Raises:
            InvalidEvaluationError: if the evaluator returns NaN or infinity
        """
        score = float(self.evaluator(state, player))
        if not np.isfinite(score):
            raise InvalidEvaluationError(f"Evaluator returned non-finite score {score}")
        return score

    def _extract_pv(
        self,
        state: np.ndarray,
        player: int,
        first_move: Move,
        root_hash: int,
        max_length: int
    ) -> list[Move]:
        """
        Follow TT best moves from the root to build the principal variation.

        Stops at a missing or illegal TT move (an overwritten slot or a
        collision) and never returns more than ``max_length`` moves.
        """
        pv = [first_move]
        state, flips = self.game.make_move(state, first_move, player)
        hash_val = self.zobrist.hash_after_move(root_hash, first_move, flips, player)
        player = -player

        while len(pv) < max_length:
            move = self.tt.get_best_move(hash_val)
            if move is None:
                break

            if move.is_pass:
                if self.game.has_legal_move(state, player):
                    break
                hash_val = self.zobrist.toggle_side(hash_val)
            else:
                flips = self.game.get_flips(state, move, player)
                if not flips:
                    break
                state, flips = self.game.make_move(state, move, player)
                hash_val = self.zobrist.hash_after_move(hash_val, move, flips, player)

            pv.append(move)
            player = -player

        return pv

    def new_game(self):
        """Forget everything learned in the previous game."""
        with self._lock:
            self.tt.clear()
            self.history.clear()
