#!/usr/bin/env python3
"""
Engine tier tournament.

Plays two engine tiers against each other, alternating colors, and reports
the score. Useful as a sanity check that higher tiers actually play better.

Usage:
    python scripts/tier_tournament.py --tier1 D --tier2 A --games 10 --time-ms 500
"""

import argparse
import time
from collections import defaultdict

from tqdm import tqdm

from othello_ai.engine import SearchBudget, create_engine
from othello_ai.game import Othello, PASS_MOVE, BLACK, WHITE, board_to_string


def play_game(game, black_engine, white_engine, budget=None, verbose=False):
    """
    Play one game.

    Returns:
        (result, num_moves, times): result is 1 if Black wins, -1 if White
        wins, 0 for a draw; times are total thinking ms per color
    """
    state = game.get_initial_state()
    current_player = BLACK
    history = []
    times = {BLACK: 0.0, WHITE: 0.0}

    while not game.is_terminal(state):
        engine = black_engine if current_player == BLACK else white_engine

        start = time.time() * 1000
        result = engine.analyze(state, current_player, budget=budget, move_history=history)
        times[current_player] += time.time() * 1000 - start

        move = result.best_move if result.best_move is not None else PASS_MOVE
        state = game.get_next_state(state, move, current_player)
        history.append(move)

        if verbose:
            side = "Black" if current_player == BLACK else "White"
            print(f"  {side}: {move.to_notation()} (eval {result.evaluation:+.0f}, depth {result.depth_reached})")

        current_player = game.get_opponent(current_player)

    if verbose:
        print(board_to_string(state))

    black, white = game.count_discs(state)
    outcome = (black > white) - (black < white)
    return outcome, len(history), (times[BLACK], times[WHITE])


def main():
    parser = argparse.ArgumentParser(description="Play engine tiers against each other")
    parser.add_argument('--tier1', default='D', help='First engine tier (A-D)')
    parser.add_argument('--tier2', default='A', help='Second engine tier (A-D)')
    parser.add_argument('--games', type=int, default=10, help='Number of games (colors alternate)')
    parser.add_argument('--time-ms', type=int, default=None, help='Per-move time limit for search tiers')
    parser.add_argument('--depth', type=int, default=4, help='Max depth when --time-ms is set')
    parser.add_argument('--seed', type=int, default=0, help='Seed for the random tier')
    parser.add_argument('--verbose', action='store_true', help='Print every move')
    args = parser.parse_args()

    game = Othello()

    def build(tier):
        if tier.upper() == 'A':
            return create_engine(tier, seed=args.seed)
        return create_engine(tier)

    engine1 = build(args.tier1)
    engine2 = build(args.tier2)
    budget = SearchBudget(max_depth=args.depth, time_limit_ms=args.time_ms) if args.time_ms else None

    print("=" * 60)
    print(f"TIER {args.tier1.upper()} ({engine1.name}) vs TIER {args.tier2.upper()} ({engine2.name})")
    print("=" * 60)

    results = defaultdict(int)
    think_ms = defaultdict(float)
    total_moves = 0

    for game_idx in tqdm(range(args.games), desc="Games"):
        tier1_is_black = game_idx % 2 == 0
        black, white = (engine1, engine2) if tier1_is_black else (engine2, engine1)

        outcome, num_moves, (black_ms, white_ms) = play_game(
            game, black, white, budget=budget, verbose=args.verbose
        )
        total_moves += num_moves

        tier1_outcome = outcome if tier1_is_black else -outcome
        if tier1_outcome > 0:
            results['tier1'] += 1
        elif tier1_outcome < 0:
            results['tier2'] += 1
        else:
            results['draw'] += 1

        think_ms['tier1'] += black_ms if tier1_is_black else white_ms
        think_ms['tier2'] += white_ms if tier1_is_black else black_ms

    print(f"\nTier {args.tier1.upper()} wins: {results['tier1']}")
    print(f"Tier {args.tier2.upper()} wins: {results['tier2']}")
    print(f"Draws:       {results['draw']}")
    if args.games:
        print(f"Avg moves per game: {total_moves / args.games:.1f}")
        print(f"Avg think time: tier {args.tier1.upper()} {think_ms['tier1'] / args.games:.0f}ms/game, "
              f"tier {args.tier2.upper()} {think_ms['tier2'] / args.games:.0f}ms/game")


if __name__ == '__main__':
    main()
