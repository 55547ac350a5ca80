"""
Configuration for the Othello search engine.
"""


# Search engine configuration
ENGINE_CONFIG = {
    'tt_size_mb': 16,                   # Transposition table size
    'max_depth': 64,                    # Hard ceiling for iterative deepening
    'node_check_interval': 64,          # Poll the clock every N nodes
    'use_killer_moves': True,
    'use_history_heuristic': True,
    'history_policy': 'reset',          # 'reset' per analyze call, or 'persist'
    'history_age_factor': 0.9,          # Decay between calls when persisting
    'tt_max_age': 10,                   # Search generations before an entry goes stale
}

# Move ordering configuration
ORDERING_CONFIG = {
    'tt_gate_ply': 6,                   # Below this ply a better-weighted square outranks the TT move
    'max_ply': 128,                     # Killer slots tracked (passes consume plies)
}

# Budget controller (game phase -> depth / time)
BUDGET_CONFIG = {
    'late_game_empties': 16,            # empties <= this is late game
    'opening_moves': 12,                # move count < this is opening
    'opening_empties': 44,              # empties > this is opening
    'late_game': {'max_depth': 11, 'time_limit_ms': 8000},
    'opening': {'max_depth': 9, 'time_limit_ms': 7000},
    'midgame': {'max_depth': 10, 'time_limit_ms': 9000},
}

# Evaluation weights per game phase
EVAL_CONFIG = {
    'opening_empties': 45,              # empties >= this uses opening weights
    'midgame_empties': 20,              # empties >= this uses midgame weights
    'terminal_disc_weight': 100,
    'weights': {
        'opening': {
            'positional': 1, 'mobility': 28, 'corner': 35, 'x_square': 18,
            'c_square': 10, 'stability': 6, 'frontier': 10, 'discs': 0,
        },
        'midgame': {
            'positional': 1, 'mobility': 24, 'corner': 34, 'x_square': 22,
            'c_square': 14, 'stability': 10, 'frontier': 16, 'discs': 1,
        },
        'endgame': {
            'positional': 1, 'mobility': 8, 'corner': 40, 'x_square': 20,
            'c_square': 12, 'stability': 22, 'frontier': 8, 'discs': 10,
        },
    },
}

# Engine tiers (difficulty levels)
TIER_CONFIG = {
    'A': {'name': 'random', 'description': 'Uniformly random legal move'},
    'B': {'name': 'greedy', 'description': 'Best static evaluation after one move'},
    'C': {
        'name': 'shallow',
        'description': 'Alpha-beta with a fixed shallow budget',
        'max_depth': 4,
        'time_limit_ms': 1000,
    },
    'D': {'name': 'full', 'description': 'Alpha-beta with phase-adaptive budget'},
}

# Presentation scaling
SCORE_SCALE = 120
MAX_STONES = 64
PROBABILITY_CLAMP = 1000
