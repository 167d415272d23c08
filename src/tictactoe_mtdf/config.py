"""
Configuration for tic-tac-toe games and the MTD(f) search engine.
"""


# Game Configuration
GAME_CONFIG = {
    'max_combo_size': 5,        # Winning run length is capped so large boards stay tactical
    'default_size': 3,          # Board size used by the CLI when none is given
    'hash_seed': None,          # Zobrist key seed for new games (None = fresh entropy)
}

# Engine Configuration
ENGINE_CONFIG = {
    'max_search_time_ms': 1000, # Wall-clock budget per move recommendation
    'max_depth': None,          # Optional hard cap on iterative deepening (None = unlimited)
}
