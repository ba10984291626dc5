GRID_ROWS = 15
GRID_COLS = 10

# A run must be at least this long to count as a match.
MIN_MATCH_LENGTH = 3

# Seconds the auto player waits (in tick time) before committing a move.
AUTO_PLAYER_DECISION_DELAY = 0.5
