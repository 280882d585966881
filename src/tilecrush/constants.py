GRID_SIZE = 8

# Scoring: each matched tile is worth BASE_POINTS_PER_TILE times the pass multiplier.
BASE_POINTS_PER_TILE = 20
SWAP_MULTIPLIER = 1.0
COMBO_MULTIPLIER = 1.5

# Run lengths that create special tiles.
MIN_MATCH_LENGTH = 3
LINE_CLEAR_LENGTH = 4
COLOR_CLEAR_LENGTH = 5

# Upper bound on detect/resolve/refill passes for a single move.
MAX_CASCADE_PASSES = 1000

# Level flow
TIMER_SECONDS = 300
MAX_LEVELS = 30000
REWARD_LEVEL_INTERVAL = 50

# Seconds between cascade passes during playback (slightly longer than a tile transition).
ANIMATION_DELAY = 0.22
