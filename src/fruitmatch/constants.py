DEFAULT_ROWS = 8
DEFAULT_COLS = 8

MIN_MATCH_LENGTH = 3
MIN_FRUIT_TYPES = 2

# Retry caps for board construction. Exhausting them switches to the forced
# playable-board fallback instead of failing.
GENERATION_ATTEMPTS = 200
SHUFFLE_ATTEMPTS = 100
# Permutations tried on a freshly filled board that has no move before the
# generator throws the fill away and starts again.
GENERATION_SHUFFLE_ATTEMPTS = 5

# Cascade passes allowed in one resolution before matches are broken by force.
MAX_CASCADE_DEPTH = 100

# Up, down, left, right. Hint search order depends on this tuple.
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
