"""Constants for interview scheduling."""

# Length of one slot in minutes
DEFAULT_GRANULARITY = 15

# Default scheduling day: 09:00 - 17:00
DEFAULT_WINDOW_START = 9 * 60
DEFAULT_WINDOW_END = 17 * 60

# Conflict notice texts
CONFLICT_MESSAGE = "Cannot schedule all interviews for student {student_id}"
BUDGET_MESSAGE = "Search budget exhausted for student {student_id}"

# Exhaustive mode solver limits
DEFAULT_TIME_LIMIT = 30  # seconds
SOLVER_RANDOM_SEED = 0

MINUTES_PER_DAY = 24 * 60
