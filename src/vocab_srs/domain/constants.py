"""Centralized constants for the scheduling engine.

All magic numbers live here so every layer imports from a single
source of truth.
"""

# ---------- Easiness ----------
DEFAULT_EASINESS_FACTOR = 2.5
MIN_EASINESS_FACTOR = 1.3
MAX_EASINESS_FACTOR = 2.5

# ---------- Intervals (days) ----------
MIN_INTERVAL = 1
RELEARN_INTERVAL = 1
SECOND_INTERVAL = 6
MAX_INTERVAL = 36500  # About a century; keeps next_review within datetime range

# ---------- Quality ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3
HISTORY_LIMIT = 10

# ---------- Consistency ----------
CONSISTENCY_MIN_RESPONSES = 3
CONSISTENCY_WINDOW = 5

# ---------- Priority ----------
MISTAKE_WEIGHT = 0.1
EASINESS_WEIGHT = 0.05
EASINESS_CEILING = 3.0

# ---------- Daily Load ----------
BACKLOG_HIGH_RATIO = 1.5
BACKLOG_LOW_RATIO = 0.5
LOAD_BOOST = 1.3
LOAD_REDUCTION = 0.7

# ---------- Mastery ----------
MASTERED_MIN_EASINESS = 2.2
MASTERED_MIN_INTERVAL = 21
MASTERED_MIN_REPETITIONS = 3
REVIEW_MIN_REPETITIONS = 3

# ---------- Statistics ----------
OVERDUE_GRACE_DAYS = 1
