"""
Interval multipliers applied after the base SM-2 interval.

Each function returns a factor; the scheduler multiplies and rounds after
every step. This is a pure computation module with no I/O.
"""

from collections.abc import Sequence

from vocab_srs.domain.constants import CONSISTENCY_MIN_RESPONSES, CONSISTENCY_WINDOW
from vocab_srs.domain.models import Category, Difficulty

NEUTRAL_FACTOR = 1.0

# Expected answer time per difficulty, in milliseconds
EXPECTED_RESPONSE_MS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 8000,
    Difficulty.INTERMEDIATE: 6000,
    Difficulty.ADVANCED: 4000,
}

# (upper bound on response ratio, factor); first match wins
RESPONSE_TIME_BANDS: list[tuple[float, float]] = [
    (0.5, 1.10),  # Very fast
    (0.8, 1.05),  # Fast
    (1.2, 1.00),  # Normal
    (2.0, 0.95),  # Slow
]
SLOWEST_FACTOR = 0.90

CATEGORY_FACTORS: dict[Category, float] = {
    Category.VOCABULARY: 1.0,
    Category.EXPRESSION: 0.9,
    Category.IDIOM: 0.8,
    Category.PHRASE: 1.0,
    Category.GRAMMAR_PATTERN: 0.85,
    Category.COLLOCATION: 0.9,
    Category.VERB_CONJUGATION: 0.7,
    Category.CULTURAL_REFERENCE: 0.95,
}

# Easier material earns longer intervals
DIFFICULTY_FACTORS: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 1.1,
    Difficulty.INTERMEDIATE: 1.0,
    Difficulty.ADVANCED: 0.9,
}


def response_time_factor(response_time_ms: int, difficulty: Difficulty) -> float:
    """
    Reward fast answers and penalise slow ones, relative to the expected
    time for the card's difficulty.
    """
    ratio = response_time_ms / EXPECTED_RESPONSE_MS[difficulty]
    for upper, factor in RESPONSE_TIME_BANDS:
        if ratio < upper:
            return factor
    return SLOWEST_FACTOR


def category_factor(category: str) -> float:
    """Look up the category multiplier. Unknown labels are neutral."""
    known = Category.lookup(category)
    if known is None:
        return NEUTRAL_FACTOR
    return CATEGORY_FACTORS[known]


def difficulty_factor(difficulty: Difficulty) -> float:
    return DIFFICULTY_FACTORS[difficulty]


def consistency_factor(quality_responses: Sequence[int]) -> float:
    """
    Bonus for steady recent performance, penalty for erratic performance.

    Uses the mean and population variance of the last CONSISTENCY_WINDOW
    responses. Fewer than CONSISTENCY_MIN_RESPONSES entries is neutral.
    """
    if len(quality_responses) < CONSISTENCY_MIN_RESPONSES:
        return NEUTRAL_FACTOR

    recent = list(quality_responses)[-CONSISTENCY_WINDOW:]
    mean = sum(recent) / len(recent)
    variance = sum((q - mean) ** 2 for q in recent) / len(recent)

    if variance < 0.5 and mean >= 4:
        return 1.10
    if variance < 1.0 and mean >= 3:
        return 1.05
    if variance > 2.0:
        return 0.90
    return NEUTRAL_FACTOR
