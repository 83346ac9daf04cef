"""
Card scheduling: initialisation, the review transition and the due check.

Every function is pure. The current time is always passed in by the caller
and cards are never mutated; a new card is returned instead.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from vocab_srs.domain.constants import (
    DEFAULT_EASINESS_FACTOR,
    HISTORY_LIMIT,
    MASTERED_MIN_EASINESS,
    MASTERED_MIN_INTERVAL,
    MASTERED_MIN_REPETITIONS,
    MAX_INTERVAL,
    MAX_QUALITY,
    MIN_INTERVAL,
    PASSING_QUALITY,
    RELEARN_INTERVAL,
    REVIEW_MIN_REPETITIONS,
    SECOND_INTERVAL,
)
from vocab_srs.domain.models import (
    Difficulty,
    LearningStage,
    ReviewResult,
    SpacedRepetitionCard,
)

from .adjustments import (
    category_factor,
    consistency_factor,
    difficulty_factor,
    response_time_factor,
)
from .utils.numeric import clamp_easiness, round_half_up

logger = logging.getLogger(__name__)

# Starting (easiness_factor, interval) per difficulty
INITIAL_PARAMETERS: dict[Difficulty, tuple[float, int]] = {
    Difficulty.BEGINNER: (DEFAULT_EASINESS_FACTOR, 1),
    Difficulty.INTERMEDIATE: (2.3, 2),
    Difficulty.ADVANCED: (2.1, 3),
}


def make_card_id(phrase_id: str, user_id: str) -> str:
    return f"sr_{phrase_id}_{user_id}"


def initialize(
    phrase_id: str,
    user_id: str,
    difficulty: Difficulty | str,
    category: str,
    now: datetime,
) -> SpacedRepetitionCard:
    """
    Create the scheduling record for a phrase the learner just met.

    Raises:
        InvalidInputError: If difficulty is not beginner, intermediate or advanced.
    """
    level = Difficulty.parse(difficulty)
    easiness, interval = INITIAL_PARAMETERS[level]

    return SpacedRepetitionCard(
        id=make_card_id(phrase_id, user_id),
        phrase_id=phrase_id,
        user_id=user_id,
        easiness_factor=easiness,
        interval=interval,
        repetitions=0,
        next_review=now + timedelta(days=interval),
        difficulty_level=level,
        category=category,
        created_at=now,
        updated_at=now,
    )


def next_easiness(easiness_factor: float, quality: int) -> float:
    """SM-2 easiness update, clamped to [1.3, 2.5] and rounded to 2 decimals."""
    miss = MAX_QUALITY - quality
    return clamp_easiness(easiness_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def base_interval(previous_interval: int, repetitions: int, quality: int, easiness: float) -> int:
    """
    Interval before any adjustment.

    Repetitions 1 and 2 both yield SECOND_INTERVAL.
    """
    if quality < PASSING_QUALITY:
        return RELEARN_INTERVAL
    if repetitions == 1:
        return SECOND_INTERVAL
    if repetitions == 2:
        return SECOND_INTERVAL
    return round_half_up(previous_interval * easiness)


def update(card: SpacedRepetitionCard, result: ReviewResult, now: datetime) -> SpacedRepetitionCard:
    """
    Apply one review to a card and return the rescheduled card.

    Steps run in a fixed order, each consuming the previous step's output:
    history, counters, easiness, base interval, then the response-time,
    category, difficulty and consistency multipliers (rounded after each),
    and finally the one-day floor and the MAX_INTERVAL ceiling.
    """
    quality = result.quality

    history = (card.quality_responses + (quality,))[-HISTORY_LIMIT:]

    study_streak = card.study_streak
    mistake_count = card.mistake_count
    repetitions = card.repetitions
    if quality >= PASSING_QUALITY:
        study_streak += 1
        if result.was_correct:
            repetitions += 1
    else:
        study_streak = 0
        mistake_count += 1
        repetitions = 0

    easiness = next_easiness(card.easiness_factor, quality)

    interval = base_interval(card.interval, repetitions, quality, easiness)

    if result.response_time_ms:
        interval = round_half_up(
            interval * response_time_factor(result.response_time_ms, card.difficulty_level)
        )

    interval = round_half_up(interval * category_factor(card.category))
    interval = round_half_up(interval * difficulty_factor(card.difficulty_level))
    interval = round_half_up(interval * consistency_factor(history))

    interval = min(max(MIN_INTERVAL, interval), MAX_INTERVAL)

    logger.debug(
        f"Card {card.id}: q={quality} ef {card.easiness_factor}->{easiness} "
        f"interval {card.interval}->{interval}"
    )

    return replace(
        card,
        easiness_factor=easiness,
        interval=interval,
        repetitions=repetitions,
        quality_responses=history,
        last_reviewed=now,
        next_review=now + timedelta(days=interval),
        study_streak=study_streak,
        mistake_count=mistake_count,
        updated_at=now,
        revision=card.revision + 1,
    )


def is_due(card: SpacedRepetitionCard, now: datetime) -> bool:
    return card.next_review <= now


def is_mastered(card: SpacedRepetitionCard) -> bool:
    """High easiness, a long interval and a run of successful repetitions."""
    return (
        card.easiness_factor >= MASTERED_MIN_EASINESS
        and card.interval >= MASTERED_MIN_INTERVAL
        and card.repetitions >= MASTERED_MIN_REPETITIONS
    )


def learning_stage(card: SpacedRepetitionCard) -> LearningStage:
    """Classify a card from its numeric fields."""
    if card.last_reviewed is None:
        return LearningStage.NEW
    if is_mastered(card):
        return LearningStage.MASTERED
    if card.quality_responses and card.quality_responses[-1] < PASSING_QUALITY:
        return LearningStage.RELEARNING
    if card.repetitions >= REVIEW_MIN_REPETITIONS:
        return LearningStage.REVIEW
    return LearningStage.LEARNING
