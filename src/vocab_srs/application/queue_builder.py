"""
Queue builder for daily study sessions.

Builds today's review queue by:
1. Filtering cards that are due
2. Ordering them by urgency (overdue time, mistakes, low easiness)
3. Capping the list at a daily load suited to the learner's level
"""

from datetime import datetime, timedelta

from vocab_srs.domain.constants import (
    BACKLOG_HIGH_RATIO,
    BACKLOG_LOW_RATIO,
    EASINESS_CEILING,
    EASINESS_WEIGHT,
    LOAD_BOOST,
    LOAD_REDUCTION,
    MISTAKE_WEIGHT,
)
from vocab_srs.domain.models import Difficulty, SpacedRepetitionCard, StudyQueue

from .scheduler import is_due
from .utils.numeric import round_half_up

BASE_DAILY_REVIEWS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 15,
    Difficulty.INTERMEDIATE: 25,
    Difficulty.ADVANCED: 35,
}

_ONE_MS = timedelta(milliseconds=1)


def priority_score(card: SpacedRepetitionCard, now: datetime) -> float:
    """
    Urgency of a due card; higher is reviewed first.

    The overdue term is in milliseconds and dominates the two small
    penalty terms, which only separate cards that fell due together.
    """
    overdue_ms = (now - card.next_review) / _ONE_MS
    mistake_penalty = card.mistake_count * MISTAKE_WEIGHT
    easiness_penalty = (EASINESS_CEILING - card.easiness_factor) * EASINESS_WEIGHT
    return overdue_ms + mistake_penalty + easiness_penalty


def sort_by_priority(
    cards: list[SpacedRepetitionCard], now: datetime
) -> list[SpacedRepetitionCard]:
    """
    Return the due cards, most urgent first.

    Equal scores keep their input order.
    """
    due = [card for card in cards if is_due(card, now)]
    # sorted() stays stable with reverse=True
    return sorted(due, key=lambda card: priority_score(card, now), reverse=True)


def recommend_daily_load(
    cards: list[SpacedRepetitionCard], level: Difficulty | str, now: datetime
) -> int:
    """
    Suggest how many reviews to do today.

    A large backlog raises the target above the level's base count; a small
    one lowers it, though never below the backlog itself.

    Raises:
        InvalidInputError: If level is not a known difficulty.
    """
    base = BASE_DAILY_REVIEWS[Difficulty.parse(level)]
    backlog = sum(1 for card in cards if is_due(card, now))

    if backlog > base * BACKLOG_HIGH_RATIO:
        return min(round_half_up(base * LOAD_BOOST), backlog)
    if backlog < base * BACKLOG_LOW_RATIO:
        return max(round_half_up(base * LOAD_REDUCTION), backlog)
    return min(base, backlog)


def build_study_queue(
    cards: list[SpacedRepetitionCard], level: Difficulty | str, now: datetime
) -> StudyQueue:
    """
    Build today's queue: priority-sorted due cards, truncated to the daily load.
    """
    ordered = sort_by_priority(cards, now)
    target = recommend_daily_load(cards, level, now)
    return StudyQueue(cards=tuple(ordered[:target]), daily_target=target, backlog=len(ordered))
