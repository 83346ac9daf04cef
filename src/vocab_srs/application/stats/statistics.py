"""
Statistics aggregator for card collections.

This is a pure computation module with no I/O.
"""

from datetime import datetime, timedelta

from vocab_srs.domain.constants import OVERDUE_GRACE_DAYS, PASSING_QUALITY
from vocab_srs.domain.models import LearningStage, SpacedRepetitionCard, StudyStatistics

from ..scheduler import is_due, is_mastered, learning_stage


def generate_statistics(cards: list[SpacedRepetitionCard], now: datetime) -> StudyStatistics:
    """
    Summarise a card collection.

    Averages and the success rate are 0 for an empty collection or one
    with no recorded responses.
    """
    by_stage = {stage.value: 0 for stage in LearningStage}
    if not cards:
        return StudyStatistics(by_stage=by_stage)

    overdue_cutoff = now - timedelta(days=OVERDUE_GRACE_DAYS)

    due_today = 0
    overdue = 0
    mastered = 0
    total_responses = 0
    successful_responses = 0

    for card in cards:
        if is_due(card, now):
            due_today += 1
        if card.next_review < overdue_cutoff:
            overdue += 1
        if is_mastered(card):
            mastered += 1

        total_responses += len(card.quality_responses)
        successful_responses += sum(1 for q in card.quality_responses if q >= PASSING_QUALITY)
        by_stage[learning_stage(card).value] += 1

    total = len(cards)
    return StudyStatistics(
        total_cards=total,
        due_today=due_today,
        overdue=overdue,
        mastered=mastered,
        learning=total - mastered,
        average_easiness=sum(card.easiness_factor for card in cards) / total,
        average_interval=sum(card.interval for card in cards) / total,
        success_rate=successful_responses / total_responses if total_responses else 0.0,
        by_stage=by_stage,
    )
