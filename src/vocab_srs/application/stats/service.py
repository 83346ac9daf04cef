"""
Study session service: Application layer orchestrator.

Coordinates loading a learner's cards from the repository and feeding them
to the queue builder and statistics aggregator.
"""

import logging

from vocab_srs.domain.models import Difficulty, StudyQueue, StudyStatistics
from vocab_srs.domain.ports import CardRepository, Clock

from ..queue_builder import build_study_queue
from .statistics import generate_statistics

logger = logging.getLogger(__name__)


class StudySessionService:
    """
    Application service for building study sessions and dashboards.

    Follows Dependency Inversion: depends on the CardRepository and Clock
    abstractions, not concrete adapter implementations.
    """

    def __init__(self, card_repo: CardRepository, clock: Clock):
        """
        Args:
            card_repo: The repository (port) holding scheduling records.
            clock: Source of the current time.
        """
        self._repo = card_repo
        self._clock = clock

    async def build_session(self, user_id: str, level: Difficulty | str) -> StudyQueue:
        """
        Build today's review queue for a learner.

        Args:
            user_id: The learner.
            level: The learner's level, which sets the base daily load.

        Returns:
            StudyQueue with the highest-priority due cards first.
        """
        cards = await self._repo.list_cards(user_id)
        queue = build_study_queue(cards, level, self._clock.now())
        logger.info(
            f"Session for {user_id}: {len(queue.cards)} of {queue.backlog} due cards "
            f"(target {queue.daily_target})"
        )
        return queue

    async def get_statistics(self, user_id: str) -> StudyStatistics:
        """
        Summarise every card a learner owns.
        """
        cards = await self._repo.list_cards(user_id)
        return generate_statistics(cards, self._clock.now())
