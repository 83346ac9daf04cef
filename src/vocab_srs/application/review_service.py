"""
Review service: Application layer orchestrator.

Loads a card, applies a review through the scheduler and saves the result
with optimistic concurrency. On a lost race the latest card is re-read and
the review is applied again.
"""

import logging

from vocab_srs.domain.errors import ConcurrencyConflictError
from vocab_srs.domain.models import Difficulty, ReviewResult, SpacedRepetitionCard
from vocab_srs.domain.ports import CardRepository, Clock

from .scheduler import initialize, update

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for enrolling phrases and submitting reviews.
    """

    def __init__(self, card_repo: CardRepository, clock: Clock, max_conflict_retries: int = 3):
        """
        Args:
            card_repo: The repository (port) holding scheduling records.
            clock: Source of the current time.
            max_conflict_retries: Extra attempts after a revision conflict.
        """
        self._repo = card_repo
        self._clock = clock
        self._max_retries = max_conflict_retries

    async def enroll(
        self,
        phrase_id: str,
        user_id: str,
        difficulty: Difficulty | str,
        category: str,
    ) -> SpacedRepetitionCard:
        """
        Create and store a card for a phrase the learner just met.

        Raises:
            InvalidInputError: On an unknown difficulty.
            ConcurrencyConflictError: If the card already exists.
        """
        card = initialize(phrase_id, user_id, difficulty, category, self._clock.now())
        await self._repo.save_card(card)
        logger.info(f"Enrolled {card.id} ({card.difficulty_level.value}, {category})")
        return card

    async def submit_review(self, card_id: str, result: ReviewResult) -> SpacedRepetitionCard:
        """
        Apply a review to the stored card and persist the new state.

        Raises:
            CardNotFoundError: If the card does not exist.
            ConcurrencyConflictError: If every attempt lost the race.
        """
        attempt = 0
        while True:
            card = await self._repo.get_card(card_id)
            updated = update(card, result, self._clock.now())
            try:
                await self._repo.save_card(updated)
            except ConcurrencyConflictError as e:
                if attempt >= self._max_retries:
                    logger.error(f"Giving up on {card_id} after {attempt + 1} attempts: {e}")
                    raise
                attempt += 1
                logger.warning(f"Retrying review of {card_id} ({attempt}/{self._max_retries}): {e}")
                continue

            logger.info(
                f"Reviewed {card_id}: q={result.quality}, next in {updated.interval}d"
            )
            return updated
