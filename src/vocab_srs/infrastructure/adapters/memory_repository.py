import asyncio
import logging

from vocab_srs.domain.errors import CardNotFoundError, ConcurrencyConflictError
from vocab_srs.domain.models import SpacedRepetitionCard
from vocab_srs.domain.ports import CardRepository


class InMemoryCardRepository(CardRepository):
    """
    Process-local card store.

    Cards are frozen, so stored instances are shared without copying.
    The lock makes each compare-and-swap atomic across coroutines.
    """

    def __init__(self, cards: list[SpacedRepetitionCard] | None = None):
        self._cards: dict[str, SpacedRepetitionCard] = {}
        self._lock = asyncio.Lock()
        self.logger = logging.getLogger(__name__)
        for card in cards or []:
            self._cards[card.id] = card

    async def get_card(self, card_id: str) -> SpacedRepetitionCard:
        async with self._lock:
            try:
                return self._cards[card_id]
            except KeyError:
                raise CardNotFoundError(card_id) from None

    async def list_cards(self, user_id: str) -> list[SpacedRepetitionCard]:
        async with self._lock:
            return [card for card in self._cards.values() if card.user_id == user_id]

    async def save_card(self, card: SpacedRepetitionCard) -> None:
        async with self._lock:
            stored = self._cards.get(card.id)
            stored_revision = stored.revision if stored else None
            expected = card.revision - 1 if card.revision > 0 else None

            if stored_revision != expected:
                raise ConcurrencyConflictError(card.id, expected, stored_revision)

            self._cards[card.id] = card
            self.logger.debug(f"Saved {card.id} at revision {card.revision}")
