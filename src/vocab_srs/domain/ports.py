"""
Ports (interfaces) for card storage and time.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import SpacedRepetitionCard


class CardRepository(ABC):
    """
    Port for loading and persisting scheduling records.

    Implementations:
        - InMemoryCardRepository: process-local dict guarded by an asyncio lock.
    """

    @abstractmethod
    async def get_card(self, card_id: str) -> SpacedRepetitionCard:
        """
        Fetch a card by id.

        Raises:
            CardNotFoundError: If no such card is stored.
        """
        pass

    @abstractmethod
    async def list_cards(self, user_id: str) -> list[SpacedRepetitionCard]:
        """
        Fetch every card belonging to a learner, in insertion order.
        """
        pass

    @abstractmethod
    async def save_card(self, card: SpacedRepetitionCard) -> None:
        """
        Insert or update a card with compare-and-swap on its revision.

        A card with revision 0 must not already exist. Any other card must
        have revision exactly one above the stored copy.

        Raises:
            ConcurrencyConflictError: If another writer got there first.
        """
        pass


class Clock(ABC):
    """Port for the current time. The engine itself never reads a clock."""

    @abstractmethod
    def now(self) -> datetime:
        pass
