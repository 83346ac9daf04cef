"""
Service Factory
Centralizes wiring of application services to their ports.
"""

from vocab_srs.application.config import AppConfig
from vocab_srs.application.review_service import ReviewService
from vocab_srs.application.stats.service import StudySessionService
from vocab_srs.domain.models import SpacedRepetitionCard
from vocab_srs.domain.ports import CardRepository, Clock
from vocab_srs.infrastructure.adapters.memory_repository import InMemoryCardRepository
from vocab_srs.infrastructure.clock import SystemClock


def get_card_repository(
    config: AppConfig, cards: list[SpacedRepetitionCard] | None = None
) -> CardRepository:
    """
    Returns the CardRepository implementation for this process, seeded with cards.
    """
    return InMemoryCardRepository(cards)


def get_review_service(
    config: AppConfig,
    card_repo: CardRepository | None = None,
    clock: Clock | None = None,
) -> ReviewService:
    return ReviewService(
        card_repo or get_card_repository(config),
        clock or SystemClock(),
        max_conflict_retries=config.max_conflict_retries,
    )


def get_session_service(
    config: AppConfig,
    card_repo: CardRepository | None = None,
    clock: Clock | None = None,
) -> StudySessionService:
    return StudySessionService(card_repo or get_card_repository(config), clock or SystemClock())
