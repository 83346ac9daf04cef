from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from vocab_srs.application.review_service import ReviewService
from vocab_srs.domain.errors import (
    CardNotFoundError,
    ConcurrencyConflictError,
    InvalidInputError,
)
from vocab_srs.domain.models import ReviewResult
from vocab_srs.infrastructure.adapters.memory_repository import InMemoryCardRepository

DAY = timedelta(days=1)


@pytest.fixture
def repo():
    return InMemoryCardRepository()


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.mark.asyncio
async def test_enroll_then_review(repo, clock, t0):
    service = ReviewService(card_repo=repo, clock=clock)

    card = await service.enroll("p1", "u1", "beginner", "vocabulary")
    assert card.next_review == t0 + DAY

    clock.advance(DAY)
    reviewed = await service.submit_review(
        card.id, ReviewResult(quality=5, was_correct=True, response_time_ms=3000)
    )

    assert reviewed.interval == 8
    assert reviewed.next_review == t0 + 9 * DAY
    stored = await repo.get_card(card.id)
    assert stored == reviewed
    assert stored.revision == 1


@pytest.mark.asyncio
async def test_enroll_twice_conflicts(repo, clock):
    service = ReviewService(card_repo=repo, clock=clock)
    await service.enroll("p1", "u1", "beginner", "vocabulary")

    with pytest.raises(ConcurrencyConflictError):
        await service.enroll("p1", "u1", "advanced", "idiom")


@pytest.mark.asyncio
async def test_enroll_rejects_unknown_difficulty(repo, clock):
    service = ReviewService(card_repo=repo, clock=clock)

    with pytest.raises(InvalidInputError):
        await service.enroll("p1", "u1", "fluent", "vocabulary")

    assert await repo.list_cards("u1") == []


@pytest.mark.asyncio
async def test_review_unknown_card(repo, clock):
    service = ReviewService(card_repo=repo, clock=clock)

    with pytest.raises(CardNotFoundError):
        await service.submit_review("sr_missing_u1", ReviewResult(quality=3, was_correct=True))


@pytest.mark.asyncio
async def test_retries_after_conflict(mock_repo, clock, make_card):
    card = make_card(revision=4)
    mock_repo.get_card.return_value = card
    mock_repo.save_card.side_effect = [ConcurrencyConflictError(card.id, 4, 5), None]
    service = ReviewService(card_repo=mock_repo, clock=clock)

    reviewed = await service.submit_review(card.id, ReviewResult(quality=4, was_correct=True))

    assert reviewed.revision == 5
    assert mock_repo.get_card.await_count == 2
    assert mock_repo.save_card.await_count == 2


@pytest.mark.asyncio
async def test_gives_up_after_max_retries(mock_repo, clock, make_card):
    card = make_card()
    mock_repo.get_card.return_value = card
    mock_repo.save_card.side_effect = ConcurrencyConflictError(card.id, 0, 1)
    service = ReviewService(card_repo=mock_repo, clock=clock, max_conflict_retries=1)

    with pytest.raises(ConcurrencyConflictError):
        await service.submit_review(card.id, ReviewResult(quality=4, was_correct=True))

    assert mock_repo.get_card.await_count == 2


@pytest.mark.asyncio
async def test_reviews_chain_through_storage(repo, clock, t0):
    service = ReviewService(card_repo=repo, clock=clock)
    card = await service.enroll("p1", "u1", "intermediate", "vocabulary")
    clock.advance(2 * DAY)

    await service.submit_review(card.id, ReviewResult(quality=1, was_correct=False))
    latest = await service.submit_review(card.id, ReviewResult(quality=4, was_correct=True))

    assert latest.quality_responses == (1, 4)
    assert latest.mistake_count == 1
    assert latest.revision == 2
