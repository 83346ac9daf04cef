from datetime import datetime, timedelta, timezone

import pytest

from vocab_srs.domain.models import Difficulty, SpacedRepetitionCard
from vocab_srs.domain.ports import Clock

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


class FakeClock(Clock):
    """Clock that only moves when a test moves it."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def make_card():
    """Factory for cards with sensible defaults; override any field by keyword."""

    def _make(**overrides) -> SpacedRepetitionCard:
        fields = {
            "id": "sr_p1_u1",
            "phrase_id": "p1",
            "user_id": "u1",
            "easiness_factor": 2.5,
            "interval": 1,
            "repetitions": 0,
            "next_review": T0,
            "difficulty_level": Difficulty.INTERMEDIATE,
            "category": "vocabulary",
            "created_at": T0 - 30 * DAY,
            "updated_at": T0 - 30 * DAY,
        }
        fields.update(overrides)
        return SpacedRepetitionCard(**fields)

    return _make
