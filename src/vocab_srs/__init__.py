"""vocab_srs: spaced-repetition scheduling engine for vocabulary cards."""

from vocab_srs.application.queue_builder import recommend_daily_load, sort_by_priority
from vocab_srs.application.scheduler import initialize, is_due, update
from vocab_srs.application.stats.statistics import generate_statistics
from vocab_srs.consts import VERSION
from vocab_srs.domain.models import (
    Difficulty,
    ReviewResult,
    SpacedRepetitionCard,
    StudyStatistics,
)

__version__ = VERSION

__all__ = [
    "initialize",
    "update",
    "is_due",
    "sort_by_priority",
    "recommend_daily_load",
    "generate_statistics",
    "Difficulty",
    "ReviewResult",
    "SpacedRepetitionCard",
    "StudyStatistics",
]
