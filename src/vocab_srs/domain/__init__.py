# Domain Package
from .errors import (
    CardNotFoundError,
    ConcurrencyConflictError,
    InvalidInputError,
    InvariantViolationError,
    SchedulingError,
)
from .models import (
    Category,
    Difficulty,
    LearningStage,
    QualityRating,
    ReviewResult,
    SpacedRepetitionCard,
    StudyQueue,
    StudyStatistics,
)
from .ports import CardRepository, Clock

__all__ = [
    "Category",
    "Difficulty",
    "LearningStage",
    "QualityRating",
    "ReviewResult",
    "SpacedRepetitionCard",
    "StudyQueue",
    "StudyStatistics",
    "CardRepository",
    "Clock",
    "SchedulingError",
    "InvalidInputError",
    "InvariantViolationError",
    "CardNotFoundError",
    "ConcurrencyConflictError",
]
