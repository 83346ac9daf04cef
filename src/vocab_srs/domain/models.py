"""
Domain models for spaced-repetition scheduling.

These are pure data structures with no I/O or external dependencies.
Cards are frozen: every transition produces a new instance.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

from .constants import (
    HISTORY_LIMIT,
    MAX_EASINESS_FACTOR,
    MAX_QUALITY,
    MIN_EASINESS_FACTOR,
    MIN_INTERVAL,
    MIN_QUALITY,
)
from .errors import InvalidInputError, InvariantViolationError


class Difficulty(str, Enum):
    """Difficulty of a phrase, also used as the learner's level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(d.value for d in cls)
            raise InvalidInputError(
                f"Unknown difficulty {value!r} (expected one of: {allowed})"
            ) from None


class Category(str, Enum):
    """Known content categories. Any other label is valid but carries no adjustment."""

    VOCABULARY = "vocabulary"
    EXPRESSION = "expression"
    IDIOM = "idiom"
    PHRASE = "phrase"
    GRAMMAR_PATTERN = "grammar_pattern"
    COLLOCATION = "collocation"
    VERB_CONJUGATION = "verb_conjugation"
    CULTURAL_REFERENCE = "cultural_reference"

    @classmethod
    def lookup(cls, label: str) -> "Category | None":
        try:
            return cls(label)
        except ValueError:
            return None


class QualityRating(IntEnum):
    """
    Learner self-assessed recall score.

    5 - Perfect response (immediate, confident)
    4 - Correct response with slight hesitation
    3 - Correct response with difficulty
    2 - Incorrect response but remembered with hint
    1 - Incorrect response, partial knowledge
    0 - Complete blackout, no knowledge
    """

    BLACKOUT = 0
    PARTIAL = 1
    HINTED = 2
    DIFFICULT = 3
    HESITANT = 4
    PERFECT = 5

    @property
    def is_passing(self) -> bool:
        return self >= QualityRating.DIFFICULT

    @classmethod
    def parse(cls, value: object) -> "QualityRating":
        # bool is an int subclass; True must not pass as quality 1
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Quality must be an integer, got {value!r}")
        if not MIN_QUALITY <= value <= MAX_QUALITY:
            raise InvalidInputError(
                f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {value}"
            )
        return cls(value)


class LearningStage(str, Enum):
    """Derived classification of a card. Never stored."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    MASTERED = "mastered"
    RELEARNING = "relearning"


def _is_plain_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ReviewResult:
    """
    One review event submitted by the learner.

    Attributes:
        quality: Recall score 0-5.
        was_correct: Whether the answer was correct. Only correct passing
            answers advance the repetition count.
        response_time_ms: Time to answer, if measured.
        hints_used: Informational only, not used for scheduling.
    """

    quality: int
    was_correct: bool
    response_time_ms: int | None = None
    hints_used: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "quality", int(QualityRating.parse(self.quality)))

        if self.response_time_ms is not None and (
            not _is_plain_int(self.response_time_ms) or self.response_time_ms < 0
        ):
            raise InvalidInputError(
                f"response_time_ms must be a non-negative integer, got {self.response_time_ms!r}"
            )
        if self.hints_used is not None and (
            not _is_plain_int(self.hints_used) or self.hints_used < 0
        ):
            raise InvalidInputError(
                f"hints_used must be a non-negative integer, got {self.hints_used!r}"
            )


@dataclass(frozen=True)
class SpacedRepetitionCard:
    """
    Scheduling record for one (phrase, user) pair.

    Owned by the storage layer; the engine only derives new instances from it.
    Construction validates every numeric invariant so an invalid card cannot exist.
    """

    id: str
    phrase_id: str
    user_id: str

    # SM-2 parameters
    easiness_factor: float
    interval: int  # Days until next review
    repetitions: int  # Consecutive successful reviews

    next_review: datetime
    difficulty_level: Difficulty
    category: str

    created_at: datetime
    updated_at: datetime

    # Most recent last, at most HISTORY_LIMIT entries
    quality_responses: tuple[int, ...] = ()
    last_reviewed: datetime | None = None

    study_streak: int = 0
    mistake_count: int = 0

    # Optimistic concurrency token for storage
    revision: int = 0

    def __post_init__(self):
        object.__setattr__(self, "difficulty_level", Difficulty.parse(self.difficulty_level))
        object.__setattr__(self, "quality_responses", tuple(self.quality_responses))

        if not MIN_EASINESS_FACTOR <= self.easiness_factor <= MAX_EASINESS_FACTOR:
            raise InvariantViolationError(
                f"easiness_factor {self.easiness_factor} outside "
                f"[{MIN_EASINESS_FACTOR}, {MAX_EASINESS_FACTOR}]"
            )
        if not _is_plain_int(self.interval) or self.interval < MIN_INTERVAL:
            raise InvariantViolationError(f"interval must be an integer >= 1, got {self.interval!r}")

        for name in ("repetitions", "study_streak", "mistake_count", "revision"):
            value = getattr(self, name)
            if not _is_plain_int(value) or value < 0:
                raise InvariantViolationError(f"{name} must be a non-negative integer, got {value!r}")

        if len(self.quality_responses) > HISTORY_LIMIT:
            raise InvariantViolationError(
                f"quality_responses holds {len(self.quality_responses)} entries (max {HISTORY_LIMIT})"
            )
        for q in self.quality_responses:
            if not _is_plain_int(q) or not MIN_QUALITY <= q <= MAX_QUALITY:
                raise InvariantViolationError(f"quality_responses contains invalid entry {q!r}")


@dataclass(frozen=True)
class StudyStatistics:
    """Aggregate figures over a card collection, for dashboards."""

    total_cards: int = 0
    due_today: int = 0
    overdue: int = 0
    mastered: int = 0
    learning: int = 0
    average_easiness: float = 0.0
    average_interval: float = 0.0
    success_rate: float = 0.0
    by_stage: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class StudyQueue:
    """Today's review queue for one learner."""

    cards: tuple[SpacedRepetitionCard, ...]  # Highest priority first
    daily_target: int
    backlog: int  # Due cards before truncation
