# Application Package
from .queue_builder import (
    build_study_queue,
    priority_score,
    recommend_daily_load,
    sort_by_priority,
)
from .review_service import ReviewService
from .scheduler import initialize, is_due, is_mastered, learning_stage, update
from .stats import StudySessionService, generate_statistics

__all__ = [
    "initialize",
    "update",
    "is_due",
    "is_mastered",
    "learning_stage",
    "sort_by_priority",
    "priority_score",
    "recommend_daily_load",
    "build_study_queue",
    "generate_statistics",
    "ReviewService",
    "StudySessionService",
]
