# Application Stats Package
from .service import StudySessionService
from .statistics import generate_statistics

__all__ = ["generate_statistics", "StudySessionService"]
