"""Models module for Pydantic schemas."""

from .progress import (
    CardProgress,
    ReviewOutcome,
    ReviewRequest,
    SessionSummary,
    UserProgress,
)
from .study import (
    DeckStats,
    ReviewsByDateEntry,
    StudyPreferences,
    StudyQueue,
    StudyQueueCard,
)

__all__ = [
    "CardProgress",
    "ReviewOutcome",
    "ReviewRequest",
    "SessionSummary",
    "UserProgress",
    "DeckStats",
    "ReviewsByDateEntry",
    "StudyPreferences",
    "StudyQueue",
    "StudyQueueCard",
]
