"""Services built around the scheduling core."""

from .deck_stats import compute_deck_stats
from .review_service import ReviewService
from .study_queue import build_study_queue, next_due_at

__all__ = [
    "compute_deck_stats",
    "ReviewService",
    "build_study_queue",
    "next_due_at",
]
