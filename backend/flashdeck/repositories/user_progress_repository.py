"""In-memory repository for per-user totals."""

from __future__ import annotations

import threading
from datetime import date

from flashdeck.models import UserProgress


class UserProgressRepository:
    """Thread-safe store of UserProgress keyed by user ID."""

    def __init__(self):
        self._records: dict[str, UserProgress] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserProgress:
        """Return the user's totals (zeroed for a user with no reviews yet)."""
        with self._lock:
            record = self._records.get(user_id)
            return record.model_copy() if record is not None else UserProgress(userId=user_id)

    def record_study(self, user_id: str, points: int, today: date) -> UserProgress:
        """Atomically add points and advance the daily streak."""
        with self._lock:
            current = self._records.get(user_id) or UserProgress(userId=user_id)
            updated = current.record_study(points, today)
            self._records[user_id] = updated
            return updated.model_copy()

    def clear(self) -> None:
        """Clear all records (for testing)."""
        with self._lock:
            self._records.clear()


_user_progress_repository: UserProgressRepository | None = None


def get_user_progress_repository() -> UserProgressRepository:
    """Get the singleton user progress repository instance."""
    global _user_progress_repository
    if _user_progress_repository is None:
        _user_progress_repository = UserProgressRepository()
    return _user_progress_repository


def reset_user_progress_repository() -> None:
    """Reset the user progress repository (for testing)."""
    global _user_progress_repository
    _user_progress_repository = None
