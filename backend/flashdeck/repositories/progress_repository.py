"""In-memory repository for card progress records."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from flashdeck.models import CardProgress

logger = logging.getLogger(__name__)


class ProgressNotFoundError(Exception):
    """Raised when no progress record exists for a card."""

    pass


class _KeyLock:
    """Lock for one (user_id, card_id) key and the number of callers using it."""

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


class ProgressRepository:
    """Thread-safe store of CardProgress keyed by (user_id, card_id).

    A missing record means the card has never been reviewed. Reviews of the
    same card must hold ``lock(user_id, card_id)`` across read, compute and
    write so that concurrent updates cannot interleave.
    """

    def __init__(self):
        self._records: dict[tuple[str, str], CardProgress] = {}
        self._key_locks: dict[tuple[str, str], _KeyLock] = {}
        self._lock = threading.Lock()

    def _make_key(self, user_id: str, card_id: str) -> tuple[str, str]:
        return (user_id, card_id)

    @contextmanager
    def lock(self, user_id: str, card_id: str) -> Iterator[None]:
        """Serialize updates to one card's progress.

        A key's lock lives only while some caller holds or waits on it.
        """
        key = self._make_key(user_id, card_id)
        with self._lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = self._key_locks[key] = _KeyLock()
            key_lock.holders += 1
        try:
            with key_lock.lock:
                yield
        finally:
            with self._lock:
                key_lock.holders -= 1
                if key_lock.holders == 0 and self._key_locks.get(key) is key_lock:
                    del self._key_locks[key]

    def find(self, user_id: str, card_id: str) -> CardProgress | None:
        """Return the progress record, or None for a never-reviewed card."""
        with self._lock:
            record = self._records.get(self._make_key(user_id, card_id))
            return record.model_copy(deep=True) if record is not None else None

    def get_by_id(self, user_id: str, card_id: str) -> CardProgress:
        record = self.find(user_id, card_id)
        if record is None:
            raise ProgressNotFoundError(f"No progress for card {card_id}")
        return record

    def save(self, progress: CardProgress) -> CardProgress:
        """Insert or replace a progress record."""
        with self._lock:
            self._records[self._make_key(progress.userId, progress.cardId)] = progress.model_copy(deep=True)
        return progress

    def list_by_deck(self, user_id: str, deck_id: str) -> list[CardProgress]:
        """List a user's progress records in a deck, earliest due first."""
        with self._lock:
            records = [
                record.model_copy(deep=True)
                for (owner, _), record in self._records.items()
                if owner == user_id and record.deckId == deck_id
            ]
        return sorted(records, key=lambda record: record.due_at())

    def delete_by_deck(self, user_id: str, deck_id: str) -> int:
        """Delete all of a user's progress in a deck. Returns the number removed."""
        with self._lock:
            keys = [
                key
                for key, record in self._records.items()
                if key[0] == user_id and record.deckId == deck_id
            ]
            for key in keys:
                del self._records[key]

        logger.info(f"Deck progress reset: user={user_id}, deck={deck_id}, removed={len(keys)}")
        return len(keys)

    def clear(self) -> None:
        """Clear all records (for testing)."""
        with self._lock:
            self._records.clear()


_progress_repository: ProgressRepository | None = None


def get_progress_repository() -> ProgressRepository:
    """Get the singleton progress repository instance."""
    global _progress_repository
    if _progress_repository is None:
        _progress_repository = ProgressRepository()
    return _progress_repository


def reset_progress_repository() -> None:
    """Reset the progress repository (for testing)."""
    global _progress_repository
    _progress_repository = None
