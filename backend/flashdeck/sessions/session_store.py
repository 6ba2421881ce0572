"""TTL-based store for live study sessions."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from cachetools import TTLCache

from flashdeck.srs.time import as_utc, utc_datetime_to_iso_z

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """Raised when a study session does not exist or has expired."""

    pass


@dataclass
class StudySession:
    """Counters for one study sitting on a deck.

    Keyed by (user_id, deck_id); starting a new session on the same deck
    replaces the previous one.

    Attributes:
        session_id: Deterministic UUID per (user_id, deck_id, started_at)
        user_id: Owner of the session
        deck_id: Deck being studied
        started_at: ISO timestamp when the session started
        cards_studied: Number of reviews recorded in this session
        points_earned: Points earned by those reviews
        ended_at: ISO timestamp when the session was ended, if it was
    """

    session_id: str
    user_id: str
    deck_id: str
    started_at: str
    cards_studied: int = 0
    points_earned: int = 0
    ended_at: str | None = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def record_review(self, points: int) -> None:
        self.cards_studied += 1
        self.points_earned += points

    def revert_review(self, points: int) -> None:
        self.cards_studied -= 1
        self.points_earned -= points


def _generate_session_id(user_id: str, deck_id: str, started_at: str) -> str:
    """Generate a deterministic session ID.

    Uses UUID5 with a fixed namespace so the same inputs
    always produce the same session ID.
    """
    namespace = uuid.UUID('6ba7b810-9dad-11d1-80b4-00c04fd430c8')
    combined = f"{user_id}:{deck_id}:{started_at}"
    return str(uuid.uuid5(namespace, combined))


class SessionStore:
    """Thread-safe TTL-based session store.

    Sessions expire after TTL seconds of inactivity (sliding window).
    """

    # Default TTL: 30 minutes
    DEFAULT_TTL_SECONDS = 30 * 60
    # Max sessions to cache
    MAX_SESSIONS = 10000

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        maxsize: int = MAX_SESSIONS,
        timer: Callable[[], float] = time.monotonic,
    ):
        """Initialize the session store.

        Args:
            ttl_seconds: Time-to-live for idle sessions in seconds
            maxsize: Maximum number of sessions to cache
            timer: Monotonic time source used for expiry
        """
        self._cache: TTLCache[tuple[str, str], StudySession] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()

    def _make_key(self, user_id: str, deck_id: str) -> tuple[str, str]:
        """Create a cache key from user and deck IDs."""
        return (user_id, deck_id)

    def start(self, user_id: str, deck_id: str, now: datetime) -> StudySession:
        """Start a new session for a user and deck, replacing any previous one."""
        started_at = utc_datetime_to_iso_z(as_utc(now))
        session = StudySession(
            session_id=_generate_session_id(user_id, deck_id, started_at),
            user_id=user_id,
            deck_id=deck_id,
            started_at=started_at,
        )
        with self._lock:
            self._cache[self._make_key(user_id, deck_id)] = session

        logger.info(f"Study session started: user={user_id}, deck={deck_id}, session={session.session_id}")
        return session

    def get(self, user_id: str, deck_id: str) -> StudySession | None:
        """Get the live session for a user and deck.

        Returns None if no session exists or it has expired.
        Accessing the session refreshes its TTL (sliding window).
        """
        key = self._make_key(user_id, deck_id)
        with self._lock:
            session = self._cache.get(key)
            if session is not None:
                # Re-set to refresh TTL (sliding window)
                self._cache[key] = session
            return session

    def record_review(self, user_id: str, deck_id: str, session_id: str, points: int) -> StudySession:
        """Count one review and its points against a live session.

        Raises:
            SessionNotFoundError: If the session is missing, expired, ended,
                or is not the current session for this user and deck
        """
        key = self._make_key(user_id, deck_id)
        with self._lock:
            session = self._cache.get(key)
            if session is None or session.session_id != session_id or not session.is_active:
                raise SessionNotFoundError(f"Session {session_id} not found")
            session.record_review(points)
            self._cache[key] = session
            return session

    def revert_review(self, user_id: str, deck_id: str, session_id: str, points: int) -> None:
        """Undo a review counted by record_review whose progress was not saved.

        A session that has since ended or been replaced is left alone.
        """
        key = self._make_key(user_id, deck_id)
        with self._lock:
            session = self._cache.get(key)
            if session is not None and session.session_id == session_id:
                session.revert_review(points)

        logger.warning(f"Session review reverted: user={user_id}, deck={deck_id}, session={session_id}")

    def end(self, user_id: str, deck_id: str, now: datetime) -> StudySession:
        """End and remove the live session, returning its final counters."""
        key = self._make_key(user_id, deck_id)
        with self._lock:
            session = self._cache.pop(key, None)
        if session is None:
            raise SessionNotFoundError(f"No active session for deck {deck_id}")

        session.ended_at = utc_datetime_to_iso_z(as_utc(now))
        logger.info(
            f"Study session ended: user={user_id}, deck={deck_id}, session={session.session_id}, "
            f"cards={session.cards_studied}, points={session.points_earned}"
        )
        return session

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        with self._lock:
            self._cache.clear()


# Singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        from flashdeck.config import get_settings

        settings = get_settings()
        _session_store = SessionStore(
            ttl_seconds=settings.session_ttl_seconds,
            maxsize=settings.max_sessions,
        )
    return _session_store


def reset_session_store() -> None:
    """Reset the session store (for testing)."""
    global _session_store
    _session_store = None
