"""Live study session tracking."""

from .session_store import (
    SessionNotFoundError,
    SessionStore,
    StudySession,
    get_session_store,
    reset_session_store,
)

__all__ = [
    "SessionNotFoundError",
    "SessionStore",
    "StudySession",
    "get_session_store",
    "reset_session_store",
]
