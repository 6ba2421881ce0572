"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest

from flashdeck.repositories import ProgressRepository, UserProgressRepository
from flashdeck.services import ReviewService
from flashdeck.sessions import SessionStore

# Keep scheduling defaults independent of the developer's environment
os.environ.setdefault("SRS_DEFAULT_SCALE", "three_level")


class FixedClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def start_time():
    return datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(start_time):
    return FixedClock(start_time)


@pytest.fixture
def progress_repo():
    return ProgressRepository()


@pytest.fixture
def user_progress_repo():
    return UserProgressRepository()


@pytest.fixture
def session_store():
    return SessionStore(ttl_seconds=60)


@pytest.fixture
def review_service(progress_repo, user_progress_repo, session_store, clock):
    return ReviewService(
        progress_repo=progress_repo,
        user_progress_repo=user_progress_repo,
        session_store=session_store,
        clock=clock,
        default_scale="three_level",
    )
