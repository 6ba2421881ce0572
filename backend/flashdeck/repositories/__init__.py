"""Repositories module for data access layer."""

from .progress_repository import (
    ProgressRepository,
    ProgressNotFoundError,
    get_progress_repository,
    reset_progress_repository,
)
from .user_progress_repository import (
    UserProgressRepository,
    get_user_progress_repository,
    reset_user_progress_repository,
)

__all__ = [
    "ProgressRepository",
    "ProgressNotFoundError",
    "get_progress_repository",
    "reset_progress_repository",
    "UserProgressRepository",
    "get_user_progress_repository",
    "reset_user_progress_repository",
]
