"""Points and streak rules for reviews."""

from __future__ import annotations

from .errors import InvalidInput
from .sm2 import round_half_up


BASE_POINTS = 10
# Answers faster than this earn a speed bonus (up to 2x at 0 ms).
SPEED_WINDOW_MS = 30000
MAX_SPEED_MULTIPLIER = 2.0
MAX_STREAK_MULTIPLIER = 2.0
STREAK_BONUS_PER_REVIEW = 0.1


def speed_multiplier(response_time_ms: int) -> float:
    return max(1.0, MAX_SPEED_MULTIPLIER - response_time_ms / SPEED_WINDOW_MS)


def streak_multiplier(streak: int) -> float:
    return min(MAX_STREAK_MULTIPLIER, 1.0 + streak * STREAK_BONUS_PER_REVIEW)


def calculate_points(response_time_ms: int, difficulty_multiplier: float, streak: int) -> int:
    """Compute the point award for one review.

    points = round(10 * speed * difficulty * streak), where speed falls from
    2x at 0 ms to 1x at 30 s and stays there, and the streak bonus grows by
    0.1 per consecutive review up to 2x.

    Args:
        response_time_ms: Time taken to answer, in milliseconds
        difficulty_multiplier: Multiplier from the review's grade
        streak: The streak *before* this review

    Returns:
        A non-negative integer point award

    Raises:
        InvalidInput: If response_time_ms is negative
    """
    if response_time_ms < 0:
        raise InvalidInput(f"response_time_ms must be >= 0, got {response_time_ms}")

    raw = (
        BASE_POINTS
        * speed_multiplier(response_time_ms)
        * difficulty_multiplier
        * streak_multiplier(max(0, streak))
    )
    return max(0, round_half_up(raw))


def next_streak(current_streak: int, passed: bool) -> int:
    """A passing review extends the streak; anything else resets it to 0."""
    if not passed:
        return 0
    return current_streak + 1
