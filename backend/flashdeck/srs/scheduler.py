"""Review scheduling: one pure computation per review event.

The caller owns persistence and the clock. ``compute_review`` reads the item's
current state and the review, and returns the new scheduling values; it never
mutates its inputs and raises before computing anything if an input is invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .errors import InvalidInput, InvalidState
from .points import calculate_points, next_streak
from .quality import QualityScale, ReviewValue, ScaleKind, get_scale
from .sm2 import INITIAL_EASE_FACTOR, MIN_EASE_FACTOR, MIN_INTERVAL_DAYS, SM2State
from .time import add_days, as_utc


@dataclass(frozen=True)
class ReviewEvent:
    """A single review submitted by the caller.

    ``difficulty`` is a label ("hard"/"medium"/"easy") on the three-level
    scale and an integer quality 0-5 on the six-level scale.
    """

    difficulty: ReviewValue
    response_time_ms: int = 0


@dataclass(frozen=True)
class SchedulingState:
    """Scheduling state of one (user, item) pair.

    The defaults are the state of an item that has never been reviewed.
    """

    ease_factor: float = INITIAL_EASE_FACTOR
    repetitions: int = 0
    interval: int = MIN_INTERVAL_DAYS
    streak: int = 0
    total_points: int = 0
    due_date: datetime | None = None
    last_reviewed: datetime | None = None

    def validate(self) -> None:
        """Raise InvalidState if the state breaks a scheduling invariant."""
        if not self.ease_factor >= MIN_EASE_FACTOR:
            raise InvalidState(f"ease_factor must be >= {MIN_EASE_FACTOR}, got {self.ease_factor}")
        if self.interval < MIN_INTERVAL_DAYS:
            raise InvalidState(f"interval must be >= {MIN_INTERVAL_DAYS}, got {self.interval}")
        if self.repetitions < 0:
            raise InvalidState(f"repetitions must be >= 0, got {self.repetitions}")
        if self.streak < 0:
            raise InvalidState(f"streak must be >= 0, got {self.streak}")
        if self.total_points < 0:
            raise InvalidState(f"total_points must be >= 0, got {self.total_points}")


NEW_STATE = SchedulingState()


@dataclass(frozen=True)
class ReviewResult:
    interval: int
    ease_factor: float
    repetitions: int
    due_date: datetime
    points: int
    streak: int
    last_reviewed: datetime
    passed: bool

    def apply_to(self, state: SchedulingState | None = None) -> SchedulingState:
        """Return the state to persist after this review."""
        previous_points = state.total_points if state is not None else 0
        return SchedulingState(
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            interval=self.interval,
            streak=self.streak,
            total_points=previous_points + self.points,
            due_date=self.due_date,
            last_reviewed=self.last_reviewed,
        )


def _validate_response_time(response_time_ms: int) -> None:
    if isinstance(response_time_ms, bool) or not isinstance(response_time_ms, int):
        raise InvalidInput(f"response_time_ms must be an integer, got {response_time_ms!r}")
    if response_time_ms < 0:
        raise InvalidInput(f"response_time_ms must be >= 0, got {response_time_ms}")


def compute_review(
    event: ReviewEvent,
    state: SchedulingState | None,
    now: datetime,
    scale: ScaleKind | QualityScale = "three_level",
) -> ReviewResult:
    """Compute the scheduling outcome of one review.

    Ease factor, then interval and repetitions, then points (using the streak
    before this review), then the new streak. The due date is exactly
    ``now + interval`` days.

    Args:
        event: The review (difficulty/quality and response time)
        state: Current state of the item, or None for a never-reviewed item
        now: The review time; naive datetimes are taken as UTC
        scale: Quality scale kind or instance

    Returns:
        The new scheduling values and the points earned

    Raises:
        InvalidInput: If the review is outside the scale's domain
        InvalidState: If ``state`` violates an invariant
    """
    quality_scale = get_scale(scale)
    current = state if state is not None else NEW_STATE
    current.validate()

    grade = quality_scale.grade(event.difficulty)
    _validate_response_time(event.response_time_ms)

    advanced = quality_scale.advance(
        SM2State(
            ease_factor=current.ease_factor,
            repetitions=current.repetitions,
            interval_days=current.interval,
        ),
        grade,
    )

    reviewed_at = as_utc(now)
    return ReviewResult(
        interval=advanced.interval_days,
        ease_factor=advanced.ease_factor,
        repetitions=advanced.repetitions,
        due_date=add_days(reviewed_at, advanced.interval_days),
        points=calculate_points(event.response_time_ms, grade.multiplier, current.streak),
        streak=next_streak(current.streak, grade.passed),
        last_reviewed=reviewed_at,
        passed=grade.passed,
    )
