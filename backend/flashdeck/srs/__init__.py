"""SRS helpers (quality scales, SM-2 state, points and scheduling)."""

from .errors import InvalidInput, InvalidState, SchedulingError
from .mastery import MasteryLevel, classify_mastery, mastery_score
from .points import calculate_points, next_streak
from .quality import (
    SIX_LEVEL,
    THREE_LEVEL,
    Difficulty,
    Grade,
    QualityScale,
    ScaleKind,
    SixLevelScale,
    ThreeLevelScale,
    get_scale,
)
from .scheduler import NEW_STATE, ReviewEvent, ReviewResult, SchedulingState, compute_review
from .sm2 import SM2State, apply_scaled_review, apply_sm2
from .time import (
    Clock,
    utc_now,
    utc_now_iso,
    utc_datetime_to_iso_z,
    parse_iso_z,
    add_days,
    add_days_iso,
    is_due,
)

__all__ = [
    "InvalidInput",
    "InvalidState",
    "SchedulingError",
    "MasteryLevel",
    "classify_mastery",
    "mastery_score",
    "calculate_points",
    "next_streak",
    "SIX_LEVEL",
    "THREE_LEVEL",
    "Difficulty",
    "Grade",
    "QualityScale",
    "ScaleKind",
    "SixLevelScale",
    "ThreeLevelScale",
    "get_scale",
    "NEW_STATE",
    "ReviewEvent",
    "ReviewResult",
    "SchedulingState",
    "compute_review",
    "SM2State",
    "apply_scaled_review",
    "apply_sm2",
    "Clock",
    "utc_now",
    "utc_now_iso",
    "utc_datetime_to_iso_z",
    "parse_iso_z",
    "add_days",
    "add_days_iso",
    "is_due",
]
