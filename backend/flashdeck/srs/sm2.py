"""SM-2 family state update logic.

Both review scales share the same primitives: the ease-factor adjustment, the
repetition-based base interval and the 1-day interval floor. They differ in
where the ease adjustment is centred and in what happens on a weak answer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidInput


MIN_EASE_FACTOR = 1.3
INITIAL_EASE_FACTOR = 2.5
MIN_INTERVAL_DAYS = 1
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6

# Quality at or above which an SM-2 review counts as a successful recall.
SM2_PASS_QUALITY = 3


@dataclass(frozen=True)
class SM2State:
    ease_factor: float
    repetitions: int
    interval_days: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def _clamp_ease_factor(ef: float) -> float:
    return max(MIN_EASE_FACTOR, ef)


def adjust_ease_factor(ease_factor: float, quality: int, center: int) -> float:
    """Return the ease factor after a review of the given quality.

    EF' = EF + (0.1 - (c-q)*(0.08 + (c-q)*0.02)), clamped to >= 1.3, where
    ``c`` is 3 for the three-level scale and 5 for SM-2.
    """
    distance = center - quality
    return _clamp_ease_factor(ease_factor + (0.1 - distance * (0.08 + distance * 0.02)))


def base_interval(repetitions: int, ease_factor: float) -> int:
    """Interval in days before any difficulty scaling.

    ``repetitions`` is the count *before* this review is counted.
    """
    if repetitions == 0:
        return FIRST_INTERVAL_DAYS
    if repetitions == 1:
        return SECOND_INTERVAL_DAYS
    return max(MIN_INTERVAL_DAYS, round_half_up(repetitions * ease_factor))


def scale_interval(interval_days: int, factor: float) -> int:
    """Scale an interval down by ``factor``, flooring, never below one day."""
    if factor == 1.0:
        return max(MIN_INTERVAL_DAYS, interval_days)
    return max(MIN_INTERVAL_DAYS, math.floor(interval_days * factor))


def apply_sm2(state: SM2State, quality: int) -> SM2State:
    """Apply a classic SM-2 update to the given state.

    quality: 0-5

    Rules:
    - if q < 3: repetitions = 0, intervalDays = 1, EF unchanged
    - else:
        EF' = EF + (0.1 - (5-q)*(0.08 + (5-q)*0.02)), clamped to >= 1.3
        if repetitions == 0: intervalDays = 1
        if repetitions == 1: intervalDays = 6
        else: intervalDays = round(repetitions * EF')
        repetitions += 1
    """
    if isinstance(quality, bool) or not isinstance(quality, int) or quality < 0 or quality > 5:
        raise InvalidInput(f"quality must be an integer between 0 and 5, got {quality!r}")

    if quality < SM2_PASS_QUALITY:
        return SM2State(
            ease_factor=state.ease_factor,
            repetitions=0,
            interval_days=MIN_INTERVAL_DAYS,
        )

    ef_prime = adjust_ease_factor(state.ease_factor, quality, center=5)
    interval_prime = base_interval(state.repetitions, ef_prime)

    return SM2State(
        ease_factor=ef_prime,
        repetitions=state.repetitions + 1,
        interval_days=interval_prime,
    )


def apply_scaled_review(state: SM2State, quality: int, interval_scale: float) -> SM2State:
    """Apply a three-level review: ease always recomputed, repetitions always advance.

    quality: 0 (hard), 1 (medium) or 2 (easy)

    Difficulty shrinks the interval instead of resetting progress.
    """
    ef_prime = adjust_ease_factor(state.ease_factor, quality, center=3)
    interval_prime = scale_interval(base_interval(state.repetitions, ef_prime), interval_scale)

    return SM2State(
        ease_factor=ef_prime,
        repetitions=state.repetitions + 1,
        interval_days=interval_prime,
    )
