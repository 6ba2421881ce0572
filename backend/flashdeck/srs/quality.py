"""Quality scales: map a reviewer's answer to the numbers the scheduler uses.

Two scales are supported:

- ``three_level``: "hard" / "medium" / "easy" labels. Every review advances
  the item; difficulty only shrinks the next interval.
- ``six_level``: raw SM-2 quality 0-5. Qualities below 3 are a failed recall
  and reset the item's progress.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Union

from .errors import InvalidInput
from .sm2 import SM2_PASS_QUALITY, SM2State, apply_scaled_review, apply_sm2


Difficulty = Literal["hard", "medium", "easy"]
ScaleKind = Literal["three_level", "six_level"]
ReviewValue = Union[str, int]


@dataclass(frozen=True)
class Grade:
    """A review answer mapped onto a scale.

    Attributes:
        label: The raw answer ("hard", "4", ...)
        quality: Numeric quality fed to the ease-factor formula
        multiplier: Difficulty multiplier for the points award
        passed: False when the answer breaks the streak
        interval_scale: Factor applied to the next interval
    """

    label: str
    quality: int
    multiplier: float
    passed: bool
    interval_scale: float = 1.0


class QualityScale(ABC):
    """Pluggable review scale shared by the scheduler."""

    kind: ScaleKind

    @abstractmethod
    def grade(self, value: ReviewValue) -> Grade:
        """Validate and map a raw review answer. Raises InvalidInput."""

    @abstractmethod
    def advance(self, state: SM2State, grade: Grade) -> SM2State:
        """Return the SM-2 state after a review with ``grade``."""


class ThreeLevelScale(QualityScale):
    kind: ScaleKind = "three_level"

    _GRADES: dict[str, Grade] = {
        "hard": Grade(label="hard", quality=0, multiplier=2.0, passed=False, interval_scale=0.5),
        "medium": Grade(label="medium", quality=1, multiplier=1.5, passed=True, interval_scale=0.75),
        "easy": Grade(label="easy", quality=2, multiplier=1.0, passed=True, interval_scale=1.0),
    }

    def grade(self, value: ReviewValue) -> Grade:
        if not isinstance(value, str) or value not in self._GRADES:
            raise InvalidInput(f"difficulty must be one of hard, medium, easy; got {value!r}")
        return self._GRADES[value]

    def advance(self, state: SM2State, grade: Grade) -> SM2State:
        return apply_scaled_review(state, grade.quality, grade.interval_scale)


class SixLevelScale(QualityScale):
    kind: ScaleKind = "six_level"

    # Harder successful recalls earn more; failed recalls earn nothing.
    _MULTIPLIERS: dict[int, float] = {3: 2.0, 4: 1.5, 5: 1.0}

    def grade(self, value: ReviewValue) -> Grade:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > 5:
            raise InvalidInput(f"quality must be an integer between 0 and 5, got {value!r}")
        return Grade(
            label=str(value),
            quality=value,
            multiplier=self._MULTIPLIERS.get(value, 0.0),
            passed=value >= SM2_PASS_QUALITY,
        )

    def advance(self, state: SM2State, grade: Grade) -> SM2State:
        return apply_sm2(state, grade.quality)


THREE_LEVEL = ThreeLevelScale()
SIX_LEVEL = SixLevelScale()

_SCALES: dict[str, QualityScale] = {
    THREE_LEVEL.kind: THREE_LEVEL,
    SIX_LEVEL.kind: SIX_LEVEL,
}


def get_scale(kind: ScaleKind | QualityScale) -> QualityScale:
    """Resolve a scale by kind name (scale instances pass through)."""
    if isinstance(kind, QualityScale):
        return kind
    try:
        return _SCALES[kind]
    except KeyError:
        raise InvalidInput(f"Unknown quality scale: {kind!r}") from None
