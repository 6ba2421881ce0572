"""Deterministic mastery classification for tracked items.

Mastery is derived from the scheduling state after a review; it is a label for
presentation and progress summaries and never feeds back into scheduling.
"""

from __future__ import annotations

from typing import Literal, Mapping

from .sm2 import round_half_up


MasteryLevel = Literal["new", "learning", "mastered", "struggling"]

MASTERED_EASE_FACTOR = 2.5
MASTERED_STREAK = 3
LEARNING_EASE_FACTOR = 2.0

# Weight of each level in the overall mastery percentage.
MASTERY_WEIGHTS: dict[MasteryLevel, float] = {
    "mastered": 1.0,
    "learning": 0.66,
    "struggling": 0.33,
    "new": 0.0,
}


def classify_mastery(repetitions: int, ease_factor: float, streak: int) -> MasteryLevel:
    """Classify an item from its scheduling state.

    Rules:
    - No counted repetitions → "new"
    - Ease factor at least 2.5 and a streak of 3 or more → "mastered"
    - Ease factor at least 2.0 → "learning"
    - Otherwise → "struggling"
    """
    if repetitions <= 0:
        return "new"

    if ease_factor >= MASTERED_EASE_FACTOR and streak >= MASTERED_STREAK:
        return "mastered"

    if ease_factor >= LEARNING_EASE_FACTOR:
        return "learning"

    return "struggling"


def mastery_score(counts: Mapping[str, int], total_cards: int) -> int:
    """Weighted mastery percentage (0-100) over ``total_cards`` items."""
    if total_cards <= 0:
        return 0
    weighted = sum(MASTERY_WEIGHTS.get(level, 0.0) * count for level, count in counts.items())
    return round_half_up(weighted / total_cards * 100)
