"""Aggregate statistics over a user's progress in one deck."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from flashdeck.models import CardProgress, DeckStats, ReviewsByDateEntry
from flashdeck.srs.mastery import MASTERY_WEIGHTS, mastery_score
from flashdeck.srs.sm2 import INITIAL_EASE_FACTOR
from flashdeck.srs.time import as_utc, date_key, end_of_day, parse_iso_z

REVIEW_HISTORY_DAYS = 30

_LABELS = ("easy", "medium", "hard")


def compute_deck_stats(
    deck_id: str,
    total_cards: int,
    progress: Iterable[CardProgress],
    now: datetime,
) -> DeckStats:
    """Summarize a deck's progress.

    ``dueCards`` counts cards due by the end of the current UTC day.
    ``reviewsByDate`` buckets each card's most recent review from the last
    30 days by calendar day.
    """
    records = list(progress)
    count = len(records)
    cutoff = end_of_day(now)
    history_start = as_utc(now) - timedelta(days=REVIEW_HISTORY_DAYS)

    due_cards = sum(1 for record in records if record.due_at() <= cutoff)

    response_times = [
        record.lastResponseTimeMs for record in records if record.lastResponseTimeMs is not None
    ]

    reviews_by_date: dict[str, ReviewsByDateEntry] = {}
    for record in records:
        if not record.lastReviewedAt:
            continue
        reviewed_at = parse_iso_z(record.lastReviewedAt)
        if reviewed_at < history_start:
            continue
        entry = reviews_by_date.setdefault(date_key(reviewed_at), ReviewsByDateEntry())
        entry.total += 1
        if record.lastDifficulty in _LABELS:
            setattr(entry, record.lastDifficulty, getattr(entry, record.lastDifficulty) + 1)

    mastery_levels = {level: 0 for level in MASTERY_WEIGHTS}
    for record in records:
        mastery_levels[record.masteryLevel] += 1

    return DeckStats(
        deckId=deck_id,
        totalCards=total_cards,
        cardsWithProgress=count,
        newCards=max(0, total_cards - count),
        dueCards=due_cards,
        averageStreak=sum(record.streak for record in records) / count if count else 0.0,
        averageEaseFactor=(
            sum(record.easeFactor for record in records) / count if count else INITIAL_EASE_FACTOR
        ),
        averageResponseTime=sum(response_times) / len(response_times) if response_times else 0.0,
        totalPoints=sum(record.totalPoints for record in records),
        reviewsByDate=dict(sorted(reviews_by_date.items())),
        masteryLevels=mastery_levels,
        masteryScore=mastery_score(mastery_levels, total_cards),
    )
