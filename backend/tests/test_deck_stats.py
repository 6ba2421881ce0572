"""Tests for deck statistics."""

from datetime import datetime, timezone

import pytest

from flashdeck.models import CardProgress
from flashdeck.services.deck_stats import compute_deck_stats


NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def records():
    return [
        CardProgress(
            userId="user1", deckId="deck1", cardId="c1",
            dueAt="2025-06-15T20:00:00Z", lastReviewedAt="2025-06-14T12:00:00Z",
            lastDifficulty="easy", lastResponseTimeMs=4000,
            streak=4, easeFactor=2.5, repetitions=4, totalPoints=60, masteryLevel="mastered",
        ),
        CardProgress(
            userId="user1", deckId="deck1", cardId="c2",
            dueAt="2025-06-20T00:00:00Z", lastReviewedAt="2025-06-14T09:00:00Z",
            lastDifficulty="hard", lastResponseTimeMs=2000,
            streak=0, easeFactor=2.18, repetitions=2, totalPoints=28, masteryLevel="learning",
        ),
        CardProgress(
            userId="user1", deckId="deck1", cardId="c3",
            dueAt="2025-04-05T00:00:00Z", lastReviewedAt="2025-04-01T00:00:00Z",
            lastDifficulty="medium", lastResponseTimeMs=None,
            streak=2, easeFactor=1.6, repetitions=3, totalPoints=12, masteryLevel="struggling",
        ),
    ]


def test_counts(records):
    stats = compute_deck_stats("deck1", 5, records, NOW)

    assert stats.totalCards == 5
    assert stats.cardsWithProgress == 3
    assert stats.newCards == 2
    # c1 is due later today; c3 is overdue
    assert stats.dueCards == 2
    assert stats.totalPoints == 100


def test_averages(records):
    stats = compute_deck_stats("deck1", 5, records, NOW)

    assert stats.averageStreak == pytest.approx(2.0)
    assert stats.averageEaseFactor == pytest.approx((2.5 + 2.18 + 1.6) / 3)
    assert stats.averageResponseTime == pytest.approx(3000)


def test_reviews_by_date_covers_last_30_days(records):
    stats = compute_deck_stats("deck1", 5, records, NOW)

    assert list(stats.reviewsByDate) == ["2025-06-14"]
    day = stats.reviewsByDate["2025-06-14"]
    assert (day.total, day.easy, day.medium, day.hard) == (2, 1, 0, 1)


def test_mastery(records):
    stats = compute_deck_stats("deck1", 5, records, NOW)

    assert stats.masteryLevels == {"mastered": 1, "learning": 1, "struggling": 1, "new": 0}
    assert stats.masteryScore == 40


def test_empty_deck():
    stats = compute_deck_stats("deck1", 3, [], NOW)

    assert stats.newCards == 3
    assert stats.dueCards == 0
    assert stats.averageEaseFactor == 2.5
    assert stats.averageStreak == 0.0
    assert stats.averageResponseTime == 0.0
    assert stats.reviewsByDate == {}
    assert stats.masteryScore == 0


def test_zero_response_time_counts_toward_average():
    records = [
        CardProgress(userId="user1", deckId="deck1", cardId="c1", lastResponseTimeMs=0),
        CardProgress(userId="user1", deckId="deck1", cardId="c2", lastResponseTimeMs=2000),
        CardProgress(userId="user1", deckId="deck1", cardId="c3", lastResponseTimeMs=None),
    ]

    stats = compute_deck_stats("deck1", 3, records, NOW)

    assert stats.averageResponseTime == pytest.approx(1000)
