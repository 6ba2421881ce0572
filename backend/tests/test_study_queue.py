"""Tests for study queue selection."""

from datetime import datetime, timezone

from flashdeck.models import CardProgress, StudyPreferences
from flashdeck.services.study_queue import build_study_queue, next_due_at


NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def _progress(card_id, due_at):
    return CardProgress(userId="user1", deckId="deck1", cardId=card_id, dueAt=due_at, repetitions=2)


def test_new_cards_first_then_due_by_date():
    progress = [
        _progress("c1", "2025-06-14T12:00:00Z"),
        _progress("c2", "2025-06-18T12:00:00Z"),
        _progress("c3", "2025-06-13T12:00:00Z"),
    ]

    queue = build_study_queue(
        "deck1",
        ["c1", "c2", "c3", "c4", "c5"],
        progress,
        StudyPreferences(newCardsPerDay=1, reviewsPerDay=5),
        NOW,
    )

    assert [card.cardId for card in queue.cards] == ["c4", "c3", "c1"]
    assert queue.cards[0].isNew is True
    assert queue.cards[1].isNew is False
    assert queue.cards[1].dueAt == "2025-06-13T12:00:00Z"
    assert queue.totalCardCount == 5
    assert queue.newCardCount == 2
    assert queue.limitedNewCardCount == 1
    assert queue.dueCardCount == 2
    assert queue.limitedDueCardCount == 2
    assert queue.nextDueAt is None


def test_due_cap_keeps_earliest():
    progress = [_progress(f"c{i}", f"2025-06-{10 + i:02d}T00:00:00Z") for i in range(5)]

    queue = build_study_queue(
        "deck1",
        [record.cardId for record in progress],
        progress,
        StudyPreferences(newCardsPerDay=10, reviewsPerDay=2),
        NOW,
    )

    assert [card.cardId for card in queue.cards] == ["c0", "c1"]
    assert queue.dueCardCount == 5


def test_card_due_exactly_now_is_included():
    queue = build_study_queue(
        "deck1",
        ["c1"],
        [_progress("c1", "2025-06-15T12:00:00Z")],
        StudyPreferences(),
        NOW,
    )
    assert [card.cardId for card in queue.cards] == ["c1"]


def test_nothing_due_reports_next_due_at():
    progress = [
        _progress("c1", "2025-06-20T00:00:00Z"),
        _progress("c2", "2025-06-17T08:00:00Z"),
    ]

    queue = build_study_queue("deck1", ["c1", "c2"], progress, StudyPreferences(), NOW)

    assert queue.cards == []
    assert queue.nextDueAt == "2025-06-17T08:00:00Z"


def test_progress_for_cards_outside_deck_is_ignored():
    queue = build_study_queue(
        "deck1",
        ["c1"],
        [_progress("removed", "2025-06-01T00:00:00Z")],
        StudyPreferences(),
        NOW,
    )
    assert [card.cardId for card in queue.cards] == ["c1"]
    assert queue.dueCardCount == 0


def test_next_due_at_none_when_everything_due():
    assert next_due_at([_progress("c1", "2025-06-01T00:00:00Z")], NOW) is None
