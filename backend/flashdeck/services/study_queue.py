"""Select which cards to present in a study sitting."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from flashdeck.models import CardProgress, StudyPreferences, StudyQueue, StudyQueueCard
from flashdeck.srs.time import is_due, utc_datetime_to_iso_z


def next_due_at(progress: Iterable[CardProgress], now: datetime) -> str | None:
    """Earliest dueAt strictly after ``now``, or None if there is none."""
    upcoming = [record.due_at() for record in progress if not is_due(record.dueAt, now)]
    if not upcoming:
        return None
    return utc_datetime_to_iso_z(min(upcoming))


def build_study_queue(
    deck_id: str,
    card_ids: Iterable[str],
    progress: Iterable[CardProgress],
    preferences: StudyPreferences,
    now: datetime,
) -> StudyQueue:
    """Build the study queue for a deck.

    Cards without a progress record are new and keep deck order. Cards whose
    due date has passed are due and are ordered earliest-due first. Each group
    is capped by the daily preferences; new cards come first in the queue.

    Args:
        deck_id: Deck being studied
        card_ids: All card IDs in the deck, in deck order
        progress: The user's progress records for the deck
        preferences: Daily caps for new and due cards
        now: Current time

    Returns:
        The capped queue with counts before and after capping
    """
    card_ids = list(card_ids)
    known = set(card_ids)
    by_card = {record.cardId: record for record in progress if record.cardId in known}

    new_cards: list[StudyQueueCard] = []
    due_records: list[CardProgress] = []
    for card_id in card_ids:
        record = by_card.get(card_id)
        if record is None:
            new_cards.append(StudyQueueCard(cardId=card_id, isNew=True))
        elif is_due(record.dueAt, now):
            due_records.append(record)

    due_records.sort(key=lambda record: record.due_at())
    due_cards = [
        StudyQueueCard(
            cardId=record.cardId,
            isNew=False,
            dueAt=record.dueAt,
            easeFactor=record.easeFactor,
            interval=record.interval,
            repetitions=record.repetitions,
        )
        for record in due_records
    ]

    limited_new = new_cards[: preferences.newCardsPerDay]
    limited_due = due_cards[: preferences.reviewsPerDay]
    cards = limited_new + limited_due

    return StudyQueue(
        deckId=deck_id,
        totalCardCount=len(card_ids),
        newCardCount=len(new_cards),
        limitedNewCardCount=len(limited_new),
        dueCardCount=len(due_cards),
        limitedDueCardCount=len(limited_due),
        cards=cards,
        nextDueAt=None if cards else next_due_at(by_card.values(), now),
    )
