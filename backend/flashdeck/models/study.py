"""Study queue and deck statistics models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StudyPreferences(BaseModel):
    """Daily caps applied when building a study queue."""

    newCardsPerDay: int = Field(15, ge=0, description="Maximum never-reviewed cards per queue")
    reviewsPerDay: int = Field(20, ge=0, description="Maximum due cards per queue")


class StudyQueueCard(BaseModel):
    cardId: str
    isNew: bool
    isDue: bool = True
    dueAt: str | None = None
    easeFactor: float | None = None
    interval: int | None = None
    repetitions: int | None = None


class StudyQueue(BaseModel):
    """Cards to present now: new cards first, then due cards by due date."""

    deckId: str
    totalCardCount: int
    newCardCount: int
    limitedNewCardCount: int
    dueCardCount: int
    limitedDueCardCount: int
    cards: list[StudyQueueCard]
    nextDueAt: str | None = Field(
        None,
        description="Earliest upcoming dueAt when nothing is due now",
    )


class ReviewsByDateEntry(BaseModel):
    total: int = 0
    easy: int = 0
    medium: int = 0
    hard: int = 0


class DeckStats(BaseModel):
    """Aggregate progress for one user's deck."""

    deckId: str
    totalCards: int
    cardsWithProgress: int
    newCards: int
    dueCards: int
    averageStreak: float
    averageEaseFactor: float
    averageResponseTime: float
    totalPoints: int
    reviewsByDate: dict[str, ReviewsByDateEntry]
    masteryLevels: dict[str, int]
    masteryScore: int
