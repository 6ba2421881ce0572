"""Progress records and review request/response models."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from flashdeck.srs.mastery import MasteryLevel, classify_mastery
from flashdeck.srs.quality import ScaleKind
from flashdeck.srs.scheduler import ReviewEvent, ReviewResult, SchedulingState
from flashdeck.srs.time import days_between, parse_iso_z, utc_datetime_to_iso_z, utc_now_iso


class ReviewRequest(BaseModel):
    """A review submitted for one card."""

    difficulty: int | str = Field(
        ...,
        description='"hard", "medium" or "easy" (three-level) or an integer quality 0-5 (six-level)',
    )
    responseTime: int = Field(0, ge=0, description="Time taken to answer, in milliseconds")

    def to_event(self) -> ReviewEvent:
        return ReviewEvent(difficulty=self.difficulty, response_time_ms=self.responseTime)


class CardProgress(BaseModel):
    """Persisted scheduling state of one card for one user."""

    userId: str = Field(..., description="Owner user ID")
    deckId: str = Field(..., description="Parent deck ID")
    cardId: str = Field(..., description="Reviewed card ID")
    scale: ScaleKind = Field("three_level", description="Quality scale the card is reviewed on")

    easeFactor: float = Field(2.5, description="Ease factor (min 1.3)")
    interval: int = Field(1, description="Days until the next review")
    repetitions: int = Field(0, description="Counted reviews")
    streak: int = Field(0, description="Consecutive passing reviews")
    totalPoints: int = Field(0, description="Points earned on this card")
    dueAt: str = Field(default_factory=utc_now_iso, description="Next due timestamp (UTC ISO Z)")
    lastReviewedAt: str | None = Field(None, description="Last review timestamp (UTC ISO Z)")

    lastResponseTimeMs: int | None = Field(None, description="Response time of the last review")
    lastDifficulty: str | None = Field(None, description="Answer given in the last review")
    masteryLevel: MasteryLevel = Field("new", description="Derived mastery label")

    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    def to_state(self) -> SchedulingState:
        return SchedulingState(
            ease_factor=self.easeFactor,
            repetitions=self.repetitions,
            interval=self.interval,
            streak=self.streak,
            total_points=self.totalPoints,
            due_date=parse_iso_z(self.dueAt),
            last_reviewed=parse_iso_z(self.lastReviewedAt) if self.lastReviewedAt else None,
        )

    def due_at(self) -> datetime:
        return parse_iso_z(self.dueAt)

    def apply_review(self, event: ReviewEvent, result: ReviewResult) -> "CardProgress":
        """Return a copy of this record updated with a computed review."""
        state = result.apply_to(self.to_state())
        reviewed_at = utc_datetime_to_iso_z(result.last_reviewed)
        return self.model_copy(
            update={
                "easeFactor": state.ease_factor,
                "interval": state.interval,
                "repetitions": state.repetitions,
                "streak": state.streak,
                "totalPoints": state.total_points,
                "dueAt": utc_datetime_to_iso_z(result.due_date),
                "lastReviewedAt": reviewed_at,
                "lastResponseTimeMs": event.response_time_ms,
                "lastDifficulty": str(event.difficulty),
                "masteryLevel": classify_mastery(state.repetitions, state.ease_factor, state.streak),
                "updatedAt": reviewed_at,
            }
        )


class UserProgress(BaseModel):
    """Per-user totals across all decks."""

    userId: str
    points: int = Field(0, ge=0, description="Total points earned")
    streak: int = Field(0, ge=0, description="Consecutive days with at least one review")
    lastStudyDate: str | None = Field(None, description="Last study day (YYYY-MM-DD, UTC)")

    def record_study(self, points: int, today: date) -> "UserProgress":
        """Add points and advance the daily streak for a study on ``today``.

        First study → 1; next calendar day → +1; same day → unchanged;
        a gap of more than one day → back to 1.
        """
        if self.lastStudyDate is None:
            streak = 1
        else:
            gap = days_between(date.fromisoformat(self.lastStudyDate), today)
            if gap <= 0:
                streak = max(1, self.streak)
            elif gap == 1:
                streak = self.streak + 1
            else:
                streak = 1

        return self.model_copy(
            update={
                "points": self.points + points,
                "streak": streak,
                "lastStudyDate": today.isoformat(),
            }
        )


class SessionSummary(BaseModel):
    id: str
    cardsStudied: int
    pointsEarned: int


class ReviewOutcome(BaseModel):
    """Result of submitting one review."""

    progress: CardProgress
    pointsEarned: int
    nextReview: str = Field(..., description="Next due timestamp (UTC ISO Z)")
    masteryLevel: MasteryLevel
    streak: int
    userProgress: UserProgress
    session: SessionSummary | None = None
