"""Review submission: read state, schedule, persist.

The scheduler itself is pure; this service is the caller that owns the
read-compute-write cycle around it and the side totals (user points and
daily streak, study session counters).
"""

from __future__ import annotations

import logging
from typing import Iterable

from flashdeck.models import (
    CardProgress,
    DeckStats,
    ReviewOutcome,
    ReviewRequest,
    SessionSummary,
    StudyPreferences,
    StudyQueue,
)
from flashdeck.repositories import (
    ProgressRepository,
    UserProgressRepository,
    get_progress_repository,
    get_user_progress_repository,
)
from flashdeck.services.deck_stats import compute_deck_stats
from flashdeck.services.study_queue import build_study_queue
from flashdeck.sessions import SessionStore, get_session_store
from flashdeck.srs.errors import SchedulingError
from flashdeck.srs.quality import ScaleKind, get_scale
from flashdeck.srs.scheduler import compute_review
from flashdeck.srs.time import Clock, as_utc, utc_datetime_to_iso_z, utc_now

logger = logging.getLogger(__name__)


class ReviewService:
    """Apply reviews to persisted card progress."""

    def __init__(
        self,
        progress_repo: ProgressRepository | None = None,
        user_progress_repo: UserProgressRepository | None = None,
        session_store: SessionStore | None = None,
        clock: Clock = utc_now,
        default_scale: ScaleKind | None = None,
    ):
        self._progress_repo = progress_repo or get_progress_repository()
        self._user_progress_repo = user_progress_repo or get_user_progress_repository()
        self._session_store = session_store or get_session_store()
        self._clock = clock
        if default_scale is None:
            from flashdeck.config import get_settings

            default_scale = get_settings().default_scale
        self._default_scale = get_scale(default_scale).kind

    def submit_review(
        self,
        user_id: str,
        deck_id: str,
        card_id: str,
        request: ReviewRequest,
        session_id: str | None = None,
        scale: ScaleKind | None = None,
    ) -> ReviewOutcome:
        """Apply one review to a card and persist the new progress.

        A card keeps the scale it was first reviewed on; ``scale`` only
        applies to a card's first review.

        Args:
            user_id: Reviewing user
            deck_id: Deck the card belongs to
            card_id: Reviewed card
            request: Difficulty/quality and response time
            session_id: Live study session to count the review against, if any
            scale: Quality scale for a first review (defaults to settings)

        Returns:
            The updated progress, points earned and user totals

        Raises:
            InvalidInput: If the review is outside the scale's domain
            InvalidState: If the stored progress violates an invariant
            SessionNotFoundError: If session_id is not a live session for this deck
        """
        now = as_utc(self._clock())
        event = request.to_event()

        with self._progress_repo.lock(user_id, card_id):
            existing = self._progress_repo.find(user_id, card_id)
            if existing is None:
                now_iso = utc_datetime_to_iso_z(now)
                record = CardProgress(
                    userId=user_id,
                    deckId=deck_id,
                    cardId=card_id,
                    scale=get_scale(scale or self._default_scale).kind,
                    dueAt=now_iso,
                    createdAt=now_iso,
                    updatedAt=now_iso,
                )
                state = None
            else:
                record = existing
                state = existing.to_state()

            try:
                result = compute_review(event, state, now, record.scale)
            except SchedulingError as e:
                logger.warning(
                    f"Review rejected: user={user_id}, deck={deck_id}, card={card_id}, error={e}"
                )
                raise

            # An ended session must reject the review before anything is written
            summary = None
            if session_id is not None:
                session = self._session_store.record_review(user_id, deck_id, session_id, result.points)
                summary = SessionSummary(
                    id=session.session_id,
                    cardsStudied=session.cards_studied,
                    pointsEarned=session.points_earned,
                )

            try:
                updated = self._progress_repo.save(record.apply_review(event, result))
            except Exception:
                if session_id is not None:
                    self._session_store.revert_review(user_id, deck_id, session_id, result.points)
                raise

        user_progress = self._user_progress_repo.record_study(user_id, result.points, now.date())

        logger.info(
            f"Review applied: user={user_id}, deck={deck_id}, card={card_id}, "
            f"scale={record.scale}, difficulty={event.difficulty}, points={result.points}, "
            f"interval={result.interval}, new_due_at={updated.dueAt}"
        )

        return ReviewOutcome(
            progress=updated,
            pointsEarned=result.points,
            nextReview=updated.dueAt,
            masteryLevel=updated.masteryLevel,
            streak=updated.streak,
            userProgress=user_progress,
            session=summary,
        )

    def get_deck_progress(self, user_id: str, deck_id: str) -> list[CardProgress]:
        return self._progress_repo.list_by_deck(user_id, deck_id)

    def get_study_queue(
        self,
        user_id: str,
        deck_id: str,
        card_ids: Iterable[str],
        preferences: StudyPreferences | None = None,
    ) -> StudyQueue:
        """Return the capped queue of new and due cards for a deck."""
        if preferences is None:
            from flashdeck.config import get_settings

            settings = get_settings()
            preferences = StudyPreferences(
                newCardsPerDay=settings.new_cards_per_day,
                reviewsPerDay=settings.reviews_per_day,
            )
        return build_study_queue(
            deck_id,
            card_ids,
            self._progress_repo.list_by_deck(user_id, deck_id),
            preferences,
            self._clock(),
        )

    def get_deck_stats(self, user_id: str, deck_id: str, total_cards: int) -> DeckStats:
        return compute_deck_stats(
            deck_id,
            total_cards,
            self._progress_repo.list_by_deck(user_id, deck_id),
            self._clock(),
        )

    def reset_deck(self, user_id: str, deck_id: str) -> int:
        """Forget all of a user's progress in a deck. Returns the number of cards reset."""
        return self._progress_repo.delete_by_deck(user_id, deck_id)
