"""
Review coordinator.

All spaced-repetition writes flow through ReviewService.apply_review; nothing
else (quiz, challenge, CRUD) touches a card's scheduling fields. The service
also serves the due-queue and practice-pool queries the UI builds sessions from.
"""
from __future__ import annotations

import logging
import random

from aura.clock import Clock, system_clock
from aura.db.sqlite import CardOrder
from aura.db.store import FlashcardStore
from aura.models.flashcard import Flashcard, ReviewInput
from aura.services import sm2
from aura.services.shuffle import shuffled

logger = logging.getLogger(__name__)

DEFAULT_QUIZ_CARD_COUNT = 10


class ReviewService:
    def __init__(
        self,
        store: FlashcardStore,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._rng = rng

    async def apply_review(self, review: ReviewInput) -> Flashcard | None:
        """
        Run SM-2 for one verdict and persist the new schedule.

        Returns the updated card, or None when the id is unknown (no write).
        Concurrent reviews of the same card are last-write-wins; callers
        serialise submissions per card.
        """
        card = await self._store.get_flashcard(review.flashcard_id)
        if card is None:
            logger.warning("Review skipped: flashcard %s not found", review.flashcard_id)
            return None

        now = self._clock()
        result = sm2.compute(
            review.quality,
            card.repetitions,
            card.interval,
            card.ease_factor,
            now,
        )
        updated = await self._store.update_schedule(card.id, result, reviewed_at=now)
        logger.info(
            "Reviewed %s (source=%s, quality=%d): reps=%d interval=%dd ef=%.2f",
            card.id,
            review.source.value,
            int(review.quality),
            result.repetitions,
            result.interval,
            result.ease_factor,
        )
        if updated is None:
            # Deleted between read and write; report the computed snapshot.
            return card.model_copy(
                update={
                    "repetitions": result.repetitions,
                    "interval": result.interval,
                    "ease_factor": result.ease_factor,
                    "last_reviewed_at": now,
                    "next_review_at": result.next_review_at,
                    "updated_at": now,
                }
            )
        return updated

    async def get_due_flashcards(self, deck_id: str) -> list[Flashcard]:
        """Never-scheduled cards first, then by next review, then by age."""
        return await self._store.list_flashcards(
            deck_id, order=CardOrder.DUE, due_at=self._clock()
        )

    async def get_all_flashcards_for_deck(self, deck_id: str) -> list[Flashcard]:
        """Every card in the deck, least recently reviewed first."""
        return await self._store.list_flashcards(deck_id, order=CardOrder.LEAST_RECENT)

    async def get_quiz_flashcards(
        self, deck_id: str, count: int = DEFAULT_QUIZ_CARD_COUNT
    ) -> list[Flashcard]:
        """Up to `count` cards, due ones first, padded with not-yet-due ones."""
        cards = await self._store.list_flashcards(deck_id, order=CardOrder.NEWEST)
        if not cards or count <= 0:
            return []

        now = self._clock()
        due = [c for c in cards if c.next_review_at is None or c.next_review_at <= now]
        later = [c for c in cards if c.next_review_at is not None and c.next_review_at > now]

        selected = shuffled(due, self._rng)[:count]
        if len(selected) < count:
            selected.extend(shuffled(later, self._rng)[: count - len(selected)])

        logger.debug(
            "Quiz pool for %s: %d due, %d later, %d selected",
            deck_id,
            len(due),
            len(later),
            len(selected),
        )
        return shuffled(selected, self._rng)
