"""
Spaced-repetition router.

Endpoints:
  GET  /review/due              cards due now, never-scheduled first
  GET  /review/all              every card, least recently reviewed first
  GET  /review/quiz-cards       due-first card mix for a quiz session
  POST /review/{id}             submit a verdict (1, 3 or 5) and run SM-2
"""
from __future__ import annotations

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Query

from aura.config import settings
from aura.db.sqlite import get_db
from aura.db.store import SQLiteFlashcardStore
from aura.models.deck import GLOBAL_DECK_ID
from aura.models.flashcard import Flashcard, FlashcardList, ReviewInput, ReviewRequest
from aura.services.review_service import ReviewService

router = APIRouter()


def _service(db: aiosqlite.Connection) -> ReviewService:
    return ReviewService(SQLiteFlashcardStore(db))


@router.get("/due", response_model=FlashcardList)
async def get_due(
    deck_id: str = Query(default=GLOBAL_DECK_ID),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    items = await _service(db).get_due_flashcards(deck_id)
    return FlashcardList(items=items, total=len(items))


@router.get("/all", response_model=FlashcardList)
async def get_all(
    deck_id: str = Query(default=GLOBAL_DECK_ID),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    items = await _service(db).get_all_flashcards_for_deck(deck_id)
    return FlashcardList(items=items, total=len(items))


@router.get("/quiz-cards", response_model=FlashcardList)
async def get_quiz_cards(
    deck_id: str = Query(default=GLOBAL_DECK_ID),
    count: int | None = Query(default=None, ge=1, le=100),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    items = await _service(db).get_quiz_flashcards(
        deck_id, count or settings.default_quiz_count
    )
    return FlashcardList(items=items, total=len(items))


@router.post("/{card_id}", response_model=Flashcard)
async def review_card(
    card_id: str,
    body: ReviewRequest,
    db: aiosqlite.Connection = Depends(get_db),
) -> Flashcard:
    updated = await _service(db).apply_review(
        ReviewInput(flashcard_id=card_id, quality=body.quality, source=body.source)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return updated
