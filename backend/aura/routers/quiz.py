"""
Quiz router.

Endpoints:
  POST /quiz/generate   build a mixed question set for a deck
  POST /quiz/answer     grade an answer and, by default, record the review
"""
from __future__ import annotations

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException

from aura.config import settings
from aura.db.sqlite import get_db, get_flashcard
from aura.db.store import SQLiteFlashcardStore
from aura.models.flashcard import ReviewInput, ReviewSource
from aura.models.quiz import (
    QuizAnswerRequest,
    QuizAnswerResult,
    QuizRequest,
    QuizResponse,
)
from aura.services.quiz_engine import (
    bind_question,
    generate_quiz_questions,
    grade_answer,
)
from aura.services.review_service import ReviewService

router = APIRouter()


@router.post("/generate", response_model=QuizResponse)
async def generate(
    body: QuizRequest,
    db: aiosqlite.Connection = Depends(get_db),
) -> QuizResponse:
    count = body.count or settings.default_quiz_count
    pool = await ReviewService(SQLiteFlashcardStore(db)).get_quiz_flashcards(
        body.deck_id, count
    )
    return QuizResponse(questions=generate_quiz_questions(pool, count))


@router.post("/answer", response_model=QuizAnswerResult)
async def answer(
    body: QuizAnswerRequest,
    db: aiosqlite.Connection = Depends(get_db),
) -> QuizAnswerResult:
    card = await get_flashcard(db, body.question.flashcard.id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    # Grade against the stored card, not the answer key the client sent back.
    question = bind_question(body.question, card)
    result = grade_answer(question, body.user_answer, body.elapsed_ms, body.hints_used)
    if body.record_review:
        await ReviewService(SQLiteFlashcardStore(db)).apply_review(
            ReviewInput(
                flashcard_id=result.flashcard_id,
                quality=result.quality,
                source=ReviewSource.QUIZ,
            )
        )
    return result
