from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Quality(IntEnum):
    """Review verdicts accepted by the scheduler."""

    DIFFICULT = 1
    CORRECT = 3
    EASY = 5


class ReviewSource(str, Enum):
    FLASHCARD = "flashcard"
    QUIZ = "quiz"
    CHALLENGE = "challenge"


class SM2Result(BaseModel):
    """New schedule state. Produced by aura.services.sm2.compute only."""

    model_config = ConfigDict(frozen=True)

    repetitions: int = Field(ge=0)
    interval: int = Field(ge=1)
    ease_factor: float = Field(ge=1.3)
    next_review_at: int  # epoch ms


class Flashcard(BaseModel):
    # Frozen: scheduling fields change only through FlashcardStore.update_schedule
    model_config = ConfigDict(frozen=True)

    id: str
    term: str
    definition: str
    context: str | None = None
    repetitions: int = 0       # consecutive successful reviews
    interval: int = 1          # days until next review
    ease_factor: float = 2.5
    last_reviewed_at: int | None = None  # epoch ms; None = never reviewed
    next_review_at: int | None = None    # epoch ms; None = due immediately
    created_at: int
    updated_at: int


class FlashcardList(BaseModel):
    items: list[Flashcard]
    total: int


class FlashcardCreate(BaseModel):
    term: str = Field(min_length=1)
    definition: str = Field(min_length=1)
    context: str | None = None
    deck_ids: list[str] = []


class FlashcardUpdate(BaseModel):
    term: str | None = None
    definition: str | None = None
    context: str | None = None


class ReviewInput(BaseModel):
    flashcard_id: str
    quality: Quality
    source: ReviewSource = ReviewSource.FLASHCARD


class ReviewRequest(BaseModel):
    quality: Quality
    source: ReviewSource = ReviewSource.FLASHCARD
