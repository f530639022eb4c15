from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from aura.models.flashcard import Quality


class HintType(str, Enum):
    FIRST_LETTER = "first_letter"
    WORD_LENGTH = "word_length"
    CONTEXT_SENTENCE = "context_sentence"


class Hint(BaseModel):
    type: HintType
    content: str


class HintRequest(BaseModel):
    flashcard_id: str
    used: list[HintType] = []


class PenaltyRequest(BaseModel):
    base_quality: Quality
    hints_used: int


class PenaltyResult(BaseModel):
    quality: Quality
