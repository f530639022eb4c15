from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from aura.config import settings
from aura.models.flashcard import Flashcard, Quality


class MultipleChoiceQuestion(BaseModel):
    id: str
    type: Literal["multiple_choice"] = "multiple_choice"
    flashcard: Flashcard
    question: str
    correct_answer: str
    options: list[str]


class FillInBlankQuestion(BaseModel):
    id: str
    type: Literal["fill_in_the_blank"] = "fill_in_the_blank"
    flashcard: Flashcard
    question: str
    correct_answer: str
    sentence_with_blank: str


QuizQuestion = Annotated[
    Union[MultipleChoiceQuestion, FillInBlankQuestion],
    Field(discriminator="type"),
]


class QuizRequest(BaseModel):
    deck_id: str
    count: int | None = Field(default=None, ge=1, le=100)


class QuizResponse(BaseModel):
    questions: list[QuizQuestion]


class QuizAnswerRequest(BaseModel):
    question: QuizQuestion
    user_answer: str
    elapsed_ms: int = Field(default=0, ge=0)
    hints_used: int = Field(default=0, ge=0)
    record_review: bool = True


class QuizAnswerResult(BaseModel):
    question_id: str
    flashcard_id: str
    is_correct: bool
    quality: Quality
    user_answer: str
    correct_answer: str


class ChallengeConfig(BaseModel):
    deck_id: str
    card_limit: int = Field(default_factory=lambda: settings.default_challenge_card_limit, ge=1)
