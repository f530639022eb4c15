"""
Quiz engine.

Builds multiple-choice and fill-in-the-blank questions from a card pool and
grades answers. Question types alternate by position so every quiz of two or
more questions mixes both.
"""
from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Sequence

from aura.models.flashcard import Flashcard, Quality
from aura.models.quiz import (
    FillInBlankQuestion,
    MultipleChoiceQuestion,
    QuizAnswerResult,
    QuizQuestion,
)
from aura.services.hint_service import apply_hint_penalty
from aura.services.shuffle import shuffled
from aura.services.text import BLANK, mask_term

logger = logging.getLogger(__name__)

MCQ_OPTION_COUNT = 4
DEFAULT_QUESTION_COUNT = 10

# Correct answers slower than this earn CORRECT instead of EASY.
SLOW_ANSWER_MS = 10_000


def generate_quiz_questions(
    pool: Sequence[Flashcard],
    count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    if not pool or count <= 0:
        return []

    selected = shuffled(pool, rng)[: min(count, len(pool))]
    questions: list[QuizQuestion] = []
    for index, card in enumerate(selected):
        if index % 2 == 0:
            questions.append(_multiple_choice(card, pool, rng))
        else:
            questions.append(_fill_in_the_blank(card))
    logger.debug("Generated %d quiz questions from a pool of %d", len(questions), len(pool))
    return questions


def _multiple_choice(
    card: Flashcard,
    pool: Sequence[Flashcard],
    rng: random.Random | None,
) -> MultipleChoiceQuestion:
    distractors: list[str] = []
    for other in shuffled(pool, rng):
        if len(distractors) == MCQ_OPTION_COUNT - 1:
            break
        if other.id == card.id:
            continue
        if other.definition == card.definition or other.definition in distractors:
            continue
        distractors.append(other.definition)

    while len(distractors) < MCQ_OPTION_COUNT - 1:
        distractors.append(f'Not "{card.definition}"')

    return MultipleChoiceQuestion(
        id=str(uuid.uuid4()),
        flashcard=card,
        question=f'What is the definition of "{card.term}"?',
        correct_answer=card.definition,
        options=shuffled([card.definition, *distractors], rng),
    )


def _fill_in_the_blank(card: Flashcard) -> FillInBlankQuestion:
    sentence = mask_term(card.context, card.term) if card.context else None
    if sentence is None:
        sentence = f'The word {BLANK} means "{card.definition}".'

    return FillInBlankQuestion(
        id=str(uuid.uuid4()),
        flashcard=card,
        question="Fill in the blank:",
        correct_answer=card.term.lower(),
        sentence_with_blank=sentence,
    )


def bind_question(question: QuizQuestion, card: Flashcard) -> QuizQuestion:
    """Rebuild the answer key of a question from the stored card."""
    if question.flashcard.id != card.id:
        raise ValueError(f"Question {question.id} is not about card {card.id}")
    if isinstance(question, MultipleChoiceQuestion):
        correct_answer = card.definition
    else:
        correct_answer = card.term.lower()
    return question.model_copy(update={"flashcard": card, "correct_answer": correct_answer})


def evaluate_answer(user_answer: str, correct_answer: str) -> bool:
    """Trimmed, case-insensitive equality."""
    return user_answer.strip().lower() == correct_answer.strip().lower()


def grade_answer(
    question: QuizQuestion,
    user_answer: str,
    elapsed_ms: int = 0,
    hints_used: int = 0,
) -> QuizAnswerResult:
    """Grade one answer and derive the review verdict it should record."""
    if isinstance(question, MultipleChoiceQuestion):
        is_correct = user_answer == question.correct_answer
    else:
        is_correct = evaluate_answer(user_answer, question.correct_answer)

    if not is_correct:
        quality = Quality.DIFFICULT
    elif elapsed_ms > SLOW_ANSWER_MS:
        quality = Quality.CORRECT
    else:
        quality = Quality.EASY

    return QuizAnswerResult(
        question_id=question.id,
        flashcard_id=question.flashcard.id,
        is_correct=is_correct,
        quality=apply_hint_penalty(quality, hints_used),
        user_answer=user_answer.strip(),
        correct_answer=question.correct_answer,
    )
