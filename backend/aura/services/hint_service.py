"""
Progressive hints for written quiz questions.

Stateless: the caller tracks which hint types were revealed for the current
question and passes them back in. Hints come out in HINT_ORDER and each one
costs HINT_QUALITY_PENALTY on the verdict recorded for the answer.
"""
from __future__ import annotations

from collections.abc import Callable, Collection

from aura.models.flashcard import Flashcard, Quality
from aura.models.hint import Hint, HintType
from aura.services.sm2 import coerce_quality
from aura.services.text import mask_term

HINT_ORDER: tuple[HintType, ...] = (
    HintType.FIRST_LETTER,
    HintType.WORD_LENGTH,
    HintType.CONTEXT_SENTENCE,
)

MAX_HINTS = len(HINT_ORDER)

HINT_QUALITY_PENALTY = 1


def _first_letter_hint(card: Flashcard) -> Hint:
    letter = card.term[:1].upper()
    return Hint(type=HintType.FIRST_LETTER, content=f'The word starts with "{letter}"')


def _word_length_hint(card: Flashcard) -> Hint:
    n = len(card.term)
    return Hint(
        type=HintType.WORD_LENGTH,
        content=f"The word has {n} letter{'' if n == 1 else 's'}",
    )


def _context_sentence_hint(card: Flashcard) -> Hint:
    masked = mask_term(card.context, card.term) if card.context else None
    if masked is None:
        # No usable context: reveal the first half of the definition.
        half = card.definition[: (len(card.definition) + 1) // 2].rstrip()
        masked = f"{half}…"
    return Hint(type=HintType.CONTEXT_SENTENCE, content=masked)


_GENERATORS: dict[HintType, Callable[[Flashcard], Hint]] = {
    HintType.FIRST_LETTER: _first_letter_hint,
    HintType.WORD_LENGTH: _word_length_hint,
    HintType.CONTEXT_SENTENCE: _context_sentence_hint,
}


def get_next_hint(card: Flashcard, used: Collection[HintType]) -> Hint | None:
    """Next unrevealed hint in HINT_ORDER, or None once all are used."""
    for hint_type in HINT_ORDER:
        if hint_type not in used:
            return _GENERATORS[hint_type](card)
    return None


def apply_hint_penalty(base_quality: int, hints_used: int) -> Quality:
    """
    Lower a verdict by one step per hint, snapped down to {1, 3, 5}.

    apply_hint_penalty(5, 2) == 3; apply_hint_penalty(5, 10) == 1.
    """
    base = coerce_quality(base_quality)
    if hints_used <= 0:
        return base

    penalized = int(base) - hints_used * HINT_QUALITY_PENALTY
    if penalized >= Quality.EASY:
        return Quality.EASY
    if penalized >= Quality.CORRECT:
        return Quality.CORRECT
    return Quality.DIFFICULT
