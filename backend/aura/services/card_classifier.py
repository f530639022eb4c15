"""
Card classification.

Every card belongs to exactly one category, derived from its persisted SM-2
fields and the current time (never stored):

1. unseen    - never reviewed (last_reviewed_at is None)
2. mastered  - repetitions, ease factor and interval all at or above threshold
3. to_review - overdue, or repetitions reset to 0 by a failed review
4. learning  - everything else
"""
from __future__ import annotations

from collections.abc import Iterable

from aura.models.flashcard import Flashcard
from aura.models.stats import CardCategory, CardCounts

CLASSIFICATION_THRESHOLDS = {
    "mastered_repetitions": 3,
    "mastered_ease_factor": 2.0,
    "mastered_interval": 21,
}

_COUNT_FIELD = {
    CardCategory.MASTERED: "mastered",
    CardCategory.LEARNING: "learning",
    CardCategory.TO_REVIEW: "to_review",
    CardCategory.UNSEEN: "unseen",
}


def classify_card(card: Flashcard, now: int) -> CardCategory:
    if card.last_reviewed_at is None:
        return CardCategory.UNSEEN

    t = CLASSIFICATION_THRESHOLDS
    if (
        card.repetitions >= t["mastered_repetitions"]
        and card.ease_factor >= t["mastered_ease_factor"]
        and card.interval >= t["mastered_interval"]
    ):
        return CardCategory.MASTERED

    is_overdue = card.next_review_at is not None and card.next_review_at <= now
    is_failed = card.repetitions == 0
    if is_overdue or is_failed:
        return CardCategory.TO_REVIEW

    return CardCategory.LEARNING


def classify_cards(cards: Iterable[Flashcard], now: int) -> CardCounts:
    """Tally categories in a single pass."""
    tally = dict.fromkeys(_COUNT_FIELD.values(), 0)
    total = 0
    for card in cards:
        tally[_COUNT_FIELD[classify_card(card, now)]] += 1
        total += 1
    return CardCounts(total=total, **tally)


def compute_progress(counts: CardCounts) -> int:
    """0-100; mastered cards weigh 1, learning cards 0.5."""
    if counts.total == 0:
        return 0
    weighted = counts.mastered + counts.learning * 0.5
    return int(weighted / counts.total * 100 + 0.5)
