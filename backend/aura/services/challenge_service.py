"""
Challenge session selection.

A challenge is a size-bounded practice set biased toward the weakest cards.
Each card falls into the first matching bucket:

    hard  - ease factor below HARD_EASE_FACTOR
    new   - never scheduled
    due   - next review has passed
    other - everything else

and the session is filled bucket by bucket up to cumulative caps of 40% (hard),
70% (due), 90% (new) and 100% (other) of the card limit. An exhausted bucket
leaves its share to the buckets after it.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from aura.clock import Clock, system_clock
from aura.db.sqlite import CardOrder
from aura.db.store import FlashcardStore
from aura.models.flashcard import Flashcard
from aura.models.quiz import ChallengeConfig
from aura.services.shuffle import shuffled

logger = logging.getLogger(__name__)

HARD_EASE_FACTOR = 2.0

# Cumulative percentage of the card limit each bucket may fill, in fill order.
BUCKET_CAPS = (
    ("hard", 40),
    ("due", 70),
    ("new", 90),
    ("other", 100),
)


def _bucket_for(card: Flashcard, now: int) -> str:
    if card.ease_factor < HARD_EASE_FACTOR:
        return "hard"
    if card.next_review_at is None:
        return "new"
    if card.next_review_at <= now:
        return "due"
    return "other"


def select_challenge_cards(
    config: ChallengeConfig,
    pool: Sequence[Flashcard],
    now: int,
    rng: random.Random | None = None,
) -> list[Flashcard]:
    limit = config.card_limit
    # First occurrence wins when a card appears twice in the pool.
    unique: dict[str, Flashcard] = {}
    for card in pool:
        unique.setdefault(card.id, card)
    pool = list(unique.values())
    if not pool or limit <= 0:
        return []
    if len(pool) <= limit:
        return shuffled(pool, rng)

    buckets: dict[str, list[Flashcard]] = {name: [] for name, _ in BUCKET_CAPS}
    for card in pool:
        buckets[_bucket_for(card, now)].append(card)

    selected: list[Flashcard] = []
    used_ids: set[str] = set()
    for name, percent in BUCKET_CAPS:
        cap = min(limit, -(-limit * percent // 100))
        for card in shuffled(buckets[name], rng):
            if len(selected) >= cap:
                break
            if card.id in used_ids:
                continue
            selected.append(card)
            used_ids.add(card.id)

    logger.debug(
        "Challenge %s: %s -> %d cards",
        config.deck_id,
        {name: len(cards) for name, cards in buckets.items()},
        len(selected),
    )
    return shuffled(selected, rng)


class ChallengeService:
    def __init__(
        self,
        store: FlashcardStore,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._rng = rng

    async def select(self, config: ChallengeConfig) -> list[Flashcard]:
        pool = await self._store.list_flashcards(config.deck_id, order=CardOrder.CHALLENGE)
        return select_challenge_cards(config, pool, self._clock(), self._rng)
