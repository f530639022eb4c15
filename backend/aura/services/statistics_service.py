"""
Statistics aggregation.

compute_all() fetches every card, every deck and the deck membership table
once each, groups cards per deck in memory and runs the classifier per scope,
so the cost does not grow with the number of decks.
"""
from __future__ import annotations

import logging
import unicodedata
from collections import defaultdict
from collections.abc import Sequence

from aura.clock import Clock, system_clock
from aura.db.store import FlashcardStore
from aura.models.deck import GLOBAL_DECK_ID
from aura.models.flashcard import Flashcard
from aura.models.stats import DeckSortKey, DeckStats, ScopeStats, StatisticsData
from aura.services.card_classifier import classify_cards, compute_progress

logger = logging.getLogger(__name__)


def _scope_stats(cards: Sequence[Flashcard], now: int) -> ScopeStats:
    counts = classify_cards(cards, now)
    return ScopeStats(counts=counts, progress=compute_progress(counts))


class StatisticsService:
    def __init__(self, store: FlashcardStore, clock: Clock = system_clock) -> None:
        self._store = store
        self._clock = clock

    async def get_global_stats(self) -> ScopeStats:
        cards = await self._store.list_flashcards(GLOBAL_DECK_ID)
        return _scope_stats(cards, self._clock())

    async def get_deck_stats(self, deck_id: str) -> ScopeStats:
        if deck_id == GLOBAL_DECK_ID:
            return await self.get_global_stats()
        cards = await self._store.list_flashcards(deck_id)
        return _scope_stats(cards, self._clock())

    async def compute_all(self) -> StatisticsData:
        all_cards = await self._store.list_flashcards(GLOBAL_DECK_ID)
        decks = await self._store.list_decks()
        memberships = await self._store.list_deck_memberships()

        by_id = {card.id: card for card in all_cards}
        deck_cards: dict[str, list[Flashcard]] = defaultdict(list)
        for link in memberships:
            card = by_id.get(link.flashcard_id)
            if card is not None:
                deck_cards[link.deck_id].append(card)

        now = self._clock()
        global_stats = _scope_stats(all_cards, now)
        deck_stats = []
        for deck in decks:
            scope = _scope_stats(deck_cards.get(deck.id, []), now)
            deck_stats.append(
                DeckStats(deck=deck, counts=scope.counts, progress=scope.progress)
            )
        logger.debug(
            "Statistics: %d cards across %d decks, global progress %d%%",
            len(all_cards),
            len(decks),
            global_stats.progress,
        )
        return StatisticsData(global_=global_stats, decks=deck_stats)


def _name_key(stats: DeckStats) -> tuple[str, str]:
    """Accent-insensitive, case-insensitive; accents only break ties."""
    folded = stats.deck.name.casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(ch)
    )
    return base, folded


def sort_deck_stats(decks: Sequence[DeckStats], key: DeckSortKey) -> list[DeckStats]:
    """Return a sorted copy; the input is not modified."""
    key = DeckSortKey(key)
    if key is DeckSortKey.PROGRESS_ASC:
        return sorted(decks, key=lambda s: s.progress)
    if key is DeckSortKey.PROGRESS_DESC:
        return sorted(decks, key=lambda s: s.progress, reverse=True)
    if key is DeckSortKey.NAME_ASC:
        return sorted(decks, key=_name_key)
    return sorted(decks, key=_name_key, reverse=True)
