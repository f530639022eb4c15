"""
Tests for statistics aggregation and deck sorting.
"""
import pytest

from aura.clock import MS_PER_DAY
from aura.models.deck import Deck
from aura.models.stats import CardCounts, DeckSortKey, DeckStats
from aura.services.statistics_service import StatisticsService, sort_deck_stats

from conftest import NOW, insert_card, insert_deck, make_card

REVIEWED = NOW - MS_PER_DAY


def _mastered(card_id):
    return make_card(card_id, repetitions=4, interval=30, ease_factor=2.5,
                     last_reviewed_at=REVIEWED, next_review_at=NOW + 29 * MS_PER_DAY)


def _learning(card_id):
    return make_card(card_id, repetitions=1, last_reviewed_at=REVIEWED,
                     next_review_at=NOW + MS_PER_DAY)


class CountingStore:
    """Wraps a store and counts calls per method."""

    def __init__(self, inner):
        self._inner = inner
        self.calls: dict[str, int] = {}

    def __getattr__(self, name):
        target = getattr(self._inner, name)

        async def wrapper(*args, **kwargs):
            self.calls[name] = self.calls.get(name, 0) + 1
            return await target(*args, **kwargs)

        return wrapper


@pytest.fixture
async def seeded(db):
    await insert_deck(db, "d-a", "Adjectives")
    await insert_deck(db, "d-b", "Verbs")
    await insert_deck(db, "d-empty", "Empty")
    await insert_card(db, _mastered("m1"), deck_ids=["d-a"])
    await insert_card(db, _learning("l1"), deck_ids=["d-a", "d-b"])
    await insert_card(db, make_card("u1"), deck_ids=["d-b"])
    await insert_card(db, make_card("loose"))


class TestComputeAll:
    async def test_global_and_per_deck(self, store, clock, seeded):
        data = await StatisticsService(store, clock).compute_all()

        assert data.global_.counts == CardCounts(total=4, mastered=1, learning=1, unseen=2)
        assert data.global_.progress == 38  # (1 + 0.5) / 4

        by_id = {s.deck.id: s for s in data.decks}
        assert by_id["d-a"].counts == CardCounts(total=2, mastered=1, learning=1)
        assert by_id["d-a"].progress == 75
        assert by_id["d-b"].counts == CardCounts(total=2, learning=1, unseen=1)
        assert by_id["d-b"].progress == 25
        assert by_id["d-empty"].counts == CardCounts()
        assert by_id["d-empty"].progress == 0

    async def test_one_fetch_per_table(self, store, clock, seeded):
        counting = CountingStore(store)

        await StatisticsService(counting, clock).compute_all()

        assert counting.calls == {
            "list_flashcards": 1,
            "list_decks": 1,
            "list_deck_memberships": 1,
        }

    async def test_serialises_global_key(self, store, clock, seeded):
        data = await StatisticsService(store, clock).compute_all()

        assert "global" in data.model_dump(by_alias=True)


class TestScopedStats:
    async def test_deck_stats(self, store, clock, seeded):
        stats = await StatisticsService(store, clock).get_deck_stats("d-a")

        assert stats.counts.total == 2
        assert stats.progress == 75

    async def test_global_sentinel_delegates(self, store, clock, seeded):
        service = StatisticsService(store, clock)

        assert await service.get_deck_stats("global-all-cards") == await service.get_global_stats()


def _deck_stats(name, progress):
    deck = Deck(id=name, name=name, created_at=NOW, updated_at=NOW)
    return DeckStats(deck=deck, counts=CardCounts(), progress=progress)


class TestSortDeckStats:
    @pytest.fixture
    def decks(self):
        return [_deck_stats("beta", 50), _deck_stats("Alpha", 10), _deck_stats("gamma", 90)]

    @pytest.mark.parametrize(
        "key,expected",
        [
            (DeckSortKey.PROGRESS_ASC, ["Alpha", "beta", "gamma"]),
            (DeckSortKey.PROGRESS_DESC, ["gamma", "beta", "Alpha"]),
            (DeckSortKey.NAME_ASC, ["Alpha", "beta", "gamma"]),
            (DeckSortKey.NAME_DESC, ["gamma", "beta", "Alpha"]),
        ],
    )
    def test_orders(self, decks, key, expected):
        assert [s.deck.name for s in sort_deck_stats(decks, key)] == expected

    def test_does_not_mutate(self, decks):
        before = [s.deck.name for s in decks]

        sort_deck_stats(decks, DeckSortKey.PROGRESS_DESC)

        assert [s.deck.name for s in decks] == before

    @pytest.mark.parametrize(
        "key,expected",
        [
            (DeckSortKey.NAME_ASC, ["apple", "Émile", "eta", "Zebra"]),
            (DeckSortKey.NAME_DESC, ["Zebra", "eta", "Émile", "apple"]),
        ],
    )
    def test_accented_names_sort_with_their_base_letter(self, key, expected):
        decks = [_deck_stats(n, 0) for n in ["Zebra", "Émile", "apple", "eta"]]

        assert [s.deck.name for s in sort_deck_stats(decks, key)] == expected
