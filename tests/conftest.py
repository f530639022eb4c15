"""
Shared fixtures.

Store-backed tests run against a real SQLite file in tmp_path; sampling tests
pass a seeded random.Random so shuffles are reproducible.
"""
import random

import aiosqlite
import pytest

from aura.clock import MS_PER_DAY, fixed_clock
from aura.db.sqlite import SCHEMA_SQL
from aura.db.store import SQLiteFlashcardStore
from aura.models.flashcard import Flashcard

NOW = 1_700_000_000_000


def make_card(card_id: str, **overrides) -> Flashcard:
    fields = {
        "id": card_id,
        "term": f"term-{card_id}",
        "definition": f"definition of {card_id}",
        "context": None,
        "repetitions": 0,
        "interval": 1,
        "ease_factor": 2.5,
        "last_reviewed_at": None,
        "next_review_at": None,
        "created_at": NOW - 10 * MS_PER_DAY,
        "updated_at": NOW - 10 * MS_PER_DAY,
    }
    fields.update(overrides)
    return Flashcard(**fields)


async def insert_card(db: aiosqlite.Connection, card: Flashcard, deck_ids=()) -> None:
    """Seed a card with arbitrary scheduling state, bypassing the CRUD layer."""
    row = card.model_dump()
    columns = ", ".join(row)
    placeholders = ", ".join("?" for _ in row)
    await db.execute(
        f"INSERT INTO flashcards ({columns}) VALUES ({placeholders})",
        list(row.values()),
    )
    for deck_id in deck_ids:
        await db.execute(
            "INSERT INTO deck_flashcards (deck_id, flashcard_id, added_at) VALUES (?, ?, ?)",
            (deck_id, card.id, NOW),
        )
    await db.commit()


async def insert_deck(db: aiosqlite.Connection, deck_id: str, name: str) -> None:
    await db.execute(
        "INSERT INTO decks (id, name, color, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
        (deck_id, name, "#6366F1", NOW, NOW),
    )
    await db.commit()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
async def db(tmp_path):
    async with aiosqlite.connect(tmp_path / "test.db") as conn:
        conn.row_factory = aiosqlite.Row
        await conn.executescript(SCHEMA_SQL)
        await conn.commit()
        yield conn


@pytest.fixture
def store(db):
    return SQLiteFlashcardStore(db)
