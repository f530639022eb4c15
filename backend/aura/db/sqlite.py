import logging
import random
import uuid
from enum import Enum
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from aura.clock import system_clock
from aura.config import settings
from aura.models.deck import (
    DEFAULT_DECK_COLORS,
    GLOBAL_DECK_ID,
    Deck,
    DeckCreate,
    DeckMembership,
)
from aura.models.flashcard import (
    Flashcard,
    FlashcardCreate,
    FlashcardUpdate,
    SM2Result,
)

logger = logging.getLogger(__name__)

_db_path: Path | None = None

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS decks (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    description TEXT,
    color       TEXT NOT NULL DEFAULT '#6366F1',
    created_at  INTEGER NOT NULL,
    updated_at  INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS flashcards (
    id               TEXT PRIMARY KEY,
    term             TEXT NOT NULL,
    definition       TEXT NOT NULL,
    context          TEXT,
    repetitions      INTEGER NOT NULL DEFAULT 0,
    interval         INTEGER NOT NULL DEFAULT 1,
    ease_factor      REAL NOT NULL DEFAULT 2.5,
    last_reviewed_at INTEGER,
    next_review_at   INTEGER,
    created_at       INTEGER NOT NULL,
    updated_at       INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_flashcards_term ON flashcards(term);
CREATE INDEX IF NOT EXISTS idx_flashcards_next_review ON flashcards(next_review_at);

CREATE TABLE IF NOT EXISTS deck_flashcards (
    deck_id      TEXT NOT NULL REFERENCES decks(id) ON DELETE CASCADE,
    flashcard_id TEXT NOT NULL REFERENCES flashcards(id) ON DELETE CASCADE,
    added_at     INTEGER NOT NULL,
    PRIMARY KEY (deck_id, flashcard_id)
);
CREATE INDEX IF NOT EXISTS idx_deck_flashcards_deck ON deck_flashcards(deck_id);
CREATE INDEX IF NOT EXISTS idx_deck_flashcards_card ON deck_flashcards(flashcard_id);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
INSERT OR IGNORE INTO schema_version(version) VALUES (1);
"""


class CardOrder(str, Enum):
    """ORDER BY clauses for multi-card fetches. SQLite sorts NULL first on ASC."""

    DUE = "next_review_at ASC, created_at ASC"
    LEAST_RECENT = "last_reviewed_at ASC, created_at ASC"
    CHALLENGE = "ease_factor ASC, next_review_at ASC, created_at DESC"
    NEWEST = "created_at DESC"
    OLDEST = "created_at ASC"


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()
    logger.info("SQLite schema ready at %s", _db_path)


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON")
        yield db


def _now() -> int:
    return system_clock()


def _is_global(deck_id: str | None) -> bool:
    return deck_id is None or deck_id == GLOBAL_DECK_ID


# --- Flashcards ---


def _row_to_flashcard(row: aiosqlite.Row) -> Flashcard:
    return Flashcard(**dict(row))


async def get_flashcard(db: aiosqlite.Connection, card_id: str) -> Flashcard | None:
    cursor = await db.execute("SELECT * FROM flashcards WHERE id = ?", (card_id,))
    row = await cursor.fetchone()
    return _row_to_flashcard(row) if row else None


async def list_flashcards(
    db: aiosqlite.Connection,
    deck_id: str | None = None,
    order: CardOrder = CardOrder.OLDEST,
    due_at: int | None = None,
) -> list[Flashcard]:
    """
    Fetch cards in one deck (or every card for the global sentinel).

    When `due_at` is given only cards with next_review_at NULL or <= due_at
    are returned.
    """
    where: list[str] = []
    params: list = []
    if _is_global(deck_id):
        sql = "SELECT f.* FROM flashcards f"
    else:
        sql = (
            "SELECT f.* FROM flashcards f "
            "INNER JOIN deck_flashcards df ON f.id = df.flashcard_id"
        )
        where.append("df.deck_id = ?")
        params.append(deck_id)
    if due_at is not None:
        where.append("(f.next_review_at IS NULL OR f.next_review_at <= ?)")
        params.append(due_at)
    if where:
        sql += " WHERE " + " AND ".join(where)
    order_clause = ", ".join(f"f.{part.strip()}" for part in order.value.split(","))
    sql += f" ORDER BY {order_clause}"

    cursor = await db.execute(sql, params)  # noqa: S608
    rows = await cursor.fetchall()
    return [_row_to_flashcard(r) for r in rows]


async def search_flashcards(db: aiosqlite.Connection, query: str) -> list[Flashcard]:
    pattern = f"%{query}%"
    cursor = await db.execute(
        "SELECT * FROM flashcards WHERE term LIKE ? OR definition LIKE ? ORDER BY term",
        (pattern, pattern),
    )
    rows = await cursor.fetchall()
    return [_row_to_flashcard(r) for r in rows]


async def create_flashcard(
    db: aiosqlite.Connection, body: FlashcardCreate
) -> Flashcard:
    card_id = str(uuid.uuid4())
    now = _now()
    await db.execute(
        """INSERT INTO flashcards
           (id, term, definition, context, repetitions, interval, ease_factor,
            last_reviewed_at, next_review_at, created_at, updated_at)
           VALUES (?, ?, ?, ?, 0, 1, 2.5, NULL, NULL, ?, ?)""",
        (card_id, body.term, body.definition, body.context, now, now),
    )
    for deck_id in body.deck_ids:
        if not _is_global(deck_id):
            await db.execute(
                "INSERT OR IGNORE INTO deck_flashcards (deck_id, flashcard_id, added_at) "
                "VALUES (?, ?, ?)",
                (deck_id, card_id, now),
            )
    await db.commit()
    return await get_flashcard(db, card_id)  # type: ignore[return-value]


async def update_flashcard_content(
    db: aiosqlite.Connection,
    card_id: str,
    update: FlashcardUpdate,
) -> Flashcard | None:
    """Edit term, definition or context. Never touches scheduling fields."""
    card = await get_flashcard(db, card_id)
    if not card:
        return None
    fields = update.model_dump(exclude_unset=True)
    new_term = fields.get("term") or card.term
    new_def = fields.get("definition") or card.definition
    new_ctx = fields["context"] if "context" in fields else card.context
    await db.execute(
        "UPDATE flashcards SET term = ?, definition = ?, context = ?, updated_at = ? WHERE id = ?",
        (new_term, new_def, new_ctx, _now(), card_id),
    )
    await db.commit()
    return await get_flashcard(db, card_id)


async def update_flashcard_schedule(
    db: aiosqlite.Connection,
    card_id: str,
    result: SM2Result,
    reviewed_at: int,
) -> Flashcard | None:
    """The only statement that writes scheduling fields."""
    await db.execute(
        """UPDATE flashcards
           SET repetitions = ?, interval = ?, ease_factor = ?,
               last_reviewed_at = ?, next_review_at = ?, updated_at = ?
           WHERE id = ?""",
        (
            result.repetitions,
            result.interval,
            result.ease_factor,
            reviewed_at,
            result.next_review_at,
            reviewed_at,
            card_id,
        ),
    )
    await db.commit()
    return await get_flashcard(db, card_id)


async def delete_flashcard(db: aiosqlite.Connection, card_id: str) -> bool:
    cursor = await db.execute("DELETE FROM flashcards WHERE id = ?", (card_id,))
    await db.commit()
    return (cursor.rowcount or 0) > 0


# --- Decks ---

_DECK_SELECT = """
SELECT d.*, COUNT(df.flashcard_id) AS card_count
FROM decks d
LEFT JOIN deck_flashcards df ON d.id = df.deck_id
"""


def _row_to_deck(row: aiosqlite.Row) -> Deck:
    return Deck(**dict(row))


async def create_deck(db: aiosqlite.Connection, body: DeckCreate) -> Deck:
    deck_id = str(uuid.uuid4())
    now = _now()
    color = body.color or random.choice(DEFAULT_DECK_COLORS)
    await db.execute(
        """INSERT INTO decks (id, name, description, color, created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (deck_id, body.name, body.description, color, now, now),
    )
    await db.commit()
    return await get_deck(db, deck_id)  # type: ignore[return-value]


async def get_deck(db: aiosqlite.Connection, deck_id: str) -> Deck | None:
    if deck_id == GLOBAL_DECK_ID:
        return await get_global_deck(db)
    cursor = await db.execute(
        _DECK_SELECT + "WHERE d.id = ? GROUP BY d.id", (deck_id,)
    )
    row = await cursor.fetchone()
    return _row_to_deck(row) if row else None


async def list_decks(db: aiosqlite.Connection) -> list[Deck]:
    cursor = await db.execute(_DECK_SELECT + "GROUP BY d.id ORDER BY d.name ASC")
    rows = await cursor.fetchall()
    return [_row_to_deck(r) for r in rows]


async def get_global_deck(db: aiosqlite.Connection) -> Deck:
    """Build the virtual "All Cards" deck; it has no row of its own."""
    cursor = await db.execute("SELECT COUNT(*) FROM flashcards")
    row = await cursor.fetchone()
    now = _now()
    return Deck(
        id=GLOBAL_DECK_ID,
        name="All Cards",
        description="All your flashcards in one place",
        color=DEFAULT_DECK_COLORS[0],
        created_at=now,
        updated_at=now,
        card_count=row[0] if row else 0,
    )


async def delete_deck(db: aiosqlite.Connection, deck_id: str) -> bool:
    cursor = await db.execute("DELETE FROM decks WHERE id = ?", (deck_id,))
    await db.commit()
    return (cursor.rowcount or 0) > 0


async def add_flashcard_to_deck(
    db: aiosqlite.Connection, deck_id: str, card_id: str
) -> None:
    if _is_global(deck_id):
        return
    await db.execute(
        "INSERT OR IGNORE INTO deck_flashcards (deck_id, flashcard_id, added_at) VALUES (?, ?, ?)",
        (deck_id, card_id, _now()),
    )
    await db.commit()


async def remove_flashcard_from_deck(
    db: aiosqlite.Connection, deck_id: str, card_id: str
) -> bool:
    cursor = await db.execute(
        "DELETE FROM deck_flashcards WHERE deck_id = ? AND flashcard_id = ?",
        (deck_id, card_id),
    )
    await db.commit()
    return (cursor.rowcount or 0) > 0


async def list_deck_memberships(db: aiosqlite.Connection) -> list[DeckMembership]:
    cursor = await db.execute("SELECT deck_id, flashcard_id FROM deck_flashcards")
    rows = await cursor.fetchall()
    return [DeckMembership(deck_id=r[0], flashcard_id=r[1]) for r in rows]
