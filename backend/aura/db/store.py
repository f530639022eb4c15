"""
Record-store handle handed to the engine services at construction.

The services only see this interface; SQLiteFlashcardStore binds it to one
aiosqlite connection. Any deck_id argument equal to GLOBAL_DECK_ID means
"no deck filter".
"""
from __future__ import annotations

from typing import Protocol

import aiosqlite

from aura.db import sqlite
from aura.db.sqlite import CardOrder
from aura.models.deck import Deck, DeckMembership
from aura.models.flashcard import Flashcard, SM2Result


class FlashcardStore(Protocol):
    async def get_flashcard(self, card_id: str) -> Flashcard | None: ...

    async def list_flashcards(
        self,
        deck_id: str | None = None,
        order: CardOrder = CardOrder.OLDEST,
        due_at: int | None = None,
    ) -> list[Flashcard]: ...

    async def update_schedule(
        self, card_id: str, result: SM2Result, reviewed_at: int
    ) -> Flashcard | None: ...

    async def list_decks(self) -> list[Deck]: ...

    async def list_deck_memberships(self) -> list[DeckMembership]: ...


class SQLiteFlashcardStore:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def get_flashcard(self, card_id: str) -> Flashcard | None:
        return await sqlite.get_flashcard(self._db, card_id)

    async def list_flashcards(
        self,
        deck_id: str | None = None,
        order: CardOrder = CardOrder.OLDEST,
        due_at: int | None = None,
    ) -> list[Flashcard]:
        return await sqlite.list_flashcards(self._db, deck_id, order, due_at)

    async def update_schedule(
        self, card_id: str, result: SM2Result, reviewed_at: int
    ) -> Flashcard | None:
        if not isinstance(result, SM2Result):
            raise TypeError("update_schedule requires an SM2Result from sm2.compute")
        return await sqlite.update_flashcard_schedule(
            self._db, card_id, result, reviewed_at
        )

    async def list_decks(self) -> list[Deck]:
        return await sqlite.list_decks(self._db)

    async def list_deck_memberships(self) -> list[DeckMembership]:
        return await sqlite.list_deck_memberships(self._db)
