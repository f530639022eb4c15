from __future__ import annotations

from pydantic import BaseModel, Field

# Virtual deck id meaning "all cards, no deck filter".
GLOBAL_DECK_ID = "global-all-cards"

DEFAULT_DECK_COLORS = (
    "#6366F1",
    "#8B5CF6",
    "#EC4899",
    "#F59E0B",
    "#EF4444",
    "#10B981",
    "#3B82F6",
    "#F97316",
    "#14B8A6",
    "#A855F7",
)


class Deck(BaseModel):
    id: str
    name: str
    description: str | None = None
    color: str = DEFAULT_DECK_COLORS[0]
    created_at: int
    updated_at: int
    card_count: int = 0  # computed, not stored


class DeckList(BaseModel):
    items: list[Deck]
    total: int


class DeckCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    color: str | None = None


class DeckMembership(BaseModel):
    deck_id: str
    flashcard_id: str
