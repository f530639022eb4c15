from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from aura.models.deck import Deck


class CardCategory(str, Enum):
    UNSEEN = "unseen"
    LEARNING = "learning"
    TO_REVIEW = "to_review"
    MASTERED = "mastered"


class CardCounts(BaseModel):
    total: int = 0
    mastered: int = 0
    learning: int = 0
    to_review: int = 0
    unseen: int = 0


class ScopeStats(BaseModel):
    counts: CardCounts
    progress: int  # 0-100, weighted


class DeckStats(ScopeStats):
    deck: Deck


class StatisticsData(BaseModel):
    global_: ScopeStats = Field(alias="global")
    decks: list[DeckStats]

    model_config = {"populate_by_name": True}


class DeckSortKey(str, Enum):
    PROGRESS_ASC = "progress_asc"
    PROGRESS_DESC = "progress_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
