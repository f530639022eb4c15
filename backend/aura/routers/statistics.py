import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Query

from aura.db.sqlite import get_db, get_deck
from aura.db.store import SQLiteFlashcardStore
from aura.models.stats import DeckSortKey, ScopeStats, StatisticsData
from aura.services.statistics_service import StatisticsService, sort_deck_stats

router = APIRouter()


@router.get("/", response_model=StatisticsData)
async def all_statistics(
    sort: DeckSortKey = Query(default=DeckSortKey.NAME_ASC),
    db: aiosqlite.Connection = Depends(get_db),
) -> StatisticsData:
    data = await StatisticsService(SQLiteFlashcardStore(db)).compute_all()
    return data.model_copy(update={"decks": sort_deck_stats(data.decks, sort)})


@router.get("/global", response_model=ScopeStats)
async def global_statistics(db: aiosqlite.Connection = Depends(get_db)) -> ScopeStats:
    return await StatisticsService(SQLiteFlashcardStore(db)).get_global_stats()


@router.get("/decks/{deck_id}", response_model=ScopeStats)
async def deck_statistics(
    deck_id: str, db: aiosqlite.Connection = Depends(get_db)
) -> ScopeStats:
    if not await get_deck(db, deck_id):
        raise HTTPException(status_code=404, detail="Deck not found")
    return await StatisticsService(SQLiteFlashcardStore(db)).get_deck_stats(deck_id)
