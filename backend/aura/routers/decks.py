import aiosqlite
from fastapi import APIRouter, Depends, HTTPException

from aura.db.sqlite import (
    CardOrder,
    add_flashcard_to_deck,
    create_deck,
    delete_deck,
    get_db,
    get_deck,
    get_flashcard,
    list_decks,
    list_flashcards,
    remove_flashcard_from_deck,
)
from aura.models.deck import GLOBAL_DECK_ID, Deck, DeckCreate, DeckList
from aura.models.flashcard import FlashcardList

router = APIRouter()


@router.post("/", response_model=Deck, status_code=201)
async def create(body: DeckCreate, db: aiosqlite.Connection = Depends(get_db)):
    return await create_deck(db, body)


@router.get("/", response_model=DeckList)
async def list_all(db: aiosqlite.Connection = Depends(get_db)):
    items = await list_decks(db)
    return DeckList(items=items, total=len(items))


@router.get("/{deck_id}", response_model=Deck)
async def get_one(deck_id: str, db: aiosqlite.Connection = Depends(get_db)):
    deck = await get_deck(db, deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.delete("/{deck_id}", status_code=204)
async def remove(deck_id: str, db: aiosqlite.Connection = Depends(get_db)) -> None:
    if deck_id == GLOBAL_DECK_ID:
        raise HTTPException(status_code=400, detail="The global deck cannot be deleted")
    deleted = await delete_deck(db, deck_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Deck not found")


@router.get("/{deck_id}/cards", response_model=FlashcardList)
async def list_cards(deck_id: str, db: aiosqlite.Connection = Depends(get_db)):
    if not await get_deck(db, deck_id):
        raise HTTPException(status_code=404, detail="Deck not found")
    items = await list_flashcards(db, deck_id, order=CardOrder.OLDEST)
    return FlashcardList(items=items, total=len(items))


@router.put("/{deck_id}/cards/{card_id}", status_code=204)
async def add_card(
    deck_id: str, card_id: str, db: aiosqlite.Connection = Depends(get_db)
) -> None:
    if not await get_deck(db, deck_id):
        raise HTTPException(status_code=404, detail="Deck not found")
    if not await get_flashcard(db, card_id):
        raise HTTPException(status_code=404, detail="Flashcard not found")
    await add_flashcard_to_deck(db, deck_id, card_id)


@router.delete("/{deck_id}/cards/{card_id}", status_code=204)
async def remove_card(
    deck_id: str, card_id: str, db: aiosqlite.Connection = Depends(get_db)
) -> None:
    removed = await remove_flashcard_from_deck(db, deck_id, card_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Flashcard is not in this deck")
