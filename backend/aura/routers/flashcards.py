import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Query

from aura.db.sqlite import (
    create_flashcard,
    delete_flashcard,
    get_db,
    get_deck,
    get_flashcard,
    search_flashcards,
    update_flashcard_content,
)
from aura.models.flashcard import (
    Flashcard,
    FlashcardCreate,
    FlashcardList,
    FlashcardUpdate,
)

router = APIRouter()


@router.post("/", response_model=Flashcard, status_code=201)
async def create(body: FlashcardCreate, db: aiosqlite.Connection = Depends(get_db)):
    for deck_id in body.deck_ids:
        if not await get_deck(db, deck_id):
            raise HTTPException(status_code=404, detail=f"Deck not found: {deck_id}")
    return await create_flashcard(db, body)


@router.get("/search", response_model=FlashcardList)
async def search(
    q: str = Query(min_length=1),
    db: aiosqlite.Connection = Depends(get_db),
):
    items = await search_flashcards(db, q)
    return FlashcardList(items=items, total=len(items))


@router.get("/{card_id}", response_model=Flashcard)
async def get_card(card_id: str, db: aiosqlite.Connection = Depends(get_db)):
    card = await get_flashcard(db, card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return card


@router.patch("/{card_id}", response_model=Flashcard)
async def edit_card(
    card_id: str,
    body: FlashcardUpdate,
    db: aiosqlite.Connection = Depends(get_db),
):
    updated = await update_flashcard_content(db, card_id, body)
    if not updated:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return updated


@router.delete("/{card_id}", status_code=204)
async def remove_card(card_id: str, db: aiosqlite.Connection = Depends(get_db)) -> None:
    deleted = await delete_flashcard(db, card_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Flashcard not found")
