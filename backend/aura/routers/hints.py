import aiosqlite
from fastapi import APIRouter, Depends, HTTPException

from aura.db.sqlite import get_db, get_flashcard
from aura.models.hint import Hint, HintRequest, PenaltyRequest, PenaltyResult
from aura.services.hint_service import apply_hint_penalty, get_next_hint

router = APIRouter()


@router.post("/next", response_model=Hint | None)
async def next_hint(
    body: HintRequest,
    db: aiosqlite.Connection = Depends(get_db),
) -> Hint | None:
    """Next hint for the card, or null once every hint has been revealed."""
    card = await get_flashcard(db, body.flashcard_id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return get_next_hint(card, body.used)


@router.post("/penalty", response_model=PenaltyResult)
async def penalty(body: PenaltyRequest) -> PenaltyResult:
    return PenaltyResult(quality=apply_hint_penalty(body.base_quality, body.hints_used))
