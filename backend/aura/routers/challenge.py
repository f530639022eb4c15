import aiosqlite
from fastapi import APIRouter, Depends

from aura.db.sqlite import get_db
from aura.db.store import SQLiteFlashcardStore
from aura.models.flashcard import FlashcardList
from aura.models.quiz import ChallengeConfig
from aura.services.challenge_service import ChallengeService

router = APIRouter()


@router.post("/", response_model=FlashcardList)
async def start_challenge(
    body: ChallengeConfig,
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    """Pick a prioritised, size-bounded card set for a challenge session."""
    items = await ChallengeService(SQLiteFlashcardStore(db)).select(body)
    return FlashcardList(items=items, total=len(items))
