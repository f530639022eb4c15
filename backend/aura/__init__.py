import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aura.config import settings
from aura.db import init_all_databases
from aura.services.sm2 import InvalidQualityError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_all_databases(settings.aura_data_dir)
    yield


async def _invalid_quality_handler(request: Request, exc: InvalidQualityError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    application = FastAPI(
        title="Aura Backend", version="0.1.0", lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(InvalidQualityError, _invalid_quality_handler)

    from aura.routers import (
        challenge,
        decks,
        flashcards,
        health,
        hints,
        quiz,
        review,
        statistics,
    )

    application.include_router(health.router)
    application.include_router(
        decks.router, prefix="/decks", tags=["decks"]
    )
    application.include_router(
        flashcards.router, prefix="/flashcards", tags=["flashcards"]
    )
    application.include_router(
        review.router, prefix="/review", tags=["review"]
    )
    application.include_router(
        quiz.router, prefix="/quiz", tags=["quiz"]
    )
    application.include_router(
        challenge.router, prefix="/challenge", tags=["challenge"]
    )
    application.include_router(
        hints.router, prefix="/hints", tags=["hints"]
    )
    application.include_router(
        statistics.router, prefix="/statistics", tags=["statistics"]
    )

    return application


app = create_app()
