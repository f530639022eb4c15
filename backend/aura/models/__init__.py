from aura.models.deck import (
    GLOBAL_DECK_ID,
    Deck,
    DeckCreate,
    DeckList,
    DeckMembership,
)
from aura.models.flashcard import (
    Flashcard,
    FlashcardCreate,
    FlashcardList,
    FlashcardUpdate,
    Quality,
    ReviewInput,
    ReviewRequest,
    ReviewSource,
    SM2Result,
)
from aura.models.hint import Hint, HintType
from aura.models.quiz import (
    ChallengeConfig,
    FillInBlankQuestion,
    MultipleChoiceQuestion,
    QuizAnswerResult,
    QuizQuestion,
)
from aura.models.stats import (
    CardCategory,
    CardCounts,
    DeckSortKey,
    DeckStats,
    ScopeStats,
    StatisticsData,
)

__all__ = [
    "CardCategory",
    "CardCounts",
    "ChallengeConfig",
    "Deck",
    "DeckCreate",
    "DeckList",
    "DeckMembership",
    "DeckSortKey",
    "DeckStats",
    "FillInBlankQuestion",
    "Flashcard",
    "FlashcardCreate",
    "FlashcardList",
    "FlashcardUpdate",
    "GLOBAL_DECK_ID",
    "Hint",
    "HintType",
    "MultipleChoiceQuestion",
    "Quality",
    "QuizAnswerResult",
    "QuizQuestion",
    "ReviewInput",
    "ReviewRequest",
    "ReviewSource",
    "SM2Result",
    "ScopeStats",
    "StatisticsData",
]
