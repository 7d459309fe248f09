"""Models module for Pydantic schemas."""

from .flashcard import (
    CandidateWord,
    CardListResponse,
    CardState,
    Difficulty,
    Flashcard,
    SyncRequest,
    SyncResponse,
)
from .article import (
    ArticleData,
    ImportResponse,
)
from .study import (
    ReviewRequest,
    ReviewResponse,
    StudyNextResponse,
    StudySessionRequest,
    StudySessionResponse,
    StudySummaryResponse,
)

__all__ = [
    "CandidateWord",
    "CardListResponse",
    "CardState",
    "Difficulty",
    "Flashcard",
    "SyncRequest",
    "SyncResponse",
    "ArticleData",
    "ImportResponse",
    "ReviewRequest",
    "ReviewResponse",
    "StudyNextResponse",
    "StudySessionRequest",
    "StudySessionResponse",
    "StudySummaryResponse",
]
