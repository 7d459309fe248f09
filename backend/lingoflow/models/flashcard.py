"""Flashcard models shared by the scheduler, the card store and the API."""

from enum import IntEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


# CEFR tier assigned by the extraction pipeline
Difficulty = Literal["C1", "C2"]


class CardState(IntEnum):
    """Lifecycle state of a card. LEARNING is never produced by the scheduler."""

    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


class CandidateWord(BaseModel):
    """A word-level entry produced by the extraction pipeline."""

    word: str = Field(..., min_length=1, max_length=200, description="Word or phrase")
    pronunciation: str = Field("", description="Pronunciation guide")
    vietnameseMeaning: str = Field("", description="Target-language meaning")
    context: str = Field("", description="Usage excerpt from the source text")
    difficulty: Difficulty = Field("C1", description="CEFR tier")


class Flashcard(CandidateWord):
    """Full card record, identical in shape to the persisted document."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174001",
                "userId": "user-001",
                "word": "ephemeral",
                "pronunciation": "/ɪˈfem(ə)rəl/",
                "vietnameseMeaning": "phù du, chóng tàn",
                "context": "Fame in the age of social media is ephemeral.",
                "difficulty": "C1",
                "source": "The Attention Economy",
                "createdAt": 1735689600000,
                "updatedAt": 1735689600000,
                "due": 1735689600000,
                "stability": 0,
                "difficultyRating": 0,
                "elapsedDays": 0,
                "scheduledDays": 0,
                "reps": 0,
                "state": 0,
            }
        },
    )

    id: str = Field(..., description="Unique identifier")
    userId: str = Field(..., description="Owner user ID (partition key)")
    source: str = Field("", description="Source label, usually the article title")
    createdAt: int = Field(..., description="Creation time (epoch ms)")
    updatedAt: int = Field(..., description="Last update time (epoch ms), merge arbiter")

    # SRS fields
    due: int = Field(..., description="Next due time (epoch ms)")
    stability: float = Field(0, description="Reserved, carried through unchanged")
    difficultyRating: float = Field(0, description="Reserved, carried through unchanged")
    elapsedDays: int = Field(0, description="Reserved, carried through unchanged")
    scheduledDays: int = Field(0, ge=0, description="Interval chosen by the last review")
    reps: int = Field(0, ge=0, description="Completed reviews")
    state: CardState = Field(CardState.NEW, description="Lifecycle state")

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Flashcard":
        """A card cannot be updated or due before it was created."""
        if self.updatedAt < self.createdAt:
            raise ValueError("updatedAt must not be earlier than createdAt")
        if self.due < self.createdAt:
            raise ValueError("due must not be earlier than createdAt")
        return self


class CardListResponse(BaseModel):
    """Response containing a list of cards."""

    cards: list[Flashcard]
    count: int


class SyncRequest(BaseModel):
    """Batch of card records to upsert."""

    cards: list[Flashcard]


class SyncResponse(BaseModel):
    """Outcome of a batch upsert."""

    status: Literal["ok"] = "ok"
    written: int = Field(..., description="Records that replaced or created a stored card")
    skipped: int = Field(..., description="Records older than or equal to the stored copy")
