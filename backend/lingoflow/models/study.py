"""Models for study session endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from lingoflow.models.flashcard import Flashcard


class StudySummaryResponse(BaseModel):
    """Response for GET /study/summary."""

    dueNow: int = Field(..., description="Cards due at request time")
    dueToday: int = Field(..., description="Cards due by the end of the current day")
    total: int = Field(..., description="All cards of the user")


class StudySessionRequest(BaseModel):
    """Request for POST /study/session."""

    seed: int | None = Field(None, description="Shuffle seed; random when omitted")
    order: Literal["shuffle", "due"] = Field(
        "shuffle",
        description="Presentation order: seeded shuffle, or oldest-due first",
    )


class StudySessionResponse(BaseModel):
    """Response for POST /study/session."""

    seed: int
    order: Literal["shuffle", "due"]
    startedAt: int = Field(..., description="Session start time (epoch ms)")
    total: int
    position: int
    remaining: int


class StudyNextResponse(BaseModel):
    """Response for GET /study/next."""

    card: Flashcard | None = Field(None, description="Card to present, null when the session is finished")
    position: int
    total: int
    intervals: dict[str, int] | None = Field(
        None,
        description="Scheduled days per rating name for the presented card",
    )


class ReviewRequest(BaseModel):
    """Request for POST /study/review."""

    cardId: str = Field(..., min_length=1)
    # Left uncoerced so parse_rating sees the raw JSON value
    rating: Any = Field(..., description="1 Again, 2 Hard, 3 Good, 4 Easy (integer)")


class ReviewResponse(BaseModel):
    """Response for POST /study/review."""

    card: Flashcard
    remaining: int
