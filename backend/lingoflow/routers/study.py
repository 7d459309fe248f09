"""Study (SRS) API router."""

from __future__ import annotations

import logging
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lingoflow.auth import CurrentUser, get_current_user
from lingoflow.models import (
    ReviewRequest,
    ReviewResponse,
    StudyNextResponse,
    StudySessionRequest,
    StudySessionResponse,
    StudySummaryResponse,
)
from lingoflow.repositories import CardConflictError, CardNotFoundError, get_card_repository
from lingoflow.srs import (
    InvalidRatingError,
    by_due,
    new_seed,
    parse_rating,
    preview_intervals,
    review,
    seeded_shuffle,
)
from lingoflow.srs.time import utc_now_ms
from lingoflow.store import find_due, find_due_by_end_of_day
from lingoflow.study import StudySessionNotFoundError, get_session_store, get_study_settings

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/study", tags=["study"])


def _resolve_tz(tz: str | None) -> ZoneInfo:
    if tz is None:
        return get_study_settings().tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown time zone: {tz}",
        )


def _session_not_found(e: StudySessionNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/summary", response_model=StudySummaryResponse)
async def study_summary(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    tz: str | None = Query(None, description="IANA zone for the end-of-day boundary"),
) -> StudySummaryResponse:
    """Counts of cards due now and due by the end of today."""
    zone = _resolve_tz(tz)
    cards = get_card_repository().list_by_user(user.user_id)
    now = utc_now_ms()
    return StudySummaryResponse(
        dueNow=len(find_due(cards, now)),
        dueToday=len(find_due_by_end_of_day(cards, now, zone)),
        total=len(cards),
    )


@router.post("/session", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StudySessionRequest, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> StudySessionResponse:
    """Start a session over the cards due now.

    Cards are shuffled with the session seed by default; ``order="due"`` presents
    the oldest-due card first. The seed is returned either way.
    """
    seed = request.seed if request.seed is not None else new_seed()
    strategy = by_due if request.order == "due" else seeded_shuffle(seed)
    now = utc_now_ms()
    cards = get_card_repository().list_by_user(user.user_id)
    ordered = strategy(find_due(cards, now))

    session = get_session_store().start(
        user.user_id,
        [card.id for card in ordered],
        seed,
        order=request.order,
        started_at=now,
    )
    logger.info(
        "Study session started: user=%s, seed=%d, order=%s, cards=%d",
        user.user_id,
        seed,
        request.order,
        session.total,
    )
    return StudySessionResponse(
        seed=session.seed,
        order=session.order,
        startedAt=session.created_at,
        total=session.total,
        position=session.position,
        remaining=session.remaining,
    )


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(user: Annotated[CurrentUser, Depends(get_current_user)]) -> None:
    """Discard the current study session."""
    if not get_session_store().reset(user.user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active study session for user {user.user_id}",
        )
    logger.info("Study session ended: user=%s", user.user_id)


@router.get("/next", response_model=StudyNextResponse)
async def study_next(user: Annotated[CurrentUser, Depends(get_current_user)]) -> StudyNextResponse:
    """Return the card currently presented in the session."""
    store = get_session_store()
    repo = get_card_repository()
    try:
        session = store.require(user.user_id)
    except StudySessionNotFoundError as e:
        raise _session_not_found(e)

    while not session.is_finished:
        try:
            card = repo.get_by_id(session.current_card_id, user.user_id)
        except CardNotFoundError:
            logger.info(
                "Skipping deleted card in session: user=%s, card=%s",
                user.user_id,
                session.current_card_id,
            )
            store.skip_current(user.user_id)
            continue
        intervals = {grade.name.lower(): days for grade, days in preview_intervals(card).items()}
        return StudyNextResponse(
            card=card,
            position=session.position,
            total=session.total,
            intervals=intervals,
        )

    return StudyNextResponse(card=None, position=session.position, total=session.total)


@router.post("/review", response_model=ReviewResponse)
async def submit_review(
    request: ReviewRequest, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> ReviewResponse:
    """Apply a rating to a card, persist it, and advance the session."""
    try:
        rating = parse_rating(request.rating)
    except InvalidRatingError as e:
        logger.warning("Rejected review: user=%s, card=%s, %s", user.user_id, request.cardId, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    repo = get_card_repository()
    try:
        card = repo.get_by_id(request.cardId, user.user_id)
    except CardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card with ID {request.cardId} not found",
        )

    updated = review(card, rating, utc_now_ms())
    try:
        repo.upsert_many(user.user_id, [updated])
    except CardConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    session = get_session_store().advance_past(user.user_id, updated.id)
    logger.info(
        "Review applied: user=%s, card=%s, rating=%s, state=%s, scheduled_days=%d, reps=%d",
        user.user_id,
        updated.id,
        rating.name,
        updated.state.name,
        updated.scheduledDays,
        updated.reps,
    )
    return ReviewResponse(card=updated, remaining=session.remaining if session else 0)
