"""Cards API router: bulk read, sync, import and delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from lingoflow.auth import CurrentUser, get_current_user
from lingoflow.models import (
    ArticleData,
    CardListResponse,
    ImportResponse,
    SyncRequest,
    SyncResponse,
)
from lingoflow.repositories import CardConflictError, CardNotFoundError, get_card_repository
from lingoflow.srs.time import utc_now_ms
from lingoflow.store import accept_candidates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


def _conflict(e: CardConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=CardListResponse)
async def list_cards(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CardListResponse:
    """Return every card of the current user."""
    cards = get_card_repository().list_by_user(user.user_id)
    return CardListResponse(cards=cards, count=len(cards))


@router.post("/sync", response_model=SyncResponse)
async def sync_cards(
    request: SyncRequest, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> SyncResponse:
    """Upsert a batch of cards; the newest ``updatedAt`` wins per card."""
    try:
        written, skipped = get_card_repository().upsert_many(user.user_id, request.cards)
    except CardConflictError as e:
        raise _conflict(e)
    return SyncResponse(written=written, skipped=skipped)


@router.post("/import", response_model=ImportResponse, status_code=status.HTTP_201_CREATED)
async def import_article(
    article: ArticleData, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> ImportResponse:
    """Create cards for the article's words the user does not have yet."""
    repo = get_card_repository()
    existing = repo.list_by_user(user.user_id)

    result = accept_candidates(
        existing,
        article.words,
        source_label=article.source_label,
        user_id=user.user_id,
        now=utc_now_ms(),
    )
    if result.accepted:
        try:
            repo.upsert_many(user.user_id, result.accepted)
        except CardConflictError as e:
            raise _conflict(e)

    logger.info(
        "Imported article: user=%s, source=%r, accepted=%d, rejected=%d",
        user.user_id,
        article.source_label,
        len(result.accepted),
        len(result.rejected),
    )
    return ImportResponse(
        accepted=result.accepted,
        rejected=result.rejected,
        acceptedCount=len(result.accepted),
        rejectedCount=len(result.rejected),
    )


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(card_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]) -> None:
    """Delete a card."""
    try:
        get_card_repository().delete(card_id, user.user_id)
    except CardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card with ID {card_id} not found",
        )
