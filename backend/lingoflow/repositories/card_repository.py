"""Repository for flashcard persistence."""

import logging
from typing import Iterable

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from lingoflow.db import get_cards_container
from lingoflow.models import Flashcard
from lingoflow.store import merge, newer

logger = logging.getLogger(__name__)

# Read-compare-write rounds per card before giving up on a contended document
MAX_WRITE_ATTEMPTS = 5


class CardNotFoundError(Exception):
    """Raised when a card is not found."""

    pass


class CardConflictError(Exception):
    """Raised when a card could not be written because it kept changing concurrently."""

    pass


class CardRepository:
    """Repository for Flashcard database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_cards_container()
        return self._container

    def list_by_user(self, user_id: str) -> list[Flashcard]:
        """Bulk read of every card owned by a user, oldest first."""
        query = "SELECT * FROM c WHERE c.userId = @userId ORDER BY c.createdAt ASC"
        parameters = [{"name": "@userId", "value": user_id}]

        items = self.container.query_items(
            query=query,
            parameters=parameters,
            partition_key=user_id,
        )
        return [Flashcard(**item) for item in items]

    def get_by_id(self, card_id: str, user_id: str) -> Flashcard:
        """Get a card by ID and user ID."""
        try:
            item = self.container.read_item(item=card_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise CardNotFoundError(f"Card with ID {card_id} not found")
        return Flashcard(**item)

    def upsert_many(self, user_id: str, cards: Iterable[Flashcard]) -> tuple[int, int]:
        """Insert-or-replace a batch of cards with last-write-wins on ``updatedAt``.

        Every record is rescoped to ``user_id``. Duplicate ids in the batch are
        reconciled first. Each surviving record is then compared against the
        stored copy and written only when it is new or strictly newer, so
        replaying a batch is a no-op.

        Writes are conditional on the stored document's ``_etag``. When another
        writer changes the document between the read and the write, the
        comparison is repeated against the fresh copy.

        Returns:
            (written, skipped) counts.

        Raises:
            CardConflictError: If a card kept changing underneath every attempt.
        """
        incoming = [
            card if card.userId == user_id else card.model_copy(update={"userId": user_id})
            for card in cards
        ]
        if not incoming:
            return 0, 0

        written = 0
        for card in merge([], incoming):
            if self._write_if_newer(card):
                written += 1

        skipped = len(incoming) - written
        logger.info(
            "Synced cards: user=%s, received=%d, written=%d, skipped=%d",
            user_id,
            len(incoming),
            written,
            skipped,
        )
        return written, skipped

    def _write_if_newer(self, card: Flashcard) -> bool:
        """Write ``card`` unless the stored copy wins. True when written."""
        body = card.model_dump(mode="json")
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            try:
                item = self.container.read_item(item=card.id, partition_key=card.userId)
            except CosmosResourceNotFoundError:
                try:
                    self.container.create_item(body=body)
                    return True
                except CosmosResourceExistsError:
                    logger.debug("Card created concurrently, retrying: card=%s, attempt=%d", card.id, attempt)
                    continue

            stored = Flashcard(**item)
            if newer(stored, card) is stored:
                return False
            try:
                self.container.replace_item(
                    item=card.id,
                    body=body,
                    etag=item.get("_etag"),
                    match_condition=MatchConditions.IfNotModified,
                )
                return True
            except CosmosAccessConditionFailedError:
                logger.debug("Card modified concurrently, retrying: card=%s, attempt=%d", card.id, attempt)

        logger.warning("Giving up on contended card: user=%s, card=%s", card.userId, card.id)
        raise CardConflictError(f"Card with ID {card.id} kept changing during sync")

    def delete(self, card_id: str, user_id: str) -> None:
        """Delete a card by ID."""
        try:
            self.container.delete_item(item=card_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise CardNotFoundError(f"Card with ID {card_id} not found")


# Singleton instance
_card_repository: CardRepository | None = None


def get_card_repository() -> CardRepository:
    """Get the card repository singleton."""
    global _card_repository
    if _card_repository is None:
        _card_repository = CardRepository()
    return _card_repository
