"""Last-write-wins reconciliation of card sets."""

from __future__ import annotations

from typing import Iterable

from lingoflow.models.flashcard import Flashcard


def newer(current: Flashcard, candidate: Flashcard) -> Flashcard:
    """Return whichever copy has the greater ``updatedAt``; ties keep ``current``."""
    if candidate.updatedAt > current.updatedAt:
        return candidate
    return current


def merge(local_cards: Iterable[Flashcard], incoming_cards: Iterable[Flashcard]) -> list[Flashcard]:
    """Merge ``incoming_cards`` into ``local_cards`` by card id.

    Local order is kept; ids not present locally are appended in the order they
    arrive. Neither input is modified. Calling again with the result as the
    incoming set returns the same result.
    """
    merged: list[Flashcard] = []
    index: dict[str, int] = {}

    for card in local_cards:
        if card.id in index:
            pos = index[card.id]
            merged[pos] = newer(merged[pos], card)
            continue
        index[card.id] = len(merged)
        merged.append(card)

    for card in incoming_cards:
        pos = index.get(card.id)
        if pos is None:
            index[card.id] = len(merged)
            merged.append(card)
        else:
            merged[pos] = newer(merged[pos], card)

    return merged
