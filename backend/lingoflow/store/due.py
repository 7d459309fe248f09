"""Due-card queries."""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Iterable

from lingoflow.models.flashcard import Flashcard
from lingoflow.srs.time import end_of_day_ms


def find_due(cards: Iterable[Flashcard], as_of: int) -> list[Flashcard]:
    """Cards with ``due <= as_of``, in input order."""
    return [card for card in cards if card.due <= as_of]


def find_due_by_end_of_day(
    cards: Iterable[Flashcard], as_of: int, tz: tzinfo = timezone.utc
) -> list[Flashcard]:
    """Cards that fall due before the calendar day of ``as_of`` (in ``tz``) ends."""
    return find_due(cards, end_of_day_ms(as_of, tz))
