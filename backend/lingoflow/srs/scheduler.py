"""Review scheduling for flashcards.

Three observable states: a NEW card moves to REVIEW on its first non-Again
rating, Again always sends a card to RELEARNING, and the next non-Again rating
returns it to REVIEW. Intervals grow multiplicatively from the previous
``scheduledDays``:

    Again  -> 0 days
    Hard   -> max(1, S * 1.2)
    Good   -> max(1, (S or 1) * 2.5)
    Easy   -> max(1, (S or 1) * 4)

Intervals are rounded half-up to whole days. ``stability``, ``difficultyRating``
and ``elapsedDays`` are carried through untouched.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Callable
from uuid import uuid4

from lingoflow.models.flashcard import CandidateWord, CardState, Flashcard

from .time import add_days_ms


class Rating(IntEnum):
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4


class InvalidRatingError(ValueError):
    """Raised when a review is submitted with an unknown rating."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"rating must be one of 1-4 (Again, Hard, Good, Easy), got {rating!r}")


_HARD_FACTOR = 1.2
_GOOD_FACTOR = 2.5
_EASY_FACTOR = 4.0


def generate_id() -> str:
    """Generate a new card identifier."""
    return str(uuid4())


def parse_rating(rating: object) -> Rating:
    """Return ``rating`` as a Rating, or raise InvalidRatingError.

    Only ints (or Rating members) in 1-4 are accepted; bools and floats are rejected.
    """
    if isinstance(rating, Rating):
        return rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(rating)
    try:
        return Rating(rating)
    except ValueError:
        raise InvalidRatingError(rating) from None


def _round_half_up(days: float) -> int:
    return int(math.floor(days + 0.5))


def next_interval(scheduled_days: int, rating: Rating) -> int:
    """Whole days until the card is due again after ``rating``."""
    if rating == Rating.AGAIN:
        return 0
    if rating == Rating.HARD:
        days = max(1.0, scheduled_days * _HARD_FACTOR)
    elif rating == Rating.GOOD:
        days = max(1.0, (scheduled_days or 1) * _GOOD_FACTOR)
    else:
        days = max(1.0, (scheduled_days or 1) * _EASY_FACTOR)
    return _round_half_up(days)


def next_state(rating: Rating) -> CardState:
    if rating == Rating.AGAIN:
        return CardState.RELEARNING
    return CardState.REVIEW


def initialize(
    candidate: CandidateWord,
    source_label: str,
    user_id: str,
    now: int,
    id_factory: Callable[[], str] = generate_id,
) -> Flashcard:
    """Create a NEW card from an extracted candidate, due immediately."""
    return Flashcard(
        **candidate.model_dump(include=set(CandidateWord.model_fields)),
        id=id_factory(),
        userId=user_id,
        source=source_label,
        createdAt=now,
        updatedAt=now,
        due=now,
        stability=0,
        difficultyRating=0,
        elapsedDays=0,
        scheduledDays=0,
        reps=0,
        state=CardState.NEW,
    )


def review(card: Flashcard, rating: Rating | int, now: int) -> Flashcard:
    """Apply one review to ``card`` and return the updated card.

    ``now`` earlier than ``card.updatedAt`` is clamped to ``card.updatedAt`` so
    update timestamps never go backwards on a device. The returned card has
    ``updatedAt == max(now, card.updatedAt)``. So ``updatedAt == now``, and for
    Again ``due == now``, hold only when ``now >= card.updatedAt``; otherwise
    both equal ``card.updatedAt``.

    Raises:
        InvalidRatingError: If ``rating`` is not one of the four grades.
    """
    grade = parse_rating(rating)
    now = max(now, card.updatedAt)

    scheduled_days = next_interval(card.scheduledDays, grade)
    return card.model_copy(
        update={
            "state": next_state(grade),
            "scheduledDays": scheduled_days,
            "due": add_days_ms(now, scheduled_days),
            "reps": card.reps + 1,
            "updatedAt": now,
        }
    )


def preview_intervals(card: Flashcard) -> dict[Rating, int]:
    """Scheduled days each rating would produce for ``card``."""
    return {grade: next_interval(card.scheduledDays, grade) for grade in Rating}
