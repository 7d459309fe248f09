"""Presentation order strategies for a study session.

A strategy takes the due cards and returns them in the order they will be
shown. Strategies return a new list and leave their input alone.
"""

from __future__ import annotations

import random
from typing import Callable, Sequence

from lingoflow.models.flashcard import Flashcard

OrderingStrategy = Callable[[Sequence[Flashcard]], list[Flashcard]]


def seeded_shuffle(seed: int) -> OrderingStrategy:
    """Return a strategy that shuffles deterministically for ``seed``."""

    def _order(cards: Sequence[Flashcard]) -> list[Flashcard]:
        ordered = list(cards)
        random.Random(seed).shuffle(ordered)
        return ordered

    return _order


def by_due(cards: Sequence[Flashcard]) -> list[Flashcard]:
    """Oldest-due first; ties broken by creation time then id."""
    return sorted(cards, key=lambda c: (c.due, c.createdAt, c.id))


def new_seed() -> int:
    """Pick a fresh seed for a session that did not ask for one."""
    return random.SystemRandom().randrange(2**32)
