"""Dedup gate for newly extracted vocabulary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from lingoflow.models.flashcard import CandidateWord, Flashcard
from lingoflow.srs.scheduler import generate_id, initialize
from lingoflow.srs.time import utc_now_ms


@dataclass
class AcceptResult:
    accepted: list[Flashcard] = field(default_factory=list)
    rejected: list[CandidateWord] = field(default_factory=list)


def normalize_word(word: str) -> str:
    """Key used for the one-card-per-word rule."""
    return word.casefold()


def accept_candidates(
    existing_cards: Iterable[Flashcard],
    candidates: Iterable[CandidateWord],
    source_label: str,
    user_id: str,
    now: int | None = None,
    id_factory: Callable[[], str] = generate_id,
) -> AcceptResult:
    """Split ``candidates`` into new cards and duplicates.

    A candidate is rejected when its normalized word matches an existing card
    or a candidate accepted earlier in the same batch. Accepted candidates are
    initialized as NEW cards for ``user_id`` at ``now``.
    """
    if now is None:
        now = utc_now_ms()

    seen = {normalize_word(card.word) for card in existing_cards}
    result = AcceptResult()

    for candidate in candidates:
        key = normalize_word(candidate.word)
        if key in seen:
            result.rejected.append(candidate)
            continue
        seen.add(key)
        result.accepted.append(initialize(candidate, source_label, user_id, now, id_factory))

    return result
