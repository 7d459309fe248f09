"""Tests for merge, candidate dedup and due queries."""

from datetime import timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from lingoflow.models import CardState
from lingoflow.srs.scheduler import Rating, review
from lingoflow.srs.time import MS_PER_DAY
from lingoflow.store import (
    accept_candidates,
    find_due,
    find_due_by_end_of_day,
    merge,
    normalize_word,
)

from factories import T0, make_candidate, make_card


class TestMerge:
    """Tests for last-write-wins merge."""

    def test_newer_incoming_replaces_local(self):
        local = [make_card(id="x", updatedAt=T0 + 100)]
        incoming = [make_card(id="x", updatedAt=T0 + 150, reps=1)]

        merged = merge(local, incoming)

        assert len(merged) == 1
        assert merged[0].updatedAt == T0 + 150
        assert merged[0].reps == 1

    def test_newer_wins_regardless_of_argument_order(self):
        old = make_card(id="x", updatedAt=T0 + 100)
        new = make_card(id="x", updatedAt=T0 + 150, reps=1)

        assert merge([old], [new]) == [new]
        assert merge([new], [old]) == [new]

    def test_tie_keeps_local_copy(self):
        local = make_card(id="x", updatedAt=T0 + 100, source="local")
        incoming = make_card(id="x", updatedAt=T0 + 100, source="remote")

        assert merge([local], [incoming]) == [local]

    def test_unknown_ids_are_appended_in_arrival_order(self):
        local = [make_card(id="a", word="a"), make_card(id="b", word="b")]
        incoming = [make_card(id="d", word="d"), make_card(id="b", word="b"), make_card(id="c", word="c")]

        merged = merge(local, incoming)

        assert [c.id for c in merged] == ["a", "b", "d", "c"]

    def test_duplicate_incoming_ids_reconcile_with_each_other(self):
        incoming = [
            make_card(id="n", updatedAt=T0 + 10),
            make_card(id="n", updatedAt=T0 + 30, reps=2),
            make_card(id="n", updatedAt=T0 + 20, reps=1),
        ]
        merged = merge([], incoming)
        assert len(merged) == 1
        assert merged[0].updatedAt == T0 + 30

    def test_merge_is_idempotent(self):
        a = [make_card(id="1", updatedAt=T0 + 100), make_card(id="2", updatedAt=T0 + 300, word="two")]
        b = [
            make_card(id="2", updatedAt=T0 + 200, word="two"),
            make_card(id="1", updatedAt=T0 + 200, reps=1),
            make_card(id="3", updatedAt=T0 + 50, word="three"),
        ]

        once = merge(a, b)

        assert merge(a, once) == once
        assert merge(once, b) == once

    def test_merge_does_not_modify_inputs(self):
        local = [make_card(id="x", updatedAt=T0 + 100)]
        incoming = [make_card(id="x", updatedAt=T0 + 200), make_card(id="y", word="y")]
        local_before, incoming_before = list(local), list(incoming)

        merge(local, incoming)

        assert local == local_before
        assert incoming == incoming_before

    def test_stale_device_cannot_overwrite_newer_review(self):
        # Both devices start from updatedAt=T0+100; device A reviews at T0+150.
        server = [make_card(id="x", updatedAt=T0 + 100)]
        device_a = review(server[0], Rating.GOOD, T0 + 150)
        device_b = make_card(id="x", updatedAt=T0 + 100)

        server = merge(server, [device_a])
        server = merge(server, [device_b])

        assert server == [device_a]
        assert server[0].reps == 1
        assert server[0].state == CardState.REVIEW


class TestAcceptCandidates:
    """Tests for the one-card-per-word gate."""

    def test_rejects_words_already_held_case_insensitively(self):
        existing = [make_card(id="1", word="Ephemeral")]
        candidates = [make_candidate("EPHEMERAL"), make_candidate("ubiquitous")]

        result = accept_candidates(existing, candidates, "src", "user-1", now=T0)

        assert [c.word for c in result.accepted] == ["ubiquitous"]
        assert [c.word for c in result.rejected] == ["EPHEMERAL"]

    def test_rejects_duplicates_within_batch(self):
        candidates = [make_candidate("Quixotic"), make_candidate("quixotic"), make_candidate("QUIXOTIC")]

        result = accept_candidates([], candidates, "src", "user-1", now=T0)

        assert len(result.accepted) == 1
        assert result.accepted[0].word == "Quixotic"
        assert len(result.rejected) == 2

    def test_accepted_cards_are_initialized(self):
        ids = iter(["id-1", "id-2"])
        result = accept_candidates(
            [],
            [make_candidate("laconic"), make_candidate("verbose")],
            "The Article",
            "user-7",
            now=T0,
            id_factory=lambda: next(ids),
        )

        first, second = result.accepted
        assert (first.id, second.id) == ("id-1", "id-2")
        for card in result.accepted:
            assert card.userId == "user-7"
            assert card.source == "The Article"
            assert card.state == CardState.NEW
            assert card.reps == 0
            assert card.due == card.createdAt == card.updatedAt == T0

    def test_no_accepted_word_collides(self):
        existing = [make_card(id=str(i), word=w) for i, w in enumerate(["alpha", "Beta"])]
        words = ["ALPHA", "beta", "gamma", "Gamma", "delta", "straße", "STRASSE"]

        result = accept_candidates(existing, [make_candidate(w) for w in words], "src", "u", now=T0)

        keys = [normalize_word(c.word) for c in result.accepted]
        assert len(keys) == len(set(keys))
        assert not set(keys) & {normalize_word(c.word) for c in existing}
        assert len(result.accepted) + len(result.rejected) == len(words)

    def test_empty_batch(self):
        result = accept_candidates([make_card()], [], "src", "u", now=T0)
        assert result.accepted == []
        assert result.rejected == []


class TestFindDue:
    """Tests for due queries."""

    def test_find_due_includes_boundary_and_keeps_order(self):
        cards = [
            make_card(id="late", word="late", due=T0 + 1),
            make_card(id="exact", word="exact", due=T0),
            make_card(id="early", word="early", createdAt=T0 - MS_PER_DAY, updatedAt=T0 - MS_PER_DAY, due=T0 - MS_PER_DAY),
        ]

        assert [c.id for c in find_due(cards, T0)] == ["exact", "early"]

    def test_find_due_by_end_of_day_utc(self):
        now = T0 + 10 * 60 * 60 * 1000  # 10:00 UTC
        cards = [
            make_card(id="tonight", word="a", due=T0 + MS_PER_DAY - 1),
            make_card(id="tomorrow", word="b", due=T0 + MS_PER_DAY),
            make_card(id="now", word="c", due=now),
        ]

        assert [c.id for c in find_due_by_end_of_day(cards, now, timezone.utc)] == ["tonight", "now"]

    def test_find_due_by_end_of_day_respects_time_zone(self):
        # 2025-01-01T20:00Z is already 2025-01-02 in Ho Chi Minh City (UTC+7).
        now = T0 + 20 * 60 * 60 * 1000
        card = make_card(due=T0 + MS_PER_DAY + 12 * 60 * 60 * 1000)  # 2025-01-02T12:00Z

        assert find_due_by_end_of_day([card], now, timezone.utc) == []
        assert find_due_by_end_of_day([card], now, ZoneInfo("Asia/Ho_Chi_Minh")) == [card]


class TestFlashcardRecord:
    """Timestamp consistency of a single record."""

    @pytest.mark.parametrize("overrides", [{"due": T0 - 1}, {"updatedAt": T0 - 1}])
    def test_rejects_times_before_creation(self, overrides):
        with pytest.raises(ValidationError):
            make_card(**overrides)

    def test_due_and_update_may_equal_creation(self):
        card = make_card(createdAt=T0, updatedAt=T0, due=T0)
        assert card.due == card.updatedAt == card.createdAt
