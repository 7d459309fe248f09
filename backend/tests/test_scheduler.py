"""Unit tests for the review scheduler."""

import pytest

from lingoflow.models import CardState
from lingoflow.srs.scheduler import (
    InvalidRatingError,
    Rating,
    initialize,
    next_interval,
    parse_rating,
    preview_intervals,
    review,
)
from lingoflow.srs.time import MS_PER_DAY

from factories import T0, make_candidate, make_card


def test_initialize_new_card():
    card = initialize(make_candidate("Serendipity"), "Some Article", "user-9", T0, id_factory=lambda: "fixed-id")

    assert card.id == "fixed-id"
    assert card.userId == "user-9"
    assert card.word == "Serendipity"
    assert card.source == "Some Article"
    assert card.state == CardState.NEW
    assert card.reps == 0
    assert card.scheduledDays == 0
    assert card.due == T0
    assert card.createdAt == card.updatedAt == T0
    assert card.stability == 0
    assert card.difficultyRating == 0


def test_initialize_generates_distinct_ids():
    a = initialize(make_candidate("a"), "src", "u", T0)
    b = initialize(make_candidate("b"), "src", "u", T0)
    assert a.id and b.id and a.id != b.id


def test_good_from_new_card_schedules_three_days():
    now = T0 + 1000
    card = review(make_card(), Rating.GOOD, now)

    assert card.scheduledDays == 3  # (0 or 1) * 2.5 = 2.5, rounded half-up
    assert card.due == now + 3 * MS_PER_DAY
    assert card.state == CardState.REVIEW
    assert card.reps == 1
    assert card.updatedAt == now


def test_hard_from_new_card_uses_prior_interval_without_fallback():
    now = T0 + 1000
    card = review(make_card(), Rating.HARD, now)

    assert card.scheduledDays == 1
    assert card.due == now + MS_PER_DAY
    assert card.state == CardState.REVIEW


def test_again_sends_card_to_relearning_due_now():
    now = T0 + 5 * MS_PER_DAY
    card = make_card(scheduledDays=10, state=CardState.REVIEW, reps=4)

    reviewed = review(card, Rating.AGAIN, now)

    assert reviewed.scheduledDays == 0
    assert reviewed.due == now
    assert reviewed.state == CardState.RELEARNING
    assert reviewed.reps == 5


def test_easy_from_two_days_schedules_eight():
    reviewed = review(make_card(scheduledDays=2, state=CardState.REVIEW), Rating.EASY, T0)
    assert reviewed.scheduledDays == 8
    assert reviewed.state == CardState.REVIEW


def test_relearning_card_returns_to_review():
    card = make_card(scheduledDays=0, state=CardState.RELEARNING, reps=3)
    reviewed = review(card, Rating.GOOD, T0)
    assert reviewed.state == CardState.REVIEW
    assert reviewed.scheduledDays == 3


@pytest.mark.parametrize(
    "prior, rating, expected",
    [
        (0, Rating.AGAIN, 0),
        (0, Rating.HARD, 1),
        (0, Rating.GOOD, 3),
        (0, Rating.EASY, 4),
        (2, Rating.HARD, 2),   # 2.4
        (3, Rating.HARD, 4),   # 3.6
        (3, Rating.GOOD, 8),   # 7.5 rounds up
        (10, Rating.GOOD, 25),
        (10, Rating.EASY, 40),
        (30, Rating.AGAIN, 0),
    ],
)
def test_next_interval_table(prior, rating, expected):
    assert next_interval(prior, rating) == expected


@pytest.mark.parametrize("rating", list(Rating))
def test_reps_increment_by_one_for_every_rating(rating):
    card = make_card(reps=7, scheduledDays=5, state=CardState.REVIEW)
    assert review(card, rating, T0).reps == 8


def test_review_accepts_plain_ints():
    assert review(make_card(), 4, T0).scheduledDays == 4


@pytest.mark.parametrize("bad", [0, 5, -1, 2.0, True, "3", None])
def test_invalid_rating_raises(bad):
    with pytest.raises(InvalidRatingError):
        review(make_card(), bad, T0)


def test_invalid_rating_is_a_value_error():
    with pytest.raises(ValueError):
        parse_rating(9)


def test_review_carries_content_and_reserved_fields():
    card = make_card(stability=1.5, difficultyRating=4.2, elapsedDays=3, source="X")
    reviewed = review(card, Rating.GOOD, T0 + 10)

    for field in ("id", "userId", "word", "pronunciation", "vietnameseMeaning", "context",
                  "difficulty", "source", "createdAt", "stability", "difficultyRating", "elapsedDays"):
        assert getattr(reviewed, field) == getattr(card, field)


def test_review_does_not_mutate_input():
    card = make_card()
    review(card, Rating.EASY, T0 + 10)
    assert card.reps == 0
    assert card.state == CardState.NEW
    assert card.updatedAt == T0


def test_review_is_deterministic():
    card = make_card(scheduledDays=4, state=CardState.REVIEW)
    assert review(card, Rating.GOOD, T0 + 99) == review(card, Rating.GOOD, T0 + 99)


def test_review_clamps_now_to_last_update():
    card = make_card(updatedAt=T0 + 5000)
    reviewed = review(card, Rating.AGAIN, T0)
    assert reviewed.updatedAt == T0 + 5000
    assert reviewed.due == T0 + 5000
    assert reviewed.due >= reviewed.createdAt


def test_review_again_is_due_now_when_clock_is_ahead():
    card = make_card(updatedAt=T0 + 5000, scheduledDays=3, state=CardState.REVIEW)
    reviewed = review(card, Rating.AGAIN, T0 + 9000)
    assert reviewed.updatedAt == T0 + 9000
    assert reviewed.due == T0 + 9000


def test_preview_intervals():
    intervals = preview_intervals(make_card(scheduledDays=2, state=CardState.REVIEW))
    assert intervals == {Rating.AGAIN: 0, Rating.HARD: 2, Rating.GOOD: 5, Rating.EASY: 8}
