"""SRS helpers (review scheduling, ordering strategies, epoch-ms time)."""

from .scheduler import (
    InvalidRatingError,
    Rating,
    generate_id,
    initialize,
    next_interval,
    next_state,
    parse_rating,
    preview_intervals,
    review,
)
from .ordering import OrderingStrategy, by_due, new_seed, seeded_shuffle
from .time import (
    MS_PER_DAY,
    add_days_ms,
    datetime_to_ms,
    end_of_day_ms,
    ms_to_datetime,
    utc_now,
    utc_now_ms,
)

__all__ = [
    "InvalidRatingError",
    "Rating",
    "generate_id",
    "initialize",
    "next_interval",
    "next_state",
    "parse_rating",
    "preview_intervals",
    "review",
    "OrderingStrategy",
    "by_due",
    "new_seed",
    "seeded_shuffle",
    "MS_PER_DAY",
    "add_days_ms",
    "datetime_to_ms",
    "end_of_day_ms",
    "ms_to_datetime",
    "utc_now",
    "utc_now_ms",
]
