"""Card store: merge, dedup and due queries over plain card lists."""

from .candidates import AcceptResult, accept_candidates, normalize_word
from .due import find_due, find_due_by_end_of_day
from .merge import merge, newer

__all__ = [
    "AcceptResult",
    "accept_candidates",
    "normalize_word",
    "find_due",
    "find_due_by_end_of_day",
    "merge",
    "newer",
]
