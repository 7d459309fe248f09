"""Repositories module for data access layer."""

from .card_repository import (
    CardRepository,
    CardConflictError,
    CardNotFoundError,
    get_card_repository,
)

__all__ = [
    "CardRepository",
    "CardConflictError",
    "CardNotFoundError",
    "get_card_repository",
]
