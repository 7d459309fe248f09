"""API routers module."""

from .cards import router as cards_router
from .study import router as study_router

__all__ = [
    "cards_router",
    "study_router",
]
