"""Study sessions: per-user presentation queues held outside the core."""

from .config import StudySettings, get_study_settings
from .session_store import (
    StudySession,
    StudySessionNotFoundError,
    StudySessionStore,
    get_session_store,
    reset_session_store,
)

__all__ = [
    "StudySettings",
    "get_study_settings",
    "StudySession",
    "StudySessionNotFoundError",
    "StudySessionStore",
    "get_session_store",
    "reset_session_store",
]
