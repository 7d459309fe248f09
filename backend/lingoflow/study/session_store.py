"""TTL-based store for study session queues."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from cachetools import TTLCache

from lingoflow.srs.time import utc_now_ms

from .config import get_study_settings


class StudySessionNotFoundError(Exception):
    """Raised when a user has no active study session."""

    pass


@dataclass
class StudySession:
    """Presentation queue for one study session.

    The queue holds card ids in the order chosen when the session started.
    ``position`` points at the card currently presented.
    """

    seed: int
    created_at: int
    card_ids: list[str] = field(default_factory=list)
    position: int = 0
    order: str = "shuffle"

    @property
    def total(self) -> int:
        return len(self.card_ids)

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.position)

    @property
    def is_finished(self) -> bool:
        return self.position >= self.total

    @property
    def current_card_id(self) -> str | None:
        if self.is_finished:
            return None
        return self.card_ids[self.position]

    def advance(self) -> None:
        """Move past the current card."""
        if not self.is_finished:
            self.position += 1


class StudySessionStore:
    """Thread-safe TTL-based session store.

    Stores StudySession keyed by user id.
    Sessions expire after TTL seconds of inactivity (sliding window).
    """

    def __init__(self, ttl_seconds: int, maxsize: int):
        self._cache: TTLCache[str, StudySession] = TTLCache(maxsize=maxsize, ttl=ttl_seconds)
        self._lock = threading.Lock()

    def start(
        self,
        user_id: str,
        card_ids: list[str],
        seed: int,
        order: str = "shuffle",
        started_at: int | None = None,
    ) -> StudySession:
        """Replace any existing session for the user with a fresh queue."""
        session = StudySession(
            seed=seed,
            created_at=started_at if started_at is not None else utc_now_ms(),
            card_ids=list(card_ids),
            order=order,
        )
        with self._lock:
            self._cache[user_id] = session
        return session

    def get(self, user_id: str) -> StudySession | None:
        """Get the user's session, refreshing its TTL. None if absent or expired."""
        with self._lock:
            session = self._cache.get(user_id)
            if session is not None:
                self._cache[user_id] = session
            return session

    def require(self, user_id: str) -> StudySession:
        """Like get(), but raises StudySessionNotFoundError when absent."""
        session = self.get(user_id)
        if session is None:
            raise StudySessionNotFoundError(f"No active study session for user {user_id}")
        return session

    def advance_past(self, user_id: str, card_id: str) -> StudySession | None:
        """Advance the user's session if ``card_id`` is the card being presented."""
        with self._lock:
            session = self._cache.get(user_id)
            if session is None:
                return None
            if session.current_card_id == card_id:
                session.advance()
            self._cache[user_id] = session
            return session

    def skip_current(self, user_id: str) -> None:
        """Drop the presented card, e.g. when it was deleted elsewhere."""
        with self._lock:
            session = self._cache.get(user_id)
            if session is not None:
                session.advance()

    def reset(self, user_id: str) -> bool:
        """Remove the user's session. False if there was none."""
        with self._lock:
            return self._cache.pop(user_id, None) is not None

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        with self._lock:
            self._cache.clear()


# Singleton instance
_session_store: StudySessionStore | None = None


def get_session_store() -> StudySessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        settings = get_study_settings()
        _session_store = StudySessionStore(
            ttl_seconds=settings.session_ttl_seconds,
            maxsize=settings.max_sessions,
        )
    return _session_store


def reset_session_store() -> None:
    """Reset the session store (for testing)."""
    global _session_store
    _session_store = None
