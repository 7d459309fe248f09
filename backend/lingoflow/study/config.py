"""Study session configuration."""

import os
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import BaseModel


class StudySettings(BaseModel):
    """Study settings loaded from environment variables."""

    session_ttl_seconds: int = 30 * 60
    max_sessions: int = 10000
    timezone: str = "UTC"  # Day boundary for "due today"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache()
def get_study_settings() -> StudySettings:
    """Get cached study settings from environment variables."""
    return StudySettings(
        session_ttl_seconds=int(os.getenv("STUDY_SESSION_TTL_SECONDS", "1800")),
        max_sessions=int(os.getenv("STUDY_MAX_SESSIONS", "10000")),
        timezone=os.getenv("STUDY_TIMEZONE", "UTC"),
    )
