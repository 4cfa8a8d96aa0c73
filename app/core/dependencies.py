"""
Dependencies - Celebrity Timeline
app/core/dependencies.py

FastAPI dependency injection for the celebrity store and services.
"""

from functools import lru_cache

from fastapi import Depends

from app.config import settings
from app.repositories.base import CelebrityStore
from app.services.vote_service import VoteService
from app.timeline.layout import TimelineGeometry


@lru_cache()
def get_celebrity_repository() -> CelebrityStore:
    """Get cached store for the configured backend."""
    if settings.STORE_BACKEND == "snowflake":
        from app.repositories.snowflake_repository import SnowflakeCelebrityRepository

        return SnowflakeCelebrityRepository()

    from app.repositories.sqlite_repository import SQLiteCelebrityRepository

    return SQLiteCelebrityRepository(settings.SQLITE_PATH)


def get_vote_service(
    store: CelebrityStore = Depends(get_celebrity_repository),
) -> VoteService:
    """Build a VoteService bound to the current store."""
    return VoteService(store)


@lru_cache()
def get_timeline_geometry() -> TimelineGeometry:
    """Get timeline geometry from settings."""
    return TimelineGeometry.from_settings(settings)
