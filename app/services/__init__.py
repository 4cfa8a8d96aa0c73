"""
Services module for the Celebrity Timeline.
"""

from app.services.cache import get_cache, invalidate_celebrity_cache
from app.services.vote_service import VoteService, validate_vote_percent

__all__ = [
    "get_cache",
    "invalidate_celebrity_cache",
    "VoteService",
    "validate_vote_percent",
]
