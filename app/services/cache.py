"""
Cache Service Singleton - Celebrity Timeline
app/services/cache.py

Provides a singleton Redis cache instance with keys and TTLs for celebrity
reads. Gracefully handles Redis unavailability.
"""
import logging
import redis
from typing import Optional
from app.services.redis_cache import RedisCache
from app.config import settings

logger = logging.getLogger(__name__)

# TTL (in seconds); votes invalidate explicitly, the TTL bounds staleness
# from writes made outside this process.
TTL_CELEBRITIES = settings.CACHE_TTL_CELEBRITIES

CACHE_KEY_CELEBRITY_LIST = "celebrity:list"
CACHE_KEY_CELEBRITY_PREFIX = "celebrity:"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_celebrity_cache_key(celebrity_id: str) -> str:
    """Generate cache key for a single celebrity."""
    return f"{CACHE_KEY_CELEBRITY_PREFIX}{celebrity_id}"


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning(f"Redis unavailable, caching disabled: {e}")
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def invalidate_celebrity_cache(celebrity_id: Optional[str] = None) -> None:
    """Drop the cached list and, when given, the single celebrity entry."""
    cache = get_cache()
    if not cache:
        return
    keys = [CACHE_KEY_CELEBRITY_LIST]
    if celebrity_id:
        keys.append(get_celebrity_cache_key(celebrity_id))
    try:
        cache.delete(*keys)
    except Exception as e:
        logger.warning(f"Cache invalidation failed for {keys}: {e}")
