"""Redis store for search caching.

Handles:
- Caching with TTL policies
- JSON encoding of cached payloads

TTL policies:
- Search result sets (search:<canonicalQuery>): 10 minutes
- Closest-match aliases (closest_match:<originalQuery>): 24 hours

Aliases intentionally outlive the result sets they point to; a stale alias
simply leads to a cache miss and a re-fetch.
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from app.settings import get_settings

# TTL constants (in seconds)
TTL_SEARCH_RESULTS = 600  # 10 minutes
TTL_CLOSEST_MATCH = 86400  # 24 hours

# Key prefixes
PREFIX_SEARCH = "search:"
PREFIX_CLOSEST_MATCH = "closest_match:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value from cache.

    Args:
        key: Cache key.

    Returns:
        Parsed JSON dict or None if not found.
    """
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value in cache.

    Args:
        key: Cache key.
        value: Dict to cache as JSON.
        ttl: Time-to-live in seconds.
    """
    await cache_set(key, json.dumps(value), ttl)


# ============================================================
# Search cache operations
# ============================================================


async def get_search_cache(canonical_query: str) -> dict[str, Any] | None:
    """Get cached result set payload for a canonical query."""
    return await cache_get_json(f"{PREFIX_SEARCH}{canonical_query}")


async def set_search_cache(canonical_query: str, payload: dict[str, Any]) -> None:
    """Cache result set payload for a canonical query (TTL 10 minutes)."""
    await cache_set_json(f"{PREFIX_SEARCH}{canonical_query}", payload, TTL_SEARCH_RESULTS)


async def get_closest_match(original_query: str) -> str | None:
    """Get the canonical query previously resolved for `original_query`."""
    return await cache_get(f"{PREFIX_CLOSEST_MATCH}{original_query}")


async def set_closest_match(original_query: str, canonical_query: str) -> None:
    """Record an alias original -> canonical (TTL 24 hours)."""
    await cache_set(f"{PREFIX_CLOSEST_MATCH}{original_query}", canonical_query, TTL_CLOSEST_MATCH)
