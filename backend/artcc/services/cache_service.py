"""
Redis caching for the activity report.

CACHING STRATEGY
================

What we cache:
  - Finished activity reports (JSON-serialized)
  - Cache key pattern: "activity_report:{months}" with the month set sorted
    and de-duplicated, so ?month=2025-02&month=2025-01 and the reverse share
    one entry

Why:
  - Building a report may mean one external request per roster controller
  - Admins re-open the same report many times while working through it

Expiry:
  - Fixed TTL (ACTIVITY_REPORT_CACHE_TTL, 6 hours)
  - Explicit clear removes every cached report via SCAN on the key prefix

Redis is optional. When it is disabled or unreachable every call here
degrades to a miss/no-op and reports are simply recomputed.

Concurrent requests for the same uncached month set may both compute the
report; the second write just replaces the first.
"""

import json
from typing import Optional

import redis.asyncio as redis
from artcc.core.config import get_settings
from artcc.core.logging import get_logger
from artcc.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

ACTIVITY_REPORT_PREFIX = "activity_report:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.close()
        _redis_client = None


def make_activity_report_key(months: list[str]) -> str:
    return ACTIVITY_REPORT_PREFIX + ",".join(sorted(set(months)))


async def get_cached_report(months: list[str]) -> Optional[dict]:
    client = await get_redis()
    if not client:
        return None

    key = make_activity_report_key(months)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=bool(data))
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_report(months: list[str], data: dict) -> None:
    client = await get_redis()
    if not client:
        return

    key = make_activity_report_key(months)
    try:
        await client.setex(
            key, settings.ACTIVITY_REPORT_CACHE_TTL, json.dumps(data, default=str)
        )
        logger.debug("cache_set", key=key, ttl=settings.ACTIVITY_REPORT_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def clear_activity_reports() -> int:
    """Remove every cached activity report. Returns the number of keys deleted."""
    client = await get_redis()
    if not client:
        return 0

    deleted = 0
    try:
        async for key in client.scan_iter(match=ACTIVITY_REPORT_PREFIX + "*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))
    return deleted


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
