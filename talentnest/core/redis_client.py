"""Redis connection, response cache and upload throttling."""

import json
from typing import Any, cast

import redis

from talentnest.config import settings

_redis_client: redis.Redis | None = None

# Keys removed per DEL call when invalidating by pattern
DELETE_BATCH_SIZE = 500


def get_redis_client() -> redis.Redis:
    """Return the process-wide Redis client, creating it on first use."""
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            username=settings.redis_username,
            password=settings.redis_password,
            decode_responses=settings.redis_decode_responses,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )

    return _redis_client


async def check_redis_connection() -> bool:
    """Check if Redis connection is healthy."""
    try:
        get_redis_client().ping()
        return True
    except redis.RedisError:
        return False


def close_redis_connection() -> None:
    """Close Redis connection."""
    global _redis_client

    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


class RateLimiter:
    """
    Fixed-window counter keyed per caller (``upload:<user_id>``).

    The first hit in a window creates the counter and starts its expiry; the
    caller is refused once the counter passes ``limit``. Redis being down
    never blocks a request.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    def check_rate_limit(self, key: str, limit: int, window: int = 60) -> bool:
        """Count one hit against ``key``; return False when over ``limit`` for the window."""
        try:
            count = int(cast(int, self.redis.incr(key)))
            if count == 1:
                self.redis.expire(key, window)
        except redis.RedisError:
            return True

        return count <= limit


class CacheManager:
    """
    JSON response cache for listings, profiles and users.

    Every failure degrades to a miss (reads) or ``False`` (writes) so the API
    keeps serving from the database while Redis is unavailable.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        try:
            if ttl:
                self.redis.setex(key, ttl, value)
            else:
                self.redis.set(key, value)
        except redis.RedisError:
            return False
        return True

    def delete(self, key: str) -> bool:
        try:
            self.redis.delete(key)
        except redis.RedisError:
            return False
        return True

    def exists(self, key: str) -> bool:
        try:
            return bool(self.redis.exists(key))
        except redis.RedisError:
            return False

    def get_json(self, key: str) -> Any | None:
        """Read and decode a cached value; corrupt entries count as misses."""
        try:
            raw = cast(str | None, self.redis.get(key))
        except redis.RedisError:
            return None

        if not raw:
            return None

        try:
            return json.loads(raw)
        except ValueError:
            return None

    def set_json(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Cache ``value`` as JSON. UUIDs, datetimes and decimals are stored as strings."""
        return self.set(key, json.dumps(value, default=str), ttl=ttl)

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete every key matching ``pattern`` (e.g. ``artisans:verified:*``).

        Keys are walked with SCAN rather than KEYS so a large keyspace does
        not stall the server.

        Returns:
            Number of keys deleted
        """
        deleted = 0
        batch: list[str] = []
        try:
            for key in self.redis.scan_iter(match=pattern, count=DELETE_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= DELETE_BATCH_SIZE:
                    deleted += cast(int, self.redis.delete(*batch))
                    batch = []
            if batch:
                deleted += cast(int, self.redis.delete(*batch))
        except redis.RedisError:
            return deleted
        return deleted
