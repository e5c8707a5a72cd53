"""Tests for Redis caching, rate limiting and cache invalidation."""

from unittest.mock import MagicMock

import pytest
import redis

from talentnest.core.redis_client import CacheManager, RateLimiter
from talentnest.services.listing_service import ListingService
from talentnest.services.verification_service import VerificationService


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Cache miss
    mock_redis.get.return_value = None
    assert cache_manager.get_json("test_key") is None
    mock_redis.get.assert_called_once_with("test_key")

    # Cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '{"businessName": "Ada", "rating": 4.5}'
    assert cache_manager.get_json("test_key") == {"businessName": "Ada", "rating": 4.5}


def test_cache_manager_get_json_ignores_corrupt_values():
    """A value that is not JSON reads as a miss."""
    mock_redis = MagicMock()
    mock_redis.get.return_value = "{not json"

    assert CacheManager(redis_client=mock_redis).get_json("test_key") is None


def test_cache_manager_set_json():
    """Test CacheManager set_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.set_json("test_key", {"value": 1}) is True
    mock_redis.set.assert_called_once()

    mock_redis.reset_mock()
    assert cache_manager.set_json("test_key", {"value": 1}, ttl=300) is True
    mock_redis.setex.assert_called_once_with("test_key", 300, '{"value": 1}')


def test_cache_manager_degrades_on_redis_errors():
    """Redis outages turn into misses and failed writes, never exceptions."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = redis.ConnectionError("down")
    mock_redis.setex.side_effect = redis.ConnectionError("down")
    mock_redis.scan_iter.side_effect = redis.ConnectionError("down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("key") is None
    assert cache_manager.set_json("key", {"a": 1}, ttl=10) is False
    assert cache_manager.delete_pattern("artisans:*") == 0


def test_cache_manager_delete_pattern():
    """Matching keys are found with SCAN and removed together."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    keys = ["artisans:verified:::20", "artisans:verified:tailor::lagos:20"]
    mock_redis.scan_iter.return_value = iter(keys)
    mock_redis.delete.return_value = 2

    assert cache_manager.delete_pattern("artisans:verified:*") == 2
    mock_redis.scan_iter.assert_called_once_with(match="artisans:verified:*", count=500)
    mock_redis.delete.assert_called_once_with(*keys)
    mock_redis.keys.assert_not_called()


def test_cache_manager_delete_pattern_without_matches():
    mock_redis = MagicMock()
    mock_redis.scan_iter.return_value = iter([])

    assert CacheManager(redis_client=mock_redis).delete_pattern("provider:*") == 0
    mock_redis.delete.assert_not_called()


def test_rate_limiter_counts_within_window():
    """First hit starts the window; hits past the limit are refused."""
    mock_redis = MagicMock()
    mock_redis.incr.side_effect = [1, 2, 3]
    limiter = RateLimiter(mock_redis)

    assert limiter.check_rate_limit("upload:u1", limit=2, window=60) is True
    assert limiter.check_rate_limit("upload:u1", limit=2, window=60) is True
    assert limiter.check_rate_limit("upload:u1", limit=2, window=60) is False

    mock_redis.expire.assert_called_once_with("upload:u1", 60)


def test_rate_limiter_fails_open():
    """Test that a Redis outage does not block uploads."""
    mock_redis = MagicMock()
    mock_redis.incr.side_effect = redis.ConnectionError("down")

    assert RateLimiter(mock_redis).check_rate_limit("upload:u1", limit=1) is True


@pytest.mark.asyncio
async def test_listing_is_cached_per_query(db_session, verified_artisan_factory):
    """Listing results are stored for five minutes under a query-specific key."""
    await verified_artisan_factory()
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = None

    artisans = await ListingService(cache).list_verified_artisans(
        db_session, search="Tailor", category="All", limit=10
    )

    assert len(artisans) == 1
    cache.get_json.assert_called_once_with("artisans:verified:tailor:::10")
    key, value = cache.set_json.call_args.args
    assert key == "artisans:verified:tailor:::10"
    assert value == artisans
    assert cache.set_json.call_args.kwargs["ttl"] == ListingService.LISTING_CACHE_TTL


@pytest.mark.asyncio
async def test_listing_served_from_cache(db_session):
    """A cache hit skips the database entirely."""
    cached = [{"id": "cached"}]
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = cached
    db = MagicMock()

    assert await ListingService(cache).list_verified_artisans(db) == cached
    db.execute.assert_not_called()


@pytest.mark.asyncio
async def test_decision_invalidates_profile_user_and_listing_caches(
    db_session, admin_user, artisan_user, profile_factory
):
    """Approving a profile drops every cached view that could show stale state."""
    profile = await profile_factory(artisan_user)
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = None

    await VerificationService(cache).decide(db_session, admin_user, profile["id"], "approve")

    deleted = {call.args[0] for call in cache.delete.call_args_list}
    assert f"provider:{profile['id']}" in deleted
    assert f"user:{artisan_user['id']}" in deleted
    patterns = {call.args[0] for call in cache.delete_pattern.call_args_list}
    assert "artisans:verified:*" in patterns
