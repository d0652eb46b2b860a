"""Tests for Redis caching implementation."""

from datetime import time
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.config import Settings, settings
from app.core.redis_client import CacheManager
from app.schemas.schedules import WeeklyScheduleUpdate
from app.services.schedule_service import ScheduleOwner, ScheduleService


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    result = cache_manager.get_json("test_key")
    assert result is None
    mock_redis.get.assert_called_once_with("test_key")

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '{"day_of_week": 2, "enabled": true}'
    result = cache_manager.get_json("test_key")
    assert result == {"day_of_week": 2, "enabled": True}
    mock_redis.get.assert_called_once_with("test_key")


def test_cache_manager_set_json():
    """Test CacheManager set_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    test_data = {"day_of_week": 2, "start_time": "09:00:00"}

    # Test without TTL
    result = cache_manager.set_json("test_key", test_data)
    assert result is True
    mock_redis.set.assert_called_once()

    # Test with TTL
    mock_redis.reset_mock()
    result = cache_manager.set_json("test_key", test_data, ttl=300)
    assert result is True
    mock_redis.setex.assert_called_once()


def test_cache_manager_delete():
    """Test CacheManager delete method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    result = cache_manager.delete("test_key")
    assert result is True
    mock_redis.delete.assert_called_once_with("test_key")


def test_cache_manager_delete_pattern():
    """Test CacheManager delete_pattern method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    mock_redis.scan_iter.return_value = iter(
        [
            "schedule:clinic:abc:0",
            "schedule:clinic:abc:1",
            "schedule:clinic:abc:2",
        ]
    )
    mock_redis.delete.return_value = 3

    result = cache_manager.delete_pattern("schedule:clinic:abc:*")

    mock_redis.scan_iter.assert_called_once_with(match="schedule:clinic:abc:*")
    # Should delete all matched keys
    assert result == 3


def test_cache_manager_fails_open():
    """Redis outages degrade to cache misses."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = RedisConnectionError("down")
    mock_redis.setex.side_effect = RedisConnectionError("down")
    mock_redis.scan_iter.side_effect = RedisConnectionError("down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("test_key") is None
    assert cache_manager.set_json("test_key", {"a": 1}, ttl=60) is False
    assert cache_manager.delete_pattern("schedule:*") == 0


@pytest.mark.asyncio
async def test_schedule_entry_cached_after_miss():
    """A database read fills the cache with a JSON-safe entry."""
    clinic_id = uuid4()
    result = MagicMock()
    result.mappings.return_value.first.return_value = {
        "day_of_week": 2,
        "enabled": True,
        "start_time": time(8),
        "end_time": time(12),
        "break_start": None,
        "break_end": None,
    }
    db = AsyncMock()
    db.execute.return_value = result
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = None

    entry = await ScheduleService(db, cache).get_clinic_schedule(clinic_id, 2)

    assert entry is not None
    assert entry.start_time == time(8)
    cache.set_json.assert_called_once_with(
        f"schedule:clinic:{clinic_id}:2",
        {
            "day_of_week": 2,
            "enabled": True,
            "start_time": "08:00:00",
            "end_time": "12:00:00",
            "break_start": None,
            "break_end": None,
        },
        ttl=settings.schedule_cache_ttl,
    )


@pytest.mark.asyncio
async def test_schedule_entry_served_from_cache():
    """A cache hit never touches the database."""
    branch_id = uuid4()
    db = AsyncMock()
    cache = MagicMock(spec=CacheManager)
    cache.get_json.return_value = {
        "day_of_week": 0,
        "enabled": True,
        "start_time": "09:00:00",
        "end_time": "17:00:00",
        "break_start": "12:00:00",
        "break_end": "13:00:00",
    }

    entry = await ScheduleService(db, cache).get_provider_schedule(branch_id, 0)

    assert entry is not None
    assert entry.break_start == time(12)
    assert entry.end_time == time(17)
    cache.get_json.assert_called_once_with(f"schedule:branch:{branch_id}:0")
    db.execute.assert_not_called()


@pytest.mark.asyncio
async def test_schedule_replace_invalidates_cache():
    """Replacing a template drops every cached day of that owner."""
    clinic_id = uuid4()
    result = MagicMock()
    result.mappings.return_value.all.return_value = []
    db = AsyncMock()
    db.execute.return_value = result
    cache = MagicMock(spec=CacheManager)

    update = WeeklyScheduleUpdate(
        schedule={"monday": {"enabled": True, "start_time": "09:00", "end_time": "17:00"}}
    )
    response = await ScheduleService(db, cache).replace_weekly_schedule(
        ScheduleOwner.CLINIC, clinic_id, update
    )

    cache.delete_pattern.assert_called_once_with(f"schedule:clinic:{clinic_id}:*")
    db.commit.assert_awaited_once()
    assert response.owner_id == clinic_id
    assert len(response.schedule) == 7


def test_schedule_cache_ttl_default_is_short():
    """Stale entries re-cached by a read racing a replace expire within a minute."""
    assert Settings.model_fields["schedule_cache_ttl"].default == 60
