"""
Tests for ATS Cache Service

Tests the Redis-backed JSON cache, its fail-open behaviour and the
fixed-window rate limiter.
"""
import json
import pytest
from unittest.mock import Mock, patch

from core.cache import CacheService, RateLimitStatus, AI_SCORES_TTL_SECONDS
from core.utils import ContentFingerprinter


class ExpiringRedis:
    """Dict-backed stand-in for the few Redis commands the cache uses, on a manual clock."""

    def __init__(self):
        self.now = 0.0
        self.values = {}
        self.expires_at = {}
        self.expire_failures = 0

    def advance(self, seconds: float):
        self.now += seconds

    def _purge(self, key):
        deadline = self.expires_at.get(key)
        if deadline is not None and deadline <= self.now:
            self.values.pop(key, None)
            self.expires_at.pop(key, None)

    def setex(self, key, ttl, value):
        self.values[key] = value
        self.expires_at[key] = self.now + ttl
        return True

    def get(self, key):
        self._purge(key)
        return self.values.get(key)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            self._purge(key)
            if self.values.pop(key, None) is not None:
                removed += 1
            self.expires_at.pop(key, None)
        return removed

    def exists(self, key):
        self._purge(key)
        return int(key in self.values)

    def incr(self, key):
        self._purge(key)
        self.values[key] = int(self.values.get(key, 0)) + 1
        return self.values[key]

    def expire(self, key, ttl):
        if self.expire_failures:
            self.expire_failures -= 1
            raise ConnectionError("connection reset during EXPIRE")
        self._purge(key)
        if key not in self.values:
            return False
        self.expires_at[key] = self.now + ttl
        return True

    def ttl(self, key):
        self._purge(key)
        if key not in self.values:
            return -2
        deadline = self.expires_at.get(key)
        if deadline is None:
            return -1
        return int(deadline - self.now)


class TestCacheService:
    """Test suite for CacheService."""

    @pytest.fixture
    def cache_service(self, mock_redis):
        return CacheService(redis_client=mock_redis)

    def test_initialization_from_url(self, mock_redis):
        with patch('core.cache.ats_cache.Redis') as mock_redis_class:
            mock_redis_class.from_url.return_value = mock_redis

            service = CacheService(redis_url="redis://localhost:6380/0", password="testpass")

            assert service.is_available is True
            mock_redis_class.from_url.assert_called_once()
            _, kwargs = mock_redis_class.from_url.call_args
            assert kwargs["password"] == "testpass"
            assert kwargs["socket_timeout"] == 5

    def test_set_wraps_value_with_timestamp(self, cache_service, mock_redis):
        assert cache_service.set("k", {"a": 1}, ttl=60, namespace="jobs") is True

        key, ttl, payload = mock_redis.setex.call_args[0]
        assert key == "ats:jobs:k"
        assert ttl == 60
        entry = json.loads(payload)
        assert entry["data"] == {"a": 1}
        assert "cached_at" in entry

    def test_set_uses_default_ttl(self, cache_service, mock_redis):
        cache_service.set("k", 1)
        assert mock_redis.setex.call_args[0][1] == 3600

    def test_get_returns_data_on_hit(self, cache_service, mock_redis):
        mock_redis.get.return_value = json.dumps({"data": [1, 2], "cached_at": "2026-01-01T00:00:00"})

        assert cache_service.get("k", namespace="jobs") == [1, 2]
        mock_redis.get.assert_called_once_with("ats:jobs:k")

    def test_get_miss_returns_none(self, cache_service):
        assert cache_service.get("missing") is None

    def test_get_fails_open(self, cache_service, mock_redis):
        mock_redis.get.side_effect = ConnectionError("Redis down")
        assert cache_service.get("k") is None

    def test_set_fails_open(self, cache_service, mock_redis):
        mock_redis.setex.side_effect = ConnectionError("Redis down")
        assert cache_service.set("k", {"a": 1}) is False

    def test_delete_and_exists_fail_open(self, cache_service, mock_redis):
        mock_redis.delete.side_effect = ConnectionError("Redis down")
        mock_redis.exists.side_effect = ConnectionError("Redis down")

        assert cache_service.delete("k") is False
        assert cache_service.exists("k") is False

    def test_corrupt_entry_is_a_miss(self, cache_service, mock_redis):
        mock_redis.get.return_value = "not json{"
        assert cache_service.get("k") is None

    def test_is_available_false_when_ping_fails(self, cache_service, mock_redis):
        mock_redis.ping.side_effect = ConnectionError("Redis down")
        assert cache_service.is_available is False

    def test_flush_namespace_scans_and_deletes(self, cache_service, mock_redis):
        mock_redis.scan.side_effect = [(5, ["ats:jobs:a", "ats:jobs:b"]), (0, ["ats:jobs:c"])]
        mock_redis.delete.side_effect = [2, 1]

        assert cache_service.flush_namespace("jobs") == 3
        assert mock_redis.scan.call_args_list[0][1]["match"] == "ats:jobs:*"

    def test_ai_scores_cached_for_24_hours(self, cache_service, mock_redis):
        cache_service.cache_ai_scores("abc_12345678", {"composite_score": 80})

        key, ttl, _ = mock_redis.setex.call_args[0]
        assert key == "ats:ai_scores:abc_12345678"
        assert ttl == AI_SCORES_TTL_SECONDS == 86400

    def test_job_listing_key_ignores_filter_order(self, cache_service, mock_redis):
        cache_service.cache_job_listings({"search": "writer", "page": 1}, {"jobs": []})
        cache_service.cache_job_listings({"page": 1, "search": "writer"}, {"jobs": []})

        first_key = mock_redis.setex.call_args_list[0][0][0]
        second_key = mock_redis.setex.call_args_list[1][0][0]
        assert first_key == second_key
        assert first_key == f"ats:jobs:{ContentFingerprinter.for_filters({'page': 1, 'search': 'writer'})}"

    def test_cache_stats(self, cache_service):
        stats = cache_service.get_cache_stats()
        assert stats["available"] is True
        assert stats["used_memory_human"] == "1M"

    def test_cache_stats_when_unavailable(self, cache_service, mock_redis):
        mock_redis.info.side_effect = ConnectionError("Redis down")
        assert cache_service.get_cache_stats()["available"] is False


class TestRateLimiter:
    """Fixed window counter semantics."""

    @pytest.fixture
    def cache_service(self, mock_redis):
        return CacheService(redis_client=mock_redis)

    def test_first_increment_sets_window(self, cache_service, mock_redis):
        mock_redis.incr.return_value = 1
        mock_redis.ttl.return_value = 60

        status = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=10)

        mock_redis.incr.assert_called_once_with("ats:rate_limit:score:t1")
        mock_redis.expire.assert_called_once_with("ats:rate_limit:score:t1", 60)
        assert status == RateLimitStatus(count=1, remaining=9, reset_seconds=60)

    def test_later_increments_do_not_extend_window(self, cache_service, mock_redis):
        mock_redis.incr.return_value = 5
        mock_redis.ttl.return_value = 42

        status = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=10)

        mock_redis.expire.assert_not_called()
        assert status.count == 5
        assert status.remaining == 5
        assert status.reset_seconds == 42

    def test_counter_without_ttl_gets_window(self, cache_service, mock_redis):
        mock_redis.incr.return_value = 4
        mock_redis.ttl.return_value = -1

        status = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=10)

        mock_redis.expire.assert_called_once_with("ats:rate_limit:score:t1", 60)
        assert status.count == 4
        assert status.reset_seconds == 60

    def test_exceeded_only_past_max(self, cache_service, mock_redis):
        mock_redis.incr.return_value = 10
        assert not cache_service.increment_rate_limit("id", max_requests=10).exceeded(10)

        mock_redis.incr.return_value = 11
        status = cache_service.increment_rate_limit("id", max_requests=10)
        assert status.exceeded(10)
        assert status.remaining == 0

    def test_fails_open(self, cache_service, mock_redis):
        mock_redis.incr.side_effect = ConnectionError("Redis down")

        status = cache_service.increment_rate_limit("id", window_seconds=30, max_requests=7)

        assert status.count == 0
        assert status.remaining == 7
        assert not status.exceeded(7)

    def test_check_rate_limit(self, cache_service, mock_redis):
        mock_redis.get.return_value = "3"
        assert cache_service.check_rate_limit("id") == 3

        mock_redis.get.side_effect = ConnectionError("Redis down")
        assert cache_service.check_rate_limit("id") == 0


class TestAgainstExpiringBackend:
    """Behaviour over a backend that actually stores and expires keys."""

    @pytest.fixture
    def backend(self):
        return ExpiringRedis()

    @pytest.fixture
    def cache_service(self, backend):
        return CacheService(redis_client=backend)

    def test_value_round_trips_until_ttl_elapses(self, cache_service, backend):
        assert cache_service.set("k", {"a": 1}, ttl=10) is True

        assert cache_service.get("k") == {"a": 1}
        assert cache_service.exists("k") is True

        backend.advance(9)
        assert cache_service.get("k") == {"a": 1}

        backend.advance(1)
        assert cache_service.get("k") is None
        assert cache_service.exists("k") is False

    def test_delete_removes_entry(self, cache_service):
        cache_service.set("k", [1, 2], ttl=60, namespace="jobs")

        assert cache_service.delete("k", namespace="jobs") is True
        assert cache_service.get("k", namespace="jobs") is None
        assert cache_service.delete("k", namespace="jobs") is False

    def test_ai_scores_round_trip(self, cache_service, backend):
        cache_service.cache_ai_scores("abc_12345678", {"composite_score": 80})

        assert cache_service.get_cached_ai_scores("abc_12345678") == {"composite_score": 80}
        backend.advance(AI_SCORES_TTL_SECONDS)
        assert cache_service.get_cached_ai_scores("abc_12345678") is None

    def test_window_resets_after_expiry(self, cache_service, backend):
        for _ in range(3):
            status = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=2)
        assert status.exceeded(2)

        backend.advance(60)

        status = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=2)
        assert status.count == 1
        assert not status.exceeded(2)

    def test_lost_expire_is_reapplied_on_next_increment(self, cache_service, backend):
        key = "ats:rate_limit:score:t1"
        backend.expire_failures = 1

        first = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=5)

        # the counter was bumped but has no TTL
        assert first.count == 0
        assert backend.ttl(key) == -1

        second = cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=5)

        assert second.count == 2
        assert second.reset_seconds == 60
        assert backend.ttl(key) == 60

        backend.advance(60)
        assert cache_service.increment_rate_limit("score:t1", window_seconds=60, max_requests=5).count == 1
