"""ATS Cache Service - Redis caching and rate limiting."""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis

from core.utils import ContentFingerprinter

logger = logging.getLogger(__name__)

KEY_PREFIX = "ats:"

DEFAULT_TTL_SECONDS = 3600
JOB_LISTINGS_TTL_SECONDS = 300
AI_SCORES_TTL_SECONDS = 24 * 60 * 60  # 86400 seconds


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except Exception:
        return url


@dataclass(frozen=True)
class RateLimitStatus:
    count: int
    remaining: int
    reset_seconds: int

    def exceeded(self, max_requests: int) -> bool:
        return self.count > max_requests


class CacheService:
    """
    Namespaced JSON cache over Redis.

    Caching is an accelerator only: every operation swallows backend errors
    and degrades to a miss / no-op, logging a warning.
    """

    def __init__(
        self,
        redis_client: Optional[Redis] = None,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        prefix: str = KEY_PREFIX
    ):
        self.redis_url = redis_url
        self.default_ttl = default_ttl
        self.prefix = prefix

        if redis_client is not None:
            self._redis = redis_client
        else:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            logger.info(f"Cache configured for Redis at {_sanitize_url(redis_url)}")

    @property
    def is_available(self) -> bool:
        """Check if cache backend answers a ping."""
        try:
            return bool(self._redis.ping())
        except Exception:
            return False

    def _make_key(self, key: str, namespace: Optional[str] = None) -> str:
        if namespace:
            return f"{self.prefix}{namespace}:{key}"
        return f"{self.prefix}{key}"

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any, ttl: Optional[int] = None, namespace: Optional[str] = None) -> bool:
        """Serialize and store ``value``. Returns False on any backend failure."""
        try:
            full_key = self._make_key(key, namespace)
            ttl = ttl or self.default_ttl

            cache_entry = {
                "data": value,
                "cached_at": datetime.now(timezone.utc).isoformat(),
            }

            self._redis.setex(full_key, ttl, json.dumps(cache_entry, default=str))
            logger.debug(f"Cached {full_key} (TTL: {ttl}s)")
            return True

        except Exception as e:
            logger.warning(f"Error writing to cache: {e}")
            return False

    def get(self, key: str, namespace: Optional[str] = None) -> Optional[Any]:
        """Deserialized value, or None when absent or on backend failure."""
        try:
            full_key = self._make_key(key, namespace)
            data = self._redis.get(full_key)

            if data is None:
                logger.debug(f"Cache miss for {full_key}")
                return None

            cache_entry = json.loads(data)
            logger.debug(f"Cache hit for {full_key}")
            return cache_entry.get("data")

        except Exception as e:
            logger.warning(f"Error reading from cache: {e}")
            return None

    def delete(self, key: str, namespace: Optional[str] = None) -> bool:
        """True only if a key was actually removed."""
        try:
            removed = self._redis.delete(self._make_key(key, namespace))
            return bool(removed)
        except Exception as e:
            logger.warning(f"Error deleting from cache: {e}")
            return False

    def exists(self, key: str, namespace: Optional[str] = None) -> bool:
        try:
            return bool(self._redis.exists(self._make_key(key, namespace)))
        except Exception as e:
            logger.warning(f"Error checking cache key: {e}")
            return False

    def expire(self, key: str, ttl: int, namespace: Optional[str] = None) -> bool:
        try:
            return bool(self._redis.expire(self._make_key(key, namespace), ttl))
        except Exception as e:
            logger.warning(f"Error setting cache expiry: {e}")
            return False

    def flush_namespace(self, namespace: str) -> int:
        """Delete every key under ``namespace``. Returns the number removed."""
        pattern = self._make_key("*", namespace)
        deleted = 0
        try:
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=pattern, count=100)
                if keys:
                    deleted += self._redis.delete(*keys)
                if cursor == 0:
                    break

            logger.info(f"Flushed {deleted} keys from cache namespace '{namespace}'")
            return deleted

        except Exception as e:
            logger.warning(f"Error flushing cache namespace '{namespace}': {e}")
            return deleted

    # ------------------------------------------------------------------
    # Specialized helpers
    # ------------------------------------------------------------------

    def cache_job_listings(
        self,
        filters: Dict[str, Any],
        data: Any,
        ttl: int = JOB_LISTINGS_TTL_SECONDS
    ) -> bool:
        return self.set(ContentFingerprinter.for_filters(filters), data, ttl=ttl, namespace="jobs")

    def get_cached_job_listings(self, filters: Dict[str, Any]) -> Optional[Any]:
        return self.get(ContentFingerprinter.for_filters(filters), namespace="jobs")

    def cache_ai_scores(self, score_key: str, scores: Any, ttl: int = AI_SCORES_TTL_SECONDS) -> bool:
        return self.set(score_key, scores, ttl=ttl, namespace="ai_scores")

    def get_cached_ai_scores(self, score_key: str) -> Optional[Any]:
        return self.get(score_key, namespace="ai_scores")

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    def increment_rate_limit(
        self,
        identity: str,
        window_seconds: int = 3600,
        max_requests: int = 100
    ) -> RateLimitStatus:
        """
        Count one request for ``identity`` in the current window.

        The window TTL is set by the increment that creates the counter, so
        later increments never extend it. A counter left without a TTL (its
        EXPIRE was lost) gets one on the next increment. Fails open.
        """
        key = self._make_key(identity, "rate_limit")
        try:
            count = int(self._redis.incr(key))
            ttl = self._redis.ttl(key)
            # -1: key exists with no expiry
            if count == 1 or ttl == -1:
                self._redis.expire(key, window_seconds)
                ttl = window_seconds

            reset_seconds = ttl if ttl and ttl > 0 else window_seconds

            return RateLimitStatus(
                count=count,
                remaining=max(0, max_requests - count),
                reset_seconds=reset_seconds
            )

        except Exception as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return RateLimitStatus(count=0, remaining=max_requests, reset_seconds=window_seconds)

    def check_rate_limit(self, identity: str) -> int:
        """Current count without incrementing; 0 when absent or on failure."""
        try:
            value = self._redis.get(self._make_key(identity, "rate_limit"))
            return int(value) if value is not None else 0
        except Exception as e:
            logger.warning(f"Error reading rate limit: {e}")
            return 0

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        try:
            info = self._redis.info()
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0),
                "default_ttl_seconds": self.default_ttl,
            }
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}
