"""Cache Module - Caching services."""
from core.cache.ats_cache import (
    CacheService,
    RateLimitStatus,
    KEY_PREFIX,
    DEFAULT_TTL_SECONDS,
    JOB_LISTINGS_TTL_SECONDS,
    AI_SCORES_TTL_SECONDS,
)

__all__ = [
    'CacheService',
    'RateLimitStatus',
    'KEY_PREFIX',
    'DEFAULT_TTL_SECONDS',
    'JOB_LISTINGS_TTL_SECONDS',
    'AI_SCORES_TTL_SECONDS',
]
