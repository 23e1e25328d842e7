"""
Grant Cache Manager

Redis-backed cache for grant search results, keyed by the mapped query
parameters. Redis failures never break a search: a failed lookup counts as
a miss and a failed store is skipped.
"""

import logging
from typing import Any, Dict, List, Optional

from core.cache.query_cache_key_generator import QueryCacheKeyGenerator
from settings.infrastructure_config import get_cache_config

from .redis_manager import RedisManager

logger = logging.getLogger(__name__)


class GrantCacheManager:
    """
    Cache layer between the grant search service and Redis.

    Knows how to:
    - Generate consistent cache keys for mapped query parameters
    - Store/retrieve grant rows in Redis with a TTL
    - Track hit/miss statistics
    """

    def __init__(
        self,
        redis_manager: Optional[RedisManager] = None,
        key_generator: Optional[QueryCacheKeyGenerator] = None,
        cache_ttl_seconds: Optional[int] = None,
    ) -> None:
        """
        Initialize the grant cache manager

        Args:
            redis_manager: Connection manager (created from config if None)
            key_generator: Cache key generator (default prefix if None)
            cache_ttl_seconds: Cache TTL in seconds (uses cache config if None)
        """
        self.cache_ttl_seconds = cache_ttl_seconds or get_cache_config().ttl_seconds
        self.redis_manager = redis_manager or RedisManager()
        self.key_generator = key_generator or QueryCacheKeyGenerator()

        self._cache_stats = {"hits": 0, "misses": 0, "errors": 0, "total_requests": 0}

        logger.info(f"GrantCacheManager initialized - TTL: {self.cache_ttl_seconds}s")

    def get_cached_result(self, params: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
        """
        Get cached grant rows for a query

        Args:
            params: Mapped query parameters

        Returns:
            Optional[List[Dict[str, Any]]]: Cached grants or None if not found/error
        """
        self._cache_stats["total_requests"] += 1

        if not self.redis_manager.is_healthy():
            logger.debug("Redis unhealthy, skipping cache lookup")
            self._cache_stats["errors"] += 1
            return None

        cache_key = self.key_generator.generate_cache_key(params)
        cached_data = self.redis_manager.get_json(cache_key)

        if isinstance(cached_data, list):
            self._cache_stats["hits"] += 1
            logger.debug(f"Cache HIT for key: {cache_key}")
            return cached_data

        self._cache_stats["misses"] += 1
        logger.debug(f"Cache MISS for key: {cache_key}")
        return None

    def cache_result(self, params: Dict[str, Any], grants: List[Dict[str, Any]]) -> bool:
        """
        Store grant rows for a query

        Args:
            params: Mapped query parameters
            grants: Grant rows returned by the backend

        Returns:
            bool: True if successfully cached, False otherwise
        """
        if not self.redis_manager.is_healthy():
            logger.debug("Redis unhealthy, skipping cache storage")
            return False

        # Don't cache empty results
        if not grants:
            logger.debug("Empty result, skipping cache storage")
            return False

        cache_key = self.key_generator.generate_cache_key(params)
        success = self.redis_manager.set_json(key=cache_key, value=grants, ttl=self.cache_ttl_seconds)

        if success:
            logger.debug(f"Cached {len(grants)} grants for key: {cache_key} (TTL: {self.cache_ttl_seconds}s)")
        else:
            logger.warning(f"Failed to cache result for key: {cache_key}")
        return success

    def invalidate(self, params: Dict[str, Any]) -> bool:
        """Drop the cached entry for a query"""
        return self.redis_manager.delete(self.key_generator.generate_cache_key(params))

    def list_cached_keys(self) -> List[str]:
        """Keys of every cached grant search under this generator's prefix"""
        return self.redis_manager.list_keys(f"{self.key_generator.prefix}:*")

    def clear_cache(self) -> int:
        """
        Delete every cached grant search

        Returns:
            int: Number of entries removed
        """
        deleted = self.redis_manager.delete_matching(f"{self.key_generator.prefix}:*")
        logger.info(f"Cleared {deleted} cached grant searches")
        return deleted

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get cache performance statistics

        Returns:
            Dict[str, Any]: Cache statistics including hit rate and Redis health
        """
        total_requests = self._cache_stats["total_requests"]
        hits = self._cache_stats["hits"]
        hit_rate_percent = (hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "cache_type": "redis",
            "ttl_seconds": self.cache_ttl_seconds,
            "hits": hits,
            "misses": self._cache_stats["misses"],
            "errors": self._cache_stats["errors"],
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate_percent, 2),
            "redis_connection": self.redis_manager.get_connection_info(),
        }

    def reset_stats(self) -> None:
        """Reset cache statistics"""
        self._cache_stats = {"hits": 0, "misses": 0, "errors": 0, "total_requests": 0}
