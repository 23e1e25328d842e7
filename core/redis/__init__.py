"""
Redis module for connection management and caching.

Provides Redis connection pooling, health monitoring, and grant result caching.
"""

from .grant_cache_manager import GrantCacheManager
from .redis_manager import RedisManager

__all__ = ["RedisManager", "GrantCacheManager"]
