"""
Settings module for Grantify.

Contains environment configuration and application settings.
"""

from .infrastructure_config import (
    CacheConfig,
    FilterConfig,
    RedisConfig,
    get_cache_config,
    get_environment_manager,
    get_filter_config,
    get_redis_config,
    reset_environment_manager,
)

__all__ = [
    # Configuration classes
    "FilterConfig",
    "RedisConfig",
    "CacheConfig",
    # Environment manager
    "get_environment_manager",
    "reset_environment_manager",
    # Convenience functions
    "get_filter_config",
    "get_redis_config",
    "get_cache_config",
]
