"""
Environment Configuration Management

This module handles loading and validating environment variables for Grantify.
It provides fallback defaults and type validation for all configuration options.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from config.grant_filters import DEFAULT_PAGE_SIZE, MAX_DEADLINE_DAYS, MIN_DEADLINE_DAYS

load_dotenv()

# Set up logging for configuration loading
logger = logging.getLogger(__name__)


@dataclass
class FilterConfig:
    """
    Filter Configuration

    Page size and deadline window used when building grant queries.
    """

    default_page_size: int = DEFAULT_PAGE_SIZE
    min_deadline_days: int = MIN_DEADLINE_DAYS
    max_deadline_days: int = MAX_DEADLINE_DAYS

    def __post_init__(self) -> None:
        """Validate configuration after initialization"""
        if self.default_page_size < 1:
            raise ValueError("Default page size must be at least 1")
        if self.default_page_size > 100:
            raise ValueError("Default page size cannot exceed 100")
        if self.min_deadline_days > 0:
            raise ValueError("Minimum deadline offset must not be in the future")
        if self.max_deadline_days < self.min_deadline_days:
            raise ValueError("Maximum deadline offset must be greater than the minimum")


@dataclass
class RedisConfig:
    """
    Redis Configuration

    This dataclass holds all Redis connection settings with sensible defaults.
    """

    url: str
    ttl: int
    max_connections: int = 10
    retry_attempts: int = 3
    retry_delay: float = 1.0
    health_check_interval: int = 30

    def __post_init__(self) -> None:
        """Validate configuration after initialization"""
        if self.ttl < 1:
            raise ValueError("Redis TTL must be at least 1 second")
        if self.max_connections < 1:
            raise ValueError("Max connections must be at least 1")
        if self.retry_attempts < 1:
            raise ValueError("Retry attempts must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("Retry delay must be non-negative")
        if self.health_check_interval < 1:
            raise ValueError("Health check interval must be at least 1 second")


@dataclass
class CacheConfig:
    """
    Cache Configuration

    TTL for cached grant search results. Grant listings change daily at most,
    but deadline windows move with the clock, so entries stay short-lived.
    """

    ttl_seconds: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization"""
        if self.ttl_seconds < 1:
            raise ValueError("Cache TTL must be at least 1 second")
        if self.ttl_seconds > 86400:  # 24 hours in seconds
            raise ValueError("Cache TTL cannot exceed 86400 seconds (24 hours)")


class EnvironmentManager:
    """
    Environment Variable Manager

    This class manages all environment variables with validation and defaults.
    """

    def __init__(self) -> None:
        """Initialize the environment manager and load all configurations"""
        self._filter_config: Optional[FilterConfig] = None
        self._redis_config: Optional[RedisConfig] = None
        self._cache_config: Optional[CacheConfig] = None
        self._load_configurations()

    def _load_configurations(self) -> None:
        """Load and validate all environment configurations"""
        logger.info("Loading environment configurations...")

        try:
            self._filter_config = self._load_filter_config()
            self._redis_config = self._load_redis_config()
            self._cache_config = self._load_cache_config()

            logger.info("Environment configurations loaded successfully")

        except ValueError as e:
            logger.error(f"Failed to load environment configurations: {e}")
            # Use safe defaults if configuration fails
            self._filter_config = FilterConfig()
            self._redis_config = RedisConfig(url="redis://localhost:6379", ttl=300)
            self._cache_config = CacheConfig(ttl_seconds=300)

    def _load_filter_config(self) -> FilterConfig:
        """
        Load filter configuration from environment variables

        Returns:
            FilterConfig: Validated configuration object
        """
        default_page_size = self._get_env_int("GRANTIFY_DEFAULT_PAGE_SIZE", default=DEFAULT_PAGE_SIZE)
        min_deadline_days = self._get_env_signed_int("GRANTIFY_MIN_DEADLINE_DAYS", default=MIN_DEADLINE_DAYS)
        max_deadline_days = self._get_env_int("GRANTIFY_MAX_DEADLINE_DAYS", default=MAX_DEADLINE_DAYS)

        logger.debug(
            f"Filter config - page_size: {default_page_size}, "
            f"deadline window: {min_deadline_days}..{max_deadline_days} days"
        )

        return FilterConfig(
            default_page_size=default_page_size,
            min_deadline_days=min_deadline_days,
            max_deadline_days=max_deadline_days,
        )

    def _load_redis_config(self) -> RedisConfig:
        """
        Load Redis configuration from environment variables

        Returns:
            RedisConfig: Validated configuration object
        """
        url = os.getenv("REDIS_URL", "redis://localhost:6379")
        ttl = self._get_env_int("REDIS_TTL", default=300)
        max_connections = self._get_env_int("REDIS_MAX_CONNECTIONS", default=10)

        logger.debug(f"Redis config - url: {url}, ttl: {ttl}s, max_connections: {max_connections}")

        return RedisConfig(url=url, ttl=ttl, max_connections=max_connections)

    def _load_cache_config(self) -> CacheConfig:
        """
        Load cache configuration from environment variables

        Uses the REDIS_TTL setting directly in seconds.

        Returns:
            CacheConfig: Validated configuration object
        """
        ttl_seconds = self._get_env_int("REDIS_TTL", default=300)

        logger.debug(f"Cache config - ttl_seconds: {ttl_seconds}s (from REDIS_TTL)")

        return CacheConfig(ttl_seconds=ttl_seconds)

    def _get_env_int(self, key: str, default: int) -> int:
        """
        Get non-negative integer environment variable with validation

        Args:
            key: Environment variable name
            default: Default value if not set or invalid

        Returns:
            int: Validated integer value
        """
        value = self._get_env_signed_int(key, default)
        if value < 0:
            logger.warning(f"Environment variable {key} is negative, using default: {default}")
            return default
        return value

    def _get_env_signed_int(self, key: str, default: int) -> int:
        """Get integer environment variable, negative values allowed."""
        value = os.getenv(key)

        if value is None:
            logger.debug(f"Environment variable {key} not set, using default: {default}")
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning(f"Environment variable {key} is not a valid integer, using default: {default}")
            return default

    @property
    def filters(self) -> FilterConfig:
        """
        Get filter configuration

        Returns:
            FilterConfig: Current filter settings
        """
        if self._filter_config is None:
            self._filter_config = FilterConfig()
        return self._filter_config

    @property
    def redis(self) -> RedisConfig:
        """
        Get Redis configuration

        Returns:
            RedisConfig: Current Redis settings
        """
        if self._redis_config is None:
            self._redis_config = RedisConfig(url="redis://localhost:6379", ttl=300)
        return self._redis_config

    @property
    def cache(self) -> CacheConfig:
        """
        Get cache configuration

        Returns:
            CacheConfig: Current cache settings
        """
        if self._cache_config is None:
            self._cache_config = CacheConfig(ttl_seconds=300)
        return self._cache_config


_environment_manager: Optional[EnvironmentManager] = None


def get_environment_manager() -> EnvironmentManager:
    """
    Get the global environment manager instance

    Returns:
        EnvironmentManager: Singleton environment manager
    """
    global _environment_manager
    if _environment_manager is None:
        _environment_manager = EnvironmentManager()
    return _environment_manager


def reset_environment_manager() -> None:
    """Drop the cached manager so the next access re-reads the environment."""
    global _environment_manager
    _environment_manager = None


def get_filter_config() -> FilterConfig:
    """
    Convenience function to get filter configuration

    Returns:
        FilterConfig: Current filter settings
    """
    return get_environment_manager().filters


def get_redis_config() -> RedisConfig:
    """
    Convenience function to get Redis configuration

    Returns:
        RedisConfig: Current Redis settings
    """
    return get_environment_manager().redis


def get_cache_config() -> CacheConfig:
    """
    Convenience function to get cache configuration

    Returns:
        CacheConfig: Current cache settings
    """
    return get_environment_manager().cache
