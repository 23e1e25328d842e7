"""
Redis Connection Manager

Connection pooling, retry with exponential backoff, health checks and JSON
serialization for cached grant search results. When Redis is unavailable
the manager reports itself unhealthy and callers skip caching.
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import redis
from redis.exceptions import AuthenticationError, ConnectionError, RedisError, TimeoutError

from settings.infrastructure_config import RedisConfig, get_redis_config

logger = logging.getLogger(__name__)


class RedisManager:
    """
    Redis connection manager.

    Wraps a pooled redis.Redis client. Transient connection errors are
    retried with exponential backoff; everything else is logged and surfaces
    as a failed (False / None) result from the JSON helpers.
    """

    def __init__(self, config: Optional[RedisConfig] = None, client: Optional[redis.Redis] = None) -> None:
        """
        Initialize Redis manager.

        Args:
            config: Connection settings (uses environment config if None)
            client: Pre-built client, mainly for tests; skips URL parsing
        """
        self.config = config or get_redis_config()
        self.redis_url = self.config.url

        self._redis_client: Optional[redis.Redis] = client
        self._last_health_check = 0.0
        self._is_healthy = False
        self._connection_attempts = 0

        if self._redis_client is None:
            self._initialize_connection()
        else:
            self._test_connection()

    def _initialize_connection(self) -> None:
        """Initialize Redis connection with connection pooling"""
        try:
            parsed_url = urlparse(self.redis_url)

            self._redis_client = redis.Redis(
                host=parsed_url.hostname or "localhost",
                port=parsed_url.port or 6379,
                password=parsed_url.password,
                db=int(parsed_url.path[1:]) if parsed_url.path and len(parsed_url.path) > 1 else 0,
                max_connections=self.config.max_connections,
                retry_on_timeout=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                decode_responses=True,
            )

            self._test_connection()
            logger.info(f"Redis connection established: {parsed_url.hostname}:{parsed_url.port or 6379}")

        except (RedisError, ValueError) as e:
            logger.warning(f"Failed to initialize Redis connection: {e}")
            self._redis_client = None
            self._is_healthy = False

    def _test_connection(self) -> bool:
        """Ping Redis and record the result"""
        if not self._redis_client:
            return False

        try:
            response = self._redis_client.ping()
            self._is_healthy = bool(response)
        except RedisError as e:
            logger.debug(f"Redis connection test failed: {e}")
            self._is_healthy = False

        self._last_health_check = time.time()
        return self._is_healthy

    def is_healthy(self) -> bool:
        """
        Check if Redis connection is healthy

        Re-pings once the health check interval has elapsed.

        Returns:
            bool: True if Redis is available and responding
        """
        if time.time() - self._last_health_check > self.config.health_check_interval:
            self._test_connection()
        return self._is_healthy

    def _execute_with_retry(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """
        Execute Redis operation with retry logic

        Raises:
            RedisError: If all retry attempts fail
        """
        if not self._redis_client:
            raise RedisError("Redis client not initialized")

        last_exception: Optional[Exception] = None

        for attempt in range(self.config.retry_attempts):
            try:
                result = getattr(self._redis_client, operation)(*args, **kwargs)
                self._connection_attempts = 0
                return result

            except (ConnectionError, TimeoutError) as e:
                last_exception = e
                self._connection_attempts += 1
                logger.warning(f"Redis {operation} failed (attempt {attempt + 1}/{self.config.retry_attempts}): {e}")

                if attempt < self.config.retry_attempts - 1:
                    time.sleep(self.config.retry_delay * (2**attempt))

            except AuthenticationError as e:
                logger.error(f"Redis authentication failed: {e}")
                raise

        logger.error(f"Redis {operation} failed after {self.config.retry_attempts} attempts")
        self._is_healthy = False
        raise last_exception or RedisError(f"Redis {operation} failed")

    def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store JSON-serializable data in Redis

        Args:
            key: Redis key
            value: Data to store (must be JSON serializable)
            ttl: Time to live in seconds (optional)

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            json_data = json.dumps(value, default=str)
            if ttl:
                result = self._execute_with_retry("setex", key, ttl, json_data)
            else:
                result = self._execute_with_retry("set", key, json_data)
            return bool(result)
        except (RedisError, TypeError, ValueError) as e:
            logger.error(f"Failed to set JSON data for key '{key}': {e}")
            return False

    def get_json(self, key: str) -> Optional[Any]:
        """
        Retrieve and deserialize JSON data from Redis

        Returns:
            Any: Deserialized data or None if not found/failed
        """
        try:
            json_data = self._execute_with_retry("get", key)
            if json_data is None:
                return None
            return json.loads(json_data)
        except (RedisError, ValueError) as e:
            logger.error(f"Failed to get JSON data for key '{key}': {e}")
            return None

    def delete(self, key: str) -> bool:
        """Delete a key from Redis"""
        try:
            return bool(self._execute_with_retry("delete", key))
        except RedisError as e:
            logger.error(f"Failed to delete key '{key}': {e}")
            return False

    def list_keys(self, pattern: str) -> List[str]:
        """List keys matching a glob pattern (SCAN, not KEYS)."""
        try:
            return list(self._execute_with_retry("scan_iter", match=pattern))
        except RedisError as e:
            logger.error(f"Failed to list keys matching '{pattern}': {e}")
            return []

    def delete_matching(self, pattern: str) -> int:
        """
        Delete every key matching a glob pattern

        Returns:
            int: Number of keys deleted
        """
        keys = self.list_keys(pattern)
        if not keys:
            return 0
        try:
            return int(self._execute_with_retry("delete", *keys))
        except RedisError as e:
            logger.error(f"Failed to delete keys matching '{pattern}': {e}")
            return 0

    def get_connection_info(self) -> Dict[str, Any]:
        """
        Get Redis connection information

        Returns:
            Dict: Connection information including health status
        """
        return {
            "url": self.redis_url,
            "healthy": self._is_healthy,
            "connection_attempts": self._connection_attempts,
            "last_health_check": self._last_health_check,
            "max_connections": self.config.max_connections,
        }

    def close(self) -> None:
        """Close Redis connection"""
        if self._redis_client:
            try:
                self._redis_client.close()
                logger.info("Redis connection closed")
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self._redis_client = None
                self._is_healthy = False

    def __enter__(self) -> "RedisManager":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit"""
        self.close()
