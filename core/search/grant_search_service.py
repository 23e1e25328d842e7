"""
Grant search service.

Coordinates one grant search: validates the filter, maps it to query
parameters, checks the result cache, and hands cache misses to the injected
backend executor. The executor owns the network call; this module never
talks to the grants API directly.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from core.filters.mapper import QueryParams, map_filters_to_api
from core.filters.models import GrantFilter
from core.filters.validator import validate_filter_state
from core.initialization import InitializationContext
from settings.infrastructure_config import FilterConfig, get_filter_config
from utils.query_string import build_grants_url, encode_query_params

logger = logging.getLogger(__name__)

GrantRows = List[Dict[str, Any]]
SearchExecutor = Callable[[QueryParams], GrantRows]

CACHE_MANAGER_KEY = "grant_cache_manager"


@dataclass
class SearchResult:
    """Outcome of a single grant search."""

    params: QueryParams
    grants: GrantRows = field(default_factory=list)
    from_cache: bool = False
    duration_seconds: float = 0.0

    @property
    def count(self) -> int:
        return len(self.grants)


def _build_default_cache_manager() -> Any:
    # Imported lazily so a missing Redis server only matters once caching is used
    from core.redis.grant_cache_manager import GrantCacheManager

    return GrantCacheManager()


class GrantSearchService:
    """
    Grant search entry point.

    This class provides:
    - Validation and mapping of the user's filter
    - Result caching keyed by the mapped parameters
    - Lazy, once-only cache manager setup through an InitializationContext
    """

    def __init__(
        self,
        executor: SearchExecutor,
        cache_manager: Optional[Any] = None,
        init_context: Optional[InitializationContext] = None,
        config: Optional[FilterConfig] = None,
        use_cache: bool = True,
    ) -> None:
        """
        Args:
            executor: Callable that runs mapped params against the backend
            cache_manager: Object with get_cached_result/cache_result (built lazily if None)
            init_context: Tracks one-time setup (a private context if None)
            config: Filter settings (uses environment config if None)
            use_cache: Disable to always call the executor
        """
        self.executor = executor
        self.config = config or get_filter_config()
        self.init_context = init_context or InitializationContext("grant_search")
        self.use_cache = use_cache
        self._cache_manager = cache_manager

    @property
    def cache_manager(self) -> Optional[Any]:
        """Cache manager, created on first use. None when caching is off or setup failed."""
        if not self.use_cache:
            return None
        if self._cache_manager is None:
            try:
                self._cache_manager = self.init_context.run_once(CACHE_MANAGER_KEY, _build_default_cache_manager)
            except Exception as e:
                logger.warning(f"Result cache unavailable, searching without it: {e}")
                return None
        return self._cache_manager

    def build_params(self, grant_filter: GrantFilter, now: Optional[datetime] = None) -> QueryParams:
        """Validate the filter and map it to query parameters."""
        validated = validate_filter_state(grant_filter, self.config)
        return map_filters_to_api(validated, now=now, config=self.config)

    def search(self, grant_filter: GrantFilter, now: Optional[datetime] = None) -> SearchResult:
        """
        Run a grant search.

        Args:
            grant_filter: User's current filter
            now: Reference time for deadline offsets (defaults to current UTC time)

        Returns:
            SearchResult with the mapped params and grant rows

        Raises:
            Whatever the executor raises; backend failures are not masked.
        """
        start_time = time.time()
        params = self.build_params(grant_filter, now=now)
        logger.debug(f"Grant search query: {encode_query_params(params)}")

        cache = self.cache_manager
        if cache is not None:
            cached = cache.get_cached_result(params)
            if cached is not None:
                duration = time.time() - start_time
                logger.info(f"Grant search served from cache: {len(cached)} grants")
                return SearchResult(params=params, grants=cached, from_cache=True, duration_seconds=duration)

        grants = list(self.executor(params))

        if cache is not None and grants:
            cache.cache_result(params, grants)

        duration = time.time() - start_time
        logger.info(f"Grant search completed: {len(grants)} grants in {duration:.2f}s")
        return SearchResult(params=params, grants=grants, from_cache=False, duration_seconds=duration)

    def search_url(self, base_url: str, grant_filter: GrantFilter, now: Optional[datetime] = None) -> str:
        """Full request URL for a filter, for executors that issue plain GETs."""
        return build_grants_url(base_url, self.build_params(grant_filter, now=now))
