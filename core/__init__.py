"""
Core module for Grantify search.

Provides filter normalization and query mapping, one-time initialization
tracking, result caching and the grant search service.
"""

# Import from submodules
from .cache import QueryCacheKeyGenerator
from .filters import FilterSession, GrantFilter, map_filters_to_api, validate_filter_state
from .initialization import InitializationContext, InitState
from .redis import GrantCacheManager, RedisManager
from .search import GrantSearchService, SearchResult

__all__ = [
    # Filters
    "GrantFilter",
    "FilterSession",
    "validate_filter_state",
    "map_filters_to_api",
    # Initialization
    "InitializationContext",
    "InitState",
    # Cache
    "QueryCacheKeyGenerator",
    # Redis
    "RedisManager",
    "GrantCacheManager",
    # Search
    "GrantSearchService",
    "SearchResult",
]
