"""
Cache module for grant search results.

Provides deterministic cache keys for mapped query parameters.
"""

from .query_cache_key_generator import QueryCacheKeyGenerator

__all__ = ["QueryCacheKeyGenerator"]
