"""
Query Cache Key Generator

Generates consistent cache keys for grant search query parameters.

Key Format: {prefix}:{search_slug}:p{page}:{hash}
Examples:
- grants:climate_research:p1:3f2a9c1b
- grants:any:p2:a81d00e4

Deadline bounds are absolute timestamps resolved at mapping time, so two
mappings of the same filter seconds apart differ. They are truncated to the
minute before hashing so identical searches share a cache entry.
"""

import hashlib
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Parameters holding timestamps resolved from day offsets
_TIMESTAMP_PARAMS = ("deadline_start", "deadline_end")


class QueryCacheKeyGenerator:
    """
    Cache key generator for mapped grant query parameters.

    Same parameters (ignoring key order and sub-minute timestamp drift)
    always produce the same key.
    """

    def __init__(self, prefix: str = "grants", hash_length: int = 16) -> None:
        """
        Initialize the key generator.

        Args:
            prefix: Namespace prefix for every key
            hash_length: Length of the hash suffix
        """
        self.prefix = prefix
        self.hash_length = hash_length

    def generate_cache_key(self, params: Dict[str, Any]) -> str:
        """
        Generate a cache key for a query parameter record.

        Args:
            params: Output of map_filters_to_api

        Returns:
            str: Cache key

        Examples:
            >>> generator = QueryCacheKeyGenerator()
            >>> generator.generate_cache_key({"search": "Climate Research", "page": 1, "limit": 20})[:26]
            'grants:climate_research:p1'
        """
        normalized = self.normalize_params(params)
        search_slug = self._slugify(str(params.get("search") or "")) or "any"
        page = params.get("page", 1)
        digest = self._generate_hash(normalized)

        return f"{self.prefix}:{search_slug}:p{page}:{digest}"

    def normalize_params(self, params: Dict[str, Any]) -> str:
        """Serialize params deterministically, truncating timestamps to the minute."""
        normalized: Dict[str, Any] = {}
        for key, value in params.items():
            if value is None:
                continue
            if key in _TIMESTAMP_PARAMS and isinstance(value, str):
                value = value[:16]  # YYYY-MM-DDTHH:MM
            normalized[key] = value

        return json.dumps(normalized, sort_keys=True, default=str, separators=(",", ":"))

    def _slugify(self, search_term: str) -> str:
        slug = re.sub(r"[^a-z0-9]+", "_", search_term.lower()).strip("_")
        return slug[:40]

    def _generate_hash(self, payload: str) -> str:
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()[: self.hash_length]
