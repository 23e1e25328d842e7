"""
Search module for grant searches.

Validates and maps the user's filter, consults the result cache and runs
the backend executor on a miss.
"""

from .grant_search_service import GrantSearchService, SearchExecutor, SearchResult

__all__ = ["GrantSearchService", "SearchResult", "SearchExecutor"]
