"""
Configuration package for Grantify.

This package contains the static filter configuration:
- Filter bounds, page sizes and sort options
- Data source name -> UUID mapping
"""

from .data_sources import get_data_source_options, map_data_source_to_uuid, map_data_sources_to_uuids
from .grant_filters import (
    MAX_DEADLINE_DAYS,
    MAX_FUNDING,
    MAX_SAFE_FUNDING,
    MIN_DEADLINE_DAYS,
    NONE_SENTINEL,
    SORT_MAPPING,
    get_currency_options,
    get_sort_config,
    get_sort_options,
    get_status_options,
)

__all__ = [
    # Filter bounds
    "MAX_FUNDING",
    "MAX_SAFE_FUNDING",
    "MIN_DEADLINE_DAYS",
    "MAX_DEADLINE_DAYS",
    "NONE_SENTINEL",
    # Option tables
    "SORT_MAPPING",
    "get_sort_options",
    "get_sort_config",
    "get_status_options",
    "get_currency_options",
    # Data sources
    "map_data_source_to_uuid",
    "map_data_sources_to_uuids",
    "get_data_source_options",
]
