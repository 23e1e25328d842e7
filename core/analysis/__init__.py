"""
Offline analysis of how filters and presets narrow the grants dataset.
"""

from .filter_effectiveness import (
    analyze_presets,
    analyze_range_presets,
    apply_query_params,
    count_matches,
    load_grants_csv,
)

__all__ = ["apply_query_params", "count_matches", "analyze_presets", "analyze_range_presets", "load_grants_csv"]
