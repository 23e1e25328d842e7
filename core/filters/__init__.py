"""
Core filtering module for grant search.

This module turns the user-facing grant filter into backend query parameters:
- Default filter state and named presets
- Validation that repairs contradictory filter combinations
- Mapping of filters to the grants REST API query parameters

Key Components:
- GrantFilter: Flat filter record plus per-dimension views
- validate_filter_state: Single conflict-resolution pass
- map_filters_to_api: Filter -> query parameter translation
- FilterSession: Lifecycle holder for one user's filter
"""

from .defaults import DEFAULT_FILTER_STATE, get_default_filter
from .mapper import map_filters_to_api
from .models import (
    DeadlineRange,
    FundingRange,
    GrantFilter,
    MatchAny,
    MatchNone,
    OnlyNoDeadline,
    OnlyNoFunding,
    Unrestricted,
    deadline_dimension,
    funding_dimension,
    membership_dimension,
)
from .presets import (
    FILTER_PRESETS,
    FilterPreset,
    apply_filter_preset,
    deadline_range_patch,
    funding_range_patch,
    get_filter_presets,
)
from .session import FilterSession
from .validator import is_valid_filter_state, validate_filter_state

__all__ = [
    # Data model
    "GrantFilter",
    "Unrestricted",
    "FundingRange",
    "OnlyNoFunding",
    "DeadlineRange",
    "OnlyNoDeadline",
    "MatchNone",
    "MatchAny",
    "funding_dimension",
    "deadline_dimension",
    "membership_dimension",
    # Defaults and presets
    "DEFAULT_FILTER_STATE",
    "get_default_filter",
    "FILTER_PRESETS",
    "FilterPreset",
    "get_filter_presets",
    "apply_filter_preset",
    "funding_range_patch",
    "deadline_range_patch",
    # Validation and mapping
    "validate_filter_state",
    "is_valid_filter_state",
    "map_filters_to_api",
    "FilterSession",
]
