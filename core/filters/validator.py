"""
Filter state validation.

validate_filter_state repairs self-contradictory filter combinations instead
of rejecting them. Filter state can be inconsistent for a moment while the
user toggles options between renders; that must still produce a usable
query, possibly not the literal one requested, and never an error.

This is the only place conflict resolution lives. Presets pipe their raw
patches through it before use.
"""

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Union

from config.grant_filters import MAX_FUNDING
from settings.infrastructure_config import FilterConfig, get_filter_config

from .models import GrantFilter

logger = logging.getLogger(__name__)

FilterPatch = Dict[str, Any]


def _has_value(filters: Mapping[str, Any], key: str) -> bool:
    return filters.get(key) is not None


def _resolve_conflicts(filters: Mapping[str, Any], config: FilterConfig) -> FilterPatch:
    validated: FilterPatch = copy.deepcopy(dict(filters))

    # Step 1: "only no funding" needs nulls included, and makes the range irrelevant
    if validated.get("only_no_funding"):
        if not validated.get("include_funding_null"):
            logger.debug("only_no_funding set without include_funding_null - forcing include_funding_null=True")
            validated["include_funding_null"] = True
        if _has_value(validated, "funding_min") or _has_value(validated, "funding_max"):
            if (validated.get("funding_min"), validated.get("funding_max")) != (0, MAX_FUNDING):
                logger.debug("only_no_funding set - resetting funding range to the full range")
            validated["funding_min"] = 0
            validated["funding_max"] = MAX_FUNDING

    # Step 2: "only no deadline" needs nulls included; overdue and the range are irrelevant
    if validated.get("only_no_deadline"):
        if not validated.get("include_no_deadline"):
            logger.debug("only_no_deadline set without include_no_deadline - forcing include_no_deadline=True")
            validated["include_no_deadline"] = True
        if validated.get("show_overdue") is not False:
            validated["show_overdue"] = False
        if _has_value(validated, "deadline_min_days") or _has_value(validated, "deadline_max_days"):
            validated["deadline_min_days"] = config.min_deadline_days
            validated["deadline_max_days"] = config.max_deadline_days

    # Step 3: overdue grants have negative offsets, so the minimum must reach below zero
    min_days = validated.get("deadline_min_days")
    if validated.get("show_overdue") and min_days is not None and min_days >= 0:
        logger.debug(
            f"show_overdue set with deadline_min_days={min_days} - "
            f"widening to {config.min_deadline_days}"
        )
        validated["deadline_min_days"] = config.min_deadline_days

    return validated


def validate_filter_state(
    filters: Union[GrantFilter, Mapping[str, Any]], config: Optional[FilterConfig] = None
) -> Union[GrantFilter, FilterPatch]:
    """
    Return a corrected copy of a filter or partial filter patch.

    Accepts either a full GrantFilter or a dict patch and returns the same
    kind. Never raises on filter content; an already valid filter comes back
    unchanged.

    Args:
        filters: Full filter or partial patch to repair
        config: Deadline bounds to use (defaults to the environment config)

    Returns:
        The repaired filter or patch
    """
    config = config or get_filter_config()

    if isinstance(filters, GrantFilter):
        return GrantFilter.from_dict(_resolve_conflicts(filters.to_dict(), config))

    return _resolve_conflicts(filters, config)


def is_valid_filter_state(
    filters: Union[GrantFilter, Mapping[str, Any]], config: Optional[FilterConfig] = None
) -> bool:
    """Check whether a filter is already free of conflicts."""
    if isinstance(filters, GrantFilter):
        return validate_filter_state(filters, config) == filters
    return validate_filter_state(dict(filters), config) == dict(filters)
